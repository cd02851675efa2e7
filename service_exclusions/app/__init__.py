"""Exclusion Rules service application."""
