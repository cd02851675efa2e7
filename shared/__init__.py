"""
Shared utilities for the Exclusion Rules service.

This package aggregates common building blocks:

- config: Service configuration via pydantic-settings
- logging: Structured logging with batch correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service packages into shared/.
"""
