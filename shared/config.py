"""
Shared configuration management for the Exclusion Rules service.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EXCLUSIONS_",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Rule store
    rule_store: Literal["memory", "file", "postgres"] = Field(default="memory")
    rules_file: Optional[str] = Field(default=None)
    postgres_dsn: str = Field(default="postgres://localhost:5432/exclusions")
    postgres_min_pool_size: int = Field(default=1)
    postgres_max_pool_size: int = Field(default=5)

    # Evaluation
    filter_max_workers: int = Field(default=4, ge=1)

    # Metrics; the Prometheus endpoint is only served when a port is set
    metrics_port: Optional[int] = Field(default=None)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str = "exclusions"


def get_config(service_name: str = "exclusions", **overrides) -> ServiceConfig:
    """Get configuration for a service."""
    return ServiceConfig(service_name=service_name, **overrides)
