"""
Configuration for the NASA Gateway Service.

Uses Pydantic settings for environment-based configuration. The handful of
variables the browser-facing deployment already knows (NASA_API_KEY, PORT,
ALLOWED_ORIGINS) are accepted unprefixed as well.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEMO_API_KEY = "DEMO_KEY"


class Settings(BaseSettings):
    """Configuration settings for the NASA Gateway Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NASA_GATEWAY_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "nasa-gateway-service"
    ENVIRONMENT: str = Field(
        default="development",
        validation_alias=AliasChoices("NASA_GATEWAY_ENVIRONMENT", "ENVIRONMENT"),
        description="Runtime environment (development, staging, production)",
    )

    # HTTP server configuration
    HTTP_HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    HTTP_PORT: int = Field(
        default=5001,
        validation_alias=AliasChoices("NASA_GATEWAY_HTTP_PORT", "PORT"),
        description="HTTP server port",
    )
    API_PREFIX: str = Field(default="/api", description="Base path for all proxy routes")

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # NASA upstreams
    NASA_API_KEY: SecretStr = Field(
        default=SecretStr(DEMO_API_KEY),
        validation_alias=AliasChoices("NASA_GATEWAY_NASA_API_KEY", "NASA_API_KEY"),
        description="api.nasa.gov key; the shared demo key has tighter upstream limits",
    )
    NASA_API_BASE_URL: str = Field(
        default="https://api.nasa.gov", description="Base URL for api.nasa.gov services"
    )
    NASA_IMAGES_API_URL: str = Field(
        default="https://images-api.nasa.gov",
        description="Base URL for the NASA Image and Video Library",
    )

    # HTTP Client Timeouts
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=10.0, description="Timeout for every upstream call"
    )

    # CORS configuration
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:3001",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:3001",
        ],
        validation_alias=AliasChoices("NASA_GATEWAY_CORS_ORIGINS", "ALLOWED_ORIGINS"),
        description="Allowed CORS origins, comma-separated in the environment",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        description="Allowed HTTP methods for CORS",
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["Content-Type", "Authorization", "X-Correlation-ID"],
        description="Allowed headers for CORS requests",
    )
    CORS_MAX_AGE_SECONDS: int = Field(default=86400, description="Preflight cache lifetime")

    # Rate limiting configuration
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable per-client rate limiting")
    RATE_LIMIT_REQUESTS: int = Field(
        default=100, description="Rate limit: requests per window per client address"
    )
    RATE_LIMIT_WINDOW_MINUTES: int = Field(default=15, description="Rate limit window in minutes")
    RATE_LIMIT_STORAGE_URI: str = Field(
        default="memory://", description="limits storage URI for rate limit counters"
    )

    # Compression
    GZIP_MINIMUM_SIZE: int = Field(default=1000, description="Smallest response body to gzip")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def uses_demo_key(self) -> bool:
        return self.NASA_API_KEY.get_secret_value() == DEMO_API_KEY

    @property
    def rate_limit(self) -> str:
        """Limit string in ``limits`` notation, e.g. ``100 per 15 minutes``."""
        return f"{self.RATE_LIMIT_REQUESTS} per {self.RATE_LIMIT_WINDOW_MINUTES} minutes"


# Global settings instance
settings = Settings()
