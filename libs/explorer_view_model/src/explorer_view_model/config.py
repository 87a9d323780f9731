"""Configuration for the explorer view-model layer."""

from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ViewModelSettings(BaseSettings):
    """Where the gateway lives and how long to wait for it."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EXPLORER_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    API_URL: str = Field(
        default="http://localhost:5001",
        validation_alias=AliasChoices("EXPLORER_API_URL", "REACT_APP_API_URL"),
        description="Base URL of the NASA gateway",
    )
    REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0, description="Per-request timeout")
    NASA_API_KEY: SecretStr = Field(
        default=SecretStr("DEMO_KEY"),
        description="Key embedded in EPIC archive image URLs",
    )


settings = ViewModelSettings()
