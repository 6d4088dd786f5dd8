"""Configuration for the KeyEnv API client."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.keyenv.dev"


class KeyEnvConfig(BaseSettings):
    """Settings used by :class:`keyenv.client.KeyEnv`.

    Keyword arguments take precedence over ``KEYENV_*`` environment
    variables, which take precedence over the defaults below.
    """

    token: str = Field(
        default="",
        repr=False,
        description="Service token used for Bearer authentication",
    )
    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Base URL of the KeyEnv API",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout (seconds) for a whole request",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout (seconds) for establishing the connection",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify TLS certificates when calling KeyEnv",
    )
    max_redirects: int = Field(
        default=3,
        ge=0,
        description="Maximum number of redirects followed per request",
    )

    model_config = SettingsConfigDict(
        env_prefix="KEYENV_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value).rstrip("/")


__all__ = ["DEFAULT_API_URL", "KeyEnvConfig"]
