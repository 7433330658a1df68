"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from oauthcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.http.timeout
    30.0
    >>> secrets = settings.credentials.to_secrets()

    # Or with environment variables:
    # OAUTHCASE_CREDENTIALS_CONSUMER_KEY=dpf43f3p2l4k3l03
    # OAUTHCASE_CREDENTIALS_CONSUMER_SECRET=kd94hf93k423kf44
    # OAUTHCASE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field, PositiveFloat, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from oauthcase.oauth1.secrets import Secrets


class CredentialSettings(BaseSettings):
    """Consumer and (optional) token credentials."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTHCASE_CREDENTIALS_",
        extra="ignore",
    )

    consumer_key: str | None = None
    consumer_secret: SecretStr | None = None
    token: str | None = None
    token_secret: SecretStr | None = None

    @model_validator(mode="after")
    def _check_pairs(self) -> "CredentialSettings":
        if (self.consumer_key is None) != (self.consumer_secret is None):
            raise ValueError("consumer_key and consumer_secret must be configured together")
        if (self.token is None) != (self.token_secret is None):
            raise ValueError("token and token_secret must be configured together")
        return self

    def to_secrets(self) -> Secrets | None:
        """Build Secrets from configured credentials, or None if no consumer is configured."""
        from oauthcase.oauth1.secrets import Secrets

        if self.consumer_key is None or self.consumer_secret is None:
            return None
        secrets = Secrets(consumer_key=self.consumer_key, consumer_secret=self.consumer_secret)
        if self.token is not None and self.token_secret is not None:
            return secrets.token(self.token, self.token_secret)
        return secrets


class HttpSettings(BaseSettings):
    """HTTP client default configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTHCASE_HTTP_",
        extra="ignore",
    )

    timeout: PositiveFloat = Field(default=30.0, description="Default request timeout")
    verify_ssl: bool = True
    follow_redirects: bool = True
    user_agent: str = "oauthcase/0.1"
    stamp_requests: bool = Field(
        default=True,
        description="Fill absent oauth_nonce/oauth_timestamp before signing",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTHCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class OAuthcaseSettings(BaseSettings):
    """Root settings for oauthcase.

    Loads configuration from environment variables with OAUTHCASE_ prefix.

    Example environment variables:
        OAUTHCASE_CREDENTIALS_CONSUMER_KEY=key
        OAUTHCASE_HTTP_TIMEOUT=60
        OAUTHCASE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="OAUTHCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    credentials: CredentialSettings = Field(default_factory=CredentialSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> OAuthcaseSettings:
    """Get the global settings instance (cached)."""
    return OAuthcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
