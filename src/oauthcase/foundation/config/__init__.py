"""Configuration for oauthcase.

Environment-driven settings with the OAUTHCASE_ prefix:
    >>> from oauthcase.foundation.config import get_settings
    >>> get_settings().http.timeout
    30.0
"""

from .settings import (
    CredentialSettings,
    HttpSettings,
    LoggingSettings,
    OAuthcaseSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "OAuthcaseSettings",
    "CredentialSettings",
    "HttpSettings",
    "LoggingSettings",
    "get_settings",
    "clear_settings_cache",
]
