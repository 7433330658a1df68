"""Foundation layer: errors, configuration and logging shared by all modules."""

from .config import OAuthcaseSettings, clear_settings_cache, get_settings
from .errors import (
    Err,
    ErrorCode,
    Ok,
    OAuth1Exception,
    OAuthError,
    Result,
    SignError,
    TokenReaderError,
    TransportError,
)
from .logging import configure_logging, get_logger

__all__ = [
    "ErrorCode", "OAuthError", "OAuth1Exception", "SignError", "TokenReaderError", "TransportError",
    "Result", "Ok", "Err",
    "OAuthcaseSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "get_logger",
]
