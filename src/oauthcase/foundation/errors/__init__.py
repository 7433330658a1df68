"""Unified error handling for oauthcase.

- ErrorCode: Standard error codes for signing and token failures
- OAuthError: Structured, serializable error
- OAuth1Exception/SignError/TokenReaderError/TransportError: raised forms
- Result/Ok/Err: Fail-fast validation used by the parameter merge
"""

from .errors import (
    ErrorCode,
    OAuth1Exception,
    OAuthError,
    SignError,
    TokenReaderError,
    TransportError,
    to_exception,
)
from .result import Err, Ok, Result, fold

__all__ = [
    # Core errors
    "ErrorCode", "OAuthError", "to_exception",
    # Exceptions
    "OAuth1Exception", "SignError", "TokenReaderError", "TransportError",
    # Result monad
    "Result", "Ok", "Err", "fold",
]
