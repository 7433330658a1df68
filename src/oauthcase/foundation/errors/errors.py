"""Standardized error handling for OAuth 1.0a signing.

Provides error codes, a structured error model, and the exception
hierarchy raised by the signer, the token reader and the HTTP layer.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Standard error codes for signing and token failures.

    Used for programmatic error handling.
    """
    UNKNOWN_PARAMETER = "UNKNOWN_PARAMETER"
    UNCONFIGURABLE_PARAMETER = "UNCONFIGURABLE_PARAMETER"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    INVALID_VERSION = "INVALID_VERSION"
    TOKEN_KEY_NOT_FOUND = "TOKEN_KEY_NOT_FOUND"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


_SIGN_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.UNKNOWN_PARAMETER,
    ErrorCode.UNCONFIGURABLE_PARAMETER,
    ErrorCode.INVALID_TIMESTAMP,
    ErrorCode.INVALID_VERSION,
})


class OAuthError(BaseModel):
    """Structured error for OAuth failures.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        value: Offending parameter key or raw value, when there is one
        response: Raw response body (token reader failures only)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "title": "OAuth Error",
            "examples": [{
                "code": "UNKNOWN_PARAMETER",
                "message": "unknown oauth parameter : oauth_bogus",
                "value": "oauth_bogus",
            }],
        },
    )

    code: ErrorCode
    message: str = Field(..., min_length=1)
    value: str | None = None
    response: str | None = Field(default=None, repr=False)

    @computed_field
    @property
    def is_sign_error(self) -> bool:
        """Whether this error was raised while merging captured parameters."""
        return self.code in _SIGN_CODES

    @computed_field
    @property
    def is_token_error(self) -> bool:
        return self.code is ErrorCode.TOKEN_KEY_NOT_FOUND

    # ─── Factories ───────────────────────────────────────────────────

    @classmethod
    def unknown_parameter(cls, key: str) -> Self:
        return cls(code=ErrorCode.UNKNOWN_PARAMETER, message=f"unknown oauth parameter : {key}", value=key)

    @classmethod
    def unconfigurable_parameter(cls, key: str) -> Self:
        return cls(
            code=ErrorCode.UNCONFIGURABLE_PARAMETER,
            message=f"specified parameter {key} could not be configured via the request parameters.",
            value=key,
        )

    @classmethod
    def invalid_timestamp(cls, raw: str) -> Self:
        return cls(
            code=ErrorCode.INVALID_TIMESTAMP,
            message=f"invalid oauth_timestamp, must be u64, but {raw} is not compatible.",
            value=raw,
        )

    @classmethod
    def invalid_version(cls, raw: str) -> Self:
        return cls(
            code=ErrorCode.INVALID_VERSION,
            message=f"invalid oauth_version, must be 1.0 or just empty, but specified {raw}.",
            value=raw,
        )

    @classmethod
    def token_key_not_found(cls, key: str, response: str) -> Self:
        return cls(
            code=ErrorCode.TOKEN_KEY_NOT_FOUND,
            message=f"the response has malformed format: key {key} is not found in response {response}",
            value=key,
            response=response,
        )

    @classmethod
    def from_transport(cls, exc: Exception) -> Self:
        """Describe a transport failure without altering the original exception."""
        detail = str(exc) or type(exc).__name__
        return cls(code=ErrorCode.TRANSPORT_ERROR, message=f"request failed : {detail}")


class OAuth1Exception(Exception):
    """Exception wrapping an OAuthError for raising.

    Umbrella type for everything this package raises; catch it to handle
    signing, token parsing and transport failures in one place.
    """

    __slots__ = ("error",)

    def __init__(self, error: OAuthError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class SignError(OAuth1Exception):
    """A captured oauth_* parameter could not be merged into the signing configuration."""


class TokenReaderError(OAuth1Exception):
    """A token endpoint response lacked oauth_token or oauth_token_secret."""


class TransportError(OAuth1Exception):
    """The HTTP transport failed. The original exception is kept as __cause__."""


_EXCEPTION_TYPES: dict[ErrorCode, type[OAuth1Exception]] = {
    ErrorCode.UNKNOWN_PARAMETER: SignError,
    ErrorCode.UNCONFIGURABLE_PARAMETER: SignError,
    ErrorCode.INVALID_TIMESTAMP: SignError,
    ErrorCode.INVALID_VERSION: SignError,
    ErrorCode.TOKEN_KEY_NOT_FOUND: TokenReaderError,
    ErrorCode.TRANSPORT_ERROR: TransportError,
}


def to_exception(error: OAuthError) -> OAuth1Exception:
    """Map a structured error onto the matching exception type."""
    return _EXCEPTION_TYPES.get(error.code, OAuth1Exception)(error)
