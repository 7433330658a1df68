"""Token endpoint response parsing for the three-legged flow.

Token endpoints answer with an ``application/x-www-form-urlencoded`` body
such as ``oauth_token=...&oauth_token_secret=...&oauth_callback_confirmed=true``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from oauthcase.foundation.errors import Err, Ok, OAuthError, Result, to_exception
from oauthcase.foundation.logging import get_logger

from .parameters import OAUTH_TOKEN_KEY

OAUTH_TOKEN_SECRET_KEY = "oauth_token_secret"

logger = get_logger("tokens")


class TokenResponse(BaseModel):
    """Token and secret returned by a token endpoint.

    Attributes:
        oauth_token: Issued token
        oauth_token_secret: Issued token secret
        remain: Every other key/value pair of the response
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    oauth_token: str
    oauth_token_secret: str = Field(repr=False)
    remain: dict[str, str] = Field(default_factory=dict)


def _split_pairs(text: str) -> dict[str, str]:
    # Only the first '=' splits; values are taken verbatim, later duplicates win
    destructured: dict[str, str] = {}
    for segment in text.split("&"):
        key, _, value = segment.partition("=")
        destructured[key] = value
    return destructured


def try_read_oauth_token(text: str) -> Result[TokenResponse, OAuthError]:
    """Parse a token response body, returning Err on a missing key."""
    destructured = _split_pairs(text)
    oauth_token = destructured.pop(OAUTH_TOKEN_KEY, None)
    oauth_token_secret = destructured.pop(OAUTH_TOKEN_SECRET_KEY, None)
    if oauth_token is None:
        return Err(OAuthError.token_key_not_found(OAUTH_TOKEN_KEY, text))
    if oauth_token_secret is None:
        return Err(OAuthError.token_key_not_found(OAUTH_TOKEN_SECRET_KEY, text))
    return Ok(TokenResponse(oauth_token=oauth_token, oauth_token_secret=oauth_token_secret, remain=destructured))


def read_oauth_token(text: str) -> TokenResponse:
    """Parse a token response body.

    Raises:
        TokenReaderError: oauth_token (checked first) or oauth_token_secret is absent.

    Example:
        >>> resp = read_oauth_token("oauth_token=T&oauth_token_secret=S&extra=1")
        >>> resp.oauth_token, resp.remain
        ('T', {'extra': '1'})
    """
    result = try_read_oauth_token(text)
    if result.is_err():
        logger.debug(f"[token] {result.unwrap_err().value} missing from token response")
    else:
        logger.debug(f"[token] Parsed token response ({len(result.unwrap().remain)} extra fields)")
    return result.unwrap_or_raise(to_exception)
