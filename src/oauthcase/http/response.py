"""Reading token endpoint replies from httpx responses."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable

import httpx

from oauthcase.foundation.errors import OAuthError, TransportError
from oauthcase.oauth1 import TokenResponse, read_oauth_token


def parse_oauth_token(response: httpx.Response) -> TokenResponse:
    """Parse a token endpoint response body.

    Raises:
        TokenReaderError: oauth_token or oauth_token_secret is missing.
        TransportError: The body could not be read.
    """
    try:
        response.read()
    except httpx.HTTPError as e:
        raise TransportError(OAuthError.from_transport(e)) from e
    return read_oauth_token(response.text)


async def aparse_oauth_token(response: httpx.Response | Awaitable[httpx.Response]) -> TokenResponse:
    """Async form of ``parse_oauth_token``; also accepts the pending send.

    Example:
        >>> token = await aparse_oauth_token(client.post(url).asend())
    """
    if inspect.isawaitable(response):
        response = await response
    try:
        await response.aread()
    except httpx.HTTPError as e:
        raise TransportError(OAuthError.from_transport(e)) from e
    return read_oauth_token(response.text)
