"""oauthcase - OAuth 1.0a (RFC 5849) request signing for httpx.

Protocol parameters can be set explicitly or passed through ordinary
query/form data; either way they are signed, moved into the Authorization
header, and kept off the wire.

Quick Start:
    >>> from oauthcase import OAuth1Client, OAuthParameters, Secrets
    >>>
    >>> secrets = Secrets.new("[CONSUMER_KEY]", "[CONSUMER_SECRET]").token("[TOKEN]", "[TOKEN_SECRET]")
    >>> client = OAuth1Client().oauth1(secrets)
    >>> response = (client.post("https://api.twitter.com/1.1/statuses/update.json")
    ...     .form({"status": "Hello, Twitter!"})
    ...     .send())

Three-Legged Flow:
    >>> from oauthcase import parse_oauth_token
    >>>
    >>> consumer = Secrets.new("[CONSUMER_KEY]", "[CONSUMER_SECRET]")
    >>> client = OAuth1Client().oauth1(consumer)
    >>> request_token = parse_oauth_token(
    ...     client.post("https://api.twitter.com/oauth/request_token")
    ...     .query({"oauth_callback": "oob"})
    ...     .send()
    ... )
    >>> # ... user authorizes, enters the PIN ...
    >>> client = OAuth1Client().oauth1(consumer.with_token_response(request_token))
    >>> access_token = parse_oauth_token(
    ...     client.post("https://api.twitter.com/oauth/access_token")
    ...     .query({"oauth_verifier": pin})
    ...     .send()
    ... )

Signing Without a Transport:
    >>> from oauthcase import Signer
    >>> params = OAuthParameters().with_nonce("wIjqoS").with_timestamp(137131200)
    >>> header = Signer(consumer, params).generate_signature(
    ...     "POST", "https://photos.example.net/initiate", "", is_url_query=False)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ErrorCode,
    OAuth1Exception,
    OAuthError,
    SignError,
    TokenReaderError,
    TransportError,
)

# Configuration & logging
from .foundation.config import OAuthcaseSettings, clear_settings_cache, get_settings
from .foundation.logging import configure_logging

# Signing core
from .oauth1 import (
    CapturedParameters,
    HmacSha1,
    OAuthParameters,
    Secrets,
    SecretsProvider,
    SignatureMethod,
    SignedRequest,
    Signer,
    TokenResponse,
    apply_captured,
    read_oauth_token,
)

# HTTP
from .http import OAuth1Client, RequestBuilder, aparse_oauth_token, parse_oauth_token

__all__ = [
    "__version__",
    # Errors
    "ErrorCode", "OAuthError", "OAuth1Exception", "SignError", "TokenReaderError", "TransportError",
    # Configuration
    "OAuthcaseSettings", "get_settings", "clear_settings_cache", "configure_logging",
    # Signing core
    "Secrets", "SecretsProvider", "OAuthParameters", "SignatureMethod", "HmacSha1",
    "CapturedParameters", "apply_captured", "Signer", "SignedRequest",
    "TokenResponse", "read_oauth_token",
    # HTTP
    "OAuth1Client", "RequestBuilder", "parse_oauth_token", "aparse_oauth_token",
]
