"""httpx integration: signed request building and token response parsing."""

from .client import OAuth1Client
from .request import RequestBuilder, generate_nonce, stamp_parameters
from .response import aparse_oauth_token, parse_oauth_token

__all__ = [
    "OAuth1Client", "RequestBuilder",
    "generate_nonce", "stamp_parameters",
    "parse_oauth_token", "aparse_oauth_token",
]
