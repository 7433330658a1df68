"""OAuth 1.0a signing core.

Pure, synchronous building blocks with no network or clock access:

- Secrets / SecretsProvider: consumer and token credentials
- OAuthParameters: protocol fields plus a pluggable SignatureMethod
- CapturedParameters: protocol keys intercepted from query/form data
- apply_captured: fail-fast merge of captured entries
- Signer: base string, signature and Authorization header
- read_oauth_token: token endpoint response parsing
"""

from .capture import CapturedParameters, normalize_pairs, steal_protocol_pairs
from .methods import DEFAULT_SIGNATURE_METHOD, HmacSha1, SignatureMethod, percent_encode
from .parameters import (
    OAUTH_CALLBACK_KEY,
    OAUTH_CONSUMER_KEY_KEY,
    OAUTH_KEY_PREFIX,
    OAUTH_NONCE_KEY,
    OAUTH_SIGNATURE_METHOD_KEY,
    OAUTH_TIMESTAMP_KEY,
    OAUTH_TOKEN_KEY,
    OAUTH_VERIFIER_KEY,
    OAUTH_VERSION_KEY,
    REALM_KEY,
    OAuthParameters,
    apply_captured,
    is_protocol_key,
)
from .secrets import Secrets, SecretsProvider
from .signer import SignatureBuilder, SignedRequest, Signer, base_string_uri
from .token_reader import OAUTH_TOKEN_SECRET_KEY, TokenResponse, read_oauth_token, try_read_oauth_token

__all__ = [
    # Credentials
    "Secrets", "SecretsProvider",
    # Configuration
    "OAuthParameters", "SignatureMethod", "HmacSha1", "DEFAULT_SIGNATURE_METHOD",
    # Interception & merge
    "CapturedParameters", "normalize_pairs", "steal_protocol_pairs", "apply_captured", "is_protocol_key",
    # Signing
    "Signer", "SignedRequest", "SignatureBuilder", "base_string_uri", "percent_encode",
    # Token reading
    "TokenResponse", "read_oauth_token", "try_read_oauth_token",
    # Keys
    "OAUTH_KEY_PREFIX", "REALM_KEY", "OAUTH_CALLBACK_KEY", "OAUTH_CONSUMER_KEY_KEY", "OAUTH_NONCE_KEY",
    "OAUTH_SIGNATURE_METHOD_KEY", "OAUTH_TIMESTAMP_KEY", "OAUTH_TOKEN_KEY", "OAUTH_TOKEN_SECRET_KEY",
    "OAUTH_VERIFIER_KEY", "OAUTH_VERSION_KEY",
]
