"""OAuth protocol parameters and the captured-parameter merge.

OAuthParameters is a persistent builder: every ``with_*`` call returns a
new validated instance, so one configuration can serve as a template for
many requests.

Example:
    >>> params = OAuthParameters().with_nonce("wIjqoS").with_timestamp(137131200)
    >>> params.with_realm("photos").realm
    'photos'
    >>> params.realm is None
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from oauthcase.foundation.errors import Err, Ok, OAuthError, Result, fold

from .methods import DEFAULT_SIGNATURE_METHOD, SignatureMethod

OAUTH_KEY_PREFIX = "oauth_"
REALM_KEY = "realm"
OAUTH_CALLBACK_KEY = "oauth_callback"
OAUTH_CONSUMER_KEY_KEY = "oauth_consumer_key"
OAUTH_NONCE_KEY = "oauth_nonce"
OAUTH_SIGNATURE_KEY = "oauth_signature"
OAUTH_SIGNATURE_METHOD_KEY = "oauth_signature_method"
OAUTH_TIMESTAMP_KEY = "oauth_timestamp"
OAUTH_TOKEN_KEY = "oauth_token"
OAUTH_VERIFIER_KEY = "oauth_verifier"
OAUTH_VERSION_KEY = "oauth_version"

OAUTH_VERSION = "1.0"
U64_MAX = 2**64 - 1

Timestamp = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]


def is_protocol_key(key: str) -> bool:
    """Whether a query/form key belongs to the protocol rather than the request."""
    return key.startswith(OAUTH_KEY_PREFIX) or key == REALM_KEY


class OAuthParameters(BaseModel):
    """Protocol fields the caller may configure, plus the signature method.

    Attributes:
        callback: oauth_callback
        nonce: oauth_nonce
        realm: Protection realm; sent in the header but never signed
        timestamp: oauth_timestamp in seconds, supplied by the caller
        verifier: oauth_verifier
        version: Emit oauth_version=1.0 when True, omit it otherwise
        signature_method: Strategy computing oauth_signature
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # For SignatureMethod strategies
        extra="forbid",
        revalidate_instances="never",
    )

    callback: str | None = None
    nonce: str | None = None
    realm: str | None = None
    timestamp: Timestamp | None = None
    verifier: str | None = None
    version: bool = False
    signature_method: SignatureMethod = Field(default=DEFAULT_SIGNATURE_METHOD, repr=False)

    def _replace(self, **changes: object) -> Self:
        return type(self)(**{**dict(self), **changes})

    def with_callback(self, callback: str) -> Self:
        return self._replace(callback=callback)

    def with_nonce(self, nonce: str) -> Self:
        return self._replace(nonce=nonce)

    def with_realm(self, realm: str) -> Self:
        return self._replace(realm=realm)

    def with_timestamp(self, timestamp: int) -> Self:
        return self._replace(timestamp=timestamp)

    def with_verifier(self, verifier: str) -> Self:
        return self._replace(verifier=verifier)

    def with_version(self, version: bool) -> Self:
        """Toggle oauth_version. Only "1.0" is ever emitted; False omits the field."""
        return self._replace(version=version)

    def with_signature_method(self, signature_method: SignatureMethod) -> Self:
        """Swap the signature algorithm. All other fields are kept."""
        return self._replace(signature_method=signature_method)

    @field_serializer("signature_method")
    def _serialize_method(self, v: SignatureMethod) -> str:
        return v.name

    def protocol_pairs(self, consumer_key: str, token: str | None) -> list[tuple[str, str]]:
        """The signed oauth_* block, in sorted key order, without oauth_signature."""
        pairs: list[tuple[str, str]] = []
        if self.callback is not None:
            pairs.append((OAUTH_CALLBACK_KEY, self.callback))
        pairs.append((OAUTH_CONSUMER_KEY_KEY, consumer_key))
        if self.nonce is not None:
            pairs.append((OAUTH_NONCE_KEY, self.nonce))
        pairs.append((OAUTH_SIGNATURE_METHOD_KEY, self.signature_method.name))
        if self.timestamp is not None:
            pairs.append((OAUTH_TIMESTAMP_KEY, str(self.timestamp)))
        if token is not None:
            pairs.append((OAUTH_TOKEN_KEY, token))
        if self.verifier is not None:
            pairs.append((OAUTH_VERIFIER_KEY, self.verifier))
        if self.version:
            pairs.append((OAUTH_VERSION_KEY, OAUTH_VERSION))
        return pairs


# ─────────────────────────────────────────────────────────────────────────────
# Captured parameter merge
# ─────────────────────────────────────────────────────────────────────────────

MergeResult = Result[OAuthParameters, OAuthError]


def _parse_timestamp(raw: str) -> int | None:
    digits = raw[1:] if raw.startswith("+") else raw
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value <= U64_MAX else None


def _set_timestamp(params: OAuthParameters, raw: str) -> MergeResult:
    value = _parse_timestamp(raw)
    return Ok(params.with_timestamp(value)) if value is not None else Err(OAuthError.invalid_timestamp(raw))


def _set_version(params: OAuthParameters, raw: str) -> MergeResult:
    if raw == OAUTH_VERSION:
        return Ok(params.with_version(True))
    if raw == "":
        return Ok(params.with_version(False))
    return Err(OAuthError.invalid_version(raw))


_SETTERS: dict[str, Callable[[OAuthParameters, str], MergeResult]] = {
    OAUTH_CALLBACK_KEY: lambda p, v: Ok(p.with_callback(v)),
    OAUTH_NONCE_KEY: lambda p, v: Ok(p.with_nonce(v)),
    OAUTH_VERIFIER_KEY: lambda p, v: Ok(p.with_verifier(v)),
    REALM_KEY: lambda p, v: Ok(p.with_realm(v)),
    OAUTH_TIMESTAMP_KEY: _set_timestamp,
    OAUTH_VERSION_KEY: _set_version,
}

# Derived from Secrets or the signature method; never settable through query/form data
_UNCONFIGURABLE: frozenset[str] = frozenset({
    OAUTH_SIGNATURE_METHOD_KEY,
    OAUTH_CONSUMER_KEY_KEY,
    OAUTH_TOKEN_KEY,
})


def _apply_one(params: OAuthParameters, item: tuple[str, str]) -> MergeResult:
    key, value = item
    if (setter := _SETTERS.get(key)) is not None:
        return setter(params, value)
    if key in _UNCONFIGURABLE:
        return Err(OAuthError.unconfigurable_parameter(key))
    return Err(OAuthError.unknown_parameter(key))


def apply_captured(
    parameters: OAuthParameters,
    captured: Mapping[str, str] | Iterable[tuple[str, str]],
) -> MergeResult:
    """Fold captured protocol entries onto parameters, in order.

    The first invalid entry latches an Err and every later entry is skipped.

    Example:
        >>> apply_captured(OAuthParameters(), {"oauth_nonce": "abc"}).unwrap().nonce
        'abc'
        >>> apply_captured(OAuthParameters(), {"oauth_bogus": "1"}).unwrap_err().value
        'oauth_bogus'
    """
    items = captured.items() if isinstance(captured, Mapping) else captured
    return fold(items, parameters, _apply_one)
