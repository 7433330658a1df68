"""OAuth 1.0a request signing (RFC 5849 §3.4).

The signer merges captured protocol parameters into the configured ones,
builds the signature base string, signs it and renders the Authorization
header value. It never touches the network or the clock: identical inputs
always produce an identical header.

Example:
    >>> secrets = Secrets.new("dpf43f3p2l4k3l03", "kd94hf93k423kf44")
    >>> params = (OAuthParameters()
    ...     .with_nonce("wIjqoS")
    ...     .with_timestamp(137131200)
    ...     .with_callback("http://printer.example.com/ready")
    ...     .with_realm("photos"))
    >>> header = Signer(secrets, params).generate_signature(
    ...     "POST", "https://photos.example.net/initiate", "", is_url_query=False)
    >>> 'oauth_signature="74KNZJeDHnMBp0EMJ9ZHt%2FXKycU%3D"' in header
    True
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import NamedTuple
from urllib.parse import parse_qsl, quote, urlsplit

from oauthcase.foundation.errors import to_exception
from oauthcase.foundation.logging import get_logger

from .methods import SignatureMethod, percent_encode
from .parameters import (
    OAUTH_KEY_PREFIX,
    OAUTH_SIGNATURE_KEY,
    REALM_KEY,
    OAuthParameters,
    apply_captured,
)
from .secrets import SecretsProvider

logger = get_logger("signer")

_DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}

# RFC 3986 path characters plus "%", so existing escapes survive
_PATH_SAFE = "/%:@!$&'()*+,;=~"

# Marks where the oauth_* block goes once the request parameters are sorted
_SENTINEL: tuple[str, str] = (OAUTH_KEY_PREFIX, "")


def base_string_uri(url: str) -> str:
    """Normalize a URL for the base string: lowercase scheme/host, no default port, no query.

    The path is percent-encoded the way it goes on the wire.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    return f"{scheme}://{host}{path}"


class SignedRequest(NamedTuple):
    """Output of a signing pass.

    Attributes:
        authorization: Authorization header value
        data: Signed request parameters in transport form: the URL with its
            query (query mode) or the urlencoded body (form mode)
    """

    authorization: str
    data: str


class SignatureBuilder:
    """Accumulates the signature base string one parameter at a time.

    Parameters must be fed in sorted order; the oauth_* block is fed once,
    at its sorted position, through ``oauth_parameters``.
    """

    __slots__ = ("_method", "_http_method", "_uri", "_key", "_is_url_query", "_signed", "_data", "_protocol")

    def __init__(
        self,
        method: SignatureMethod,
        http_method: str,
        uri: str,
        consumer_secret: str,
        token_secret: str | None,
        *,
        is_url_query: bool,
    ) -> None:
        self._method = method
        self._http_method = http_method.upper()
        self._uri = uri
        self._key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"
        self._is_url_query = is_url_query
        self._signed: list[str] = []
        self._data: list[str] = []
        self._protocol: list[tuple[str, str]] = []

    def parameter(self, key: str, value: str) -> SignatureBuilder:
        pair = f"{percent_encode(key)}={percent_encode(value)}"
        self._signed.append(pair)
        self._data.append(pair)
        return self

    def oauth_parameters(self, pairs: Iterable[tuple[str, str]]) -> SignatureBuilder:
        for key, value in pairs:
            self._signed.append(f"{percent_encode(key)}={percent_encode(value)}")
            self._protocol.append((key, value))
        return self

    def base_string(self) -> str:
        return "&".join((
            self._http_method,
            percent_encode(self._uri),
            percent_encode("&".join(self._signed)),
        ))

    def finish(self) -> SignedRequest:
        raw = self._method.sign(self.base_string(), self._key)
        signature = base64.b64encode(raw).decode("ascii")
        header_pairs = sorted([*self._protocol, (OAUTH_SIGNATURE_KEY, signature)])
        authorization = "OAuth " + ",".join(f'{k}="{percent_encode(v)}"' for k, v in header_pairs)
        query = "&".join(self._data)
        if self._is_url_query:
            data = f"{self._uri}?{query}" if query else self._uri
        else:
            data = query
        return SignedRequest(authorization, data)


def _split_at_sentinel(pairs: list[tuple[str, str]]) -> tuple[list[tuple[str, str]], list[tuple[str, str]]]:
    ordered = sorted([*pairs, _SENTINEL])
    idx = next(i for i, (k, _) in enumerate(ordered) if k == OAUTH_KEY_PREFIX)
    return ordered[:idx], ordered[idx + 1:]


@dataclass(frozen=True, slots=True)
class Signer:
    """Signs requests with one set of secrets and protocol parameters.

    Attributes:
        secrets: Credential source
        parameters: Configured protocol fields and signature method
    """

    secrets: SecretsProvider
    parameters: OAuthParameters = field(default_factory=OAuthParameters)

    def with_captured(self, captured: Mapping[str, str] | Iterable[tuple[str, str]]) -> Signer:
        """Return a signer whose parameters include captured query/form entries.

        Raises:
            SignError: On the first captured entry that cannot be applied.
        """
        merged = apply_captured(self.parameters, captured).unwrap_or_raise(to_exception)
        return Signer(self.secrets, merged)

    def sign(self, method: str, url: str, payload: str, *, is_url_query: bool) -> SignedRequest:
        """Sign a request.

        Args:
            method: HTTP method
            url: Request URL; any query part is ignored
            payload: Urlencoded request parameters: the query string in
                query mode, the form body in form mode
            is_url_query: Query mode (True) or form mode (False)
        """
        consumer_key, consumer_secret = self.secrets.consumer_pair()
        token_pair = self.secrets.token_pair()
        token, token_secret = token_pair if token_pair is not None else (None, None)
        uri = base_string_uri(url)

        before, after = _split_at_sentinel(parse_qsl(payload, keep_blank_values=True))

        builder = SignatureBuilder(
            self.parameters.signature_method,
            method,
            uri,
            consumer_secret,
            token_secret,
            is_url_query=is_url_query,
        )
        for key, value in before:
            if not key.startswith(OAUTH_KEY_PREFIX):
                builder.parameter(key, value)
        builder.oauth_parameters(self.parameters.protocol_pairs(consumer_key, token))
        for key, value in after:
            if not key.startswith(OAUTH_KEY_PREFIX):
                builder.parameter(key, value)

        signed = builder.finish()
        logger.debug(
            f"[{self.parameters.signature_method.name}] Signed {method.upper()} {uri} "
            f"({'query' if is_url_query else 'form'} mode, {len(before) + len(after)} parameters)"
        )

        if self.parameters.realm is not None:
            return signed._replace(authorization=f'{signed.authorization},{REALM_KEY}="{self.parameters.realm}"')
        return signed

    def generate_signature(self, method: str, url: str, payload: str, *, is_url_query: bool) -> str:
        """Authorization header value for the request. See ``sign``."""
        return self.sign(method, url, payload, is_url_query=is_url_query).authorization
