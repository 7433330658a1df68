"""Request builder that intercepts protocol parameters and signs at send time.

Mirrors the shape of a plain httpx call (method, URL, query, form, headers)
but strips ``oauth_*``/``realm`` keys from query and form data as they are
attached. At send time the captured keys are merged into the signer's
parameters and the Authorization header is added to the built request.

Example:
    >>> client = OAuth1Client().oauth1(secrets)
    >>> response = (client.get("https://api.example.com/resource")
    ...     .query({"page": 2, "oauth_verifier": pin})  # oauth_verifier is signed, not sent
    ...     .send())
"""

from __future__ import annotations

import base64
import secrets as _secrets
import time
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Self
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from oauthcase.foundation.errors import OAuthError, TransportError
from oauthcase.foundation.logging import get_logger
from oauthcase.oauth1 import CapturedParameters, OAuthParameters, SecretsProvider, Signer, normalize_pairs
from oauthcase.oauth1.capture import QueryData

if TYPE_CHECKING:
    from .client import OAuth1Client

logger = get_logger("http")

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def generate_nonce() -> str:
    """Random single-use oauth_nonce."""
    return _secrets.token_urlsafe(24)


def stamp_parameters(
    parameters: OAuthParameters,
    *,
    clock: Callable[[], float] = time.time,
    nonce_factory: Callable[[], str] = generate_nonce,
) -> OAuthParameters:
    """Fill an absent nonce and timestamp. Values already set are kept."""
    if parameters.nonce is None:
        parameters = parameters.with_nonce(nonce_factory())
    if parameters.timestamp is None:
        parameters = parameters.with_timestamp(int(clock()))
    return parameters


class RequestBuilder:
    """Builds one request; owns the protocol parameters captured for it.

    Not shared between concurrent requests: create one per call through
    ``OAuth1Client.get``/``post``/... .
    """

    __slots__ = (
        "_client", "_method", "_base_url", "_query", "_form_body", "_content",
        "_is_form", "_headers", "_timeout", "_signer", "_captured",
    )

    def __init__(self, client: OAuth1Client, method: str, url: str | httpx.URL, signer: Signer | None) -> None:
        self._client = client
        self._method = method.upper()
        self._captured = CapturedParameters()
        # Sign the URL exactly as httpx will send it: base_url merged, path percent-encoded
        scheme, netloc, path, query, _ = urlsplit(str(client.resolve_url(url)))
        self._base_url = urlunsplit((scheme, netloc, path, "", ""))
        self._query = self._captured.capture_query_string(query) if query else ""
        self._form_body = ""
        self._content: str | bytes | None = None
        self._is_form = False
        self._headers = httpx.Headers()
        self._timeout: float | None = None
        self._signer = signer

    # ─────────────────────────────────────────────────────────────────
    # Signing information
    # ─────────────────────────────────────────────────────────────────

    def sign(self, secrets: SecretsProvider, parameters: OAuthParameters | None = None) -> Self:
        """Sign this request with the given secrets, replacing any client-level signer."""
        self._signer = Signer(secrets, parameters or OAuthParameters())
        return self

    # ─────────────────────────────────────────────────────────────────
    # Intercepted payload
    # ─────────────────────────────────────────────────────────────────

    def query(self, data: QueryData) -> Self:
        """Append query parameters. Protocol keys are captured instead of sent.

        Appends; repeated calls with the same key send the key twice.
        """
        remainder = self._captured.capture_query(data)
        if remainder:
            self._append_query(urlencode(remainder))
        return self

    def form(self, data: QueryData) -> Self:
        """Send a urlencoded form body. Protocol keys are captured instead of sent.

        Replaces any earlier form body and the keys it captured.
        """
        remainder = self._captured.capture_form(data)
        self._form_body = urlencode(remainder)
        self._content = None
        self._is_form = True
        return self

    # ─────────────────────────────────────────────────────────────────
    # Bypass
    # ─────────────────────────────────────────────────────────────────

    def query_without_capture(self, data: QueryData) -> Self:
        """Append query parameters as-is.

        The signature will be invalid if data holds oauth_* or realm keys.
        """
        if (pairs := normalize_pairs(data)):
            self._append_query(urlencode(pairs))
        return self

    def form_without_capture(self, data: QueryData) -> Self:
        """Send a form body as-is. The body is not part of the signature."""
        self._content = urlencode(normalize_pairs(data))
        self._is_form = True
        return self

    def _append_query(self, encoded: str) -> None:
        self._query = f"{self._query}&{encoded}" if self._query else encoded

    # ─────────────────────────────────────────────────────────────────
    # Pass-through
    # ─────────────────────────────────────────────────────────────────

    def header(self, name: str, value: str) -> Self:
        self._headers[name] = value
        return self

    def headers(self, headers: Mapping[str, str] | httpx.Headers) -> Self:
        """Merge headers into the ones already set."""
        self._headers.update(headers)
        return self

    def basic_auth(self, username: str, password: str | None = None) -> Self:
        credentials = base64.b64encode(f"{username}:{password or ''}".encode()).decode()
        return self.header("Authorization", f"Basic {credentials}")

    def bearer_auth(self, token: str) -> Self:
        return self.header("Authorization", f"Bearer {token}")

    def body(self, content: str | bytes) -> Self:
        """Set a raw body. Raw bodies are not signed."""
        self._content = content
        self._is_form = False
        return self

    def timeout(self, seconds: float) -> Self:
        self._timeout = seconds
        return self

    def try_clone(self) -> RequestBuilder:
        """Independent copy, including captured parameters."""
        clone = RequestBuilder.__new__(RequestBuilder)
        for slot in RequestBuilder.__slots__:
            setattr(clone, slot, getattr(self, slot))
        clone._captured = self._captured.copy()
        clone._headers = httpx.Headers(self._headers)
        return clone

    # ─────────────────────────────────────────────────────────────────
    # Introspection
    # ─────────────────────────────────────────────────────────────────

    @property
    def url(self) -> str:
        """Request URL as it will be sent (protocol keys removed)."""
        return f"{self._base_url}?{self._query}" if self._query else self._base_url

    @property
    def form_body(self) -> str:
        """The intercepted form body, as signed."""
        return self._form_body

    @property
    def captured(self) -> CapturedParameters:
        return self._captured

    # ─────────────────────────────────────────────────────────────────
    # Build & send
    # ─────────────────────────────────────────────────────────────────

    def _authorization(self, signer: Signer) -> str:
        if self._client.stamp:
            signer = Signer(signer.secrets, stamp_parameters(signer.parameters))
        signer = signer.with_captured(self._captured.merged())
        if self._query:
            return signer.generate_signature(self._method, self._base_url, self._query, is_url_query=True)
        return signer.generate_signature(self._method, self._base_url, self._form_body, is_url_query=False)

    def generate_signature(self) -> httpx.Request:
        """Build the request, with the Authorization header when a signer is bound.

        Raises:
            SignError: A captured protocol parameter is unknown or invalid.
        """
        headers = httpx.Headers(self._headers)
        content = self._content
        if content is None and self._is_form:
            content = self._form_body
        if self._is_form:
            headers.setdefault("Content-Type", _FORM_CONTENT_TYPE)
        if self._signer is not None:
            headers["Authorization"] = self._authorization(self._signer)
        else:
            logger.debug(f"[{self._method}] No signer bound, building unsigned request")
        return self._client.http.build_request(
            self._method,
            self.url,
            headers=headers,
            content=content,
            timeout=self._timeout if self._timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

    def send(self) -> httpx.Response:
        """Sign and send with the client's httpx.Client.

        Raises:
            SignError: Captured parameters could not be merged.
            TransportError: httpx failed; the httpx exception is the __cause__.
        """
        http = self._client.http
        if not isinstance(http, httpx.Client):
            raise TypeError("send() needs an httpx.Client; use asend() with an httpx.AsyncClient")
        request = self.generate_signature()
        try:
            return http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(OAuthError.from_transport(e)) from e

    async def asend(self) -> httpx.Response:
        """Sign and send with the client's httpx.AsyncClient. See ``send``."""
        http = self._client.http
        if not isinstance(http, httpx.AsyncClient):
            raise TypeError("asend() needs an httpx.AsyncClient; use send() with an httpx.Client")
        request = self.generate_signature()
        try:
            return await http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(OAuthError.from_transport(e)) from e
