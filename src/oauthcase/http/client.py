"""OAuth1-aware wrapper around an httpx client.

Example:
    >>> secrets = Secrets.new("[CONSUMER_KEY]", "[CONSUMER_SECRET]")
    >>> client = OAuth1Client().oauth1(secrets)
    >>> response = client.post("https://api.example.com/oauth/request_token") \\
    ...     .query({"oauth_callback": "oob"}).send()
    >>> token = parse_oauth_token(response)

    >>> # Async, configured from OAUTHCASE_* environment variables
    >>> async with OAuth1Client.from_settings(asynchronous=True) as client:
    ...     response = await client.get("https://api.example.com/me").asend()
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING, Self

import httpx

from oauthcase.foundation.config import OAuthcaseSettings, get_settings
from oauthcase.oauth1 import OAuthParameters, SecretsProvider, Signer

from .request import RequestBuilder

if TYPE_CHECKING:
    from oauthcase.foundation.config import HttpSettings


def _client_kwargs(http: HttpSettings) -> dict[str, object]:
    return {
        "timeout": http.timeout,
        "verify": http.verify_ssl,
        "follow_redirects": http.follow_redirects,
        "headers": {"User-Agent": http.user_agent},
    }


class OAuth1Client:
    """Request factory binding an httpx client to an optional signer.

    Attributes:
        http: The wrapped httpx.Client or httpx.AsyncClient
        signer: Signer applied to every request, or None for unsigned requests
        stamp: Fill an absent nonce/timestamp before signing
    """

    __slots__ = ("_http", "_signer", "_stamp")

    def __init__(
        self,
        http: httpx.Client | httpx.AsyncClient | None = None,
        *,
        secrets: SecretsProvider | None = None,
        parameters: OAuthParameters | None = None,
        stamp: bool = True,
    ) -> None:
        self._http = http if http is not None else httpx.Client()
        self._signer = Signer(secrets, parameters or OAuthParameters()) if secrets is not None else None
        self._stamp = stamp

    @classmethod
    def from_settings(
        cls,
        settings: OAuthcaseSettings | None = None,
        *,
        asynchronous: bool = False,
        parameters: OAuthParameters | None = None,
    ) -> Self:
        """Build a client (and signer, when credentials are configured) from settings."""
        settings = settings or get_settings()
        kwargs = _client_kwargs(settings.http)
        http = httpx.AsyncClient(**kwargs) if asynchronous else httpx.Client(**kwargs)  # type: ignore[arg-type]
        return cls(
            http,
            secrets=settings.credentials.to_secrets(),
            parameters=parameters,
            stamp=settings.http.stamp_requests,
        )

    def oauth1(self, secrets: SecretsProvider, parameters: OAuthParameters | None = None) -> OAuth1Client:
        """Same httpx client, signing every request with secrets and parameters."""
        return OAuth1Client(self._http, secrets=secrets, parameters=parameters, stamp=self._stamp)

    @property
    def http(self) -> httpx.Client | httpx.AsyncClient:
        return self._http

    @property
    def signer(self) -> Signer | None:
        return self._signer

    @property
    def stamp(self) -> bool:
        return self._stamp

    @property
    def is_async(self) -> bool:
        return isinstance(self._http, httpx.AsyncClient)

    def resolve_url(self, url: str | httpx.URL) -> httpx.URL:
        """The absolute URL httpx will send for url, with the client's base_url applied.

        Raises:
            ValueError: url is relative and the httpx client has no base_url.
        """
        url = httpx.URL(url)
        if url.is_relative_url:
            base = self._http.base_url
            if base.is_relative_url:
                raise ValueError(f"relative URL {url} needs an httpx client with a base_url")
            # httpx keeps base_url with a trailing slash and appends the relative path to it
            url = base.copy_with(raw_path=base.raw_path + url.raw_path.lstrip(b"/"))
        return url

    # ─────────────────────────────────────────────────────────────────
    # Request factories
    # ─────────────────────────────────────────────────────────────────

    def request(self, method: str, url: str | httpx.URL) -> RequestBuilder:
        """Start building a request. Protocol keys in the URL query are captured."""
        return RequestBuilder(self, method, url, self._signer)

    def get(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("GET", url)

    def post(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("POST", url)

    def put(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("PUT", url)

    def patch(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("PATCH", url)

    def delete(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("DELETE", url)

    def head(self, url: str | httpx.URL) -> RequestBuilder:
        return self.request("HEAD", url)

    # ─────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the wrapped httpx.Client. An httpx.AsyncClient needs ``aclose``/``async with``."""
        if not isinstance(self._http, httpx.Client):
            raise TypeError("close() needs an httpx.Client; use aclose() or 'async with' with an httpx.AsyncClient")
        self._http.close()

    async def aclose(self) -> None:
        if isinstance(self._http, httpx.AsyncClient):
            await self._http.aclose()
        else:
            self._http.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None) -> None:
        await self.aclose()
