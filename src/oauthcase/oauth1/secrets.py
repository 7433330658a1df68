"""OAuth credentials: consumer key/secret and the optional token pair.

Secrets are immutable; ``token()`` returns a new instance, so a consumer-only
Secrets can be reused as the template for every user token.

Example:
    >>> secrets = Secrets.new("[CONSUMER_KEY]", "[CONSUMER_SECRET]")
    >>> secrets.token_pair() is None
    True
    >>> user = secrets.token("[ACCESS_TOKEN]", "[TOKEN_SECRET]")
    >>> user.token_pair()
    ('[ACCESS_TOKEN]', '[TOKEN_SECRET]')
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer, model_validator

if TYPE_CHECKING:
    from .token_reader import TokenResponse


@runtime_checkable
class SecretsProvider(Protocol):
    """Anything that can hand the signer its credentials."""

    def consumer_pair(self) -> tuple[str, str]: ...
    def token_pair(self) -> tuple[str, str] | None: ...


def _mask(v: SecretStr | None) -> str | None:
    if v is None:
        return None
    secret = v.get_secret_value()
    return f"{secret[:4]}..." if len(secret) > 8 else "***"


class Secrets(BaseModel):
    """Consumer credentials plus an optional token/token-secret pair.

    Secret values are SecretStr so they never show up in reprs or logs.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        revalidate_instances="never",
        populate_by_name=True,
    )

    consumer_key: str
    consumer_secret: SecretStr
    token_value: str | None = Field(default=None, alias="token")
    token_secret: SecretStr | None = None

    @model_validator(mode="after")
    def _token_pair_complete(self) -> Self:
        if (self.token_value is None) != (self.token_secret is None):
            raise ValueError("token and token_secret must be given together")
        return self

    @classmethod
    def new(cls, consumer_key: str, consumer_secret: str) -> Self:
        return cls(consumer_key=consumer_key, consumer_secret=SecretStr(consumer_secret))

    def token(self, token: str, token_secret: str | SecretStr) -> Secrets:
        """Return a copy bound to the given token pair."""
        return Secrets(
            consumer_key=self.consumer_key,
            consumer_secret=self.consumer_secret,
            token_value=token,
            token_secret=token_secret if isinstance(token_secret, SecretStr) else SecretStr(token_secret),
        )

    def with_token_response(self, response: TokenResponse) -> Secrets:
        """Continue a three-legged flow with the token a token endpoint returned."""
        return self.token(response.oauth_token, response.oauth_token_secret)

    # ─── SecretsProvider ────────────────────────────────────────────

    def consumer_pair(self) -> tuple[str, str]:
        return self.consumer_key, self.consumer_secret.get_secret_value()

    def token_pair(self) -> tuple[str, str] | None:
        if self.token_value is None or self.token_secret is None:
            return None
        return self.token_value, self.token_secret.get_secret_value()

    @field_serializer("consumer_secret", "token_secret", when_used="json")
    def _mask_secrets(self, v: SecretStr | None) -> str | None:
        return _mask(v)
