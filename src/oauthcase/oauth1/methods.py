"""Signature method strategies and RFC 3986 percent-encoding.

A signature method turns the signature base string and the signing key
into raw signature bytes; the signer base64-encodes the result. Custom
algorithms subclass SignatureMethod and are bound through
``OAuthParameters.with_signature_method``.
"""

from __future__ import annotations

import hashlib
import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import quote


def percent_encode(value: str) -> str:
    """Percent-encode per RFC 5849 §3.6 (everything but ALPHA, DIGIT, '-', '.', '_', '~')."""
    return quote(value, safe="")


class SignatureMethod(ABC):
    """Strategy computing the oauth_signature over a base string."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Value emitted as oauth_signature_method."""

    @abstractmethod
    def sign(self, base_string: str, key: str) -> bytes:
        """Return the raw signature bytes."""


@dataclass(frozen=True, slots=True)
class HmacSha1(SignatureMethod):
    """HMAC-SHA1 (RFC 5849 §3.4.2), the default method."""

    @property
    def name(self) -> str:
        return "HMAC-SHA1"

    def sign(self, base_string: str, key: str) -> bytes:
        return hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()


DEFAULT_SIGNATURE_METHOD: SignatureMethod = HmacSha1()
