"""Parameter interception for outgoing query and form data.

Protocol keys (``realm`` and anything starting with ``oauth_``) are pulled
out of the payload before it reaches the transport, so they are never sent
unsigned or twice. They are staged here and merged at signing time.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypeAlias
from urllib.parse import parse_qsl, urlencode

from .parameters import is_protocol_key

QueryData: TypeAlias = Mapping[str, object] | Iterable[tuple[str, object]]


def normalize_pairs(data: QueryData | None) -> list[tuple[str, str]]:
    """Flatten a mapping or pair sequence into (key, str(value)) pairs.

    Sequence values in a mapping expand to repeated keys; None values are dropped.
    """
    if data is None:
        return []
    items = data.items() if isinstance(data, Mapping) else data
    pairs: list[tuple[str, str]] = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _stringify(v)) for v in value if v is not None)
        else:
            pairs.append((str(key), _stringify(value)))
    return pairs


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def steal_protocol_pairs(
    pairs: Iterable[tuple[str, str]],
    captured: dict[str, str],
) -> list[tuple[str, str]]:
    """Move protocol pairs into captured (last value wins) and return the rest in order."""
    remainder: list[tuple[str, str]] = []
    for key, value in pairs:
        if is_protocol_key(key):
            captured[key] = value
        else:
            remainder.append((key, value))
    return remainder


def steal_from_query_string(query: str, captured: dict[str, str]) -> str:
    """Capture protocol keys from a raw query string, returning the re-encoded remainder."""
    remainder = steal_protocol_pairs(parse_qsl(query, keep_blank_values=True), captured)
    return urlencode(remainder)


@dataclass(slots=True)
class CapturedParameters:
    """Protocol parameters scraped from one request's query and form data.

    Owned by a single request builder. Query captures accumulate across
    calls; each form capture replaces the previous one.
    """

    query: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] = field(default_factory=dict)

    def capture_query(self, data: QueryData | None) -> list[tuple[str, str]]:
        return steal_protocol_pairs(normalize_pairs(data), self.query)

    def capture_query_string(self, query: str) -> str:
        return steal_from_query_string(query, self.query)

    def capture_form(self, data: QueryData | None) -> list[tuple[str, str]]:
        self.form = {}
        return steal_protocol_pairs(normalize_pairs(data), self.form)

    def merged(self) -> dict[str, str]:
        """Form entries first, then query entries; query wins on a shared key."""
        return {**self.form, **self.query}

    def copy(self) -> CapturedParameters:
        return CapturedParameters(query=dict(self.query), form=dict(self.form))

    def __bool__(self) -> bool:
        return bool(self.query or self.form)
