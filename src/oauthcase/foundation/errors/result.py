"""Result type for fail-fast validation.

Discriminated union for success/failure used where a sequence of steps
must stop at the first error and carry it, unchanged, to the caller:
- fold: left fold that latches the first Err
- Raising bridge: unwrap_or_raise
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")
E = TypeVar("E")
A = TypeVar("A")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).unwrap()
        42
        >>> Err("fail").unwrap_err()
        'fail'
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def unwrap_or_raise(self, to_exc: Callable[[E], BaseException]) -> T:
        """Extract Ok value, or raise the exception built from the Err value."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise to_exc(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ──────────────────────────────────────────────────

    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


def fold(items: Iterable[A], initial: T, step: Callable[[T, A], Result[T, E]]) -> Result[T, E]:
    """Left fold that latches the first Err; later items are skipped."""
    acc: Result[T, E] = Ok(initial)
    for item in items:
        if not acc._is_ok:
            break
        acc = step(acc._value, item)  # type: ignore[arg-type]
    return acc
