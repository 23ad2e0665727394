"""Outcome type for fetch operations that degrade instead of raising."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Value of a fetch plus the reason it failed, if it did.

    A failed result still carries a usable fallback ``value`` (an empty list,
    a fund with placeholder returns), so callers reading only ``value`` see
    "empty" for both "no data" and "fetch failed". Check ``ok`` to tell them
    apart.
    """

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, value: T, error: str) -> "FetchResult[T]":
        return cls(value=value, error=error)
