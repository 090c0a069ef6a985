"""Ports for looking up raw request input."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class InputSource(Protocol):
    """Read-only key lookup over request input.

    ``input`` returns the single value stored for ``key`` (body before query) or
    ``MISSING``. ``all`` returns every value merged, with query values winning.
    """

    def input(self, key: str) -> object: ...

    def has(self, key: str) -> bool: ...

    def all(self) -> dict[str, object]: ...


__all__ = ["InputSource"]
