"""Ports for constructing target entities from resolved field values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, final, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


@final
class _MissingType:
    """Marker for "no value provided"; distinct from an explicit ``None``."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _MissingType()

type FieldValueResolver = Callable[[str], object]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A single declared field of a target type."""

    name: str
    has_default: bool = False


@runtime_checkable
class Hydrator(Protocol):
    """Builds an instance of ``target`` by asking ``resolve`` for each declared field.

    ``resolve`` is called once per field, in the target's declaration order, and may
    raise; hydrators must let such errors propagate. A ``MISSING`` return value means
    the field was not provided and the target's own default applies.
    """

    def fields(self, target: object) -> Sequence[FieldDescriptor]: ...

    def hydrate[T](self, target: type[T] | T, resolve: FieldValueResolver) -> T: ...


__all__ = ["MISSING", "FieldDescriptor", "FieldValueResolver", "Hydrator"]
