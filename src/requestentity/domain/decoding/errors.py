"""Errors raised while hydrating entities from request input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class DecodeError(ValueError):
    """Base class for failures while turning request input into an entity."""


class MissingRequiredFieldError(DecodeError):
    """Raised when a required field resolves to an empty value."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required property: {field_name}")
        self.field_name = field_name


@dataclass(frozen=True, slots=True)
class FieldIssue:
    field: str
    message: str


class FieldValueError(DecodeError):
    """Raised when resolved values cannot be coerced into the target's field types."""

    def __init__(self, target: str, errors: Sequence[FieldIssue]) -> None:
        details = "; ".join(f"{issue.field}: {issue.message}" for issue in errors)
        super().__init__(f"Invalid values for {target}: {details}")
        self.target = target
        self.errors = tuple(errors)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(issue.field for issue in self.errors)


class UnsupportedTargetError(DecodeError):
    """Raised when a hydrator cannot enumerate the fields of a target."""

    def __init__(self, target: object) -> None:
        name = getattr(target, "__qualname__", type(target).__qualname__)
        super().__init__(f"Cannot hydrate {name}: not a pydantic model or dataclass")
        self.target = target


__all__ = [
    "DecodeError",
    "FieldIssue",
    "FieldValueError",
    "MissingRequiredFieldError",
    "UnsupportedTargetError",
]
