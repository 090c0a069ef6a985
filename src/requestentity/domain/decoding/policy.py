"""Per-field mapping directives collected before hydration starts."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@dataclass(frozen=True, slots=True)
class PolicySnapshot:
    """Immutable view of a :class:`MappingPolicy` consumed by the resolver."""

    renames: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    required: frozenset[str] = frozenset()
    excluded: frozenset[str] = frozenset()

    def effective_key(self, field_name: str) -> str:
        return self.renames.get(field_name, field_name)

    def is_required(self, field_name: str) -> bool:
        return field_name in self.required

    def is_excluded(self, field_name: str) -> bool:
        return field_name in self.excluded


class MappingPolicy:
    """Accumulates rename, required and excluded directives for one hydration.

    Nothing is validated here: unknown field names are accepted and simply never
    consulted if the target does not declare them. Every mutator returns the
    policy itself so directives can be chained::

        policy.assign("name_input", "name").require("email").exclude("age")
    """

    __slots__ = ("_excluded", "_renames", "_required")

    def __init__(self) -> None:
        self._renames: dict[str, str] = {}
        self._required: set[str] = set()
        self._excluded: set[str] = set()

    def assign(self, source_key: str, field_name: str) -> Self:
        """Resolve ``field_name`` from the input key ``source_key`` instead of its own name."""

        self._renames[field_name] = source_key
        return self

    def require(self, field_name: str) -> Self:
        self._required.add(field_name)
        return self

    def exclude(self, field_name: str) -> Self:
        self._excluded.add(field_name)
        return self

    def snapshot(self) -> PolicySnapshot:
        return PolicySnapshot(
            renames=MappingProxyType(dict(self._renames)),
            required=frozenset(self._required),
            excluded=frozenset(self._excluded),
        )

    def __repr__(self) -> str:
        return (
            f"MappingPolicy(renames={self._renames!r}, required={sorted(self._required)!r}, "
            f"excluded={sorted(self._excluded)!r})"
        )


type ConfigurePolicy = Callable[[MappingPolicy], object]


def build_policy(configure: ConfigurePolicy | None = None) -> PolicySnapshot:
    """Run ``configure`` once against a fresh policy and freeze the result."""

    policy = MappingPolicy()
    if configure is not None:
        configure(policy)
    return policy.snapshot()


__all__ = ["ConfigurePolicy", "MappingPolicy", "PolicySnapshot", "build_policy"]
