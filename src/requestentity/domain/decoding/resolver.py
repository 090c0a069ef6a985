"""Field resolution: decide each target field's raw value from request input."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from requestentity.domain.ports.hydration import MISSING

from .errors import MissingRequiredFieldError
from .policy import build_policy

if TYPE_CHECKING:
    from requestentity.domain.ports import Hydrator, InputSource

    from .policy import ConfigurePolicy, PolicySnapshot

log = getLogger(__name__)


def is_empty(value: object) -> bool:
    """Return whether ``value`` counts as "not provided" for required checks.

    Absent values, ``None``, ``False``, zero, empty strings and empty containers are
    empty, and so is the string ``"0"``. Anything else, including opaque objects such
    as uploaded files, is not.
    """

    if value is MISSING or value is None:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, bool | int | float):
        return not value
    if isinstance(value, list | tuple | dict | set | frozenset):
        return len(value) == 0
    return False


def resolve_field(source: InputSource, policy: PolicySnapshot, field_name: str) -> object:
    """Return the raw value for ``field_name`` or raise if it is required and empty."""

    if policy.is_excluded(field_name):
        value: object = MISSING
    else:
        value = source.input(policy.effective_key(field_name))

    # exclusion runs first, so a field that is both excluded and required always fails
    if policy.is_required(field_name) and is_empty(value):
        raise MissingRequiredFieldError(field_name)

    return value


class EntityResolver:
    """Hydrates target types from an input source under a per-call mapping policy."""

    def __init__(self, source: InputSource, hydrator: Hydrator) -> None:
        self.source = source
        self.hydrator = hydrator

    def hydrate[T](self, target: type[T] | T, configure: ConfigurePolicy | None = None) -> T:
        policy = build_policy(configure)
        log.debug(
            "Hydrating %s: renames=%s, required=%s, excluded=%s",
            _target_name(target),
            len(policy.renames),
            len(policy.required),
            len(policy.excluded),
        )

        def resolve(field_name: str) -> object:
            return resolve_field(self.source, policy, field_name)

        return self.hydrator.hydrate(target, resolve)


def decode[T](
    source: InputSource,
    target: type[T] | T,
    configure: ConfigurePolicy | None = None,
    *,
    hydrator: Hydrator,
) -> T:
    """Run a single hydration of ``target`` against ``source``."""

    return EntityResolver(source, hydrator).hydrate(target, configure)


def _target_name(target: object) -> str:
    if isinstance(target, type):
        return target.__qualname__
    return f"{type(target).__qualname__} instance"


__all__ = ["EntityResolver", "decode", "is_empty", "resolve_field"]
