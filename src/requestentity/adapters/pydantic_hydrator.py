"""Hydrator backed by pydantic validation.

Field discovery uses the target's declared fields (pydantic ``model_fields`` or
``dataclasses.fields``), and the collected raw values are coerced into the declared
types by pydantic in lax mode, so ``"30"`` becomes ``30`` for an ``int`` field.
"""

from __future__ import annotations

import dataclasses
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from pydantic import BaseModel, TypeAdapter, ValidationError

from requestentity.domain.decoding.errors import (
    FieldIssue,
    FieldValueError,
    UnsupportedTargetError,
)
from requestentity.domain.ports.hydration import MISSING, FieldDescriptor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from requestentity.domain.ports.hydration import FieldValueResolver

log = getLogger(__name__)


def _target_class(target: object) -> type[Any]:
    return target if isinstance(target, type) else type(target)


def _model_fields(model: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(name=name, has_default=not info.is_required())
        for name, info in model.model_fields.items()
    )


def _dataclass_fields(cls: type[Any]) -> tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(
            name=item.name,
            has_default=(
                item.default is not dataclasses.MISSING
                or item.default_factory is not dataclasses.MISSING
            ),
        )
        for item in dataclasses.fields(cls)
        if item.init
    )


@cache
def _type_adapter(cls: type[Any]) -> TypeAdapter[Any]:
    return TypeAdapter(cls)


def _issues(exc: ValidationError) -> list[FieldIssue]:
    return [
        FieldIssue(
            field=".".join(str(part) for part in error["loc"]) or "__root__",
            message=error["msg"],
        )
        for error in exc.errors()
    ]


class PydanticHydrator:
    """Construct pydantic models or dataclasses from per-field resolved values."""

    def fields(self, target: object) -> Sequence[FieldDescriptor]:
        cls = _target_class(target)
        if issubclass(cls, BaseModel):
            return _model_fields(cls)
        if dataclasses.is_dataclass(cls):
            return _dataclass_fields(cls)
        raise UnsupportedTargetError(target)

    def hydrate[T](self, target: type[T] | T, resolve: FieldValueResolver) -> T:
        cls = cast("type[T]", _target_class(target))
        descriptors = self.fields(target)

        values: dict[str, object] = {}
        for descriptor in descriptors:
            value = resolve(descriptor.name)
            if value is not MISSING:
                values[descriptor.name] = value

        if not isinstance(target, type):
            current = {item.name: getattr(target, item.name) for item in descriptors}
            values = {**current, **values}

        unfilled = [
            item.name for item in descriptors if not item.has_default and item.name not in values
        ]
        if unfilled:
            log.debug(
                "No value for %s fields without default: %s",
                cls.__qualname__,
                ", ".join(unfilled),
            )

        log.debug("Validating %s with fields: %s", cls.__qualname__, ", ".join(values))
        try:
            if issubclass(cls, BaseModel):
                return cast("T", cls.model_validate(values, by_name=True))
            return cast("T", _type_adapter(cls).validate_python(values))
        except ValidationError as exc:
            raise FieldValueError(cls.__qualname__, _issues(exc)) from exc


__all__ = ["PydanticHydrator"]
