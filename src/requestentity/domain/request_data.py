"""Query and body parameters of a single request, with the lookup rules decoding relies on.

Two accessors exist and they deliberately disagree on precedence:

- ``input(key)`` returns the body value when the body has ``key`` and only falls back
  to the query otherwise.
- ``all()`` merges both stores recursively and lets query values overwrite body values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, cast

from requestentity.domain.ports.hydration import MISSING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A file part submitted with the request."""

    filename: str
    content: bytes = b""
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


def replace_recursive(
    base: Mapping[str, object],
    *replacements: Mapping[str, object],
) -> dict[str, object]:
    """Merge ``replacements`` into a copy of ``base``, later mappings winning.

    Nested mappings merge key by key and nested lists merge index by index. A list
    meeting a mapping merges as a mapping keyed by ``str(index)``. Scalars, and
    containers meeting scalars, are replaced.
    """

    merged: dict[str, object] = {key: _copy_value(value) for key, value in base.items()}
    for replacement in replacements:
        for key, value in replacement.items():
            merged[key] = _merge_value(merged[key], value) if key in merged else _copy_value(value)
    return merged


def _merge_value(current: object, incoming: object) -> object:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return replace_recursive(
            cast("dict[str, object]", current), cast("dict[str, object]", incoming)
        )
    if isinstance(current, list) and isinstance(incoming, list):
        current_items = cast("list[object]", current)
        incoming_items = cast("list[object]", incoming)
        merged = [_copy_value(item) for item in current_items]
        for index, item in enumerate(incoming_items):
            if index < len(merged):
                merged[index] = _merge_value(merged[index], item)
            else:
                merged.append(_copy_value(item))
        return merged
    if isinstance(current, dict | list) and isinstance(incoming, dict | list):
        return replace_recursive(_as_mapping(current), _as_mapping(incoming))
    return _copy_value(incoming)


def _as_mapping(value: object) -> dict[str, object]:
    if isinstance(value, list):
        return {str(index): item for index, item in enumerate(cast("list[object]", value))}
    return cast("dict[str, object]", value)


def _copy_value(value: object) -> object:
    if isinstance(value, dict):
        return {key: _copy_value(item) for key, item in cast("dict[str, object]", value).items()}
    if isinstance(value, list):
        return [_copy_value(item) for item in cast("list[object]", value)]
    return value


def _freeze(values: Mapping[str, object] | None) -> Mapping[str, object]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True, slots=True)
class RequestData:
    """Read-only input source backed by query, body and file stores."""

    query: Mapping[str, object] = field(default_factory=dict)
    body: Mapping[str, object] = field(default_factory=dict)
    files: Mapping[str, UploadedFile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", _freeze(self.query))
        object.__setattr__(self, "body", _freeze(self.body))
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def input(self, key: str, default: object = MISSING) -> object:
        if key in self.body:
            return self.body[key]
        if key in self.query:
            return self.query[key]
        return default

    def has(self, key: str) -> bool:
        return key in self.body or key in self.query

    def all(self) -> dict[str, object]:
        return replace_recursive(self.body, self.query)

    def file(self, name: str) -> UploadedFile | None:
        upload = self.files.get(name)
        return upload if isinstance(upload, UploadedFile) else None


__all__ = ["RequestData", "UploadedFile", "replace_recursive"]
