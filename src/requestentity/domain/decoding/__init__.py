"""Request-to-entity decoding: mapping policy and field resolution."""

from __future__ import annotations

from .errors import (
    DecodeError,
    FieldIssue,
    FieldValueError,
    MissingRequiredFieldError,
    UnsupportedTargetError,
)
from .policy import ConfigurePolicy, MappingPolicy, PolicySnapshot, build_policy
from .resolver import EntityResolver, decode, is_empty, resolve_field

__all__ = [
    "ConfigurePolicy",
    "DecodeError",
    "EntityResolver",
    "FieldIssue",
    "FieldValueError",
    "MappingPolicy",
    "MissingRequiredFieldError",
    "PolicySnapshot",
    "UnsupportedTargetError",
    "build_policy",
    "decode",
    "is_empty",
    "resolve_field",
]
