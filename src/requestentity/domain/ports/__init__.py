"""Domain port definitions for adapters."""

from __future__ import annotations

from .hydration import MISSING, FieldDescriptor, FieldValueResolver, Hydrator
from .input import InputSource

__all__ = [
    "MISSING",
    "FieldDescriptor",
    "FieldValueResolver",
    "Hydrator",
    "InputSource",
]
