"""Shared types and helpers for the underbar operators."""

from underbar.core.helpers import identity, noop
from underbar.core.types import (
    Collection,
    Iterator,
    KeyFunc,
    Predicate,
    is_mapping,
    is_nested_sequence,
    property_accessor,
)

__all__ = [
    "identity",
    "noop",
    "Collection",
    "Iterator",
    "KeyFunc",
    "Predicate",
    "is_mapping",
    "is_nested_sequence",
    "property_accessor",
]
