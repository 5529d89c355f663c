"""Reusable type definitions for the underbar collection operators.

The library works over two collection shapes:

Type Aliases:
    Collection: Either an ordered ``Sequence`` or a string-keyed ``Mapping``.
    Iterator: Callback handed to ``each``; receives ``(value, key, collection)``.
    Predicate: Single-argument truth test.
    KeyFunc: Projection used by ``pluck`` and ``sort_by``; a property name or a
        callable.

The helpers below let operators branch on the collection shape without
reaching for ``isinstance`` checks of their own.
"""

import typing as tp
from collections.abc import Mapping, Sequence

__all__ = [
    "Collection",
    "Iterator",
    "Predicate",
    "KeyFunc",
    "is_mapping",
    "is_nested_sequence",
    "property_accessor",
]

Collection = tp.Union[Sequence, Mapping]
Iterator = tp.Callable[[tp.Any, tp.Any, Collection], tp.Any]
Predicate = tp.Callable[[tp.Any], tp.Any]
KeyFunc = tp.Union[str, tp.Callable[[tp.Any], tp.Any]]


def is_mapping(collection: tp.Any) -> bool:
    """Return True when ``collection`` should be traversed by key."""
    return isinstance(collection, Mapping)


def is_nested_sequence(value: tp.Any) -> bool:
    """Return True for elements ``flatten`` descends into.

    Only lists and tuples count; strings are sequences of themselves and would
    never bottom out.
    """
    return isinstance(value, (list, tuple))


def property_accessor(name: str) -> tp.Callable[[tp.Any], tp.Any]:
    """Build a projection reading ``name`` off an element.

    Mappings are read by key and everything else by attribute. A missing
    property yields ``None``.

    Args:
        name: Key or attribute name.

    Returns:
        A single-argument callable.
    """

    def accessor(value: tp.Any) -> tp.Any:
        if is_mapping(value):
            return value.get(name)
        return getattr(value, name, None)

    return accessor
