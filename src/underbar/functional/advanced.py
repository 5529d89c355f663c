"""Advanced collection operations built on the basic operators.

    - **shuffle**: random permutation drawn from a NumPy generator.
    - **sort_by**: stable ascending sort by a property, a projection or the
      values themselves.
    - **zip**: transpose sequences, padding the short ones with ``None``.
    - **flatten**: depth-first flattening of nested lists and tuples.
    - **intersection** / **difference**: order-preserving set operations on
      the first sequence.

See Also:
    - :mod:`underbar.functional.collections`: The operators these are built on.
"""

import typing as tp

import numpy as np

from underbar.config import settings
from underbar.core.helpers import identity
from underbar.core.types import (
    Collection,
    KeyFunc,
    is_nested_sequence,
    property_accessor,
)
from underbar.functional.collections import (
    contains,
    each,
    every,
    filter,
    last,
    map,
    reject,
    some,
)

__all__ = [
    "shuffle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
]


def shuffle(
    array: tp.Sequence, rng: tp.Optional[np.random.Generator] = None
) -> tp.List[tp.Any]:
    """Return the elements of ``array`` in uniformly random order.

    A uniformly random element is moved from a working copy into the result
    until the copy is empty, which yields every permutation with equal
    probability. ``array`` itself is left untouched.

    Args:
        array: Sequence to permute.
        rng: Source of randomness. Defaults to a fresh generator seeded with
            ``settings.SHUFFLE_SEED`` (unseeded when that is unset).

    Returns:
        A new list.

    Example:
        >>> shuffle([1, 2, 3], rng=np.random.default_rng(0))  # doctest: +SKIP
        [3, 1, 2]
    """
    if rng is None:
        rng = np.random.default_rng(settings.SHUFFLE_SEED)

    remaining = map(array, identity)
    result = []
    while remaining:
        index = int(rng.integers(len(remaining)))
        result.append(remaining.pop(index))
    return result


def sort_by(
    collection: Collection, iterator: tp.Optional[KeyFunc] = None
) -> tp.List[tp.Any]:
    """Sort values ascending by a derived key.

    Args:
        collection: Values to sort. A list is sorted in place; other
            sequences, and the values of a Mapping, are copied first.
        iterator: Property name read off every value, a single-argument
            projection, or ``None`` to compare the values directly.

    Returns:
        The sorted list. Ties keep their original order and values whose key
        is ``None`` (a missing property, say) sort last.

    Example:
        >>> people = [{"name": "curly", "age": 50}, {"name": "moe", "age": 30}]
        >>> pluck(sort_by(people, "age"), "name")  # doctest: +SKIP
        ['moe', 'curly']
    """
    if iterator is None:
        key = identity
    elif isinstance(iterator, str):
        key = property_accessor(iterator)
    else:
        key = iterator

    def none_last(value):
        derived = key(value)
        return (derived is None, derived)

    values = collection if isinstance(collection, list) else map(collection, identity)
    values.sort(key=none_last)
    return values


def zip(*arrays: tp.Sequence) -> tp.List[tp.List[tp.Any]]:
    """Group the ``i``-th elements of every input together.

    The result is as long as the longest input; shorter inputs contribute
    ``None`` past their end.

    Example:
        >>> zip(["a", "b", "c", "d"], [1, 2, 3])
        [['a', 1], ['b', 2], ['c', 3], ['d', None]]
    """
    longest = last(sort_by(map(arrays, len))) or 0

    def row(index):
        return map(arrays, lambda array: array[index] if index < len(array) else None)

    return map(range(longest), row)


def flatten(nested_array: tp.Sequence) -> tp.List[tp.Any]:
    """Flatten nested lists and tuples to any depth, depth first.

    Strings and every other non-list, non-tuple value are kept as they are.

    Example:
        >>> flatten([1, [2, [3, [4]], 5]])
        [1, 2, 3, 4, 5]
    """
    result = []

    def append(item, *_):
        result.append(item)

    def visit(item, *_):
        if is_nested_sequence(item):
            each(flatten(item), append)
        else:
            result.append(item)

    each(nested_array, visit)
    return result


def intersection(array: tp.Sequence, *others: tp.Sequence) -> tp.List[tp.Any]:
    """Return the elements of ``array`` found in every other sequence.

    Order follows ``array``. Repeated elements of ``array`` that pass are
    kept once per occurrence.

    Example:
        >>> intersection([1, 2, 3], [2, 3, 4], [3, 4, 5])
        [3]
    """
    arrays = (array,) + others
    return filter(array, lambda item: every(arrays, lambda other: contains(other, item)))


def difference(array: tp.Sequence, *others: tp.Sequence) -> tp.List[tp.Any]:
    """Return the elements of ``array`` found in none of ``others``.

    Order and repeats follow ``array``.

    Example:
        >>> difference([1, 2, 3, 4, 5], [5, 2, 10])
        [1, 3, 4]
    """
    return reject(array, lambda item: some(others, lambda other: contains(other, item)))
