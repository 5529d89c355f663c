"""Collection operators derived from a single traversal primitive.

Every operator in this module is written in terms of :func:`each`, directly or
through another operator defined here, rather than the interpreter's own
higher-order builtins. The dependency graph is layered:

    - **each**: the only function that actually loops.
    - **index_of, filter, map, reduce**: built directly on ``each``.
    - **reject** (``filter``), **uniq** (``index_of``), **pluck** and
      **invoke** (``map``), **contains** and **every** (``reduce``).
    - **some**: the negation of ``every`` over a negated test.

A collection is either a ``Sequence`` (visited by ascending index) or a
string-keyed ``Mapping`` (visited in its own iteration order). Operators that
return collections always return a new ``list`` holding values only.

Note:
    ``contains``, ``every`` and ``some`` fold over the whole collection even
    after their answer is settled. There is no early exit.

Examples:
    >>> from underbar.functional.collections import filter, reduce
    >>> filter([1, 2, 3, 4], lambda x: x % 2 == 0)
    [2, 4]
    >>> reduce([1, 2, 3], lambda total, x: total + x, 0)
    6
"""

import typing as tp

from underbar.core.helpers import identity
from underbar.core.types import (
    Collection,
    Iterator,
    Predicate,
    is_mapping,
    property_accessor,
)

__all__ = [
    "each",
    "first",
    "last",
    "index_of",
    "filter",
    "reject",
    "uniq",
    "map",
    "pluck",
    "invoke",
    "reduce",
    "contains",
    "every",
    "some",
]

# Distinguishes "no accumulator given" from an explicit None seed
_MISSING = object()


# =============================================================================
# Traversal Primitive
# =============================================================================


def each(collection: Collection, iterator: Iterator) -> None:
    """Call ``iterator(value, key, collection)`` for every element.

    Sequences are visited in ascending index order with the index as key.
    Mappings are visited in their natural iteration order with the mapping key.

    Args:
        collection: Sequence or Mapping to traverse.
        iterator: Callback receiving ``(value, key_or_index, collection)``. Its
            return value is ignored.
    """
    if is_mapping(collection):
        for key in collection:
            iterator(collection[key], key, collection)
    else:
        for index in range(len(collection)):
            iterator(collection[index], index, collection)


# =============================================================================
# Accessors
# =============================================================================


def first(array: tp.Sequence, n: tp.Optional[int] = None) -> tp.Any:
    """Return the first element, or a list of the first ``n`` elements.

    Args:
        array: Source sequence.
        n: Number of leading elements to take. When omitted the first element
            itself is returned (``None`` for an empty sequence).
    """
    if n is None:
        return array[0] if len(array) else None
    return list(array[:n])


def last(array: tp.Sequence, n: tp.Optional[int] = None) -> tp.Any:
    """Return the last element, or a list of the last ``n`` elements.

    Asking for more elements than ``array`` holds returns all of them.
    """
    length = len(array)
    if n is None:
        return array[length - 1] if length else None
    if n > length:
        return list(array)
    return list(array[length - n :])


def index_of(array: tp.Sequence, target: tp.Any) -> int:
    """Return the lowest index whose element equals ``target``, or -1."""
    result = -1

    def visit(item, index, _):
        nonlocal result
        if result == -1 and item == target:
            result = index

    each(array, visit)
    return result


# =============================================================================
# Filtering And Mapping
# =============================================================================


def filter(collection: Collection, test: Predicate) -> tp.List[tp.Any]:
    """Return the values for which ``test(value)`` is truthy.

    Args:
        collection: Sequence or Mapping. Mapping keys are dropped.
        test: Single-argument truth test.

    Returns:
        A new list in traversal order.
    """
    result = []

    def visit(item, *_):
        if test(item):
            result.append(item)

    each(collection, visit)
    return result


def reject(collection: Collection, test: Predicate) -> tp.List[tp.Any]:
    """Return the values for which ``test(value)`` is falsy."""
    return filter(collection, lambda item: not test(item))


def uniq(array: tp.Sequence) -> tp.List[tp.Any]:
    """Return ``array`` without repeated values, keeping first occurrences.

    Each value is looked up in the result built so far, so the cost is
    quadratic in the number of distinct values.
    """
    result = []

    def visit(item, *_):
        if index_of(result, item) < 0:
            result.append(item)

    each(array, visit)
    return result


def map(collection: Collection, iterator: Predicate) -> tp.List[tp.Any]:
    """Return a new list holding ``iterator(value)`` for every value."""
    result = []

    def visit(item, *_):
        result.append(iterator(item))

    each(collection, visit)
    return result


def pluck(collection: Collection, property_name: str) -> tp.List[tp.Any]:
    """Return the ``property_name`` of every element.

    Mapping elements are read by key, other objects by attribute; missing
    properties come back as ``None``.

    Example:
        >>> pluck([{"name": "moe", "age": 30}, {"name": "curly", "age": 50}], "age")
        [30, 50]
    """
    return map(collection, property_accessor(property_name))


def invoke(
    collection: Collection,
    function_or_key: tp.Union[str, tp.Callable[..., tp.Any]],
    args: tp.Sequence[tp.Any] = (),
) -> tp.List[tp.Any]:
    """Call a method on every element and collect the results.

    Args:
        collection: Elements to call on.
        function_or_key: Either the name of a method looked up on each element,
            or a callable invoked as ``function(element, *args)`` so the
            element plays the receiver.
        args: Extra positional arguments passed to every call.

    Returns:
        A new list of return values.

    Example:
        >>> invoke(["a", "b"], "upper")
        ['A', 'B']
        >>> invoke([[3, 1], [2]], sorted)
        [[1, 3], [2]]
    """

    def call(value):
        if isinstance(function_or_key, str):
            return getattr(value, function_or_key)(*args)
        return function_or_key(value, *args)

    return map(collection, call)


# =============================================================================
# Reduction Family
# =============================================================================


def reduce(
    collection: Collection,
    iterator: tp.Callable[[tp.Any, tp.Any], tp.Any],
    accumulator: tp.Any = _MISSING,
) -> tp.Any:
    """Fold ``collection`` left to right with ``iterator(accumulator, item)``.

    Args:
        collection: Sequence or Mapping; Mapping values are folded.
        iterator: Two-argument combining function.
        accumulator: Initial value. ``None`` is a valid seed.

    Returns:
        The final accumulator. An empty collection without a seed gives
        ``None``.

    Note:
        Without a seed the accumulator starts as the first element and the
        fold still visits every element, so the first element is combined
        with itself once::

            >>> reduce([1, 2, 3], lambda a, b: a + b)
            7
    """
    if accumulator is _MISSING:
        accumulator = _first_value(collection)

    def visit(item, *_):
        nonlocal accumulator
        accumulator = iterator(accumulator, item)

    each(collection, visit)
    return accumulator


def _first_value(collection: Collection) -> tp.Any:
    # First value in traversal order, which for a Mapping is not collection[0]
    found = _MISSING

    def visit(item, *_):
        nonlocal found
        if found is _MISSING:
            found = item

    each(collection, visit)
    return None if found is _MISSING else found


def contains(collection: Collection, target: tp.Any) -> bool:
    """Return True when any value of ``collection`` equals ``target``."""

    def visit(was_found, item):
        if was_found:
            return True
        return item == target

    return bool(reduce(collection, visit, False))


def every(collection: Collection, iterator: tp.Optional[Predicate] = None) -> bool:
    """Return True when every value passes ``iterator``.

    Without an iterator each value is tested for truthiness. An empty
    collection passes.
    """
    test = iterator if iterator is not None else identity

    def visit(passed, item):
        if not passed:
            return False
        return bool(test(item))

    return reduce(collection, visit, True)


def some(collection: Collection, iterator: tp.Optional[Predicate] = None) -> bool:
    """Return True when at least one value passes ``iterator``.

    Defined as ``not every(collection, negated iterator)``; an empty
    collection fails.
    """
    test = iterator if iterator is not None else identity
    return not every(collection, lambda item: not test(item))
