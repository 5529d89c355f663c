"""underbar: a small functional-utilities library.

Typical use mirrors the JavaScript library it is named after::

    import underbar as _

    _.map([1, 2, 3], lambda x: x * 2)
"""

from underbar.core.helpers import identity, noop
from underbar.functional.collections import (
    each,
    first,
    last,
    index_of,
    filter,
    reject,
    uniq,
    map,
    pluck,
    invoke,
    reduce,
    contains,
    every,
    some,
)
from underbar.functional.objects import extend, defaults
from underbar.functional.decorators import once, memoize, delay, throttle
from underbar.functional.advanced import (
    shuffle,
    sort_by,
    zip,
    flatten,
    intersection,
    difference,
)

__all__ = [
    "identity",
    "noop",
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
    "extend",
    "defaults",
    "once",
    "memoize",
    "delay",
    "throttle",
    "shuffle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
]
