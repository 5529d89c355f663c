"""Helpers for merging string-keyed mappings.

Both functions mutate and return their first argument, unlike the rest of the
library.
"""

import typing as tp

from underbar.functional.collections import contains, each

__all__ = ["extend", "defaults"]


def extend(obj: tp.MutableMapping, *sources: tp.Mapping) -> tp.MutableMapping:
    """Copy every key of every source onto ``obj``.

    Sources are applied in argument order, so later sources overwrite earlier
    ones and the original values of ``obj``.

    Args:
        obj: Mapping to update in place.
        *sources: Mappings to copy from.

    Returns:
        ``obj`` itself.

    Example:
        >>> extend({"a": 1}, {"b": 2}, {"a": 3})
        {'a': 3, 'b': 2}
    """

    def copy_source(source, *_):
        def copy_key(value, key, _):
            obj[key] = value

        each(source, copy_key)

    each(sources, copy_source)
    return obj


def defaults(obj: tp.MutableMapping, *sources: tp.Mapping) -> tp.MutableMapping:
    """Fill in keys missing from ``obj`` without overwriting any.

    A key is only copied while ``obj`` lacks it, so once a key is present,
    whether originally or from an earlier source, later sources cannot change
    it. A key holding ``None`` counts as present.

    Returns:
        ``obj`` itself.
    """

    def copy_source(source, *_):
        def copy_missing(value, key, _):
            if not contains(list(obj.keys()), key):
                obj[key] = value

        each(source, copy_missing)

    each(sources, copy_source)
    return obj
