"""Functional primitives for underbar.

Collection operators, merging helpers and function decorators, all derived
from the single traversal primitive :func:`underbar.functional.collections.each`.
Apart from ``extend``, ``defaults`` and ``sort_by`` on a list, nothing here
mutates its arguments.
"""
