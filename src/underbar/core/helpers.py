"""Trivial callables shared by the operators as default iterators."""

import typing as tp

__all__ = ["identity", "noop"]


def identity(value: tp.Any) -> tp.Any:
    """Return ``value`` unchanged."""
    return value


def noop(*args: tp.Any, **kwargs: tp.Any) -> None:
    return None
