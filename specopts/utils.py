"""
specopts utilities.

- Unset: "not provided" marker, distinct from None (parse() without tokens
  reads sys.argv, parse([]) parses nothing).
- coalesce(): resolve Unset to a default.
- rename(): decorator fixing __name__/__qualname__ of generated callables.
- mirror(): read-only property over a private "_name" field.
"""
import functools
from collections.abc import Sequence, Mapping
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: one falsy instance per process, not subclassable.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    `default` when `object` is Unset, else `object` (None and other falsy values are kept).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving the decorated callable a fixed __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(callable):
        if not hasattr(callable, "__qualname__"):
            raise TypeError("rename() must decorate a function or a class")
        callable.__name__ = callable.__qualname__ = name
        return callable

    return decorator


def _freeze(object):
    # lists come back as tuples, dicts as read-only proxies
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a frozen view of `self._<name>`.

    The view is rebuilt on every access, so it follows later changes of the
    backing field:

        class Options:
            options = mirror("options")   # tuple view of self._options
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
