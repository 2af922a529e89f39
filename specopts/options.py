r"""
specopts option descriptor.

Overview
- Option: immutable record of one registered flag
  • short: "-x" form (or None)
  • long: "--name" form (or None)
  • metavar: placeholder of a required argument (or None); its presence, not
    its text, makes the option consume an argument (see `parametric`)
  • descr: help text (required, non-empty)
  • action: callable invoked when the option is matched (or None for a no-op)

- Calling an Option runs its action:
  • parametric options forward exactly one argument string
  • presence-only options are called with no argument

Validation highlights
- At least one of short/long is required.
- short must start with a single "-", long with "--".
- descr must be a non-empty string after trimming.
- action must be callable when provided.

Quick example:
    >>> from specopts.options import Option
    >>> include = Option("-I", "--include", "DIR", "Add DIR to the load path", print)
    >>> include.parametric
    True
    >>> include("lib")
    lib
"""
import functools
import operator

from .faults import RegistrationError
from .utils import *


class Option:
    """
    Immutable descriptor of one command-line option.

    The names listed in __introspectable__ are exposed as read-only properties
    mirroring private backing fields; assigning to them (or to any new
    attribute) raises AttributeError.
    """

    __introspectable__ = (
        "short",
        "long",
        "metavar",
        "descr",
        "action",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    short = mirror("short")
    long = mirror("long")
    metavar = mirror("metavar")
    descr = mirror("descr")
    action = mirror("action")

    def __init__(self, short=None, long=None, metavar=None, descr=Unset, action=None):
        """
        Construct an Option descriptor.

        Parameters
        - short: str | None
          Single-dash form, e.g. "-a".
        - long: str | None
          Double-dash form, e.g. "--alpha".
        - metavar: str | None
          Argument placeholder shown in help; marks the option as argument-consuming.
        - descr: str
          Human-readable description. Required.
        - action: Callable | None
          Invoked on match (with the argument if parametric).

        Raises
        - RegistrationError: when the invariants above are violated.
        """
        if short is None and long is None:
            raise RegistrationError("option requires a short or a long form")
        if short is not None and not (isinstance(short, str) and short.startswith("-") and not short.startswith("--")):
            raise RegistrationError("option short form must start with a single '-' (got %r)" % (short,))
        if long is not None and not (isinstance(long, str) and long.startswith("--")):
            raise RegistrationError("option long form must start with '--' (got %r)" % (long,))
        if metavar is not None and not isinstance(metavar, str):
            raise RegistrationError("option 'metavar' must be a string")
        if not isinstance(descr, str) or not descr.strip():
            raise RegistrationError("option requires a non-empty description")
        if action is not None and not callable(action):
            raise RegistrationError("option 'action' must be callable")

        object.__setattr__(self, "_short", short)
        object.__setattr__(self, "_long", long)
        object.__setattr__(self, "_metavar", metavar)
        object.__setattr__(self, "_descr", descr)
        object.__setattr__(self, "_action", action)

    def __setattr__(self, name, value):
        raise AttributeError("option descriptors are immutable")

    def __delattr__(self, name):
        raise AttributeError("option descriptors are immutable")

    @property
    def parametric(self):
        """
        True when the option consumes an argument (a metavar was registered).
        """
        return self._metavar is not None

    @property
    def names(self):
        """
        The registered forms, short first.
        """
        return tuple(name for name in (self._short, self._long) if name is not None)

    def match(self, token):
        """
        Exact comparison of `token` against the short and long forms.
        """
        return token is not None and token in self.names

    def __call__(self, *arguments):
        # A missing action is a legal no-op.
        if self._action is None:
            return None
        return self._action(*arguments)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"option({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "Option",
)
