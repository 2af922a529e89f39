"""
specopts faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings). Codes are grouped by domain so logs and searches stay
  predictable.
- OptionException / OptionWarning: base types that carry message + options and
  know how to render themselves (rich) and how to surface themselves (raise,
  warn, or print and exit).
- trigger(): central entry point to surface any fault with runtime options merged in.
- getdoc(): optional description lookup for a code from the host application.

Error kinds
- RegistrationError: setup-time programmer error (bad register() call). Never
  caught by the parse loop.
- ParseError: runtime user-input error, tagged with a cause (FaultCode):
  • UnrecognizedOptionError: a dash-prefixed token matched no registered option.
  • MissingArgumentError: an option demanding an argument found none.
  • InvalidValueError: a bundle action rejected the value it was given.

Integration
- Options.parse() catches ParseError once at its own boundary and hands it to
  Options.trigger(), which prints the usage and the fault (shell mode) or
  re-raises it to the caller.
"""
import copy
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console()


class FaultCode(IntEnum):
    """
    canonical fault codes used by the option parser (stable identifiers).

    grouping (by high-level domain)
    - registration (1110x)
      • MALFORMED_REGISTRATION
    - parsing (1111x/1112x)
      • PARSE_ERROR, UNRECOGNIZED_OPTION, MISSING_ARGUMENT, INVALID_VALUE
    - warnings (1211x)
      • SHADOWED_OPTION, EMPTY_INLINE_VALUE
    """
    # --- registration errors (11xxx) ---
    MALFORMED_REGISTRATION      = 11101

    # --- parse errors (11xxx) ---
    PARSE_ERROR                 = 11110
    UNRECOGNIZED_OPTION         = 11112
    MISSING_ARGUMENT            = 11117
    INVALID_VALUE               = 11124

    # --- warnings (12xxx) ---
    SHADOWED_OPTION             = 12111
    EMPTY_INLINE_VALUE          = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def getprog(prog=None, /):
    """
    program name shown in fault headers and version output.

    lookup order: the explicit `prog`, then a __prog__ attribute in __main__,
    then the basename of sys.argv[0].
    """
    if prog:
        return prog
    return getattr(__import__("__main__"), "__prog__", None) or os.path.basename(sys.argv[0])


def _render(fault, palette, title):
    """
    shared rich layout for errors and warnings: "[ prog — code | Title ]", message, hint.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    code = fault.options.get("code")
    header = Text.assemble("[ ", text(getprog(fault.options.get("prog")), "prog-name"))
    if code is not None:
        header.append_text(Text.assemble(
            " — ", text(code.normalize() if isinstance(code, FaultCode) else code, "code")
        ))
    if heading := fault.options.get("title"):
        header.append_text(Text.assemble(" | ", text(heading.title(), title)))
    header.append(" ]")
    renders = [header, text(fault.message, "message")]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
    return Group(*renders)


class OptionException(Exception):
    """
    base class of every specopts error.

    attributes
    - message: short, lowercased sentence describing the problem.
    - options: read-only mapping with rendering/surfacing context
      (title, code, hint, token, prog, shell, colorful, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert message is Unset or isinstance(message, str)
        super().__init__(message if message is not Unset else "")
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(OptionException):
    """
    malformed register() call (programmer error, raised during setup).
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "malformed registration",
            "code": FaultCode.MALFORMED_REGISTRATION,
        } | options)


class ParseError(OptionException):
    """
    user-input error found while parsing; `cause` tells which one.

    raised as is (typically from a custom unmatched handler) it reports the
    generic PARSE_ERROR code; subclasses override title and code.
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "parse error",
            "code": FaultCode.PARSE_ERROR,
        } | options)

    @property
    def cause(self):
        return self.options.get("code")


class UnrecognizedOptionError(ParseError):
    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "unrecognized option",
            "code": FaultCode.UNRECOGNIZED_OPTION,
            "hint": "check the spelling against the options listed above",
        } | options)


class MissingArgumentError(ParseError):
    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "missing argument",
            "code": FaultCode.MISSING_ARGUMENT,
            "hint": "pass the value inline (-xVALUE, --name=VALUE) or as the next token",
        } | options)


class InvalidValueError(ParseError):
    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "invalid value",
            "code": FaultCode.INVALID_VALUE,
        } | options)


class OptionWarning(Warning):
    """
    base class of every specopts warning.
    """

    def __init__(self, message=Unset, /, **options):
        assert message is Unset or isinstance(message, str)
        super().__init__(message if message is not Unset else "")
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedOptionWarning(OptionWarning):
    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "shadowed option",
            "code": FaultCode.SHADOWED_OPTION,
            "hint": "the first registration keeps matching; rename or drop the later one",
        } | options)


class EmptyInlineValueWarning(OptionWarning):
    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **{
            "title": "empty inline value",
            "code": FaultCode.EMPTY_INLINE_VALUE,
        } | options)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, errors are printed and the process exits with status 1;
      otherwise errors are raised and warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionException",
    "RegistrationError",
    "ParseError",
    "UnrecognizedOptionError",
    "MissingArgumentError",
    "InvalidValueError",
    "OptionWarning",
    "ShadowedOptionWarning",
    "EmptyInlineValueWarning",
    "trigger",
    "getdoc",
    "getprog",
)
