"""
specopts registry and parse loop.

What this module provides
- Options: an ordered registry of Option descriptors that
  • registers flags from loose tokens ("-a", "--alpha", "ARG", "description"),
  • documents every registration as one aligned help line,
  • matches tokens by exact short/long form (first registration wins),
  • parses an argv-like token list, invoking actions left to right and
    collecting everything else as positionals.

Token grammar handled by parse()
- "--name" and "--name=value"           long options (split at the first "=")
- "-a"                                   short option
- "-Ivalue"                              short option with an attached argument
- "-abc"                                 cluster of presence-only short options
- "-abIvalue"                            cluster ended by an argument-consuming option
- anything else ("", "-", "file.rb")     routed to the unmatched handler

Errors
- RegistrationError propagates straight out of register() (setup time).
- ParseError is caught exactly once, at the parse() boundary, and surfaced
  through Options.trigger(): in shell mode the usage and the fault are printed
  and the process exits with status 1; otherwise the fault is re-raised.

Quick start
    from specopts import Options

    options = Options("usage: mspec [options] (FILE|DIRECTORY)...")
    options.register("-a", "--all", "Run every example", action=lambda: ...)
    options.register("-I", "--include", "DIR", "Add DIR to the load path", action=print)
    options.help()

    files = options.parse()  # sys.argv[1:]
"""
import logging
import sys
from collections import defaultdict, deque
from collections.abc import Iterable

from rich.console import Console, Group
from rich.text import Text

from .faults import *
from .options import Option
from .utils import *

logger = logging.getLogger(__name__)

console = Console()


class Options:
    """
    Composable registry of command-line options.

    Lifecycle
    - construct once per invocation,
    - populate with register()/doc()/help()/version() (and bundles in subclasses),
    - call parse() once; positionals are reset at the start of every parse.

    Configuration
    - banner: first line(s) of the rendered usage.
    - width: column at which descriptions start in documentation lines.
    - config: opaque object handed to subclasses' actions (never read here).
    - shell: when True, parse errors print usage + fault and exit(1);
      when False, they are raised to the caller.
    - colorful: enable rich styling for usage and faults.
    - prog: program name used by version() and fault headers.
    """

    options = mirror("options")
    positionals = mirror("positionals")

    def __init__(self, banner="", width=30, config=None, *, shell=True, colorful=False, prog=Unset):
        if not isinstance(banner, str):
            raise TypeError("Options() 'banner' must be a string")
        if not isinstance(width, int) or width < 1:
            raise TypeError("Options() 'width' must be a positive integer")

        self.banner = banner
        self.width = width
        self.config = config
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.prog = coalesce(prog, None)

        self._options = []
        self._docs = []
        self._positionals = []
        self._unmatched = self._default

    @property
    def program(self):
        """
        Program name: explicit prog, then __main__.__prog__, then basename of argv[0].
        """
        return getprog(self.prog)

    def collect(self, token):
        """
        Append `token` to the positionals of the running parse.

        Custom unmatched handlers use this to keep tokens, e.g.
        options.unmatched(options.collect) accepts everything, dashes included.
        """
        self._positionals.append(token)

    def _default(self, token):
        """
        Default unmatched handler: dash-prefixed tokens are errors, the rest are positionals.
        """
        if token.startswith("-"):
            raise UnrecognizedOptionError("unrecognized option %r" % token, token=token)
        self.collect(token)

    # --- registration ----------------------------------------------------

    def register(self, *tokens, action=None):
        """
        Register an option from loose tokens; the last token is the description.

        Accepted shapes
            register("-a", "description")
            register("-a", "--abcd", "description")
            register("-a", "ARG", "description")
            register("--abcd", "ARG", "description")
            register("-a", "--abcd", "ARG", "description")

        Classification of the non-description tokens: "--x" is the long form,
        "-x" the short form, anything else the argument placeholder.

        Returns
        - Option: the registered descriptor.

        Raises
        - RegistrationError: fewer than two tokens, non-string tokens, or no
          short/long form among them.
        """
        if len(tokens) < 2:
            raise RegistrationError("option and description are required")
        if not all(isinstance(token, str) for token in tokens):
            raise RegistrationError("option tokens and description must be strings")

        *forms, descr = tokens
        short = long = metavar = None
        for token in forms:
            if token.startswith("--"):
                long = token
            elif token.startswith("-"):
                short = token
            else:
                metavar = token

        return self.add(short, long, metavar, descr, action)

    on = register

    def add(self, short, long, metavar, descr, action=None):
        """
        Append a descriptor and its documentation line.

        Duplicated forms are accepted (the first registration keeps matching)
        but reported with a ShadowedOptionWarning.
        """
        option = Option(short, long, metavar, descr, action)

        for name in option.names:
            if self.match(name) is not None:
                trigger(ShadowedOptionWarning(
                    "option %r is already registered and shadows this registration" % name,
                    token=name,
                ), prog=self.program, shell=self.shell, colorful=self.colorful)

        self._docs.append(self._document(option))
        self._options.append(option)
        logger.debug("registered %r", option)
        return option

    def doc(self, text):
        """
        Add a free-form documentation line, placed after what is already registered.
        """
        if not isinstance(text, str | Text):
            raise TypeError("doc() argument must be a string")
        self._docs.append(text if isinstance(text, Text) else Text(text))

    def unmatched(self, handler, /):
        """
        Replace the unmatched-token handler.

        The handler receives every token that is not consumed as an option or
        an option argument, in order. It may raise ParseError to reject tokens.
        Returns the handler so this can be used as a decorator.
        """
        if not callable(handler):
            raise TypeError("unmatched() argument must be callable")
        self._unmatched = handler
        return handler

    def help(self, action=None):
        """
        Register -h/--help. The default action prints the usage and exits with status 0.
        """
        return self.register("-h", "--help", "Show this message", action=action or self._helper)

    def version(self, version, action=None):
        """
        Register -v/--version. The default action prints "<prog> <version>" and exits with status 0.
        """
        if not isinstance(version, str):
            raise TypeError("version() argument must be a string")

        @rename("version")
        def versioner():
            console.print(Text("%s %s" % (self.program, version)), soft_wrap=True)
            sys.exit(0)

        return self.register("-v", "--version", "Show version", action=action or versioner)

    # --- matching and documentation --------------------------------------

    def match(self, token):
        """
        First registered option whose short or long form equals `token`, else None.
        """
        for option in self._options:
            if option.match(token):
                return option
        return None

    def _document(self, option):
        """
        Build the aligned help line for `option` as styled Text.

        Layout: 3 spaces, short (or 2 spaces), ", " between short and long
        (2 spaces when there is only a long form), long, a space, metavar;
        padded to width - 1, then a space and the description.
        """
        styles = self._styles()

        line = Text("   ")
        line.append(option.short or "  ", styles["short-name"] if option.short else "")
        if option.long:
            line.append(", " if option.short else "  ")
            line.append(option.long, styles["long-name"])
        line.append(" ")
        line.append(option.metavar or "", styles["metavar"])
        line.pad_right(max(0, self.width - 1 - len(line)))
        line.append(" ")
        line.append(option.descr, styles["description"])
        return line

    def _styles(self):
        return defaultdict(str, {
            "banner": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "short-name": "bold #22C55E",  # GREEN for short forms
            "long-name": "bold #00E6FF",  # CYAN for long forms
            "metavar": "bold #FFD600",  # AMBER for parameters
            "description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

    def render(self):
        """
        Plain usage text: banner, blank line, every documentation line, trailing newline.
        """
        return self.banner + "\n\n" + "\n".join(line.plain for line in self._docs) + "\n"

    def __str__(self):
        return self.render()

    def __rich__(self):
        if not self.colorful:
            return Text(self.render().rstrip("\n"))
        banner = Text(self.banner, self._styles()["banner"])
        return Group(banner, Text(""), *self._docs)

    def _helper(self):
        console.print(self, soft_wrap=True)
        sys.exit(0)

    # --- parsing ----------------------------------------------------------

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault with this registry's runtime options.

        In shell mode the rendered usage is printed first, then the fault, then
        the process exits with status 1. Outside shell mode the fault is raised.
        """
        if self.shell:
            console.print(self, soft_wrap=True)
        trigger(fault, **options, prog=self.program, shell=self.shell, colorful=self.colorful)

    @staticmethod
    def split(entry, count):
        """
        Split `entry` after `count` characters into (opt, arg, rest).

        `arg` is None when `rest` is empty, otherwise it equals `rest`.
        """
        opt, rest = entry[:count], entry[count:]
        return opt, rest or None, rest

    def process(self, tokens, entry, opt, arg):
        """
        Handle one candidate option.

        - unmatched: `entry` goes to the unmatched handler; returns None and
          the caller stops processing the entry (inside a cluster, the
          remaining characters are dropped even when the handler accepts it).
        - parametric: uses `arg`, or pulls the next token (MissingArgumentError
          when none is left), then calls the action with it.
        - presence-only: calls the action with no argument.

        Returns the matched Option (or None).
        """
        if (option := self.match(opt)) is None:
            logger.debug("unmatched token %r", entry)
            self._unmatched(entry)
            return None

        if option.parametric:
            if arg is None:
                if not tokens:
                    raise MissingArgumentError("no argument provided for %r" % opt, token=opt)
                arg = tokens.popleft()
            logger.debug("matched %r with argument %r", opt, arg)
            option(arg)
        else:
            logger.debug("matched %r", opt)
            option()
        return option

    def parse(self, tokens=Unset):
        """
        Parse an argv-like token sequence.

        Parameters
        - tokens: Unset | Iterable[str]
          • Unset: read sys.argv[1:].
          • Iterable[str]: the tokens to parse (copied; never mutated).

        Returns
        - list[str]: the positionals, in order.

        Behavior
        - actions run exactly once per occurrence, left to right through the
          tokens and, inside a short cluster, left to right through the cluster.
        - the first ParseError stops parsing and is surfaced through trigger().
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        tokens = deque(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        self._positionals = []
        try:
            while tokens:
                entry = tokens.popleft()

                # not an option: empty, no leading dash, or a bare "-"
                if not entry.startswith("-") or len(entry) < 2:
                    self._unmatched(entry)
                    continue

                # long option, optionally with an inline "=value"
                if entry.startswith("--"):
                    opt, equals, arg = entry.partition("=")
                    if not equals:
                        arg = None
                    elif not arg and (option := self.match(opt)) is not None and option.parametric:
                        trigger(EmptyInlineValueWarning(
                            "empty inline value for option %r" % opt,
                            token=entry,
                            hint="add a value after '=' (for example: %s=<value>)" % opt,
                        ), prog=self.program, shell=self.shell, colorful=self.colorful)
                    self.process(tokens, entry, opt, arg)
                    continue

                # short option: either "-x", "-xVALUE" or a cluster "-xyz"
                opt, arg, rest = self.split(entry, 2)
                option = self.process(tokens, entry, opt, arg)
                if option is None or option.parametric:
                    continue

                while rest:
                    opt, arg, rest = self.split(rest, 1)
                    opt = "-" + opt
                    option = self.process(tokens, opt, opt, arg)
                    if option is None or option.parametric:
                        break
        except ParseError as fault:
            self.trigger(fault)

        return list(self._positionals)

    def __repr__(self):
        return "%s(banner=%r, options=%d)" % (type(self).__name__, self.banner, len(self._options))


__all__ = (
    "Options",
)
