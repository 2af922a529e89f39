"""
Run configuration for the spec runner.

RunConfig is the explicit, per-invocation context that runner option actions
write into (instead of process-wide globals). It also groups the fixed lookup
tables used by the target and formatter options:

- TARGETS: short target codes → command used to run the specs.
- Formatter: tag enum of the report formatters; Formatter.lookup(code)
  resolves the short codes accepted by -f/--format.
"""
from dataclasses import dataclass, field
from enum import Enum

from .hooks import Hooks

TARGETS = {
    "r": "ruby",
    "ruby": "ruby",
    "r19": "ruby1.9",
    "ruby19": "ruby1.9",
    "x": "./bin/rbx",
    "rubinius": "./bin/rbx",
    "x18": "./bin/rbx -X18",
    "rubinius18": "./bin/rbx -X18",
    "x19": "./bin/rbx -X19",
    "rubinius19": "./bin/rbx -X19",
    "x20": "./bin/rbx -X20",
    "rubinius20": "./bin/rbx -X20",
    "X": "rbx",
    "rbx": "rbx",
    "j": "jruby",
    "jruby": "jruby",
    "i": "ir",
    "ironruby": "ir",
    "m": "maglev-ruby",
    "maglev": "maglev-ruby",
    "t": "topaz",
    "topaz": "topaz",
}


class Mode(Enum):
    PRETEND = "pretend"
    BACKGROUND = "background"
    UNGUARDED = "unguarded"
    NO_RUBY_BUG = "no_ruby_bug"
    REPORT_ON = "report_on"
    REPORT = "report"
    VERIFY = "verify"


class Formatter(Enum):
    SPECDOC = "specdoc"
    HTML = "html"
    DOTTED = "dotted"
    DESCRIBE = "describe"
    FILE = "file"
    UNITDIFF = "unitdiff"
    SUMMARY = "summary"
    SPINNER = "spinner"
    METHOD = "method"
    YAML = "yaml"
    PROFILE = "profile"
    JUNIT = "junit"

    @classmethod
    def lookup(cls, code):
        """
        Resolve a -f/--format code to its tag, or None when the code is unknown.
        """
        return _FORMATTERS.get(code)


_FORMATTERS = {
    "s": Formatter.SPECDOC,
    "spec": Formatter.SPECDOC,
    "specdoc": Formatter.SPECDOC,
    "h": Formatter.HTML,
    "html": Formatter.HTML,
    "d": Formatter.DOTTED,
    "dot": Formatter.DOTTED,
    "dotted": Formatter.DOTTED,
    "b": Formatter.DESCRIBE,
    "describe": Formatter.DESCRIBE,
    "f": Formatter.FILE,
    "file": Formatter.FILE,
    "u": Formatter.UNITDIFF,
    "unit": Formatter.UNITDIFF,
    "unitdiff": Formatter.UNITDIFF,
    "m": Formatter.SUMMARY,
    "summary": Formatter.SUMMARY,
    "a": Formatter.SPINNER,
    "*": Formatter.SPINNER,
    "spin": Formatter.SPINNER,
    "t": Formatter.METHOD,
    "method": Formatter.METHOD,
    "y": Formatter.YAML,
    "yaml": Formatter.YAML,
    "p": Formatter.PROFILE,
    "profile": Formatter.PROFILE,
    "j": Formatter.JUNIT,
    "junit": Formatter.JUNIT,
}


@dataclass
class RunConfig:
    """
    Settings collected from the command line for one runner invocation.
    """
    # implementation under test
    name: str | None = None
    target: str | None = None
    flags: list = field(default_factory=list)
    includes: list = field(default_factory=list)
    requires: list = field(default_factory=list)

    # reporting
    formatter: Formatter | None = None
    output: str | None = None

    # example selection
    descriptions: list = field(default_factory=list)
    xdescriptions: list = field(default_factory=list)
    patterns: list = field(default_factory=list)
    xpatterns: list = field(default_factory=list)
    tags: list = field(default_factory=list)
    xtags: list = field(default_factory=list)
    profiles: list = field(default_factory=list)
    xprofiles: list = field(default_factory=list)

    # file resolution, recorded for the runner to apply
    configs: list = field(default_factory=list)
    chdir: str | None = None
    prefix: str | None = None

    # run modes
    modes: set = field(default_factory=set)
    guards: list = field(default_factory=list)
    randomize: bool = False
    repeat: int = 1
    abort: bool = True
    debug: bool = False

    # actions on matching examples
    atags: list = field(default_factory=list)
    astrings: list = field(default_factory=list)
    debugger: bool = False
    gdb: bool = False

    hooks: Hooks = field(default_factory=Hooks)


__all__ = (
    "TARGETS",
    "Mode",
    "Formatter",
    "RunConfig",
)
