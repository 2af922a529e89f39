"""
Option bundles for the spec runner.

RunnerOptions is an Options registry that also knows the groups of options
shared by the runner scripts. Each bundle method only registers options (and
their documentation) whose actions write into the RunConfig held in `config`;
runners compose the bundles they need:

    options = RunnerOptions("usage: mspec-run [options] (FILE|DIRECTORY)...")
    options.targets()
    options.formatters()
    options.filters()
    options.help()
    files = options.parse()
    run(files, options.config)
"""
import logging
import re

from .config import *
from .faults import InvalidValueError
from .hooks import Event, FileWidthHook, MarkerHook
from .parser import Options
from .utils import *

logger = logging.getLogger(__name__)


class RunnerOptions(Options):
    """
    Options registry with the runner option bundles; `config` is a RunConfig.
    """

    def __init__(self, banner="", width=30, config=Unset, **options):
        config = coalesce(config, RunConfig())
        if not isinstance(config, RunConfig):
            raise TypeError("RunnerOptions() 'config' must be a RunConfig")
        super().__init__(banner, width, config, **options)

    def configure(self, action=None):
        self.register("-B", "--config", "FILE",
                      "Load FILE containing configuration options",
                      action=action or self.config.configs.append)

    def name(self):
        def action(name):
            self.config.name = name

        self.register("-n", "--name", "RUBY_NAME",
                      "Set the value of RUBY_NAME (used to determine the implementation)",
                      action=action)

    def targets(self):
        def target(code):
            self.config.target = TARGETS.get(code, code)
            logger.debug("target %r resolved to %r", code, self.config.target)

        self.register("-t", "--target", "TARGET",
                      "Implementation to run the specs, where TARGET is:",
                      action=target)

        self.doc("")
        self.doc("     r or ruby         invokes ruby in PATH")
        self.doc("     r19, ruby19       invokes ruby1.9 in PATH")
        self.doc("     x or rubinius     invokes ./bin/rbx")
        self.doc("     x18 or rubinius18 invokes ./bin/rbx -X18")
        self.doc("     x19 or rubinius19 invokes ./bin/rbx -X19")
        self.doc("     x20 or rubinius20 invokes ./bin/rbx -X20")
        self.doc("     X or rbx          invokes rbx in PATH")
        self.doc("     j or jruby        invokes jruby in PATH")
        self.doc("     i or ironruby     invokes ir in PATH")
        self.doc("     m or maglev       invokes maglev-ruby in PATH")
        self.doc("     t or topaz        invokes topaz in PATH")
        self.doc("     full path to EXE  invokes EXE directly\n")

        self.register("-T", "--target-opt", "OPT",
                      "Pass OPT as a flag to the target implementation",
                      action=self.config.flags.append)
        self.register("-I", "--include", "DIR",
                      "Pass DIR through as the -I option to the target",
                      action=lambda dir: self.config.includes.append("-I" + dir))
        self.register("-r", "--require", "LIBRARY",
                      "Pass LIBRARY through as the -r option to the target",
                      action=lambda library: self.config.requires.append("-r" + library))

    def formatters(self):
        def formatter(code):
            if (tag := Formatter.lookup(code)) is None:
                raise InvalidValueError(
                    "unknown format %r" % code,
                    token=code,
                    hint="pick one of the FORMAT codes listed above",
                )
            self.config.formatter = tag

        self.register("-f", "--format", "FORMAT",
                      "Formatter for reporting, where FORMAT is one of:",
                      action=formatter)

        self.doc("")
        self.doc("       s, spec, specdoc         SpecdocFormatter")
        self.doc("       h, html,                 HtmlFormatter")
        self.doc("       d, dot, dotted           DottedFormatter")
        self.doc("       b, describe              DescribeFormatter")
        self.doc("       f, file                  FileFormatter")
        self.doc("       u, unit, unitdiff        UnitdiffFormatter")
        self.doc("       m, summary               SummaryFormatter")
        self.doc("       a, *, spin               SpinnerFormatter")
        self.doc("       t, method                MethodFormatter")
        self.doc("       y, yaml                  YamlFormatter")
        self.doc("       p, profile               ProfileFormatter")
        self.doc("       j, junit                 JUnitFormatter\n")

        def output(file):
            self.config.output = file

        self.register("-o", "--output", "FILE",
                      "Write formatter output to FILE",
                      action=output)

    @staticmethod
    def _compile(pattern):
        try:
            return re.compile(pattern)
        except re.error as error:
            raise InvalidValueError(
                "invalid pattern %r (%s)" % (pattern, error),
                token=pattern,
                hint="use a valid regular expression",
            ) from None

    def filters(self):
        self.register("-e", "--example", "STR",
                      "Run examples with descriptions matching STR",
                      action=self.config.descriptions.append)
        self.register("-E", "--exclude", "STR",
                      "Exclude examples with descriptions matching STR",
                      action=self.config.xdescriptions.append)
        self.register("-p", "--pattern", "PATTERN",
                      "Run examples with descriptions matching PATTERN",
                      action=lambda pattern: self.config.patterns.append(self._compile(pattern)))
        self.register("-P", "--excl-pattern", "PATTERN",
                      "Exclude examples with descriptions matching PATTERN",
                      action=lambda pattern: self.config.xpatterns.append(self._compile(pattern)))
        self.register("-g", "--tag", "TAG",
                      "Run examples with descriptions matching ones tagged with TAG",
                      action=self.config.tags.append)
        self.register("-G", "--excl-tag", "TAG",
                      "Exclude examples with descriptions matching ones tagged with TAG",
                      action=self.config.xtags.append)
        self.register("-w", "--profile", "FILE",
                      "Run examples for methods listed in the profile FILE",
                      action=self.config.profiles.append)
        self.register("-W", "--excl-profile", "FILE",
                      "Exclude examples for methods listed in the profile FILE",
                      action=self.config.xprofiles.append)

    def chdir(self):
        def chdir(dir):
            self.config.chdir = dir

        self.register("-C", "--chdir", "DIR",
                      "Change the working directory to DIR before running specs",
                      action=chdir)

    def prefix(self):
        def prefix(str):
            self.config.prefix = str

        self.register("--prefix", "STR",
                      "Prepend STR when resolving spec file names",
                      action=prefix)

    def pretend(self):
        self.register("-Z", "--dry-run",
                      "Invoke formatters and other actions, but don't execute the specs",
                      action=lambda: self.config.modes.add(Mode.PRETEND))

    def background(self):
        self.register("--background",
                      "Enable guard for specs that may hang in background processes",
                      action=lambda: self.config.modes.add(Mode.BACKGROUND))

    def unguarded(self):
        self.register("--unguarded", "Turn off all guards",
                      action=lambda: self.config.modes.add(Mode.UNGUARDED))
        self.register("--no-ruby_bug", "Turn off the ruby_bug guard",
                      action=lambda: self.config.modes.add(Mode.NO_RUBY_BUG))

    def randomize(self):
        def randomize():
            self.config.randomize = True

        self.register("-H", "--random",
                      "Randomize the list of spec files",
                      action=randomize)

    def repeat(self):
        def repeat(number):
            try:
                self.config.repeat = int(number)
            except ValueError:
                raise InvalidValueError(
                    "repeat count %r is not a number" % number,
                    token=number,
                    hint="pass a whole number (for example: -R 5)",
                ) from None

        self.register("-R", "--repeat", "NUMBER",
                      "Repeatedly run an example NUMBER times",
                      action=repeat)

    def verbose(self):
        def verbose():
            hook = FileWidthHook()
            self.config.hooks.register(Event.START, hook)
            self.config.hooks.register(Event.LOAD, hook)

        self.register("-V", "--verbose", "Output the name of each file processed",
                      action=verbose)
        self.register("-m", "--marker", "MARKER",
                      "Output MARKER for each file processed",
                      action=lambda marker: self.config.hooks.register(Event.LOAD, MarkerHook(marker)))

    def interrupt(self):
        def interrupt():
            self.config.abort = False

        self.register("--int-spec", "Control-C interupts the current spec only",
                      action=interrupt)

    def verify(self):
        def report_on(guard):
            self.config.modes.add(Mode.REPORT_ON)
            self.config.guards.append(guard)

        self.register("--report-on", "GUARD", "Report specs guarded by GUARD",
                      action=report_on)
        self.register("-O", "--report", "Report guarded specs",
                      action=lambda: self.config.modes.add(Mode.REPORT))
        self.register("-Y", "--verify",
                      "Verify that guarded specs pass and fail as expected",
                      action=lambda: self.config.modes.add(Mode.VERIFY))

    def action_filters(self):
        self.register("-K", "--action-tag", "TAG",
                      "Spec descriptions marked with TAG will trigger the specified action",
                      action=self.config.atags.append)
        self.register("-S", "--action-string", "STR",
                      "Spec descriptions matching STR will trigger the specified action",
                      action=self.config.astrings.append)

    def actions(self):
        def debugger():
            self.config.debugger = True

        def gdb():
            self.config.gdb = True

        self.register("--spec-debug",
                      "Invoke the debugger when a spec description matches (see -K, -S)",
                      action=debugger)
        self.register("--spec-gdb",
                      "Invoke Gdb when a spec description matches (see -K, -S)",
                      action=gdb)

    def debug(self):
        def debug():
            self.config.debug = True

        self.register("-d", "--debug",
                      "Set debugging flag for more verbose output",
                      action=debug)


__all__ = (
    "RunnerOptions",
)
