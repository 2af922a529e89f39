"""
RunnerOptions bundle behavioral tests.

Scope
- Validate that each bundle registers its options and that their actions
  record the parsed values into the RunConfig.
- Validate value rejection (unknown format, bad pattern, bad repeat count).
- Validate that all bundles compose without shadowing each other.

Conventions
- Test method names follow CamelCase per project convention.
- Registries are built with shell=False so faults are raised, not printed.
"""

from __future__ import annotations

import io
import re
import unittest
import warnings
from contextlib import redirect_stdout
from unittest import TestCase

from specopts import (
    Event,
    FaultCode,
    FileWidthHook,
    Formatter,
    InvalidValueError,
    MarkerHook,
    Mode,
    RunConfig,
    RunnerOptions,
)


BUNDLES = (
    "configure", "name", "targets", "formatters", "filters", "chdir", "prefix",
    "pretend", "background", "unguarded", "randomize", "repeat", "verbose",
    "interrupt", "verify", "action_filters", "actions", "debug",
)


class RunnerTestCase(TestCase):

    def setUp(self):
        self.options = RunnerOptions("usage: mspec [options]", shell=False, prog="mspec")
        self.config = self.options.config

    def bundle(self, *names):
        for name in names:
            getattr(self.options, name)()


class TestConstruction(RunnerTestCase):

    def testDefaultConfig(self):
        self.assertIsInstance(self.config, RunConfig)
        self.assertTrue(self.config.abort)
        self.assertEqual(self.config.repeat, 1)
        self.assertEqual(len(self.config.hooks), 0)

    def testExplicitConfig(self):
        config = RunConfig(name="rbx")
        self.assertIs(RunnerOptions(config=config).config, config)

    def testRejectsForeignConfig(self):
        with self.assertRaises(TypeError):
            RunnerOptions(config={})

    def testAllBundlesComposeWithoutShadowing(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            self.bundle(*BUNDLES)
            self.options.help()
            self.options.version("1.0")

        shorts = [option.short for option in self.options.options if option.short]
        longs = [option.long for option in self.options.options if option.long]
        self.assertEqual(len(shorts), len(set(shorts)))
        self.assertEqual(len(longs), len(set(longs)))


class TestTargets(RunnerTestCase):

    def setUp(self):
        super().setUp()
        self.bundle("targets")

    def testKnownCode(self):
        self.options.parse(["-t", "x19"])
        self.assertEqual(self.config.target, "./bin/rbx -X19")

    def testLongFormWithInlineValue(self):
        self.options.parse(["--target=jruby"])
        self.assertEqual(self.config.target, "jruby")

    def testUnknownCodeIsPassedThrough(self):
        self.options.parse(["-t/opt/ruby/bin/ruby"])
        self.assertEqual(self.config.target, "/opt/ruby/bin/ruby")

    def testFlagsIncludesAndRequires(self):
        self.options.parse(["-T", "-w", "-Ilib", "-I", "spec", "-r", "mspec"])
        self.assertEqual(self.config.flags, ["-w"])
        self.assertEqual(self.config.includes, ["-Ilib", "-Ispec"])
        self.assertEqual(self.config.requires, ["-rmspec"])

    def testDocumentsTargetTable(self):
        usage = self.options.render()
        self.assertIn("     x19 or rubinius19 invokes ./bin/rbx -X19", usage)
        self.assertIn("     full path to EXE  invokes EXE directly\n", usage)


class TestFormatters(RunnerTestCase):

    def setUp(self):
        super().setUp()
        self.bundle("formatters")

    def testShortCodes(self):
        for code, tag in (("s", Formatter.SPECDOC), ("*", Formatter.SPINNER), ("j", Formatter.JUNIT)):
            self.options.parse(["-f", code])
            self.assertIs(self.config.formatter, tag)

    def testLongCode(self):
        self.options.parse(["--format=unitdiff"])
        self.assertIs(self.config.formatter, Formatter.UNITDIFF)

    def testLookupUnknown(self):
        self.assertIsNone(Formatter.lookup("nope"))

    def testUnknownFormatIsRejected(self):
        with self.assertRaises(InvalidValueError) as context:
            self.options.parse(["-f", "nope"])
        self.assertEqual(context.exception.cause, FaultCode.INVALID_VALUE)
        self.assertIsNone(self.config.formatter)

    def testUnknownFormatExitsInShellMode(self):
        options = RunnerOptions("usage: mspec [options]", prog="mspec")
        options.formatters()
        buffer = io.StringIO()
        with redirect_stdout(buffer), self.assertRaises(SystemExit) as context:
            options.parse(["-f", "nope"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unknown format 'nope'", buffer.getvalue())

    def testOutput(self):
        self.options.parse(["-o", "report.txt"])
        self.assertEqual(self.config.output, "report.txt")


class TestFilters(RunnerTestCase):

    def setUp(self):
        super().setUp()
        self.bundle("filters")

    def testDescriptions(self):
        self.options.parse(["-e", "Array#pack", "-E", "flaky", "-e", "String"])
        self.assertEqual(self.config.descriptions, ["Array#pack", "String"])
        self.assertEqual(self.config.xdescriptions, ["flaky"])

    def testPatternsAreCompiled(self):
        self.options.parse(["-p", "^Array", "--excl-pattern=slow$"])
        self.assertEqual(self.config.patterns, [re.compile("^Array")])
        self.assertEqual(self.config.xpatterns, [re.compile("slow$")])

    def testBadPatternIsRejected(self):
        with self.assertRaises(InvalidValueError):
            self.options.parse(["-p", "("])

    def testTagsAndProfiles(self):
        self.options.parse(["-g", "fails", "-G", "unstable", "-w", "a.yml", "-W", "b.yml"])
        self.assertEqual(self.config.tags, ["fails"])
        self.assertEqual(self.config.xtags, ["unstable"])
        self.assertEqual(self.config.profiles, ["a.yml"])
        self.assertEqual(self.config.xprofiles, ["b.yml"])


class TestModes(RunnerTestCase):

    def setUp(self):
        super().setUp()
        self.bundle("pretend", "background", "unguarded", "randomize", "repeat", "verify", "debug")

    def testPresenceModes(self):
        self.options.parse(["-Z", "--background", "--unguarded", "--no-ruby_bug", "-O", "-Y"])
        self.assertEqual(self.config.modes, {
            Mode.PRETEND, Mode.BACKGROUND, Mode.UNGUARDED, Mode.NO_RUBY_BUG, Mode.REPORT, Mode.VERIFY,
        })

    def testCluster(self):
        self.options.parse(["-ZHd"])
        self.assertIn(Mode.PRETEND, self.config.modes)
        self.assertTrue(self.config.randomize)
        self.assertTrue(self.config.debug)

    def testClusterEndedByRepeat(self):
        self.assertEqual(self.options.parse(["-HR3", "spec"]), ["spec"])
        self.assertTrue(self.config.randomize)
        self.assertEqual(self.config.repeat, 3)

    def testBadRepeat(self):
        with self.assertRaises(InvalidValueError):
            self.options.parse(["-R", "often"])
        self.assertEqual(self.config.repeat, 1)

    def testReportOn(self):
        self.options.parse(["--report-on", "ruby_bug", "--report-on=platform_is"])
        self.assertIn(Mode.REPORT_ON, self.config.modes)
        self.assertEqual(self.config.guards, ["ruby_bug", "platform_is"])


class TestMiscellaneous(RunnerTestCase):

    def testConfigureDefault(self):
        self.bundle("configure")
        self.options.parse(["-B", "default.mspec"])
        self.assertEqual(self.config.configs, ["default.mspec"])

    def testConfigureCustomAction(self):
        loaded = []
        self.options.configure(loaded.append)
        self.options.parse(["--config", "ci.mspec"])
        self.assertEqual(loaded, ["ci.mspec"])
        self.assertEqual(self.config.configs, [])

    def testName(self):
        self.bundle("name")
        self.options.parse(["-n", "rbx"])
        self.assertEqual(self.config.name, "rbx")

    def testChdirAndPrefix(self):
        self.bundle("chdir", "prefix")
        self.options.parse(["-C", "/tmp/specs", "--prefix", "core/"])
        self.assertEqual(self.config.chdir, "/tmp/specs")
        self.assertEqual(self.config.prefix, "core/")

    def testInterrupt(self):
        self.bundle("interrupt")
        self.options.parse(["--int-spec"])
        self.assertFalse(self.config.abort)

    def testActionFiltersAndActions(self):
        self.bundle("action_filters", "actions")
        self.options.parse(["-K", "debug", "-S", "Array", "--spec-debug", "--spec-gdb"])
        self.assertEqual(self.config.atags, ["debug"])
        self.assertEqual(self.config.astrings, ["Array"])
        self.assertTrue(self.config.debugger)
        self.assertTrue(self.config.gdb)


class TestVerbose(RunnerTestCase):

    def setUp(self):
        super().setUp()
        self.bundle("verbose")

    def testVerboseRegistersOneHookForStartAndLoad(self):
        self.options.parse(["-V"])
        hooks = self.config.hooks
        self.assertEqual(len(hooks[Event.START]), 1)
        self.assertIs(hooks[Event.START][0], hooks[Event.LOAD][0])
        self.assertIsInstance(hooks[Event.LOAD][0], FileWidthHook)

    def testMarker(self):
        self.options.parse(["-m", "."])
        hooks = self.config.hooks
        self.assertEqual(hooks[Event.START], ())
        self.assertIsInstance(hooks[Event.LOAD][0], MarkerHook)

        buffer = io.StringIO()
        with redirect_stdout(buffer):
            hooks.load("a_spec.rb")
        self.assertEqual(buffer.getvalue(), ".")


if __name__ == "__main__":
    unittest.main()
