"""
Usage and version rendering tests.

Scope
- Usage line (program basename, [options], <positional> slots).
- Options table alignment and descriptions.
- Version text with and without a version string.
- Colorful rendering carries the same plain text.
"""
import re
import unittest
from unittest import TestCase

from rich.text import Text

from argscheme import *


class TestUsage(TestCase):

    def testIncludesAllOptions(self):
        usage = create_parser({"options": {"foo": {}, "bar": {}}}).usage()
        self.assertIn("--foo", usage)
        self.assertIn("--bar", usage)

    def testDescriptionNearOption(self):
        usage = create_parser({"options": {"foo": {"description": "foodescription"}}}).usage()
        self.assertRegex(usage, r"--foo\s+foodescription")

    def testStartsWithScriptBasename(self):
        usage = create_parser({}).usage("/foo/bar/testscript1")
        self.assertTrue(usage.startswith("Usage: testscript1 [options]"))

    def testIncludesPositional(self):
        usage = create_parser({"positional": ["foo", "bar"]}).usage()
        self.assertRegex(usage, re.escape("[options] <foo> <bar>"))

    def testExactLayout(self):
        parser = create_parser({
            "info": "Greets people",
            "options": {
                "name": {"type": "string", "description": "who to greet"},
                "loud": {},
            },
            "positional": ["greeting"],
            "prog": "greet",
        })
        self.assertEqual(parser.usage(), "\n".join([
            "Greets people",
            "",
            "Usage: greet [options] <greeting>",
            "",
            "Options:",
            "  -n, --name  who to greet",
            "  -l, --loud",
            "  -h, --help  show this help message and exit",
        ]))

    def testOptionWithoutShortIsAligned(self):
        parser = create_parser({"options": {"foo": {}, "far": {"description": "x"}}, "prog": "tool"})
        lines = parser.usage().splitlines()
        self.assertIn("  -f, --foo", lines)
        self.assertIn("      --far   x", lines)
        self.assertIn("  -h, --help  show this help message and exit", lines)

    def testVersionOptionListed(self):
        usage = create_parser({"version": "1.0.0"}).usage()
        self.assertIn("  -v, --version  show version information and exit", usage)

    def testColorfulRenderingHasSamePlainText(self):
        parser = create_parser({"info": "Info", "options": {"foo": {"description": "bar"}}, "positional": ["x"]})
        rendered = parser.render_usage(colorful=True)
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, parser.usage())
        self.assertTrue(rendered.spans)
        self.assertFalse(parser.render_usage().spans)

    def testRenderUsageFunction(self):
        schema = build_schema({}, ["input"])
        self.assertEqual(
            render_usage(schema, "/usr/bin/tool").plain,
            "Usage: tool [options] <input>\n\nOptions:\n  -h, --help  show this help message and exit",
        )


class TestVersion(TestCase):

    def testProgAndVersion(self):
        self.assertEqual(create_parser({"version": "1.0.0"}).version("/x/y/tool"), "tool 1.0.0")

    def testProgOnlyWithoutVersion(self):
        self.assertEqual(create_parser({}).version("/x/y/tool"), "tool")

    def testDefaultProg(self):
        parser = create_parser({"version": "2.1", "prog": "app"})
        self.assertEqual(parser.version(), "app 2.1")
        self.assertEqual(render_version("app", "2.1", colorful=True).plain, "app 2.1")


if __name__ == "__main__":
    unittest.main()
