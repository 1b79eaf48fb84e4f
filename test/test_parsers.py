"""
Parser facade tests.

Scope
- create_parser(): definition mapping, keyword overrides, unknown fields.
- Parser construction validation and defaults (prog from sys.argv[0]).
- Parser.parse(): argv validation and the skip prefix.
- A full walk through a realistic definition.
"""
import os.path
import sys
import unittest
from unittest import TestCase

from argscheme import *


DEFINITION = {
    "info": "Demonstrates how to use argscheme",
    "version": "1.0.0",
    "options": {
        "first-name": {"type": "string", "short": "f", "description": "User's first name"},
        "last-name": {"type": "string", "description": "User's last name", "required": True},
        "dog-lover": {"description": "User loves dogs"},
        "cat-lover": {"description": "User loves cats"},
    },
    "positional": ["input-file", "output-file"],
}


class TestCreateParser(TestCase):

    def testDefinitionMapping(self):
        parser = create_parser(DEFINITION)
        self.assertIsInstance(parser, Parser)
        self.assertEqual(parser.info, "Demonstrates how to use argscheme")
        self.assertEqual(parser.schema.version, "1.0.0")
        self.assertEqual([slot.name for slot in parser.schema.positional], ["input-file", "output-file"])

    def testEmptyDefinition(self):
        parser = create_parser()
        self.assertEqual([option.name for option in parser.schema.options], ["help"])

    def testOverridesWin(self):
        parser = create_parser({"version": "1.0.0", "prog": "one"}, version="2.0.0", prog="two")
        self.assertEqual(parser.version(), "two 2.0.0")

    def testUnknownFieldRejected(self):
        with self.assertRaises(UnknownFieldError) as context:
            create_parser({"optoins": {}})
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_FIELD)

    def testDefinitionMustBeMapping(self):
        with self.assertRaises(TypeError):
            create_parser(["options"])

    def testSchemaErrorsPropagate(self):
        with self.assertRaises(DuplicateShortError):
            create_parser({"options": {"foo": {"short": "x"}, "bar": {"short": "x"}}})


class TestParser(TestCase):

    def testProgDefaultsToScriptName(self):
        self.assertEqual(Parser().prog, os.path.basename(sys.argv[0]) or "prog")

    def testInfoValidation(self):
        with self.assertRaises(TypeError):
            Parser(info=1)
        with self.assertRaises(ValueError):
            Parser(info="  ")

    def testProgValidation(self):
        with self.assertRaises(TypeError):
            Parser(prog=1)

    def testParseRejectsString(self):
        with self.assertRaises(TypeError):
            Parser().parse("--help")

    def testParseRejectsNonStringArguments(self):
        with self.assertRaises(TypeError):
            Parser().parse(["python", "script.py", 1])

    def testSkipPrefix(self):
        parser = Parser(positional=["first"])
        self.assertEqual(parser.parse(["value"], skip=0).values, {"first": "value"})
        self.assertEqual(parser.parse(["python", "script.py", "value"]).values, {"first": "value"})
        self.assertEqual(parser.parse(["python"]).values, {})

    def testNegativeSkipRejected(self):
        with self.assertRaises(ValueError):
            Parser().parse([], skip=-1)

    def testParseAcceptsIterables(self):
        parser = Parser({"foo": {}})
        self.assertTrue(parser.parse(iter(["python", "script.py", "-f"]))["foo"])


class TestExample(TestCase):

    def setUp(self):
        self.parser = create_parser(DEFINITION)

    def testFullInvocation(self):
        result = self.parser.parse([
            "python", "example.py",
            "in.txt", "-f", "Ada", "--last-name=Lovelace", "-d", "out.txt",
        ])
        self.assertEqual(result.errors, [])
        self.assertEqual(result.values, {
            "input-file": "in.txt",
            "output-file": "out.txt",
            "first-name": "Ada",
            "last-name": "Lovelace",
            "dog-lover": True,
            "cat-lover": False,
        })
        self.assertFalse(result.help)
        self.assertFalse(result.version)

    def testAutoShortsOfExample(self):
        self.assertEqual(
            {option.long: option.short for option in self.parser.schema.options},
            {
                "first-name": "f",
                "last-name": "l",
                "dog-lover": "d",
                "cat-lover": "c",
                "help": "h",
                "version": "v",
            },
        )

    def testMissingRequiredLastName(self):
        result = self.parser.parse(["python", "example.py", "-f", "Ada"])
        self.assertEqual(result.errors, ["missing required option '--last-name'"])


if __name__ == "__main__":
    unittest.main()
