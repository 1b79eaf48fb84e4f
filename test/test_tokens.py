"""
Tokenizer tests.

Scope
- Classification order: long, short cluster, single short, bare value.
- Attached values of "--name=value" (including the empty one).
- 1-based argument indices shared by every token of one argument.
"""
import unittest
from unittest import TestCase

from argscheme.tokens import *


LONG, SHORT, VALUE = TokenKind.LONG, TokenKind.SHORT, TokenKind.VALUE


class TestTokenize(TestCase):

    def testEmpty(self):
        self.assertEqual(tokenize([]), ())

    def testLongOption(self):
        self.assertEqual(tokenize(["--foo"]), (Token(LONG, "foo", "--foo", False, 1),))

    def testLongOptionWithAttachedValue(self):
        self.assertEqual(tokenize(["--foo=bar"]), (
            Token(LONG, "foo", "--foo=bar", False, 1),
            Token(VALUE, "bar", "bar", True, 1),
        ))

    def testAttachedValueKeepsFurtherEqualSigns(self):
        self.assertEqual(tokenize(["--foo=a=b"])[1].text, "a=b")

    def testEmptyAttachedValue(self):
        tokens = tokenize(["--foo="])
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[1], Token(VALUE, "", "", True, 1))

    def testSingleShort(self):
        self.assertEqual(tokenize(["-f"]), (Token(SHORT, "f", "-f", False, 1),))

    def testShortClusterExpandsInOrder(self):
        self.assertEqual(tokenize(["-abc"]), (
            Token(SHORT, "a", "-a", False, 1),
            Token(SHORT, "b", "-b", False, 1),
            Token(SHORT, "c", "-c", False, 1),
        ))

    def testClusterNeverCarriesValue(self):
        self.assertEqual([token.text for token in tokenize(["-fvalue"])], list("fvalue"))

    def testNegativeNumberIsShort(self):
        self.assertEqual(tokenize(["-5"]), (Token(SHORT, "5", "-5", False, 1),))

    def testBareValues(self):
        for argument in ("foo", "-", "--", "-ab-c", "--=x", "- a", ""):
            with self.subTest(argument=argument):
                self.assertEqual(tokenize([argument]), (Token(VALUE, argument, argument, False, 1),))

    def testIndicesAreOneBased(self):
        tokens = tokenize(["input", "-ab", "--name=value"])
        self.assertEqual([token.index for token in tokens], [1, 2, 2, 3, 3])
        self.assertEqual([token.kind for token in tokens], [VALUE, SHORT, SHORT, LONG, VALUE])

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["--foo", 1])


if __name__ == "__main__":
    unittest.main()
