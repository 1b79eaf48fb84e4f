"""
argscheme tokenizer: flat argument strings -> typed tokens.

Matching order (per argument, first match wins)
1. long option      --name / --name=value   -> LONG(name) [+ VALUE(value, attached)]
2. short cluster    -xyz (2+ characters)    -> SHORT(x), SHORT(y), SHORT(z)
3. single short     -x                      -> SHORT(x)
4. bare value       anything else           -> VALUE(argument)

A cluster never carries a value: "-fvalue" is the shorts f, v, a, l, u, e.
Only a following bare argument can supply a value to a short option.

The tokenizer knows nothing about the schema; whether "-f" is a boolean or a
string option is decided by the binder.
"""
import re
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    VALUE = "value"


class Token(NamedTuple):
    """
    Transient parse unit.

    - kind: TokenKind
    - text: option name (LONG), option character (SHORT) or the value (VALUE)
    - raw: spelling shown in messages ("--foo=bar", "-f" for each cluster member)
    - attached: True only for the value split off "--name=value"
    - index: 1-based position of the originating argument
    """
    kind: TokenKind
    text: str
    raw: str
    attached: bool = False
    index: int = 0


_LONG = re.compile(r"--(?P<name>[^=]+)(?:=(?P<value>.*))?", re.DOTALL)
_CLUSTER = re.compile(r"-(?P<chars>[^\-\s]{2,})")
_SHORT = re.compile(r"-(?P<char>[^\-\s])")


def _long(argument, index):
    if not (match := _LONG.fullmatch(argument)):
        return None
    tokens = [Token(TokenKind.LONG, match["name"], argument, False, index)]
    # '' when the argument ends with '=', None when there is no '=' at all
    if (value := match["value"]) is not None:
        tokens.append(Token(TokenKind.VALUE, value, value, True, index))
    return tokens


def _cluster(argument, index):
    if not (match := _CLUSTER.fullmatch(argument)):
        return None
    return [Token(TokenKind.SHORT, char, "-" + char, False, index) for char in match["chars"]]


def _short(argument, index):
    if not (match := _SHORT.fullmatch(argument)):
        return None
    return [Token(TokenKind.SHORT, match["char"], argument, False, index)]


def _value(argument, index):
    return [Token(TokenKind.VALUE, argument, argument, False, index)]


# Order is significant: see the module docstring.
_MATCHERS = (_long, _cluster, _short, _value)


def tokenize(arguments, /):
    """
    Split raw arguments (program and script path already stripped) into tokens.

    Parameters
    - arguments: Iterable[str]

    Returns
    - tuple[Token, ...] in argument order; cluster members keep their
      left-to-right order and an attached value directly follows its option.

    Raises
    - TypeError when an argument is not a string.
    """
    tokens = []
    for index, argument in enumerate(arguments, start=1):
        if not isinstance(argument, str):
            raise TypeError(f"tokenize() arguments must be strings, not {type(argument).__name__!r}")
        for matcher in _MATCHERS:
            if (matched := matcher(argument, index)) is not None:
                tokens.extend(matched)
                break
    return tuple(tokens)


__all__ = (
    "TokenKind",
    "Token",
    "tokenize",
)
