"""
argscheme parser facade.

A Parser owns one compiled Schema and exposes the three operations a calling
application needs:

- parse(argv)   -> ParseResult   (tokenize + bind; never raises for user input)
- usage(prog)   -> str           (help text)
- version(prog) -> str           ("<prog> <version>" or "<prog>")

Parsers are immutable after construction and can be reused for any number of
parses; each parse works on its own tokens and its own result.

Quick example:
    >>> parser = create_parser({
    ...     "options": {"name": {"type": "string", "required": True}, "loud": {}},
    ...     "positional": ["greeting"],
    ...     "version": "1.0.0",
    ... })
    >>> result = parser.parse(["python", "hello.py", "hi", "-n", "Ada", "-l"])
    >>> result.values
    {'greeting': 'hi', 'name': 'Ada', 'loud': True}
"""
import os.path
import sys
from collections.abc import Iterable, Mapping

from .binder import bind
from .faults import *
from .schemas import build_schema
from .tokens import tokenize
from .usage import render_usage, render_version
from .utils import *


class Parser:
    """
    Declarative command-line parser.

    Parameters
    - options: Mapping[str, Mapping] | None
      option name -> {type?, short?, required?, description?, multi?}
    - positional: Iterable[str]
      positional slot names in fill order.
    - version: str | None
      version string; also enables the --version pseudo-option.
    - info: str | None
      leading description line of the usage text.
    - prog: str | None
      program name for usage/version; defaults to the basename of sys.argv[0].

    Raises
    - InvalidSchemaError subclasses (see argscheme.faults) for bad schemas.
    """

    schema = mirror("schema")
    info = mirror("info")
    prog = mirror("prog")

    def __init__(self, options=None, positional=(), *, version=None, info=None, prog=None):
        if not isinstance(info, str | None):
            raise TypeError("parser 'info' must be a string")
        elif isinstance(info, str) and not (info := info.strip()):
            raise ValueError("parser 'info' cannot be empty")
        if not isinstance(prog, str | None):
            raise TypeError("parser 'prog' must be a string")

        self._schema = build_schema(options, positional, version=version)
        self._info = info
        self._prog = prog or os.path.basename(sys.argv[0] if sys.argv else "") or "prog"

    def parse(self, argv, /, *, skip=2):
        """
        Parse an argv-like sequence.

        The first `skip` elements (interpreter path and script path by
        convention) are ignored. Usage errors are collected in the returned
        result; call result.check() to raise them instead.
        """
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        if not isinstance(skip, int) or skip < 0:
            raise ValueError("parse() 'skip' must be a non-negative integer")
        return bind(tokenize(list(argv)[skip:]), self._schema)

    def render_usage(self, prog=None, /, *, colorful=False):
        return render_usage(self._schema, prog or self._prog, self._info, colorful=colorful)

    def render_version(self, prog=None, /, *, colorful=False):
        return render_version(prog or self._prog, self._schema.version, colorful=colorful)

    def usage(self, prog=None, /):
        """
        Return the help text (see argscheme.usage for the layout).
        """
        return self.render_usage(prog).plain

    def version(self, prog=None, /):
        return self.render_version(prog).plain

    def __repr__(self):
        return "parser(prog=%r, info=%r, schema=%r)" % (self._prog, self._info, self._schema)


_DEFINITION_FIELDS = frozenset({"options", "positional", "version", "info", "prog"})


def create_parser(definition=None, /, **overrides):
    """
    Build a Parser from a single definition mapping.

        create_parser({
            "info": "Demonstrates how to use argscheme",
            "version": "1.0.0",
            "options": {...},
            "positional": ["input-file", "output-file"],
        })

    Keyword overrides win over the mapping's entries.
    """
    if definition is None:
        definition = {}
    if not isinstance(definition, Mapping):
        raise TypeError("create_parser() argument must be a mapping")

    definition = dict(definition) | overrides
    if unknown := sorted(map(str, definition.keys() - _DEFINITION_FIELDS)):
        raise UnknownFieldError(
            f"parser definition has unknown field(s): {', '.join(map(repr, unknown))}",
            code=FaultCode.UNKNOWN_FIELD,
            fields=tuple(unknown),
        )

    return Parser(
        definition.get("options"),
        definition.get("positional", ()) or (),
        version=definition.get("version"),
        info=definition.get("info"),
        prog=definition.get("prog"),
    )


__all__ = (
    "Parser",
    "create_parser",
)
