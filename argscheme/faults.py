"""
argscheme faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the library
  can report, grouped by domain (schema build time vs. parse time).
- InvalidSchemaError and subclasses: raised synchronously while compiling a
  schema. They are programmer errors; construction simply fails.
- UsageError: one parse-time problem (unrecognized argument, missing value,
  missing required option, ...). The binder collects instances of it instead
  of raising them, so one invocation can surface several problems at once.
- UsageWarning / SchemaWarning: non-fatal notes.
- UsageExit: an exception group bundling the usage errors of a parse, raised
  by ParseResult.check() and by the non-shell runner.

Rendering
- UsageError, UsageWarning and UsageExit implement __rich__, so the shell layer
  can print them through a rich console. The palette can be overridden with a
  __styles__ mapping in __main__, the program name with __prog__.
- Options are attached at construction (code/title/hint/token/index) and at
  display time (prog/colorful/fancy) through copy.replace().
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - schema errors (101xx)
      • UNSUPPORTED_TYPE, MULTI_VALUE_TYPE, MALFORMED_SHORT, DUPLICATED_SHORT,
        MALFORMED_NAME, DUPLICATED_NAME, UNKNOWN_FIELD
    - usage errors (111xx)
      • UNRECOGNIZED_ARGUMENT, BOOLEAN_ASSIGNMENT, STRING_VALUE_REQUIRED,
        UNEXPECTED_ARGUMENT, MISSING_REQUIRED
    - warnings (121xx)
      • EMPTY_ATTACHED_VALUE, REQUIRED_BOOLEAN
    """
    # --- schema errors (101xx) ---
    UNSUPPORTED_TYPE            = 10101
    MULTI_VALUE_TYPE            = 10102
    MALFORMED_SHORT             = 10103
    DUPLICATED_SHORT            = 10104
    MALFORMED_NAME              = 10105
    DUPLICATED_NAME             = 10106
    UNKNOWN_FIELD               = 10107

    # --- usage errors (111xx) ---
    UNRECOGNIZED_ARGUMENT       = 11112
    BOOLEAN_ASSIGNMENT          = 11113
    STRING_VALUE_REQUIRED       = 11117
    UNEXPECTED_ARGUMENT         = 11121
    MISSING_REQUIRED            = 11125

    # --- warnings (121xx) ---
    EMPTY_ATTACHED_VALUE        = 12111
    REQUIRED_BOOLEAN            = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules["__main__"], "__codes__", {}).get(self, self.value))


class InvalidSchemaError(ValueError):
    """
    Base class of every schema build-time failure.

    The message is the exception text; `options` carries at least the fault
    `code` plus whatever context the builder knew (option name, short, ...).
    """

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def code(self):
        return self.options.get("code")


class UnsupportedTypeError(InvalidSchemaError): ...
class MultiValueTypeError(InvalidSchemaError): ...
class MalformedShortError(InvalidSchemaError): ...
class DuplicateShortError(InvalidSchemaError): ...
class MalformedNameError(InvalidSchemaError): ...
class DuplicateNameError(InvalidSchemaError): ...
class UnknownFieldError(InvalidSchemaError): ...


class SchemaWarning(UserWarning):
    """Non-fatal schema note (e.g. `required` declared on a boolean option)."""

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def code(self):
        return self.options.get("code")


_PALETTE = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "error-title": "bold #FF4DA6",  # friendly pinky title
    "warning-code": "bold #FFB400",  # amber fault code for warnings
    "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

    # body
    "error-message": "#C8C8D0",  # soft light gray message
    "warning-message": "#D6D6DE",  # slightly lighter gray body
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text
}


def _styles():
    return defaultdict(str, _PALETTE | getattr(sys.modules["__main__"], "__styles__", {}))


def _render(fault, kind):
    """
    Build the renderable shared by errors and warnings.

    Layout: "[ prog — code | Title ]", then the message, then " → hint".
    """
    styles = _styles()
    colorful = fault.options.get("colorful", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(sys.modules["__main__"], "__prog__", fault.options.get("prog", "")), styler("prog-name"))
    code = fault.options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code else "", styler("code" if kind == "error" else "warning-code")),
        " | ",
        text(fault.options.get("title", kind).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(fault.message, styler(kind + "-message"))
    if hint := fault.options.get("hint"):
        body = Group(message, Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    else:
        body = Group(message)

    if fault.options.get("fancy", False):
        return Panel(body, title=header, title_align="left")

    return Group(header, body)


class UsageError(Exception):
    """
    One parse-time problem, collected (not raised) by the binder.

    str(error) is the human-readable message stored in ParseResult.errors.
    Typical options: code, title, hint, token (raw spelling), index (1-based
    argument position).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, "error")

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedArgumentError(UsageError): ...
class BooleanAssignmentError(UsageError): ...
class StringValueRequiredError(UsageError): ...
class UnexpectedArgumentError(UsageError): ...
class MissingRequiredError(UsageError): ...


class UsageWarning(Warning):
    """
    Non-fatal parse-time note; stored as text in ParseResult.warnings.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        return _render(self, "warning")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyAttachedValueWarning(UsageWarning): ...


class UsageExit(ExceptionGroup[UsageError]):
    """
    Every usage error of one parse, raised together.

    Used by ParseResult.check() and by the runner outside of shell mode, so a
    caller sees all problems at once instead of only the first.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad usage", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad usage", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", False)
        prog = getattr(sys.modules["__main__"], "__prog__", self.options.get("prog", ""))

        header = Text.assemble(
            "[ ",
            Text(str(prog), styles["prog-name"] if colorful else ""),
            " — ",
            Text(self.message.title(), styles["error-title"] if colorful else ""),
            " ]"
        )
        renders = [copy.replace(error, **self.options) for error in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


__all__ = (
    "FaultCode",
    "InvalidSchemaError",
    "UnsupportedTypeError",
    "MultiValueTypeError",
    "MalformedShortError",
    "DuplicateShortError",
    "MalformedNameError",
    "DuplicateNameError",
    "UnknownFieldError",
    "SchemaWarning",
    "UsageError",
    "UnrecognizedArgumentError",
    "BooleanAssignmentError",
    "StringValueRequiredError",
    "UnexpectedArgumentError",
    "MissingRequiredError",
    "UsageWarning",
    "EmptyAttachedValueWarning",
    "UsageExit",
)
