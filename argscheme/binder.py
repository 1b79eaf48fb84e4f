"""
argscheme binder: tokens + schema -> ParseResult.

Walk
- A cursor moves left to right over an immutable token tuple; at most one
  token of lookahead is ever inspected (the value of a string option, or an
  attached value wrongly given to a boolean).
- Bare values fill the positional slots in declared order.
- Long/short tokens are resolved against the schema by long name or short
  character, then dispatched with a single match over OptionKind:
  • BOOLEAN  toggles the stored value (absent counts as False), so an odd
             number of occurrences nets True and an even number False.
  • STRING   consumes the next token, which must be a value; last wins,
             or, for multi options, every occurrence is appended.
  • HELP / VERSION set the matching result flag and consume nothing.
- After the walk, undeclared booleans default to False, multi options to [],
  and each required string option that is absent or empty is reported.

Errors
- Nothing here raises for user input. Every problem becomes a UsageError
  instance appended to the accumulator and the walk continues, so a single
  invocation can report an unknown option and a missing required one at once.
"""
from .faults import *
from .schemas import OptionKind
from .tokens import TokenKind
from .utils import *

_HINT = "run with --help to see the accepted arguments"


class ParseResult:
    """
    Outcome of one parse.

    Properties (read-only; containers are handed out as copies)
    - values: dict of option/positional name -> str | bool | list[str]
    - help / version: whether the help or version pseudo-option was given
    - errors: list of human-readable error messages, in discovery order
    - warnings: list of human-readable warning messages
    - faults: tuple of the UsageError instances behind `errors`
    """

    values = mirror("values")
    help = mirror("help")
    version = mirror("version")
    faults = mirror("faults")
    notes = mirror("notes")

    def __init__(self, values, /, help=False, version=False, faults=(), notes=()):
        self._values = dict(values)
        self._help = bool(help)
        self._version = bool(version)
        self._faults = tuple(faults)
        self._notes = tuple(notes)

    @property
    def errors(self):
        return [str(fault) for fault in self._faults]

    @property
    def warnings(self):
        return [str(note) for note in self._notes]

    def __getitem__(self, name, /):
        return self.values[name]

    def __contains__(self, name, /):
        return name in self._values

    def get(self, name, default=None, /):
        return self.values.get(name, default)

    def check(self):
        """
        Raise UsageExit bundling every usage error; return self when there are none.
        """
        if self._faults:
            raise UsageExit(self._faults)
        return self

    def __repr__(self):
        return "parse-result(values=%r, help=%r, version=%r, errors=%r)" % (
            self._values, self._help, self._version, self.errors
        )

    def __rich_repr__(self):
        yield "values", self.values
        yield "help", self.help
        yield "version", self.version
        yield "errors", self.errors
        yield "warnings", self.warnings


class _Accumulator:
    """
    Mutable state of one walk; frozen into a ParseResult at the end.
    """
    __slots__ = ("values", "help", "version", "faults", "notes", "slots")

    def __init__(self, schema):
        self.values = {}
        self.help = False
        self.version = False
        self.faults = []
        self.notes = []
        self.slots = list(schema.positional)


def _bind_positional(state, token):
    try:
        slot = state.slots.pop(0)
    except IndexError:
        state.faults.append(UnexpectedArgumentError(
            "unexpected extra argument %r at %s position" % (token.raw, ordinal(token.index)),
            title="unexpected argument",
            code=FaultCode.UNEXPECTED_ARGUMENT,
            token=token.raw,
            index=token.index,
            hint="remove this extra value; " + _HINT,
        ))
        return
    state.values[slot.name] = token.text


def _reject_attached(state, token, following):
    """
    Report a value attached to a flag-like option; returns how many tokens to skip.
    """
    if following is None or following.kind is not TokenKind.VALUE or not following.attached:
        return 0
    state.faults.append(BooleanAssignmentError(
        "argument %r at %s position is boolean and does not take a value" % (token.raw, ordinal(token.index)),
        title="boolean cannot take a value",
        code=FaultCode.BOOLEAN_ASSIGNMENT,
        token=token.raw,
        index=token.index,
        hint="remove everything from '=' (for example: --%s)" % token.text,
    ))
    # The attached value belongs to this option; it must not reach a positional slot.
    return 1


def _bind_string(state, option, token, following):
    """
    Consume the value of a string option; returns how many tokens to skip.
    """
    if following is None or following.kind is not TokenKind.VALUE:
        state.faults.append(StringValueRequiredError(
            "argument %r at %s position requires a string value" % (token.raw, ordinal(token.index)),
            title="missing value",
            code=FaultCode.STRING_VALUE_REQUIRED,
            token=token.raw,
            index=token.index,
            hint="pass a value after it (for example: %s <value>)" % token.raw,
        ))
        return 0

    if following.attached and not following.text:
        state.notes.append(EmptyAttachedValueWarning(
            "empty value for option %r at %s position" % ("--" + option.long, ordinal(token.index)),
            title="empty value",
            code=FaultCode.EMPTY_ATTACHED_VALUE,
            token=token.raw,
            index=token.index,
            hint="add a value after '=' (for example: --%s=<value>)" % option.long,
        ))

    if option.multi:
        state.values.setdefault(option.name, []).append(following.text)
    else:
        state.values[option.name] = following.text
    return 1


def _finalize(state, schema):
    for option in schema.options:
        match option.kind:
            case OptionKind.BOOLEAN:
                state.values.setdefault(option.name, False)
            case OptionKind.STRING if option.multi:
                state.values.setdefault(option.name, [])

    for option in schema.options:
        if option.kind is not OptionKind.STRING or not option.required:
            continue
        if not state.values.get(option.name):
            state.faults.append(MissingRequiredError(
                "missing required option %r" % ("--" + option.long),
                title="missing required option",
                code=FaultCode.MISSING_REQUIRED,
                token="--" + option.long,
                hint="add it (for example: --%s <value>); %s" % (option.long, _HINT),
            ))


def bind(tokens, schema, /):
    """
    Bind a token sequence against a compiled schema.

    Parameters
    - tokens: Iterable[Token] (see argscheme.tokens.tokenize)
    - schema: Schema (see argscheme.schemas.build_schema)

    Returns
    - ParseResult; user-input problems are in its errors, never raised.
    """
    tokens = tuple(tokens)
    state = _Accumulator(schema)
    cursor = 0

    while cursor < len(tokens):
        token = tokens[cursor]
        cursor += 1
        following = tokens[cursor] if cursor < len(tokens) else None

        if token.kind is TokenKind.VALUE:
            _bind_positional(state, token)
            continue

        if token.kind is TokenKind.LONG:
            option = schema.find_long(token.text)
        else:
            option = schema.find_short(token.text)

        if option is None:
            state.faults.append(UnrecognizedArgumentError(
                "unrecognized argument %r at %s position" % (token.raw, ordinal(token.index)),
                title="unrecognized argument",
                code=FaultCode.UNRECOGNIZED_ARGUMENT,
                token=token.raw,
                index=token.index,
                hint=_HINT,
            ))
            # "--unknown=value": the value goes down with its option
            if following is not None and following.attached:
                cursor += 1
            continue

        match option.kind:
            case OptionKind.BOOLEAN:
                state.values[option.name] = not state.values.get(option.name, False)
                cursor += _reject_attached(state, token, following)
            case OptionKind.HELP:
                state.help = True
                cursor += _reject_attached(state, token, following)
            case OptionKind.VERSION:
                state.version = True
                cursor += _reject_attached(state, token, following)
            case OptionKind.STRING:
                cursor += _bind_string(state, option, token, following)
            case _:
                raise RuntimeError(f"unexpected option kind {option.kind!r}")

    _finalize(state, schema)

    return ParseResult(
        state.values,
        help=state.help,
        version=state.version,
        faults=state.faults,
        notes=state.notes,
    )


__all__ = (
    "ParseResult",
    "bind",
)
