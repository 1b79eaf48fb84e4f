r"""
argscheme schema specifications and the schema builder.

Overview
- Specs
  • OptionSpec: one declared option (string or boolean, single or multi-valued),
    addressed as --long on the command line and, optionally, as -s.
  • PositionalSpec: one named slot filled by bare values in declared order.
  • Schema: the compiled, immutable set of options and positional slots that
    the binder resolves tokens against.

- Builder
  • build_schema(options, positional, version=...): compile a declarative
    definition into a Schema, rejecting invalid or conflicting definitions with
    InvalidSchemaError subclasses (see argscheme.faults).

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties (see mirror()).

Definition format
    {
        "first-name": {"type": "string", "short": "f", "description": "..."},
        "last-name": {"type": "string", "required": True},
        "dog-lover": {},                       # boolean by default
        "tag": {"type": "string", "multi": True},
    }

Build rules
- type: "string" | "boolean" (case-insensitive) or the OptionKind member;
  missing means boolean. Anything else fails with UnsupportedTypeError.
- multi: only valid on string options (MultiValueTypeError).
- short: exactly one non-dash, non-space character (MalformedShortError),
  unique across options (DuplicateShortError).
- names: unique across options and positionals (DuplicateNameError); option
  names may not start with '-' or contain '=' or whitespace (MalformedNameError).
- help is injected unless the name is taken; version is injected when a
  version string is supplied and the name is free.
- Options without an explicit short take the first character of their long
  name when nobody claimed it yet. Explicit shorts always win; there is no
  second pass.

Quick example:
    >>> schema = build_schema({"foo": {}, "bar": {"type": "string"}}, ["input"])
    >>> [(option.long, option.short) for option in schema.options]
    [('foo', 'f'), ('bar', 'b'), ('help', 'h')]
"""
import functools
import operator
import os.path
import re
import warnings
from collections.abc import Iterable, Mapping
from enum import Enum

from .faults import *
from .utils import *


class OptionKind(Enum):
    """
    Kind of a declared option.

    STRING and BOOLEAN are the user-declarable kinds; HELP and VERSION are the
    pseudo-option kinds the builder injects. The binder dispatches on it with a
    single match statement.
    """
    STRING = "string"
    BOOLEAN = "boolean"
    HELP = "help"
    VERSION = "version"

    @classmethod
    def declarable(cls, value, /):
        """
        Resolve a definition 'type' value to STRING or BOOLEAN (None if unsupported).
        """
        if isinstance(value, cls):
            return value if value in (cls.STRING, cls.BOOLEAN) else None
        if isinstance(value, str):
            try:
                kind = cls(value.strip().lower())
            except ValueError:
                return None
            return kind if kind in (cls.STRING, cls.BOOLEAN) else None
        return None


class SpecType(type):
    """
    Metaclass that turns specs into immutable, introspectable records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (see mirror()).
    - Provide a stable __repr__ and a __rich_repr__ for pretty printers.
    - Derive __typename__ from the class name for messages ("option-spec").
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_option(cls, metadata, /):
    """
    Internal: validate the per-option fields of an OptionSpec.

    Cross-option rules (unique shorts and names) are the builder's job; this
    only checks what a single option can get wrong on its own.
    """
    name = metadata["name"]
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    if not name or name.startswith("-") or re.search(r"[=\s]", name):
        raise MalformedNameError(
            f"option name {name!r} must be non-empty and cannot start with '-' or contain '=' or whitespace",
            code=FaultCode.MALFORMED_NAME,
            name=name,
        )

    if not isinstance(metadata["kind"], OptionKind):
        raise TypeError(f"{cls.__typename__} {name!r} 'kind' must be an option kind")

    if not isinstance(short := metadata["short"], str | None):
        raise MalformedShortError(
            f"short form of option {name!r} must be a single character",
            code=FaultCode.MALFORMED_SHORT,
            name=name,
            short=short,
        )
    if isinstance(short, str) and not re.fullmatch(r"[^\-\s]", short):
        raise MalformedShortError(
            f"short form of option {name!r} must be a single non-dash, non-space character, not {short!r}",
            code=FaultCode.MALFORMED_SHORT,
            name=name,
            short=short,
        )

    for field in ("required", "multi"):
        if not isinstance(metadata[field], bool):
            raise TypeError(f"{cls.__typename__} {name!r} {field!r} must be a boolean")

    if metadata["multi"] and metadata["kind"] is not OptionKind.STRING:
        raise MultiValueTypeError(
            f"option {name!r} can only be multi-valued if its type is string",
            code=FaultCode.MULTI_VALUE_TYPE,
            name=name,
            kind=metadata["kind"],
        )

    if not isinstance(descr := metadata["description"], str | None):
        raise TypeError(f"{cls.__typename__} {name!r} 'description' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} {name!r} 'description' cannot be empty")
    metadata["description"] = descr


class OptionSpec(metaclass=SpecType):
    """
    One declared option.

    Properties
    - name: key used in ParseResult.values.
    - kind: OptionKind (STRING, BOOLEAN, or the injected HELP/VERSION).
    - long: long spelling without dashes (always equal to name).
    - short: single character, or None.
    - required: only meaningful for string options.
    - multi: string options only; occurrences aggregate into a list.
    - description: help text, or None.
    """

    __introspectable__ = (
        "name",
        "kind",
        "long",
        "short",
        "required",
        "multi",
        "description",
    )

    def __new__(
            cls,
            name,
            /,
            kind=OptionKind.BOOLEAN,
            short=None,
            required=False,
            multi=False,
            description=None,
    ):
        metadata = {
            "name": name,
            "kind": kind,
            "short": short,
            "required": required,
            "multi": multi,
            "description": description,
        }
        _sanitize_option(cls, metadata)

        self = super().__new__(cls)
        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        self._long = self._name
        return self

    @property
    def flag(self):
        """
        True when the option consumes no value (boolean and pseudo-options).
        """
        return self.kind is not OptionKind.STRING

    def __eq__(self, other):
        if not isinstance(other, OptionSpec):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))


class PositionalSpec(metaclass=SpecType):
    """
    Ordered, named slot consumed by bare values in arrival order.
    """

    __introspectable__ = (
        "name",
        "index",
    )

    def __new__(cls, name, index, /):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} name must be a string")
        if not (name := name.strip()):
            raise MalformedNameError(
                "positional names cannot be empty",
                code=FaultCode.MALFORMED_NAME,
                name=name,
            )
        self = super().__new__(cls)
        self._name = name
        self._index = index
        return self

    def __eq__(self, other):
        if not isinstance(other, PositionalSpec):
            return NotImplemented
        return (self.name, self.index) == (other.name, other.index)

    def __hash__(self):
        return hash((self.name, self.index))


class Schema(metaclass=SpecType):
    """
    Compiled schema: ordered options, ordered positional slots, version.

    Immutable once built and safe to share across any number of parses; the
    lookup tables are computed once here so the binder resolves each token in
    constant time.
    """

    __introspectable__ = (
        "options",
        "positional",
        "version",
    )

    def __new__(cls, options, positional=(), version=None, /):
        self = super().__new__(cls)
        self._options = tuple(options)
        self._positional = tuple(positional)
        self._version = version
        self._names = {option.name: option for option in self._options}
        self._longs = {option.long: option for option in self._options}
        self._shorts = {option.short: option for option in self._options if option.short}
        return self

    def option(self, name, /):
        """
        Return the option declared under `name` (KeyError when unknown).
        """
        return self._names[name]

    def find_long(self, name, /):
        return self._longs.get(name)

    def find_short(self, char, /):
        return self._shorts.get(char)


_FIELDS = frozenset({"type", "short", "required", "description", "multi"})


def _compile_definition(name, definition, /):
    """
    Internal: turn one `name -> {field: value}` entry into OptionSpec metadata.
    """
    if definition is None:
        definition = {}
    if not isinstance(definition, Mapping):
        raise TypeError(f"definition of option {name!r} must be a mapping")

    if unknown := sorted(map(str, definition.keys() - _FIELDS)):
        raise UnknownFieldError(
            f"option {name!r} has unknown field(s): {', '.join(map(repr, unknown))}",
            code=FaultCode.UNKNOWN_FIELD,
            name=name,
            fields=tuple(unknown),
        )

    if (type := definition.get("type")) is None:
        type = OptionKind.BOOLEAN
    kind = OptionKind.declarable(type)
    if kind is None:
        raise UnsupportedTypeError(
            f"argument type for {name!r} must be one of: string, boolean (got {type!r})",
            code=FaultCode.UNSUPPORTED_TYPE,
            name=name,
            type=type,
        )

    required = definition.get("required", False)
    if required and kind is OptionKind.BOOLEAN:
        warnings.warn(
            SchemaWarning(
                f"option {name!r} is boolean; 'required' has no effect",
                code=FaultCode.REQUIRED_BOOLEAN,
                name=name,
            ),
            skip_file_prefixes=(os.path.dirname(__file__),),
        )
        required = False

    return {
        "name": name,
        "kind": kind,
        "short": definition.get("short"),
        "required": required,
        "multi": definition.get("multi", False),
        "description": definition.get("description"),
    }


def build_schema(options=None, positional=(), /, *, version=None):
    """
    Compile a declarative definition into an immutable Schema.

    Parameters
    - options: Mapping[str, Mapping] | None
      option name -> {type?, short?, required?, description?, multi?}.
    - positional: Iterable[str]
      positional slot names, in the order bare values fill them.
    - version: str | None
      when given, a "version" pseudo-option is injected (if the name is free).

    Raises
    - InvalidSchemaError subclasses for conflicting or invalid definitions.
    - TypeError for values of the wrong Python type.

    Returns
    - Schema
    """
    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise TypeError("build_schema() 'options' must be a mapping of option names to definitions")
    if isinstance(positional, str) or not isinstance(positional, Iterable):
        raise TypeError("build_schema() 'positional' must be an iterable of names")
    if not isinstance(version, str | None):
        raise TypeError("build_schema() 'version' must be a string")
    elif isinstance(version, str) and not (version := version.strip()):
        raise ValueError("build_schema() 'version' cannot be empty")

    declared = [_compile_definition(name, definition) for name, definition in options.items()]
    # Validates names, shorts and multi before any cross-option rule runs.
    for metadata in declared:
        _sanitize_option(OptionSpec, metadata)

    slots = []
    names = {metadata["name"] for metadata in declared}
    for index, name in enumerate(positional):
        slot = PositionalSpec(name, index)
        if slot.name in names:
            raise DuplicateNameError(
                f"name {slot.name!r} specified twice",
                code=FaultCode.DUPLICATED_NAME,
                name=slot.name,
            )
        names.add(slot.name)
        slots.append(slot)

    claimed = {}
    for metadata in declared:
        if (short := metadata["short"]) is None:
            continue
        if short in claimed:
            raise DuplicateShortError(
                f"short option {short!r} specified twice ({claimed[short]!r} and {metadata['name']!r})",
                code=FaultCode.DUPLICATED_SHORT,
                name=metadata["name"],
                short=short,
            )
        claimed[short] = metadata["name"]

    if "help" not in names:
        declared.append({
            "name": "help",
            "kind": OptionKind.HELP,
            "short": None,
            "required": False,
            "multi": False,
            "description": "show this help message and exit",
        })
    if version is not None and "version" not in names:
        declared.append({
            "name": "version",
            "kind": OptionKind.VERSION,
            "short": None,
            "required": False,
            "multi": False,
            "description": "show version information and exit",
        })

    # First come, first served: no reshuffling when two names share an initial.
    for metadata in declared:
        if metadata["short"] is None and (initial := metadata["name"][0]) not in claimed:
            metadata["short"] = initial
            claimed[initial] = metadata["name"]

    return Schema(
        [OptionSpec(
            metadata["name"],
            metadata["kind"],
            metadata["short"],
            metadata["required"],
            metadata["multi"],
            metadata["description"],
        ) for metadata in declared],
        slots,
        version,
    )


__all__ = (
    # Classes
    "OptionKind",
    "OptionSpec",
    "PositionalSpec",
    "Schema",

    # Builder
    "build_schema",
)

# The metaclass is an implementation detail of the specs.
del SpecType
