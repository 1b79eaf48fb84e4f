"""
argscheme shell layer.

The core (builder, tokenizer, binder, renderers) never prints and never exits;
this module is where a parse meets the terminal.

run(parser, argv, shell=True)
- warnings  -> rendered on stderr (shell) or emitted through warnings.warn
- errors    -> every fault rendered on stderr followed by the usage text, then
               exit status 1 (shell); a UsageExit group is raised otherwise
- help      -> usage on stdout, exit status 0 (shell) or returned as-is
- version   -> version on stdout, exit status 0 (shell) or returned as-is

Help and version win over errors: "--help" still shows the usage when a
required option is missing or an argument is unrecognized.
"""
import copy
import inspect
import sys
import warnings

from rich.console import Console

from .faults import *
from .parsers import create_parser


def _surface(fault, console, /, **options):
    """
    Print one fault (error or warning) with display options attached.
    """
    console.print(copy.replace(fault, **options))


def run(parser, argv=None, /, *, shell=True, colorful=True, fancy=False):
    """
    Parse `argv` (default: the live process arguments) and act on the outcome.

    Parameters
    - parser: Parser
    - argv: argv-like sequence including interpreter and script path; None
      means [sys.executable, *sys.argv].
    - shell: print and exit (True) or raise/warn and return (False).
    - colorful / fancy: display options for the rich renderables.

    Returns
    - ParseResult, when the process was not terminated.
    """
    if argv is None:
        argv = [sys.executable, *sys.argv]
    result = parser.parse(argv)
    options = dict(prog=parser.prog, colorful=colorful, fancy=fancy)

    if result.notes:
        if shell:
            stderr = Console(stderr=True)
            for note in result.notes:
                _surface(note, stderr, **options)
        else:
            for note in result.notes:
                warnings.warn(copy.replace(note, **options), stacklevel=len(inspect.stack()))

    if result.help:
        if shell:
            Console().print(parser.render_usage(colorful=colorful))
            sys.exit(0)
        return result

    if result.version:
        if shell:
            Console().print(parser.render_version(colorful=colorful))
            sys.exit(0)
        return result

    if result.faults:
        if not shell:
            raise UsageExit(result.faults, **options)
        stderr = Console(stderr=True)
        for fault in result.faults:
            _surface(fault, stderr, **options)
        stderr.print()
        stderr.print(parser.render_usage(colorful=colorful))
        sys.exit(1)

    return result


def parse(definition, argv=None, /, **options):
    """
    One-call form: build a parser from `definition` and run it.

        values = parse({"options": {"verbose": {}}}).values

    Keyword options are split between create_parser (info, prog, version,
    options, positional) and run (shell, colorful, fancy).
    """
    runner = {name: options.pop(name) for name in ("shell", "colorful", "fancy") if name in options}
    return run(create_parser(definition, **options), argv, **runner)


__all__ = (
    "run",
    "parse",
)
