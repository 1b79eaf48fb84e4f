"""
argscheme usage/version rendering.

Both renderers return rich Text: styled when colorful, plain otherwise, so the
same code backs Parser.usage() (which returns the .plain string) and the shell
layer (which prints the styled Text).

Layout

    <info>

    Usage: <prog> [options] <positional> ...

    Options:
      -f, --first-name  User's first name
          --last-name   User's last name

- The left column is "  -x, --long"; without a short form the "-x, " part is
  blank padding so every long name starts in the same column.
- Descriptions start two spaces after the longest long name.

Palette keys
- info-section, usage-label, program-name, positional
- group-label, option-name, option-description
- program-version

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
import os.path
import sys
from collections import defaultdict

from rich.text import Text

_PALETTE = {
    # === Head sections ===
    "info-section": "italic #A3A3A3",  # Neutral gray
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "positional": "bold #FFD600",  # AMBER for positional slots

    # === Options ===
    "group-label": "bold #FFFFFF",  # Pure white headers
    "option-name": "bold #22C55E",  # GREEN option names
    "option-description": "#9CA3AF",  # Muted gray

    # === Version ===
    "program-version": "bold #00E6FF",
}

_PADDING = 2
_SHORT_WIDTH = len("-x, ")


def _stylers(colorful):
    styles = defaultdict(str, _PALETTE | getattr(sys.modules["__main__"], "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    return styler, text


def _program(prog):
    return os.path.basename(str(prog)) or str(prog)


def render_usage(schema, prog, /, info=None, *, colorful=False):
    """
    Render the help text for a schema.

    Parameters
    - schema: Schema
    - prog: program name or script path (reduced to its basename)
    - info: optional leading description line
    - colorful: apply the palette (plain Text otherwise)

    Returns
    - rich.text.Text (use .plain for the unstyled string)
    """
    styler, text = _stylers(colorful)
    usage = Text()

    if info:
        usage.append(text(info, styler("info-section"))).append("\n\n")

    usage.append(text("Usage", styler("usage-label"))).append(": ")
    usage.append(text(_program(prog), styler("program-name")))
    usage.append(" [options]")
    for slot in schema.positional:
        usage.append(" ").append(text("<%s>" % slot.name, styler("positional")))

    if not schema.options:
        return usage

    usage.append("\n\n")
    usage.append(text("Options", styler("group-label"))).append(":")

    width = max(len(option.long) for option in schema.options) + len("--")
    for option in schema.options:
        usage.append("\n").append(" " * _PADDING)
        if option.short:
            usage.append(text("-" + option.short, styler("option-name"))).append(", ")
        else:
            usage.append(" " * _SHORT_WIDTH)
        usage.append(text("--" + option.long, styler("option-name")))
        if option.description:
            usage.append(" " * (width - len(option.long) - len("--") + _PADDING))
            usage.append(text(option.description, styler("option-description")))

    return usage


def render_version(prog, version=None, /, *, colorful=False):
    """
    Render "<prog> <version>", or just "<prog>" when no version is configured.
    """
    styler, text = _stylers(colorful)
    rendered = text(_program(prog), styler("program-name"))
    if version:
        rendered.append(" ").append(text(version, styler("program-version")))
    return rendered


__all__ = (
    "render_usage",
    "render_version",
)
