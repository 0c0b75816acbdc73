"""Manual page rendering.

Builds a roff document from a HelpRecord and, optionally, the sections
of an include file.  Section order follows the usual man-pages layout::

    NAME, SYNOPSIS, DESCRIPTION, OPTIONS,
    <sections with other titles, in include file order>,
    ENVIRONMENT, FILES, EXAMPLES, AUTHOR, REPORTING BUGS, COPYRIGHT, SEE ALSO

Text coming from the help output is escaped for roff; include sections
are roff already and are copied as they are.  The page date honours
SOURCE_DATE_EPOCH for reproducible builds.
"""

import os
from datetime import datetime, timezone

from helpman._version import BASE_VERSION, __app_name__
from helpman.errors import RenderError, SourceDateEpochError
from helpman.include import CANONICAL_TITLES, IncludeSet
from helpman.replacer import PatternReplacer
from helpman.lib.log_lib import get_output, trace


ESCAPES = PatternReplacer(
    r"\\", r"\e",
    r"-", r"\-",
    r"^\.", r"\&.",
    r"^'", r"\&'",
)

# Applied after escaping: [WORD] -> [\fIWORD\fR]
SYNOPSIS_ARGS = PatternReplacer(
    r"\[([^\[\]\s]+)\]", r"[\fI${1}\fR]",
)

GENERATED_TITLES = ("NAME", "SYNOPSIS", "DESCRIPTION", "OPTIONS")
TRAILING_TITLES = tuple(t for t in CANONICAL_TITLES if t not in GENERATED_TITLES)

MANUALS = {
    6: "Games",
    8: "System Administration Utilities",
}
DEFAULT_MANUAL = "User Commands"


def escape(text):
    """Escape ``text`` for roff, line by line."""
    return "\n".join(ESCAPES.replace(line) for line in text.split("\n"))


def _quote(arg):
    return '"' + arg.replace('"', '\\(dq') + '"'


def page_date(timestamp=None):
    """Return the page date as 'Month YYYY'.

    ``timestamp`` wins; otherwise SOURCE_DATE_EPOCH, otherwise now.

    Raises:
        SourceDateEpochError: SOURCE_DATE_EPOCH is set but not an integer.
    """
    if timestamp is None:
        epoch = os.environ.get("SOURCE_DATE_EPOCH")
        if epoch:
            try:
                timestamp = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
            except (ValueError, OverflowError, OSError) as e:
                raise SourceDateEpochError(
                    f"invalid SOURCE_DATE_EPOCH: {epoch!r}") from e
        else:
            timestamp = datetime.now()
    return timestamp.strftime("%B %Y")


def _section_number(section):
    try:
        number = int(section)
    except (TypeError, ValueError):
        raise RenderError(f"invalid manual section: {section!r}") from None
    if not 1 <= number <= 9:
        raise RenderError(f"manual section out of range (1-9): {number}")
    return number


def format_synopsis(usage):
    """Format a (possibly multi-line) usage string for the SYNOPSIS.

    The first word of each line is bold, bracketed words are italic.
    """
    lines = []
    for line in usage.split("\n"):
        prog, _, args = line.strip().partition(" ")
        text = rf"\fB{ESCAPES.replace(prog)}\fR"
        args = args.strip()
        if args:
            text += " " + SYNOPSIS_ARGS.replace(ESCAPES.replace(args))
        lines.append(text)
    return "\n.br\n".join(lines)


def format_text(text):
    """Escape free text; blank lines become paragraph breaks."""
    lines = []
    for line in text.split("\n"):
        if line.strip():
            lines.append(ESCAPES.replace(line))
        elif lines and lines[-1] != ".PP":
            lines.append(".PP")
    while lines and lines[-1] == ".PP":
        lines.pop()
    return "\n".join(lines)


def format_options(flags):
    """One .TP paragraph per flag."""
    items = []
    for flag in flags:
        head = rf"\fB\-{ESCAPES.replace(flag.name)}\fR"
        if flag.argument:
            head += rf" \fI{ESCAPES.replace(flag.argument)}\fR"
        body = format_text(flag.description)
        items.append(f".TP\n{head}\n{body}" if body else f".TP\n{head}")
    return "\n".join(items)


def _merge(generated, section):
    """Combine a generated section body with an include section."""
    if not generated or section.position in ("", "="):
        return section.body
    if section.position == "<":
        return f"{section.body}\n.PP\n{generated}"
    return f"{generated}\n.PP\n{section.body}"


@trace
def render_manpage(record, name, section=1, include=None, description=None,
                   timestamp=None):
    """Render a manual page.

    Args:
        record: HelpRecord from the help output.
        name: Program name (overridden by an include [NAME] section).
        section: Manual section number, 1-9.
        include: Optional IncludeSet.
        description: NAME description; overrides the include file.
        timestamp: datetime for the page date (default: see page_date).

    Returns:
        The roff source, ending with a newline.

    Raises:
        RenderError: Invalid section number or SOURCE_DATE_EPOCH.
    """
    out = get_output()
    number = _section_number(section)
    include = include or IncludeSet()

    summary = f"manual page for {name}"
    named = include.name_and_description()
    if named is not None:
        name, summary = named
    if description:
        summary = description

    bodies = {
        "NAME": rf"{escape(name)} \- {escape(summary)}",
        "SYNOPSIS": format_synopsis(record.usage) if record.usage else "",
        "DESCRIPTION": format_text(record.description),
        "OPTIONS": format_options(record.flags),
    }
    for title, extra in include.sections.items():
        if title == "NAME":
            continue
        bodies[title] = _merge(bodies.get(title, ""), extra)
        out.emit(2, "include [{title}] merged ({how})", channel='render',
                 title=title, how={"<": "prepend", ">": "append"}.get(
                     extra.position, "replace"))

    ordered = [(t, bodies.get(t, "")) for t in GENERATED_TITLES]
    ordered += [(s.title, s.body) for s in include.other_sections]
    ordered += [(t, bodies.get(t, "")) for t in TRAILING_TITLES]

    lines = [
        rf'.\" Generated by {__app_name__} {BASE_VERSION}',
        " ".join([
            ".TH",
            _quote(escape(name.upper())),
            _quote(str(number)),
            _quote(page_date(timestamp)),
            _quote(escape(name)),
            _quote(MANUALS.get(number, DEFAULT_MANUAL)),
        ]),
    ]
    emitted = 0
    for title, body in ordered:
        if not body:
            continue
        lines.append(f".SH {_quote(title)}" if " " in title else f".SH {title}")
        lines.append(body)
        emitted += 1

    out.emit(1, "Rendered {name}({num}) with {count} sections",
             channel='render', name=name, num=number, count=emitted)
    return "\n".join(lines) + "\n"
