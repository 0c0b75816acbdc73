"""Include file parsing.

An include file supplies extra manual page material in bracketed
sections, the same format help2man uses::

    [NAME]
    prog - do one thing well

    [>DESCRIPTION]
    Appended after the description taken from the help output.

    [Other section]
    Kept, upper-cased, in the order it appears.

A title may carry a position marker: ``<`` (prepend to the generated
section), ``=`` (replace it, the default) or ``>`` (append to it).  Known
titles are collected by name, last occurrence wins; other titles keep
their order.  Text before the first title is ignored.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from helpman.errors import IncludeParseError
from helpman.lines import LineCursor
from helpman.lib.log_lib import get_output, trace


SECTION_RE = re.compile(r"\[([<=>]?)([^\]]+)\]\s*")

NAME_SEPARATOR = " - "

CANONICAL_TITLES = (
    "NAME",
    "SYNOPSIS",
    "DESCRIPTION",
    "OPTIONS",
    "ENVIRONMENT",
    "FILES",
    "EXAMPLES",
    "AUTHOR",
    "REPORTING BUGS",
    "COPYRIGHT",
    "SEE ALSO",
)


@dataclass(frozen=True)
class Section:
    title: str
    body: str
    position: str = ""


@dataclass(frozen=True)
class IncludeSet:
    """Sections of an include file.

    Attributes:
        sections: Known titles (CANONICAL_TITLES) to their Section
        other_sections: Sections with any other title, in file order
    """
    sections: Dict[str, Section] = field(default_factory=dict)
    other_sections: Tuple[Section, ...] = ()

    def get(self, title: str) -> Optional[Section]:
        return self.sections.get(title.upper())

    def name_and_description(self) -> Optional[Tuple[str, str]]:
        """Split the NAME section on its first " - ", None without one."""
        section = self.sections.get("NAME")
        if section is None:
            return None
        name, _, description = section.body.partition(NAME_SEPARATOR)
        return name, description

    def merged(self, other: "IncludeSet") -> "IncludeSet":
        """Combine with ``other``; its known sections win, other sections add up."""
        sections = dict(self.sections)
        sections.update(other.sections)
        return IncludeSet(sections, self.other_sections + other.other_sections)

    def __bool__(self):
        return bool(self.sections or self.other_sections)


def _check_name(body: str, lineno: int) -> None:
    name, sep, _ = body.partition(NAME_SEPARATOR)
    if not sep:
        raise IncludeParseError(
            f"invalid [NAME] section: expected 'name{NAME_SEPARATOR}description'",
            lineno)
    if not name or any(c.isspace() for c in name):
        raise IncludeParseError(
            f"invalid [NAME] section: program name {name!r} is not a single word",
            lineno)


class SectionSplitter:
    """Single-use parser from an include stream to an IncludeSet."""

    def __init__(self, source: Union[str, Iterable[str]]):
        self._cursor = LineCursor(source)
        self._sections: Dict[str, Section] = {}
        self._others: List[Section] = []

    def _finalise(self, title: str, position: str, lineno: int,
                  body: List[str]) -> None:
        out = get_output()
        section = Section(title, "".join(body).strip(), position)
        if title not in CANONICAL_TITLES:
            self._others.append(section)
            out.emit(2, "section [{title}]: {size} chars (other)",
                     channel='include', title=title, size=len(section.body))
            return
        if title == "NAME":
            _check_name(section.body, lineno)
        if title in self._sections:
            out.emit(1, "section [{title}] given again at line {n}, "
                     "keeping the last one", channel='include',
                     title=title, n=lineno)
        self._sections[title] = section
        out.emit(2, "section [{title}]: {size} chars", channel='include',
                 title=title, size=len(section.body))

    @trace
    def split(self) -> IncludeSet:
        """Parse the whole input.

        Raises:
            IncludeParseError: Malformed [NAME] section; nothing is returned.
        """
        out = get_output()
        cursor = self._cursor
        current = None
        body: List[str] = []
        ignored = 0

        for line in cursor:
            m = SECTION_RE.fullmatch(line)
            if m:
                if current is not None:
                    self._finalise(*current, body)
                position, title = m.groups()
                current = (title.strip().upper(), position, cursor.lineno)
                body = []
                continue
            if current is None:
                if line.strip():
                    ignored += 1
                continue
            body.append(line + "\n")

        if current is not None:
            self._finalise(*current, body)
        if ignored:
            out.emit(1, "ignored {n} lines before the first section",
                     channel='include', n=ignored)

        return IncludeSet(dict(self._sections), tuple(self._others))


def split_sections(source: Union[str, Iterable[str]]) -> IncludeSet:
    """Parse include material into an IncludeSet (see SectionSplitter)."""
    return SectionSplitter(source).split()
