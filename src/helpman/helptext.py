"""Help text extraction.

Turns the free-form output of ``program -help`` into a HelpRecord.  Each
line is classified on its own shape, in priority order:

1. usage line      ``Usage: prog [OPTION]... ARG``, with GNU ``or:`` lines,
                   or Go's ``Usage of prog:`` header with tab-indented
                   invocation lines
2. flag line       exactly two spaces and a dash, in one of three shapes::

       -h<TAB>Show help.          short flag, description inline
       -fmt string                flag with argument, description on
           <TAB>Output format.    the next line
       -verbose                   bare flag, description on the next
           <TAB>Talk more.        line

3. anything else   free-text description

The shapes follow what Go's flag package prints for ``-help``.  A flag
of the second or third shape on the last line of input is fatal: the
description it promises does not exist.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from helpman.errors import HelpParseError
from helpman.lines import LineCursor
from helpman.lib.log_lib import get_output, trace


# Go flag package header: the invocations, if any, follow on tab-indented lines
GO_USAGE_RE = re.compile(r"\s*(?i:usage) of\s+\S+:\s*")
GO_INVOCATION_RE = re.compile(r"\t\s*(\S.*?)\s*")
USAGE_RE = re.compile(r"\s*(?i:usage)(?::| of)\s+(\S.*?):?\s*")
USAGE_ALT_RE = re.compile(r"\s+or:\s+(\S.*?)\s*")
FLAG_RE = re.compile(r"  -(?:(\w)\t(.*)|([-\w]+) (.+)|([-\w]+))")
CONTINUATION_RE = re.compile(r"(?: {4,}|\t)\s*(\S.*?)\s*")


@dataclass(frozen=True)
class Flag:
    """One option found in the help text."""
    name: str
    argument: str = ""
    description: str = ""

    def __str__(self):
        return f"-{self.name} {self.argument!r}: {self.description}"


@dataclass(frozen=True)
class HelpRecord:
    """Usage, flags and description extracted from help text."""
    usage: str = ""
    flags: Tuple[Flag, ...] = ()
    description: str = ""


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class UsageFound:
    usage: str
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class FlagFound:
    flag: Flag


@dataclass(frozen=True)
class Neither:
    line: str


Outcome = Union[UsageFound, FlagFound, Neither]


def _fold(cursor: LineCursor, pattern) -> List:
    """Consume the following lines matching ``pattern``, return their matches."""
    matches = []
    while True:
        upcoming = cursor.peek()
        if upcoming is None:
            return matches
        m = pattern.fullmatch(upcoming)
        if m is None:
            return matches
        cursor.next_line()
        matches.append(m)


def _read_flag(m, cursor: LineCursor, fold_continuations: bool) -> Flag:
    short, inline, name, argument, bare = m.groups()
    if short is not None:
        name, argument = short, ""
        lines = [inline.strip()]
    else:
        name = name if name is not None else bare
        argument = argument or ""
        body = cursor.next_line()
        if body is None:
            raise HelpParseError(f"missing description for flag -{name}",
                                 cursor.lineno)
        lines = [body.strip()]
    if fold_continuations:
        lines += [c.group(1) for c in _fold(cursor, CONTINUATION_RE)]
    return Flag(name, argument.strip(), "\n".join(lines).strip("\n"))


def classify_line(line: str, cursor: LineCursor,
                  fold_continuations: bool = True) -> Outcome:
    """Classify ``line``; consume the lines a usage or flag owns from ``cursor``.

    Raises:
        HelpParseError: A flag header needs a description line and the
            input ends first.
    """
    if GO_USAGE_RE.fullmatch(line):
        invocations = _fold(cursor, GO_INVOCATION_RE)
        return UsageFound("\n".join(i.group(1) for i in invocations),
                          (line,) + tuple(i.string for i in invocations))
    m = USAGE_RE.fullmatch(line)
    if m:
        alternatives = _fold(cursor, USAGE_ALT_RE)
        invocations = [m.group(1)] + [a.group(1) for a in alternatives]
        return UsageFound("\n".join(invocations),
                          (line,) + tuple(a.string for a in alternatives))
    m = FLAG_RE.fullmatch(line)
    if m:
        return FlagFound(_read_flag(m, cursor, fold_continuations))
    return Neither(line)


def _trim_blank_lines(lines: List[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------
class HelpExtractor:
    """Single-use parser from help text to a HelpRecord.

    Args:
        source: The help text, or any iterable of lines.
        fold_continuations: Fold lines indented like Go flag continuations
            (four spaces or a tab) that directly follow a flag into that
            flag's description.  When False only the line the flag shape
            requires belongs to the flag; the rest is description.
    """

    def __init__(self, source: Union[str, Iterable[str]],
                 fold_continuations: bool = True):
        self._cursor = LineCursor(source)
        self.fold_continuations = fold_continuations

    @trace
    def extract(self) -> HelpRecord:
        """Parse the whole input.

        Raises:
            HelpParseError: Malformed flag; no partial record is produced.
        """
        out = get_output()
        debug = out.channel_active('parse', 3)
        cursor = self._cursor
        usage: Optional[str] = None
        flags: List[Flag] = []
        description: List[str] = []

        for line in cursor:
            lineno = cursor.lineno
            outcome = classify_line(line, cursor, self.fold_continuations)
            if isinstance(outcome, UsageFound) and usage is None:
                usage = outcome.usage
                if debug:
                    out.emit(3, "line {n}: usage {usage!r}", channel='parse',
                             n=lineno, usage=usage)
            elif isinstance(outcome, FlagFound):
                flags.append(outcome.flag)
                if debug:
                    out.emit(3, "line {n}: flag {flag}", channel='parse',
                             n=lineno, flag=outcome.flag)
            elif isinstance(outcome, UsageFound):
                # Only the first usage counts
                description.extend(outcome.lines)
            else:
                description.append(line)

        record = HelpRecord(
            usage=usage or "",
            flags=tuple(flags),
            description=_trim_blank_lines(description),
        )
        out.emit(1, "Parsed {lines} lines: {flags} flags, usage {state}",
                 channel='parse', lines=cursor.lineno, flags=len(flags),
                 state="found" if usage is not None else "missing")
        return record


def extract_help(source: Union[str, Iterable[str]],
                 fold_continuations: bool = True) -> HelpRecord:
    """Parse help text into a HelpRecord (see HelpExtractor)."""
    return HelpExtractor(source, fold_continuations).extract()
