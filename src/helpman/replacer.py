"""Compound regular-expression replacement.

A PatternReplacer applies an ordered list of find/replace rules to a
string in one left-to-right pass.  All patterns are joined into a single
alternation, each wrapped in its own capturing group, so one scan finds
every match and the alternation order decides which rule owns a match
when several could start at the same position (first rule wins).

Replacement templates use the ``$`` syntax::

    $1  ${1}  $name  ${name}    group of the rule's OWN pattern
    $$                          literal dollar

References to missing or non-participating groups expand to nothing.
Backslashes in templates are literal, which keeps roff escapes readable.

Example::

    >>> r = PatternReplacer(r"\\B(-\\w+)\\b", "*${1}*", "help", "fun")
    >>> r.replace("use option -help for help")
    'use option *-help* for fun'
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from helpman.errors import ReplacerError


_TEMPLATE_REF = re.compile(r"\$(?:(\$)|\{(\w+)\}|(\w+))")

# An odd run of backslashes followed by a digit: \1 .. \9
_NUMBERED_BACKREF = re.compile(r"(?<!\\)(?:\\\\)*\\[1-9]")

# Conditional on a numbered group: (?(1)yes|no)
_NUMBERED_CONDITIONAL = re.compile(r"(?<!\\)(?:\\\\)*\(\?\(\d+\)")

# Unescaped (?i), (?s), ... which would apply to every rule
_GLOBAL_FLAGS = re.compile(r"(?<!\\)(?:\\\\)*\(\?[aiLmsux]+\)")


@dataclass(frozen=True)
class ReplacementRule:
    """One (pattern, template) pair and its compiled pattern."""
    pattern: str
    replacement: str
    regex: Pattern

    def expand(self, match, base: int = 0) -> str:
        """Expand the template against ``match``.

        ``match`` is a match of ``regex`` itself, or of a compound pattern
        in which this rule's pattern is wrapped in group ``base``.
        """
        def ref(m):
            if m.group(1):
                return "$"
            name = m.group(2) or m.group(3)
            if name.isdecimal():
                number = int(name)
                if number > self.regex.groups:
                    return ""
                return match.group(base + number) or ""
            if name not in self.regex.groupindex:
                return ""
            return match.group(name) or ""

        return _TEMPLATE_REF.sub(ref, self.replacement)


def _compile_rule(pattern, replacement):
    if _NUMBERED_BACKREF.search(pattern):
        raise ReplacerError(
            f"numbered backreferences cannot be combined: {pattern!r}")
    if _NUMBERED_CONDITIONAL.search(pattern):
        raise ReplacerError(
            f"numbered group conditionals cannot be combined, use (?(name)...): {pattern!r}")
    if _GLOBAL_FLAGS.search(pattern):
        raise ReplacerError(
            f"global inline flags cannot be combined, use (?flags:...): {pattern!r}")
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ReplacerError(f"invalid pattern {pattern!r}: {e}") from e
    if regex.search("") is not None:
        raise ReplacerError(f"pattern matches empty string: {pattern!r}")
    return ReplacementRule(pattern, replacement, regex)


class PatternReplacer:
    """Ordered, single-pass, multi-pattern replacer.

    Constructed from a flat argument list ``old1, new1, old2, new2, ...``
    like :meth:`str.replace` generalised to many regular expressions.
    Immutable once built; ``replace`` keeps no per-call state, so one
    instance can be shared freely.

    Raises:
        ReplacerError: odd argument count, a pattern that does not compile,
            uses numbered backreferences, numbered conditionals or global
            inline flags, or can match the empty string.
    """

    def __init__(self, *oldnew: str):
        if len(oldnew) % 2 == 1:
            raise ReplacerError("odd argument count")

        rules = []
        groups = []
        group = 1
        for old, new in zip(oldnew[0::2], oldnew[1::2]):
            rule = _compile_rule(old, new)
            rules.append(rule)
            groups.append(group)
            # The rule's wrapping group plus its own subgroups
            group += rule.regex.groups + 1

        self._rules: Tuple[ReplacementRule, ...] = tuple(rules)
        self._groups: Tuple[int, ...] = tuple(groups)
        self._compound = None
        if rules:
            compound = "|".join(f"({rule.pattern})" for rule in rules)
            try:
                self._compound = re.compile(compound)
            except re.error as e:
                # Duplicate group names, global inline flags, ...
                raise ReplacerError(f"patterns cannot be combined: {e}") from e

    @property
    def rules(self) -> Tuple[ReplacementRule, ...]:
        return self._rules

    @property
    def compound(self):
        """The compiled alternation of all patterns (None without rules)."""
        return self._compound

    def owner(self, match) -> int:
        """Index of the rule whose wrapping group took part in ``match``."""
        for index, group in enumerate(self._groups):
            if match.start(group) != -1:
                return index
        raise AssertionError("compound match owned by no rule")

    def replace(self, text: str) -> str:
        """Return ``text`` with every rule applied in a single pass."""
        if self._compound is None:
            return text

        pieces = []
        pos = 0
        for match in self._compound.finditer(text):
            index = self.owner(match)
            pieces.append(text[pos:match.start()])
            rule = self._rules[index]
            pieces.append(rule.expand(match, self._groups[index]))
            pos = match.end()
        pieces.append(text[pos:])
        return "".join(pieces)

    def __repr__(self):
        pairs = ", ".join(f"{r.pattern!r}->{r.replacement!r}" for r in self._rules)
        return f"PatternReplacer({pairs})"
