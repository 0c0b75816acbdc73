"""
Hint dataclass and global registry.

Domain modules register their hints at import time; the OutputManager
decides when (and whether) a hint is shown.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set


@dataclass(frozen=True)
class Hint:
    """A templated tip tied to the situations where it helps.

    Attributes:
        id: Dot-namespaced identifier, e.g. 'include.name_format'
        message: str.format() template
        context: Where the hint applies: 'error', 'result' or 'verbose'
        min_level: Minimum threshold on the 'hint' channel
        category: Grouping key, usually the emitting channel
    """
    id: str
    message: str
    context: Set[str] = field(default_factory=lambda: {'verbose'})
    min_level: int = 1
    category: str = 'general'


_HINTS: Dict[str, Hint] = {}


def register_hint(hint: Hint) -> None:
    """Register a hint.  A duplicate ID replaces the earlier hint."""
    _HINTS[hint.id] = hint


def register_hints(*hints: Hint) -> None:
    """Register several hints at once."""
    for h in hints:
        register_hint(h)


def get_hint(hint_id: str) -> Optional[Hint]:
    """Look up a hint by ID, None when unknown."""
    return _HINTS.get(hint_id)


def get_hints_by_category(category: str) -> List[Hint]:
    """All registered hints in a category."""
    return [h for h in _HINTS.values() if h.category == category]
