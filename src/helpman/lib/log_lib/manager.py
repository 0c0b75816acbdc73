"""
OutputManager - the THAC0 verbosity system core.

The emit rule is: a message shows when ``level <= threshold``, where the
threshold is the channel's override if one is set, otherwise the global
verbosity.  A threshold of -4 or lower is a hard wall: nothing shows.

    -v increments, -Q decrements.  They compose: -vv -Q = 1

Per-channel overrides come from ``--show CHANNEL[:LEVEL]``; opt-in
channels start with an override of -1 so they stay silent at default
verbosity until asked for.
"""

import sys
from typing import Any, Dict, Iterable, Optional, Set, TextIO

from . import channels as _channels
from .hints import get_hint


class OutputManager:
    """Verbosity-gated writer for diagnostics.

    Everything goes to ``file`` (stderr by default) so that stdout stays
    free for the generated manual page.

    Usage::

        out = OutputManager(verbosity=1)
        out.emit(1, "Found {count} flags", channel='parse', count=3)
        out.warning("section [NAME] given twice")
        out.hint('include.name_format', 'error')
    """

    def __init__(
        self,
        verbosity: int = 0,
        channel_overrides: Optional[Dict[str, int]] = None,
        file: Optional[TextIO] = None,
    ):
        self.verbosity = verbosity
        self.channel_overrides: Dict[str, int] = dict(channel_overrides or {})
        self.file = file if file is not None else sys.stderr
        self._shown_hints: Set[str] = set()

    def threshold(self, channel: str) -> int:
        """Effective threshold for a channel."""
        return self.channel_overrides.get(channel, self.verbosity)

    def emit(self, level: int, message: str, *,
             channel: str = 'general', **kwargs: Any) -> None:
        """Write ``message`` if ``level`` passes the channel threshold.

        ``message`` is a str.format() template filled from ``kwargs``.
        """
        threshold = self.threshold(channel)
        if threshold <= -4 or level > threshold:
            return
        text = message.format(**kwargs) if kwargs else message
        print(text, file=self.file)

    def warning(self, message: str, *, channel: str = 'general') -> None:
        """Emit a warning (level -2)."""
        self.emit(-2, "warning: " + message, channel=channel)

    def error(self, message: str) -> None:
        """Emit an error (level -3, hidden only behind the hard wall)."""
        self.emit(-3, message, channel='error')

    def hint(self, hint_id: str, context: str = 'result', **kwargs: Any) -> None:
        """Show a registered hint once per session if context and level allow."""
        if hint_id in self._shown_hints:
            return
        h = get_hint(hint_id)
        if h is None or context not in h.context:
            return
        threshold = self.threshold('hint')
        if threshold <= -4 or h.min_level > threshold:
            return
        text = h.message.format(**kwargs) if kwargs else h.message
        print(text, file=self.file)
        self._shown_hints.add(hint_id)

    def channel_active(self, channel: str, level: int = 0) -> bool:
        """True if a message at ``level`` on ``channel`` would be shown.

        Lets callers skip building expensive debug output.
        """
        threshold = self.threshold(channel)
        return threshold > -4 and level <= threshold

    @property
    def shown_hints(self) -> Set[str]:
        """IDs of hints displayed so far."""
        return self._shown_hints.copy()


# =============================================================================
# Module-level singleton
# =============================================================================

_manager: Optional[OutputManager] = None


def init_output(verbosity: int = 0,
                channels: Optional[Iterable[str]] = None,
                file: Optional[TextIO] = None) -> OutputManager:
    """Configure the module-level OutputManager.

    Call once at program startup after parsing CLI arguments.

    Args:
        verbosity: Global THAC0 threshold (0 = default)
        channels: ``CHANNEL[:LEVEL]`` specs, e.g. ['parse:3', 'trace']
        file: Destination stream (default: stderr)

    Raises:
        ValueError: If a channel spec is malformed.
    """
    global _manager

    overrides = {ch: -1 for ch in _channels.OPT_IN_CHANNELS}
    for spec in channels or ():
        cfg = _channels.parse_channel_spec(spec)
        overrides[cfg.name] = cfg.level

    _manager = OutputManager(
        verbosity=verbosity,
        channel_overrides=overrides,
        file=file,
    )
    return _manager


def get_output() -> OutputManager:
    """The module-level OutputManager, created with defaults on first use."""
    global _manager
    if _manager is None:
        _manager = OutputManager()
    return _manager
