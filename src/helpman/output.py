"""User-facing messages for helpman.

The manual page owns stdout, so every message here goes to stderr.
The print_*() helpers respect the THAC0 quiet axis: they are level -2
(warning) messages, hidden at -QQQ and below.

Also re-exports the log_lib public API for convenience imports.
"""

import sys

from helpman.lib.log_lib import (                     # noqa: F401
    OutputManager, init_output, get_output,
    Hint, register_hint, register_hints, get_hint,
    trace,
)


def _should_print():
    """True unless verbosity is -3 (errors only) or lower."""
    return get_output().verbosity >= -2


def print_ok(msg):
    """Print a success message."""
    if _should_print():
        print(f"  [OK] {msg}", file=sys.stderr)


def print_error(msg):
    """Print an error message through OutputManager.error() (level -3)."""
    get_output().error(f"helpman: error: {msg}")
