"""
Named THAC0 levels.

The manager compares raw integers; these names only document intent at
call sites.  A message is shown when ``level <= threshold``.

    ←── quieter ────────── default ────────── louder ──→
    -4    -3     -2       -1      0       1     2      3
    wall  errors warnings minimal default info  detail debug
"""

DEBUG = 3          # Per-line parser decisions, tracing
DETAIL = 2         # Per-item results (flags found, sections merged)
INFO = 1           # Per-run summaries
DEFAULT = 0        # Normal output

MINIMAL = -1       # Suppress hints
WARNING = -2       # Warnings and errors only
ERROR = -3         # Errors only
NOTHING = -4       # Hard wall, exit code only
