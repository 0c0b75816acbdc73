"""Help capture: run the documented program and collect its help output.

All subprocess use in helpman goes through this module.
"""

import os
import subprocess

from helpman.errors import HelpCaptureError
from helpman.lib.log_lib import get_output


DEFAULT_HELP_OPTION = "-help"


def program_name(executable):
    """Return the page name for ``executable`` (its basename)."""
    return os.path.basename(os.path.normpath(str(executable)))


def get_help(executable, option=DEFAULT_HELP_OPTION, timeout=None):
    """Run ``executable option`` and return stdout and stderr combined.

    Args:
        executable: Path or name of the program.
        option: Help-requesting option.
        timeout: Seconds to wait before giving up (None waits forever).

    Returns:
        The captured text.

    Raises:
        HelpCaptureError: The program cannot be started, exits non-zero,
            times out, or prints nothing.
    """
    cmd = [str(executable), option]
    out = get_output()
    out.emit(2, "Running: {cmd}", channel='exec', cmd=" ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
            text=True, encoding="utf-8", errors="replace",
            timeout=timeout,
        )
    except OSError as e:
        raise HelpCaptureError(f"run {' '.join(cmd)}: {e.strerror or e}") from e
    except subprocess.TimeoutExpired as e:
        raise HelpCaptureError(
            f"run {' '.join(cmd)}: no answer after {timeout}s") from e

    if result.returncode != 0:
        last = result.stdout.strip().splitlines()[-1:] or [""]
        raise HelpCaptureError(
            f"run {' '.join(cmd)}: exit status {result.returncode}"
            + (f": {last[0]}" if last[0] else ""))
    if not result.stdout:
        raise HelpCaptureError(f"run {' '.join(cmd)}: empty output")

    out.emit(1, "Captured {n} lines of help from {prog}", channel='exec',
             n=result.stdout.count("\n"), prog=program_name(executable))
    return result.stdout
