"""Tests for helpman.output - user-facing message helpers."""

from helpman.lib.log_lib import init_output
from helpman.output import (
    print_error, print_ok,
    get_output, Hint, register_hint, register_hints, trace,
)


def test_print_ok_format(capsys):
    """print_ok should output '[OK] message' format on stderr."""
    print_ok("it works")
    captured = capsys.readouterr()
    assert "[OK] it works" in captured.err
    assert captured.out == ""


# ---------------------------------------------------------------------------
# Quiet axis suppression tests
# ---------------------------------------------------------------------------
class TestQuietAxisSuppression:
    """print_*() functions respect the THAC0 quiet axis."""

    def test_default_verbosity_shows_all(self, capsys):
        """At verbosity 0, all print_*() functions show output."""
        init_output(verbosity=0)
        print_ok("visible")
        err = capsys.readouterr().err
        assert "[OK] visible" in err

    def test_quiet_QQ_still_shows_prints(self, capsys):
        """-QQ (verbosity -2) still shows print_*() functions."""
        init_output(verbosity=-2)
        print_ok("still visible")
        err = capsys.readouterr().err
        assert "[OK] still visible" in err

    def test_quiet_QQQ_suppresses_prints(self, capsys):
        """-QQQ (verbosity -3) suppresses all print_*() except errors."""
        init_output(verbosity=-3)
        print_ok("hidden")
        assert capsys.readouterr().err == ""

    def test_QQQ_still_shows_errors(self, capsys):
        """-QQQ shows errors via OutputManager.error()."""
        init_output(verbosity=-3)
        print_error("visible error")
        assert "helpman: error: visible error" in capsys.readouterr().err

    def test_quiet_QQQQ_suppresses_everything(self, capsys):
        """-QQQQ (verbosity -4) suppresses even errors (hard wall)."""
        init_output(verbosity=-4)
        print_ok("hidden")
        print_error("also hidden")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


# ---------------------------------------------------------------------------
# Error routing tests
# ---------------------------------------------------------------------------
class TestPrintErrorRoutesToManager:
    """print_error() routes through OutputManager.error()."""

    def test_error_goes_to_stderr(self, capsys):
        """print_error() output appears on stderr, not stdout."""
        init_output(verbosity=0)
        print_error("something broke")
        captured = capsys.readouterr()
        assert "helpman: error: something broke" in captured.err
        assert captured.out == ""

    def test_braces_printed_verbatim(self, capsys):
        init_output(verbosity=0)
        print_error("bad template {x}")
        assert "bad template {x}" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Re-export tests
# ---------------------------------------------------------------------------
class TestReExports:
    """output.py re-exports the log_lib public API."""

    def test_get_output_exported(self):
        assert callable(get_output)

    def test_hint_exported(self):
        assert Hint is not None

    def test_register_hint_exported(self):
        assert callable(register_hint)
        assert callable(register_hints)

    def test_trace_exported(self):
        assert callable(trace)
