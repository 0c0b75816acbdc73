"""Shared test fixtures for helpman test suite."""

import json
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from helpman.lib.log_lib import channels as _channels_mod
from helpman.lib.log_lib import manager as _manager_mod


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DATA_DIR = PROJECT_ROOT / "tests" / "test-data"


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: starts real subprocesses (run with run_tests.py --all)")


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_output():
    """Give every test a fresh OutputManager singleton and channel set.

    main() installs the helpman channels and a manager bound to the
    stderr of the moment; neither may leak into the next test.
    """
    saved_manager = _manager_mod._manager
    saved_channels = (
        _channels_mod.KNOWN_CHANNELS,
        _channels_mod.CHANNEL_DESCRIPTIONS,
        _channels_mod.OPT_IN_CHANNELS,
    )
    _manager_mod._manager = None
    yield
    _manager_mod._manager = saved_manager
    (_channels_mod.KNOWN_CHANNELS,
     _channels_mod.CHANNEL_DESCRIPTIONS,
     _channels_mod.OPT_IN_CHANNELS) = saved_channels


@pytest.fixture(autouse=True)
def _no_source_date_epoch(monkeypatch):
    """Tests that care set SOURCE_DATE_EPOCH themselves."""
    monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.helpman/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path, tmp_config_home, monkeypatch):
    """A project directory as cwd, isolated from any real config."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


# ---------------------------------------------------------------------------
# Sample file fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sample_help_text():
    """Help output of a typical Go program (tests/test-data/sample-help.txt)."""
    return (TEST_DATA_DIR / "sample-help.txt").read_text(encoding="utf-8")


@pytest.fixture
def sample_include(tmp_project):
    """Copy the sample include file into the project directory."""
    src = TEST_DATA_DIR / "sample.h2m"
    dest = tmp_project / "sample.h2m"
    dest.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    return dest


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sample_project_config(tmp_project):
    """Write a .helpman.json file in the project directory."""
    config = {
        "section": 8,
        "help-option": "--help",
    }
    path = tmp_project / ".helpman.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config


@pytest.fixture
def sample_global_config(tmp_config_home):
    """Write a global config file in the tmp home."""
    config_dir = tmp_config_home / ".helpman"
    config_dir.mkdir()
    config = {
        "section": 6,
        "name": "from the global config",
    }
    path = config_dir / "config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config


# ---------------------------------------------------------------------------
# Fake documented programs
# ---------------------------------------------------------------------------
@pytest.fixture
def fake_program(tmp_path):
    """Build an executable script that prints ``text`` and exits ``status``.

    POSIX only: the script relies on its shebang line.
    """
    if sys.platform == "win32":
        pytest.skip("shebang scripts need a POSIX system")

    def _make(text, status=0, name="fakeprog"):
        data = tmp_path / f"{name}.txt"
        data.write_text(text, encoding="utf-8")
        script = tmp_path / name
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            f"sys.stdout.write(open({str(data)!r}, encoding='utf-8').read())\n"
            f"sys.exit({status})\n",
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    return _make


# ---------------------------------------------------------------------------
# Mock help capture fixture
# ---------------------------------------------------------------------------
@pytest.fixture
def mock_get_help(monkeypatch, sample_help_text):
    """Replace helpman.runner.get_help with a canned answer.

    Returns a dict: set ``text`` or ``error`` to change the answer;
    ``calls`` records (executable, option, timeout).
    """
    state = {"text": sample_help_text, "error": None, "calls": []}

    def fake_get_help(executable, option="-help", timeout=None):
        state["calls"].append((executable, option, timeout))
        if state["error"] is not None:
            raise state["error"]
        return state["text"]

    import helpman.runner as runner_mod
    monkeypatch.setattr(runner_mod, "get_help", fake_get_help)
    return state
