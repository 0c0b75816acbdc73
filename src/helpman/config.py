"""Configuration management for helpman.

Three-layer config resolution (highest priority wins):
  1. CLI flags - explicit on the command line
  2. Project config - .helpman.json in the current directory or a parent
  3. Global config - ~/.helpman/config.json

A project that always documents its tool the same way keeps the include
file, section and help option in .helpman.json; running plain
``helpman ./mytool`` then produces the same page every time.
"""

import json
import os
from pathlib import Path

from helpman.lib.log_lib import get_output


PROJECT_CONFIG_NAME = ".helpman.json"

CONFIG_KEYS = ["section", "include", "opt_include", "help_option", "name",
               "output"]


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.helpman/)."""
    return Path.home() / ".helpman"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .helpman.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object from path, returning {} when missing or malformed."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        get_output().warning(f"ignoring malformed config {path}: {e}",
                             channel='config')
        return {}
    if not isinstance(data, dict):
        get_output().warning(f"ignoring config {path}: not a JSON object",
                             channel='config')
        return {}
    return data


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .helpman.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(args, keys=None, start_dir=None):
    """Resolve config values using three-layer precedence.

    For each key in `keys`, checks (in order):
      1. CLI args (from argparse namespace; None means "not given")
      2. Project .helpman.json
      3. Global ~/.helpman/config.json

    JSON files may spell keys with hyphens or underscores.

    Returns a dict keyed by the underscore spelling; unresolved keys map
    to None.
    """
    if keys is None:
        keys = CONFIG_KEYS

    out = get_output()
    project_cfg, project_path = load_project_config(start_dir)
    global_cfg = load_global_config()
    if project_path:
        out.emit(2, "Project config: {path}", channel='config', path=project_path)

    resolved = {}
    for key in keys:
        arg_key = key.replace("-", "_")
        json_keys = (arg_key, arg_key.replace("_", "-"))

        layers = [
            ("cli", {arg_key: getattr(args, arg_key, None)}),
            ("project", project_cfg),
            ("global", global_cfg),
        ]
        resolved[arg_key] = None
        for layer, values in layers:
            value = next((values[k] for k in json_keys
                          if values.get(k) is not None), None)
            if value is not None:
                resolved[arg_key] = value
                out.emit(3, "{key} = {value!r} ({layer})", channel='config',
                         key=arg_key, value=value, layer=layer)
                break

    return resolved
