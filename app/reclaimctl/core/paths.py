"""Filesystem locations used by reclaimctl itself.

Settings live under the XDG config home and sweep history under the XDG
state home; both honour ``XDG_CONFIG_HOME`` / ``XDG_STATE_HOME`` and fall
back to ``~/.config`` and ``~/.local/state``. On Windows the same layout
is used below the user profile.
"""

import os
from pathlib import Path

APP_NAME = "reclaimctl"

SETTINGS_FILENAME = "settings.toml"


def _app_dir(env_var: str, fallback: str) -> Path:
    """Application directory below an XDG base, or below the home fallback.

    An empty variable counts as unset.
    """
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory holding the settings file."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the sweep history.

    History outlives single runs but is not configuration, hence state.
    """
    return _app_dir("XDG_STATE_HOME", os.path.join(".local", "state"))


def get_settings_path() -> Path:
    """Default location of ``settings.toml``."""
    return get_config_dir() / SETTINGS_FILENAME


def ensure_state_dir() -> Path:
    """Create the state directory on first use.

    Returns:
        The state directory.

    Raises:
        RuntimeError: If the directory cannot be created, e.g. because a
            file occupies its path or the home directory is read-only.
    """
    state_dir = get_state_dir()
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create state directory {state_dir}: {e.strerror or e}"
        raise RuntimeError(msg) from e
    return state_dir
