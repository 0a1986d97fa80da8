"""Config file discovery.

Looks for ``tt/config.toml`` in the user's config directory, similar to how
most XDG-aware tools find their settings. Supports the ``TT_CONFIG`` env var
and the ``--config`` CLI flag as overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIRNAME = "tt"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "TT_CONFIG"


def config_home() -> Path:
    """``$XDG_CONFIG_HOME`` or ``~/.config``."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def find_config() -> Path | None:
    """Locate the config file.

    Checks the ``TT_CONFIG`` env var first, then the config home.
    Returns None if no file exists.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_file():
            return p
        return None

    candidate = config_home() / CONFIG_DIRNAME / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def expand_path(raw: str | Path) -> Path:
    """Expand ``~`` and ``$VARS`` in a user-supplied path."""
    return Path(os.path.expandvars(os.path.expanduser(str(raw))))
