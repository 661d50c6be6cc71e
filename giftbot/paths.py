"""Where configuration and log files are looked for and written."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_DIR_NAME = "steamgifts-bot"
CONFIG_FILE_NAME = "config.yml"
STATE_FILE_NAME = "state.json"
LOG_FILE_NAME = "steamgifts-bot.log"


def _executable_dir() -> Path | None:
    """Directory holding the program that was started, if it can be told."""
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or argv0 in ("-c", "-m"):
        return None
    try:
        return Path(argv0).resolve().parent
    except OSError:
        return None


def _user_config_dir() -> Path | None:
    """The per-user configuration directory of the current platform."""
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA", "")
        return Path(appdata) if appdata else None
    home = os.environ.get("HOME", "")
    if sys.platform == "darwin":
        return Path(home, "Library", "Application Support") if home else None
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return Path(home, ".config") if home else None


def config_candidates() -> list[Path]:
    """Paths searched for a config file, in order; the first that exists wins.

    The program's own directory comes first so a config written next to it
    by the setup wizard is found without any flags.
    """
    paths: list[Path] = []
    exe_dir = _executable_dir()
    if exe_dir is not None:
        paths.append(exe_dir / CONFIG_FILE_NAME)
    try:
        paths.append(Path.cwd() / CONFIG_FILE_NAME)
    except OSError:
        pass
    config_dir = _user_config_dir()
    if config_dir is not None:
        paths.append(config_dir / APP_DIR_NAME / CONFIG_FILE_NAME)
    return paths


def find_config() -> Path | None:
    """Return the first existing candidate config path, or None."""
    return next((path for path in config_candidates() if path.exists()), None)


def default_save_path() -> Path:
    """Where a freshly created config is written."""
    exe_dir = _executable_dir()
    if exe_dir is not None:
        return exe_dir / CONFIG_FILE_NAME
    config_dir = _user_config_dir()
    if config_dir is not None:
        return config_dir / APP_DIR_NAME / CONFIG_FILE_NAME
    return Path(CONFIG_FILE_NAME)


def log_file_path(config_path: str | os.PathLike[str] | None = None) -> Path | None:
    """The log file kept beside the given (or discovered) config file."""
    if config_path:
        return Path(config_path).parent / LOG_FILE_NAME
    found = find_config()
    if found is not None:
        return found.parent / LOG_FILE_NAME
    return None