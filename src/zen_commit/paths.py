"""Path helpers for locating zen-commit data and configuration files."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

ZEN_COMMIT_APP_NAME = "zen-commit"
OVERRIDES_FILENAME = "overrides.json"
CONFIG_FILENAME = "config.json"
PROJECT_CONFIG_FILENAME = ".zen-commit.json"
CONFIG_ENV_VAR = "ZEN_COMMIT_CONFIG"


def data_dir() -> Path:
    """Return the base zen-commit data directory.

    Returns:
        Path to the user data directory for zen-commit.

    Example:
        >>> isinstance(data_dir(), Path)
        True
    """
    return Path(user_data_dir(ZEN_COMMIT_APP_NAME))


def default_overrides_path() -> Path:
    """Return the default override file path.

    Example:
        >>> default_overrides_path().name == OVERRIDES_FILENAME
        True
    """
    return data_dir() / OVERRIDES_FILENAME


def user_config_path() -> Path:
    """Return the user-level configuration file path."""
    return data_dir() / CONFIG_FILENAME


def config_search_paths(cwd: Path | None = None) -> list[Path]:
    """Return configuration candidates in lookup order.

    ``$ZEN_COMMIT_CONFIG`` comes first when set, then ``.zen-commit.json`` in
    ``cwd``, then the user-level ``config.json``.
    """
    candidates: list[Path] = []
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        candidates.append(Path(override).expanduser())
    candidates.append((cwd or Path.cwd()) / PROJECT_CONFIG_FILENAME)
    candidates.append(user_config_path())
    return candidates


def ensure_dir(path: Path) -> None:
    """Create a directory if it does not exist.

    Args:
        path: Directory path to ensure exists.

    Example:
        >>> ensure_dir(Path("/tmp/zen-commit-dir"))
    """
    path.mkdir(parents=True, exist_ok=True)
