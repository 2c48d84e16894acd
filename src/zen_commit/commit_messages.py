"""Commit message file helpers for git hook integration."""

from __future__ import annotations

from pathlib import Path

from .errors import IoFailedError

_SCISSORS_MARKER = "# ------------------------ >8 ------------------------"


def strip_comments(message: str, comment_char: str = "#") -> str:
    """Drop git comment lines and everything below a scissors line.

    Args:
        message: Raw commit message as written by the editor.
        comment_char: Git's ``core.commentChar``.

    Returns:
        The message git would record, without trailing blank lines.

    Example:
        >>> strip_comments("Fix login\\n# Please enter the commit message\\n")
        'Fix login'
    """
    kept: list[str] = []
    for line in message.splitlines():
        if line.startswith(_SCISSORS_MARKER):
            break
        if line.startswith(comment_char):
            continue
        kept.append(line.rstrip())
    return "\n".join(kept).strip("\n")


def first_line(message: str) -> str | None:
    """Return the first non-empty line of a cleaned message."""
    for line in message.splitlines():
        candidate = line.strip()
        if candidate:
            return candidate
    return None


def read_commit_message_file(path: Path, comment_char: str = "#") -> str:
    """Read a commit message file and strip git comments.

    Args:
        path: Path to the commit message file supplied by git hooks.

    Raises:
        IoFailedError: When the file cannot be read.
    """
    try:
        payload = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IoFailedError(f"failed to read commit message file: {exc}") from exc
    return strip_comments(payload, comment_char)
