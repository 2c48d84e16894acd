"""Pattern detection over commit message text.

Compiled ``re`` patterns carry no scan position between calls; the cursor
used for multi-match scanning is local to each :func:`detect` call, so two
calls against the same :class:`~zen_commit.models.Pattern` never interfere.

Example:
    >>> from zen_commit.builtin_patterns import BUILTIN_PATTERNS
    >>> [match.pattern_id for match in detect("WIP: draft", BUILTIN_PATTERNS)]
    ['wip-commit']
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from .models import Pattern, PatternMatch


def _captures(match: re.Match[str]) -> tuple[str, ...] | None:
    captures = tuple(group for group in match.groups() if group)
    return captures or None


def _to_match(pattern: Pattern, match: re.Match[str]) -> PatternMatch:
    return PatternMatch(
        pattern_id=pattern.id,
        name=pattern.name,
        description=pattern.description,
        severity=pattern.severity,
        category=pattern.category,
        offset=match.start(),
        length=match.end() - match.start(),
        matched_text=match.group(0),
        captures=_captures(match),
        suggestion=pattern.suggestion,
    )


def iter_occurrences(text: str, pattern: Pattern) -> Iterator[re.Match[str]]:
    """Yield the occurrences of ``pattern`` in ``text``.

    Single-match patterns yield at most the first occurrence. Multi-match
    patterns yield every non-overlapping occurrence; after a zero-length
    match the cursor moves forward one character.
    """
    regex = pattern.regex
    if not pattern.multiple:
        match = regex.search(text)
        if match is not None:
            yield match
        return

    cursor = 0
    while cursor <= len(text):
        match = regex.search(text, cursor)
        if match is None:
            return
        yield match
        cursor = match.end()
        if match.end() == match.start():
            cursor += 1


def detect(text: str, patterns: Iterable[Pattern]) -> list[PatternMatch]:
    """Detect patterns in a text string.

    Args:
        text: Text to analyze.
        patterns: Patterns to evaluate, in order.

    Returns:
        Matches grouped by pattern in evaluation order, each pattern's
        occurrences in text order. Empty when ``text`` is empty.
    """
    if not text:
        return []
    matches: list[PatternMatch] = []
    for pattern in patterns:
        for occurrence in iter_occurrences(text, pattern):
            matches.append(_to_match(pattern, occurrence))
    return matches


def first_match(text: str, pattern: Pattern) -> bool:
    """Return whether ``pattern`` occurs anywhere in ``text``."""
    if not text:
        return False
    return pattern.regex.search(text) is not None
