"""Ordered, id-keyed store of pattern definitions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from .errors import InvalidPatternError
from .models import CATEGORY_VALUES, SEVERITY_VALUES, Category, Pattern


def validate_pattern(pattern: object) -> Pattern:
    """Check that ``pattern`` is a usable :class:`Pattern` before registering it.

    Raises:
        InvalidPatternError: When the object is not a pattern or is malformed.
    """
    if not isinstance(pattern, Pattern):
        raise InvalidPatternError(
            f"expected a Pattern, got {type(pattern).__name__}",
            recovery_hint="build custom rules with PatternDefinition.to_pattern()",
        )
    if not pattern.id.strip():
        raise InvalidPatternError("pattern id must not be empty")
    if not isinstance(pattern.regex, re.Pattern) or not isinstance(pattern.regex.pattern, str):
        raise InvalidPatternError(f"pattern {pattern.id!r} must use a compiled text expression")
    if pattern.severity not in SEVERITY_VALUES:
        raise InvalidPatternError(f"pattern {pattern.id!r} has unknown severity")
    if pattern.category not in CATEGORY_VALUES:
        raise InvalidPatternError(f"pattern {pattern.id!r} has unknown category")
    return pattern


class PatternRegistry:
    """Patterns keyed by id, kept in registration order.

    Re-registering an id replaces the definition in place.
    """

    def __init__(self, patterns: Iterable[Pattern] = ()) -> None:
        self._patterns: dict[str, Pattern] = {}
        for pattern in patterns:
            self.upsert(pattern)

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(list(self._patterns.values()))

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._patterns

    def get(self, pattern_id: str) -> Pattern | None:
        return self._patterns.get(pattern_id)

    def upsert(self, pattern: Pattern) -> bool:
        """Add or replace a pattern; return ``True`` when an id was replaced."""
        validate_pattern(pattern)
        replaced = pattern.id in self._patterns
        self._patterns[pattern.id] = pattern
        return replaced

    def remove(self, pattern_id: str) -> bool:
        return self._patterns.pop(pattern_id, None) is not None

    def snapshot(self, category: Category | None = None) -> list[Pattern]:
        patterns = list(self._patterns.values())
        if category is not None:
            patterns = [pattern for pattern in patterns if pattern.category == category]
        return patterns
