"""Quick-reject terms and evaluation priority for patterns.

Each pattern gets a set of lowercase literal substrings; when none of them is
present in the (lower-cased) text, the full expression is not evaluated. An
empty term set means the pattern always runs in full.

Example:
    >>> import re
    >>> from zen_commit.models import Pattern
    >>> pattern = Pattern(
    ...     id="todo-marker",
    ...     name="Todo Marker",
    ...     regex=re.compile(r"TODO|FIXME"),
    ...     severity="warning",
    ...     category="content",
    ... )
    >>> optimize([pattern])[0].quick_reject_terms
    ('todo', 'fixme')
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .detection import first_match
from .models import Pattern

_LITERAL_RUN = re.compile(r"""['"][^'"]{3,}['"]|[a-z0-9_]{3,}""", re.IGNORECASE)
_MIN_TERM_LENGTH = 3
_SEVERITY_BASE = {"error": 0, "warning": 10, "info": 20}
_UNKNOWN_SEVERITY_BASE = 30


@dataclass(frozen=True)
class OptimizedPattern:
    """A pattern plus its quick-reject terms and evaluation priority.

    Args:
        pattern: The underlying pattern.
        quick_reject_terms: Lowercase literals; at least one must occur in the
            lower-cased text for the pattern to possibly match.
        priority: Lower values are evaluated first.
    """

    pattern: Pattern
    quick_reject_terms: tuple[str, ...]
    priority: float

    @property
    def id(self) -> str:
        return self.pattern.id

    def might_match(self, lowered_text: str) -> bool:
        if not self.quick_reject_terms:
            return True
        return any(term in lowered_text for term in self.quick_reject_terms)


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _strip_quotes(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"":
        return literal[1:-1]
    return literal


def quick_reject_terms(pattern: Pattern) -> tuple[str, ...]:
    """Extract literal substrings that gate a full evaluation of ``pattern``.

    Literal runs come from the expression source: quoted substrings of at
    least three characters and ``[A-Za-z0-9_]`` runs of at least three. With
    none found, keywords from the pattern id (split on ``-``) and name (split
    on whitespace) are used instead.
    """
    literals = [
        _strip_quotes(found.group(0)).lower()
        for found in _LITERAL_RUN.finditer(pattern.source)
    ]
    if literals:
        return _dedupe(literals)
    keywords = pattern.id.split("-") + pattern.name.split()
    return _dedupe(
        keyword.lower() for keyword in keywords if len(keyword) >= _MIN_TERM_LENGTH
    )


def pattern_priority(pattern: Pattern) -> float:
    """Score a pattern by severity and expression complexity; lower runs first."""
    source = pattern.source
    score = float(_SEVERITY_BASE.get(pattern.severity, _UNKNOWN_SEVERITY_BASE))
    score += len(source) / 10
    if "(?" in source:
        score += 5
    if "|" in source:
        score += 3
    if "*" in source or "+" in source:
        score += 2
    if "{" in source:
        score += 2
    return score


def optimize(patterns: Iterable[Pattern]) -> list[OptimizedPattern]:
    """Attach quick-reject terms and priorities, sorted by ascending priority.

    The sort is stable: patterns with equal priority keep their input order.
    """
    optimized = [
        OptimizedPattern(
            pattern=pattern,
            quick_reject_terms=quick_reject_terms(pattern),
            priority=pattern_priority(pattern),
        )
        for pattern in patterns
    ]
    return sorted(optimized, key=lambda item: item.priority)


def quick_any_match(text: str, patterns: Sequence[OptimizedPattern]) -> bool:
    """Return whether any optimized pattern matches ``text``.

    This is a presence check only; positions and categories are not reported.
    """
    if not text or not patterns:
        return False
    lowered = text.lower()
    for optimized in patterns:
        if not optimized.might_match(lowered):
            continue
        if first_match(text, optimized.pattern):
            return True
    return False
