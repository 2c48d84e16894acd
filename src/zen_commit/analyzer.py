"""Commit message analysis: pattern selection, budgeted detection, and caching.

An :class:`Analyzer` owns its pattern registry, disabled-id set, and result
cache; hosts construct one and pass it to whatever needs it.

Example:
    >>> analyzer = Analyzer()
    >>> result = analyzer.analyze("WIP: draft")
    >>> [match.pattern_id for match in result.matches]
    ['wip-commit']
    >>> analyzer.disable("wip-commit")
    >>> analyzer.analyze("WIP: draft").has_issues
    False
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from . import log
from .builtin_patterns import BUILTIN_PATTERNS
from .detection import detect
from .models import (
    SEVERITY_RANK,
    AnalysisOptions,
    AnalysisResult,
    Category,
    Pattern,
    PatternMatch,
)
from .optimizer import OptimizedPattern, optimize, quick_any_match
from .registry import PatternRegistry, validate_pattern

BATCH_SIZE = 5
CACHE_CAPACITY = 100
DEFAULT_MAX_MESSAGE_SIZE = 10_000
DEFAULT_MATCH_TIMEOUT_MS = 1_000

CacheKey = tuple[str, tuple[object, ...]]


class AnalyzerConfig(BaseModel):
    """Analyzer construction options.

    Attributes:
        include_builtin: Start the registry with the built-in patterns.
        custom_patterns: Extra patterns; an id already present replaces it.
        disabled_patterns: Pattern ids disabled from the start.
        max_message_size: Longer texts are truncated to this many characters.
        match_timeout_ms: Cooperative budget for one analysis.
    """

    model_config = ConfigDict(frozen=True)

    include_builtin: bool = True
    custom_patterns: tuple[Pattern, ...] = ()
    disabled_patterns: tuple[str, ...] = ()
    max_message_size: int = Field(default=DEFAULT_MAX_MESSAGE_SIZE, gt=0)
    match_timeout_ms: int = Field(default=DEFAULT_MATCH_TIMEOUT_MS, gt=0)


class Analyzer:
    """Analyze commit messages against a mutable set of patterns.

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or AnalyzerConfig()
        initial = BUILTIN_PATTERNS if self._config.include_builtin else ()
        self._registry = PatternRegistry([*initial, *self._config.custom_patterns])
        self._disabled: set[str] = set(self._config.disabled_patterns)
        self._cache: dict[CacheKey, AnalysisResult] = {}
        self._optimized: list[OptimizedPattern] | None = None
        self._clock = clock

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def analyze(self, text: str, options: AnalysisOptions | None = None) -> AnalysisResult:
        """Analyze a commit message for pattern matches.

        Args:
            text: Message to analyze; truncated past ``max_message_size``.
            options: Severity/category filters or an explicit pattern list.

        Returns:
            An independent :class:`AnalysisResult`. When the time budget fires,
            the result holds the matches from completed batches and
            ``timed_out`` is set; such results are not cached.
        """
        options = options or AnalysisOptions()
        max_size = self._config.max_message_size
        truncated = len(text) > max_size
        if truncated:
            log.debug(f"analyzing first {max_size} of {len(text)} characters")
            text = text[:max_size]

        key: CacheKey = (text, options.cache_key())
        cached = self._cache.get(key)
        if cached is not None:
            log.trace("analysis cache hit")
            return cached.model_copy(deep=True)

        active = self._active_patterns(options)
        try:
            matches, timed_out = self._detect_in_batches(text, active)
        except Exception as exc:
            log.warning(f"pattern matching aborted: {exc}")
            return AnalysisResult.from_matches([], truncated=truncated)

        if options.min_severity is not None:
            threshold = SEVERITY_RANK[options.min_severity]
            matches = [match for match in matches if SEVERITY_RANK[match.severity] >= threshold]

        result = AnalysisResult.from_matches(matches, timed_out=timed_out, truncated=truncated)
        if not timed_out:
            self._store(key, result)
        return result

    def _active_patterns(self, options: AnalysisOptions) -> list[Pattern]:
        if options.patterns is not None:
            return list(options.patterns)
        patterns = self._registry.snapshot(options.category)
        if not options.include_disabled:
            patterns = [pattern for pattern in patterns if pattern.id not in self._disabled]
        return patterns

    def _detect_in_batches(
        self, text: str, patterns: Sequence[Pattern]
    ) -> tuple[list[PatternMatch], bool]:
        budget = self._config.match_timeout_ms / 1000
        started = self._clock()
        matches: list[PatternMatch] = []
        for start in range(0, len(patterns), BATCH_SIZE):
            if self._clock() - started > budget:
                log.warning(
                    f"pattern matching timed out after {self._config.match_timeout_ms}ms "
                    f"({start} of {len(patterns)} patterns evaluated)"
                )
                return matches, True
            matches.extend(detect(text, patterns[start : start + BATCH_SIZE]))
        return matches, False

    def _store(self, key: CacheKey, result: AnalysisResult) -> None:
        self._cache[key] = result.model_copy(deep=True)
        while len(self._cache) > CACHE_CAPACITY:
            del self._cache[next(iter(self._cache))]

    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()
        self._optimized = None

    def list_patterns(self, category: Category | None = None) -> list[Pattern]:
        """Return every registered pattern, enabled or not, optionally by category."""
        return self._registry.snapshot(category)

    def get_pattern(self, pattern_id: str) -> Pattern | None:
        return self._registry.get(pattern_id)

    def disable(self, pattern_id: str) -> None:
        self._disabled.add(pattern_id)
        self.clear_cache()

    def enable(self, pattern_id: str) -> None:
        self._disabled.discard(pattern_id)
        self.clear_cache()

    def is_disabled(self, pattern_id: str) -> bool:
        return pattern_id in self._disabled

    def disabled_ids(self) -> frozenset[str]:
        return frozenset(self._disabled)

    def add_or_replace(self, pattern: Pattern) -> None:
        """Register a pattern, replacing any existing one with the same id.

        Raises:
            InvalidPatternError: When the pattern is malformed.
        """
        self._registry.upsert(validate_pattern(pattern))
        self.clear_cache()

    def remove_pattern(self, pattern_id: str) -> bool:
        removed = self._registry.remove(pattern_id)
        if removed:
            self.clear_cache()
        return removed

    def _enabled_patterns(self) -> list[Pattern]:
        return [pattern for pattern in self._registry if pattern.id not in self._disabled]

    def patterns_matching_text(self, text: str) -> list[Pattern]:
        """Return the enabled patterns with at least one match in ``text``."""
        enabled = self._enabled_patterns()
        matched_ids = {match.pattern_id for match in detect(text, enabled)}
        return [pattern for pattern in enabled if pattern.id in matched_ids]

    def quick_check(self, text: str) -> bool:
        """Cheap presence test over the enabled patterns."""
        if self._optimized is None:
            self._optimized = optimize(self._enabled_patterns())
        return quick_any_match(text, self._optimized)
