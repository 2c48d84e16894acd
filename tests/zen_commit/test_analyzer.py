import re

import pytest

import zen_commit.analyzer as analyzer_mod
from zen_commit.analyzer import CACHE_CAPACITY, Analyzer, AnalyzerConfig
from zen_commit.builtin_patterns import builtin_pattern_ids
from zen_commit.errors import InvalidPatternError
from zen_commit.models import CATEGORY_VALUES, SEVERITY_VALUES, AnalysisOptions, Pattern


def make_pattern(
    pattern_id: str,
    expression: str,
    *,
    severity: str = "warning",
    category: str = "content",
    flags: int = 0,
) -> Pattern:
    return Pattern(
        id=pattern_id,
        name=pattern_id.title(),
        description=f"{pattern_id} description",
        regex=re.compile(expression, flags),
        severity=severity,
        category=category,
    )


def custom_analyzer(*patterns: Pattern, **overrides: object) -> Analyzer:
    config = AnalyzerConfig(include_builtin=False, custom_patterns=patterns, **overrides)
    return Analyzer(config)


class FakeClock:
    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)

    def __call__(self) -> float:
        if len(self._readings) > 1:
            return self._readings.pop(0)
        return self._readings[0]


def test_default_analyzer_loads_builtin_patterns() -> None:
    analyzer = Analyzer()

    assert [pattern.id for pattern in analyzer.list_patterns()] == list(builtin_pattern_ids())


def test_analyze_detects_wip_marker_with_builtins() -> None:
    result = Analyzer().analyze("WIP: draft")

    assert result.has_issues is True
    assert [match.pattern_id for match in result.matches] == ["wip-commit"]
    assert result.by_category["best-practices"] == result.matches
    assert result.by_severity["warning"] == result.matches


def test_analyze_groups_under_every_category_and_severity() -> None:
    result = Analyzer().analyze("Add login flow")

    assert result.has_issues is False
    assert set(result.by_category) == set(CATEGORY_VALUES)
    assert set(result.by_severity) == set(SEVERITY_VALUES)
    assert all(group == () for group in result.by_category.values())


def test_analyze_filters_by_minimum_severity() -> None:
    analyzer = custom_analyzer(
        make_pattern("broken", "broken", severity="error"),
        make_pattern("chatty", "stuff", severity="info"),
    )

    everything = analyzer.analyze("broken stuff")
    result = analyzer.analyze("broken stuff", AnalysisOptions(min_severity="warning"))

    assert [match.pattern_id for match in everything.matches] == ["broken", "chatty"]
    assert [match.pattern_id for match in result.matches] == ["broken"]


def test_analyze_returns_equal_but_distinct_cached_results() -> None:
    analyzer = Analyzer()

    first = analyzer.analyze("WIP: draft")
    second = analyzer.analyze("WIP: draft")

    assert first == second
    assert first is not second
    assert first.matches[0] is not second.matches[0]
    assert analyzer.cache_size() == 1


def test_analyze_cache_key_includes_options() -> None:
    analyzer = Analyzer()

    analyzer.analyze("WIP: draft")
    filtered = analyzer.analyze("WIP: draft", AnalysisOptions(min_severity="error"))

    assert filtered.has_issues is False
    assert analyzer.cache_size() == 2


def test_analyze_cache_key_includes_explicit_pattern_metadata() -> None:
    analyzer = Analyzer()
    base = make_pattern("todo", "TODO")
    old = base.model_copy(update={"suggestion": "old"})
    new = base.model_copy(update={"suggestion": "new"})

    first = analyzer.analyze("TODO", AnalysisOptions(patterns=(old,)))
    second = analyzer.analyze("TODO", AnalysisOptions(patterns=(new,)))

    assert first.matches[0].suggestion == "old"
    assert second.matches[0].suggestion == "new"
    assert analyzer.cache_size() == 2


def test_analyze_evicts_oldest_cache_entries_past_capacity() -> None:
    analyzer = custom_analyzer(make_pattern("digit", r"\d"))

    for index in range(CACHE_CAPACITY + 5):
        analyzer.analyze(f"message {index}")

    assert analyzer.cache_size() == CACHE_CAPACITY


def test_disable_hides_pattern_and_enable_restores_it() -> None:
    analyzer = Analyzer()
    analyzer.analyze("WIP: draft")

    analyzer.disable("wip-commit")
    hidden = analyzer.analyze("WIP: draft")
    analyzer.enable("wip-commit")
    restored = analyzer.analyze("WIP: draft")

    assert analyzer.cache_size() == 1
    assert all(match.pattern_id != "wip-commit" for match in hidden.matches)
    assert [match.pattern_id for match in restored.matches] == ["wip-commit"]


def test_analyze_include_disabled_evaluates_disabled_patterns() -> None:
    analyzer = Analyzer(AnalyzerConfig(disabled_patterns=("wip-commit",)))

    assert analyzer.is_disabled("wip-commit")
    assert analyzer.analyze("WIP: draft").has_issues is False
    result = analyzer.analyze("WIP: draft", AnalysisOptions(include_disabled=True))
    assert [match.pattern_id for match in result.matches] == ["wip-commit"]


def test_analyze_filters_registry_by_category() -> None:
    analyzer = Analyzer()

    result = analyzer.analyze("Added login and fix signup.", AnalysisOptions(category="style"))

    assert {match.pattern_id for match in result.matches} == {
        "non-imperative-mood",
        "mixed-tense",
    }


def test_analyze_uses_explicit_patterns_verbatim() -> None:
    analyzer = Analyzer(AnalyzerConfig(disabled_patterns=("ticket",)))
    ticket = make_pattern("ticket", r"JIRA-\d+")

    result = analyzer.analyze("WIP: JIRA-12", AnalysisOptions(patterns=(ticket,)))

    assert [match.pattern_id for match in result.matches] == ["ticket"]


def test_analyze_truncates_long_messages() -> None:
    analyzer = custom_analyzer(make_pattern("tail", "TAIL"), max_message_size=5)

    result = analyzer.analyze("short TAIL")

    assert result.truncated is True
    assert result.has_issues is False
    assert analyzer.analyze("TAIL").truncated is False


def test_analyze_timeout_keeps_completed_batches_and_skips_cache() -> None:
    patterns = [make_pattern(f"p{index}", "x") for index in range(12)]
    clock = FakeClock(0.0, 0.0, 0.5, 2.0)
    analyzer = Analyzer(
        AnalyzerConfig(include_builtin=False, custom_patterns=tuple(patterns)),
        clock=clock,
    )

    result = analyzer.analyze("x")

    assert result.timed_out is True
    assert [match.pattern_id for match in result.matches] == [f"p{index}" for index in range(10)]
    assert analyzer.cache_size() == 0


def test_analyze_within_budget_is_not_timed_out() -> None:
    patterns = [make_pattern(f"p{index}", "x") for index in range(12)]
    analyzer = Analyzer(
        AnalyzerConfig(include_builtin=False, custom_patterns=tuple(patterns)),
        clock=FakeClock(0.0),
    )

    result = analyzer.analyze("x")

    assert result.timed_out is False
    assert len(result.matches) == 12


def test_analyze_contains_detection_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(text: str, patterns: object) -> list:
        raise RuntimeError("boom")

    monkeypatch.setattr(analyzer_mod, "detect", explode)
    analyzer = Analyzer()

    result = analyzer.analyze("WIP: draft")

    assert result.has_issues is False
    assert analyzer.cache_size() == 0


def test_add_or_replace_upserts_and_invalidates_cache() -> None:
    analyzer = custom_analyzer(make_pattern("marker", "TODO"))
    assert analyzer.analyze("TODO later").has_issues is True

    analyzer.add_or_replace(make_pattern("marker", "FIXME"))

    assert analyzer.cache_size() == 0
    assert analyzer.analyze("TODO later").has_issues is False
    assert len(analyzer.list_patterns()) == 1


def test_add_or_replace_rejects_invalid_patterns() -> None:
    analyzer = Analyzer()

    with pytest.raises(InvalidPatternError):
        analyzer.add_or_replace("not a pattern")  # type: ignore[arg-type]


def test_custom_pattern_with_builtin_id_replaces_builtin() -> None:
    replacement = make_pattern("wip-commit", "DRAFT", category="workflow")
    analyzer = Analyzer(AnalyzerConfig(custom_patterns=(replacement,)))

    assert analyzer.get_pattern("wip-commit") == replacement
    assert len(analyzer.list_patterns()) == len(builtin_pattern_ids())


def test_remove_pattern_drops_it_from_registry() -> None:
    analyzer = Analyzer()

    assert analyzer.remove_pattern("wip-commit") is True
    assert analyzer.remove_pattern("wip-commit") is False
    assert analyzer.get_pattern("wip-commit") is None


def test_list_patterns_returns_snapshot() -> None:
    analyzer = Analyzer()

    snapshot = analyzer.list_patterns("workflow")
    snapshot.clear()

    assert {pattern.id for pattern in analyzer.list_patterns("workflow")} == {
        "merge-commit",
        "fixup-commit",
    }


def test_patterns_matching_text_returns_distinct_enabled_patterns() -> None:
    analyzer = custom_analyzer(
        make_pattern("digit", r"\d"),
        make_pattern("word", "fix"),
        make_pattern("other", "nope"),
    )
    analyzer.disable("word")

    matched = analyzer.patterns_matching_text("fix 1 and 2")

    assert [pattern.id for pattern in matched] == ["digit"]


def test_quick_check_reflects_enabled_patterns() -> None:
    analyzer = Analyzer()

    assert analyzer.quick_check("fixup! tidy") is True
    analyzer.disable("fixup-commit")
    assert analyzer.quick_check("fixup! tidy") is False


def test_analyzers_do_not_share_state() -> None:
    first = Analyzer()
    second = Analyzer()

    first.disable("wip-commit")

    assert second.is_disabled("wip-commit") is False
    assert second.analyze("WIP: draft").has_issues is True
