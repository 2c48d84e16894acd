from zen_commit.analyzer import Analyzer
from zen_commit.session import SessionWarningStore


def _warnings_for(text: str):
    return list(Analyzer().analyze(text).matches)


def test_dismiss_hides_warning_for_current_set_only() -> None:
    store = SessionWarningStore()
    warnings = _warnings_for("Added login and fix signup")
    store.set_warnings(warnings)

    store.dismiss("mixed-tense")

    assert [warning.pattern_id for warning in store.warnings()] == ["non-imperative-mood"]
    store.set_warnings(warnings)
    assert {warning.pattern_id for warning in store.warnings()} == {
        "non-imperative-mood",
        "mixed-tense",
    }


def test_dismiss_permanently_filters_future_warning_sets() -> None:
    store = SessionWarningStore()
    warnings = _warnings_for("WIP: draft")
    store.set_warnings(warnings)

    store.dismiss_permanently("wip-commit")
    store.set_warnings(warnings)

    assert store.warnings() == []
    assert store.is_permanently_dismissed("wip-commit") is True


def test_remove_permanent_dismissal_restores_visibility() -> None:
    store = SessionWarningStore()
    warnings = _warnings_for("WIP: draft")
    store.dismiss_permanently("wip-commit")

    store.remove_permanent_dismissal("wip-commit")
    store.set_warnings(warnings)

    assert [warning.pattern_id for warning in store.warnings()] == ["wip-commit"]


def test_session_dismissal_alone_does_not_disable_pattern_in_analyzer() -> None:
    analyzer = Analyzer()
    store = SessionWarningStore()
    store.set_warnings(analyzer.analyze("WIP: draft").matches)

    store.dismiss_permanently("wip-commit")

    assert store.warnings() == []
    assert analyzer.is_disabled("wip-commit") is False
    assert analyzer.analyze("WIP: draft").has_issues is True


def test_pairing_dismissal_with_disable_suppresses_future_analyses() -> None:
    analyzer = Analyzer()
    store = SessionWarningStore()

    store.dismiss_permanently("wip-commit")
    analyzer.disable("wip-commit")
    store.set_warnings(analyzer.analyze("WIP: draft").matches)

    assert store.warnings() == []
    assert analyzer.analyze("WIP: draft").has_issues is False


def test_dismiss_all_and_reset() -> None:
    store = SessionWarningStore()
    store.set_warnings(_warnings_for("WIP: draft"))
    store.dismiss_permanently("merge-commit")

    store.dismiss_all()
    assert store.warnings() == []
    assert store.is_permanently_dismissed("merge-commit") is True

    store.reset()
    assert store.is_permanently_dismissed("merge-commit") is False


def test_snapshot_and_restore_round_trip() -> None:
    store = SessionWarningStore()
    store.set_warnings(_warnings_for("Added login and fix signup"))
    store.dismiss_permanently("mixed-tense")
    snapshot = store.snapshot()

    store.reset()
    store.restore(snapshot)

    assert [warning.pattern_id for warning in store.warnings()] == ["non-imperative-mood"]
    assert store.is_permanently_dismissed("mixed-tense") is True


def test_warnings_returns_copy() -> None:
    store = SessionWarningStore()
    store.set_warnings(_warnings_for("WIP: draft"))

    store.warnings().clear()

    assert len(store.warnings()) == 1
