"""Single entry point for hiding findings, temporarily or permanently.

A temporary suppression hides a pattern's warnings for the rest of the
editing session. A permanent suppression also disables the pattern in the
analyzer and, when a reason is given, records an override so it can be
persisted.

Example:
    >>> from zen_commit.analyzer import Analyzer
    >>> from zen_commit.overrides import OverrideStore
    >>> from zen_commit.session import SessionWarningStore
    >>> analyzer = Analyzer()
    >>> suppressor = Suppressor(analyzer, SessionWarningStore(), OverrideStore())
    >>> suppressor.suppress("wip-commit", SuppressionMode.PERMANENT, reason="spike branch")
    >>> analyzer.is_disabled("wip-commit")
    True
"""

from __future__ import annotations

from enum import Enum

from .analyzer import Analyzer
from .errors import ValidationFailedError
from .models import AnalysisOptions, AnalysisResult, PatternMatch
from .overrides import OverrideStore
from .session import SessionWarningStore


class SuppressionMode(str, Enum):
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


class Suppressor:
    """Keep the session store, analyzer, and override store in step."""

    def __init__(
        self,
        analyzer: Analyzer,
        session: SessionWarningStore,
        overrides: OverrideStore | None = None,
    ) -> None:
        self.analyzer = analyzer
        self.session = session
        self.overrides = overrides

    def apply_overrides(self) -> None:
        """Disable every overridden pattern in the analyzer."""
        if self.overrides is None:
            return
        for pattern_id in self.overrides.overridden_ids():
            self.analyzer.disable(pattern_id)

    def refresh(self, text: str, options: AnalysisOptions | None = None) -> AnalysisResult:
        """Analyze ``text`` and publish the matches as the visible warnings."""
        result = self.analyzer.analyze(text, options)
        self.session.set_warnings(result.matches)
        return result

    def visible_warnings(self) -> list[PatternMatch]:
        return self.session.warnings()

    def suppress(
        self,
        pattern_id: str,
        mode: SuppressionMode,
        *,
        reason: str | None = None,
        category: str | None = None,
    ) -> None:
        """Hide ``pattern_id`` for the session or for good.

        Raises:
            ValidationFailedError: When a reason is given for a temporary
                suppression, or an override cannot be recorded.
        """
        if mode is SuppressionMode.TEMPORARY:
            if reason is not None:
                raise ValidationFailedError(
                    "temporary suppressions are not recorded; drop the reason",
                    recovery_hint="use SuppressionMode.PERMANENT to keep a justification",
                )
            self.session.dismiss(pattern_id)
            return
        if reason is not None:
            if self.overrides is None:
                raise ValidationFailedError("no override store configured for reasons")
            self.overrides.override_pattern(pattern_id, reason, category)
        self.session.dismiss_permanently(pattern_id)
        self.analyzer.disable(pattern_id)

    def unsuppress(self, pattern_id: str) -> None:
        """Undo a permanent suppression of ``pattern_id``."""
        self.session.remove_permanent_dismissal(pattern_id)
        self.analyzer.enable(pattern_id)
        if self.overrides is not None:
            self.overrides.remove(pattern_id)
