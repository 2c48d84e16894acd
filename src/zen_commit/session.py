"""Per-session visible warning set with temporary dismissals.

Nothing here is persisted. :meth:`SessionWarningStore.dismiss_permanently`
only affects this store; callers that want the pattern gone from future
analyses must also call ``Analyzer.disable`` (or use
:class:`zen_commit.suppression.Suppressor`, which does both).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import PatternMatch


@dataclass(frozen=True)
class WarningSnapshot:
    warnings: tuple[PatternMatch, ...]
    permanently_dismissed: frozenset[str]


class SessionWarningStore:
    """Warnings currently shown to the user during one editing session."""

    def __init__(self) -> None:
        self._warnings: list[PatternMatch] = []
        self._permanently_dismissed: set[str] = set()

    def set_warnings(self, warnings: Iterable[PatternMatch]) -> None:
        """Replace the visible set, dropping permanently dismissed patterns."""
        self._warnings = [
            warning
            for warning in warnings
            if warning.pattern_id not in self._permanently_dismissed
        ]

    def warnings(self) -> list[PatternMatch]:
        return list(self._warnings)

    def dismiss(self, pattern_id: str) -> None:
        """Hide every warning for ``pattern_id`` until the next ``set_warnings``."""
        self._warnings = [
            warning for warning in self._warnings if warning.pattern_id != pattern_id
        ]

    def dismiss_all(self) -> None:
        self._warnings = []

    def dismiss_permanently(self, pattern_id: str) -> None:
        self._permanently_dismissed.add(pattern_id)
        self.dismiss(pattern_id)

    def remove_permanent_dismissal(self, pattern_id: str) -> None:
        self._permanently_dismissed.discard(pattern_id)

    def is_permanently_dismissed(self, pattern_id: str) -> bool:
        return pattern_id in self._permanently_dismissed

    def reset(self) -> None:
        self._warnings = []
        self._permanently_dismissed.clear()

    def snapshot(self) -> WarningSnapshot:
        return WarningSnapshot(
            warnings=tuple(self._warnings),
            permanently_dismissed=frozenset(self._permanently_dismissed),
        )

    def restore(self, snapshot: WarningSnapshot) -> None:
        self._warnings = list(snapshot.warnings)
        self._permanently_dismissed = set(snapshot.permanently_dismissed)
