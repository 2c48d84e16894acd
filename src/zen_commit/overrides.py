"""In-memory store of reasoned pattern overrides.

Exactly one override is active per pattern id; overriding again replaces the
previous record. Persistence is explicit, see :mod:`zen_commit.storage`.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError

from .config import utc_now
from .errors import ValidationFailedError
from .models import OverrideRecord


class OverrideStore:
    """CRUD access to override records keyed by pattern id."""

    def __init__(self, records: Iterable[OverrideRecord] = ()) -> None:
        self._records: dict[str, OverrideRecord] = {}
        self.import_all(records)

    def __len__(self) -> int:
        return len(self._records)

    def override_pattern(
        self, pattern_id: str, reason: str, category: str | None = None
    ) -> OverrideRecord:
        """Record an override for ``pattern_id`` with a justification.

        Raises:
            ValidationFailedError: When the pattern id or reason is blank.
        """
        if not pattern_id.strip():
            raise ValidationFailedError("override pattern id must not be empty")
        if not reason.strip():
            raise ValidationFailedError(
                f"override for {pattern_id!r} needs a reason",
                recovery_hint="explain why the pattern does not apply",
            )
        record = OverrideRecord(
            pattern_id=pattern_id,
            reason=reason,
            category=category,
            created_at=utc_now(),
        )
        self._records[pattern_id] = record
        return record

    def is_overridden(self, pattern_id: str) -> bool:
        return pattern_id in self._records

    def get(self, pattern_id: str) -> OverrideRecord | None:
        record = self._records.get(pattern_id)
        return record.model_copy() if record is not None else None

    def remove(self, pattern_id: str) -> bool:
        return self._records.pop(pattern_id, None) is not None

    def list(self) -> list[OverrideRecord]:
        return [record.model_copy() for record in self._records.values()]

    def list_by_category(self, category: str) -> list[OverrideRecord]:
        return [
            record.model_copy()
            for record in self._records.values()
            if record.category == category
        ]

    def overridden_ids(self) -> frozenset[str]:
        return frozenset(self._records)

    def clear_all(self) -> None:
        self._records.clear()

    def import_all(self, records: Iterable[OverrideRecord | dict]) -> None:
        """Merge records into the store, assigning timestamps where missing.

        Every record is validated before any is merged.

        Raises:
            ValidationFailedError: When a raw record does not validate.
        """
        validated: list[OverrideRecord] = []
        for raw in records:
            try:
                record = (
                    raw if isinstance(raw, OverrideRecord) else OverrideRecord.model_validate(raw)
                )
            except ValidationError as exc:
                raise ValidationFailedError(f"invalid override record:\n{exc}") from exc
            if not record.created_at:
                record = record.model_copy(update={"created_at": utc_now()})
            else:
                record = record.model_copy()
            validated.append(record)
        for record in validated:
            self._records[record.pattern_id] = record

    def export_all(self) -> list[OverrideRecord]:
        return [record.model_copy() for record in self._records.values()]
