"""Explicit outcomes for operations that must not raise.

Loading overrides is best effort, but callers still need to tell "nothing
stored yet" apart from "stored data could not be read".
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import OverrideRecord


@dataclass(frozen=True)
class LoadSuccess:
    """Records read from storage.

    Args:
        records: Loaded override records (empty when nothing was stored).
        existed: Whether the backing file was present.
    """

    records: tuple[OverrideRecord, ...]
    existed: bool = True


@dataclass(frozen=True)
class LoadFailure:
    """Storage existed but could not be read or parsed.

    Args:
        message: Human-readable failure summary.
    """

    message: str


LoadResult = LoadSuccess | LoadFailure


def load_records(result: LoadResult) -> list[OverrideRecord]:
    """Collapse a load outcome to a record list; failures become empty."""
    if isinstance(result, LoadSuccess):
        return list(result.records)
    return []
