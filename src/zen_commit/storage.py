"""File-backed persistence for override records.

The override file is a JSON array of ``{patternId, reason, category?,
createdAt}`` objects. Saving fails closed (errors propagate as
:class:`~zen_commit.errors.IoFailedError`); loading fails open (a missing or
unreadable file yields no records, the latter with a logged warning).

Concurrent saves are not coordinated: the last write to complete wins.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from . import log, paths
from .errors import IoFailedError
from .models import OverrideRecord
from .result import LoadFailure, LoadResult, LoadSuccess, load_records

_RECORDS = TypeAdapter(list[OverrideRecord])


def _write_records(path: Path, payload: list[dict[str, object]]) -> None:
    paths.ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")


def _read_records(path: Path) -> LoadResult:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LoadSuccess(records=(), existed=False)
    except (OSError, UnicodeDecodeError) as exc:
        return LoadFailure(message=f"failed to read overrides from {path}: {exc}")
    try:
        records = _RECORDS.validate_json(raw)
    except ValidationError as exc:
        return LoadFailure(message=f"invalid overrides file {path}:\n{exc}")
    return LoadSuccess(records=tuple(records))


class OverrideStorage:
    """Read and write override records at a single file path."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else paths.default_overrides_path()

    async def save(self, records: Iterable[OverrideRecord]) -> None:
        """Write the full record set, creating the parent directory if needed.

        Raises:
            IoFailedError: When the directory or file cannot be written.
        """
        payload = [record.to_payload() for record in records]
        try:
            await asyncio.to_thread(_write_records, self.path, payload)
        except OSError as exc:
            log.error(f"failed to save overrides to {self.path}: {exc}")
            raise IoFailedError(
                f"failed to save overrides: {exc}",
                recovery_hint=f"check that {self.path.parent} is writable",
            ) from exc

    async def load_result(self) -> LoadResult:
        """Load records, reporting read or parse failures explicitly."""
        return await asyncio.to_thread(_read_records, self.path)

    async def load(self) -> list[OverrideRecord]:
        """Load records; a missing or unreadable file yields an empty list."""
        result = await self.load_result()
        if isinstance(result, LoadFailure):
            log.warning(result.message)
        return load_records(result)
