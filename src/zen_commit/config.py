"""Configuration helpers for zen-commit.

This module locates and reads the JSON configuration file, validates it with
Pydantic models, and turns it into an :class:`~zen_commit.analyzer.AnalyzerConfig`.

Example:
    >>> from zen_commit.config import utc_now
    >>> utc_now().endswith("Z")
    True
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import log, paths
from .analyzer import DEFAULT_MATCH_TIMEOUT_MS, DEFAULT_MAX_MESSAGE_SIZE, AnalyzerConfig
from .errors import ConfigError
from .models import PatternDefinition


def utc_now() -> str:
    """Return the current UTC timestamp in ISO-8601 format with milliseconds.

    Returns:
        UTC timestamp like ``2026-01-18T12:34:56.789Z``.

    Example:
        >>> len(utc_now()) == len("2026-01-18T12:34:56.789Z")
        True
    """
    now = dt.datetime.now(tz=dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload, or ``None`` if the file does not exist.

    Example:
        >>> from pathlib import Path
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


class EngineConfig(BaseModel):
    """User-editable engine settings.

    Attributes:
        include_builtin: Load the built-in patterns.
        custom_patterns: Extra patterns; ids matching built-ins replace them.
        disabled_patterns: Pattern ids disabled at startup.
        max_message_size: Maximum analyzed message length in characters.
        match_timeout_ms: Cooperative matching budget in milliseconds.
        overrides_path: Override file location (default: user data dir).

    Example:
        >>> EngineConfig.model_validate({"disabled_patterns": ["merge-commit"]})
        EngineConfig(...)
    """

    model_config = ConfigDict(extra="forbid")

    include_builtin: bool = True
    custom_patterns: list[PatternDefinition] = Field(default_factory=list)
    disabled_patterns: list[str] = Field(default_factory=list)
    max_message_size: int = Field(default=DEFAULT_MAX_MESSAGE_SIZE, gt=0)
    match_timeout_ms: int = Field(default=DEFAULT_MATCH_TIMEOUT_MS, gt=0)
    overrides_path: str | None = None

    @field_validator("disabled_patterns", mode="before")
    @classmethod
    def normalize_disabled(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return value

    @field_validator("overrides_path", mode="before")
    @classmethod
    def normalize_overrides_path(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value

    def analyzer_config(self) -> AnalyzerConfig:
        """Compile custom pattern definitions into analyzer settings.

        Raises:
            InvalidPatternError: When a custom pattern does not compile.
        """
        return AnalyzerConfig(
            include_builtin=self.include_builtin,
            custom_patterns=tuple(definition.to_pattern() for definition in self.custom_patterns),
            disabled_patterns=tuple(self.disabled_patterns),
            max_message_size=self.max_message_size,
            match_timeout_ms=self.match_timeout_ms,
        )

    def resolved_overrides_path(self) -> Path:
        if self.overrides_path:
            return Path(self.overrides_path).expanduser()
        return paths.default_overrides_path()


def parse_engine_config(payload: dict, source: Path | str | None = None) -> EngineConfig:
    """Validate an engine config payload.

    Raises:
        ConfigError: When the payload does not validate.
    """
    try:
        return EngineConfig.model_validate(payload)
    except ValidationError as exc:
        location = f" at {source}" if source else ""
        raise ConfigError(f"invalid zen-commit config{location}:\n{exc}") from exc


def find_config_path(cwd: Path | None = None) -> Path | None:
    for candidate in paths.config_search_paths(cwd):
        if candidate.is_file():
            return candidate
    return None


def load_engine_config(path: Path | None = None, *, cwd: Path | None = None) -> EngineConfig:
    """Load the engine config from ``path`` or the first file found on the search path.

    Returns defaults when no configuration file exists.

    Raises:
        ConfigError: When the file cannot be read or does not validate.
    """
    source = path or find_config_path(cwd)
    if source is None:
        log.debug("no zen-commit config found; using defaults")
        return EngineConfig()
    try:
        payload = load_json(source)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to read zen-commit config at {source}: {exc}") from exc
    if payload is None:
        raise ConfigError(f"zen-commit config not found at {source}")
    if not isinstance(payload, dict):
        raise ConfigError(f"zen-commit config at {source} must be a JSON object")
    log.debug(f"loaded zen-commit config from {source}")
    return parse_engine_config(payload, source)
