"""Engine failure contracts.

Engine components raise EngineFailure on expected domain or runtime failures
(bad pattern definitions, invalid input, persistence errors). Programmer bugs
raise normal exceptions.
"""

from __future__ import annotations

from typing import Literal

EngineFailureCode = Literal[
    "invalid_pattern",
    "validation_failed",
    "io_failed",
    "config_invalid",
]


class EngineFailure(Exception):
    """Expected engine failure: validation, persistence, or configuration error.

    Use ``raise EngineFailure(...) from exc`` to chain a causing exception; it
    is available as ``__cause__``. Hosts catch EngineFailure and handle it per
    their interface (the CLI prints ``error:`` and exits non-zero).
    """

    def __init__(
        self,
        code: EngineFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class InvalidPatternError(EngineFailure):
    """A pattern definition cannot be compiled or registered."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("invalid_pattern", message, recovery_hint=recovery_hint)


class ValidationFailedError(EngineFailure):
    """Validation failed (invalid input, constraint violation)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class IoFailedError(EngineFailure):
    """I/O operation failed (read, write)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)


class ConfigError(EngineFailure):
    """Configuration file is unreadable or does not validate."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("config_invalid", message, recovery_hint=recovery_hint)
