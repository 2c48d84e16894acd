"""Pydantic models for patterns, matches, analysis results, and overrides."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .errors import InvalidPatternError

SEVERITY_VALUES = ("info", "warning", "error")
Severity = Literal["info", "warning", "error"]

CATEGORY_VALUES = ("best-practices", "formatting", "style", "workflow", "content")
Category = Literal["best-practices", "formatting", "style", "workflow", "content"]

SEVERITY_RANK: dict[str, int] = {"info": 1, "warning": 2, "error": 3}

_FLAG_BITS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
}


class PatternExamples(BaseModel):
    """Sample commit messages that do and do not trigger a pattern."""

    model_config = ConfigDict(frozen=True)

    good: tuple[str, ...] = ()
    bad: tuple[str, ...] = ()


class Pattern(BaseModel):
    """A named rule describing an undesirable commit-message trait.

    Attributes:
        id: Unique, stable identifier.
        name: Human-readable name.
        description: What the pattern checks for.
        regex: Compiled expression; its flags control case sensitivity.
        multiple: Report every non-overlapping occurrence instead of the first.
        severity: info|warning|error.
        category: best-practices|formatting|style|workflow|content.
        suggestion: Optional advice for fixing the issue.
        examples: Optional good/bad sample messages.
        version: Optional definition version.

    Example:
        >>> import re
        >>> Pattern(
        ...     id="wip",
        ...     name="WIP",
        ...     description="Unfinished work",
        ...     regex=re.compile("WIP", re.IGNORECASE),
        ...     severity="warning",
        ...     category="best-practices",
        ... ).id
        'wip'
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    regex: re.Pattern[str]
    multiple: bool = False
    severity: Severity
    category: Category
    suggestion: str | None = None
    examples: PatternExamples | None = None
    version: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip()
            if not normalized:
                raise ValueError("pattern id must not be empty")
            return normalized
        return value

    @property
    def source(self) -> str:
        return self.regex.pattern

    def fingerprint(self) -> tuple[object, ...]:
        """Return a hashable identity for cache keys.

        Covers every field copied into a :class:`PatternMatch`.
        """
        return (
            self.id,
            self.name,
            self.description,
            self.regex.pattern,
            self.regex.flags,
            self.multiple,
            self.severity,
            self.category,
            self.suggestion,
        )


def parse_flags(flags: str) -> tuple[int, bool]:
    """Translate a flag string into ``re`` flag bits and the multi-match flag.

    Example:
        >>> import re
        >>> parse_flags("gi") == (re.IGNORECASE, True)
        True
    """
    bits = 0
    multiple = False
    for flag in flags.strip():
        if flag == "g":
            multiple = True
            continue
        if flag not in _FLAG_BITS:
            raise InvalidPatternError(f"unsupported pattern flag {flag!r}")
        bits |= _FLAG_BITS[flag]
    return bits, multiple


class PatternDefinition(BaseModel):
    """JSON-friendly pattern definition used by configuration files."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    description: str = ""
    expression: str
    flags: str = ""
    severity: Severity = "warning"
    category: Category = "content"
    suggestion: str | None = None
    examples: PatternExamples | None = None
    version: str | None = None

    def to_pattern(self) -> Pattern:
        """Compile this definition into a :class:`Pattern`.

        Raises:
            InvalidPatternError: When the expression or flags are malformed.
        """
        bits, multiple = parse_flags(self.flags)
        try:
            regex = re.compile(self.expression, bits)
        except re.error as exc:
            raise InvalidPatternError(
                f"pattern {self.id!r} has an invalid expression: {exc}"
            ) from exc
        try:
            return Pattern(
                id=self.id,
                name=self.name,
                description=self.description,
                regex=regex,
                multiple=multiple,
                severity=self.severity,
                category=self.category,
                suggestion=self.suggestion,
                examples=self.examples,
                version=self.version,
            )
        except ValidationError as exc:
            raise InvalidPatternError(f"pattern {self.id!r} is invalid:\n{exc}") from exc


class PatternMatch(BaseModel):
    """One occurrence of a pattern in analyzed text.

    Pattern metadata is copied at match time so later registry changes do not
    alter existing results.
    """

    model_config = ConfigDict(frozen=True)

    pattern_id: str
    name: str
    description: str
    severity: Severity
    category: Category
    offset: int
    length: int
    matched_text: str
    captures: tuple[str, ...] | None = None
    suggestion: str | None = None


def _empty_by_category() -> dict[str, tuple[PatternMatch, ...]]:
    return {category: () for category in CATEGORY_VALUES}


def _empty_by_severity() -> dict[str, tuple[PatternMatch, ...]]:
    return {severity: () for severity in SEVERITY_VALUES}


class AnalysisResult(BaseModel):
    """Grouped outcome of analyzing one text.

    Attributes:
        matches: Matches in evaluation order.
        has_issues: Whether any match was found.
        by_category: Matches grouped under all five categories.
        by_severity: Matches grouped under all three severities.
        timed_out: The time budget fired before every pattern ran.
        truncated: The text was cut to the configured maximum size.
    """

    model_config = ConfigDict(frozen=True)

    matches: tuple[PatternMatch, ...] = ()
    has_issues: bool = False
    by_category: dict[Category, tuple[PatternMatch, ...]] = Field(
        default_factory=_empty_by_category
    )
    by_severity: dict[Severity, tuple[PatternMatch, ...]] = Field(
        default_factory=_empty_by_severity
    )
    timed_out: bool = False
    truncated: bool = False

    @classmethod
    def from_matches(
        cls,
        matches: list[PatternMatch],
        *,
        timed_out: bool = False,
        truncated: bool = False,
    ) -> AnalysisResult:
        by_category: dict[str, list[PatternMatch]] = {key: [] for key in CATEGORY_VALUES}
        by_severity: dict[str, list[PatternMatch]] = {key: [] for key in SEVERITY_VALUES}
        for match in matches:
            by_category[match.category].append(match)
            by_severity[match.severity].append(match)
        return cls(
            matches=tuple(matches),
            has_issues=bool(matches),
            by_category={key: tuple(value) for key, value in by_category.items()},
            by_severity={key: tuple(value) for key, value in by_severity.items()},
            timed_out=timed_out,
            truncated=truncated,
        )


class AnalysisOptions(BaseModel):
    """Per-call analysis options.

    Attributes:
        min_severity: Drop matches below this severity.
        category: Only evaluate registry patterns in this category.
        include_disabled: Evaluate disabled registry patterns too.
        patterns: Explicit pattern list used verbatim instead of the registry.
    """

    model_config = ConfigDict(frozen=True)

    min_severity: Severity | None = None
    category: Category | None = None
    include_disabled: bool = False
    patterns: tuple[Pattern, ...] | None = None

    def cache_key(self) -> tuple[object, ...]:
        patterns = (
            None
            if self.patterns is None
            else tuple(pattern.fingerprint() for pattern in self.patterns)
        )
        return (self.min_severity, self.category, self.include_disabled, patterns)


class OverrideRecord(BaseModel):
    """A durable, reasoned suppression of one pattern.

    Serialized with camelCase keys (``patternId``, ``createdAt``); both
    camelCase and snake_case keys are accepted on input.

    Example:
        >>> record = OverrideRecord.model_validate(
        ...     {"patternId": "wip-commit", "reason": "prototype branch"}
        ... )
        >>> record.pattern_id, record.created_at
        ('wip-commit', None)
    """

    model_config = ConfigDict(populate_by_name=True)

    pattern_id: str = Field(alias="patternId", min_length=1)
    reason: str = Field(min_length=1)
    category: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)
