"""Built-in commit message patterns shipped with the engine."""

from __future__ import annotations

import re

from .models import Pattern, PatternExamples

BUILTIN_PATTERNS_VERSION = "1.0.0"

BUILTIN_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        id="wip-commit",
        name="Work In Progress",
        description="Avoid committing work-in-progress changes",
        regex=re.compile(r"^(WIP|wip):|^(Work in progress|work in progress)", re.IGNORECASE),
        severity="warning",
        category="best-practices",
        suggestion="Complete the work before committing, or use git stash instead",
        examples=PatternExamples(
            bad=("WIP: still working on this feature", "work in progress: not ready yet"),
            good=("Add user authentication feature", "Fix login redirect issue"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="long-first-line",
        name="Long First Line",
        description="First line should be 72 characters or less",
        regex=re.compile(r"^.{73,}"),
        severity="warning",
        category="formatting",
        suggestion="Keep the first line short and concise (50-72 characters)",
        examples=PatternExamples(
            bad=(
                "This is a very long commit message that exceeds the recommended length "
                "limit for the first line of a commit message",
            ),
            good=("Fix user authentication bug in login component",),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="non-imperative-mood",
        name="Non-Imperative Mood",
        description="Use imperative mood in commit messages",
        regex=re.compile(
            r"^(Added|Fixed|Updated|Removed|Changed|Implemented|Refactored|Improved)",
            re.IGNORECASE,
        ),
        severity="info",
        category="style",
        suggestion='Use imperative mood (e.g., "Add feature" instead of "Added feature")',
        examples=PatternExamples(
            bad=("Added user authentication", "Fixed login bug", "Updated documentation"),
            good=("Add user authentication", "Fix login bug", "Update documentation"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="trailing-period",
        name="Trailing Period",
        description="First line should not end with a period",
        regex=re.compile(r"^[^\n]*\.$", re.MULTILINE),
        severity="info",
        category="formatting",
        suggestion="Remove the trailing period from the first line",
        examples=PatternExamples(
            bad=("Add user authentication.", "Fix login redirect issue."),
            good=("Add user authentication", "Fix login redirect issue"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="merge-commit",
        name="Merge Commit",
        description="Avoid merge commits in feature branches",
        regex=re.compile(r"^Merge branch|^Merge remote-tracking branch|^Merge pull request"),
        severity="info",
        category="workflow",
        suggestion="Consider using git rebase instead of git merge",
        examples=PatternExamples(
            bad=(
                "Merge branch 'main' into feature-branch",
                "Merge pull request #123 from username/feature",
            ),
            good=("Add feature X", "Fix issue with Y"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="fixup-commit",
        name="Fixup Commit",
        description="Temporary fixup commit detected",
        regex=re.compile(r"^fixup!|^squash!", re.IGNORECASE),
        severity="warning",
        category="workflow",
        suggestion="This commit should be squashed before being pushed",
        examples=PatternExamples(
            bad=("fixup! Add user authentication", "squash! Fix login bug"),
            good=("Add user authentication", "Fix login bug"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="empty-message",
        name="Empty Message",
        description="Commit message should not be empty",
        regex=re.compile(r"^(\s*|\s*#.*)$"),
        severity="error",
        category="best-practices",
        suggestion="Add a meaningful commit message describing the changes",
        examples=PatternExamples(
            bad=("   ", "# With just a comment"),
            good=("Add user authentication", "Fix login redirect issue"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="vague-message",
        name="Vague Message",
        description="Commit message is too vague",
        regex=re.compile(
            r"^(fix|update|change|improve|refactor|cleanup)(\s+something|$)",
            re.IGNORECASE,
        ),
        severity="warning",
        category="content",
        suggestion="Be specific about what was changed and why",
        examples=PatternExamples(
            bad=("Fix something", "Update", "Cleanup"),
            good=("Fix user authentication timeout bug", "Update React to version 18.2.0"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="issue-only",
        name="Issue Reference Only",
        description="Commit message contains only an issue reference",
        regex=re.compile(r"^(fix|resolve|close|fixes|resolves|closes)?\s*#\d+$", re.IGNORECASE),
        severity="warning",
        category="content",
        suggestion="Include a description of what was changed, not just the issue number",
        examples=PatternExamples(
            bad=("#123", "Fixes #456", "Resolves #789"),
            good=("Fix login timeout issue (#123)", "Add user profile editing (#456)"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
    Pattern(
        id="mixed-tense",
        name="Mixed Tense",
        description="Mixing past and present tense in commit message",
        regex=re.compile(
            r"(Added|Fixed|Updated|Removed|Changed).*?\b(add|fix|update|remove|change)\b",
            re.IGNORECASE,
        ),
        severity="info",
        category="style",
        suggestion="Use consistent tense (preferably imperative present tense)",
        examples=PatternExamples(
            bad=("Added login and fix signup", "Fixed auth and update styles"),
            good=("Add login and fix signup", "Fix auth and update styles"),
        ),
        version=BUILTIN_PATTERNS_VERSION,
    ),
)


def builtin_pattern_ids() -> tuple[str, ...]:
    """Return the ids of the built-in patterns in declaration order."""
    return tuple(pattern.id for pattern in BUILTIN_PATTERNS)
