"""Command-line host for the zen-commit engine.

``zen-commit check`` is meant to run as a ``commit-msg`` git hook::

    zen-commit check "$1"
"""

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from . import log as zen_log
from .analyzer import Analyzer
from .commit_messages import first_line, read_commit_message_file
from .config import EngineConfig, load_engine_config
from .errors import EngineFailure
from .models import AnalysisOptions, AnalysisResult
from .overrides import OverrideStore
from .session import SessionWarningStore
from .storage import OverrideStorage
from .suppression import Suppressor

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Flag commit message anti-patterns and manage overrides.",
)
override_app = typer.Typer(no_args_is_help=True, help="Manage reasoned pattern overrides.")
app.add_typer(override_app, name="override")


class LogLevelName(str, Enum):
    trace = "trace"
    debug = "debug"
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


class SeverityName(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class CategoryName(str, Enum):
    best_practices = "best-practices"
    formatting = "formatting"
    style = "style"
    workflow = "workflow"
    content = "content"


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", help="Configuration file (default: search path)."),
]
OverridesOption = Annotated[
    Optional[Path],
    typer.Option("--overrides", help="Override file (default: from configuration)."),
]


def _die(error: EngineFailure) -> NoReturn:
    zen_log.error(f"error: {error}")
    if error.recovery_hint:
        zen_log.info(f"hint: {error.recovery_hint}")
    raise typer.Exit(code=1)


def _load_config(config_path: Path | None) -> EngineConfig:
    try:
        return load_engine_config(config_path)
    except EngineFailure as exc:
        _die(exc)


def _storage(engine_config: EngineConfig, overrides_path: Path | None) -> OverrideStorage:
    return OverrideStorage(overrides_path or engine_config.resolved_overrides_path())


def _load_store(storage: OverrideStorage) -> OverrideStore:
    return OverrideStore(asyncio.run(storage.load()))


def _save_store(storage: OverrideStorage, store: OverrideStore) -> None:
    try:
        asyncio.run(storage.save(store.export_all()))
    except EngineFailure as exc:
        _die(exc)


def _render_result(result: AnalysisResult, subject: str | None) -> None:
    console = Console()
    if not result.has_issues:
        console.print("No issues found.")
        return
    table = Table(title=Text(subject or "Commit message"), box=box.SIMPLE)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Match", overflow="fold")
    table.add_column("Suggestion", overflow="fold")
    for match in result.matches:
        table.add_row(
            match.severity,
            match.pattern_id,
            match.category,
            Text(match.matched_text),
            Text(match.suggestion or ""),
        )
    console.print(table)


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevelName],
        typer.Option("--log-level", help="Log verbosity.", case_sensitive=False),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colors.")] = False,
) -> None:
    if log_level is not None:
        zen_log.set_level(log_level.value)
    if no_color:
        zen_log.set_no_color(True)


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def check(
    message_file: Annotated[Path, typer.Argument(help="Commit message file.")],
    min_severity: Annotated[
        Optional[SeverityName],
        typer.Option("--min-severity", help="Ignore findings below this severity."),
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format.")
    ] = OutputFormat.table,
    config_path: ConfigOption = None,
    overrides_path: OverridesOption = None,
) -> None:
    """Analyze a commit message file; exit 1 when errors remain."""
    engine_config = _load_config(config_path)
    try:
        analyzer = Analyzer(engine_config.analyzer_config())
        message = read_commit_message_file(message_file)
    except EngineFailure as exc:
        _die(exc)
    store = _load_store(_storage(engine_config, overrides_path))
    suppressor = Suppressor(analyzer, SessionWarningStore(), store)
    suppressor.apply_overrides()
    options = AnalysisOptions(min_severity=min_severity.value if min_severity else None)
    result = suppressor.refresh(message, options)

    if output_format is OutputFormat.json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _render_result(result, first_line(message))
    if result.by_severity["error"]:
        raise typer.Exit(code=1)


@app.command("patterns")
def list_patterns(
    category: Annotated[
        Optional[CategoryName], typer.Option("--category", help="Only this category.")
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """List registered patterns."""
    engine_config = _load_config(config_path)
    try:
        analyzer = Analyzer(engine_config.analyzer_config())
    except EngineFailure as exc:
        _die(exc)
    table = Table(title="Patterns", box=box.SIMPLE)
    table.add_column("Id", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Enabled", no_wrap=True)
    table.add_column("Description", overflow="fold")
    for pattern in analyzer.list_patterns(category.value if category else None):
        table.add_row(
            pattern.id,
            pattern.severity,
            pattern.category,
            "no" if analyzer.is_disabled(pattern.id) else "yes",
            pattern.description,
        )
    Console().print(table)


@override_app.command("add")
def override_add(
    pattern_id: Annotated[str, typer.Argument(help="Pattern id to override.")],
    reason: Annotated[str, typer.Argument(help="Why the pattern does not apply.")],
    category: Annotated[Optional[str], typer.Option("--category", help="Grouping tag.")] = None,
    config_path: ConfigOption = None,
    overrides_path: OverridesOption = None,
) -> None:
    """Override a pattern with a recorded reason."""
    engine_config = _load_config(config_path)
    storage = _storage(engine_config, overrides_path)
    store = _load_store(storage)
    try:
        store.override_pattern(pattern_id, reason, category)
    except EngineFailure as exc:
        _die(exc)
    _save_store(storage, store)
    zen_log.success(f"overrode {pattern_id}")


@override_app.command("remove")
def override_remove(
    pattern_id: Annotated[str, typer.Argument(help="Pattern id to restore.")],
    config_path: ConfigOption = None,
    overrides_path: OverridesOption = None,
) -> None:
    """Remove the override for a pattern."""
    engine_config = _load_config(config_path)
    storage = _storage(engine_config, overrides_path)
    store = _load_store(storage)
    if not store.remove(pattern_id):
        zen_log.warning(f"no override for {pattern_id}")
        return
    _save_store(storage, store)
    zen_log.success(f"removed override for {pattern_id}")


@override_app.command("list")
def override_list(
    category: Annotated[Optional[str], typer.Option("--category", help="Only this tag.")] = None,
    config_path: ConfigOption = None,
    overrides_path: OverridesOption = None,
) -> None:
    """List recorded overrides."""
    engine_config = _load_config(config_path)
    store = _load_store(_storage(engine_config, overrides_path))
    records = store.list_by_category(category) if category else store.list()
    if not records:
        Console().print("No overrides recorded.")
        return
    table = Table(title="Overrides", box=box.SIMPLE)
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Created", no_wrap=True)
    table.add_column("Reason", overflow="fold")
    for record in records:
        table.add_row(
            record.pattern_id,
            record.category or "-",
            record.created_at or "-",
            Text(record.reason),
        )
    Console().print(table)


@override_app.command("clear")
def override_clear(
    config_path: ConfigOption = None,
    overrides_path: OverridesOption = None,
) -> None:
    """Remove every recorded override."""
    engine_config = _load_config(config_path)
    storage = _storage(engine_config, overrides_path)
    store = _load_store(storage)
    store.clear_all()
    _save_store(storage, store)
    zen_log.success("cleared all overrides")
