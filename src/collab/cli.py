"""CLI interface for collab using Typer framework."""

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from collab import __description__, __version__
from collab.config import CollabConfig, LogLevel, OutputFormat, load_config
from collab.discovery import resolve_blackboard_root
from collab.models.project import ProjectContributor
from collab.output import TableFormatter, emit_json, project_summary
from collab.parser import (
    CollabError,
    load_all_projects,
    load_contributors,
    load_journal,
    load_registry,
)
from collab.parser.manifest import PROJECTS_DIR
from collab.validation import resolve_project, run_validation

app = typer.Typer(
    name="collab",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)
project_app = typer.Typer(help="Inspect blackboard projects")
journal_app = typer.Typer(help="Inspect project journals")
app.add_typer(project_app, name="project")
app.add_typer(journal_app, name="journal")

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


@dataclass
class CliState:
    """Options shared by every command."""
    config: CollabConfig
    root: Path | None = None
    pretty: bool = False


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"collab version {__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: Any) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(message))}")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    root: Annotated[
        Optional[Path],
        typer.Option("--root", "-r", help="Blackboard root (default: PAI_COLLAB_ROOT or walk up from cwd)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .collab.json)")
    ] = None,
    pretty: Annotated[
        Optional[bool],
        typer.Option("--pretty/--json", help="Human-readable tables instead of JSON")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """collab - CLI for pai-collab blackboard validation."""
    try:
        collab_config = load_config(config)
    except ValueError as e:
        _fail(e)

    _setup_logging(LogLevel.DEBUG.value if verbose else collab_config.logging.level)

    if pretty is None:
        pretty = collab_config.output.format == OutputFormat.PRETTY.value

    ctx.obj = CliState(config=collab_config, root=root, pretty=pretty)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj or CliState(config=CollabConfig())


def _blackboard_root(state: CliState) -> Path:
    try:
        return resolve_blackboard_root(state.root, state.config)
    except CollabError as e:
        _fail(e)


@app.command()
def validate(ctx: typer.Context) -> None:
    """Validate blackboard artifacts; exits 1 when violations are found."""
    state = _state(ctx)
    root = _blackboard_root(state)

    result = run_validation(root)

    if state.pretty:
        TableFormatter(console).violations(result)
    else:
        emit_json([violation.to_dict() for violation in result.violations])

    raise typer.Exit(result.exit_code)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show a blackboard-wide overview."""
    state = _state(ctx)
    root = _blackboard_root(state)

    projects = load_all_projects(root)
    by_status = Counter(str(project.status or "unknown") for _, project in projects)

    by_zone: dict[str, int] | None = None
    try:
        roster = load_contributors(root).contributors
    except CollabError as e:
        logger.warning(f"Contributor roster unavailable: {e}")
    else:
        if isinstance(roster, dict):
            records = [ProjectContributor.from_entry(entry) for entry in roster.values()]
            by_zone = dict(Counter(str(record.zone or "unknown") if record else "unknown"
                                   for record in records))

    overview = {
        "root": str(root),
        "projects": len(projects),
        "byStatus": dict(sorted(by_status.items())),
        "contributors": by_zone,
        "violations": len(run_validation(root).violations),
    }

    if state.pretty:
        TableFormatter(console).overview(overview)
    else:
        emit_json(overview)


@app.command()
def registry(ctx: typer.Context) -> None:
    """Show the REGISTRY.md project and agent tables."""
    state = _state(ctx)
    root = _blackboard_root(state)

    try:
        parsed = load_registry(root)
    except CollabError as e:
        _fail(e)

    if state.pretty:
        TableFormatter(console).registry(parsed)
    else:
        emit_json(parsed.model_dump(mode="json", by_alias=True))


@project_app.command("list")
def project_list(ctx: typer.Context) -> None:
    """List all projects with a readable PROJECT.yaml."""
    state = _state(ctx)
    root = _blackboard_root(state)

    rows = [project_summary(dir_name, project) for dir_name, project in load_all_projects(root)]

    if state.pretty:
        TableFormatter(console).projects(rows)
    else:
        emit_json(rows)


@project_app.command("status")
def project_status(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Project directory or declared name")],
) -> None:
    """Show one project's manifest and latest journal entry."""
    state = _state(ctx)
    root = _blackboard_root(state)

    resolved = resolve_project(name, load_all_projects(root))
    if resolved is None:
        _fail(f"Project not found: {name}")
    dir_name, project = resolved

    try:
        journal = load_journal(root / PROJECTS_DIR / dir_name)
    except CollabError as e:
        _fail(e)

    manifest = project.model_dump(mode="json", exclude_none=True, warnings=False)
    detail = {"directory": dir_name, **manifest}
    detail["journalEntries"] = len(journal.entries)
    if journal.latest is not None:
        detail["latestEntry"] = journal.latest.model_dump(mode="json", by_alias=True)

    if state.pretty:
        TableFormatter(console).project_detail(detail)
    else:
        emit_json(detail)


@journal_app.command("show")
def journal_show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Project directory or declared name")],
) -> None:
    """Show a project's journal entries in document order."""
    state = _state(ctx)
    root = _blackboard_root(state)

    resolved = resolve_project(name, load_all_projects(root))
    if resolved is None:
        _fail(f"Project not found: {name}")

    try:
        journal = load_journal(root / PROJECTS_DIR / resolved[0])
    except CollabError as e:
        _fail(e)

    if state.pretty:
        TableFormatter(console).journal(journal)
    else:
        emit_json(journal.model_dump(mode="json", by_alias=True))


if __name__ == "__main__":
    app()
