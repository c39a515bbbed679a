"""Output formatting for collab commands.

JSON is the default and is meant for machines: one compact document on
stdout. The pretty form renders Rich tables for people.
"""

import json
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.table import Table

from collab.models.journal import Journal
from collab.models.project import Project, ProjectContributor
from collab.models.registry import Registry
from collab.validation.framework import ValidationResult


def emit_json(data: Any) -> None:
    """Print ``data`` as a single line of JSON."""
    print(json.dumps(data, ensure_ascii=False))


def project_summary(dir_name: str, project: Project) -> dict[str, Any]:
    """Listing row for a project."""
    return {
        "directory": dir_name,
        "name": project.name,
        "status": project.status,
        "type": project.type,
        "maintainer": project.maintainer,
    }


class TableFormatter:
    """Renders command results as Rich tables."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def violations(self, result: ValidationResult) -> None:
        if result.passed:
            self.console.print("[green]No violations found![/green]")
            return

        table = Table(title=f"Violations ({len(result.violations)} found)")
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Field", style="magenta")
        table.add_column("Message", style="white")
        table.add_column("Suggestion", style="dim")

        for violation in result.violations:
            table.add_row(violation.file, violation.field, violation.message, violation.suggestion or "")

        self.console.print(table)

    def projects(self, rows: Iterable[dict[str, Any]]) -> None:
        rows = list(rows)
        if not rows:
            self.console.print("[dim]No projects found[/dim]")
            return

        table = Table(title=f"Projects ({len(rows)} found)")
        table.add_column("Directory", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Status", style="green")
        table.add_column("Type", style="dim")
        table.add_column("Maintainer", style="magenta")

        for row in rows:
            table.add_row(*(str(row[key] or "") for key in
                            ("directory", "name", "status", "type", "maintainer")))

        self.console.print(table)

    def project_detail(self, detail: dict[str, Any]) -> None:
        table = Table(title=f"Project {detail.get('name') or detail['directory']}", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")

        for key, value in detail.items():
            if key in ("contributors", "latestEntry"):
                continue
            table.add_row(key, value if isinstance(value, str) else json.dumps(value))

        contributors = detail.get("contributors")
        if isinstance(contributors, dict):
            for handle, entry in contributors.items():
                contributor = ProjectContributor.from_entry(entry)
                if contributor is None:
                    table.add_row(f"contributor @{handle}", json.dumps(entry))
                    continue
                table.add_row(f"contributor @{handle}", f"{contributor.zone or '?'} since {contributor.since or '?'}")
        elif contributors is not None:
            table.add_row("contributors", json.dumps(contributors))

        latest = detail.get("latestEntry")
        if latest:
            table.add_row("latest entry", f"{latest['date']} — {latest['title']} ({latest['phase']})")

        self.console.print(table)

    def journal(self, journal: Journal) -> None:
        if not journal.entries:
            self.console.print("[dim]No journal entries found[/dim]")
            return

        table = Table(title=f"Journal ({len(journal.entries)} entries, maintainer {journal.maintainer or '?'})")
        table.add_column("Date", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="magenta")
        table.add_column("Phase", style="green")
        table.add_column("Status", style="white")
        table.add_column("Issues", style="dim")

        for entry in journal.entries:
            table.add_row(entry.date, entry.title, entry.author, entry.phase, entry.status, ", ".join(entry.issues))

        self.console.print(table)

    def registry(self, registry: Registry) -> None:
        projects = Table(title=f"Active Projects ({len(registry.projects)})")
        for column in ("Project", "Maintainer", "Status", "Source", "Contributors"):
            projects.add_column(column)
        for row in registry.projects:
            projects.add_row(row.name, row.maintainer, row.status, row.source, row.contributors)
        self.console.print(projects)

        agents = Table(title=f"Agent Registry ({len(registry.agents)})")
        for column in ("Agent", "Operator", "Platform", "Skills", "Availability", "Current Work"):
            agents.add_column(column)
        for row in registry.agents:
            agents.add_row(row.agent, row.operator, row.platform, row.skills, row.availability, row.current_work)
        self.console.print(agents)

    def overview(self, overview: dict[str, Any]) -> None:
        self.console.print(f"[blue]Blackboard:[/blue] {overview['root']}")

        table = Table()
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="white", justify="right")
        table.add_row("Projects", str(overview["projects"]))
        for status, count in overview["byStatus"].items():
            table.add_row(f"  {status}", str(count))
        if overview["contributors"] is not None:
            table.add_row("Contributors", str(sum(overview["contributors"].values())))
            for zone, count in overview["contributors"].items():
                table.add_row(f"  {zone}", str(count))
        table.add_row("Violations", str(overview["violations"]))

        self.console.print(table)
