"""Validation rules for blackboard artifacts.

Each rule covers one artifact family; the framework runs them in the order
project manifests, contributor roster, journals, registry consistency.
"""

import logging
from pathlib import Path
from typing import Any

from collab.models.journal import JournalPhase
from collab.models.project import (
    ACCEPTED_LICENSES,
    ProjectContributor,
    ProjectStatus,
    TrustZone,
)
from collab.parser.errors import ArtifactParseError, CollabError
from collab.parser.journal import JOURNAL_FILE, load_journal
from collab.parser.manifest import (
    CONTRIBUTORS_FILE,
    PROJECT_FILE,
    PROJECTS_DIR,
    load_all_projects,
    load_contributors,
)
from collab.parser.policy import FailurePolicy, apply_policy
from collab.parser.registry import REGISTRY_FILE, load_registry
from .framework import ValidationResult, ValidationRule
from .matching import resolve_project

logger = logging.getLogger(__name__)

VALID_STATUSES = [status.value for status in ProjectStatus]
VALID_ZONES = [zone.value for zone in TrustZone]
VALID_PHASES = [phase.value for phase in JournalPhase]


def check_contributor(result: ValidationResult, file: str, prefix: str,
                      handle: str, entry: Any) -> None:
    """Zone and since checks shared by manifests and the roster."""
    contributor = ProjectContributor.from_entry(entry)
    if contributor is None:
        result.add_violation(
            file,
            prefix,
            f"Invalid entry for contributor '{handle}'",
            "Use a mapping with zone and since",
        )
        return

    if not contributor.zone:
        result.add_violation(
            file,
            f"{prefix}.zone",
            f"Missing zone for contributor '{handle}'",
            f"Add zone: {' | '.join(VALID_ZONES)}",
        )
    elif contributor.zone not in VALID_ZONES:
        result.add_violation(
            file,
            f"{prefix}.zone",
            f"Invalid zone '{contributor.zone}' for '{handle}'",
            f"Valid zones: {', '.join(VALID_ZONES)}",
        )

    if not contributor.since:
        result.add_violation(
            file,
            f"{prefix}.since",
            f"Missing 'since' date for contributor '{handle}'",
            "Add since: YYYY-MM-DD",
        )


class ProjectSchemaRule(ValidationRule):
    """Validate required fields and enumerations of every PROJECT.yaml."""

    @property
    def name(self) -> str:
        return "project_schema"

    def validate(self, root: Path, result: ValidationResult) -> None:
        for dir_name, project in load_all_projects(root):
            file = f"{PROJECTS_DIR}/{dir_name}/{PROJECT_FILE}"
            result.increment_counter("projects_checked")

            for field_name in project.missing_fields():
                result.add_violation(
                    file,
                    field_name,
                    f"Missing required field '{field_name}'",
                    f"Add '{field_name}' to {PROJECT_FILE}",
                )

            if project.status and project.status not in VALID_STATUSES:
                result.add_violation(
                    file,
                    "status",
                    f"Invalid status '{project.status}'",
                    f"Valid values: {', '.join(VALID_STATUSES)}",
                )

            if project.license and project.license not in ACCEPTED_LICENSES:
                result.add_violation(
                    file,
                    "license",
                    f"Invalid license '{project.license}'",
                    f"Accepted: {', '.join(ACCEPTED_LICENSES)}",
                )

            contributors = project.contributors
            if contributors is not None and not isinstance(contributors, dict):
                result.add_violation(
                    file,
                    "contributors",
                    "Invalid 'contributors': expected a mapping of handles",
                    "Use contributors: {handle: {zone: ..., since: ...}}",
                )
                continue

            for handle, contributor in (contributors or {}).items():
                check_contributor(result, file, f"contributors.{handle}", handle, contributor)


class ContributorRosterRule(ValidationRule):
    """Validate zones and dates in the root CONTRIBUTORS.yaml."""

    @property
    def name(self) -> str:
        return "contributor_roster"

    def validate(self, root: Path, result: ValidationResult) -> None:
        try:
            roster = load_contributors(root)
        except CollabError as e:
            result.add_violation(CONTRIBUTORS_FILE, "", str(e))
            return

        if roster.contributors is None:
            result.add_violation(
                CONTRIBUTORS_FILE,
                "contributors",
                "Missing 'contributors' key",
                "Add top-level 'contributors:' map",
            )
            return

        if not isinstance(roster.contributors, dict):
            result.add_violation(
                CONTRIBUTORS_FILE,
                "contributors",
                "Invalid 'contributors': expected a mapping of handles",
                "Use contributors: {handle: {zone: ..., since: ...}}",
            )
            return

        for handle, contributor in roster.contributors.items():
            result.increment_counter("contributors_checked")
            check_contributor(result, CONTRIBUTORS_FILE, handle, handle, contributor)


class JournalRule(ValidationRule):
    """Validate entry metadata of every project JOURNAL.md."""

    @property
    def name(self) -> str:
        return "journal"

    def validate(self, root: Path, result: ValidationResult) -> None:
        for dir_name, _project in load_all_projects(root):
            file = f"{PROJECTS_DIR}/{dir_name}/{JOURNAL_FILE}"
            try:
                journal = load_journal(Path(root) / PROJECTS_DIR / dir_name)
            except ArtifactParseError as e:
                result.add_violation(file, "", str(e))
                continue

            for entry in journal.entries:
                result.increment_counter("journal_entries_checked")

                if not entry.date:
                    result.add_violation(file, "date", "Entry missing date")

                if not entry.author:
                    result.add_violation(
                        file,
                        "author",
                        f"Entry '{entry.heading}' missing Author",
                        "Add **Author:** @handle (agent: name)",
                    )

                if not entry.phase:
                    result.add_violation(
                        file,
                        "phase",
                        f"Entry '{entry.date}' missing Phase",
                        f"Add **Phase:** {' | '.join(VALID_PHASES)}",
                    )
                elif entry.phase not in VALID_PHASES:
                    result.add_violation(
                        file,
                        "phase",
                        f"Invalid phase '{entry.phase}' in entry '{entry.date}'",
                        f"Valid: {', '.join(VALID_PHASES)}",
                    )

                if not entry.status:
                    result.add_violation(
                        file,
                        "status",
                        f"Entry '{entry.date}' missing Status",
                        "Add **Status:** one-line description",
                    )


class RegistryConsistencyRule(ValidationRule):
    """Cross-check REGISTRY.md rows against project manifests."""

    # The registry is optional for a checkout
    registry_policy = FailurePolicy.SKIP
    # Rows may reference projects outside this checkout
    unresolved_policy = FailurePolicy.SKIP

    @property
    def name(self) -> str:
        return "registry_consistency"

    def validate(self, root: Path, result: ValidationResult) -> None:
        try:
            registry = load_registry(root)
        except CollabError as e:
            apply_policy(self.registry_policy, e, logger, "registry consistency check")
            return

        projects = load_all_projects(root)

        for row in registry.projects:
            result.increment_counter("registry_rows_checked")
            resolved = resolve_project(row.name, projects)
            if resolved is None:
                result.increment_counter("registry_rows_unresolved")
                error = CollabError(f"No manifest matches registry project '{row.name}'")
                apply_policy(self.unresolved_policy, error, logger, "registry row")
                continue

            _dir_name, project = resolved

            if row.status and project.status and row.status != project.status:
                result.add_violation(
                    REGISTRY_FILE,
                    "status",
                    f"Status mismatch for '{row.name}': REGISTRY says '{row.status}', "
                    f"{PROJECT_FILE} says '{project.status}'",
                    f"Update {REGISTRY_FILE} to '{project.status}'",
                )

            if (row.maintainer and project.maintainer
                    and row.maintainer.removeprefix("@") != project.maintainer):
                result.add_violation(
                    REGISTRY_FILE,
                    "maintainer",
                    f"Maintainer mismatch for '{row.name}': REGISTRY says '{row.maintainer}', "
                    f"{PROJECT_FILE} says '{project.maintainer}'",
                    f"Update {REGISTRY_FILE} to '@{project.maintainer}'",
                )
