"""Validation engine for blackboard artifacts.

Runs the project, roster, journal and registry rules in that order and
returns their violations as one ordered list.
"""

from pathlib import Path

from .framework import ValidationFramework, ValidationResult, ValidationRule, Violation
from .matching import DEFAULT_MATCHERS, resolve_project
from .rules import (
    ContributorRosterRule,
    JournalRule,
    ProjectSchemaRule,
    RegistryConsistencyRule,
)


def run_validation(root: Path) -> ValidationResult:
    """Run the default rules against a blackboard root."""
    framework = ValidationFramework()
    framework.create_default_rules()
    return framework.validate(root)


def validate(root: Path) -> list[Violation]:
    """Ordered violations for the blackboard at ``root``."""
    return run_validation(root).violations


__all__ = [
    "ValidationFramework",
    "ValidationResult",
    "ValidationRule",
    "Violation",
    "ProjectSchemaRule",
    "ContributorRosterRule",
    "JournalRule",
    "RegistryConsistencyRule",
    "DEFAULT_MATCHERS",
    "resolve_project",
    "run_validation",
    "validate",
]
