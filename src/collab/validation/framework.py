"""Core validation framework for blackboard artifacts.

Rules run in a fixed order against a blackboard root and append violations to
a shared result. Violations are findings, not failures: a rule never raises
for bad data. An engine failure inside one rule is contained by the framework
so the remaining rules still run.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from collab.parser.errors import CollabError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """A single inconsistency or missing/invalid value."""
    file: str
    field: str
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        location = self.file
        if self.field:
            location += f" [{self.field}]"
        text = f"{location}: {self.message}"
        if self.suggestion:
            text += f" ({self.suggestion})"
        return text

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output; an absent suggestion is omitted."""
        data = {"file": self.file, "field": self.field, "message": self.message}
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class ValidationResult:
    """Ordered violations of one validation run."""
    violations: list[Violation] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = no violations, 1 = at least one."""
        return 0 if self.passed else 1

    def add_violation(self, file: str, field: str, message: str,
                      suggestion: str | None = None) -> None:
        """Append a violation, keeping pass order."""
        self.violations.append(Violation(file, field, message, suggestion))

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "passed": self.passed,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "violations": [violation.to_dict() for violation in self.violations],
        }


def relative_path(path: Path | None, root: Path) -> str:
    """Render ``path`` relative to the blackboard root when possible."""
    if path is None:
        return ""
    try:
        return Path(path).resolve().relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return str(path)


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, root: Path, result: ValidationResult) -> None:
        """Execute validation rule.

        Args:
            root: Blackboard root directory
            result: Validation result to update with violations/counters
        """
        pass


class ValidationFramework:
    """Runs validation rules in registration order."""

    def __init__(self):
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, root: Path) -> ValidationResult:
        """Run every rule against a blackboard root.

        Args:
            root: Blackboard root directory

        Returns:
            ValidationResult with violations in rule order
        """
        root = Path(root)
        result = ValidationResult()

        logger.info(f"Starting validation of blackboard at {root}")
        logger.info(f"Running {len(self.rules)} validation rules")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                rule.validate(root, result)
            except CollabError as e:
                logger.error(f"Rule {rule.name} aborted: {e}")
                result.add_violation(relative_path(e.path, root), "", str(e))

        logger.info(f"Validation completed with {len(result.violations)} violations")

        return result

    def create_default_rules(self) -> None:
        """Register the four blackboard rules in pass order."""
        from .rules import (
            ContributorRosterRule,
            JournalRule,
            ProjectSchemaRule,
            RegistryConsistencyRule,
        )

        self.add_rule(ProjectSchemaRule())
        self.add_rule(ContributorRosterRule())
        self.add_rule(JournalRule())
        self.add_rule(RegistryConsistencyRule())
