"""Loaders for blackboard artifacts."""

from collab.parser.errors import (
    ArtifactParseError,
    BlackboardNotFoundError,
    CollabError,
    MissingArtifactError,
)
from collab.parser.journal import JournalParser, load_journal, parse_journal
from collab.parser.manifest import (
    ManifestLoader,
    load_all_projects,
    load_contributors,
    load_project,
)
from collab.parser.policy import FailurePolicy
from collab.parser.registry import RegistryParser, load_registry, parse_registry

__all__ = [
    "CollabError",
    "MissingArtifactError",
    "ArtifactParseError",
    "BlackboardNotFoundError",
    "FailurePolicy",
    "ManifestLoader",
    "JournalParser",
    "RegistryParser",
    "load_project",
    "load_all_projects",
    "load_contributors",
    "load_journal",
    "parse_journal",
    "load_registry",
    "parse_registry",
]
