"""Pydantic data models for blackboard artifacts."""

from collab.models.journal import Journal, JournalEntry, JournalPhase
from collab.models.project import (
    ACCEPTED_LICENSES,
    REQUIRED_PROJECT_FIELDS,
    Contributor,
    Contributors,
    Project,
    ProjectContributor,
    ProjectSource,
    ProjectStatus,
    ProjectType,
    TrustZone,
)
from collab.models.registry import Registry, RegistryAgent, RegistryProject

__all__ = [
    "Project",
    "ProjectContributor",
    "ProjectSource",
    "ProjectStatus",
    "ProjectType",
    "TrustZone",
    "Contributor",
    "Contributors",
    "ACCEPTED_LICENSES",
    "REQUIRED_PROJECT_FIELDS",
    "Journal",
    "JournalEntry",
    "JournalPhase",
    "Registry",
    "RegistryAgent",
    "RegistryProject",
]
