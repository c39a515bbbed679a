"""Models for PROJECT.yaml and CONTRIBUTORS.yaml records."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator


class ProjectStatus(str, Enum):
    """Project lifecycle status."""
    PROPOSED = "proposed"
    BUILDING = "building"
    HARDENING = "hardening"
    CONTRIB_PREP = "contrib-prep"
    REVIEW = "review"
    SHIPPED = "shipped"
    EVOLVING = "evolving"
    ARCHIVED = "archived"


class ProjectType(str, Enum):
    """Kind of project; informational only."""
    SKILL = "skill"
    BUNDLE = "bundle"
    TOOL = "tool"
    INFRASTRUCTURE = "infrastructure"


class TrustZone(str, Enum):
    """Contributor authorization level."""
    MAINTAINER = "maintainer"
    TRUSTED = "trusted"
    UNTRUSTED = "untrusted"


ACCEPTED_LICENSES = ["MIT", "Apache-2.0", "BSD-2-Clause", "BSD-3-Clause"]

REQUIRED_PROJECT_FIELDS = ["name", "maintainer", "status", "created", "license", "contributors"]


def _iso(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class ArtifactModel(BaseModel):
    """Base for records decoded from YAML.

    Every field is optional: presence is a validation concern, not a parsing
    one. YAML dates are kept as ISO strings the way they were written. A value
    of the wrong shape (``paths: src/``, ``tags: infra``) is kept as written so
    the rest of the record stays available to the validation rules.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def stringify_dates(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: _iso(value) for key, value in data.items()}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def keep_as_written(cls, value: Any, handler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return value


def _empty_null_entries(value: Any) -> Any:
    # ``handle:`` with nothing under it decodes as None
    if isinstance(value, dict):
        return {handle: entry if entry is not None else {} for handle, entry in value.items()}
    return value


class ProjectContributor(ArtifactModel):
    """Contributor entry inside a project manifest."""
    zone: str | None = None
    since: str | None = None
    promoted_by: str | None = None
    timezone: str | None = None
    tags: list[str] | None = None
    availability: str | None = None

    @classmethod
    def from_entry(cls, entry: Any) -> "ProjectContributor | None":
        """Typed view of one contributor entry, or None if it is not a mapping."""
        if isinstance(entry, ProjectContributor):
            return entry
        if entry is None:
            return cls()
        if isinstance(entry, dict):
            return cls.model_validate(entry)
        return None


class Contributor(ProjectContributor):
    """Contributor entry in the root roster."""


class ProjectSource(ArtifactModel):
    """Source repository of a standalone project."""
    repo: str | None = None
    branch: str | None = None


class Project(ArtifactModel):
    """Complete PROJECT.yaml model."""
    name: str | None = None
    maintainer: str | None = None
    status: str | None = None
    created: str | None = None
    license: str | None = None
    contributors: dict[str, ProjectContributor] | None = None
    type: str | None = None
    upstream: str | None = None
    fork: str | None = None
    source: ProjectSource | None = None
    contrib_branch: str | None = None
    source_branch: str | None = None
    tag: str | None = None
    paths: list[str] | None = None
    tests: str | None = None
    docs: str | None = None

    @field_validator("contributors", mode="before")
    @classmethod
    def validate_contributors(cls, v):
        return _empty_null_entries(v)

    def missing_fields(self) -> list[str]:
        """Required fields that are absent or null, in declaration order."""
        return [name for name in REQUIRED_PROJECT_FIELDS if getattr(self, name) is None]

    @property
    def is_upstream_contribution(self) -> bool:
        """Check if this project contributes to an upstream repository."""
        return self.upstream is not None


class Contributors(ArtifactModel):
    """CONTRIBUTORS.yaml model."""
    contributors: dict[str, Contributor] | None = None

    @field_validator("contributors", mode="before")
    @classmethod
    def validate_contributors(cls, v):
        return _empty_null_entries(v)
