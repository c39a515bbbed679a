"""PROJECT.yaml and CONTRIBUTORS.yaml loader."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from collab.models.project import Contributors, Project
from collab.parser.errors import ArtifactParseError, CollabError, MissingArtifactError
from collab.parser.policy import FailurePolicy, apply_policy

logger = logging.getLogger(__name__)

PROJECT_FILE = "PROJECT.yaml"
CONTRIBUTORS_FILE = "CONTRIBUTORS.yaml"
PROJECTS_DIR = "projects"


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file whose top level must be a mapping.

    An empty document reads as an empty mapping.

    Raises:
        MissingArtifactError: If the file does not exist
        ArtifactParseError: If the file cannot be read or is not a YAML mapping
    """
    if not path.exists():
        raise MissingArtifactError(f"{path.name} not found in {path.parent}", path)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ArtifactParseError(f"Failed to parse {path.name} in {path.parent}: {e}", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactParseError(f"Failed to read {path}: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ArtifactParseError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}", path
        )
    return data


class ManifestLoader:
    """Loader for project manifests and the contributor roster."""

    # One broken manifest must not hide the rest of the blackboard
    bulk_policy = FailurePolicy.SKIP

    @staticmethod
    def find_project_file(project_dir: Path) -> Path | None:
        """Return the PROJECT.yaml path in ``project_dir`` if it exists."""
        project_file = project_dir / PROJECT_FILE
        if project_file.exists() and project_file.is_file():
            return project_file
        return None

    @staticmethod
    def load_project(project_dir: Path) -> Project:
        """Parse PROJECT.yaml from a project directory.

        Missing fields are not an error here; see ``Project.missing_fields``.

        Raises:
            MissingArtifactError: If PROJECT.yaml doesn't exist
            ArtifactParseError: If PROJECT.yaml is malformed
        """
        project_file = Path(project_dir) / PROJECT_FILE
        data = read_yaml_mapping(project_file)
        try:
            return Project.model_validate(data)
        except ValidationError as e:
            raise ArtifactParseError(f"Invalid project structure in {project_file}: {e}", project_file) from e

    @classmethod
    def load_all_projects(cls, root: Path) -> list[tuple[str, Project]]:
        """Load every project under ``root/projects`` in directory-name order.

        Directories without a readable manifest are handled by ``bulk_policy``.
        """
        projects_dir = Path(root) / PROJECTS_DIR
        if not projects_dir.is_dir():
            return []

        results: list[tuple[str, Project]] = []
        for project_dir in sorted(p for p in projects_dir.iterdir() if p.is_dir()):
            try:
                results.append((project_dir.name, cls.load_project(project_dir)))
            except CollabError as e:
                apply_policy(cls.bulk_policy, e, logger, f"project '{project_dir.name}'")

        logger.debug(f"Loaded {len(results)} projects from {projects_dir}")
        return results

    @staticmethod
    def load_contributors(root: Path) -> Contributors:
        """Parse the root CONTRIBUTORS.yaml.

        Raises:
            MissingArtifactError: If CONTRIBUTORS.yaml doesn't exist
            ArtifactParseError: If CONTRIBUTORS.yaml is malformed
        """
        roster_file = Path(root) / CONTRIBUTORS_FILE
        data = read_yaml_mapping(roster_file)
        try:
            return Contributors.model_validate(data)
        except ValidationError as e:
            raise ArtifactParseError(f"Invalid contributor roster in {roster_file}: {e}", roster_file) from e


load_project = ManifestLoader.load_project
load_all_projects = ManifestLoader.load_all_projects
load_contributors = ManifestLoader.load_contributors
