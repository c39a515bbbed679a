"""Resolution of registry rows to project manifests.

Matchers are tried in order; the first matcher that accepts any project wins.
Insert new strategies into the list rather than widening an existing one.
"""

from collections.abc import Callable

from collab.models.project import Project

ProjectMatcher = Callable[[str, str, Project], bool]


def match_directory_name(name: str, dir_name: str, project: Project) -> bool:
    return dir_name == name


def match_declared_name(name: str, dir_name: str, project: Project) -> bool:
    return project.name == name


def match_declared_name_casefold(name: str, dir_name: str, project: Project) -> bool:
    return isinstance(project.name, str) and project.name.casefold() == name.casefold()


DEFAULT_MATCHERS: list[ProjectMatcher] = [
    match_directory_name,
    match_declared_name,
    match_declared_name_casefold,
]


def resolve_project(
    name: str,
    projects: list[tuple[str, Project]],
    matchers: list[ProjectMatcher] | None = None,
) -> tuple[str, Project] | None:
    """Find the ``(dir_name, project)`` a registry name refers to, or None."""
    if not name:
        return None
    for matcher in matchers or DEFAULT_MATCHERS:
        for dir_name, project in projects:
            if matcher(name, dir_name, project):
                return dir_name, project
    return None
