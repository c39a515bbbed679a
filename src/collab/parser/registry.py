"""REGISTRY.md table extractor."""

import logging
import re
from pathlib import Path

from collab.models.registry import Registry, RegistryAgent, RegistryProject
from collab.parser.errors import ArtifactParseError, MissingArtifactError

logger = logging.getLogger(__name__)

REGISTRY_FILE = "REGISTRY.md"
PROJECTS_HEADING = "Active Projects"
AGENTS_HEADING = "Agent Registry (Daemon Entries)"

PROJECT_COLUMNS = ["name", "maintainer", "status", "source", "contributors"]
AGENT_COLUMNS = ["agent", "operator", "platform", "skills", "availability", "current_work"]

MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")


def strip_links(cell: str) -> str:
    """Rewrite every ``[text](url)`` in ``cell`` to ``text``."""
    return MARKDOWN_LINK_RE.sub(r"\1", cell)


def split_row(line: str) -> list[str]:
    """Split a pipe-table row into trimmed, link-free cells."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [strip_links(cell.strip()) for cell in row.split("|")]


def section_lines(text: str, heading: str) -> list[str]:
    """Lines following ``## <heading>`` up to the next ``##`` heading.

    Returns an empty list when the heading is absent.
    """
    heading_re = re.compile(rf"^##\s*{re.escape(heading)}\s*$")
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if heading_re.match(line.strip()):
            body = []
            for following in lines[index + 1:]:
                if following.startswith("##"):
                    break
                body.append(following)
            return body
    return []


def table_rows(text: str, heading: str) -> list[list[str]]:
    """Body rows of the pipe table under ``heading``, header and separator dropped."""
    table = [line for line in section_lines(text, heading) if line.strip().startswith("|")]
    return [split_row(line) for line in table[2:]]


def _cells_to_fields(cells: list[str], columns: list[str]) -> dict[str, str]:
    # Short rows leave the trailing columns empty
    return {column: cells[i] if i < len(cells) else "" for i, column in enumerate(columns)}


class RegistryParser:
    """Parser for the community REGISTRY.md."""

    @staticmethod
    def parse(text: str) -> Registry:
        """Parse both registry tables from Markdown text."""
        projects = [
            RegistryProject(**_cells_to_fields(cells, PROJECT_COLUMNS))
            for cells in table_rows(text, PROJECTS_HEADING)
        ]
        agents = [
            RegistryAgent(**_cells_to_fields(cells, AGENT_COLUMNS))
            for cells in table_rows(text, AGENTS_HEADING)
        ]
        logger.debug(f"Registry tables: {len(projects)} projects, {len(agents)} agents")
        return Registry(projects=projects, agents=agents)

    @classmethod
    def load_registry(cls, root: Path) -> Registry:
        """Parse REGISTRY.md from the blackboard root.

        Raises:
            MissingArtifactError: If REGISTRY.md doesn't exist
            ArtifactParseError: If REGISTRY.md cannot be read
        """
        registry_file = Path(root) / REGISTRY_FILE
        if not registry_file.exists():
            raise MissingArtifactError(f"{REGISTRY_FILE} not found in {root}", registry_file)

        try:
            text = registry_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ArtifactParseError(f"Failed to read {registry_file}: {e}", registry_file) from e

        return cls.parse(text)


parse_registry = RegistryParser.parse
load_registry = RegistryParser.load_registry
