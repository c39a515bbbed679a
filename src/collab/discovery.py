"""Blackboard root discovery.

A blackboard root is a directory holding every configured marker, by default
``CONTRIBUTING.md`` and ``projects/``.
"""

import logging
import os
from pathlib import Path

from collab.config import CollabConfig
from collab.parser.errors import BlackboardNotFoundError

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "PAI_COLLAB_ROOT"
DEFAULT_MARKERS = ["CONTRIBUTING.md", "projects"]


def is_blackboard_root(directory: Path, markers: list[str] | None = None) -> bool:
    """Check whether ``directory`` contains every marker."""
    directory = Path(directory)
    return all((directory / marker).exists() for marker in markers or DEFAULT_MARKERS)


def find_blackboard_root(start_dir: Path | None = None,
                         markers: list[str] | None = None) -> Path | None:
    """Walk up from ``start_dir`` to the nearest blackboard root.

    Returns:
        Path to the root if found, None otherwise
    """
    current = Path(start_dir or Path.cwd()).resolve()

    while True:
        if is_blackboard_root(current, markers):
            return current

        parent = current.parent
        if parent == current:
            return None
        current = parent


def resolve_blackboard_root(explicit: Path | None = None,
                            config: CollabConfig | None = None,
                            start_dir: Path | None = None) -> Path:
    """Resolve the blackboard root for a command.

    Order: explicit path, ``PAI_COLLAB_ROOT``, configured ``root.path``, then
    walking up from ``start_dir``.

    Raises:
        BlackboardNotFoundError: If no root can be located
    """
    config = config or CollabConfig()

    for source, candidate in (
        ("argument", explicit),
        (ROOT_ENV_VAR, os.environ.get(ROOT_ENV_VAR)),
        ("config", config.root.path),
    ):
        if candidate:
            root = Path(candidate).expanduser().resolve()
            if not root.is_dir():
                raise BlackboardNotFoundError(f"Blackboard root from {source} is not a directory: {root}", root)
            logger.debug(f"Using blackboard root from {source}: {root}")
            return root

    root = find_blackboard_root(start_dir, config.root.markers)
    if root is None:
        raise BlackboardNotFoundError(
            "Not inside a pai-collab blackboard. Could not find a directory containing "
            f"{' and '.join(config.root.markers)}. Run from inside a pai-collab checkout, "
            f"pass --root, or set {ROOT_ENV_VAR}."
        )
    logger.debug(f"Discovered blackboard root: {root}")
    return root
