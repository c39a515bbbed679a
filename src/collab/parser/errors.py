"""Engine failure exceptions raised by the artifact loaders.

These are distinct from validation findings: a ``Violation`` is data returned
to the caller, an exception from this module means an artifact could not be
read at all.
"""

from pathlib import Path


class CollabError(Exception):
    """Base class for blackboard engine failures."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


class MissingArtifactError(CollabError, FileNotFoundError):
    """Raised when a required artifact file does not exist."""


class ArtifactParseError(CollabError, ValueError):
    """Raised when an artifact exists but cannot be read or decoded."""


class BlackboardNotFoundError(CollabError):
    """Raised when no blackboard root can be located."""
