"""collab - Read-only validation for pai-collab blackboard repositories.

collab parses project manifests, the contributor roster, project journals and
the community registry of a blackboard, and cross-checks them for missing,
malformed or mutually inconsistent data.
"""

__version__ = "0.1.0"
__author__ = "pai-collab"
__description__ = "CLI for pai-collab blackboard validation"

from collab.config import CollabConfig
from collab.validation import validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "CollabConfig",
    "validate",
]
