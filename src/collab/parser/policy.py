"""Failure policies declared by each loader.

Loaders differ on what a bad input means: a broken manifest during bulk
enumeration is skipped, a broken roster is fatal, a missing journal is just
empty. Each loader states its policy as a class attribute and consults it at
the point of failure.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """What a loader does when an artifact or record cannot be used."""
    RAISE = "raise"  # propagate the CollabError
    SKIP = "skip"    # drop the record and continue
    EMPTY = "empty"  # substitute an empty record


def apply_policy(policy: FailurePolicy, error: Exception, logger, subject: str) -> None:
    """Raise ``error`` under RAISE; otherwise log that ``subject`` was dropped."""
    if policy is FailurePolicy.RAISE:
        raise error
    logger.debug(f"Dropping {subject} ({policy.value}): {error}")
