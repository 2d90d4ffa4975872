"""Data models for commit-history."""

from .commit import DEFAULT_SEQUENCE, Commit, CommitIdSequence, reset_ids
from .scenario import Action, Scenario, Step

__all__ = [
    "Action",
    "Commit",
    "CommitIdSequence",
    "DEFAULT_SEQUENCE",
    "Scenario",
    "Step",
    "reset_ids",
]
