__all__ = (
    "AmbiguousAncestryBound",
    "NoStartPoint",
    "ObjectNotFound",
    "RevWalkError",
)

import abc
from dataclasses import dataclass


class RevWalkError(abc.ABC, Exception):
    """Base class for all exceptions in the revwalk package."""


@dataclass
class ObjectNotFound(RevWalkError):
    """Indicates that a commit or tree could not be loaded from the object store."""
    object_id: str

    def __str__(self) -> str:
        return f"object not found: {self.object_id}"


class NoStartPoint(RevWalkError):
    """Indicates that a walk was requested without any start commits."""

    def __str__(self) -> str:
        return "cannot start a walk without at least one start commit"


@dataclass
class AmbiguousAncestryBound(RevWalkError):
    """Raised when a bounded ancestry search gives up before reaching a verdict.

    Never escapes the history simplifier, which keeps the parent edge instead.
    """
    ancestor_id: str
    descendant_id: str
    steps: int

    def __str__(self) -> str:
        return (
            f"gave up checking whether {self.ancestor_id} is an ancestor of "
            f"{self.descendant_id} after {self.steps} steps"
        )
