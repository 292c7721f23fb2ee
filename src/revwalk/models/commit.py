from __future__ import annotations

__all__ = (
    "Commit",
    "CommitId",
    "TreeId",
)

import typing as t
from dataclasses import dataclass, field

CommitId: t.TypeAlias = str
TreeId: t.TypeAlias = str


@dataclass(frozen=True)
class Commit:
    """An immutable node in the history graph.

    Attributes
    ----------
    id: CommitId
        The full hex object name of this commit.
    parents: tuple[CommitId, ...]
        The ids of the parents of this commit, first parent first.
    tree_id: TreeId
        The id of the tree snapshotted by this commit.
    commit_time: int
        The commit timestamp, in seconds since the epoch.
    summary: str
        The first line of the commit message.
    """
    id: CommitId
    parents: tuple[CommitId, ...]
    tree_id: TreeId
    commit_time: int
    summary: str = field(default="", compare=False)

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def __str__(self) -> str:
        return self.id
