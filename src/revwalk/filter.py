from __future__ import annotations

__all__ = (
    "PathFilter",
    "normalize_path",
)

import typing as t
from dataclasses import dataclass, field

from revwalk.util import strip_prefix, strip_suffix

if t.TYPE_CHECKING:
    from revwalk.graph import CommitGraph
    from revwalk.models.commit import Commit


def normalize_path(path: str) -> str:
    """Normalises a repository-relative path used as a filter.

    Raises
    ------
    ValueError
        If the path is empty once normalised.
    """
    normalized = path.strip()
    while normalized.startswith(("./", "/")):
        normalized = strip_prefix(strip_prefix(normalized, "./"), "/")
    while normalized.endswith("/"):
        normalized = strip_suffix(normalized, "/")
    if not normalized or normalized == ".":
        message = f"invalid path filter: {path!r}"
        raise ValueError(message)
    return normalized


@dataclass(frozen=True)
class PathFilter:
    """Decides whether a commit touches a configured set of paths.

    With no paths configured, every commit is relevant and no tree
    differences are ever computed.
    """
    graph: CommitGraph = field(repr=False)
    paths: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, graph: CommitGraph, paths: t.Iterable[str] = ()) -> PathFilter:
        return cls(graph, frozenset(normalize_path(path) for path in paths))

    @property
    def matches_all(self) -> bool:
        return not self.paths

    def is_relevant(self, commit: Commit, parent: Commit | None) -> bool:
        """Determines whether a commit changes any filtered path relative to a parent.

        A root commit is compared against the empty tree by passing
        :code:`None` as its parent.
        """
        if self.matches_all:
            return True
        parent_tree_id = parent.tree_id if parent is not None else None
        return self.graph.store.diff_touches_paths(
            parent_tree_id,
            commit.tree_id,
            self.paths,
        )

    def relevance(self, commit: Commit) -> tuple[bool, ...]:
        """Evaluates relevance against each parent of a commit independently.

        Returns one result per parent, in parent order, or a single result
        against the empty tree for a root commit.
        """
        if commit.is_root:
            return (self.is_relevant(commit, None),)
        return tuple(
            self.is_relevant(commit, self.graph.get(parent_id))
            for parent_id in commit.parents
        )
