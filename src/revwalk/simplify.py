from __future__ import annotations

__all__ = (
    "HistorySimplifier",
    "Simplification",
)

import typing as t
from dataclasses import dataclass, field

from loguru import logger

from revwalk.errors import AmbiguousAncestryBound
from revwalk.models.settings import DEFAULT_ANCESTRY_SEARCH_LIMIT

if t.TYPE_CHECKING:
    from revwalk.filter import PathFilter
    from revwalk.graph import CommitGraph
    from revwalk.models.commit import Commit, CommitId


@dataclass(frozen=True)
class Simplification:
    """Describes how a single commit appears in the simplified history.

    Attributes
    ----------
    commit_id: CommitId
        The id of the simplified commit.
    parents: tuple[CommitId, ...]
        The effective parents of the commit: the real parents that must
        still be walked, in their original order.
    relevance: tuple[bool, ...]
        Whether the commit touches the filtered paths relative to each of
        its real parents, in parent order. Root commits carry a single
        result computed against the empty tree.
    """
    commit_id: CommitId
    parents: tuple[CommitId, ...]
    relevance: tuple[bool, ...]

    @property
    def is_relevant(self) -> bool:
        return any(self.relevance)

    @property
    def is_structural(self) -> bool:
        """Whether this is a merge that is kept only to connect history."""
        return len(self.relevance) > 1 and not self.is_relevant

    @property
    def is_shown(self) -> bool:
        return self.is_relevant or self.is_structural


@dataclass
class HistorySimplifier:
    """Computes the effective parents of the commits visited by a single walk.

    A parent of a merge is only ever dropped once it has been verified to be
    an ancestor of another parent that is kept; anything that cannot be
    verified keeps its edge. The real graph is never modified.
    """
    graph: CommitGraph
    path_filter: PathFilter
    ancestry_search_limit: int | None = field(default=DEFAULT_ANCESTRY_SEARCH_LIMIT)
    _simplified: dict[CommitId, Simplification] = field(default_factory=dict, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._simplified)

    def clear(self) -> None:
        """Discards every memoized simplification."""
        self._simplified.clear()

    def simplify(self, commit: Commit) -> Simplification:
        """Computes, or retrieves, the simplification of a given commit."""
        simplification = self._simplified.get(commit.id)
        if simplification is None:
            simplification = self._simplify(commit)
            self._simplified[commit.id] = simplification
        return simplification

    def _simplify(self, commit: Commit) -> Simplification:
        if self.path_filter.matches_all:
            relevance = (True,) * max(len(commit.parents), 1)
            return Simplification(commit.id, commit.parents, relevance)

        relevance = self.path_filter.relevance(commit)

        # roots and ordinary commits keep whatever parents they have
        if not commit.is_merge:
            return Simplification(commit.id, commit.parents, relevance)

        # an uninteresting merge must not prune any line of history
        if not any(relevance):
            return Simplification(commit.id, commit.parents, relevance)

        relevant_parents = [
            parent_id
            for parent_id, is_relevant in zip(commit.parents, relevance, strict=True)
            if is_relevant
        ]
        parents: list[CommitId] = []
        for parent_id, is_relevant in zip(commit.parents, relevance, strict=True):
            if is_relevant or not self._is_subsumed(parent_id, relevant_parents):
                parents.append(parent_id)
            else:
                logger.debug(f"dropping subsumed parent {parent_id} of merge {commit.id}")

        return Simplification(commit.id, tuple(parents), relevance)

    def _is_subsumed(self, parent_id: CommitId, kept: t.Sequence[CommitId]) -> bool:
        """Determines whether a parent is a verified ancestor of any kept parent."""
        for kept_id in kept:
            try:
                if self.is_ancestor(parent_id, kept_id):
                    return True
            except AmbiguousAncestryBound as err:
                logger.debug(f"keeping parent edge: {err}")
        return False

    def is_ancestor(self, ancestor_id: CommitId, descendant_id: CommitId) -> bool:
        """Determines whether one commit is reachable from another via real parents.

        The search never expands a commit that is older than the candidate
        ancestor and stops as soon as the candidate is found. A commit counts
        as its own ancestor.

        Raises
        ------
        AmbiguousAncestryBound
            If the search visits more commits than the configured limit
            without reaching a verdict.
        ObjectNotFound
            If a commit on the way cannot be loaded.
        """
        ancestor = self.graph.get(ancestor_id)
        limit = self.ancestry_search_limit

        pending: list[CommitId] = [descendant_id]
        visited: set[CommitId] = set()
        while pending:
            commit_id = pending.pop()
            if commit_id == ancestor_id:
                return True
            if commit_id in visited:
                continue
            visited.add(commit_id)
            if limit is not None and len(visited) > limit:
                raise AmbiguousAncestryBound(ancestor_id, descendant_id, len(visited))

            commit = self.graph.get(commit_id)
            if commit.commit_time < ancestor.commit_time:
                continue
            pending.extend(commit.parents)
        return False
