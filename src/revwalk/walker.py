from __future__ import annotations

__all__ = (
    "RevWalk",
    "WalkState",
)

import enum
import heapq
import typing as t
from dataclasses import dataclass, field

from loguru import logger

from revwalk.errors import NoStartPoint

if t.TYPE_CHECKING:
    from revwalk.graph import CommitGraph
    from revwalk.models.commit import Commit, CommitId
    from revwalk.simplify import HistorySimplifier


class WalkState(enum.StrEnum):
    INITIAL = "initial"
    WALKING = "walking"
    EXHAUSTED = "exhausted"


@dataclass
class RevWalk:
    """Lazily walks history from a set of start commits, newest first.

    Each call to :meth:`__next__` pops the pending commit with the latest
    commit time (ties broken by the smallest id), enqueues the effective
    parents chosen by the simplifier, and returns the commit if it is shown
    in the simplified history. Emission order follows commit time, so a
    parent with a clock-skewed timestamp newer than its child may be
    emitted before that child.

    The walk holds no external resources: abandoning it between calls is
    enough to cancel it.
    """
    graph: CommitGraph = field(repr=False)
    simplifier: HistorySimplifier = field(repr=False)
    start_ids: tuple[CommitId, ...]
    max_count: int | None = field(default=None)
    state: WalkState = field(default=WalkState.INITIAL, init=False)
    _frontier: list[tuple[int, CommitId]] = field(default_factory=list, init=False, repr=False)
    _seen: set[CommitId] = field(default_factory=set, init=False, repr=False)
    _emitted: dict[CommitId, tuple[CommitId, ...]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.start_ids = tuple(self.start_ids)
        if not self.start_ids:
            raise NoStartPoint
        if self.max_count is not None and self.max_count < 0:
            message = f"max_count must not be negative: {self.max_count}"
            raise ValueError(message)

    def __iter__(self) -> t.Iterator[Commit]:
        return self

    def __next__(self) -> Commit:
        if self.state == WalkState.EXHAUSTED:
            raise StopIteration

        # a failure may leave a popped commit whose parents were never
        # enqueued, so no walk resumes after an error
        try:
            commit = self._advance()
        except Exception:
            logger.debug(f"walk from {self.start_ids} failed; marking it as exhausted")
            self.close()
            raise

        if commit is None:
            logger.info(f"walk from {self.start_ids} finished after {self.num_emitted} commits")
            self.close()
            raise StopIteration
        return commit

    @property
    def num_emitted(self) -> int:
        return len(self._emitted)

    @property
    def is_exhausted(self) -> bool:
        return self.state == WalkState.EXHAUSTED

    def effective_parents(self, commit_id: CommitId) -> tuple[CommitId, ...]:
        """Returns the parents of an emitted commit in the simplified history.

        Raises
        ------
        ValueError
            If the commit has not been emitted by this walk.
        """
        try:
            return self._emitted[commit_id]
        except KeyError:
            message = f"commit has not been emitted by this walk: {commit_id}"
            raise ValueError(message) from None

    def close(self) -> None:
        """Ends the walk and releases its frontier, seen set and simplifications.

        The effective parents of commits that were already emitted remain
        available through :meth:`effective_parents`.
        """
        self.state = WalkState.EXHAUSTED
        self._frontier.clear()
        self._seen.clear()
        self.simplifier.clear()

    def _budget_spent(self) -> bool:
        return self.max_count is not None and self.num_emitted >= self.max_count

    def _enqueue(self, commit_id: CommitId) -> None:
        if commit_id in self._seen:
            return
        commit = self.graph.get(commit_id)
        self._seen.add(commit_id)
        heapq.heappush(self._frontier, (-commit.commit_time, commit_id))

    def _seed(self) -> None:
        logger.info(f"starting walk from {len(self.start_ids)} commit(s)")
        for commit_id in self.start_ids:
            self._enqueue(commit_id)
        self.state = WalkState.WALKING

    def _advance(self) -> Commit | None:
        if self._budget_spent():
            return None
        if self.state == WalkState.INITIAL:
            self._seed()

        while self._frontier:
            _, commit_id = heapq.heappop(self._frontier)
            commit = self.graph.get(commit_id)
            simplification = self.simplifier.simplify(commit)
            for parent_id in simplification.parents:
                self._enqueue(parent_id)

            if simplification.is_shown:
                self._emitted[commit_id] = simplification.parents
                return commit

        return None
