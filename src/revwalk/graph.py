from __future__ import annotations

__all__ = ("CommitGraph",)

import threading
import typing as t
from dataclasses import dataclass, field

if t.TYPE_CHECKING:
    from revwalk.models.commit import Commit, CommitId
    from revwalk.stores.base import ObjectStore


@dataclass
class CommitGraph:
    """Resolves commit ids to commits, loading each commit at most once.

    Loaded commits are cached for the lifetime of the graph. The graph may be
    shared by concurrent walks: cached reads take no lock, and population is
    serialised so that every caller observes the same commit object.
    """
    store: ObjectStore
    _cache: dict[CommitId, Commit] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def for_store(cls, store: ObjectStore) -> CommitGraph:
        return cls(store)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._cache

    def get(self, commit_id: CommitId) -> Commit:
        """Returns the commit with a given id.

        Raises
        ------
        ObjectNotFound
            If the id does not resolve to a commit.
        """
        commit = self._cache.get(commit_id)
        if commit is not None:
            return commit

        with self._lock:
            commit = self._cache.get(commit_id)
            if commit is None:
                commit = self.store.load_commit(commit_id)
                self._cache[commit_id] = commit
        return commit
