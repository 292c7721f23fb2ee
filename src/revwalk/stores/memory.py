from __future__ import annotations

__all__ = ("MemoryObjectStore",)

import hashlib
import json
import typing as t
from dataclasses import dataclass, field

from overrides import overrides

from revwalk.errors import ObjectNotFound
from revwalk.models.commit import Commit
from revwalk.stores.base import ObjectStore

if t.TYPE_CHECKING:
    from revwalk.models.commit import CommitId, TreeId


def _touches(changed: str, paths: t.Collection[str]) -> bool:
    return any(changed == path or changed.startswith(f"{path}/") for path in paths)


@dataclass
class MemoryObjectStore(ObjectStore):
    """Keeps commits and flat file trees in memory.

    Trees map repository-relative file paths to their contents.
    """
    _commits: dict[CommitId, Commit] = field(default_factory=dict, repr=False)
    _trees: dict[TreeId, dict[str, str]] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self._commits)

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._commits

    def add_tree(self, files: t.Mapping[str, str]) -> TreeId:
        """Stores a tree and returns its content-derived id."""
        contents = dict(files)
        encoded = json.dumps(sorted(contents.items())).encode("utf-8")
        tree_id = hashlib.sha1(encoded).hexdigest()  # noqa: S324
        self._trees[tree_id] = contents
        return tree_id

    def add_commit(
        self,
        commit_id: CommitId,
        *,
        commit_time: int,
        parents: t.Sequence[CommitId] = (),
        files: t.Mapping[str, str] | None = None,
        tree_id: TreeId | None = None,
        summary: str = "",
    ) -> Commit:
        """Stores a commit whose tree is either given by id or built from files."""
        if (files is None) == (tree_id is None):
            message = "exactly one of files or tree_id must be given"
            raise ValueError(message)
        if files is not None:
            tree_id = self.add_tree(files)
        assert tree_id is not None
        commit = Commit(
            id=commit_id,
            parents=tuple(parents),
            tree_id=tree_id,
            commit_time=commit_time,
            summary=summary,
        )
        self._commits[commit_id] = commit
        return commit

    def tree(self, tree_id: TreeId) -> dict[str, str]:
        try:
            return self._trees[tree_id]
        except KeyError:
            raise ObjectNotFound(tree_id) from None

    @overrides
    def load_commit(self, commit_id: CommitId) -> Commit:
        try:
            return self._commits[commit_id]
        except KeyError:
            raise ObjectNotFound(commit_id) from None

    @overrides
    def diff_touches_paths(
        self,
        tree_a: TreeId | None,
        tree_b: TreeId,
        paths: t.Collection[str],
    ) -> bool:
        files_a = self.tree(tree_a) if tree_a is not None else {}
        files_b = self.tree(tree_b)
        for filename in files_a.keys() | files_b.keys():
            if files_a.get(filename) != files_b.get(filename) and _touches(filename, paths):
                return True
        return False
