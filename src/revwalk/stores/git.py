from __future__ import annotations

__all__ = ("GitObjectStore",)

import typing as t
from dataclasses import dataclass
from pathlib import Path

import git
from loguru import logger
from overrides import overrides

from revwalk.errors import ObjectNotFound
from revwalk.models.commit import Commit
from revwalk.stores.base import ObjectStore

if t.TYPE_CHECKING:
    from revwalk.models.commit import CommitId, TreeId

_LOOKUP_ERRORS = (
    git.exc.BadName,
    git.exc.BadObject,
    git.exc.GitCommandError,
    ValueError,
)


def _to_commit(commit: git.Commit) -> Commit:
    summary = commit.summary
    if isinstance(summary, bytes):
        summary = summary.decode("utf-8", errors="replace")
    return Commit(
        id=commit.hexsha,
        parents=tuple(parent.hexsha for parent in commit.parents),
        tree_id=commit.tree.hexsha,
        commit_time=commit.committed_date,
        summary=summary,
    )


@dataclass
class GitObjectStore(ObjectStore):
    """Reads commits and trees from a local git repository via GitPython."""
    repository: git.Repo

    @classmethod
    def open(cls, path: str | Path) -> GitObjectStore:
        if isinstance(path, str):
            path = Path(path)
        try:
            repository = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as err:
            message = f"not a git repository: {path}"
            raise ValueError(message) from err
        logger.debug(f"opened repository: {repository.git_dir}")
        return cls(repository)

    def resolve(self, revision: str) -> CommitId:
        """Resolves a revision (branch, tag, sha, HEAD~2, ...) to a commit id."""
        try:
            return self.repository.commit(revision).hexsha
        except _LOOKUP_ERRORS:
            raise ObjectNotFound(revision) from None

    def _resolve_tree(self, tree_id: TreeId) -> str:
        try:
            return self.repository.rev_parse(f"{tree_id}^{{tree}}").hexsha
        except _LOOKUP_ERRORS:
            raise ObjectNotFound(tree_id) from None

    @overrides
    def load_commit(self, commit_id: CommitId) -> Commit:
        try:
            commit = self.repository.commit(commit_id)
            return _to_commit(commit)
        except _LOOKUP_ERRORS:
            raise ObjectNotFound(commit_id) from None

    @overrides
    def diff_touches_paths(
        self,
        tree_a: TreeId | None,
        tree_b: TreeId,
        paths: t.Collection[str],
    ) -> bool:
        tree_b = self._resolve_tree(tree_b)

        # against the empty tree, any file under the paths counts as a change
        if tree_a is None:
            try:
                output = self.repository.git.ls_tree("-r", "--name-only", tree_b, "--", *paths)
            except _LOOKUP_ERRORS:
                raise ObjectNotFound(tree_b) from None
            return bool(output.strip())

        tree_a = self._resolve_tree(tree_a)
        try:
            output = self.repository.git.diff_tree(
                "-r",
                "--name-only",
                "--no-renames",
                tree_a,
                tree_b,
                "--",
                *paths,
            )
        except _LOOKUP_ERRORS:
            raise ObjectNotFound(f"{tree_a}..{tree_b}") from None
        return bool(output.strip())
