from __future__ import annotations

__all__ = ("ObjectStore",)

import abc
import typing as t

if t.TYPE_CHECKING:
    from revwalk.models.commit import Commit, CommitId, TreeId


class ObjectStore(abc.ABC):
    """Provides read access to the commits and trees of a repository."""

    @abc.abstractmethod
    def load_commit(self, commit_id: CommitId) -> Commit:
        """Loads the commit with a given id.

        Raises
        ------
        ObjectNotFound
            If the id does not resolve to a commit.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def diff_touches_paths(
        self,
        tree_a: TreeId | None,
        tree_b: TreeId,
        paths: t.Collection[str],
    ) -> bool:
        """Determines whether two trees differ at or below any of the given paths.

        Arguments:
        ---------
        tree_a: TreeId | None
            The older tree. If :code:`None`, the empty tree is used.
        tree_b: TreeId
            The newer tree.
        paths: t.Collection[str]
            Normalised, repository-relative paths. A path matches itself and
            everything beneath it.

        Raises:
        ------
        ObjectNotFound
            If either tree cannot be loaded.
        """
        raise NotImplementedError
