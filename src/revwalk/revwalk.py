from __future__ import annotations

__all__ = (
    "END_OF_WALK",
    "EndOfWalk",
    "effective_parents",
    "log",
    "next_commit",
    "start_walk",
)

import enum
import typing as t

from loguru import logger

from revwalk.errors import NoStartPoint
from revwalk.filter import PathFilter
from revwalk.models.settings import Settings
from revwalk.simplify import HistorySimplifier
from revwalk.walker import RevWalk

if t.TYPE_CHECKING:
    from revwalk.graph import CommitGraph
    from revwalk.models.commit import Commit, CommitId


class EndOfWalk(enum.Enum):
    """Returned by :func:`next_commit` once a walk has no more commits."""
    END_OF_WALK = "end-of-walk"


END_OF_WALK = EndOfWalk.END_OF_WALK


def start_walk(
    graph: CommitGraph,
    start_ids: t.Sequence[CommitId],
    paths: t.Iterable[str] = (),
    max_count: int | None = None,
    *,
    settings: Settings | None = None,
) -> RevWalk:
    """Prepares a walk over the history reachable from the given commits.

    No commits are loaded until the first call to :func:`next_commit`.

    Arguments:
    ---------
    graph: CommitGraph
        The commit graph to walk. It may be shared between walks.
    start_ids: t.Sequence[CommitId]
        The commits from which to start walking, typically a branch tip.
    paths: t.Iterable[str]
        The paths of interest. If empty, every commit is emitted and no
        history simplification takes place.
    max_count: int | None
        The maximum number of commits to emit. If :code:`None`, the value
        from the settings is used.
    settings: Settings | None
        The settings to use. If :code:`None`, settings are read from the
        environment.

    Raises:
    ------
    NoStartPoint
        If no start commits are given.
    ValueError
        If a path is empty or :code:`max_count` is negative.
    """
    if not start_ids:
        raise NoStartPoint
    if settings is None:
        settings = Settings.from_env()
    if max_count is None:
        max_count = settings.max_count

    path_filter = PathFilter.build(graph, paths)
    if path_filter.matches_all:
        logger.debug("no paths given; history will not be simplified")
    else:
        logger.debug(f"filtering history to paths: {sorted(path_filter.paths)}")

    simplifier = HistorySimplifier(
        graph=graph,
        path_filter=path_filter,
        ancestry_search_limit=settings.ancestry_search_limit,
    )
    return RevWalk(
        graph=graph,
        simplifier=simplifier,
        start_ids=tuple(start_ids),
        max_count=max_count,
    )


def next_commit(walk: RevWalk) -> Commit | EndOfWalk:
    """Returns the next commit of a walk, or :data:`END_OF_WALK`.

    Raises
    ------
    ObjectNotFound
        If a commit or tree reachable from the walk cannot be loaded.
        The walk cannot be resumed afterwards.
    """
    return next(walk, END_OF_WALK)


def effective_parents(walk: RevWalk, commit_id: CommitId) -> tuple[CommitId, ...]:
    """Returns the parents of a commit in the simplified history of a walk.

    Only valid for commits that the walk has already emitted.
    """
    return walk.effective_parents(commit_id)


def log(
    graph: CommitGraph,
    start_ids: t.Sequence[CommitId],
    paths: t.Iterable[str] = (),
    max_count: int | None = None,
    *,
    settings: Settings | None = None,
) -> t.Iterator[Commit]:
    """Returns an iterator over the commits of a simplified history, newest first."""
    return start_walk(graph, start_ids, paths, max_count, settings=settings)
