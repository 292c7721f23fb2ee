import shutil
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

import git
import pytest

from revwalk.graph import CommitGraph
from revwalk.models.commit import Commit
from revwalk.models.settings import Settings
from revwalk.revwalk import start_walk
from revwalk.stores.memory import MemoryObjectStore
from revwalk.walker import RevWalk


@dataclass
class History:
    """Builds in-memory commit graphs for tests.

    Each commit's tree is its first parent's tree with the given changes
    applied; a change to :code:`None` deletes the file.
    """
    store: MemoryObjectStore = field(default_factory=MemoryObjectStore)
    settings: Settings = field(default_factory=Settings)
    _files: dict[str, dict[str, str]] = field(default_factory=dict)
    _clock: int = 1000

    @property
    def graph(self) -> CommitGraph:
        return CommitGraph.for_store(self.store)

    def files(self, commit_id: str) -> dict[str, str]:
        return dict(self._files[commit_id])

    def commit(
        self,
        commit_id: str,
        *parents: str,
        time: int | None = None,
        changes: t.Mapping[str, str | None] | None = None,
        files: t.Mapping[str, str] | None = None,
    ) -> Commit:
        if time is None:
            self._clock += 10
            time = self._clock
        else:
            self._clock = max(self._clock, time)

        if files is None:
            files = dict(self._files[parents[0]]) if parents else {}
            for filename, contents in (changes or {}).items():
                if contents is None:
                    files.pop(filename, None)
                else:
                    files[filename] = contents
        self._files[commit_id] = dict(files)
        return self.store.add_commit(
            commit_id,
            parents=parents,
            files=files,
            commit_time=time,
            summary=f"commit {commit_id}",
        )

    def walk(
        self,
        *start_ids: str,
        paths: t.Iterable[str] = (),
        max_count: int | None = None,
        graph: CommitGraph | None = None,
    ) -> RevWalk:
        if graph is None:
            graph = self.graph
        return start_walk(graph, start_ids, paths, max_count, settings=self.settings)

    def log(self, *start_ids: str, paths: t.Iterable[str] = (), max_count: int | None = None) -> list[str]:
        return [commit.id for commit in self.walk(*start_ids, paths=paths, max_count=max_count)]


@pytest.fixture
def history() -> History:
    return History()


@pytest.fixture
def git_repo(tmp_path: Path) -> git.Repo:
    if shutil.which("git") is None:
        pytest.skip("skipping test: git executable is not available")

    repo = git.Repo.init(tmp_path / "repo")
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test Author")
        config.set_value("user", "email", "author@example.com")
        config.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture
def commit_files() -> t.Callable[..., git.Commit]:
    """Provides a function that writes files to a repository and commits them."""

    def commit(
        repo: git.Repo,
        message: str,
        files: t.Mapping[str, str],
        *,
        timestamp: int,
    ) -> git.Commit:
        working_dir = Path(repo.working_dir)
        for filename, contents in files.items():
            path = working_dir / filename
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents)
        repo.index.add(list(files))
        date = f"{timestamp} +0000"
        return repo.index.commit(message, author_date=date, commit_date=date)

    return commit
