import concurrent.futures

import pytest

from revwalk.errors import ObjectNotFound
from revwalk.graph import CommitGraph
from revwalk.stores.memory import MemoryObjectStore


class CountingStore(MemoryObjectStore):
    def __init__(self) -> None:
        super().__init__()
        self.num_loads = 0

    def load_commit(self, commit_id):
        self.num_loads += 1
        return super().load_commit(commit_id)


def test_get_loads_each_commit_once() -> None:
    store = CountingStore()
    store.add_commit("a", files={"f": "1"}, commit_time=10)
    graph = CommitGraph.for_store(store)

    first = graph.get("a")
    second = graph.get("a")

    assert first is second
    assert first.id == "a"
    assert store.num_loads == 1
    assert "a" in graph
    assert len(graph) == 1


def test_get_missing_commit() -> None:
    graph = CommitGraph.for_store(MemoryObjectStore())

    with pytest.raises(ObjectNotFound) as info:
        graph.get("deadbeef")

    assert info.value.object_id == "deadbeef"
    assert "deadbeef" in str(info.value)
    assert "deadbeef" not in graph


def test_concurrent_readers_share_commits() -> None:
    store = CountingStore()
    for i in range(50):
        parents = [f"c{i - 1}"] if i else []
        store.add_commit(f"c{i}", parents=parents, files={"f": str(i)}, commit_time=i)
    graph = CommitGraph.for_store(store)

    def load_all() -> list[int]:
        return [id(graph.get(f"c{i}")) for i in range(50)]

    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(lambda _: load_all(), range(8)))

    assert all(result == results[0] for result in results)
    assert store.num_loads == 50
