from dataclasses import dataclass
from itertools import islice

import pytest

from linkcrawler.core import Crawler

from conftest import AdjacencyMap


@pytest.mark.parametrize(
    "edges, expected",
    [
        ({0: [1, 2], 1: [0, 3], 2: [3], 3: [2, 0]}, [0, 1, 2, 3]),
        ({0: [1], 1: [0, 2, 4], 2: [0, 3], 3: [0], 4: [0]}, [0, 1, 2, 4, 3]),
        ({0: [1, 1, 2], 1: [2, 3], 2: [], 3: []}, [0, 1, 2, 3]),
        ({0: [1], 1: [], 2: []}, [0, 1]),
    ],
    ids=["cycle", "fan-out", "duplicate-neighbors", "unreachable"],
)
def test_bfs_order(edges, expected):
    assert list(Crawler(AdjacencyMap(edges), 0)) == expected


def test_start_node_is_always_emitted():
    assert list(Crawler(AdjacencyMap({}), "lonely")) == ["lonely"]


def test_self_loop_emitted_once():
    assert list(Crawler(AdjacencyMap({0: [0, 0]}), 0)) == [0]


def test_each_node_fetched_once():
    graph = AdjacencyMap({0: [1, 2, 1], 1: [2, 0, 3], 2: [3, 1], 3: [0]})
    nodes = list(Crawler(graph, 0))
    assert sorted(nodes) == [0, 1, 2, 3]
    assert graph.calls == nodes


def test_failed_node_still_emitted():
    class Flaky(AdjacencyMap):
        def adjacent_nodes(self, node):
            if node == 1:
                self.calls.append(node)
                return []
            return super().adjacent_nodes(node)

    graph = Flaky({0: [1, 2], 1: [3], 2: [], 3: []})
    crawler = Crawler(graph, 0)
    assert list(crawler) == [0, 1, 2]
    assert 1 in crawler.visited
    assert 3 not in crawler.visited


def test_prefix_consumption_is_lazy():
    graph = AdjacencyMap({0: [1, 2], 1: [3, 4], 2: [5], 3: [], 4: [], 5: []})
    assert list(islice(Crawler(graph, 0), 3)) == [0, 1, 2]
    assert graph.calls == [0, 1, 2]


def test_infinite_graph_prefix():
    class Integers:
        def adjacent_nodes(self, n):
            return [n + 1, 2 * n + 1]

    assert list(islice(Crawler(Integers(), 0), 5)) == [0, 1, 2, 3, 5]


def test_exhausted_stays_exhausted():
    crawler = Crawler(AdjacencyMap({0: [1]}), 0)
    assert list(crawler) == [0, 1]
    assert next(crawler, None) is None
    assert next(crawler, None) is None
    assert list(crawler) == []


def test_pending_counts_duplicates():
    crawler = Crawler(AdjacencyMap({0: [1, 1, 2]}), 0)
    assert crawler.pending == 1
    next(crawler)
    assert crawler.pending == 3


def test_visited_is_a_snapshot():
    crawler = Crawler(AdjacencyMap({0: [1]}), 0)
    next(crawler)
    snapshot = crawler.visited
    next(crawler)
    assert snapshot == {0}
    assert crawler.visited == {0, 1}


def test_value_nodes():
    @dataclass(frozen=True)
    class Page:
        path: str

    home, about, team = Page("/"), Page("/about"), Page("/team")
    graph = AdjacencyMap({
        Page("/"): [Page("/about"), Page("/team")],
        Page("/about"): [Page("/"), Page("/team")],
    })
    assert list(Crawler(graph, home)) == [home, about, team]
