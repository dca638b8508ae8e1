import pytest

from transportation import (
    AlreadyConnected,
    ContainsCycle,
    DuplicateEdge,
    DuplicateVertex,
    Edge,
    Graph,
    InsufficientEdges,
    MissingEdge,
    TransportationError,
)


def make_graph(vertices, edges=(), seed=0):
    graph = Graph(seed=seed)
    for v in vertices:
        graph.add_node(v)
    for source, target, weight in edges:
        graph.add_edge(source, target, weight)
    return graph


def test_edges_are_undirected():
    assert Edge("A", "B", 1) == Edge("B", "A", 5)
    assert hash(Edge("A", "B", 1)) == hash(Edge("B", "A", 5))
    assert Edge("A", "B").key == ("A", "B") == Edge("B", "A").key
    assert Edge("A", "B") != Edge("A", "C")


def test_duplicate_vertex_fails():
    graph = make_graph(["A"])
    with pytest.raises(DuplicateVertex):
        graph.add_node("A")


def test_duplicate_edge_fails_in_either_direction():
    graph = make_graph(["A", "B"], [("A", "B", 1)])
    with pytest.raises(DuplicateEdge):
        graph.add_edge("A", "B", 2)
    with pytest.raises(DuplicateEdge):
        graph.add_edge("B", "A", 3)
    assert len(graph.edges) == 1


def test_add_edges_rejects_whole_batch():
    graph = make_graph(["A", "B", "C"])
    with pytest.raises(DuplicateEdge):
        graph.add_edges([Edge("A", "B", 1), ("B", "C", 2), Edge("C", "B", 3)])
    assert graph.edges == []


def test_add_edge_registers_unknown_endpoints():
    graph = Graph(seed=0)
    graph.add_edge("X", "Y", 1)
    assert graph.vertices == ["X", "Y"]
    assert graph.has_edge("Y", "X")


def test_remove_edge():
    graph = make_graph(["A", "B"], [("A", "B", 1)])
    removed = graph.remove_edge("B", "A")
    assert removed.weight == 1
    assert graph.edges == []
    assert graph.vertices == ["A", "B"]


def test_remove_missing_edge_fails():
    graph = make_graph(["A", "B", "C"], [("A", "B", 1)])
    with pytest.raises(MissingEdge):
        graph.remove_edge("A", "C")
    with pytest.raises(TransportationError):
        graph.remove_edge("X", "Y")
    assert graph.has_edge("A", "B")

    graph.remove_edge("A", "B")
    with pytest.raises(KeyError):
        graph.remove_edge("B", "A")


def test_connectivity():
    assert not Graph(seed=0).is_connected()
    assert make_graph(["A"]).is_connected()
    assert not make_graph(["A", "B"]).is_connected()
    assert make_graph(["A", "B", "C"], [("A", "B", 1), ("C", "B", 1)]).is_connected()


def test_cycle_detection():
    assert not Graph(seed=0).is_cyclic()
    path = make_graph(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1)])
    assert not path.is_cyclic()
    triangle = make_graph(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1), ("C", "A", 1)])
    assert triangle.is_cyclic()
    assert make_graph(["A"], [("A", "A", 1)]).is_cyclic()


def test_is_tree():
    path = make_graph(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1)])
    assert path.is_tree()
    assert not make_graph(["A", "B", "C"], [("A", "B", 1)]).is_tree()
    triangle = make_graph(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1), ("C", "A", 1)])
    assert not triangle.is_tree()


def test_find_cycle():
    triangle = make_graph(["A", "B", "C", "D"], [("A", "B", 1), ("B", "C", 1), ("C", "A", 1), ("C", "D", 1)])
    cycle = triangle.find_cycle()
    assert set(cycle) == {Edge("A", "B"), Edge("B", "C"), Edge("C", "A")}
    assert make_graph(["A", "B"], [("A", "B", 1)]).find_cycle() is None
    assert Graph(seed=0).find_cycle() is None


@pytest.mark.parametrize("seed", range(10))
def test_augmentation_builds_tree_on_three_vertices(seed):
    graph = make_graph(["A", "B", "C"], seed=seed)
    candidates = [Edge("A", "B", 1), Edge("B", "C", 2), Edge("A", "C", 3)]
    added = graph.k_edge_augmentation(2, candidates)
    assert len(added) == 2
    assert len(graph.edges) == 2
    assert graph.is_tree()


def test_augmentation_prefers_cheapest_edges():
    graph = make_graph(["A", "B", "C"])
    graph.k_edge_augmentation(1, [Edge("A", "B", 5), Edge("B", "C", 1), Edge("A", "C", 2)])
    assert graph.edges == [Edge("B", "C")]
    graph.k_edge_augmentation(1, [Edge("A", "B", 5), Edge("B", "C", 1), Edge("A", "C", 2)])
    assert set(graph.edges) == {Edge("B", "C"), Edge("A", "C")}


def test_augmentation_skips_edges_that_close_a_cycle():
    graph = make_graph(["A", "B", "C", "D"], [("A", "B", 1), ("B", "C", 1)])
    added = graph.k_edge_augmentation(1, [Edge("A", "C", 0), Edge("C", "D", 10)])
    assert added == [Edge("C", "D")]
    assert not graph.has_edge("A", "C")
    assert graph.is_tree()


def test_augmentation_never_duplicates_edges():
    graph = make_graph(["A", "B", "C", "D"], [("A", "B", 1)])
    candidates = [("B", "A", 0), ("A", "B", 0), ("B", "C", 1), ("C", "B", 1), ("C", "D", 1)]
    graph.k_edge_augmentation(2, candidates)
    keys = [e.key for e in graph.edges]
    assert len(keys) == len(set(keys)) == 3
    assert graph.is_tree()


def test_augmentation_is_reproducible_for_a_fixed_seed():
    vertices = ["A", "B", "C", "D", "E"]
    candidates = [Edge(a, b, 1) for i, a in enumerate(vertices) for b in vertices[i + 1:]]
    first = make_graph(vertices, seed=42)
    second = make_graph(vertices, seed=42)
    first.k_edge_augmentation(4, candidates)
    second.k_edge_augmentation(4, candidates)
    assert [e.key for e in first.edges] == [e.key for e in second.edges]
    assert first.is_tree()


def test_augmentation_preconditions():
    connected = make_graph(["A", "B"], [("A", "B", 1)])
    with pytest.raises(AlreadyConnected):
        connected.k_edge_augmentation(1, [Edge("A", "B", 1)])

    cyclic = make_graph(["A", "B", "C", "D"], [("A", "B", 1), ("B", "C", 1), ("C", "A", 1)])
    with pytest.raises(ContainsCycle):
        cyclic.k_edge_augmentation(1, [Edge("C", "D", 1)])


def test_augmentation_runs_out_of_candidates():
    graph = make_graph(["A", "B", "C", "D"], [("A", "B", 1)])
    with pytest.raises(InsufficientEdges):
        graph.k_edge_augmentation(1, [Edge("B", "A", 1)])
    with pytest.raises(InsufficientEdges):
        graph.k_edge_augmentation(3, [Edge("B", "C", 1), Edge("A", "C", 1)])


def test_augmentation_k_bounds():
    graph = make_graph(["A", "B"])
    assert graph.k_edge_augmentation(0, [Edge("A", "B", 1)]) == []
    assert graph.edges == []
    with pytest.raises(ValueError):
        graph.k_edge_augmentation(-1, [])


def test_update_seed_uses_clock():
    graph = Graph(seed=1)
    graph.update_seed()
    assert graph.seed > 1


def test_to_networkx_copy():
    graph = make_graph(["A", "B"], [("A", "B", 3)])
    nx_graph = graph.to_networkx()
    assert nx_graph["A"]["B"]["weight"] == 3
    nx_graph.remove_edge("A", "B")
    assert graph.has_edge("A", "B")
