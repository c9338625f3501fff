import numpy as np
import pytest
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import minimum_spanning_tree as scipy_mst

from primtree.graph import Edge, Graph, Vertex
from primtree.prim import GraphNotConnected, PrimBuilder, minimum_spanning_tree
from primtree.trace import Checkpoint, TraceRecorder


@pytest.fixture
def square():
    vertices = [Vertex(i) for i in range(4)]
    v0, v1, v2, v3 = vertices
    v0.connect(3, v1)
    v0.connect(2, v2)
    v0.connect(3, v3)
    v1.connect(2, v3)
    v2.connect(3, v3)
    return vertices


@pytest.fixture
def pentagon():
    weights = {
        (0, 1): 9,
        (0, 2): 75,
        (1, 2): 95,
        (1, 3): 19,
        (1, 4): 42,
        (2, 3): 51,
        (3, 4): 31
    }
    vertices = [Vertex(i) for i in range(5)]
    for (a, b), w in weights.items():
        vertices[a].connect(w, vertices[b])
    return vertices


def random_graph(n, extra, seed):
    rng = np.random.default_rng(seed)
    m = np.zeros((n, n), dtype=int)
    order = rng.permutation(n)
    for a, b in zip(order[:-1], order[1:]):
        m[a, b] = m[b, a] = rng.integers(1, 100)
    pairs = [(a, b) for a in range(n) for b in range(a + 1, n) if m[a, b] == 0]
    for i in rng.choice(len(pairs), size=min(extra, len(pairs)),
                        replace=False):
        a, b = pairs[i]
        m[a, b] = m[b, a] = rng.integers(1, 100)
    return m


def test_square(square):
    v0, v1, v2, v3 = square
    tree = PrimBuilder().build(v0)

    assert tree.weight() == 7
    assert len(tree.edges()) == 3
    edges = set(tree.edges())
    assert Edge(2, v0, v2) in edges
    assert Edge(2, v1, v3) in edges
    assert (Edge(3, v0, v1) in edges) != (Edge(3, v2, v3) in edges)
    assert tree.as_tuples() == [(0, 2, 2), (0, 1, 3), (1, 3, 2)]


def test_pentagon(pentagon):
    v0, v1, v2, v3, v4 = pentagon
    tree = PrimBuilder().build(v0)

    assert tree.weight() == 110
    assert len(tree.edges()) == 4
    edges = set(tree.edges())
    assert edges == {
        Edge(9, v0, v1),
        Edge(19, v1, v3),
        Edge(51, v2, v3),
        Edge(31, v3, v4)
    }
    for e in [Edge(75, v0, v2), Edge(95, v1, v2), Edge(42, v1, v4)]:
        assert e not in edges


@pytest.mark.parametrize('fixture, weight', [('square', 7), ('pentagon', 110)])
def test_root_independent(fixture, weight, request):
    vertices = request.getfixturevalue(fixture)
    for root in vertices:
        tree = PrimBuilder().build(root)
        assert tree.root == root
        assert tree.size() == len(vertices)
        assert len(tree.edges()) == len(vertices) - 1
        assert tree.weight() == weight


def test_single_vertex():
    tree = PrimBuilder().build(Vertex(0))
    assert tree.size() == 1
    assert tree.edges() == []
    assert tree.weight() == 0


def test_returned_tree_is_frozen(square):
    tree = PrimBuilder().build(square[0])
    assert tree.frozen
    with pytest.raises(RuntimeError):
        tree.add(Vertex(9), Edge(1, square[0], Vertex(9)))


def test_parallel_edges():
    edges = [(1, 2, 1), (1, 2, 2), (2, 3, 1), (2, 3, 2), (3, 4, 1), (3, 4, 3)]
    assert set(minimum_spanning_tree(edges)) == {(1, 2, 1), (2, 3, 1),
                                                 (3, 4, 1)}


def test_minimum_spanning_tree():
    assert minimum_spanning_tree([]) == []

    edges = [(1, 2, 3), (2, 3, 1), (3, 4, 4), (1, 4, 2)]
    assert set(minimum_spanning_tree(edges)) == {(1, 2, 3), (1, 4, 2),
                                                 (2, 3, 1)}

    edges = [(1, 2, 4), (1, 3, 1), (2, 3, 3), (2, 4, 2), (3, 4, 5), (3, 5, 6),
             (4, 5, 7)]
    assert set(minimum_spanning_tree(edges)) == {(1, 3, 1), (2, 4, 2),
                                                 (2, 3, 3), (3, 5, 6)}

    edges = [(1, 2, 7), (1, 3, 9), (1, 6, 14), (2, 3, 10), (2, 4, 15),
             (3, 4, 11), (3, 6, 2), (4, 5, 6), (5, 6, 9)]
    ret = minimum_spanning_tree(edges, root=4)
    assert {(u, v) for u, v, _ in ret} == {(3, 6), (4, 5), (1, 2), (1, 3),
                                           (5, 6)}
    assert sum(w for *_, w in ret) == 33


def test_unweighted():
    ret = minimum_spanning_tree([(1, 2), (2, 3), (1, 3)])
    assert len(ret) == 2
    assert all(w == 1 for *_, w in ret)


@pytest.mark.parametrize('seed', range(8))
def test_against_scipy(seed):
    m = random_graph(15, 30, seed)
    expected = int(scipy_mst(csr_matrix(m)).sum())

    g = Graph.from_matrix(m)
    for root in [0, 7, 14]:
        tree = g.spanning_tree(root)
        assert tree.weight() == expected
        assert len(tree.edges()) == 14


def test_disconnected_partial():
    g = Graph.from_edges([(1, 2, 1), (2, 3, 2), (4, 5, 3), (5, 6, 4)])
    tree = PrimBuilder().build(g.vertex(1))
    assert tree.size() == 3
    assert tree.size() != len(g)
    assert tree.as_tuples() == [(1, 2, 1), (2, 3, 2)]


def test_disconnected_fail_fast():
    g = Graph.from_edges([(1, 2, 1), (2, 3, 2), (4, 5, 3), (5, 6, 4)])
    with pytest.raises(GraphNotConnected) as excinfo:
        PrimBuilder().build(g.vertex(4), expected=len(g))
    assert excinfo.value.tree.size() == 3
    assert excinfo.value.expected == 6

    with pytest.raises(GraphNotConnected) as excinfo:
        g.spanning_tree(1)
    assert excinfo.value.missing == (4, 5, 6)
    assert 'unreached [4, 5, 6]' in str(excinfo.value)

    with pytest.raises(GraphNotConnected):
        minimum_spanning_tree([(1, 2, 1), (4, 5, 3)])


def test_empty_graph():
    with pytest.raises(ValueError):
        Graph().spanning_tree()


def test_trace(square):
    recorder = TraceRecorder()
    tree = PrimBuilder(trace=recorder).build(square[0])

    assert recorder.checkpoints()[0] is Checkpoint.ADD
    assert recorder.checkpoints()[-1] is Checkpoint.DONE
    assert len(recorder.filter(Checkpoint.ADD)) == 4
    assert len(recorder.filter(Checkpoint.ENQUEUE)) == 5
    assert len(recorder.filter(Checkpoint.DEQUEUE)) == 5
    assert len(recorder.filter(Checkpoint.DISCARD)) == 2

    added = [e.edge for e in recorder.filter(Checkpoint.ADD)]
    assert added == [None, *tree.edges()]
    discarded = {e.edge for e in recorder.filter(Checkpoint.DISCARD)}
    assert discarded == {Edge(3, square[0], square[3]),
                         Edge(3, square[2], square[3])}


def test_default_trace_is_silent(square, caplog):
    with caplog.at_level('DEBUG', logger='primtree.trace'):
        PrimBuilder().build(square[0])
    assert not [r for r in caplog.records if r.name == 'primtree.trace']


def test_log_trace(square, caplog):
    from primtree.trace import log_trace

    with caplog.at_level('DEBUG', logger='primtree.trace'):
        PrimBuilder(trace=log_trace).build(square[0])
    messages = [r.getMessage() for r in caplog.records
                if r.name == 'primtree.trace']
    assert messages[0] == 'ADD: edge = None, vertex = v(0)'
    assert messages[-1] == 'DONE: edge = None, vertex = None'
