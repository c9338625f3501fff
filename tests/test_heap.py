from primtree.graph import Edge, Vertex
from primtree.heap import CandidateQueue


def edges():
    e1 = Edge(10, Vertex(1), Vertex(2))
    e2 = Edge(20, Vertex(1), Vertex(2))
    e3 = Edge(20, Vertex(3), Vertex(4))
    e4 = Edge(10, Vertex(1), Vertex(3))
    return e1, e2, e3, e4


def test_empty():
    queue = CandidateQueue()
    assert queue.is_empty()
    assert not queue
    assert len(queue) == 0
    assert queue.poll() is None
    assert queue.peek() is None
    assert queue.offer() == 0
    assert queue.is_empty()


def test_dedup():
    e1, *_ = edges()
    queue = CandidateQueue()
    assert queue.offer(e1) == 1
    assert not queue.is_empty()
    assert queue.offer(Edge(10, Vertex(2), Vertex(1))) == 0
    assert len(queue) == 1
    assert queue.poll() == e1
    assert queue.is_empty()
    assert queue.poll() is None


def test_order():
    e1, e2, e3, e4 = edges()
    queue = CandidateQueue()
    assert queue.offer(e3, e1, e2, e4, e1) == 4
    assert e2 in queue
    assert queue.peek() == e1

    assert queue.poll() == e1
    assert queue.poll() == e4
    assert queue.poll() == e3
    assert queue.poll() == e2
    assert queue.is_empty()


def test_reoffer_after_poll():
    e1, *_ = edges()
    queue = CandidateQueue()
    queue.offer(e1)
    queue.poll()
    assert e1 not in queue
    assert queue.offer(e1) == 1


def test_repr():
    e1, e2, *_ = edges()
    queue = CandidateQueue()
    queue.offer(e2, e1)
    assert repr(queue) == 'PQ = { e(w:10, [v(1) v(2)]) e(w:20, [v(1) v(2)]) }'
