from __future__ import annotations

import logging

from .graph import Edge, Graph, Vertex
from .heap import CandidateQueue
from .trace import Checkpoint, TraceFunc, no_trace
from .tree import SpanningTree

logger = logging.getLogger(__name__)


class GraphNotConnected(Exception):

    def __init__(self, tree: SpanningTree, expected: int, missing=()):
        self.tree = tree
        self.expected = expected
        self.missing = tuple(missing)
        super().__init__(tree, expected)

    def __str__(self):
        msg = (f"graph not connected from root {self.tree.root!r}: "
               f"spanned {self.tree.size()} of {self.expected} vertices")
        if self.missing:
            msg += f", unreached {list(self.missing)}"
        return msg + "."


class PrimBuilder():
    """
    Prim's minimum spanning tree

    Grows one tree from the root, always adding the lightest edge with
    exactly one endpoint in the tree.

    Args:
        trace: callback invoked as trace(checkpoint, edge, vertex) at each
            checkpoint, see primtree.trace
    """

    def __init__(self, trace: TraceFunc | None = None):
        self.trace = no_trace if trace is None else trace

    def _offer(self, queue: CandidateQueue, vertex: Vertex, edges):
        for edge in edges:
            if queue.offer(edge):
                self.trace(Checkpoint.ENQUEUE, edge, vertex)

    def _candidate(self, tree: SpanningTree, edge: Edge) -> Vertex:
        # every queued edge was offered by a vertex already in the tree
        if tree.contains(edge.low):
            return edge.high
        return edge.low

    def build(self, root: Vertex, expected: int | None = None) -> SpanningTree:
        """
        build the minimum spanning tree of the component holding root

        Args:
            root: the vertex the tree grows from
            expected: total number of vertices of the graph, if given a
                tree smaller than that raises GraphNotConnected

        Returns:
            the frozen SpanningTree
        """
        tree = SpanningTree()
        queue = CandidateQueue()

        tree.add(root)
        self.trace(Checkpoint.ADD, None, root)
        self._offer(queue, root, root.incident_edges())

        while not queue.is_empty():
            edge = queue.poll()
            self.trace(Checkpoint.DEQUEUE, edge, None)
            vertex = self._candidate(tree, edge)
            if tree.contains(vertex):
                self.trace(Checkpoint.DISCARD, edge, vertex)
                continue
            tree.add(vertex, edge)
            self.trace(Checkpoint.ADD, edge, vertex)
            self._offer(queue, vertex, vertex.incident_edges_excluding(edge))

        tree.freeze()
        self.trace(Checkpoint.DONE, None, None)
        logger.debug("spanning tree from %r: %d vertices, weight = %d", root,
                     tree.size(), tree.weight())

        if expected is not None and tree.size() != expected:
            raise GraphNotConnected(tree, expected)
        return tree


def minimum_spanning_tree(
    edges: list[tuple[int, int]] | list[tuple[int, int, int]],
    root: int | None = None,
    trace: TraceFunc | None = None,
) -> list[tuple[int, int, int]]:
    """
    minimum spanning tree

    Args:
        edges: list of (u, v) or (u, v, weight) edges, (u, v) edges have
            weight 1
        root: id of the vertex to grow from, the first vertex by default
        trace: optional checkpoint callback

    Returns:
        list of (low, high, weight) edges in the minimum spanning tree
    """
    if not edges:
        return []
    return Graph.from_edges(edges).spanning_tree(root, trace=trace).as_tuples()
