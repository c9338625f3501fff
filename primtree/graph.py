from __future__ import annotations

import operator
from typing import Iterable, Iterator

import numpy as np


class SelfLoopError(ValueError):
    pass


def vertex_key(vertex: Vertex) -> int:
    return vertex.id


def edge_key(edge: Edge) -> tuple[int, int, int]:
    return edge.weight, edge.low.id, edge.high.id


class Vertex():
    """
    Graph node

    Identity is the integer id alone, the incident edges never take part
    in equality or hashing.
    """

    __slots__ = ('_id', '_edges')

    def __init__(self, id: int):
        self._id = operator.index(id)
        self._edges: dict[Edge, Edge] = {}

    @property
    def id(self) -> int:
        return self._id

    @property
    def degree(self) -> int:
        return len(self._edges)

    def connect(self, weight: int, other: Vertex) -> Edge:
        """
        connect two vertices

        Args:
            weight: non-negative integer weight
            other: the opposite endpoint

        Returns:
            the edge registered in both incidence sets
        """
        edge = Edge(weight, self, other)
        existing = self._edges.get(edge)
        if existing is not None:
            return existing
        self._edges[edge] = edge
        other._edges[edge] = edge
        return edge

    def incident_edges(self):
        return self._edges.keys()

    def incident_edges_excluding(self, edge: Edge) -> tuple[Edge, ...]:
        return tuple(e for e in self._edges if e != edge)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return vertex_key(self) == vertex_key(other)

    def __hash__(self):
        return hash(vertex_key(self))

    def __repr__(self):
        return f'v({self._id})'


class Edge():
    """
    Undirected weighted edge

    The endpoints are stored ordered by id so that ``Edge(w, a, b)`` and
    ``Edge(w, b, a)`` compare and hash equal. Ordering (``<``) looks at the
    weight only.
    """

    __slots__ = ('_weight', '_low', '_high')

    def __init__(self, weight: int, a: Vertex, b: Vertex):
        try:
            weight = operator.index(weight)
        except TypeError:
            raise TypeError(
                f"weight must be an integer, not {type(weight).__name__}")
        if weight < 0:
            raise ValueError(f"weight {weight} should not be negative.")
        if a == b:
            raise SelfLoopError(f"can not connect {a!r} to itself.")
        if a.id > b.id:
            a, b = b, a
        self._weight = weight
        self._low = a
        self._high = b

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def low(self) -> Vertex:
        return self._low

    @property
    def high(self) -> Vertex:
        return self._high

    @property
    def endpoints(self) -> tuple[Vertex, Vertex]:
        return self._low, self._high

    @property
    def ids(self) -> tuple[int, int]:
        return self._low.id, self._high.id

    def touches(self, vertex: Vertex) -> bool:
        return vertex == self._low or vertex == self._high

    def other(self, vertex: Vertex) -> Vertex:
        if vertex == self._low:
            return self._high
        if vertex == self._high:
            return self._low
        raise ValueError(f"{vertex!r} is not an endpoint of {self!r}.")

    def as_tuple(self) -> tuple[int, int, int]:
        return self._low.id, self._high.id, self._weight

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return edge_key(self) == edge_key(other)

    def __hash__(self):
        return hash(edge_key(self))

    def __lt__(self, other: Edge) -> bool:
        return self._weight < other._weight

    def __repr__(self):
        return f'e(w:{self._weight}, [{self._low!r} {self._high!r}])'


class Graph():
    """
    Arena of vertices indexed by integer id

    Attributes:
        vertices: mapping from id to vertex, in insertion order

    Methods:
        add_vertex(id): get or create a vertex
        connect(a, b, weight): connect two vertices by id
        components(): connected components
        spanning_tree(root): minimum spanning tree grown from root
    """

    def __init__(self):
        self.vertices: dict[int, Vertex] = {}

    def add_vertex(self, id: int) -> Vertex:
        id = operator.index(id)
        if id not in self.vertices:
            self.vertices[id] = Vertex(id)
        return self.vertices[id]

    def vertex(self, id: int) -> Vertex:
        try:
            return self.vertices[id]
        except KeyError:
            raise KeyError(f"vertex {id} not found.")

    def connect(self, a: int, b: int, weight: int = 1) -> Edge:
        if a == b:
            raise SelfLoopError(f"can not connect v({a}) to itself.")
        return self.add_vertex(a).connect(weight, self.add_vertex(b))

    def edges(self) -> list[Edge]:
        seen = {}
        for v in self.vertices.values():
            for e in v.incident_edges():
                seen.setdefault(e, None)
        return list(seen)

    def __contains__(self, item) -> bool:
        if isinstance(item, Vertex):
            return item.id in self.vertices
        return item in self.vertices

    def __len__(self):
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices.values())

    def __repr__(self):
        return (f'Graph(vertices={len(self.vertices)}, '
                f'edges={len(self.edges())})')

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[int, int]] | Iterable[tuple[int, int, int]]
    ) -> Graph:
        """
        build a graph from an edge list

        Args:
            edges: list of (u, v) or (u, v, weight) tuples, (u, v) edges
                have weight 1

        Returns:
            Graph
        """
        g = cls()
        for e in edges:
            if len(e) == 2:
                u, v, w = *e, 1
            elif len(e) == 3:
                u, v, w = e
            else:
                raise ValueError(f"bad edge {e!r}, expect (u, v[, w]).")
            g.connect(u, v, w)
        return g

    @classmethod
    def from_matrix(cls, matrix) -> Graph:
        """
        build a graph from a symmetric weight matrix

        Zero entries mean "no edge". Vertex ids are the row indices.
        """
        m = np.asarray(matrix)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise ValueError(f"weight matrix must be square, got {m.shape}.")
        if not np.issubdtype(m.dtype, np.integer):
            if not np.all(np.isfinite(m)) or np.any(m != np.round(m)):
                raise ValueError("weight matrix must hold integers.")
            m = m.astype(int)
        if np.any(m < 0):
            raise ValueError("weight matrix must not hold negative weights.")
        if not np.array_equal(m, m.T):
            raise ValueError("weight matrix must be symmetric.")
        if np.any(np.diag(m) != 0):
            raise SelfLoopError("weight matrix has a non-zero diagonal.")

        g = cls()
        for i in range(m.shape[0]):
            g.add_vertex(i)
        for i, j in zip(*np.nonzero(np.triu(m, k=1))):
            g.connect(int(i), int(j), int(m[i, j]))
        return g

    def to_matrix(self) -> np.ndarray:
        ids = sorted(self.vertices)
        index = {id: i for i, id in enumerate(ids)}
        m = np.zeros((len(ids), len(ids)), dtype=int)
        for e in sorted(self.edges(), key=edge_key, reverse=True):
            i, j = index[e.low.id], index[e.high.id]
            m[i, j] = m[j, i] = e.weight
        return m

    def components(self) -> list[list[int]]:
        """
        connected components

        Returns:
            list of components, each a list of vertex ids in insertion order
        """
        nodes = list(self.vertices)
        nodes_map = {n: i for i, n in enumerate(nodes)}
        parent = list(range(len(nodes)))
        rank = [0] * len(nodes)

        def find(u):
            while parent[u] != u:
                parent[u] = parent[parent[u]]
                u = parent[u]
            return u

        def union(u, v):
            u = find(u)
            v = find(v)
            if u == v:
                return
            if rank[u] < rank[v]:
                u, v = v, u
            parent[v] = u
            if rank[u] == rank[v]:
                rank[u] += 1

        for e in self.edges():
            union(nodes_map[e.low.id], nodes_map[e.high.id])

        groups: dict[int, list[int]] = {}
        for n in nodes:
            groups.setdefault(find(nodes_map[n]), []).append(n)
        return list(groups.values())

    def spanning_tree(self, root: int | None = None, trace=None):
        """
        minimum spanning tree

        Args:
            root: id of the root vertex, the first vertex by default
            trace: optional checkpoint callback, see primtree.trace

        Returns:
            SpanningTree

        Raises:
            GraphNotConnected: when some vertex is not reachable from root
        """
        from .prim import GraphNotConnected, PrimBuilder

        if not self.vertices:
            raise ValueError("can not span an empty graph.")
        if root is None:
            root = next(iter(self.vertices))
        builder = PrimBuilder(trace=trace)
        try:
            return builder.build(self.vertex(root), expected=len(self))
        except GraphNotConnected as e:
            e.missing = tuple(id for id in self.vertices if id not in e.tree)
            raise
