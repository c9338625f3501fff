from __future__ import annotations

from typing import Optional

from .graph import Edge, Vertex, vertex_key


class SpanningTree():
    """
    Vertices of a spanning tree with the edge that attached each of them

    The root is stored with no edge. Membership is keyed on the vertex id
    and the first insertion of an id wins.
    """

    __slots__ = ('_members', '_frozen')

    def __init__(self):
        self._members: dict[int, tuple[Vertex, Optional[Edge]]] = {}
        self._frozen = False

    @property
    def root(self) -> Vertex | None:
        for vertex, edge in self._members.values():
            if edge is None:
                return vertex
        return None

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> SpanningTree:
        self._frozen = True
        return self

    def add(self, vertex: Vertex, edge: Edge | None = None) -> bool:
        """
        add a vertex to the tree

        Args:
            vertex: the vertex to add
            edge: the edge attaching it, None for the root

        Returns:
            False if the vertex was already in the tree

        Raises:
            RuntimeError: the tree is frozen
            ValueError: edge is None but the tree already has a root, or
                edge does not touch vertex
        """
        if self._frozen:
            raise RuntimeError("spanning tree is frozen.")
        key = vertex_key(vertex)
        if key in self._members:
            return False
        if edge is None:
            if self._members:
                raise ValueError(
                    f"tree already has a root, {vertex!r} needs an edge.")
        elif not edge.touches(vertex):
            raise ValueError(f"{edge!r} does not touch {vertex!r}.")
        self._members[key] = (vertex, edge)
        return True

    def contains(self, vertex: Vertex | int) -> bool:
        if isinstance(vertex, Vertex):
            vertex = vertex_key(vertex)
        return vertex in self._members

    __contains__ = contains

    def edge_for(self, vertex: Vertex | int) -> Edge | None:
        if isinstance(vertex, Vertex):
            vertex = vertex_key(vertex)
        return self._members[vertex][1]

    def vertices(self) -> list[Vertex]:
        return [vertex for vertex, _ in self._members.values()]

    def edges(self) -> list[Edge]:
        return [edge for _, edge in self._members.values() if edge is not None]

    def weight(self) -> int:
        return sum(edge.weight for edge in self.edges())

    def size(self) -> int:
        return len(self._members)

    def __len__(self):
        return len(self._members)

    def as_tuples(self) -> list[tuple[int, int, int]]:
        return [edge.as_tuple() for edge in self.edges()]

    def __repr__(self):
        items = ' '.join(f'{{{vertex!r}, {edge!r}}}'
                         for vertex, edge in self._members.values())
        return f'T = {{ {items} }}'
