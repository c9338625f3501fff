from __future__ import annotations

import heapq
from itertools import count

from .graph import Edge, edge_key


class CandidateQueue():
    """
    Deduplicating min-priority queue of edges

    Edges are ordered by weight, equal weights leave the queue in the order
    they were offered. Offering an edge equal to one already queued is a
    silent no-op.

    Methods:
        offer(*edges): queue the edges not present yet
        poll(): remove and return the lightest edge, None if empty
        peek(): return the lightest edge without removing it
    """

    __slots__ = ('_heap', '_present', '_seq')

    def __init__(self):
        self._heap: list[tuple[int, int, Edge]] = []
        self._present: set[tuple[int, int, int]] = set()
        self._seq = count()

    def offer(self, *edges: Edge) -> int:
        added = 0
        for edge in edges:
            key = edge_key(edge)
            if key in self._present:
                continue
            self._present.add(key)
            heapq.heappush(self._heap, (edge.weight, next(self._seq), edge))
            added += 1
        return added

    def poll(self) -> Edge | None:
        if not self._heap:
            return None
        *_, edge = heapq.heappop(self._heap)
        self._present.discard(edge_key(edge))
        return edge

    def peek(self) -> Edge | None:
        if not self._heap:
            return None
        return self._heap[0][-1]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)

    def __contains__(self, edge: Edge) -> bool:
        return edge_key(edge) in self._present

    def __repr__(self):
        return 'PQ = { ' + ' '.join(repr(e) for *_, e in sorted(self._heap)) + ' }'
