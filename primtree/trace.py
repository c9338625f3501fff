from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, NamedTuple, Optional

from .graph import Edge, Vertex

logger = logging.getLogger(__name__)


class Checkpoint(Enum):
    ENQUEUE = auto()
    DEQUEUE = auto()
    ADD = auto()
    DISCARD = auto()
    DONE = auto()


TraceFunc = Callable[[Checkpoint, Optional[Edge], Optional[Vertex]], None]


def no_trace(checkpoint: Checkpoint, edge: Edge | None,
             vertex: Vertex | None) -> None:
    pass


def log_trace(checkpoint: Checkpoint, edge: Edge | None,
              vertex: Vertex | None) -> None:
    logger.debug("%s: edge = %s, vertex = %s", checkpoint.name, edge, vertex)


class Event(NamedTuple):
    checkpoint: Checkpoint
    edge: Optional[Edge]
    vertex: Optional[Vertex]


class TraceRecorder():
    """Keeps every checkpoint it is called with."""

    def __init__(self):
        self.events: list[Event] = []

    def __call__(self, checkpoint: Checkpoint, edge: Edge | None,
                 vertex: Vertex | None) -> None:
        self.events.append(Event(checkpoint, edge, vertex))

    def filter(self, checkpoint: Checkpoint) -> list[Event]:
        return [e for e in self.events if e.checkpoint is checkpoint]

    def checkpoints(self) -> list[Checkpoint]:
        return [e.checkpoint for e in self.events]
