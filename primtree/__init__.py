from .config import Config
from .graph import Edge, Graph, SelfLoopError, Vertex, edge_key, vertex_key
from .heap import CandidateQueue
from .prim import GraphNotConnected, PrimBuilder, minimum_spanning_tree
from .trace import Checkpoint, TraceRecorder, log_trace
from .tree import SpanningTree
from .version import __version__
