"""
tgfgraph Engine

In-memory directed graph with breadth-first traversal and a Trivial
Graph Format (TGF) reader/writer.
"""

from tgfgraph.models import Edge, GraphNode, NodeId, Visit
from tgfgraph.graph import Graph
from tgfgraph.traversal import bfs
from tgfgraph.codec import TGFParseError, parse, serialize

__all__ = [
    "Edge",
    "Graph",
    "GraphNode",
    "NodeId",
    "TGFParseError",
    "Visit",
    "bfs",
    "parse",
    "serialize",
]
__version__ = "0.1.0"
