"""
Traversal module for tgfgraph.

This module provides breadth-first enumeration of the nodes reachable
from a source node.
"""

from tgfgraph.traversal.search import DEFAULT_SOURCE_ID, bfs, reachable

__all__ = [
    "DEFAULT_SOURCE_ID",
    "bfs",
    "reachable",
]
