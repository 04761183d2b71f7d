"""
Graph module for tgfgraph.

This module provides the NetworkX-backed directed graph store.
"""

from tgfgraph.graph.store import Graph

__all__ = ["Graph"]
