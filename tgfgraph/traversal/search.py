"""
Breadth-First Traversal for tgfgraph

Walks a Graph level by level from a source node and yields one Visit per
reachable node.

Algorithm:
    - A FIFO queue starts with the source; the visited set starts empty
    - Each popped id is skipped if already visited, otherwise marked
    - A popped id that cannot be resolved is logged and skipped; the walk
      carries on with whatever is still queued
    - All neighbours of a resolved node are enqueued, visited or not;
      duplicates are discarded when popped

The visited set bounds the work to O(nodes + edges), so cycles need no
special handling and the walk always terminates.
"""

import logging
from collections import deque
from typing import TYPE_CHECKING, Iterator, TypeVar

from tgfgraph.models import NodeId, Visit

if TYPE_CHECKING:
    from tgfgraph.graph import Graph

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Source node used when the caller does not name one
DEFAULT_SOURCE_ID: NodeId = 1


def bfs(graph: "Graph[T]", source: NodeId = DEFAULT_SOURCE_ID) -> Iterator[Visit[T]]:
    """
    Traverse the graph breadth-first.

    The generator is lazy: nothing is read from the graph until the first
    item is requested. Mutating the graph while iterating is not supported.

    Args:
        graph: The graph to walk
        source: Id of the starting node

    Yields:
        A Visit for every node reachable from source, each exactly once

    Example:
        >>> graph = Graph.from_pairs([(1, "a"), (2, "b")], [(1, 2)])
        >>> [visit.id for visit in bfs(graph, 1)]
        [1, 2]
    """
    visited: set[NodeId] = set()
    queue: deque[tuple[NodeId, int]] = deque([(source, 0)])

    while queue:
        node_id, depth = queue.popleft()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = graph.get_node(node_id)
        if node is None:
            logger.warning("Tried to access nonexistent node %s", node_id)
            continue

        yield Visit.from_node(node, depth=depth)
        queue.extend((neighbour, depth + 1) for neighbour in node.neighbours)


def reachable(graph: "Graph[T]", source: NodeId = DEFAULT_SOURCE_ID) -> list[NodeId]:
    """
    List the ids reachable from source in breadth-first order.

    Args:
        graph: The graph to walk
        source: Id of the starting node

    Returns:
        Node ids in visit order; empty if source is not in the graph
    """
    return [visit.id for visit in bfs(graph, source)]
