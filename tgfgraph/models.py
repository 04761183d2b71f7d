"""
Core Data Models for tgfgraph

This module defines the value types shared by the graph store, the
traversal engine and the TGF codec:
- Edge: A directed relation between two node ids
- GraphNode: A read-only view of one stored node and its outgoing neighbours
- Visit: One observation produced by a breadth-first traversal

These models are designed to be:
- Immutable (frozen dataclasses)
- Hashable, so edges can live in sets
- Derived views rather than storage; the Graph owns the data
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

NodeId = int

# Node ids are unsigned 64-bit integers
MAX_NODE_ID = 2**64 - 1

T = TypeVar("T")


def validate_node_id(value: Any) -> NodeId:
    """
    Check that a value is usable as a node id.

    Args:
        value: Candidate id

    Returns:
        The id unchanged

    Raises:
        TypeError: If the value is not an int (bool is rejected too)
        ValueError: If the value is outside the unsigned 64-bit range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Node id must be an int, got {type(value).__name__}")
    if value < 0 or value > MAX_NODE_ID:
        raise ValueError(f"Node id {value} is outside the range 0..{MAX_NODE_ID}")
    return value


def is_node_id(value: Any) -> bool:
    """Return True if the value is a valid node id."""
    try:
        validate_node_id(value)
    except (TypeError, ValueError):
        return False
    return True


@dataclass(frozen=True, order=True)
class Edge:
    """
    A directed edge between two nodes.

    Attributes:
        source: Id of the node the edge leaves
        target: Id of the node the edge enters

    Note:
        An edge from A to B says nothing about an edge from B to A.
        Self-loops (source == target) are allowed.
    """

    source: NodeId
    target: NodeId

    def reversed(self) -> "Edge":
        """Return the edge pointing the other way."""
        return Edge(self.target, self.source)

    def as_tuple(self) -> tuple[NodeId, NodeId]:
        return (self.source, self.target)


@dataclass(frozen=True)
class GraphNode(Generic[T]):
    """
    Read-only projection of a single node.

    Built on demand by Graph.get_node; it is never stored. The value is the
    same object the graph holds, so mutable values should not be changed
    through the view.

    Attributes:
        id: The node id
        value: The payload stored under the id
        neighbours: Ids of outgoing neighbours in ascending order
    """

    id: NodeId
    value: T
    neighbours: tuple[NodeId, ...] = ()

    @property
    def neighbour_ids(self) -> tuple[NodeId, ...]:
        return self.neighbours

    @property
    def degree(self) -> int:
        """Number of outgoing edges."""
        return len(self.neighbours)


@dataclass(frozen=True)
class Visit(Generic[T]):
    """
    One observation emitted by breadth-first traversal.

    Attributes:
        id: Id of the visited node
        value: Its payload
        neighbours: Outgoing neighbour ids, ascending
        depth: Distance in edges from the traversal source
    """

    id: NodeId
    value: T
    neighbours: tuple[NodeId, ...] = ()
    depth: int = 0

    @classmethod
    def from_node(cls, node: GraphNode[T], depth: int = 0) -> "Visit[T]":
        """Create a visit record from a node view."""
        return cls(id=node.id, value=node.value, neighbours=node.neighbours, depth=depth)

    @property
    def neighbours_text(self) -> str:
        """Neighbour ids joined with commas for display."""
        return ", ".join(str(n) for n in self.neighbours)

    def format(self, render=str) -> str:
        """
        Render the visit as a three-line text block.

        Args:
            render: Callable turning the value into text

        Returns:
            "ID: <id>\\nValue: <value>\\nNeighbours: <ids>\\n"
        """
        return (
            f"ID: {self.id}\n"
            f"Value: {render(self.value)}\n"
            f"Neighbours: {self.neighbours_text}\n"
        )
