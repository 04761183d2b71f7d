"""
Graph Store for tgfgraph

This module holds the in-memory directed graph: nodes keyed by unsigned
64-bit ids carrying arbitrary values, and directed edges between them.

Design Decisions:
    - Uses a NetworkX DiGraph as the backing structure
    - Stores each node's payload under the "value" node attribute
    - Edges carry no attributes (unweighted)
    - Mutations are tolerant: invalid or redundant requests are ignored
      and reported through a boolean return value instead of an exception

Graph Properties:
    - Directed: an edge from A to B does not imply one from B to A
    - Self-loops are allowed
    - First-write-wins: re-adding an existing id keeps the original value
    - Every edge references two stored nodes; deleting a node removes
      all of its incident edges
"""

from typing import Generic, Iterable, Iterator, Optional, TypeVar

import networkx as nx

from tgfgraph.models import Edge, GraphNode, NodeId, Visit, is_node_id, validate_node_id

T = TypeVar("T")

VALUE_ATTR = "value"


class Graph(Generic[T]):
    """
    A directed graph of valued nodes.

    Wraps a NetworkX DiGraph to provide a small, tolerant interface for:
    - Adding, looking up and deleting nodes
    - Adding and deleting directed edges
    - Enumerating nodes and edges in a stable (ascending) order

    Attributes:
        graph: The underlying NetworkX DiGraph

    Usage:
        graph = Graph()
        graph.add_node(1, "January")
        graph.add_node(2, "March")
        graph.add_edge(1, 2)
        node = graph.get_node(1)
        print(node.neighbours)  # (2,)
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._graph: nx.DiGraph = nx.DiGraph()

    @classmethod
    def from_pairs(
        cls,
        nodes: Iterable[tuple[NodeId, T]] = (),
        edges: Iterable[tuple[NodeId, NodeId]] = (),
    ) -> "Graph[T]":
        """
        Build a graph from (id, value) pairs and (source, target) pairs.

        Every node pair is added in order, then every edge pair. Duplicate ids
        keep their first value and edges naming unknown nodes are dropped,
        exactly as if add_node and add_edge had been called one by one.

        Args:
            nodes: Node id and value pairs
            edges: Source and target id pairs

        Returns:
            The populated graph
        """
        graph: Graph[T] = cls()
        for node_id, value in nodes:
            graph.add_node(node_id, value)
        for source, target in edges:
            graph.add_edge(source, target)
        return graph

    @property
    def graph(self) -> nx.DiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    @property
    def node_count(self) -> int:
        """Return the number of nodes in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Return the number of edges in the graph."""
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, node_id: object) -> bool:
        return is_node_id(node_id) and node_id in self._graph

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.items() == other.items() and self.edges() == other.edges()

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"

    def add_node(self, node_id: NodeId, value: T) -> bool:
        """
        Store a value under a node id.

        If the id already exists the call is discarded and the stored value
        is left untouched.

        Args:
            node_id: Unsigned 64-bit node id
            value: Payload to store

        Returns:
            True if the node was inserted, False if the id was already taken

        Raises:
            TypeError, ValueError: If node_id is not a valid node id
        """
        validate_node_id(node_id)
        if node_id in self._graph:
            return False
        self._graph.add_node(node_id, **{VALUE_ATTR: value})
        return True

    def get_node(self, node_id: NodeId) -> Optional[GraphNode[T]]:
        """
        Retrieve a view of a node.

        Args:
            node_id: The id to look up

        Returns:
            A GraphNode with the value and outgoing neighbour ids,
            or None if the id is not stored
        """
        if node_id not in self:
            return None
        return GraphNode(
            id=node_id,
            value=self._graph.nodes[node_id][VALUE_ATTR],
            neighbours=tuple(sorted(self._graph.successors(node_id))),
        )

    def value_of(self, node_id: NodeId) -> Optional[T]:
        """Return the value stored under an id, or None."""
        if node_id not in self:
            return None
        return self._graph.nodes[node_id][VALUE_ATTR]

    def delete_node(self, node_id: NodeId) -> bool:
        """
        Remove a node together with every edge that touches it.

        Args:
            node_id: The id to remove

        Returns:
            True if a node was removed, False if the id was not stored
        """
        if node_id not in self:
            return False
        # DiGraph.remove_node drops in- and out-edges as well
        self._graph.remove_node(node_id)
        return True

    def add_edge(self, source: NodeId, target: NodeId) -> bool:
        """
        Add a directed edge between two existing nodes.

        The edge is ignored when either endpoint is missing; NetworkX would
        otherwise create placeholder nodes without values.

        Args:
            source: Id of the node the edge leaves
            target: Id of the node the edge enters

        Returns:
            True if the edge was inserted, False if it already existed or an
            endpoint is missing

        Raises:
            TypeError, ValueError: If either id is not a valid node id
        """
        validate_node_id(source)
        validate_node_id(target)
        if source not in self._graph or target not in self._graph:
            return False
        if self._graph.has_edge(source, target):
            return False
        self._graph.add_edge(source, target)
        return True

    def has_edge(self, source: NodeId, target: NodeId) -> bool:
        """Check whether the exact directed edge exists."""
        return source in self and target in self and self._graph.has_edge(source, target)

    def delete_edge(self, source: NodeId, target: NodeId) -> bool:
        """
        Remove the directed edge from source to target.

        Returns:
            True if the edge was removed, False if it did not exist
        """
        if not self.has_edge(source, target):
            return False
        self._graph.remove_edge(source, target)
        return True

    def successors(self, node_id: NodeId) -> Iterator[NodeId]:
        """
        Get ids of nodes the given node points to.

        Yields:
            Outgoing neighbour ids in ascending order
        """
        if node_id in self:
            yield from sorted(self._graph.successors(node_id))

    def predecessors(self, node_id: NodeId) -> Iterator[NodeId]:
        """
        Get ids of nodes pointing at the given node.

        Yields:
            Incoming neighbour ids in ascending order
        """
        if node_id in self:
            yield from sorted(self._graph.predecessors(node_id))

    def node_ids(self) -> list[NodeId]:
        """Return all node ids in ascending order."""
        return sorted(self._graph.nodes)

    def items(self) -> list[tuple[NodeId, T]]:
        """Return (id, value) pairs in ascending id order."""
        return [(node_id, self._graph.nodes[node_id][VALUE_ATTR]) for node_id in self.node_ids()]

    def edges(self) -> list[Edge]:
        """Return all edges ordered by (source, target)."""
        return sorted(Edge(source, target) for source, target in self._graph.edges)

    def isolated_nodes(self) -> list[NodeId]:
        """Return ids of nodes with no incoming or outgoing edges."""
        return sorted(nx.isolates(self._graph))

    def bfs(self, source: NodeId) -> Iterator[Visit[T]]:
        """Walk the graph breadth-first from source. See traversal.bfs."""
        from tgfgraph.traversal import bfs

        return bfs(self, source)

    def copy(self) -> "Graph[T]":
        """Return an independent copy sharing the stored values."""
        duplicate: Graph[T] = type(self)()
        duplicate._graph = self._graph.copy()
        return duplicate

    def clear(self) -> None:
        """Remove all nodes and edges from the graph."""
        self._graph.clear()
