"""
Undirected weighted graph over string-labelled vertices.

Used to check whether a transportation plan forms a spanning tree of the
bipartite supply/demand graph, and to repair a forest toward a tree by
adding cheap unused cells.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np

from .exceptions import (
    AlreadyConnected,
    ContainsCycle,
    DuplicateEdge,
    DuplicateVertex,
    InsufficientEdges,
    MissingEdge,
)

logger = logging.getLogger(__name__)


def edge_key(a: str, b: str) -> Tuple[str, str]:
    """Canonical unordered key for the edge between ``a`` and ``b``."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True, eq=False)
class Edge:
    """
    Weighted undirected edge.

    Two edges are equal when they join the same pair of vertices, whatever
    their orientation or weight.
    """
    source: str
    target: str
    weight: Any = field(default=0)

    @property
    def key(self) -> Tuple[str, str]:
        return edge_key(self.source, self.target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Edge({self.source} - {self.target}, w={self.weight})"


def _as_edge(item: Any) -> Edge:
    if isinstance(item, Edge):
        return item
    return Edge(*item)


class Graph:
    """
    Undirected graph with unique vertices and unique (unordered) edges.

    Attributes:
        vertices: Vertex labels in insertion order
        edges: Edges in insertion order
        seed: Seed for the augmentation shuffle
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize an empty graph.

        Args:
            seed: Seed for augmentation tie-breaking (wall-clock seconds if None)
        """
        self._vertices: List[str] = []
        self._edges: Dict[Tuple[str, str], Edge] = {}
        self._graph = nx.Graph()
        self.seed = int(time.time()) if seed is None else int(seed)

    @property
    def vertices(self) -> List[str]:
        return list(self._vertices)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    # ---------- mutation ----------

    def add_node(self, label: str) -> None:
        if label in self._graph:
            raise DuplicateVertex(f"Vertex {label!r} already exists")
        self._vertices.append(label)
        self._graph.add_node(label)

    def _insert(self, edge: Edge) -> None:
        for label in (edge.source, edge.target):
            if label not in self._graph:
                self.add_node(label)
        self._edges[edge.key] = edge
        self._graph.add_edge(edge.source, edge.target, weight=edge.weight)

    def add_edge(self, source: str, target: str, weight: Any = 0) -> Edge:
        """
        Add an undirected edge. Unknown endpoints are added as vertices.

        Raises:
            DuplicateEdge: If the graph already joins source and target
        """
        edge = Edge(source, target, weight)
        if edge.key in self._edges:
            raise DuplicateEdge(f"Edge {source} - {target} already exists")
        self._insert(edge)
        return edge

    def add_edges(self, edges: Iterable[Any]) -> None:
        """Add a batch of edges; nothing is inserted if any of them is a duplicate."""
        batch = [_as_edge(e) for e in edges]
        seen = set(self._edges)
        for edge in batch:
            if edge.key in seen:
                raise DuplicateEdge(f"Edge {edge.source} - {edge.target} already exists")
            seen.add(edge.key)
        for edge in batch:
            self._insert(edge)

    def remove_edge(self, source: str, target: str) -> Edge:
        """Remove and return the edge between two vertices; raises MissingEdge if absent."""
        key = edge_key(source, target)
        if key not in self._edges:
            raise MissingEdge(f"No edge {source} - {target}")
        edge = self._edges.pop(key)
        self._graph.remove_edge(source, target)
        return edge

    def has_edge(self, source: str, target: str) -> bool:
        return edge_key(source, target) in self._edges

    # ---------- structure queries ----------

    def is_connected(self) -> bool:
        """True if every vertex is reachable; an empty graph is not connected."""
        if not self._vertices:
            return False
        return nx.is_connected(self._graph)

    def is_cyclic(self) -> bool:
        if not self._vertices:
            return False
        return not nx.is_forest(self._graph)

    def is_tree(self) -> bool:
        return self.is_connected() and not self.is_cyclic()

    def find_cycle(self) -> Optional[List[Edge]]:
        """Edges of one cycle in the graph, or None if it is a forest."""
        if not self._edges:
            return None
        try:
            cycle = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return None
        return [self._edges[edge_key(u, v)] for u, v in cycle]

    def to_networkx(self) -> nx.Graph:
        return self._graph.copy()

    # ---------- augmentation ----------

    def k_edge_augmentation(self, k: int, candidates: Iterable[Any]) -> List[Edge]:
        """
        Add ``k`` candidate edges to a forest without closing a cycle.

        Candidates are shuffled with the graph's seed and then stably sorted
        by weight, so the cheapest edges are tried first and equal weights
        are tried in a random but reproducible order. An edge that closes a
        cycle is removed again and the next candidate is tried. This is a
        greedy repair, not a minimum spanning tree.

        Args:
            k: Number of edges to add
            candidates: Edges (or ``(source, target, weight)`` tuples) to try

        Returns:
            The edges that were added, in insertion order

        Raises:
            AlreadyConnected: If the graph is already connected
            ContainsCycle: If the graph already contains a cycle
            InsufficientEdges: If fewer than ``k`` edges could be added
        """
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        if self.is_connected():
            raise AlreadyConnected("The graph is already connected and cannot be augmented")
        if self.is_cyclic():
            raise ContainsCycle("The graph contains a cycle and cannot be augmented")

        pool = [_as_edge(c) for c in candidates]
        rng = np.random.default_rng(self.seed)
        ordered = [pool[i] for i in rng.permutation(len(pool))]
        ordered.sort(key=lambda e: e.weight)

        added: List[Edge] = []
        for edge in ordered:
            if len(added) == k:
                break
            if edge.key in self._edges:
                continue

            self._insert(edge)
            if self.is_cyclic():
                self.remove_edge(edge.source, edge.target)
                logger.debug(f"Rejected {edge}: closes a cycle")
                continue

            logger.debug(f"Added {edge}")
            added.append(edge)

        if len(added) < k:
            raise InsufficientEdges(f"Only {len(added)} of {k} edges could be added without creating a cycle")
        return added

    def update_seed(self) -> None:
        self.seed = int(time.time())

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._vertices)}, edges={len(self._edges)}, seed={self.seed})"
