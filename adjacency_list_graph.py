"""
Concrete weighted multigraph implementation for the Steiner solvers.

Implements the Graph interface using an adjacency-list representation plus a
flat edge list, which Kruskal iterates over directly.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from graph import Edge, EdgeKey, Graph
from nodes import NodeMetadata


class AdjacencyListGraph(Graph):
    """
    Multigraph backed by node -> [outgoing Edge] lists.

    Duplicate edges are kept as given; callers that want one record per
    undirected link use undirected_edges() or has_undirected_edge().
    """

    def __init__(self) -> None:
        self._adj: Dict[str, List[Edge]] = {}
        self._meta: Dict[str, Optional[NodeMetadata]] = {}
        self._edges: List[Edge] = []

    # --- Mutation API --------------------------------------------------------

    def add_node(self, node: str, metadata: Optional[NodeMetadata] = None) -> None:
        """
        Ensure node exists. The first non-empty metadata written sticks;
        redefinition is not an error.
        """
        self._adj.setdefault(node, [])
        if self._meta.get(node) is None:
            self._meta[node] = metadata

    def add_edge(self, edge: Edge) -> None:
        """
        Append a directed edge. Auto-adds bare endpoints if missing.
        """
        self.add_node(edge.src)
        self.add_node(edge.dst)
        self._adj[edge.src].append(edge)
        self._edges.append(edge)

    def add_undirected_edge(self, edge: Edge) -> None:
        """Add edge together with its mirrored record."""
        self.add_edge(edge)
        self.add_edge(edge.reversed())

    def remove_node(self, node: str) -> None:
        """
        Drop node, its outgoing list, and every edge that touches it.
        """
        if node not in self._adj:
            return
        for edge in self._adj.pop(node):
            other = self._adj.get(edge.dst)
            if other is not None:
                other[:] = [e for e in other if e.dst != node]
        self._meta.pop(node, None)
        self._edges = [e for e in self._edges if e.src != node and e.dst != node]

    def copy(self) -> "AdjacencyListGraph":
        # Edge records are frozen, so sharing them is safe.
        clone = AdjacencyListGraph()
        clone._adj = {node: list(out) for node, out in self._adj.items()}
        clone._meta = dict(self._meta)
        clone._edges = list(self._edges)
        return clone

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> Sequence[str]:
        return tuple(self._adj.keys())

    def neighbors(self, node: str) -> Sequence[Edge]:
        return tuple(self._adj.get(node, ()))  # defensive copy

    def has_node(self, node: str) -> bool:
        return node in self._adj

    def edges(self) -> Sequence[Edge]:
        return tuple(self._edges)

    def metadata(self, node: str) -> Optional[NodeMetadata]:
        return self._meta.get(node)

    # --- Queries -------------------------------------------------------------

    def degree(self, node: str) -> int:
        """Size of the node's outgoing list."""
        return len(self._adj.get(node, ()))

    def has_undirected_edge(self, edge: Edge) -> bool:
        return any(e.key == edge.key for e in self._adj.get(edge.src, ()))

    def undirected_edges(self) -> Tuple[Edge, ...]:
        """
        One canonical record per undirected link, first occurrence wins.
        """
        seen: Set[EdgeKey] = set()
        result: List[Edge] = []
        for edge in self._edges:
            if edge.key in seen:
                continue
            seen.add(edge.key)
            result.append(edge.canonical())
        return tuple(result)

    def __contains__(self, node: object) -> bool:
        return node in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._adj))
