"""
Weighted graph abstraction for the Steiner solvers.

Nodes are string identifiers.
Edges are directed records u -> v with float weight; an undirected link is
stored as two mirrored records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from nodes import NodeMetadata


EdgeKey = Tuple[str, str, float]


@dataclass(frozen=True)
class Edge:
    """
    Directed edge record plus the dataset columns it was loaded with.

    Endpoint-side fields (src_meta/dst_meta, src_terminal/dst_terminal) swap
    places when the edge is mirrored; the remaining fields describe the link
    itself and are copied as-is.
    """

    src: str
    dst: str
    weight: float
    src_meta: Optional[NodeMetadata] = None
    dst_meta: Optional[NodeMetadata] = None
    src_terminal: bool = False
    dst_terminal: bool = False
    edge_type: Optional[str] = None
    overlap_score: float = 0.0
    prerequisite_hard: bool = False
    estimated_hours: int = 0

    @property
    def key(self) -> EdgeKey:
        """
        Undirected identity: (u, v, w) and (v, u, w) share a key.

        Weight is part of the key, so parallel links with different weights
        stay distinct.
        """
        if self.src <= self.dst:
            return (self.src, self.dst, self.weight)
        return (self.dst, self.src, self.weight)

    def reversed(self) -> "Edge":
        return Edge(
            src=self.dst,
            dst=self.src,
            weight=self.weight,
            src_meta=self.dst_meta,
            dst_meta=self.src_meta,
            src_terminal=self.dst_terminal,
            dst_terminal=self.src_terminal,
            edge_type=self.edge_type,
            overlap_score=self.overlap_score,
            prerequisite_hard=self.prerequisite_hard,
            estimated_hours=self.estimated_hours,
        )

    def canonical(self) -> "Edge":
        """Same edge oriented so that src <= dst."""
        return self if self.src <= self.dst else self.reversed()

    def __str__(self) -> str:
        src_name = self.src_meta.name if self.src_meta else None
        dst_name = self.dst_meta.name if self.dst_meta else None
        return f"{self.src} ({src_name}) -> {self.dst} ({dst_name}) [w:{self.weight:.2f}]"


class Graph(ABC):
    """Weighted multigraph over string node ids."""

    @abstractmethod
    def nodes(self) -> Iterable[str]:
        """Return all nodes in the graph."""
        raise NotImplementedError

    @abstractmethod
    def neighbors(self, node: str) -> Sequence[Edge]:
        """
        Outgoing edges of node in insertion order.

        Unknown nodes have no outgoing edges; this never raises.
        """
        raise NotImplementedError

    @abstractmethod
    def has_node(self, node: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def edges(self) -> Sequence[Edge]:
        """Every directed edge record, in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def metadata(self, node: str) -> Optional[NodeMetadata]:
        raise NotImplementedError
