"""
Steiner tree result type shared by the KMB and TM pipelines.
"""

from dataclasses import dataclass, replace
from typing import AbstractSet, Any, Callable, FrozenSet, Optional
import time

from adjacency_list_graph import AdjacencyListGraph
from graph import Edge, Graph


@dataclass(frozen=True)
class SteinerResult:
    """
    Output of one pipeline run.

    edges holds one canonical record (src <= dst) per undirected link and
    total_cost is the sum of their weights. When some terminals could not be
    reached the result covers only the reachable part; check connects() if
    full coverage matters. elapsed_sec is filled in by timed_run, not by the
    algorithms themselves.
    """

    total_cost: float
    nodes: FrozenSet[str]
    edges: FrozenSet[Edge]
    elapsed_sec: Optional[float] = None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def connects(self, terminals: AbstractSet[str]) -> bool:
        """True when every terminal made it into the tree."""
        return set(terminals) <= self.nodes


def empty_result() -> SteinerResult:
    return SteinerResult(total_cost=0.0, nodes=frozenset(), edges=frozenset())


def build_result(graph: AdjacencyListGraph) -> SteinerResult:
    edges = graph.undirected_edges()
    return SteinerResult(
        total_cost=sum(e.weight for e in edges),
        nodes=frozenset(graph.nodes()),
        edges=frozenset(edges),
    )


def timed_run(
    solver: Callable[..., SteinerResult],
    graph: Graph,
    terminals: AbstractSet[str],
    **kwargs: Any,
) -> SteinerResult:
    """
    Call solver(graph, terminals, **kwargs) and record its wall-clock time.
    """
    start = time.perf_counter()
    result = solver(graph, terminals, **kwargs)
    return replace(result, elapsed_sec=time.perf_counter() - start)
