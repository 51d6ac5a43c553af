"""
Heap-based DijkstraEngine implementation.

Uses Python's heapq to compute shortest paths over any Graph implementation
that satisfies the Graph interface, from one source or from a set of sources.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple
import heapq
import math

from graph import Graph
from algorithms import DijkstraEngine


@dataclass
class DijkstraResult:
    """
    Distance and predecessor maps from one shortest-path run.

    distances holds every node of the searched graph (math.inf when
    unreachable). predecessors omits the sources and unreached nodes.
    """

    distances: Dict[str, float] = field(default_factory=dict)
    predecessors: Dict[str, str] = field(default_factory=dict)

    def distance(self, node: str) -> float:
        return self.distances.get(node, math.inf)

    def reachable(self, node: str) -> bool:
        return self.distance(node) < math.inf


class SimpleDijkstraEngine(DijkstraEngine):
    """
    Dijkstra using a binary heap with lazy deletion.

    A relaxed node is pushed again instead of decreasing its key; stale heap
    entries are skipped when popped. Edge weights must be non-negative.

    Complexity:
        O((V + E) log V) per invocation.
    """

    def __init__(self) -> None:
        # Instrumentation counters per invocation.
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0

    def shortest_paths(self, graph: Graph, source: str) -> DijkstraResult:
        return self.multi_source_shortest_paths(graph, (source,))

    def multi_source_shortest_paths(
        self, graph: Graph, sources: Iterable[str]
    ) -> DijkstraResult:
        """
        Every source starts at distance 0 and is seeded into the heap at once,
        so each node ends up with its distance to the nearest source and a
        predecessor chain leading back to that source.
        """
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0

        dist: Dict[str, float] = {node: math.inf for node in graph.nodes()}
        prev: Dict[str, str] = {}
        pq: List[Tuple[float, str]] = []  # priority queue of (distance, node)

        for source in sources:
            dist[source] = 0.0
            pq.append((0.0, source))
            self.last_heap_pushes += 1
        heapq.heapify(pq)

        while pq:
            d_u, u = heapq.heappop(pq)
            self.last_heap_pops += 1

            # Skip outdated entries
            if d_u != dist.get(u, math.inf):
                continue

            for edge in graph.neighbors(u):
                self.last_edges_examined += 1
                v = edge.dst
                alt = d_u + edge.weight
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(pq, (alt, v))
                    self.last_heap_pushes += 1
                    self.last_relaxed += 1

        return DijkstraResult(distances=dist, predecessors=prev)
