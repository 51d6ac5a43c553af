"""
Kruskal minimum spanning tree builder.
"""

from typing import Iterable, List

from algorithms import SpanningTreeBuilder
from graph import Edge, Graph
from union_find import UnionFind


class KruskalSpanningTreeBuilder(SpanningTreeBuilder):
    """
    Kruskal's algorithm over the graph's flat edge list.

    Edges are visited in ascending weight; sorted() is stable, so equal
    weights keep insertion order and the output is reproducible. A
    disconnected graph yields a spanning forest.
    """

    def spanning_tree(self, graph: Graph) -> List[Edge]:
        sorted_edges = sorted(graph.edges(), key=lambda e: e.weight)

        uf = UnionFind(graph.nodes())
        accepted: List[Edge] = []

        for edge in sorted_edges:
            if edge.src not in uf or edge.dst not in uf:
                continue
            if uf.find(edge.src) == uf.find(edge.dst):
                continue
            accepted.append(edge)
            uf.union(edge.src, edge.dst)

        return accepted


def tree_weight(edges: Iterable[Edge]) -> float:
    return sum(e.weight for e in edges)
