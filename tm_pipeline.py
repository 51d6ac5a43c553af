"""
Takahashi–Matsuyama greedy Steiner tree approximation.

Starting from one terminal, repeatedly attach the unconnected terminal that
is closest to the tree built so far, via its shortest path. Distances are
recomputed from the whole current tree on every iteration with a
multi-source Dijkstra.
"""

from typing import AbstractSet, List, Optional
import math

from adjacency_list_graph import AdjacencyListGraph
from algorithms import DijkstraEngine
from dijkstra_engine import SimpleDijkstraEngine
from graph import Graph
from path_expansion import expand_path
from pruning import prune_leaves
from steiner import SteinerResult, build_result, empty_result


def run_tm(
    graph: Graph,
    terminals: AbstractSet[str],
    engine: Optional[DijkstraEngine] = None,
) -> SteinerResult:
    """
    Approximate a Steiner tree over terminals with the TM heuristic.

    The seed is the smallest terminal id, and equal distances go to the
    smaller id. Terminals that cannot be reached from the tree end the loop
    early and are absent from the result.
    """
    if not terminals:
        return empty_result()

    engine = engine or SimpleDijkstraEngine()
    order: List[str] = sorted(terminals)

    tree = AdjacencyListGraph()
    tree.add_node(order[0], graph.metadata(order[0]))
    unconnected: List[str] = order[1:]

    while unconnected:
        from_tree = engine.multi_source_shortest_paths(graph, tree.nodes())

        closest: Optional[str] = None
        min_distance = math.inf
        for t in unconnected:
            d = from_tree.distance(t)
            if d < min_distance:
                min_distance = d
                closest = t

        if closest is None:
            # Remaining terminals sit in other components.
            break

        expand_path(from_tree.predecessors, closest, graph, tree)
        unconnected.remove(closest)

    return build_result(prune_leaves(tree, terminals))
