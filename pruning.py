"""
Leaf pruning for Steiner graphs.
"""

from typing import AbstractSet, List

from adjacency_list_graph import AdjacencyListGraph


def prune_leaves(graph: AdjacencyListGraph, terminals: AbstractSet[str]) -> AdjacencyListGraph:
    """
    Return a copy of graph with dangling non-terminal branches removed.

    Each pass collects every non-terminal node whose outgoing list has
    exactly one edge and removes them together with their incident edges on
    both sides. Removing a leaf can expose a new one, so passes repeat until
    one finds nothing. Terminals stay regardless of degree. The input graph
    is left untouched.
    """
    pruned = graph.copy()

    while True:
        leaves: List[str] = [
            node
            for node in pruned.nodes()
            if node not in terminals and pruned.degree(node) == 1
        ]
        if not leaves:
            break
        for node in leaves:
            # A leaf whose only neighbour was also a leaf in this pass is
            # already isolated here; remove_node handles both cases.
            pruned.remove_node(node)

    return pruned
