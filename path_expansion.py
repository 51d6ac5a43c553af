"""
Path reconstruction from predecessor maps and merging into a working graph.

Both pipelines grow their Steiner graph through merge_path: every hop of a
shortest path is looked up in the original graph and inserted as a mirrored
pair, so the working graph stays undirected-consistent for pruning.
"""

from typing import List, Mapping, Optional, Sequence

from adjacency_list_graph import AdjacencyListGraph
from graph import Edge, Graph


def reconstruct_path(
    predecessors: Mapping[str, str],
    target: str,
    source: Optional[str] = None,
) -> List[str]:
    """
    Walk parents back from target and return the path in forward order.

    The walk ends at source, or at the first node without a predecessor
    (the multi-source case, or an unreachable target, which yields
    [target]).
    """
    path = [target]
    seen = {target}
    current = target
    while current != source and current in predecessors:
        current = predecessors[current]
        if current in seen:
            break
        seen.add(current)
        path.append(current)
    path.reverse()
    return path


def find_edge(graph: Graph, u: str, v: str) -> Optional[Edge]:
    """
    Lightest u -> v edge in u's adjacency; the earliest one wins on ties.
    """
    best: Optional[Edge] = None
    for edge in graph.neighbors(u):
        if edge.dst != v:
            continue
        if best is None or edge.weight < best.weight:
            best = edge
    return best


def merge_path(
    path: Sequence[str],
    source_graph: Graph,
    accumulator: AdjacencyListGraph,
) -> int:
    """
    Insert every hop of path into accumulator as a forward/reverse pair.

    Hops already present (same undirected key) are not duplicated. A hop
    with no matching edge in source_graph is skipped and the rest of the
    path still merges.

    Returns:
        Number of undirected edges added.
    """
    added = 0
    for prev, current in zip(path, path[1:]):
        edge = find_edge(source_graph, prev, current)
        if edge is None:
            continue

        accumulator.add_node(edge.src, source_graph.metadata(edge.src))
        accumulator.add_node(edge.dst, source_graph.metadata(edge.dst))
        if accumulator.has_undirected_edge(edge):
            continue
        accumulator.add_undirected_edge(edge)
        added += 1
    return added


def expand_path(
    predecessors: Mapping[str, str],
    target: str,
    source_graph: Graph,
    accumulator: AdjacencyListGraph,
    source: Optional[str] = None,
) -> int:
    path = reconstruct_path(predecessors, target, source)
    return merge_path(path, source_graph, accumulator)
