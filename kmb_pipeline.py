"""
Kou–Markowsky–Berman Steiner tree approximation.

Pipeline:
    1. Dijkstra from every terminal over the input graph.
    2. Metric closure: one edge per terminal pair, weighted by the shortest
       path distance; unreachable pairs are left out.
    3. Minimum spanning tree (forest, if the closure is disconnected).
    4. Each MST edge expanded back into its original-graph path.
    5. Non-terminal leaves pruned.
    6. Cost summed over the remaining undirected edges.

The input graph is only read; all working graphs are private to the call.
"""

from concurrent.futures import ProcessPoolExecutor
from typing import AbstractSet, Dict, List, Optional, Sequence

from adjacency_list_graph import AdjacencyListGraph
from algorithms import DijkstraEngine, SpanningTreeBuilder
from dijkstra_engine import DijkstraResult, SimpleDijkstraEngine
from graph import Edge, Graph
from path_expansion import expand_path
from pruning import prune_leaves
from spanning_tree import KruskalSpanningTreeBuilder
from steiner import SteinerResult, build_result, empty_result


def terminal_shortest_paths(
    graph: Graph,
    terminal_order: Sequence[str],
    engine: DijkstraEngine,
    max_workers: Optional[int] = None,
) -> Dict[str, DijkstraResult]:
    """
    One Dijkstra run per terminal.

    The runs are independent, so with max_workers > 1 they are spread over a
    process pool; if a pool cannot be started the runs happen in-process.
    Results are keyed by terminal and identical either way.
    """
    if max_workers is not None and max_workers > 1 and len(terminal_order) > 1:
        try:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = {t: executor.submit(engine.shortest_paths, graph, t) for t in terminal_order}
                return {t: futures[t].result() for t in terminal_order}
        except (PermissionError, NotImplementedError, OSError):
            pass

    return {t: engine.shortest_paths(graph, t) for t in terminal_order}


def build_metric_closure(
    graph: Graph,
    terminal_order: Sequence[str],
    paths: Dict[str, DijkstraResult],
) -> AdjacencyListGraph:
    """
    Complete graph over the terminals weighted by shortest-path distance.

    Every terminal is a node of the closure; a pair whose distance is
    infinite gets no edge. Each pair is stored once (u -> v for u before v in
    terminal_order), which is all Kruskal needs.
    """
    closure = AdjacencyListGraph()
    for t in terminal_order:
        closure.add_node(t, graph.metadata(t))

    for i, u in enumerate(terminal_order):
        for v in terminal_order[i + 1:]:
            if not paths[u].reachable(v):
                continue
            closure.add_edge(
                Edge(
                    src=u,
                    dst=v,
                    weight=paths[u].distance(v),
                    src_meta=graph.metadata(u),
                    dst_meta=graph.metadata(v),
                    src_terminal=True,
                    dst_terminal=True,
                )
            )
    return closure


def run_kmb(
    graph: Graph,
    terminals: AbstractSet[str],
    engine: Optional[DijkstraEngine] = None,
    tree_builder: Optional[SpanningTreeBuilder] = None,
    max_workers: Optional[int] = None,
) -> SteinerResult:
    """
    Approximate a Steiner tree over terminals with the KMB heuristic.

    Terminals are processed in sorted order so equal-weight ties resolve
    the same way on every run. Every terminal must be a node of graph.
    """
    if not terminals:
        return empty_result()

    engine = engine or SimpleDijkstraEngine()
    tree_builder = tree_builder or KruskalSpanningTreeBuilder()
    terminal_order: List[str] = sorted(terminals)

    paths = terminal_shortest_paths(graph, terminal_order, engine, max_workers)
    closure = build_metric_closure(graph, terminal_order, paths)
    mst_edges = tree_builder.spanning_tree(closure)

    steiner_graph = AdjacencyListGraph()
    for t in closure.nodes():
        steiner_graph.add_node(t, graph.metadata(t))
    for mst_edge in mst_edges:
        expand_path(
            paths[mst_edge.src].predecessors,
            mst_edge.dst,
            graph,
            steiner_graph,
            source=mst_edge.src,
        )

    return build_result(prune_leaves(steiner_graph, terminals))
