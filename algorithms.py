"""
Algorithm interfaces for the Steiner pipelines.

Keeps graph algorithms separate from pipeline orchestration and reporting.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List

from graph import Edge, Graph

if TYPE_CHECKING:
    from dijkstra_engine import DijkstraResult


class DijkstraEngine(ABC):
    """
    Interface for non-negative shortest-path computation.
    """

    @abstractmethod
    def shortest_paths(self, graph: Graph, source: str) -> "DijkstraResult":
        """
        Compute shortest-path costs plus the predecessor chain from source.

        Returns:
            DijkstraResult with a distance for every graph node (inf when
            unreachable) and a parent for every reached node except source.
        """
        raise NotImplementedError

    @abstractmethod
    def multi_source_shortest_paths(
        self, graph: Graph, sources: Iterable[str]
    ) -> "DijkstraResult":
        """
        Distance from every node to the nearest member of sources.

        Returns:
            DijkstraResult whose predecessor chains end at some source.
        """
        raise NotImplementedError


class SpanningTreeBuilder(ABC):
    """
    Interface for minimum spanning tree (or forest) construction.
    """

    @abstractmethod
    def spanning_tree(self, graph: Graph) -> List[Edge]:
        """
        Return the accepted edges of a minimum spanning forest of graph.
        """
        raise NotImplementedError
