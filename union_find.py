"""
Disjoint-set forest used by the Kruskal builder.
"""

from typing import Dict, Hashable, Iterable


class UnionFind:
    """
    Parent-pointer forest with path compression.

    union() links roots directly without rank or size bookkeeping; find()
    compresses every path it walks, which keeps trees shallow for the
    terminal-set sizes this is used with.
    """

    def __init__(self, elements: Iterable[Hashable] = ()) -> None:
        self._parent: Dict[Hashable, Hashable] = {}
        self.make_set(elements)

    def make_set(self, elements: Iterable[Hashable]) -> None:
        """Register each element as its own singleton set."""
        for x in elements:
            self._parent[x] = x

    def find(self, x: Hashable) -> Hashable:
        """
        Return the representative of x's set.

        Raises:
            KeyError: if x was never registered with make_set.
        """
        if x not in self._parent:
            raise KeyError(x)

        root = x
        while self._parent[root] != root:
            root = self._parent[root]

        # Second walk: point every node on the chain straight at the root.
        node = x
        while node != root:
            nxt = self._parent[node]
            self._parent[node] = root
            node = nxt
        return root

    def union(self, x: Hashable, y: Hashable) -> None:
        """
        Merge the sets holding x and y. Both must already be registered.
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x != root_y:
            self._parent[root_x] = root_y

    def connected(self, x: Hashable, y: Hashable) -> bool:
        return self.find(x) == self.find(y)

    def __contains__(self, x: object) -> bool:
        return x in self._parent

    def __len__(self) -> int:
        return len(self._parent)
