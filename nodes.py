"""
Node metadata for steiner graphs.

Nodes are identified by plain string keys (course codes in the bundled
dataset). Everything else known about a node lives in NodeMetadata and is
carried through to results without influencing any algorithm.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NodeMetadata:
    """
    Informational attributes attached to a node.
    """

    name: str
    difficulty: int = 0
    category: Optional[str] = None
