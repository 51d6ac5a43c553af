"""
CSV loader for course-prerequisite datasets.

Each row describes one undirected link between two courses plus the
attributes of both endpoints. Rows flagged is_terminal_* mark the courses a
Steiner tree has to connect.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Set, Tuple
import csv
import math

from adjacency_list_graph import AdjacencyListGraph
from graph import Edge
from nodes import NodeMetadata


COLUMNS: Tuple[str, ...] = (
    "from_node",
    "from_name",
    "to_node",
    "to_name",
    "edge_weight",
    "is_terminal_from",
    "is_terminal_to",
    "from_difficulty",
    "to_difficulty",
    "from_category",
    "to_category",
    "edge_type",
    "overlap_score",
    "is_prerequisite_hard",
    "estimated_hours",
)

# Demo graph:
#   C101 --- C102 --- C201 --- C202
#     |                 |
#   C301 --- C302 ------+
#              |
#            C401
SAMPLE_ROWS: Tuple[str, ...] = (
    "C101,Calc I,C102,Lin Alg,10,true,false,2,3,Math,Math,prerequisite,0.7,true,150",
    "C102,Lin Alg,C201,Data Struct,12,false,false,3,4,Math,CS,prerequisite,0.4,true,180",
    "C201,Data Struct,C202,Algorithms,8,false,true,4,5,CS,CS,prerequisite,0.9,true,200",
    "C101,Calc I,C301,Physics I,15,true,false,2,3,Math,Science,recommended,0.2,false,160",
    "C301,Physics I,C302,Physics II,11,false,false,3,4,Science,Science,prerequisite,0.8,true,160",
    "C201,Data Struct,C302,Physics II,25,false,false,4,4,CS,Science,alternative,0.1,false,170",
    "C302,Physics II,C401,Adv Topics,50,false,true,4,5,Science,Research,recommended,0.3,false,250",
)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def _parse_weight(value: str) -> float:
    weight = float(value)
    if not math.isfinite(weight) or weight < 0:
        raise ValueError(f"edge_weight must be finite and non-negative, got {value!r}")
    return weight


def load_dataset(path: Path) -> Tuple[AdjacencyListGraph, Set[str]]:
    """
    Read a dataset CSV into an undirected graph and its terminal set.

    Both endpoints get their metadata from the row (first row naming a
    course wins), and every row becomes a forward/reverse edge pair.

    Raises:
        ValueError: if columns are missing or a value cannot be parsed,
            including negative or non-finite weights.
    """
    graph = AdjacencyListGraph()
    terminals: Set[str] = set()

    with Path(path).open(newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path}: missing columns {', '.join(missing)}")

        for row in reader:
            line = reader.line_num
            if not row["from_node"] or not row["to_node"]:
                continue
            try:
                from_meta = NodeMetadata(
                    name=row["from_name"],
                    difficulty=int(row["from_difficulty"]),
                    category=row["from_category"],
                )
                to_meta = NodeMetadata(
                    name=row["to_name"],
                    difficulty=int(row["to_difficulty"]),
                    category=row["to_category"],
                )
                edge = Edge(
                    src=row["from_node"],
                    dst=row["to_node"],
                    weight=_parse_weight(row["edge_weight"]),
                    src_meta=from_meta,
                    dst_meta=to_meta,
                    src_terminal=_parse_bool(row["is_terminal_from"]),
                    dst_terminal=_parse_bool(row["is_terminal_to"]),
                    edge_type=row["edge_type"],
                    overlap_score=float(row["overlap_score"]),
                    prerequisite_hard=_parse_bool(row["is_prerequisite_hard"]),
                    estimated_hours=int(row["estimated_hours"]),
                )
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{path}: line {line}: {exc}") from exc

            graph.add_node(edge.src, from_meta)
            graph.add_node(edge.dst, to_meta)
            graph.add_undirected_edge(edge)

            if edge.src_terminal:
                terminals.add(edge.src)
            if edge.dst_terminal:
                terminals.add(edge.dst)

    return graph, terminals


def write_sample_dataset(path: Path, rows: List[str] | None = None) -> bool:
    """
    Write the demo dataset unless path already exists.

    Returns True when a file was written.
    """
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [",".join(COLUMNS), *(rows if rows is not None else SAMPLE_ROWS)]
    path.write_text("\n".join(lines) + "\n")
    return True
