"""
CLI to compare the KMB and TM Steiner heuristics across datasets.

Reads experiments/steiner.yml, loads each dataset, runs every configured
algorithm on it, prints a per-algorithm report plus a KMB vs TM comparison,
and writes one CSV row per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple
import csv
from concurrent.futures import ProcessPoolExecutor, as_completed
import time

from dataset_loader import load_dataset, write_sample_dataset
from kmb_pipeline import run_kmb
from steiner import SteinerResult, timed_run
from tm_pipeline import run_tm


class Algorithm(Enum):
    KMB = "KMB"
    TM = "TM"


ALGORITHM_TITLES: Dict[Algorithm, str] = {
    Algorithm.KMB: "Kou-Markowsky-Berman (KMB) Algorithm",
    Algorithm.TM: "Takahashi-Matsuyama (TM) Algorithm",
}

SOLVERS: Dict[Algorithm, Callable[..., SteinerResult]] = {
    Algorithm.KMB: run_kmb,
    Algorithm.TM: run_tm,
}

RESULT_FIELDS: Tuple[str, ...] = (
    "dataset",
    "algorithm",
    "total_cost",
    "nodes",
    "edges",
    "terminals",
    "connected",
    "elapsed_sec",
)

DEFAULT_CONFIG = """\
algorithms:
  - KMB
  - TM
max_workers: 1
datasets:
  - name: sample
    path: data/synthetic_dataset.csv
"""


@dataclass(frozen=True)
class DatasetConfig:
    name: str
    path: Path


@dataclass(frozen=True)
class Config:
    algorithms: Sequence[Algorithm]
    datasets: Sequence[DatasetConfig]
    # Worker count for the per-terminal Dijkstra fan-out inside KMB.
    max_workers: int = 1


def load_config(path: Path) -> Config:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text()) or {}
    algorithms: List[Algorithm] = []
    for name in data.get("algorithms", [a.value for a in Algorithm]):
        try:
            algorithms.append(Algorithm(str(name).upper()))
        except ValueError:
            raise ValueError(f"Unknown algorithm '{name}' in {path}") from None

    datasets = []
    for entry in data.get("datasets", []):
        dataset_path = Path(entry["path"])
        if not dataset_path.is_absolute():
            dataset_path = path.parent / dataset_path
        datasets.append(DatasetConfig(name=str(entry["name"]), path=dataset_path))

    return Config(
        algorithms=algorithms,
        datasets=datasets,
        max_workers=int(data.get("max_workers", 1)),
    )


def run_comparisons(
    config_path: Path,
    results_csv: Path | None = None,
    use_processes: bool = True,
    max_workers: int | None = None,
) -> List[Dict[str, object]]:
    """
    Run every (dataset, algorithm) pair from the config.

    Tasks go to a process pool when possible; if the platform refuses one
    they run sequentially with identical results.
    """
    cfg = load_config(config_path)
    start = time.time()

    tasks = [(ds, algo) for ds in cfg.datasets for algo in cfg.algorithms]
    print(f"[run] queued {len(tasks)} tasks across {len(cfg.datasets)} datasets")

    results: List[Dict[str, object]] = []
    if tasks and use_processes:
        try:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                future_to_task = {
                    executor.submit(_run_task, ds.name, str(ds.path), algo.value, cfg.max_workers): (ds.name, algo.value)
                    for ds, algo in tasks
                }
                for future in as_completed(future_to_task):
                    ds_name, algo_val = future_to_task[future]
                    try:
                        res = future.result()
                        results.append(res)
                        _report_completed(res)
                    except Exception as exc:
                        print(f"[run] failed dataset={ds_name} algorithm={algo_val}: {exc}")
        except (PermissionError, NotImplementedError, OSError) as exc:
            print(f"[run] process pool unavailable ({exc}), falling back to sequential execution")
            use_processes = False
    elif tasks:
        print("[run] using sequential execution")

    if tasks and not use_processes:
        for ds, algo in tasks:
            res = _run_task(ds.name, str(ds.path), algo.value, cfg.max_workers)
            results.append(res)
            _report_completed(res)

    # as_completed hands results back in finish order.
    order = {(ds.name, algo.value): i for i, (ds, algo) in enumerate(tasks)}
    results.sort(key=lambda r: order[(str(r["dataset"]), str(r["algorithm"]))])

    if results_csv:
        write_results_csv(results, results_csv)

    elapsed = time.time() - start
    print(f"[run] completed {len(results)} runs in {elapsed:.2f}s")
    return results


def _report_completed(res: Mapping[str, object]) -> None:
    print(
        f"[run] completed dataset={res['dataset']} algorithm={res['algorithm']} "
        f"cost={float(res['total_cost']):.2f} duration={float(res['elapsed_sec']):.4f}s"
    )


def _run_task(dataset_name: str, dataset_path: str, algorithm_value: str, max_workers: int) -> Dict[str, object]:
    graph, terminals = load_dataset(Path(dataset_path))
    algorithm = Algorithm(algorithm_value)
    kwargs: Dict[str, object] = {}
    if algorithm == Algorithm.KMB and max_workers > 1:
        kwargs["max_workers"] = max_workers
    result = timed_run(SOLVERS[algorithm], graph, terminals, **kwargs)
    return {
        "dataset": dataset_name,
        "algorithm": algorithm.value,
        "total_cost": result.total_cost,
        "nodes": result.node_count,
        "edges": result.edge_count,
        "terminals": len(terminals),
        "connected": result.connects(terminals),
        "elapsed_sec": result.elapsed_sec or 0.0,
        "result": result,
    }


def compare_costs(kmb_cost: float, tm_cost: float) -> Tuple[float, float]:
    """
    Cost difference TM - KMB and that difference as a percentage of KMB.

    The percentage is 0 when the KMB cost is 0.
    """
    difference = tm_cost - kmb_cost
    percent = 0.0 if kmb_cost == 0 else difference / kmb_cost * 100
    return difference, percent


def format_result(title: str, result: SteinerResult) -> str:
    elapsed_ms = (result.elapsed_sec or 0.0) * 1000
    lines = [
        f"========== {title} ==========",
        f"Total Cost: {result.total_cost:.2f}",
        f"Runtime: {elapsed_ms:.3f} ms",
        f"Node Count: {result.node_count}",
        f"Edge Count: {result.edge_count}",
        f"Nodes: {sorted(result.nodes)}",
        "Edges:",
    ]
    lines.extend(f"  {edge}" for edge in sorted(result.edges, key=lambda e: e.key))
    return "\n".join(lines)


def format_comparison(kmb: SteinerResult, tm: SteinerResult) -> str:
    difference, percent = compare_costs(kmb.total_cost, tm.total_cost)
    kmb_ms = (kmb.elapsed_sec or 0.0) * 1000
    tm_ms = (tm.elapsed_sec or 0.0) * 1000
    return "\n".join(
        [
            "==================== ALGORITHM COMPARISON ====================",
            "| Metric             | KMB Algorithm    | TM Algorithm     |",
            "|--------------------|------------------|------------------|",
            f"| Total Cost         | {kmb.total_cost:<16.2f} | {tm.total_cost:<16.2f} |",
            f"| Node Count         | {kmb.node_count:<16d} | {tm.node_count:<16d} |",
            f"| Edge Count         | {kmb.edge_count:<16d} | {tm.edge_count:<16d} |",
            f"| Runtime (ms)       | {kmb_ms:<16.3f} | {tm_ms:<16.3f} |",
            "|--------------------|------------------|------------------|",
            "",
            f"Cost Difference (TM - KMB): {difference:.2f}",
            f"Percentage Difference: {percent:.2f}%",
            "============================================================",
        ]
    )


def write_results_csv(results: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write per-run results to CSV for downstream analysis.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(RESULT_FIELDS))
        writer.writeheader()
        for res in results:
            writer.writerow({name: res.get(name) for name in RESULT_FIELDS})


def print_report(results: Iterable[Mapping[str, object]]) -> None:
    by_dataset: Dict[str, Dict[str, SteinerResult]] = {}
    for res in results:
        by_dataset.setdefault(str(res["dataset"]), {})[str(res["algorithm"])] = res["result"]  # type: ignore[assignment]

    for dataset, runs in by_dataset.items():
        print(f"Running Steiner Tree Algorithms on: {dataset}")
        print("====================================================\n")
        for algorithm in Algorithm:
            if algorithm.value in runs:
                print(format_result(ALGORITHM_TITLES[algorithm], runs[algorithm.value]))
                print()
        if Algorithm.KMB.value in runs and Algorithm.TM.value in runs:
            print(format_comparison(runs[Algorithm.KMB.value], runs[Algorithm.TM.value]))
            print()


def main() -> None:
    base = Path(__file__).parent / "experiments"
    config_path = base / "steiner.yml"
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(DEFAULT_CONFIG)
    if write_sample_dataset(base / "data" / "synthetic_dataset.csv"):
        print(f"[run] created sample dataset at {base / 'data' / 'synthetic_dataset.csv'}")

    results_csv = base / "results" / "steiner_runs.csv"
    results = run_comparisons(config_path, results_csv=results_csv)
    print_report(results)
    print(f"Wrote runs to {results_csv}")


if __name__ == "__main__":
    main()
