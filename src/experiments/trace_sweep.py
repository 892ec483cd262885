from __future__ import annotations

import argparse
import csv
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from memlab import FreeOutcome, InvalidCapacity, MalformedOutcome, Simulation
from memlab.request import Request
from memlab_datasets.trace_loader import load_trace
from experiments.environment import SyntheticWorkload, WorkloadConfig


@dataclass
class SweepRun:
    label: str
    capacity: int
    requests: List[Request]


@dataclass
class SweepConfig:
    trace_paths: List[str] = field(default_factory=list)
    synthetic_runs: int = 0
    seed_offset: int = 0
    workload: WorkloadConfig = field(default_factory=WorkloadConfig)
    output: str = "results/sweep.csv"
    progress_bar: bool = False


def build_runs(config: SweepConfig, skipped: Optional[List[str]] = None) -> List[SweepRun]:
    """Load every trace and synthetic workload; unreadable traces are reported and left out."""
    runs = []
    for path in config.trace_paths:
        try:
            trace = load_trace(path)
        except (FileNotFoundError, InvalidCapacity) as exc:
            print(f"Skipping {path}: {exc}", file=sys.stderr)
            if skipped is not None:
                skipped.append(path)
            continue
        runs.append(SweepRun(label=Path(path).stem, capacity=trace.capacity, requests=trace.requests))
    for index in range(config.synthetic_runs):
        seed = config.seed_offset + index
        workload = SyntheticWorkload(config.workload, seed=seed)
        runs.append(
            SweepRun(
                label=f"synthetic_seed{seed}",
                capacity=config.workload.capacity,
                requests=workload.generate(),
            )
        )
    return runs


def run_single(run: SweepRun) -> Dict[str, object]:
    simulation = Simulation(run.capacity)
    outcomes = simulation.run(run.requests)
    summary: Dict[str, object] = {"label": run.label, "requests": len(run.requests)}
    summary.update(simulation.report().as_dict())
    summary["free_failures"] = sum(
        1 for outcome in outcomes if isinstance(outcome, FreeOutcome) and not outcome.success
    )
    summary["malformed"] = sum(1 for outcome in outcomes if isinstance(outcome, MalformedOutcome))
    return summary


def run_sweep(config: SweepConfig, skipped: Optional[List[str]] = None) -> List[Dict[str, object]]:
    runs = build_runs(config, skipped)
    iterator: Iterable[SweepRun] = runs
    if config.progress_bar:
        iterator = tqdm(runs, desc="traces")
    return [run_single(run) for run in iterator]


def write_summary(path: str, records: Iterable[Dict[str, object]]) -> None:
    records = list(records)
    if not records:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(records[0].keys()))
        writer.writeheader()
        writer.writerows(records)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay many traces and summarise fragmentation per run.")
    parser.add_argument("traces", nargs="*", help="Trace files to replay.")
    parser.add_argument("--synthetic", type=int, default=0, help="Number of seeded synthetic workloads to add.")
    parser.add_argument("--seed-offset", type=int, default=0, help="Offset applied to generated seeds.")
    parser.add_argument("--capacity", type=int, default=1024, help="Capacity for synthetic workloads.")
    parser.add_argument("--steps", type=int, default=200, help="Requests per synthetic workload.")
    parser.add_argument("--output", type=str, default="results/sweep.csv", help="Path to CSV summary output.")
    parser.add_argument("--progress-bar", action="store_true", help="Display tqdm progress over runs.")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SweepConfig:
    return SweepConfig(
        trace_paths=list(args.traces),
        synthetic_runs=args.synthetic,
        seed_offset=args.seed_offset,
        workload=WorkloadConfig(capacity=args.capacity, steps=args.steps),
        output=args.output,
        progress_bar=args.progress_bar,
    )


def main(argv: Optional[List[str]] = None) -> int:
    config = config_from_args(parse_args(argv))
    skipped: List[str] = []
    summaries = run_sweep(config, skipped)
    write_summary(config.output, summaries)

    for summary in summaries:
        print(
            f"[{summary['label']}] capacity={summary['capacity']} "
            f"ok={summary['alloc_success']} fail={summary['alloc_failure']} "
            f"largest_free={summary['largest_free_block']} "
            f"external_frag={summary['external_fragmentation']:.2f}%"
        )
    return 2 if skipped else 0


if __name__ == "__main__":
    raise SystemExit(main())
