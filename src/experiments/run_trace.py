from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from memlab import (
    AllocationOutcome,
    FreeOutcome,
    InvalidCapacity,
    MalformedOutcome,
    Simulation,
)
from memlab.outcomes import RequestOutcome
from memlab_datasets.trace_loader import Trace, load_trace
from experiments.instrumentation import SimulationProfiler


def describe_outcome(outcome: RequestOutcome) -> str:
    if isinstance(outcome, AllocationOutcome):
        if outcome.success:
            return f"ALLOCATE {outcome.name} {outcome.size} -> success (used start={outcome.start})"
        return f"ALLOCATE {outcome.name} {outcome.size} -> FAIL (no single contiguous block big enough)"
    if isinstance(outcome, FreeOutcome):
        if outcome.success:
            return f"DEALLOCATE {outcome.name} -> success (freed start={outcome.start} size={outcome.size})"
        return f"DEALLOCATE {outcome.name} -> fail (process not found)"
    if isinstance(outcome, MalformedOutcome):
        return f"Unrecognized line {outcome.error.line_number}: {outcome.error.line}"
    raise TypeError(f"Unsupported outcome {outcome!r}")


def print_memory_map(simulation: Simulation, out: TextIO) -> None:
    print("Current memory map:", file=out)
    for line in simulation.render():
        print(f"  {line}", file=out)
    print(file=out)


def replay(
    trace: Trace,
    *,
    out: TextIO = sys.stdout,
    quiet: bool = False,
    profiler: Optional[SimulationProfiler] = None,
) -> Simulation:
    simulation = Simulation(trace.capacity, profiler=profiler)
    print(f"Initialized memory simulator with total={trace.capacity}\n", file=out)
    for request in trace.requests:
        outcome = simulation.apply(request)
        if quiet and not isinstance(outcome, MalformedOutcome):
            continue
        print(describe_outcome(outcome), file=out)
        if not quiet:
            print_memory_map(simulation, out)
    print("\nAll requests processed.", file=out)
    for line in simulation.report().format_lines():
        print(line, file=out)
    return simulation


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay an allocation trace through the first-fit simulator.")
    parser.add_argument("trace", type=str, help="Trace file: capacity line followed by requests.")
    parser.add_argument("--quiet", action="store_true", help="Only print malformed lines and the final stats.")
    parser.add_argument("--profile-dir", type=str, default=None, help="Write recorded events as JSONL/CSV here.")
    parser.add_argument("--run-id", type=str, default=None, help="Name for the profile files (defaults to trace stem).")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        trace = load_trace(args.trace)
    except (FileNotFoundError, InvalidCapacity) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    profiler = None
    if args.profile_dir:
        profiler = SimulationProfiler(run_id=args.run_id or Path(args.trace).stem, output_dir=args.profile_dir)
    replay(trace, quiet=args.quiet, profiler=profiler)
    if profiler:
        profiler.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
