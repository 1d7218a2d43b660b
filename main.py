#!/usr/bin/env python3
"""
CPU Scheduler Simulator - Non-Preemptive Priority and Round Robin

Simulates a single CPU over a discrete millisecond clock for a batch of
processes read from a file, and writes each process's finish and waiting
time in completion order.

Usage:
  python main.py INPUT OUTPUT [NPP] [limit]
  python main.py INPUT OUTPUT RR quantum [limit]

Input file: one process per line, "pid arrival burst priority" (lower
priority value runs first). Output file: one line per completed process,
"pid arrival finish waiting".

Options:
  --env-file PATH Path to env defaults file (default: .env)
  --trace / --no-trace
                 Print per-event trace
  --stats / --no-stats
                 Print summary statistics

Env keys in .env:
  ALGORITHM, QUANTUM, LIMIT, TRACE, STATS
"""

from __future__ import annotations

import argparse
import sys

from cpu_sched.constants import ALGORITHM_NAMES, Algorithm
from cpu_sched.dispatcher import SchedulerConfig, run_simulation
from cpu_sched.errors import SchedulerError
from cpu_sched.round_robin import RoundRobinScheduler
from cpu_sched.scheduler import ProcessScheduler
from simulator.config import DEFAULT_ENV_FILE, RunDefaults, load_run_defaults
from simulator.report import RunSummary, write_report
from simulator.workload import read_workload


def build_config(
    algorithm: str, params: list[int], defaults: RunDefaults
) -> SchedulerConfig:
    """Interpret the trailing positional integers for the chosen algorithm.

    NPP takes ``[limit]``; RR takes ``quantum [limit]``. Missing values fall
    back to the env defaults.
    """
    algorithm = algorithm.upper()
    quantum = defaults.quantum
    limit = defaults.limit

    if algorithm == Algorithm.RR.value:
        if len(params) > 2:
            raise ValueError("RR takes at most two values: quantum [limit]")
        if params:
            quantum = params[0]
        if len(params) == 2:
            limit = params[1]
        if quantum is None:
            raise ValueError(
                "Simulating RR requires a positive integer quantum value, "
                "e.g. python main.py in.txt out.txt RR 4"
            )
    else:
        if len(params) > 1:
            raise ValueError("NPP takes at most one value: [limit]")
        if params:
            limit = params[0]
        quantum = None

    return SchedulerConfig(algorithm=algorithm, quantum=quantum, limit=limit)


def run(
    input_path: str,
    output_path: str,
    config: SchedulerConfig,
    trace: bool = False,
) -> tuple[ProcessScheduler, RunSummary]:
    """Simulate the workload in ``input_path`` and write ``output_path``."""
    scheduler = run_simulation(read_workload(input_path), config, trace=trace)
    completed = scheduler.completed()
    write_report(output_path, completed)

    summary = RunSummary.from_completed(
        completed,
        algorithm=config.algorithm.value,
        quantum=config.quantum,
        idle_ticks=scheduler.idle_ticks,
    )
    return scheduler, summary


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # Parse env-file first so we can use it for argument defaults.
    env_parser = argparse.ArgumentParser(add_help=False)
    env_parser.add_argument("--env-file", default=DEFAULT_ENV_FILE)
    env_args, _ = env_parser.parse_known_args(argv)
    defaults = load_run_defaults(env_args.env_file)

    parser = argparse.ArgumentParser(
        description="CPU Scheduler Simulation (NPP / RR)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--env-file",
        default=env_args.env_file,
        help=f"Path to env defaults file (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument("input", help="Process file: pid arrival burst priority per line")
    parser.add_argument("output", help="Results file to write")
    parser.add_argument(
        "algorithm",
        nargs="?",
        type=str.upper,
        default=defaults.algorithm,
        choices=list(ALGORITHM_NAMES),
        help=f"Scheduling algorithm (default: {defaults.algorithm})",
    )
    parser.add_argument(
        "params",
        nargs="*",
        type=int,
        help="NPP: [limit]; RR: quantum [limit]",
    )
    parser.add_argument(
        "--trace",
        action=argparse.BooleanOptionalAction,
        default=defaults.trace,
        help=f"Print per-event trace (default: {'on' if defaults.trace else 'off'})",
    )
    parser.add_argument(
        "--stats",
        action=argparse.BooleanOptionalAction,
        default=defaults.stats,
        help=f"Print summary statistics (default: {'on' if defaults.stats else 'off'})",
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args.algorithm, args.params, defaults)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        scheduler, summary = run(args.input, args.output, config, trace=args.trace)
    except FileNotFoundError as exc:
        raise SystemExit(f"No such input file: {exc.filename}") from exc
    except (OSError, ValueError, SchedulerError) as exc:
        raise SystemExit(str(exc)) from exc

    if args.trace:
        print("--- Event Trace ---")
        for line in scheduler.trace_log:
            print(line)
        if isinstance(scheduler, RoundRobinScheduler):
            print(f"Preemptions: {scheduler.preemptions}")

    if args.stats:
        summary.print_summary()
    else:
        print(summary.headline())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
