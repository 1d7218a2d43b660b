#!/usr/bin/env python3
"""
Randomized stress runner for the scheduler simulator.

Runs the built-in scenarios plus many seeded random workloads through both
algorithms and checks the run invariants on every result:
1) finish == arrival + burst + waiting for every process,
2) the output holds each input pid exactly once,
3) no process has a negative waiting time,
4) RR processes finish with no leftover burst,
5) repeating a run gives an identical result.
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from dataclasses import dataclass

from cpu_sched.constants import Algorithm
from cpu_sched.dispatcher import SchedulerConfig, run_simulation
from cpu_sched.process import ProcessDescriptor
from simulator.workload import SCENARIOS, generate_workload


@dataclass(frozen=True)
class StressCase:
    index: int
    label: str
    workload: tuple[ProcessDescriptor, ...]
    config: SchedulerConfig


def check_run(workload: list[ProcessDescriptor], config: SchedulerConfig) -> list[str]:
    """Return invariant violations for one run (empty when it is clean)."""
    problems: list[str] = []
    scheduler = run_simulation(workload, config)
    completed = scheduler.completed()
    by_pid = {d.pid: d for d in workload}

    pids = [p.pid for p in completed]
    if sorted(pids) != sorted(by_pid):
        problems.append(f"output pids {pids} do not match input pids {sorted(by_pid)}")

    for p in completed:
        d = by_pid.get(p.pid)
        if d is None:
            continue
        if p.finish != d.arrival + d.burst + p.waiting:
            problems.append(f"pid {p.pid}: finish {p.finish} != arrival + burst + waiting")
        if p.waiting < 0:
            problems.append(f"pid {p.pid}: negative waiting time {p.waiting}")

    if config.algorithm is Algorithm.RR:
        for record in scheduler.output_queue:
            if record.leftover != 0:
                problems.append(f"pid {record.pid}: completed with leftover {record.leftover}")

    if [p.as_tuple() for p in run_simulation(workload, config).completed()] != [
        p.as_tuple() for p in completed
    ]:
        problems.append("repeated run produced a different result")

    return problems


def _build_cases(total_cases: int, master_seed: int, max_processes: int, max_quantum: int) -> list[StressCase]:
    rng = random.Random(master_seed)
    cases: list[StressCase] = []

    for name, factory in sorted(SCENARIOS.items()):
        cases.append(StressCase(0, f"{name}/NPP", tuple(factory()), SchedulerConfig(Algorithm.NPP)))
        cases.append(
            StressCase(0, f"{name}/RR4", tuple(factory()), SchedulerConfig(Algorithm.RR, quantum=4))
        )

    while len(cases) < total_cases:
        count = rng.randint(1, max_processes)
        workload = tuple(generate_workload(count, rng))
        if rng.random() < 0.5:
            config = SchedulerConfig(Algorithm.NPP)
        else:
            config = SchedulerConfig(Algorithm.RR, quantum=rng.randint(1, max_quantum))
        label = f"random n={count} {config.algorithm.value}"
        if config.quantum is not None:
            label += f" q={config.quantum}"
        cases.append(StressCase(0, label, workload, config))

    return [
        StressCase(idx, case.label, case.workload, case.config)
        for idx, case in enumerate(cases, start=1)
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Run randomized scheduler stress checks.")
    parser.add_argument(
        "--cases",
        type=int,
        default=200,
        help="Total number of runs, built-in scenarios included (default: 200)",
    )
    parser.add_argument(
        "--master-seed",
        type=int,
        default=1,
        help="Master RNG seed for reproducible case generation (default: 1)",
    )
    parser.add_argument(
        "--max-processes",
        type=int,
        default=12,
        help="Maximum processes per random workload (default: 12)",
    )
    parser.add_argument(
        "--max-quantum",
        type=int,
        default=6,
        help="Maximum RR quantum for random runs (default: 6)",
    )
    args = parser.parse_args()

    if args.cases <= 0:
        raise ValueError("--cases must be > 0")
    if args.max_processes <= 0 or args.max_quantum <= 0:
        raise ValueError("--max-processes and --max-quantum must be > 0")

    cases = _build_cases(args.cases, args.master_seed, args.max_processes, args.max_quantum)
    print(
        "Stress config: "
        f"cases={len(cases)}, master_seed={args.master_seed}, "
        f"max_processes={args.max_processes}, max_quantum={args.max_quantum}"
    )

    start = time.monotonic()
    for case in cases:
        problems = check_run(list(case.workload), case.config)
        if problems:
            print(f"[{case.index}/{len(cases)}] {case.label} FAILED", file=sys.stderr)
            print(f"  workload: {[(d.pid, d.arrival, d.burst, d.priority) for d in case.workload]}", file=sys.stderr)
            for problem in problems:
                print(f"  - {problem}", file=sys.stderr)
            return 1

    elapsed = time.monotonic() - start
    print(f"Stress checks passed: {len(cases)} runs in {elapsed:.2f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
