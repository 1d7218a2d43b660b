"""
Workload sources for simulation runs.

Workloads are sequences of ProcessDescriptor. They come from a text file
(one ``pid arrival burst priority`` record per line), from the built-in
scenarios below, or from a seeded random generator used by stress runs.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Callable, Iterator

from cpu_sched.process import ProcessDescriptor

FIELDS_PER_RECORD = 4


def parse_record(line: str, source: str = "<input>", lineno: int = 0) -> ProcessDescriptor:
    """Parse one ``pid arrival burst priority`` line."""
    parts = line.split()
    if len(parts) != FIELDS_PER_RECORD:
        raise ValueError(
            f"{source}:{lineno}: expected {FIELDS_PER_RECORD} fields "
            f"(pid arrival burst priority), got {len(parts)}: {line.strip()!r}"
        )
    try:
        pid, arrival, burst, priority = (int(p) for p in parts)
    except ValueError as exc:
        raise ValueError(f"{source}:{lineno}: non-integer field in {line.strip()!r}") from exc
    try:
        return ProcessDescriptor(pid=pid, arrival=arrival, burst=burst, priority=priority)
    except ValueError as exc:
        raise ValueError(f"{source}:{lineno}: {exc}") from exc


def read_workload(path: str | Path) -> Iterator[ProcessDescriptor]:
    """Yield descriptors from a workload file in file order.

    Blank lines and ``#`` comments are skipped. Reading is lazy so a record
    limit applied by the caller stops reading early.
    """
    source = str(path)
    with open(path, encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            text = line.split("#", 1)[0].strip()
            if not text:
                continue
            yield parse_record(text, source=source, lineno=lineno)


def generate_workload(
    count: int,
    rng: random.Random,
    max_arrival: int = 20,
    max_burst: int = 10,
    max_priority: int = 5,
) -> list[ProcessDescriptor]:
    """Random workload with pids 1..count in input order.

    The first process always arrives at 0, like a batch whose first job is
    already waiting when the simulation starts.
    """
    if count <= 0:
        raise ValueError("count must be > 0")

    workload = []
    for pid in range(1, count + 1):
        arrival = 0 if pid == 1 else rng.randint(0, max_arrival)
        workload.append(
            ProcessDescriptor(
                pid=pid,
                arrival=arrival,
                burst=rng.randint(1, max_burst),
                priority=rng.randint(0, max_priority),
            )
        )
    return workload


# ---------------------------------------------------------------------------
# Built-in scenario workloads
# ---------------------------------------------------------------------------

def priority_workload() -> list[ProcessDescriptor]:
    """Three processes ready at 0; the head runs first whatever its priority."""
    return [
        ProcessDescriptor(pid=1, arrival=0, burst=5, priority=2),
        ProcessDescriptor(pid=2, arrival=0, burst=3, priority=1),
        ProcessDescriptor(pid=3, arrival=0, burst=8, priority=3),
    ]


def round_robin_workload() -> list[ProcessDescriptor]:
    """Two processes ready at 0; with quantum 4 the first is preempted once."""
    return [
        ProcessDescriptor(pid=1, arrival=0, burst=5, priority=0),
        ProcessDescriptor(pid=2, arrival=0, burst=3, priority=0),
    ]


def idle_gap_workload() -> list[ProcessDescriptor]:
    """The CPU idles between the first completion and the second arrival."""
    return [
        ProcessDescriptor(pid=1, arrival=0, burst=2, priority=0),
        ProcessDescriptor(pid=2, arrival=5, burst=2, priority=0),
    ]


def staggered_workload() -> list[ProcessDescriptor]:
    """Arrivals spread out, with priority ties and a coincident arrival."""
    return [
        ProcessDescriptor(pid=1, arrival=0, burst=6, priority=3),
        ProcessDescriptor(pid=2, arrival=1, burst=4, priority=1),
        ProcessDescriptor(pid=3, arrival=2, burst=2, priority=1),
        ProcessDescriptor(pid=4, arrival=4, burst=3, priority=0),
        ProcessDescriptor(pid=5, arrival=4, burst=1, priority=2),
        ProcessDescriptor(pid=6, arrival=25, burst=2, priority=4),
    ]


SCENARIOS: dict[str, Callable[[], list[ProcessDescriptor]]] = {
    "priority": priority_workload,
    "round_robin": round_robin_workload,
    "idle_gap": idle_gap_workload,
    "staggered": staggered_workload,
}
