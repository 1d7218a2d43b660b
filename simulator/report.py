"""
Result file output and summary statistics for a finished run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from cpu_sched.process import CompletedProcess


def format_record(process: CompletedProcess) -> str:
    return f"{process.pid} {process.arrival} {process.finish} {process.waiting}"


def write_report(path: str | Path, completed: Iterable[CompletedProcess]) -> int:
    """Write one ``pid arrival finish waiting`` line per process.

    Lines follow completion order. Returns the number of lines written.
    """
    lines = [format_record(p) for p in completed]
    text = "\n".join(lines) + "\n" if lines else ""
    Path(path).write_text(text, encoding="utf-8")
    return len(lines)


@dataclass
class RunSummary:
    """Aggregate timing for a finished run."""

    algorithm: str = ""
    quantum: int | None = None
    process_count: int = 0
    total_waiting: int = 0
    total_turnaround: int = 0
    makespan: int = 0
    idle_ticks: int = 0
    processes: list[CompletedProcess] = field(default_factory=list)

    @classmethod
    def from_completed(
        cls,
        completed: Iterable[CompletedProcess],
        algorithm: str = "",
        quantum: int | None = None,
        idle_ticks: int = 0,
    ) -> RunSummary:
        processes = list(completed)
        return cls(
            algorithm=algorithm,
            quantum=quantum,
            process_count=len(processes),
            total_waiting=sum(p.waiting for p in processes),
            total_turnaround=sum(p.turnaround for p in processes),
            makespan=max((p.finish for p in processes), default=0),
            idle_ticks=idle_ticks,
            processes=processes,
        )

    @property
    def avg_waiting(self) -> int:
        """Integer average waiting time, truncated."""
        if not self.process_count:
            return 0
        return self.total_waiting // self.process_count

    @property
    def avg_turnaround(self) -> int:
        """Integer average turnaround time, truncated."""
        if not self.process_count:
            return 0
        return self.total_turnaround // self.process_count

    def headline(self) -> str:
        return (
            f"The average wait time was {self.avg_waiting}, "
            f"and the average turnaround time {self.avg_turnaround}."
        )

    def print_summary(self) -> None:
        """Print a formatted summary of simulation results."""
        label = self.algorithm or "?"
        if self.quantum is not None:
            label += f" (quantum={self.quantum})"

        print("\n" + "=" * 56)
        print(f"Scheduling Results: {label}")
        print("=" * 56)
        print(
            f"Processes: {self.process_count} | "
            f"Makespan: {self.makespan}ms | "
            f"Idle: {self.idle_ticks}ms"
        )
        print()

        print(f"  {'PID':>6} {'Arrival':>8} {'Finish':>8} {'Waiting':>8} {'Turnaround':>11}")
        print("  " + "-" * 45)
        for p in self.processes:
            print(
                f"  {p.pid:>6} {p.arrival:>8} {p.finish:>8} "
                f"{p.waiting:>8} {p.turnaround:>11}"
            )

        print("=" * 56)
        print(self.headline())
