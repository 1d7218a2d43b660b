"""
Process descriptors, the scheduler's working records, and completed results.

A ProcessDescriptor is the immutable input tuple. A ProcessRecord wraps one
descriptor with the mutable simulation state (leftover, finish, waiting) and
is owned by exactly one queue at a time. CompletedProcess is what the run
hands back to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class ProcessDescriptor:
    """One input process: (pid, arrival, burst, priority)."""

    pid: int
    arrival: int
    burst: int
    priority: int

    def __post_init__(self) -> None:
        if self.arrival < 0:
            raise ValueError(f"pid {self.pid}: arrival must be >= 0, got {self.arrival}")
        if self.burst <= 0:
            raise ValueError(f"pid {self.pid}: burst must be > 0, got {self.burst}")

    @classmethod
    def coerce(cls, item: ProcessDescriptor | Iterable[int]) -> ProcessDescriptor:
        if isinstance(item, cls):
            return item
        fields = tuple(item)
        if len(fields) != 4:
            raise ValueError(
                f"process descriptor needs 4 fields (pid, arrival, burst, priority), got {fields!r}"
            )
        pid, arrival, burst, priority = (int(v) for v in fields)
        return cls(pid=pid, arrival=arrival, burst=burst, priority=priority)


@dataclass(frozen=True, slots=True)
class CompletedProcess:
    """A finished process as reported: (pid, arrival, finish, waiting)."""

    pid: int
    arrival: int
    finish: int
    waiting: int

    @property
    def turnaround(self) -> int:
        return self.finish - self.arrival

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.pid, self.arrival, self.finish, self.waiting)


class ProcessRecord:
    """Scheduling state for one process during a run."""

    __slots__ = (
        "descriptor",  # Input fields; never modified by the scheduler.
        "leftover",  # Remaining burst ticks. Only round robin decrements it.
        "finish",  # Clock value at completion, None while incomplete.
        "waiting",  # finish - arrival - burst, None while incomplete.
    )

    def __init__(self, descriptor: ProcessDescriptor) -> None:
        self.descriptor = descriptor
        self.leftover: int = descriptor.burst
        self.finish: int | None = None
        self.waiting: int | None = None

    @property
    def pid(self) -> int:
        return self.descriptor.pid

    @property
    def arrival(self) -> int:
        return self.descriptor.arrival

    @property
    def burst(self) -> int:
        return self.descriptor.burst

    @property
    def priority(self) -> int:
        return self.descriptor.priority

    @property
    def is_complete(self) -> bool:
        return self.finish is not None

    def run_tick(self) -> None:
        """Credit one tick of CPU time against the remaining burst."""
        if self.leftover <= 0:
            raise RuntimeError(f"pid {self.pid} has no burst left to run")
        self.leftover -= 1

    def complete(self, clock: int) -> None:
        if self.finish is not None:
            raise RuntimeError(f"pid {self.pid} already completed at {self.finish}")
        self.finish = clock
        self.waiting = clock - self.arrival - self.burst

    def to_completed(self) -> CompletedProcess:
        if self.finish is None or self.waiting is None:
            raise RuntimeError(f"pid {self.pid} has not completed")
        return CompletedProcess(
            pid=self.pid,
            arrival=self.arrival,
            finish=self.finish,
            waiting=self.waiting,
        )

    def __repr__(self) -> str:
        return (
            f"Process(pid={self.pid}, arrival={self.arrival}, burst={self.burst}, "
            f"pri={self.priority}, left={self.leftover})"
        )
