"""
Round Robin scheduling with a fixed time quantum.

A process runs for at most ``quantum`` ticks per slice. Arrivals landing on
the last tick of a slice are admitted only after a preempted process has
gone back to the ready queue, so new processes queue up right behind the
process whose quantum just expired.
"""

from __future__ import annotations

from .process_queue import ProcessQueue
from .scheduler import ProcessScheduler


class RoundRobinScheduler(ProcessScheduler):
    """RR over a single CPU."""

    __slots__ = ("quantum", "preemptions")

    def __init__(self, initial: ProcessQueue, quantum: int, trace: bool = False) -> None:
        if quantum <= 0:
            raise ValueError(f"quantum must be > 0, got {quantum}")
        super().__init__(initial, trace=trace)
        self.quantum = quantum
        self.preemptions: int = 0

    def run(self) -> None:
        current = self._take_initial()
        while current is not None:
            for slice_index in range(self.quantum):
                self.clock += 1
                current.run_tick()
                if slice_index < self.quantum - 1:
                    self._admit()
                if current.leftover == 0:
                    break

            if current.leftover == 0:
                self._complete(current)
                self._admit()
                current = self._next_running()
                continue

            # Slice exhausted: requeue before admitting this tick's arrivals.
            self.preemptions += 1
            self._trace(f"preempt pid={current.pid} left={current.leftover}")
            self.ready_queue.push_back(current)
            self.running = None
            self._admit()
            current = self._next_running()
