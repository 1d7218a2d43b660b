"""
Non-Preemptive Priority scheduling.

The running process always finishes its whole burst. Arrivals are admitted
and the ready queue is re-sorted by priority on every tick, so the order
only decides who runs next. Equal priorities run in the order they became
ready.
"""

from __future__ import annotations

from .scheduler import ProcessScheduler


class NonPreemptivePriorityScheduler(ProcessScheduler):
    """NPP over a single CPU; lower priority value runs first."""

    __slots__ = ()

    def _after_admission(self) -> None:
        self.ready_queue.reorder_by_priority()

    def run(self) -> None:
        current = self._take_initial()
        while current is not None:
            for _ in range(current.burst):
                self.clock += 1
                self._admit()

            self._complete(current)
            # Catch anything arriving exactly on the completion tick.
            self._admit()
            current = self._next_running()
