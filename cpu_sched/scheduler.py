"""
Clock and queue state shared by the NPP and RR schedulers.

A run owns three queues: the ready queue (arrived, eligible to run), the
pending pool (not yet arrived) and the output queue (completed, in
completion order). Subclasses implement run() on top of the helpers here.
"""

from __future__ import annotations

from .admission import admit
from .process import CompletedProcess, ProcessRecord
from .process_queue import ProcessQueue


class ProcessScheduler:
    """Single-CPU run over a fixed batch of process records."""

    __slots__ = (
        "clock",
        "ready_queue",
        "pending_pool",
        "output_queue",
        "running",
        "idle_ticks",
        "trace_enabled",
        "trace_log",
    )

    def __init__(self, initial: ProcessQueue, trace: bool = False) -> None:
        self.clock: int = 0
        self.ready_queue = ProcessQueue(name="ready queue")
        self.pending_pool = ProcessQueue(name="pending pool")
        self.output_queue = ProcessQueue(name="output queue")
        self.running: ProcessRecord | None = None
        self.idle_ticks: int = 0
        self.trace_enabled = trace
        self.trace_log: list[str] = []

        # Take ownership of the imported ready set, keeping import order.
        while not initial.empty():
            self.ready_queue.push_back(initial.pop_front())

    def _trace(self, msg: str) -> None:
        if self.trace_enabled:
            self.trace_log.append(f"[{self.clock:>6}ms] {msg}")

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _after_admission(self) -> None:
        """Called after each admission pass. NPP reorders here."""

    def run(self) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _admit(self) -> int:
        admitted = admit(self.ready_queue, self.pending_pool, self.clock)
        if admitted:
            self._trace(f"admit {admitted} -> ready {self.ready_queue.pids()}")
        if not self.ready_queue.empty():
            self._after_admission()
        return admitted

    def _take_initial(self) -> ProcessRecord | None:
        """Pick the first process to run.

        The head of the initial ready set runs first regardless of priority;
        everyone else waits in the pending pool until their arrival tick.
        """
        if self.ready_queue.empty():
            return None
        first = self.ready_queue.pop_front()
        while not self.ready_queue.empty():
            self.pending_pool.push_back(self.ready_queue.pop_front())

        self._admit()
        if self.clock < first.arrival:
            start = self.clock
            while self.clock < first.arrival:
                self._idle_tick()
            self._trace(f"CPU idle from {start} until pid={first.pid} arrives")
        self._dispatch(first)
        return first

    def _idle_tick(self) -> None:
        self.clock += 1
        self.idle_ticks += 1
        self._admit()

    def _next_running(self) -> ProcessRecord | None:
        """Pop the next ready process, idling the CPU until one arrives."""
        if self.ready_queue.empty() and not self.pending_pool.empty():
            upcoming = min(record.arrival for record in self.pending_pool)
            if upcoming <= self.clock:
                # Admission runs on every tick, so this can only be a logic error.
                raise RuntimeError(
                    f"pending process arriving at {upcoming} was never admitted "
                    f"(clock={self.clock})"
                )
            start = self.clock
            while self.ready_queue.empty():
                self._idle_tick()
            self._trace(f"CPU idle from {start} to {self.clock}")
        if self.ready_queue.empty():
            return None
        record = self.ready_queue.pop_front()
        self._dispatch(record)
        return record

    def _dispatch(self, record: ProcessRecord) -> None:
        self.running = record
        self._trace(f"dispatch pid={record.pid} left={record.leftover}")

    def _complete(self, record: ProcessRecord) -> None:
        record.complete(self.clock)
        self.output_queue.push_back(record)
        self.running = None
        self._trace(f"complete pid={record.pid} finish={record.finish} wait={record.waiting}")

    def completed(self) -> list[CompletedProcess]:
        """Finished processes in completion order."""
        return [record.to_completed() for record in self.output_queue]
