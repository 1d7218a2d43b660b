"""
Dispatcher: validate the run configuration, import descriptors as process
records, and hand them to the selected scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Iterable

from .constants import Algorithm, ALGORITHM_NAMES, NO_LIMIT
from .errors import AllocationFailure, InvalidConfiguration
from .npp import NonPreemptivePriorityScheduler
from .process import CompletedProcess, ProcessDescriptor, ProcessRecord
from .process_queue import ProcessQueue
from .round_robin import RoundRobinScheduler
from .scheduler import ProcessScheduler


@dataclass(frozen=True, slots=True)
class SchedulerConfig:
    """Algorithm selection plus its parameters.

    ``quantum`` is required for RR and ignored for NPP. ``limit`` caps how
    many input records are imported; 0 imports all of them.
    """

    algorithm: Algorithm
    quantum: int | None = None
    limit: int = NO_LIMIT

    def __post_init__(self) -> None:
        algorithm = self.algorithm
        try:
            if not isinstance(algorithm, Algorithm):
                algorithm = Algorithm(str(algorithm).strip().upper())
        except ValueError as exc:
            raise InvalidConfiguration(
                f"Unknown algorithm {self.algorithm!r}; expected one of {', '.join(ALGORITHM_NAMES)}"
            ) from exc
        object.__setattr__(self, "algorithm", algorithm)

        if algorithm is Algorithm.RR:
            if self.quantum is None:
                raise InvalidConfiguration("RR requires a positive integer quantum")
            if self.quantum <= 0:
                raise InvalidConfiguration(f"RR quantum must be > 0, got {self.quantum}")
        if self.limit < 0:
            raise InvalidConfiguration(f"limit must be >= 0, got {self.limit}")


def import_processes(
    descriptors: Iterable[ProcessDescriptor | tuple[int, int, int, int]],
    limit: int = NO_LIMIT,
) -> ProcessQueue:
    """Build the initial ready set from input descriptors, in input order."""
    if limit > 0:
        descriptors = islice(descriptors, limit)

    ready = ProcessQueue(name="ready queue")
    for item in descriptors:
        descriptor = ProcessDescriptor.coerce(item)
        try:
            record = ProcessRecord(descriptor)
        except MemoryError as exc:
            raise AllocationFailure(
                f"out of memory creating the record for pid {descriptor.pid}"
            ) from exc
        ready.push_back(record)
    return ready


def create_scheduler(
    initial: ProcessQueue, config: SchedulerConfig, trace: bool = False
) -> ProcessScheduler:
    if config.algorithm is Algorithm.RR:
        assert config.quantum is not None
        return RoundRobinScheduler(initial, quantum=config.quantum, trace=trace)
    return NonPreemptivePriorityScheduler(initial, trace=trace)


def run_simulation(
    descriptors: Iterable[ProcessDescriptor | tuple[int, int, int, int]],
    config: SchedulerConfig,
    trace: bool = False,
) -> ProcessScheduler:
    """Run one simulation and return the finished scheduler.

    The scheduler's output_queue holds every process in completion order;
    clock is the tick of the last completion.
    """
    initial = import_processes(descriptors, limit=config.limit)
    scheduler = create_scheduler(initial, config, trace=trace)
    scheduler.run()
    return scheduler


def schedule(
    descriptors: Iterable[ProcessDescriptor | tuple[int, int, int, int]],
    config: SchedulerConfig,
) -> list[CompletedProcess]:
    """Completed processes, in completion order, for the given workload."""
    return run_simulation(descriptors, config).completed()
