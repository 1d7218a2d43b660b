"""
Exceptions raised by the scheduling core.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduling-core failures."""


class InvalidConfiguration(SchedulerError, ValueError):
    """The algorithm selection or its parameters cannot start a run."""


class EmptyQueueError(SchedulerError, IndexError):
    """pop_front() on an empty ProcessQueue.

    The scheduler loops only pop after checking the queue length, so seeing
    this outside of ProcessQueue tests means the scheduling logic is broken.
    """


class AllocationFailure(SchedulerError, MemoryError):
    """Memory ran out while creating process records. The run is aborted."""
