"""Offline single-CPU scheduling simulator: non-preemptive priority and round robin."""

from cpu_sched.admission import admit
from cpu_sched.constants import Algorithm
from cpu_sched.dispatcher import SchedulerConfig, run_simulation, schedule
from cpu_sched.errors import (
    AllocationFailure,
    EmptyQueueError,
    InvalidConfiguration,
    SchedulerError,
)
from cpu_sched.npp import NonPreemptivePriorityScheduler
from cpu_sched.process import CompletedProcess, ProcessDescriptor, ProcessRecord
from cpu_sched.process_queue import ProcessQueue
from cpu_sched.round_robin import RoundRobinScheduler
