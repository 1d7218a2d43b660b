"""
Arrival admission: move processes whose arrival tick has come to the ready queue.
"""

from __future__ import annotations

from .process_queue import ProcessQueue


def admit(ready_queue: ProcessQueue, pending_pool: ProcessQueue, clock: int) -> int:
    """Admit every pending process with ``arrival == clock``.

    Each pending record is visited once: matches go to the tail of the ready
    queue in pool order, the rest are rotated back onto the pool so its
    relative order is unchanged. Returns how many were admitted.
    """
    admitted = 0
    for _ in range(len(pending_pool)):
        record = pending_pool.pop_front()
        if record.arrival == clock:
            ready_queue.push_back(record)
            admitted += 1
        else:
            pending_pool.push_back(record)
    return admitted
