"""
FIFO queue of process records with an explicit priority reorder.

The scheduler keeps three of these per run (ready, pending, output). Each
record lives in exactly one of them at a time.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from .errors import EmptyQueueError
from .process import ProcessRecord


class ProcessQueue:
    """Ordered sequence of ProcessRecord: push at the tail, pop from the head."""

    __slots__ = ("name", "_items")

    def __init__(self, records: Iterable[ProcessRecord] = (), name: str = "queue") -> None:
        self.name = name
        self._items: deque[ProcessRecord] = deque(records)

    def empty(self) -> bool:
        return not self._items

    def push_back(self, record: ProcessRecord) -> None:
        self._items.append(record)

    def pop_front(self) -> ProcessRecord:
        if not self._items:
            raise EmptyQueueError(f"pop_front() on empty {self.name}")
        return self._items.popleft()

    def reorder_by_priority(self) -> None:
        """Stable sort by ascending priority value.

        Equal priorities keep their current relative order, which is the
        order they became ready (FCFS among ties).
        """
        if len(self._items) < 2:
            return
        self._items = deque(sorted(self._items, key=lambda r: r.priority))

    def pids(self) -> list[int]:
        return [r.pid for r in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ProcessQueue({self.name}, pids={self.pids()})"
