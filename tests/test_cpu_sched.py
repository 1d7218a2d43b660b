from __future__ import annotations

import unittest
from unittest import mock

from cpu_sched.admission import admit
from cpu_sched.constants import Algorithm
from cpu_sched.dispatcher import SchedulerConfig, import_processes, run_simulation, schedule
from cpu_sched.errors import (
    AllocationFailure,
    EmptyQueueError,
    InvalidConfiguration,
    SchedulerError,
)
from cpu_sched.process import ProcessDescriptor, ProcessRecord
from cpu_sched.process_queue import ProcessQueue
from simulator.workload import SCENARIOS


def _record(pid: int, arrival: int = 0, burst: int = 1, priority: int = 0) -> ProcessRecord:
    return ProcessRecord(ProcessDescriptor(pid, arrival, burst, priority))


def _results(completed) -> list[tuple[int, int, int, int]]:
    return [p.as_tuple() for p in completed]


NPP = SchedulerConfig(Algorithm.NPP)


def _rr(quantum: int) -> SchedulerConfig:
    return SchedulerConfig(Algorithm.RR, quantum=quantum)


class ProcessModelTests(unittest.TestCase):
    def test_descriptor_rejects_bad_ranges(self) -> None:
        with self.assertRaises(ValueError):
            ProcessDescriptor(pid=1, arrival=-1, burst=3, priority=0)
        with self.assertRaises(ValueError):
            ProcessDescriptor(pid=1, arrival=0, burst=0, priority=0)

    def test_coerce_accepts_tuples_and_rejects_short_records(self) -> None:
        d = ProcessDescriptor.coerce((7, 2, 4, 1))
        self.assertEqual(d, ProcessDescriptor(pid=7, arrival=2, burst=4, priority=1))
        self.assertIs(ProcessDescriptor.coerce(d), d)
        with self.assertRaises(ValueError):
            ProcessDescriptor.coerce((1, 0, 3))

    def test_record_starts_with_full_leftover_and_completes_once(self) -> None:
        record = _record(1, arrival=2, burst=3)
        self.assertEqual(record.leftover, 3)
        self.assertIsNone(record.finish)
        self.assertIsNone(record.waiting)
        self.assertFalse(record.is_complete)

        record.complete(9)
        self.assertEqual(record.finish, 9)
        self.assertEqual(record.waiting, 4)
        self.assertEqual(record.to_completed().turnaround, 7)
        with self.assertRaises(RuntimeError):
            record.complete(10)

    def test_run_tick_never_goes_below_zero(self) -> None:
        record = _record(1, burst=1)
        record.run_tick()
        self.assertEqual(record.leftover, 0)
        with self.assertRaises(RuntimeError):
            record.run_tick()


class ProcessQueueTests(unittest.TestCase):
    def test_fifo_push_pop(self) -> None:
        queue = ProcessQueue()
        for pid in (3, 1, 2):
            queue.push_back(_record(pid))
        self.assertEqual(len(queue), 3)
        self.assertEqual([queue.pop_front().pid for _ in range(3)], [3, 1, 2])
        self.assertTrue(queue.empty())

    def test_pop_from_empty_queue_raises(self) -> None:
        queue = ProcessQueue(name="ready queue")
        with self.assertRaises(EmptyQueueError):
            queue.pop_front()
        with self.assertRaises(IndexError):
            queue.pop_front()

    def test_reorder_is_stable_for_equal_priorities(self) -> None:
        queue = ProcessQueue(
            [
                _record(1, priority=3),
                _record(2, priority=1),
                _record(3, priority=3),
                _record(4, priority=0),
                _record(5, priority=1),
            ]
        )
        queue.reorder_by_priority()
        self.assertEqual(queue.pids(), [4, 2, 5, 1, 3])

    def test_reorder_single_and_empty(self) -> None:
        queue = ProcessQueue()
        queue.reorder_by_priority()
        self.assertEqual(queue.pids(), [])
        queue.push_back(_record(1, priority=9))
        queue.reorder_by_priority()
        self.assertEqual(queue.pids(), [1])


class AdmissionTests(unittest.TestCase):
    def test_admits_matching_arrivals_and_preserves_pool_order(self) -> None:
        ready = ProcessQueue([_record(9)])
        pool = ProcessQueue(
            [_record(1, arrival=3), _record(2, arrival=1), _record(3, arrival=3), _record(4, arrival=5)]
        )

        admitted = admit(ready, pool, 3)

        self.assertEqual(admitted, 2)
        self.assertEqual(ready.pids(), [9, 1, 3])
        self.assertEqual(pool.pids(), [2, 4])

    def test_no_match_leaves_queues_unchanged(self) -> None:
        ready = ProcessQueue()
        pool = ProcessQueue([_record(1, arrival=4), _record(2, arrival=6)])
        self.assertEqual(admit(ready, pool, 5), 0)
        self.assertEqual(ready.pids(), [])
        self.assertEqual(pool.pids(), [1, 2])


class NonPreemptivePriorityTests(unittest.TestCase):
    def test_head_runs_first_then_priority_order(self) -> None:
        completed = schedule([(1, 0, 5, 2), (2, 0, 3, 1), (3, 0, 8, 3)], NPP)
        self.assertEqual(_results(completed), [(1, 0, 5, 0), (2, 0, 8, 5), (3, 0, 16, 8)])

    def test_equal_priorities_run_in_ready_order(self) -> None:
        completed = schedule([(1, 0, 3, 0), (2, 1, 2, 5), (3, 2, 2, 5), (4, 2, 2, 1)], NPP)
        self.assertEqual(
            _results(completed),
            [(1, 0, 3, 0), (4, 2, 5, 1), (2, 1, 7, 4), (3, 2, 9, 5)],
        )

    def test_staggered_arrivals_with_idle_gap(self) -> None:
        scheduler = run_simulation(SCENARIOS["staggered"](), NPP)
        self.assertEqual(
            _results(scheduler.completed()),
            [
                (1, 0, 6, 0),
                (4, 4, 9, 2),
                (2, 1, 13, 8),
                (3, 2, 15, 11),
                (5, 4, 16, 11),
                (6, 25, 27, 0),
            ],
        )
        self.assertEqual(scheduler.idle_ticks, 9)
        self.assertEqual(scheduler.clock, 27)

    def test_runs_are_contiguous_and_never_overlap(self) -> None:
        workload = SCENARIOS["staggered"]()
        bursts = {d.pid: d.burst for d in workload}
        previous_finish = 0
        for p in schedule(workload, NPP):
            start = p.finish - bursts[p.pid]
            self.assertGreaterEqual(start, previous_finish)
            previous_finish = p.finish

    def test_leftover_is_untouched(self) -> None:
        scheduler = run_simulation([(1, 0, 4, 0), (2, 0, 2, 0)], NPP)
        self.assertEqual([r.leftover for r in scheduler.output_queue], [4, 2])

    def test_head_arriving_late_waits_for_its_arrival(self) -> None:
        scheduler = run_simulation([(1, 3, 2, 0), (2, 0, 1, 5)], NPP)
        self.assertEqual(_results(scheduler.completed()), [(1, 3, 5, 0), (2, 0, 6, 5)])
        self.assertEqual(scheduler.idle_ticks, 3)


class RoundRobinTests(unittest.TestCase):
    def test_preempted_process_resumes_after_others(self) -> None:
        completed = schedule(SCENARIOS["round_robin"](), _rr(4))
        self.assertEqual(_results(completed), [(2, 0, 7, 4), (1, 0, 8, 3)])

    def test_idle_gap_advances_clock_until_next_arrival(self) -> None:
        scheduler = run_simulation(SCENARIOS["idle_gap"](), _rr(4))
        self.assertEqual(_results(scheduler.completed()), [(1, 0, 2, 0), (2, 5, 7, 0)])
        self.assertEqual(scheduler.idle_ticks, 3)

    def test_arrival_on_expiry_tick_queues_behind_preempted_process(self) -> None:
        completed = schedule([(1, 0, 4, 0), (2, 2, 2, 0)], _rr(2))
        self.assertEqual(_results(completed), [(1, 0, 4, 0), (2, 2, 6, 2)])

    def test_arrival_before_expiry_runs_first(self) -> None:
        completed = schedule([(1, 0, 4, 0), (2, 1, 2, 0)], _rr(2))
        self.assertEqual(_results(completed), [(2, 1, 4, 1), (1, 0, 6, 2)])

    def test_staggered_arrivals(self) -> None:
        scheduler = run_simulation(SCENARIOS["staggered"](), _rr(4))
        self.assertEqual(
            _results(scheduler.completed()),
            [
                (2, 1, 8, 3),
                (3, 2, 10, 6),
                (1, 0, 12, 6),
                (4, 4, 15, 8),
                (5, 4, 16, 11),
                (6, 25, 27, 0),
            ],
        )
        self.assertEqual(scheduler.preemptions, 1)
        self.assertTrue(all(r.leftover == 0 for r in scheduler.output_queue))

    def test_quantum_of_one(self) -> None:
        completed = schedule([(1, 0, 2, 0), (2, 0, 2, 0)], _rr(1))
        self.assertEqual(_results(completed), [(1, 0, 3, 1), (2, 0, 4, 2)])

    def test_priority_is_ignored(self) -> None:
        completed = schedule([(1, 0, 1, 9), (2, 0, 1, 0)], _rr(3))
        self.assertEqual([p.pid for p in completed], [1, 2])


class DispatcherTests(unittest.TestCase):
    def test_rr_requires_positive_quantum(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            SchedulerConfig(Algorithm.RR)
        with self.assertRaises(InvalidConfiguration):
            SchedulerConfig(Algorithm.RR, quantum=0)
        with self.assertRaises(ValueError):
            SchedulerConfig("RR", quantum=-2)

    def test_algorithm_names_are_parsed(self) -> None:
        self.assertIs(SchedulerConfig("rr", quantum=2).algorithm, Algorithm.RR)
        self.assertIs(SchedulerConfig("NPP").algorithm, Algorithm.NPP)
        with self.assertRaises(InvalidConfiguration):
            SchedulerConfig("FCFS")

    def test_negative_limit_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            SchedulerConfig(Algorithm.NPP, limit=-1)

    def test_limit_caps_imported_records(self) -> None:
        config = SchedulerConfig(Algorithm.NPP, limit=2)
        completed = schedule(SCENARIOS["staggered"](), config)
        self.assertEqual(_results(completed), [(1, 0, 6, 0), (2, 1, 10, 5)])

    def test_empty_workload(self) -> None:
        scheduler = run_simulation([], _rr(3))
        self.assertEqual(scheduler.completed(), [])
        self.assertEqual(scheduler.clock, 0)

    def test_allocation_failure_aborts_import(self) -> None:
        with mock.patch("cpu_sched.dispatcher.ProcessRecord", side_effect=MemoryError):
            with self.assertRaises(AllocationFailure) as ctx:
                import_processes([(1, 0, 1, 0)])
        self.assertIsInstance(ctx.exception, SchedulerError)

    def test_trace_log_records_events(self) -> None:
        scheduler = run_simulation(SCENARIOS["idle_gap"](), _rr(4), trace=True)
        joined = "\n".join(scheduler.trace_log)
        self.assertIn("dispatch pid=1", joined)
        self.assertIn("CPU idle from 2 to 5", joined)
        self.assertIn("complete pid=2 finish=7 wait=0", joined)

    def test_trace_is_off_by_default(self) -> None:
        scheduler = run_simulation(SCENARIOS["idle_gap"](), NPP)
        self.assertEqual(scheduler.trace_log, [])

    def test_runs_are_deterministic(self) -> None:
        for config in (NPP, _rr(2), _rr(5)):
            first = _results(schedule(SCENARIOS["staggered"](), config))
            second = _results(schedule(SCENARIOS["staggered"](), config))
            self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
