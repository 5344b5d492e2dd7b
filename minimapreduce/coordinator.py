"""Hands out map and reduce tasks to workers and tracks their progress."""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable

from .helper import (
    ALL_TASK_IN_PROGRESS,
    NO_TASK,
    AskJobReply,
    Status,
    TaskStatus,
    TaskType,
)

#: Seconds after which a pending task is handed out again.
TASK_TIMEOUT = 10


class Coordinator:
    """Thread-safe scheduler of map tasks followed by reduce tasks."""

    def __init__(
        self,
        files: Iterable[str],
        n_reduce: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.n_reduce = n_reduce
        self._clock = clock
        self._lock = threading.RLock()
        self._map_jobs: dict[int, TaskStatus] = {}
        for number, name in enumerate(files):
            print(name)
            self._map_jobs[number] = TaskStatus(name)
        self._reduce_jobs = {i: TaskStatus(str(i)) for i in range(n_reduce)}
        self._phase = TaskType.MAP

    def ask_job(self) -> AskJobReply:
        """Hand out the next unstarted task of the current phase."""
        with self._lock:
            if self._phase is TaskType.MAP:
                file_name, number = self.get_unstarted_map_job()
            else:
                file_name, number = self.get_unstarted_reduce_job()
            return AskJobReply(self._phase, self.n_reduce, number, file_name)

    def ack_job(self, task_number: int, task_type: TaskType) -> None:
        """Mark a task finished; switch to the reduce phase once maps are done."""
        with self._lock:
            jobs = self._map_jobs if task_type is TaskType.MAP else self._reduce_jobs
            if task_number not in jobs:
                raise KeyError(f"unknown {task_type.value} task {task_number}")
            jobs[task_number].status = Status.FINISHED
            if task_type is TaskType.MAP and all(
                job.status is Status.FINISHED for job in self._map_jobs.values()
            ):
                self._phase = TaskType.REDUCE

    def _start(self, jobs: dict[int, TaskStatus]) -> tuple[str, int] | None:
        for number, job in jobs.items():
            if job.status is Status.UNSTARTED:
                job.status = Status.PENDING
                job.started_time = self._clock()
                return job.file_name, number
        return None

    def get_unstarted_map_job(self) -> tuple[str, int]:
        """Claim an unstarted map task, or return ``("", NO_TASK)``."""
        with self._lock:
            return self._start(self._map_jobs) or ("", NO_TASK)

    def get_unstarted_reduce_job(self) -> tuple[str, int]:
        """Claim an unstarted reduce task.

        Returns ``("", ALL_TASK_IN_PROGRESS)`` if none is unstarted but some
        are still pending, and ``("", NO_TASK)`` once all are finished.
        """
        with self._lock:
            claimed = self._start(self._reduce_jobs)
            if claimed is not None:
                return claimed
            if any(job.status is Status.PENDING for job in self._reduce_jobs.values()):
                return "", ALL_TASK_IN_PROGRESS
            return "", NO_TASK

    def _requeue_stale(self, jobs: Iterable[TaskStatus], now: float) -> None:
        for job in jobs:
            if job.status is Status.PENDING and now - job.started_time >= TASK_TIMEOUT:
                job.status = Status.UNSTARTED

    def done(self) -> bool:
        """Report whether every task has finished, requeuing timed-out tasks."""
        with self._lock:
            now = self._clock()
            maps_done = all(job.status is Status.FINISHED for job in self._map_jobs.values())
            self._requeue_stale(self._map_jobs.values(), now)
            if not maps_done:
                return False
            reduces_done = all(
                job.status is Status.FINISHED for job in self._reduce_jobs.values()
            )
            self._requeue_stale(self._reduce_jobs.values(), now)
            return reduces_done