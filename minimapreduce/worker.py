"""Worker loop that pulls tasks from a coordinator and runs them."""

from __future__ import annotations

import json
import os
import sys
import time
from itertools import groupby
from pathlib import Path

from .coordinator import Coordinator
from .helper import (
    ALL_TASK_IN_PROGRESS,
    KeyValue,
    TaskType,
    partition_sort,
    read_file,
    write_files,
)
from .wordcount import MapReduceApp

#: Number of map outputs (``mr-<n>-<bucket>``) a reduce task looks for.
MAP_OUTPUTS_READ = 8


class Worker:
    """Asks the coordinator for tasks until there is nothing left to do."""

    def __init__(
        self,
        coordinator: Coordinator,
        app: MapReduceApp,
        directory: str | os.PathLike[str] = "file",
        poll_interval: float = 1.0,
    ) -> None:
        self.coordinator = coordinator
        self.app = app
        self.directory = Path(directory)
        self.poll_interval = poll_interval

    def work(self) -> None:
        """Run tasks until the coordinator reports that all reduces are finished."""
        while True:
            reply = self.coordinator.ask_job()
            if reply.task_type is TaskType.MAP:
                if reply.file_name:
                    self.map_task_execute(reply.file_name, reply.task_number, reply.n_reduce)
                    self.coordinator.ack_job(reply.task_number, TaskType.MAP)
                else:
                    time.sleep(self.poll_interval)
            elif reply.file_name and reply.task_number >= 0:
                self.reduce_task_execute(reply.file_name, reply.task_number, reply.n_reduce)
                self.coordinator.ack_job(reply.task_number, TaskType.REDUCE)
            elif reply.task_number == ALL_TASK_IN_PROGRESS:
                time.sleep(self.poll_interval)
            else:
                break

    def map_task_execute(self, filename: str, task_number: int, n_reduce: int) -> None:
        """Map one input file and write its partitioned intermediate files.

        Failures are reported on standard error and do not propagate.
        """
        try:
            content = read_file(filename)
            kva = partition_sort(self.app.map(filename, content))
            write_files(kva, task_number, n_reduce, self.directory)
        except Exception as exc:  # the task is still acknowledged, as before
            print(f"Error: {exc}", file=sys.stderr)

    def _read_intermediate(self, reduce_task: str) -> list[KeyValue]:
        pairs: list[KeyValue] = []
        for map_number in range(MAP_OUTPUTS_READ):
            path = self.directory / f"mr-{map_number}-{reduce_task}"
            if not path.exists():
                print(f"File does not exist: {path}")
            try:
                handle = open(path, "r", encoding="utf-8", errors="surrogateescape", newline="\n")
            except OSError:
                continue
            with handle:
                for line in handle:
                    record = json.loads(line)
                    pairs.append(KeyValue(record["Key"], record["Value"]))
        return pairs

    def reduce_task_execute(self, reduce_task: str, task_number: int, n_reduce: int) -> Path:
        """Reduce one bucket into ``mr-out-<bucket>`` and return its path."""
        pairs = sorted(self._read_intermediate(reduce_task), key=lambda kv: kv.key)

        temp = self.directory / f"mr-out-{reduce_task}.tmp"
        final = self.directory / f"mr-out-{reduce_task}"
        with open(temp, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as out:
            for key, group in groupby(pairs, key=lambda kv: kv.key):
                values = [kv.value for kv in group]
                out.write(f"{key} {self.app.reduce(key, values)}\n")
        os.replace(temp, final)
        return final