"""Shared records, key hashing and intermediate-file handling."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

_FNV_PRIME = 16777619
_FNV_OFFSET_BASIS = 2166136261
_U32_MASK = 0xFFFFFFFF

#: Task number handed out when every reduce task is already being worked on.
ALL_TASK_IN_PROGRESS = -2

#: Task number handed out when there is nothing left to hand out.
NO_TASK = -1


@dataclass(frozen=True)
class KeyValue:
    """One key/value pair emitted by a map function."""

    key: str
    value: str


class TaskType(Enum):
    MAP = "map"
    REDUCE = "reduce"


class Status(Enum):
    UNSTARTED = "unstarted"
    PENDING = "pending"
    FINISHED = "finished"


@dataclass
class TaskStatus:
    """Book-keeping for one task held by the coordinator."""

    file_name: str
    status: Status = Status.UNSTARTED
    started_time: float = 0.0


@dataclass(frozen=True)
class AskJobReply:
    """What the coordinator hands to a worker asking for work."""

    task_type: TaskType
    n_reduce: int
    task_number: int
    file_name: str


def ihash(key: str) -> int:
    """Return the non-negative 32-bit FNV-1a hash of ``key``'s UTF-8 bytes."""
    value = _FNV_OFFSET_BASIS
    for byte in key.encode("utf-8", "surrogateescape"):
        # Bytes are treated as signed chars, so high bytes sign-extend.
        if byte >= 0x80:
            byte |= 0xFFFFFF00
        value = ((value ^ byte) * _FNV_PRIME) & _U32_MASK
    return value & 0x7FFFFFFF


def partition_sort(kva: Iterable[KeyValue]) -> list[KeyValue]:
    """Order pairs by reduce bucket (hash modulo 10), then by key."""
    return sorted(kva, key=lambda kv: (ihash(kv.key) % 10, kv.key))


def read_file(filename: str | os.PathLike[str]) -> str:
    """Return the whole content of ``filename``; raises OSError if unreadable."""
    with open(filename, "r", encoding="utf-8", errors="surrogateescape", newline="") as handle:
        return handle.read()


def _dump_pair(kv: KeyValue) -> str:
    return json.dumps({"Key": kv.key, "Value": kv.value}, separators=(",", ":"), ensure_ascii=False)


def write_files(
    intermediate: Iterable[KeyValue],
    worker_number: int,
    n_reduce: int,
    directory: str | os.PathLike[str] = "file",
) -> list[Path]:
    """Write pairs as JSON lines into ``mr-<worker>-<bucket>`` files.

    Each file is written to a temporary name first and then renamed into
    place. Returns the paths written, in order of first appearance.
    """
    buckets: dict[int, list[KeyValue]] = {}
    for kv in intermediate:
        buckets.setdefault(ihash(kv.key) % n_reduce, []).append(kv)

    base = Path(directory)
    written = []
    for bucket, pairs in buckets.items():
        final = base / f"mr-{worker_number}-{bucket}"
        temp = base / f"mr-{worker_number}-{bucket}temp"
        with open(temp, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as handle:
            for kv in pairs:
                handle.write(_dump_pair(kv))
                handle.write("\n")
        os.replace(temp, final)
        written.append(final)
    return written