"""Command line entry point running a word count with worker threads."""

from __future__ import annotations

import argparse
import os
import threading
from pathlib import Path
from typing import Sequence

from .coordinator import Coordinator
from .wordcount import WordCount
from .worker import Worker


def run(
    files: Sequence[str],
    directory: str | os.PathLike[str] = "file",
    n_reduce: int = 10,
    n_workers: int = 8,
) -> None:
    """Count words in ``files`` using ``n_workers`` threads sharing one coordinator."""
    base = Path(directory)
    if not base.exists():
        base.mkdir()
        print(f"Directory created: {base}")

    coordinator = Coordinator(files, n_reduce)
    threads = [
        threading.Thread(target=Worker(coordinator, WordCount(), base).work)
        for _ in range(n_workers)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Count words in files with map/reduce workers.")
    parser.add_argument("files", nargs="*", help="input files")
    parser.add_argument("--directory", default="file", help="directory for intermediate and output files")
    parser.add_argument("--reduce", type=int, default=10, dest="n_reduce", help="number of reduce tasks")
    parser.add_argument("--workers", type=int, default=8, dest="n_workers", help="number of worker threads")
    args = parser.parse_args(argv)
    if not args.files:
        parser.print_usage()
        return 1
    run(args.files, args.directory, args.n_reduce, args.n_workers)
    return 0