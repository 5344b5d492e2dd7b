"""An in-process MapReduce engine: a task coordinator, worker threads and a word-count application."""

__version__ = "1.0.0"