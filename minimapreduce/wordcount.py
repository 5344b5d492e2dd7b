"""Map/reduce application interface and the word-count application."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Sequence

from .helper import KeyValue

_WORD = re.compile(r"[A-Za-z]+")


class MapReduceApp(ABC):
    """A pair of map and reduce functions run by workers."""

    @abstractmethod
    def map(self, filename: str, contents: str) -> list[KeyValue]:
        """Turn one input file into key/value pairs."""

    @abstractmethod
    def reduce(self, key: str, values: Sequence[str]) -> str:
        """Combine every value emitted for ``key`` into one output value."""


class WordCount(MapReduceApp):
    """Counts occurrences of each run of ASCII letters."""

    def map(self, filename: str, contents: str) -> list[KeyValue]:
        return [KeyValue(word, "1") for word in _WORD.findall(contents)]

    def reduce(self, key: str, values: Sequence[str]) -> str:
        return str(len(values))