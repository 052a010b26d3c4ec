"""Text output sink and member ordering levels for generated C++."""

from __future__ import annotations

import io
from enum import Enum, auto
from typing import Optional, TextIO


class SortLevel(Enum):
    """Groups that generated members are ordered by."""

    SIZE_STRUCT = auto()
    USING_ALIAS = auto()
    NESTED_STRUCT = auto()
    NESTED_UNION = auto()
    FIELDS = auto()
    FIELDS_IMPL = auto()
    PROPERTIES = auto()
    CONSTRUCTORS = auto()
    METHODS = auto()
    UNKNOWN = auto()


class Writer:
    """Writes generated text to a stream, in memory unless one is given."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream: TextIO = stream if stream is not None else io.StringIO()

    def write(self, text: str) -> None:
        """Write text as it is."""
        self.stream.write(text)

    def writeln(self, text: str = "") -> None:
        """Write text followed by a line ending."""
        self.stream.write(f"{text}\n")