from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List
from ..types import RecordResult, Row

class BaseOutput(ABC):
    """Abstract base for output writers.

    Concrete implementations must provide lifecycle and row handling methods.

    :param dest: Destination path / identifier.
    :param columns: Column names of the rows that will be written.
    :param opts: Additional implementation-specific options.
    """
    def __init__(self, dest: str, columns: List[str], **opts: Any):
        self.dest = dest
        self.columns = list(columns)
        self.opts = opts

    @abstractmethod
    def open(self) -> None:
        """Initialize resources (directories, files)."""
        ...

    @abstractmethod
    def write(self, row: Row) -> None:
        """Persist a single accepted row.

        :param row: Row dictionary to write.
        """
        ...

    @abstractmethod
    def quarantine(self, result: RecordResult) -> None:
        """Record a rejected line and its error.

        :param result: Failed stream result.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Finalize and release resources, flushing buffers as needed."""
        ...
