from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ReaderError
from .record import Record

Row = Dict[str, Any]


@dataclass
class RecordResult:
    line_number: int
    record: Optional[Record] = None
    error: Optional[ReaderError] = None
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Record:
        """Return the record, or raise the error this result carries."""
        if self.error is not None:
            raise self.error
        assert self.record is not None
        return self.record
