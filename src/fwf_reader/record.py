from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import ReaderConfig
from .tokenizer import Span, tokenize


@dataclass(frozen=True)
class Record:
    """
    One parsed line: the line text and the span of every field in it.

    Records are independent values; they hold no reference to the stream
    that produced them.

    :param line: The full line text.
    :param spans: Half-open ``(start, end)`` character spans, one per field.
    """
    line: str
    spans: Tuple[Span, ...]

    @classmethod
    def parse(cls, line: str, config: ReaderConfig) -> "Record":
        """
        Tokenize ``line`` with ``config`` and build a record.

        :raises EmptyLine: If the line is empty.
        :raises WidthMismatch: If a field cannot be filled under a strict config.
        """
        spans = tokenize(line, config.widths, config.separator_length, config.flexible_width)
        return cls(line, tuple(spans))

    def get(self, index: int) -> Optional[str]:
        """
        Return the text of field ``index``, or ``None`` when there is no such field.

        Negative indices count as absent.
        """
        if index < 0 or index >= len(self.spans):
            return None
        start, end = self.spans[index]
        return self.line[start:end]

    def iter_fields(self) -> Iterator[str]:
        index = 0
        field = self.get(index)
        while field is not None:
            yield field
            index += 1
            field = self.get(index)

    def __iter__(self) -> Iterator[str]:
        return self.iter_fields()

    def __len__(self) -> int:
        return len(self.spans)

    def fields(self) -> List[str]:
        return list(self.iter_fields())

    def to_dict(self, names: Sequence[str]) -> Dict[str, str]:
        """
        Map ``names`` onto the fields positionally.

        :raises ValueError: If the number of names differs from the field count.
        """
        if len(names) != len(self.spans):
            raise ValueError(f"Expected {len(self.spans)} names, got {len(names)}.")
        return dict(zip(names, self.iter_fields()))
