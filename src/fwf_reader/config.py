from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class ReaderConfig:
    """
    Immutable parse parameters shared by the tokenizer and the record stream.

    :param widths: Field widths in characters; one entry per field.
    :param separator_length: Characters skipped between consecutive fields.
    :param flexible_width: Accept short trailing fields instead of failing.
    :param has_header: Treat the first line as a header record.
    :param names: Optional field names used when records are turned into rows.
    :raises ValueError: If a width is not a positive integer, the separator
        length is negative, or ``names`` does not match ``widths`` in length.
    """
    widths: Tuple[int, ...]
    separator_length: int = 1
    flexible_width: bool = True
    has_header: bool = True
    names: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        widths = tuple(self.widths)
        for width in widths:
            if isinstance(width, bool) or not isinstance(width, int) or width < 1:
                raise ValueError(f"Field width must be a positive integer, got {width!r}.")
        if isinstance(self.separator_length, bool) or not isinstance(self.separator_length, int) \
                or self.separator_length < 0:
            raise ValueError(f"Separator length must be a non-negative integer, got {self.separator_length!r}.")
        object.__setattr__(self, "widths", widths)
        if self.names is not None:
            names = tuple(str(n) for n in self.names)
            if len(names) != len(widths):
                raise ValueError(f"Expected {len(widths)} field names, got {len(names)}.")
            object.__setattr__(self, "names", names)

    @property
    def field_count(self) -> int:
        return len(self.widths)

    @property
    def line_length(self) -> int:
        """Number of characters in a line that fills every field exactly."""
        if not self.widths:
            return 0
        return sum(self.widths) + self.separator_length * (len(self.widths) - 1)

    def with_separator_length(self, separator_length: int) -> "ReaderConfig":
        return replace(self, separator_length=separator_length)

    def with_flexible_width(self, flexible_width: bool) -> "ReaderConfig":
        return replace(self, flexible_width=flexible_width)

    def with_has_header(self, has_header: bool) -> "ReaderConfig":
        return replace(self, has_header=has_header)

    def with_names(self, names: Optional[Iterable[str]]) -> "ReaderConfig":
        return replace(self, names=tuple(names) if names is not None else None)
