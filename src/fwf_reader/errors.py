"""
Error types raised and reported by the reader.

Three kinds cover every failure of the core:

* :class:`IoError` wraps a failure of the underlying line source.
* :class:`EmptyLine` is reported for a zero-length line.
* :class:`WidthMismatch` is reported when a line runs out of characters before
  a declared width can be satisfied and flexible widths are disabled.

``EmptyLine`` and ``WidthMismatch`` are per-record outcomes; inside a
:class:`~fwf_reader.stream.RecordStream` they are yielded as results and never
stop the stream.
"""
from __future__ import annotations


class ReaderError(Exception):
    """Base class for all reader errors."""


class IoError(ReaderError):
    """
    A line-source failure.

    :param cause: The exception raised by the line source.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"Io error: {cause}")
        self.cause = cause


class EmptyLine(ReaderError):
    """The line had zero length."""

    def __init__(self) -> None:
        super().__init__("Empty line")


class WidthMismatch(ReaderError):
    """
    Not enough characters remained at ``position`` to fill a field of ``width``.

    :param position: Character position where the shortfall was detected.
    :param width: The declared width that could not be satisfied.
    """

    def __init__(self, position: int, width: int):
        super().__init__(f"Width mismatch: {width} characters required at position {position}")
        self.position = position
        self.width = width

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WidthMismatch):
            return NotImplemented
        return (self.position, self.width) == (other.position, other.width)

    def __hash__(self) -> int:
        return hash((WidthMismatch, self.position, self.width))
