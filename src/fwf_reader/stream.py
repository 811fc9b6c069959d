"""
RecordStream: lazily parse a line source into records.

The stream owns its line source and pulls one line per record requested, so
memory use stays at one line regardless of input size. Per-line failures are
yielded as :class:`~fwf_reader.types.RecordResult` values and never end the
stream; only exhaustion of the source does.

:class RecordStream: Record stream over any iterable of terminator-stripped lines.
"""
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional

from .config import ReaderConfig
from .errors import EmptyLine, IoError, ReaderError
from .record import Record
from .sources import open_line_source
from .types import RecordResult

# failures of the line source itself, as opposed to bad line content
SOURCE_ERRORS = (OSError, UnicodeDecodeError)


class RecordStream:
    """
    Couple a line source with a :class:`ReaderConfig`.

    When ``config.has_header`` is set the first line is pulled and parsed
    immediately. Any failure there is raised from the constructor and the
    source is closed.

    :param lines: Iterable of terminator-stripped lines; the stream takes ownership.
    :param config: Parse parameters.
    :raises IoError: If the source fails while the header is read.
    :raises EmptyLine: If the header line is empty or the input has no lines.
    :raises WidthMismatch: If the header line cannot be split under a strict config.
    """

    def __init__(self, lines: Iterable[str], config: ReaderConfig):
        self.config = config
        self._source = lines
        self._lines: Iterator[str] = iter(lines)
        self._line_number = 0
        self._exhausted = False
        self._header: Optional[Record] = None
        if config.has_header:
            try:
                self._header = self._read_header()
            except ReaderError:
                self.close()
                raise

    @classmethod
    def from_path(cls, path: str, config: ReaderConfig, encodings: Optional[List[str]] = None) -> "RecordStream":
        """
        Open ``path`` as a line source and build a stream over it.

        :param path: File to read.
        :param config: Parse parameters.
        :param encodings: Encoding names in priority order, see
            :func:`~fwf_reader.sources.open_line_source`.
        :raises IoError: If the file cannot be opened or read.
        """
        try:
            source = open_line_source(path, encodings)
        except OSError as exc:
            raise IoError(exc) from exc
        return cls(source, config)

    def _read_header(self) -> Record:
        try:
            line = next(self._lines)
        except StopIteration:
            self._exhausted = True
            raise EmptyLine()
        except SOURCE_ERRORS as exc:
            raise IoError(exc) from exc
        self._line_number += 1
        return Record.parse(line, self.config)

    def header(self) -> Optional[Record]:
        """Return the header record, or ``None`` when the config has no header."""
        return self._header

    @property
    def line_number(self) -> int:
        """Number of physical lines pulled so far, header included."""
        return self._line_number

    def records(self) -> Iterator[RecordResult]:
        """
        Yield one :class:`RecordResult` per remaining line.

        Ends for good once the source is exhausted; later calls yield nothing.
        """
        while not self._exhausted:
            try:
                line = next(self._lines)
            except StopIteration:
                self._exhausted = True
                return
            except SOURCE_ERRORS as exc:
                self._line_number += 1
                error = IoError(exc)
                error.__cause__ = exc
                yield RecordResult(self._line_number, error=error)
                continue
            self._line_number += 1
            try:
                record = Record.parse(line, self.config)
            except ReaderError as exc:
                yield RecordResult(self._line_number, error=exc, text=line)
            else:
                yield RecordResult(self._line_number, record=record)

    def __iter__(self) -> Iterator[RecordResult]:
        return self.records()

    def close(self) -> None:
        """Release the line source when it supports ``close()``."""
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "RecordStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def stop_on_source_failure(results: Iterable[RecordResult]) -> Iterator[RecordResult]:
    """
    Pass ``results`` through until the line source itself fails.

    A result carrying an :class:`IoError` whose cause is not a decode error is
    still yielded, and the next pull raises that error. A line that merely
    fails to decode is passed through like any other bad line.

    :raises IoError: After yielding the first source failure.
    """
    for result in results:
        yield result
        error = result.error
        if isinstance(error, IoError) and not isinstance(error.cause, UnicodeDecodeError):
            raise error
