"""
Line sources: iterators of terminator-stripped text lines.

The record stream accepts any iterable of strings. :class:`LineSource` is the
file-backed one. It reads raw bytes, splits on ``\\n`` only, decodes each line
on its own and strips one trailing ``\\n`` and then one trailing ``\\r``, so LF
and CRLF input yield the same lines. A line that does not decode raises
``UnicodeDecodeError`` for that line alone; the next pull resumes on the
following line.
"""
from __future__ import annotations
import codecs
from typing import BinaryIO, Iterator, List, Optional

DEFAULT_ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]
SAMPLE_SIZE = 64 * 1024


def strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class LineSource:
    """
    Iterate over a binary handle one decoded, terminator-stripped line at a time.

    :param handle: Binary file handle.
    :param encoding: Codec used to decode each line.
    :param errors: Codec error handler, ``"strict"`` unless replacing is wanted.
    """

    def __init__(self, handle: BinaryIO, encoding: str = "utf-8", errors: str = "strict"):
        self.handle = handle
        self.encoding = encoding
        self.errors = errors

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        raw = self.handle.readline()
        if raw == b"":
            raise StopIteration
        # the bytes are consumed before decoding, so a bad line costs only itself
        return strip_terminator(raw.decode(self.encoding, self.errors))

    def close(self) -> None:
        self.handle.close()

    @property
    def closed(self) -> bool:
        return self.handle.closed

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _decodes(sample: bytes, encoding: str, complete: bool) -> bool:
    decoder = codecs.getincrementaldecoder(encoding)()
    try:
        # a sample cut mid-character is fine unless it is the whole file
        decoder.decode(sample, final=complete)
    except UnicodeDecodeError:
        return False
    return True


def detect_encoding(handle: BinaryIO, encodings: List[str], sample_size: int = SAMPLE_SIZE) -> Optional[str]:
    """
    Return the first of ``encodings`` that decodes the leading ``sample_size`` bytes.

    Unknown codec names are skipped. The handle is rewound afterwards.

    :returns: The encoding name, or ``None`` when no known codec decodes the sample.
    """
    sample = handle.read(sample_size)
    handle.seek(0)
    complete = len(sample) < sample_size
    for enc in encodings:
        try:
            codecs.lookup(enc)
        except LookupError:
            continue
        if _decodes(sample, enc, complete):
            return enc
    return None


def open_line_source(path: str, encodings: Optional[List[str]] = None,
                     sample_size: int = SAMPLE_SIZE) -> LineSource:
    """
    Open ``path`` and pick its encoding from ``encodings``.

    The first known encoding that decodes the leading sample is used. When
    none does, the first known encoding is used anyway, so undecodable lines
    surface one by one while reading. When no name is a known codec the file
    is read as utf-8 with undecodable bytes replaced.

    :param path: File to open.
    :param encodings: Encoding names in priority order.
    :param sample_size: Bytes inspected when choosing the encoding.
    :raises OSError: If the file cannot be opened or read.
    """
    candidates = encodings or DEFAULT_ENCODINGS
    handle = open(path, "rb")
    try:
        chosen = detect_encoding(handle, candidates, sample_size)
    except BaseException:
        handle.close()
        raise
    if chosen is not None:
        return LineSource(handle, chosen)
    for enc in candidates:
        try:
            codecs.lookup(enc)
        except LookupError:
            continue
        return LineSource(handle, enc)
    return LineSource(handle, "utf-8", errors="replace")
