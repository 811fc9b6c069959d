"""
fwf_reader - streaming reader for fixed-width text files.
"""

__version__ = "0.1.0"

from .config import ReaderConfig
from .errors import EmptyLine, IoError, ReaderError, WidthMismatch
from .record import Record
from .stream import RecordStream
from .tokenizer import Span, tokenize
from .types import RecordResult

__all__ = [
    "EmptyLine",
    "IoError",
    "ReaderConfig",
    "ReaderError",
    "Record",
    "RecordResult",
    "RecordStream",
    "Span",
    "WidthMismatch",
    "tokenize",
]
