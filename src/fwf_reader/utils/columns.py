from __future__ import annotations
from typing import List, Optional

from ..config import ReaderConfig
from ..record import Record

__all__ = ["column_names", "dedupe_column_names"]


def dedupe_column_names(names: List[str]) -> List[str]:
    """
    Make every name unique by appending ``_1``, ``_2``, … to repeats.

    Example:
        Input:  ["id", "name", "name", "name_1"]
        Output: ["id", "name", "name_1", "name_1_1"]

    :param names: Column names, possibly repeated.
    :returns: Names in the same order with suffixes applied where needed.
    """
    used: set[str] = set()
    deduped: List[str] = []
    for name in names:
        candidate = name
        suffix = 0
        while candidate in used:
            suffix += 1
            candidate = f"{name}_{suffix}"
        used.add(candidate)
        deduped.append(candidate)
    return deduped


def column_names(config: ReaderConfig, header: Optional[Record] = None) -> List[str]:
    """
    Pick output column names for records parsed with ``config``.

    Layout names win; otherwise the trimmed header fields are used. Any name
    still blank becomes ``col_<position>`` (1-based), and repeats are suffixed.

    :param config: Parse parameters, possibly carrying ``names``.
    :param header: Header record of the stream, if any.
    """
    if config.names is not None:
        names = list(config.names)
    elif header is not None:
        names = [field.strip() for field in header.iter_fields()]
    else:
        names = [""] * config.field_count
    names = [name or f"col_{i}" for i, name in enumerate(names, 1)]
    return dedupe_column_names(names)
