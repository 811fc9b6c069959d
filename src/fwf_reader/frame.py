"""Collect parsed records into a Polars DataFrame."""
from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

import polars as pl

from .types import RecordResult

__all__ = ["collect_frame"]


def collect_frame(
        results: Iterable[RecordResult],
        names: Sequence[str],
        chunk_size: int = 50_000,
) -> Tuple[pl.DataFrame, List[RecordResult]]:
    """
    Materialize accepted records as a DataFrame of string columns.

    Records are buffered ``chunk_size`` at a time; each full buffer becomes a
    frame and the frames are concatenated at the end. Failed results are
    returned untouched, in input order.

    :param results: Stream results, e.g. ``RecordStream.records()``.
    :param names: One column name per field.
    :param chunk_size: Rows buffered before a chunk frame is built.
    :returns: ``(frame, rejected)``.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    schema = {name: pl.Utf8 for name in names}
    frames: List[pl.DataFrame] = []
    rejected: List[RecordResult] = []
    buffer: List[List[str]] = []
    for result in results:
        if result.error is not None:
            rejected.append(result)
            continue
        buffer.append(result.unwrap().fields())
        if len(buffer) >= chunk_size:
            frames.append(pl.DataFrame(buffer, schema=schema, orient="row"))
            buffer = []
    if buffer:
        frames.append(pl.DataFrame(buffer, schema=schema, orient="row"))
    if not frames:
        return pl.DataFrame(schema=schema), rejected
    return pl.concat(frames, how="vertical"), rejected
