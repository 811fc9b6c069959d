from __future__ import annotations

"""Parquet output writer.

Accepted rows are buffered and appended to ``data.parquet`` in chunks through
a ``pyarrow.parquet.ParquetWriter``, so memory stays bounded by
``chunk_size`` rows. Every column is written as a string.

Artifacts written under ``dest``:

* ``data.parquet`` – accepted rows (written with the column schema even when empty)
* ``_quarantine.jsonl`` – one JSON object per rejected line (may be empty)
* ``_manifest.json`` – summary counters: ``read``, ``kept``, ``rejected``
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from .base import BaseOutput
from ..types import RecordResult, Row


class ParquetOutput(BaseOutput):
    """Chunked Parquet writer with quarantine and manifest files.

    :param dest: Output directory path (created if missing).
    :param columns: Column names, in field order.
    :param chunk_size: Row count threshold for flushing to the Parquet file.
    :param compression: Parquet compression codec (default ``snappy``).
    """

    def __init__(
        self,
        dest: str,
        columns: List[str],
        *,
        chunk_size: int = 50_000,
        compression: str = "snappy",
        **kwargs: Any,
    ):
        super().__init__(dest, columns, **kwargs)
        allowed_comp: set[str] = {"snappy", "gzip", "brotli", "zstd", "lz4", "none"}
        if compression not in allowed_comp:
            raise ValueError(f"Unsupported compression '{compression}'. Allowed: {sorted(allowed_comp)}")
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.compression: Literal["snappy", "gzip", "brotli", "zstd", "lz4", "none"] = compression  # type: ignore[assignment]
        self.chunk_size = chunk_size
        self.arrow_schema = pa.schema([(name, pa.string()) for name in self.columns])
        self.row_buffer: List[Row] = []
        self._writer: Optional[pq.ParquetWriter] = None
        self.counters: Dict[str, int] = {"read": 0, "kept": 0, "rejected": 0}

    def open(self) -> None:  # type: ignore[override]
        self.output_dir = Path(self.dest)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.data_file_path = self.output_dir / "data.parquet"
        self.quarantine_file_path = self.output_dir / "_quarantine.jsonl"
        self.quarantine_handle = self.quarantine_file_path.open("w", encoding="utf-8")
        self.counters = {"read": 0, "kept": 0, "rejected": 0}

    # ---------------- Public write API -----------
    def write(self, row: Row) -> None:  # type: ignore[override]
        self.counters["read"] += 1
        self.counters["kept"] += 1
        self.row_buffer.append(row)
        if len(self.row_buffer) >= self.chunk_size:
            self._flush_chunk()

    def quarantine(self, result: RecordResult) -> None:  # type: ignore[override]
        self.counters["read"] += 1
        self.counters["rejected"] += 1
        payload = {"line": result.line_number, "text": result.text, "error": str(result.error)}
        self.quarantine_handle.write(json.dumps(payload, ensure_ascii=False) + "\n")

    # ---------------- Internal helpers ------------
    def _get_writer(self) -> pq.ParquetWriter:
        if self._writer is None:
            self._writer = pq.ParquetWriter(self.data_file_path, self.arrow_schema, compression=self.compression)
        return self._writer

    def _flush_chunk(self) -> None:
        if not self.row_buffer:
            return
        table_pa = pa.Table.from_pylist(self.row_buffer, schema=self.arrow_schema)
        self._get_writer().write_table(table_pa)
        self.row_buffer.clear()

    # ---------------- Lifecycle -------------------
    def close(self) -> None:  # type: ignore[override]
        try:
            try:
                self._flush_chunk()
            finally:
                # the schema-only file is still written when nothing was flushed
                self._get_writer().close()
                self._writer = None
        finally:
            try:
                if hasattr(self, "quarantine_handle") and not self.quarantine_handle.closed:
                    self.quarantine_handle.close()
            finally:
                manifest = self.output_dir / "_manifest.json"
                manifest.write_text(json.dumps(self.counters, indent=2), encoding="utf-8")
