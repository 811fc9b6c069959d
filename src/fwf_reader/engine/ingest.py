from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..config import ReaderConfig
from ..outputs.parquet_output import ParquetOutput
from ..stream import RecordStream, stop_on_source_failure
from ..utils.columns import column_names

logger = logging.getLogger(__name__)


class Ingestor:
    def __init__(
            self,
            config: ReaderConfig,
            encodings: Optional[List[str]] = None,
            chunk_size: int = 50_000,
            compression: str = "snappy",
    ) -> None:
        """Set up a fixed-width → Parquet ingest.

        :param config: Parse parameters for the source file.
        :param encodings: Encoding names tried in order when opening the source.
        :param chunk_size: Rows buffered before each Parquet write.
        :param compression: Parquet compression codec.
        """
        self.config = config
        self.encodings = encodings
        self.chunk_size = chunk_size
        self.compression = compression

    def run(self, source: str, dest: str) -> Dict[str, int]:
        """Stream ``source`` into ``dest``.

        Accepted records are written as rows, every failed line (including
        line-source failures) goes to the quarantine file. The output and the
        stream are closed on every exit path.

        :param source: Fixed-width input file.
        :param dest: Output directory.
        :returns: Counters ``read``, ``kept`` and ``rejected``.
        :raises IoError: If the source cannot be opened, or fails while being read.
            Rows written before a read failure stay in the output, and the
            failed line is quarantined.
        :raises EmptyLine: If a header is expected but the input is empty or starts blank.
        :raises WidthMismatch: If the header line does not fit a strict config.
        """
        with RecordStream.from_path(source, self.config, self.encodings) as stream:
            columns = column_names(self.config, stream.header())
            output = ParquetOutput(dest, columns, chunk_size=self.chunk_size, compression=self.compression)
            output.open()
            try:
                for result in stop_on_source_failure(stream.records()):
                    if result.error is None:
                        output.write(result.unwrap().to_dict(columns))
                    else:
                        logger.debug("rejected line %d of %s: %s", result.line_number, source, result.error)
                        output.quarantine(result)
            finally:
                output.close()
        logger.info(
            "ingested %s into %s: read=%d kept=%d rejected=%d",
            source, dest, output.counters["read"], output.counters["kept"], output.counters["rejected"],
        )
        return dict(output.counters)
