from __future__ import annotations
import argparse, json, logging, sys
from typing import List, Optional

from .config import ReaderConfig
from .engine.ingest import Ingestor
from .errors import ReaderError
from .schema.layout import Layout, load_layout
from .stream import RecordStream, stop_on_source_failure
from .utils.columns import column_names
from . import __version__

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {number}")
    return number


def _add_layout_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("source")
    layout = cmd.add_mutually_exclusive_group(required=True)
    layout.add_argument("--layout", help="Path to a JSON layout document")
    layout.add_argument("--widths", nargs="+", type=_positive_int, help="Field widths in characters")
    cmd.add_argument("--separator-length", type=_non_negative_int, help="Characters skipped between fields")
    cmd.add_argument("--strict", action="store_true", help="Fail short lines instead of accepting short fields")
    cmd.add_argument("--no-header", action="store_true", help="The first line is data, not a header")
    cmd.add_argument("--encoding", nargs="*", help="Encoding priority list")
    cmd.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])


def _resolve_layout(args: argparse.Namespace) -> Layout:
    """Build the layout from ``--layout`` or ``--widths``; explicit flags override the file."""
    if args.layout:
        layout = load_layout(args.layout)
    else:
        layout = Layout(config=ReaderConfig(widths=tuple(args.widths)))
    config = layout.config
    if args.separator_length is not None:
        config = config.with_separator_length(args.separator_length)
    if args.strict:
        config = config.with_flexible_width(False)
    if args.no_header:
        config = config.with_has_header(False)
    return Layout(config=config, encodings=args.encoding or layout.encodings)


def _dump(layout: Layout, source: str) -> int:
    failures = 0
    with RecordStream.from_path(source, layout.config, layout.encodings) as stream:
        header = stream.header()
        columns = column_names(layout.config, header)
        if header is not None:
            print(json.dumps({"header": header.fields()}, ensure_ascii=False))
        for result in stop_on_source_failure(stream.records()):
            if result.error is None:
                print(json.dumps(result.unwrap().to_dict(columns), ensure_ascii=False))
            else:
                failures += 1
                print(f"line {result.line_number}: {result.error}", file=sys.stderr)
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser("fwf-reader")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    ingest = sub.add_parser("ingest", help="Parse a fixed-width file and write Parquet")
    _add_layout_args(ingest)
    ingest.add_argument("--dest", required=True)
    ingest.add_argument("--chunk-size", type=_positive_int, default=50_000)

    dump = sub.add_parser("dump", help="Print records as JSON lines")
    _add_layout_args(dump)

    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    layout = _resolve_layout(args)
    try:
        if args.cmd == "ingest":
            counters = Ingestor(layout.config, layout.encodings, chunk_size=args.chunk_size).run(args.source, args.dest)
            print(json.dumps(counters))
            status = 0
        else:
            status = _dump(layout, args.source)
    except ReaderError as exc:
        logger.error("cannot read %s: %s", args.source, exc)
        status = 2
    sys.exit(status)
