"""Drive the interpolation engine with a query stream and write the results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .config import CsvFormat, SynthConfig
from .csvio.output_writer import OutputWriter
from .csvio.query_source import QueryRecord, QueryRecordSource
from .tracking.interpolator import InterpolationStatus, SequentialInterpolator
from .tracking.tracker_reader import TrackerSampleReader, read_tracker_header

logger = logging.getLogger(__name__)

# Undecodable bytes round-trip unchanged from input to output.
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


@dataclass(slots=True)
class PipelineStats:
    records: int = 0
    rows_written: int = 0
    statuses: dict[InterpolationStatus, int] = field(
        default_factory=lambda: {s: 0 for s in InterpolationStatus}
    )

    def count(self, status: InterpolationStatus) -> int:
        return self.statuses[status]


def run_pipeline(
    engine: SequentialInterpolator,
    queries: Iterable[QueryRecord],
    writer: OutputWriter,
    emit_missing_rows: bool = False,
) -> PipelineStats:
    """Query the engine once per record, in record order.

    Without emit_missing_rows, only SUCCESSFUL rows are written and the run
    stops at the first OUT_OF_DATA. With it, every record gets a row and
    missing poses leave the pose columns empty.
    """
    stats = PipelineStats()
    started_writing = False

    for record in queries:
        stats.records += 1
        result = engine.query(record.time)
        stats.statuses[result.status] += 1

        if result.status is InterpolationStatus.SUCCESSFUL:
            if not started_writing:
                logger.info("[OUTPUT] starting to write data rows at %s", record.time)
                started_writing = True
            writer.write_row(result.pose, record.line)
        elif result.status is InterpolationStatus.BEFORE_RECORDED_DATA:
            logger.debug(
                "[PIPELINE] %s not in [%s, %s]",
                record.time,
                engine.start_time,
                engine.end_time,
            )
            if emit_missing_rows:
                writer.write_row(None, record.line)
        elif result.status is InterpolationStatus.OUT_OF_DATA:
            if not emit_missing_rows:
                logger.info("[PIPELINE] out of data from the tracker at %s", record.time)
                break
            writer.write_row(None, record.line)
        else:
            logger.error("[PIPELINE] unexpected interpolation failure at %s", record.time)
            if emit_missing_rows:
                writer.write_row(None, record.line)

    stats.rows_written = writer.rows_written
    logger.info(
        "[PIPELINE] records=%d rows=%d before=%d out_of_data=%d failed=%d",
        stats.records,
        stats.rows_written,
        stats.count(InterpolationStatus.BEFORE_RECORDED_DATA),
        stats.count(InterpolationStatus.OUT_OF_DATA),
        stats.count(InterpolationStatus.OTHER_UNEXPECTED_FAILURE),
    )
    return stats


def synthesize_files(cfg: SynthConfig, fmt: CsvFormat | None = None) -> PipelineStats:
    """Run the whole conversion for the files named in cfg.

    Raises OSError for unreadable/unwritable files, HeaderMismatchError for a
    bad header and InsufficientTrackerDataError when the tracker file has
    fewer than two readable records.
    """
    fmt = fmt or CsvFormat()
    tracker_path = Path(cfg.tracker)
    query_path = Path(cfg.timestamps)

    def _open(path: Path, mode: str):
        return path.open(mode, encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="")

    with _open(tracker_path, "r") as tracker_file:
        read_tracker_header(tracker_file, fmt)
        with _open(query_path, "r") as query_file:
            queries = QueryRecordSource(query_file, fmt)
            logger.info("[QUERY] header: %s", queries.header_line)

            engine = SequentialInterpolator(TrackerSampleReader(tracker_file, fmt))
            with _open(Path(cfg.output), "w") as out_file:
                writer = OutputWriter(
                    out_file,
                    queries.header_line,
                    fmt=fmt,
                    float_format=cfg.float_format,
                )
                stats = run_pipeline(
                    engine, queries, writer, emit_missing_rows=cfg.emit_missing_rows
                )

    logger.info(
        "[OUTPUT] wrote %d rows to %s (%d query records read)",
        stats.rows_written,
        cfg.output,
        queries.records_read,
    )
    return stats
