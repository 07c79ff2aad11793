"""Tracker sample reader: one CSV record -> one Keyframe."""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Iterator, Optional

import numpy as np

from ..config import CsvFormat
from ..csvio.csv_tools import check_header, clean_line, get_fields
from ..errors import HeaderMismatchError
from .pose import Keyframe, Pose6D
from .time_value import TimeValue

logger = logging.getLogger(__name__)

# Field positions in a tracker record.
SEC, USEC, TX, TY, TZ, QW, QX, QY, QZ = range(9)


class ReadStopReason(enum.Enum):
    EXHAUSTED = "exhausted"
    MALFORMED = "malformed"


def read_tracker_header(lines: Iterator[str], fmt: CsvFormat) -> list[str]:
    """Consume and validate the tracker header line."""
    raw = next(lines, None)
    if raw is None:
        raise HeaderMismatchError("tracker data file is empty, expected a header line")
    header = get_fields(clean_line(raw), fmt.tracker_field_count, delimiter=fmt.delimiter)
    check_header(header, fmt.tracker_headers, "tracker data", quote=fmt.quote)
    return header


def _parse_record(fields: list[str]) -> Keyframe:
    """Raises ValueError on unparsable fields."""
    time = TimeValue(seconds=int(fields[SEC]), microseconds=int(fields[USEC]))
    position = np.array(
        [float(fields[TX]), float(fields[TY]), float(fields[TZ])], dtype=np.float64
    )
    quaternion = np.array(
        [float(fields[QW]), float(fields[QX]), float(fields[QY]), float(fields[QZ])],
        dtype=np.float64,
    )
    return Keyframe(time=time, pose=Pose6D(position=position, quaternion=quaternion))


class TrackerSampleReader:
    """Reads keyframes one record at a time from an ordered line source.

    A short or unparsable record ends the stream just like end of input.
    ``stop_reason`` tells the two apart after the fact; there is no retry.
    """

    def __init__(self, lines: Iterable[str], fmt: Optional[CsvFormat] = None):
        self._lines = iter(lines)
        self.fmt = fmt or CsvFormat()
        self.reads = 0
        self.stop_reason: Optional[ReadStopReason] = None
        self._line_no = 0

    def read(self) -> Optional[Keyframe]:
        self.reads += 1
        raw = next(self._lines, None)
        if raw is None:
            self.stop_reason = ReadStopReason.EXHAUSTED
            return None
        self._line_no += 1

        line = clean_line(raw)
        fields = get_fields(line, self.fmt.tracker_field_count, delimiter=self.fmt.delimiter)
        if len(fields) < self.fmt.tracker_field_count:
            if line:
                logger.warning(
                    "[TRACKER] record %d has %d fields, wanted %d; treating as end of data: %r",
                    self._line_no,
                    len(fields),
                    self.fmt.tracker_field_count,
                    line,
                )
                self.stop_reason = ReadStopReason.MALFORMED
            else:
                self.stop_reason = ReadStopReason.EXHAUSTED
            return None

        try:
            return _parse_record(fields)
        except ValueError:
            logger.warning(
                "[TRACKER] record %d is not numeric; treating as end of data: %r",
                self._line_no,
                line,
            )
            self.stop_reason = ReadStopReason.MALFORMED
            return None
