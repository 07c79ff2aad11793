"""External timestamp records: leading sec,usec fields plus opaque payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..config import CsvFormat
from ..errors import HeaderMismatchError
from ..tracking.time_value import TimeValue
from .csv_tools import check_header, clean_line, get_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QueryRecord:
    time: TimeValue
    # Cleaned raw record, written back unchanged after the pose columns.
    line: str


class QueryRecordSource:
    """Iterates query records in file order after validating the header.

    Iteration ends at end of input, or at the first record that lacks two
    integer timestamp fields.
    """

    def __init__(self, lines: Iterable[str], fmt: Optional[CsvFormat] = None):
        self.fmt = fmt or CsvFormat()
        self._lines = iter(lines)
        self.records_read = 0

        raw = next(self._lines, None)
        if raw is None:
            raise HeaderMismatchError(
                "time reference data file is empty, expected a header line"
            )
        self.header_line = clean_line(raw)
        header = get_fields(
            self.header_line, self.fmt.timestamp_field_count, delimiter=self.fmt.delimiter
        )
        check_header(header, self.fmt.timestamp_headers, "time reference data", quote=self.fmt.quote)
        logger.debug("[QUERY] header: %s", self.header_line)

    def __iter__(self) -> Iterator[QueryRecord]:
        n = self.fmt.timestamp_field_count
        for raw in self._lines:
            line = clean_line(raw)
            fields = get_fields(line, n, delimiter=self.fmt.delimiter)
            if len(fields) != n:
                if line:
                    logger.warning(
                        "[QUERY] got only %d fields, wanted %d; line was %r",
                        len(fields),
                        n,
                        line,
                    )
                return
            try:
                time = TimeValue(seconds=int(fields[0]), microseconds=int(fields[1]))
            except ValueError:
                logger.warning("[QUERY] timestamp is not integer; line was %r", line)
                return
            self.records_read += 1
            yield QueryRecord(time=time, line=line)
