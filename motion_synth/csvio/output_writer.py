"""Output CSV: interpolated pose columns prepended to each query record."""

from __future__ import annotations

from typing import Optional, TextIO

from ..config import CsvFormat
from ..tracking.pose import Pose6D


class OutputWriter:
    def __init__(
        self,
        out: TextIO,
        query_header_line: str,
        fmt: Optional[CsvFormat] = None,
        float_format: str = "%.6g",
    ):
        self.out = out
        self.fmt = fmt or CsvFormat()
        self.float_format = float_format
        self.rows_written = 0
        self._write_header(query_header_line)

    def _write_header(self, query_header_line: str) -> None:
        q = self.fmt.quote
        names = [f"{q}{name}{q}" for name in self.fmt.output_headers]
        self.out.write(self.fmt.delimiter.join(names + [query_header_line]) + "\n")

    def format_pose(self, pose: Pose6D) -> list[str]:
        # Column order x,y,z,qw,qx,qy,qz matches the stored [w,x,y,z] layout.
        values = list(pose.position) + list(pose.quaternion)
        return [self.float_format % float(v) for v in values]

    def write_row(self, pose: Optional[Pose6D], record_line: str) -> None:
        """Write one data row. pose=None leaves the pose columns empty."""
        if pose is None:
            cols = [""] * len(self.fmt.output_headers)
        else:
            cols = self.format_pose(pose)
        self.out.write(self.fmt.delimiter.join(cols + [record_line]) + "\n")
        self.rows_written += 1
