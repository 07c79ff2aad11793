"""Minimal CSV line helpers.

Fields are split on the delimiter only (no quoting rules). Callers extract a
bounded number of leading fields and pass the raw record through as-is.
"""

from __future__ import annotations

from typing import Sequence

from ..errors import HeaderMismatchError


def clean_line(line: str) -> str:
    return line.rstrip("\r\n")


def get_fields(
    line: str,
    num_fields: int,
    first: int = 0,
    delimiter: str = ",",
) -> list[str]:
    """Return at most num_fields fields of line, starting at field index first.

    A trailing delimiter does not produce an empty last field.
    """
    if not line or num_fields <= 0:
        return []
    parts = line.split(delimiter)
    if line.endswith(delimiter):
        parts.pop()
    return parts[first : first + num_fields]


def strip_quotes(field: str, quote: str = '"') -> str:
    if len(field) > 1 and field[0] == quote and field[-1] == quote:
        return field[1:-1]
    return field


def check_header(
    fields: Sequence[str],
    expected: Sequence[str],
    source_name: str,
    quote: str = '"',
) -> None:
    if len(fields) < len(expected):
        raise HeaderMismatchError(
            f"couldn't get {len(expected)} headings from the first line of the "
            f"{source_name} file, got {len(fields)}"
        )
    for i, want in enumerate(expected):
        found = strip_quotes(fields[i], quote)
        if found != want:
            raise HeaderMismatchError(
                f"heading mismatch in {source_name} file, column {i}, "
                f"expected {want!r}, found {found!r}"
            )
