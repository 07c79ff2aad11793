"""Tracker timestamps: integer seconds + integer microseconds."""

from __future__ import annotations

from dataclasses import dataclass

USEC_PER_SEC = 1_000_000
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True, order=True, slots=True)
class TimeValue:
    """Timestamp ordered lexicographically on (seconds, microseconds).

    microseconds is conventionally in [0, 1_000_000) but is not normalized,
    so two values only compare equal when both fields match.
    """

    seconds: int
    microseconds: int

    @classmethod
    def from_microseconds(cls, total_us: int) -> "TimeValue":
        sec, usec = divmod(int(total_us), USEC_PER_SEC)
        return cls(seconds=sec, microseconds=usec)

    def __str__(self) -> str:
        return f"{self.seconds}:{self.microseconds}"


def microseconds_difference(
    a: TimeValue, b: TimeValue, check_int32: bool = False
) -> int:
    """Signed a - b in microseconds.

    With check_int32, raise OverflowError if the result does not fit the
    signed 32-bit microsecond range.
    """
    diff = (a.seconds - b.seconds) * USEC_PER_SEC + (a.microseconds - b.microseconds)
    if check_int32 and not (INT32_MIN <= diff <= INT32_MAX):
        raise OverflowError(
            f"time difference {a} - {b} = {diff}us exceeds the 32-bit microsecond range"
        )
    return diff
