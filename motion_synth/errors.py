"""Fatal error types. Per-query conditions are statuses, not exceptions."""

from __future__ import annotations


class MotionSynthError(RuntimeError):
    pass


class HeaderMismatchError(MotionSynthError, ValueError):
    """A CSV header line is missing a required column or names it differently."""


class InsufficientTrackerDataError(MotionSynthError):
    """Fewer than two readable keyframes at the start of the tracker stream."""
