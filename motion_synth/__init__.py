"""Interpolate motion-tracker poses at externally supplied timestamps."""

from .tracking.interpolator import (
    InterpolationResult,
    InterpolationStatus,
    SequentialInterpolator,
)
from .tracking.tracker_reader import TrackerSampleReader

__all__ = [
    "InterpolationResult",
    "InterpolationStatus",
    "SequentialInterpolator",
    "TrackerSampleReader",
]
