"""Sequential pose interpolation over a forward-only two-keyframe window.

Usage contract:
- Queries must arrive in non-decreasing time order. The window only ever
  moves forward; an earlier query after an advance is not an error, it just
  reports BEFORE_RECORDED_DATA.
- Per-query conditions are returned as InterpolationStatus values. Only
  construction (fewer than two readable keyframes) raises.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import InsufficientTrackerDataError
from ..math3d.quaternion import q_slerp
from .pose import Keyframe, Pose6D
from .time_value import TimeValue, microseconds_difference
from .tracker_reader import TrackerSampleReader

logger = logging.getLogger(__name__)


class InterpolationStatus(enum.Enum):
    BEFORE_RECORDED_DATA = "before_recorded_data"
    SUCCESSFUL = "successful"
    OUT_OF_DATA = "out_of_data"
    OTHER_UNEXPECTED_FAILURE = "other_unexpected_failure"


class EngineState(enum.Enum):
    CONSTRUCTING = "constructing"
    READY = "ready"
    EXHAUSTED = "exhausted"


@dataclass(slots=True)
class InterpolationResult:
    status: InterpolationStatus
    pose: Optional[Pose6D] = None

    @property
    def ok(self) -> bool:
        return self.status is InterpolationStatus.SUCCESSFUL


class _Window:
    """Keyframes bracketing the current query plus cached interval data.

    span_us and delta_position are recomputed by every mutator.
    """

    __slots__ = ("start", "end", "span_us", "delta_position")

    def __init__(self, start: Keyframe, end: Keyframe):
        self.start = start
        self.end = end
        self._update_cache()

    def _update_cache(self) -> None:
        try:
            self.span_us = microseconds_difference(
                self.end.time, self.start.time, check_int32=True
            )
        except OverflowError as exc:
            # Python ints do not overflow; the span is still exact.
            logger.warning("[ENGINE] %s", exc)
            self.span_us = microseconds_difference(self.end.time, self.start.time)
        self.delta_position = self.end.pose.position - self.start.pose.position

    def shift(self, new_end: Keyframe) -> None:
        self.start = self.end
        self.end = new_end
        self._update_cache()

    def interpolate(self, time: TimeValue) -> Optional[Pose6D]:
        if time == self.start.time:
            return self.start.pose.copy()
        if time == self.end.time:
            return self.end.pose.copy()
        if time < self.start.time or self.end.time < time or self.span_us <= 0:
            return None

        t = float(microseconds_difference(time, self.start.time)) / float(self.span_us)
        position = self.start.pose.position + t * self.delta_position
        quaternion = q_slerp(self.start.pose.quaternion, self.end.pose.quaternion, t)
        return Pose6D(position=position, quaternion=quaternion)


class SequentialInterpolator:
    """Interpolates tracker poses at monotonically non-decreasing query times."""

    def __init__(self, reader: TrackerSampleReader):
        self.reader = reader
        self.state = EngineState.CONSTRUCTING

        start = reader.read()
        if start is None:
            raise InsufficientTrackerDataError(
                "could not read the initial data row from the tracker data"
            )
        end = reader.read()
        if end is None:
            raise InsufficientTrackerDataError(
                "could not read the second data row from the tracker data"
            )
        if end.time < start.time:
            logger.warning(
                "[ENGINE] tracker keyframes out of order: %s then %s", start.time, end.time
            )

        self._window = _Window(start, end)
        self.state = EngineState.READY
        logger.debug("[ENGINE] initial window [%s, %s]", start.time, end.time)

    @property
    def exhausted(self) -> bool:
        return self.state is EngineState.EXHAUSTED

    @property
    def start_time(self) -> TimeValue:
        return self._window.start.time

    @property
    def end_time(self) -> TimeValue:
        return self._window.end.time

    def _advance(self) -> bool:
        """Shift end into start and read a new end. False once out of data."""
        if self.exhausted:
            return False
        new_end = self.reader.read()
        if new_end is None:
            self.state = EngineState.EXHAUSTED
            logger.info(
                "[ENGINE] tracker data exhausted after %s (%s)",
                self._window.end.time,
                self.reader.stop_reason.value if self.reader.stop_reason else "unknown",
            )
            return False
        if new_end.time < self._window.end.time:
            logger.warning(
                "[ENGINE] tracker keyframes out of order: %s then %s",
                self._window.end.time,
                new_end.time,
            )
        self._window.shift(new_end)
        return True

    def query(self, time: TimeValue) -> InterpolationResult:
        if time < self._window.start.time:
            return InterpolationResult(InterpolationStatus.BEFORE_RECORDED_DATA)

        while self._window.end.time < time:
            if not self._advance():
                return InterpolationResult(InterpolationStatus.OUT_OF_DATA)

        if self.exhausted:
            return InterpolationResult(InterpolationStatus.OUT_OF_DATA)

        pose = self._window.interpolate(time)
        if pose is None:
            logger.error(
                "[ENGINE] could not interpolate %s in window [%s, %s]",
                time,
                self._window.start.time,
                self._window.end.time,
            )
            return InterpolationResult(InterpolationStatus.OTHER_UNEXPECTED_FAILURE)
        return InterpolationResult(InterpolationStatus.SUCCESSFUL, pose)
