"""Pose data structures for tracker keyframes."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .time_value import TimeValue


@dataclass(slots=True)
class Pose6D:
    """Tracked pose.

    position:
      3D translation [x, y, z], tracker units.
    quaternion:
      Orientation quaternion [w, x, y, z], expected unit length.
    """

    position: np.ndarray
    quaternion: np.ndarray

    def copy(self) -> "Pose6D":
        return Pose6D(position=self.position.copy(), quaternion=self.quaternion.copy())


@dataclass(slots=True)
class Keyframe:
    time: TimeValue
    pose: Pose6D


def identity_pose() -> Pose6D:
    return Pose6D(
        position=np.zeros(3, dtype=np.float64),
        quaternion=np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64),
    )
