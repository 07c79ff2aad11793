"""Quaternion utilities, scalar-first [w, x, y, z].
"""

from __future__ import annotations

import math

import numpy as np

# Above this |dot| the slerp weights lose precision; blend linearly instead.
SLERP_LINEAR_THRESHOLD = 1.0 - 1e-9


def q_identity() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)


def q_normalize(q: np.ndarray) -> np.ndarray:
    q = np.asarray(q, dtype=np.float64)
    n = float(np.linalg.norm(q))
    if n < 1e-12:
        return q_identity()
    return q / n


def axis_angle_to_q(axis: np.ndarray, angle_rad: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / (np.linalg.norm(axis) + 1e-12)
    s = math.sin(angle_rad / 2.0)
    return q_normalize(
        np.array(
            [math.cos(angle_rad / 2.0), axis[0] * s, axis[1] * s, axis[2] * s],
            dtype=np.float64,
        )
    )


def q_angle(a: np.ndarray, b: np.ndarray) -> float:
    """Rotation angle (rad) taking orientation a to orientation b.

    Sign-invariant: q and -q describe the same rotation.
    """
    d = abs(float(np.dot(q_normalize(a), q_normalize(b))))
    return 2.0 * math.acos(min(1.0, d))


def q_slerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Shortest-arc spherical interpolation from a (t=0) to b (t=1).

    When the orientations are nearly identical or the arc denominator
    vanishes, falls back to a normalized component-wise blend.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    d = float(np.dot(a, b))
    if d < 0.0:
        b = -b
        d = -d

    if d >= SLERP_LINEAR_THRESHOLD:
        return q_normalize((1.0 - t) * a + t * b)

    theta = math.acos(min(1.0, d))
    sin_theta = math.sin(theta)
    if abs(sin_theta) < 1e-12:
        return q_normalize((1.0 - t) * a + t * b)

    w0 = math.sin((1.0 - t) * theta) / sin_theta
    w1 = math.sin(t * theta) / sin_theta
    return w0 * a + w1 * b
