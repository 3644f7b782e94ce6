# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""4x4 affine transform helpers.

Matrices are numpy ``(4, 4)`` arrays acting on column vectors, so the basis
vectors are the first three columns and the translation is ``m[:3, 3]``.

The stored form is a flat list of 16 floats laid out axis by axis
(x-axis, y-axis, z-axis, origin, each padded to four components), i.e. the
rows of the transposed matrix.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# Below this angular separation slerp degrades to normalised lerp.
_SLERP_DOT_THRESHOLD = 0.9995
_MIRROR_X = np.diag([-1.0, 1.0, 1.0, 1.0])


def identity() -> np.ndarray:
    return np.eye(4)


def from_array(values: Sequence[float]) -> np.ndarray:
    """Decode a stored 16-element transform."""
    arr = np.asarray(values, dtype=float)
    if arr.size != 16:
        raise ValueError(f"transform needs 16 elements, got {arr.size}")
    return arr.reshape(4, 4).T.copy()


def to_array(m: np.ndarray) -> list[float]:
    """Encode a transform for storage."""
    return [float(x) for x in np.asarray(m, dtype=float).T.reshape(16)]


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


def scaling(factors: Sequence[float]) -> np.ndarray:
    return np.diag([float(factors[0]), float(factors[1]), float(factors[2]), 1.0])


def rotation(axis: Sequence[float], angle: float) -> np.ndarray:
    """Rotation of *angle* radians about *axis* through the origin."""
    ax = np.asarray(axis, dtype=float)
    ax = ax / np.linalg.norm(ax)
    half = angle / 2.0
    m = np.eye(4)
    m[:3, :3] = quaternion_to_rotation(np.concatenate(([math.cos(half)], ax * math.sin(half))))
    return m


def basis_scale(m: np.ndarray) -> np.ndarray:
    """Lengths of the x, y and z basis vectors."""
    return np.linalg.norm(np.asarray(m, dtype=float)[:3, :3], axis=0)


def rotation_to_quaternion(r: np.ndarray) -> np.ndarray:
    """Unit quaternion ``(w, x, y, z)`` for a 3x3 rotation matrix."""
    trace = r[0, 0] + r[1, 1] + r[2, 2]
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = (0.25 * s, (r[2, 1] - r[1, 2]) / s, (r[0, 2] - r[2, 0]) / s, (r[1, 0] - r[0, 1]) / s)
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = math.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2]) * 2.0
        q = ((r[2, 1] - r[1, 2]) / s, 0.25 * s, (r[0, 1] + r[1, 0]) / s, (r[0, 2] + r[2, 0]) / s)
    elif r[1, 1] > r[2, 2]:
        s = math.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2]) * 2.0
        q = ((r[0, 2] - r[2, 0]) / s, (r[0, 1] + r[1, 0]) / s, 0.25 * s, (r[1, 2] + r[2, 1]) / s)
    else:
        s = math.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1]) * 2.0
        q = ((r[1, 0] - r[0, 1]) / s, (r[0, 2] + r[2, 0]) / s, (r[1, 2] + r[2, 1]) / s, 0.25 * s)
    q = np.array(q)
    return q / np.linalg.norm(q)


def quaternion_to_rotation(q: np.ndarray) -> np.ndarray:
    w, x, y, z = np.asarray(q, dtype=float) / np.linalg.norm(q)
    return np.array([
        [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
        [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
        [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
    ])


def slerp(q0: np.ndarray, q1: np.ndarray, t: float) -> np.ndarray:
    """Spherical interpolation along the short arc. *t* is not clamped."""
    dot = float(np.dot(q0, q1))
    if dot < 0.0:
        q1 = -q1
        dot = -dot
    if dot > _SLERP_DOT_THRESHOLD:
        q = q0 + t * (q1 - q0)
        return q / np.linalg.norm(q)
    theta = math.acos(min(dot, 1.0))
    sin_theta = math.sin(theta)
    s0 = math.sin((1.0 - t) * theta) / sin_theta
    s1 = math.sin(t * theta) / sin_theta
    return s0 * q0 + s1 * q1


def interpolate(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Rigid interpolation between two unit-scale transforms.

    Rotation is slerped and translation lerped. Values of *t* outside
    ``[0, 1]`` extrapolate along the same motion.

    Mirrored transforms (negative determinant) are interpolated with the
    reflection factored out of the local x axis and reapplied afterwards.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if t == 0.0:
        return a.copy()
    if t == 1.0:
        return b.copy()
    if np.linalg.det(a[:3, :3]) < 0.0:
        return interpolate(a @ _MIRROR_X, b @ _MIRROR_X, t) @ _MIRROR_X
    q = slerp(rotation_to_quaternion(a[:3, :3]), rotation_to_quaternion(b[:3, :3]), t)
    out = np.eye(4)
    out[:3, :3] = quaternion_to_rotation(q)
    out[:3, 3] = (1.0 - t) * a[:3, 3] + t * b[:3, 3]
    return out
