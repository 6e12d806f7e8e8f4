"""Vector, matrix and quaternion helpers, and the perspective camera.

Matrices are 4x4 numpy arrays that act on column vectors (``m @ v``).
Quaternions are arrays ordered ``(w, x, y, z)``.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


def _vec(values: Iterable[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1].

    ``fov`` is the vertical field of view in radians.
    """
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fov / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def look_at(eye: Iterable[float], center: Iterable[float], up: Iterable[float]) -> np.ndarray:
    """Right-handed view matrix looking from eye towards center."""
    eye_v, center_v, up_v = _vec(eye), _vec(center), _vec(up)
    f = _normalize(center_v - eye_v)
    s = _normalize(np.cross(f, up_v))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye_v)
    m[1, 3] = -np.dot(u, eye_v)
    m[2, 3] = np.dot(f, eye_v)
    return m


def translation(offset: Iterable[float]) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = _vec(offset)
    return m


def scaling(factors: Iterable[float]) -> np.ndarray:
    m = np.identity(4)
    m[:3, :3] = np.diag(_vec(factors))
    return m


def quat_multiply(a: Iterable[float], b: Iterable[float]) -> np.ndarray:
    """Hamilton product ``a * b``."""
    aw, ax, ay, az = _vec(a)
    bw, bx, by, bz = _vec(b)
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    ])


def quat_inverse(q: Iterable[float]) -> np.ndarray:
    qv = _vec(q)
    conjugate = np.array([qv[0], -qv[1], -qv[2], -qv[3]])
    return conjugate / np.dot(qv, qv)


def quat_rotate(q: Iterable[float], v: Iterable[float]) -> np.ndarray:
    """Rotate the vector v by the unit quaternion q."""
    qv = _vec(q)
    w, axis = qv[0], qv[1:]
    vec = _vec(v)
    uv = np.cross(axis, vec)
    uuv = np.cross(axis, uv)
    return vec + (uv * w + uuv) * 2.0


def quat_to_matrix(q: Iterable[float]) -> np.ndarray:
    """3x3 rotation matrix of the unit quaternion q."""
    w, x, y, z = _vec(q)
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ])


def quat_from_matrix(m: np.ndarray) -> np.ndarray:
    """Unit quaternion of a rotation matrix (3x3, or the upper 3x3 of a 4x4)."""
    r = np.asarray(m, dtype=float)[:3, :3]
    candidates = (
        r[0, 0] + r[1, 1] + r[2, 2],
        r[0, 0] - r[1, 1] - r[2, 2],
        r[1, 1] - r[0, 0] - r[2, 2],
        r[2, 2] - r[0, 0] - r[1, 1],
    )
    biggest_index = 0
    for index, value in enumerate(candidates[1:], start=1):
        if value > candidates[biggest_index]:
            biggest_index = index
    biggest = math.sqrt(candidates[biggest_index] + 1.0) * 0.5
    mult = 0.25 / biggest
    if biggest_index == 0:
        return np.array([
            biggest,
            (r[2, 1] - r[1, 2]) * mult,
            (r[0, 2] - r[2, 0]) * mult,
            (r[1, 0] - r[0, 1]) * mult,
        ])
    if biggest_index == 1:
        return np.array([
            (r[2, 1] - r[1, 2]) * mult,
            biggest,
            (r[1, 0] + r[0, 1]) * mult,
            (r[0, 2] + r[2, 0]) * mult,
        ])
    if biggest_index == 2:
        return np.array([
            (r[0, 2] - r[2, 0]) * mult,
            (r[1, 0] + r[0, 1]) * mult,
            biggest,
            (r[2, 1] + r[1, 2]) * mult,
        ])
    return np.array([
        (r[1, 0] - r[0, 1]) * mult,
        (r[0, 2] + r[2, 0]) * mult,
        (r[2, 1] + r[1, 2]) * mult,
        biggest,
    ])


class Camera:
    """A perspective camera holding its projection settings and a view matrix."""

    def __init__(self) -> None:
        self.aspect = 0.0
        self.fov = 45.0
        self.near_plane = 0.1
        self.far_plane = 100.0
        self.view_matrix = np.identity(4)

    def projection_matrix(self) -> np.ndarray:
        # The stored field of view is handed to the projection as it is.
        return perspective(self.fov, self.aspect, self.near_plane, self.far_plane)