"""Turning mouse drags into rotations with a virtual trackball."""

from __future__ import annotations

import math
from typing import NamedTuple

FLOAT_EPSILON = 1.1920929e-07
MATRIX_SIZE = 16
MATRIX_SIZE_DIM = 4


class Quaternion(NamedTuple):
    """A quaternion ``w + xi + yj + zk``."""

    w: float
    x: float
    y: float
    z: float


IDENTITY_QUATERNION = Quaternion(1.0, 0.0, 0.0, 0.0)


def identity_matrix() -> list[float]:
    """Return a 4x4 identity matrix as 16 floats in column-major order."""
    return [1.0 if row == col else 0.0 for col in range(4) for row in range(4)]


def normalize(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Scale a 3-vector to unit length.

    Raises ValueError for the zero vector.
    """
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return x / length, y / length, z / length


def normalize_quaternion(q: Quaternion) -> Quaternion:
    """Scale a quaternion to unit length.

    Raises ValueError for the zero quaternion.
    """
    length = math.sqrt(q.w * q.w + q.x * q.x + q.y * q.y + q.z * q.z)
    if length == 0.0:
        raise ValueError("cannot normalize a zero quaternion")
    return Quaternion(q.w / length, q.x / length, q.y / length, q.z / length)


def quaternion_from_angle_axis(angle: float, x: float, y: float, z: float) -> Quaternion:
    """Return the unit quaternion rotating by ``angle`` radians about an axis."""
    s = math.sin(0.5 * angle)
    return normalize_quaternion(Quaternion(math.cos(0.5 * angle), x * s, y * s, z * s))


def multiply_quaternion(lhs: Quaternion, rhs: Quaternion) -> Quaternion:
    """Return the Hamilton product ``lhs * rhs``."""
    lw, lx, ly, lz = lhs
    rw, rx, ry, rz = rhs
    return Quaternion(
        lw * rw - lx * rx - ly * ry - lz * rz,
        lw * rx + lx * rw - ly * rz + lz * ry,
        lw * ry + lx * rz + ly * rw - lz * rx,
        lw * rz - lx * ry + ly * rx + lz * rw,
    )


class TrackBall:
    """Generates incremental rotations from successive mouse positions."""

    def __init__(self, window_width: int, window_height: int, radius_scale: float) -> None:
        self.window_width = window_width
        self.window_height = window_height
        radius = radius_scale * float(window_width)
        self.radius_sqr = radius * radius
        self.quaternion = IDENTITY_QUATERNION
        self.origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def start(self, s_x: int, s_y: int) -> None:
        """Begin a drag at screen position ``(s_x, s_y)``."""
        self.origin = self._point_from_screen(s_x, s_y)

    def update(self, s_x: int, s_y: int) -> None:
        """Compute the rotation from the last position to ``(s_x, s_y)``."""
        cur = self._point_from_screen(s_x, s_y)
        dist_sqr = sum((c - o) ** 2 for c, o in zip(cur, self.origin))
        if dist_sqr < FLOAT_EPSILON:
            self.quaternion = IDENTITY_QUATERNION
            return
        try:
            nc = normalize(*cur)
            no = normalize(*self.origin)
            dot = sum(a * b for a, b in zip(nc, no))
            angle = math.acos(max(-1.0, min(1.0, dot)))
            axis = normalize(
                nc[1] * no[2] - nc[2] * no[1],
                nc[2] * no[0] - nc[0] * no[2],
                nc[0] * no[1] - nc[1] * no[0],
            )
            quat = quaternion_from_angle_axis(angle, *axis)
        except ValueError:
            quat = IDENTITY_QUATERNION
        if math.isnan(quat.w):
            quat = IDENTITY_QUATERNION
        self.quaternion = quat
        self.origin = cur

    def rotation_matrix(self) -> list[float]:
        """Return the current rotation as a 4x4 matrix of 16 floats."""
        a, b, c, d = self.quaternion
        aa, ab, ac, ad = a * a, a * b, a * c, a * d
        bb, bc, bd = b * b, b * c, b * d
        cc, cd = c * c, c * d
        dd = d * d

        rot = identity_matrix()
        if aa + bb + cc + dd <= FLOAT_EPSILON:
            return rot
        dim = MATRIX_SIZE_DIM
        rot[0] = aa + bb - cc - dd
        rot[1] = 2 * (-ad + bc)
        rot[2] = 2 * (ac + bd)
        rot[dim + 0] = 2 * (ad + bc)
        rot[dim + 1] = aa - bb + cc - dd
        rot[dim + 2] = 2 * (-ab + cd)
        rot[2 * dim + 0] = 2 * (-ac + bd)
        rot[2 * dim + 1] = 2 * (ab + cd)
        rot[2 * dim + 2] = aa - bb - cc + dd
        return rot

    def reset(self) -> None:
        """Forget the current rotation."""
        self.quaternion = IDENTITY_QUATERNION

    def _point_from_screen(self, s_x: int, s_y: int) -> tuple[float, float, float]:
        x = float(s_x) - float(self.window_width) * 0.5
        y = float(self.window_height) * 0.5 - float(s_y)
        d = x * x + y * y
        if d > 0.5 * self.radius_sqr:
            # hyperbolic sheet
            return x, y, (0.5 * self.radius_sqr) / math.sqrt(d)
        return x, y, math.sqrt(self.radius_sqr - d)