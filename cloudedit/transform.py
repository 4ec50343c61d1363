"""Matrix helpers and the undoable command that moves selected points."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from cloudedit.command import Command
from cloudedit.selection import Selection

MATRIX_SIZE = 16
_SINGULAR_TOLERANCE = 1e-12


class TransformableCloud(Protocol):
    """What the transform command needs from a cloud.

    ``matrix`` is the cloud's 4x4 display matrix in column-major order,
    ``center`` its centre point, and indexing returns a point whose
    ``x``, ``y`` and ``z`` can be assigned.
    """

    matrix: Sequence[float]
    center: tuple[float, float, float]

    def get_object_space_point(self, index: int) -> Any: ...

    def __getitem__(self, index: int) -> Any: ...


def _as_matrix(matrix: Sequence[float]) -> list[float]:
    values = [float(v) for v in matrix]
    if len(values) != MATRIX_SIZE:
        raise ValueError(f"a 4x4 matrix needs {MATRIX_SIZE} values, got {len(values)}")
    return values


def mult_matrix(left: Sequence[float], right: Sequence[float]) -> list[float]:
    """Return ``left * right`` for column-major 4x4 matrices."""
    lhs = _as_matrix(left)
    rhs = _as_matrix(right)
    return [
        sum(lhs[k * 4 + row] * rhs[col * 4 + k] for k in range(4))
        for col in range(4)
        for row in range(4)
    ]


def invert_matrix(matrix: Sequence[float]) -> list[float]:
    """Return the inverse of a 4x4 matrix.

    Raises ValueError if the matrix is singular.
    """
    m = _as_matrix(matrix)
    # The inverse of the transpose is the transpose of the inverse, so the
    # storage order does not matter here.
    rows = [
        [m[r * 4 + c] for c in range(4)] + [1.0 if r == c else 0.0 for c in range(4)]
        for r in range(4)
    ]
    for col in range(4):
        pivot = max(range(col, 4), key=lambda r: abs(rows[r][col]))
        if abs(rows[pivot][col]) < _SINGULAR_TOLERANCE:
            raise ValueError("matrix is singular")
        rows[col], rows[pivot] = rows[pivot], rows[col]
        p = rows[col][col]
        rows[col] = [v / p for v in rows[col]]
        for r in range(4):
            if r != col and rows[r][col]:
                factor = rows[r][col]
                rows[r] = [a - factor * b for a, b in zip(rows[r], rows[col])]
    return [v for row in rows for v in row[4:]]


def _apply(m: Sequence[float], x: float, y: float, z: float) -> tuple[float, float, float]:
    return (
        x * m[0] + y * m[4] + z * m[8] + m[12],
        x * m[1] + y * m[5] + z * m[9] + m[13],
        x * m[2] + y * m[6] + z * m[10] + m[14],
    )


class TransformCommand(Command):
    """Rotate and translate the selected points, with undo."""

    def __init__(
        self,
        selection: Selection,
        cloud: TransformableCloud,
        matrix: Sequence[float],
        translate_x: float,
        translate_y: float,
        translate_z: float,
    ) -> None:
        self.selection = selection
        self.cloud = cloud
        self.translate = (float(translate_x), float(translate_y), float(translate_z))
        self._internal_selection = selection.copy()
        self.transform_matrix = _as_matrix(matrix)
        self.cloud_matrix = _as_matrix(cloud.matrix)
        self.cloud_matrix_inv = invert_matrix(self.cloud_matrix)
        self.cloud_center = tuple(float(c) for c in cloud.center)

    def execute(self) -> None:
        self._apply_transform(self.selection)

    def undo(self) -> None:
        transform_inv = invert_matrix(self.transform_matrix)
        cx, cy, cz = self.cloud_center
        tx, ty, tz = self.translate
        for index in self._internal_selection:
            point = self.cloud[index]
            x, y, z = _apply(self.cloud_matrix, point.x - cx, point.y - cy, point.z - cz)
            x, y, z = _apply(transform_inv, x - tx, y - ty, z - tz)
            x, y, z = _apply(self.cloud_matrix_inv, x, y, z)
            point.x, point.y, point.z = x + cx, y + cy, z + cz

    def _apply_transform(self, selection: Selection) -> None:
        cx, cy, cz = self.cloud_center
        tx, ty, tz = self.translate
        for index in selection:
            pt = self.cloud.get_object_space_point(index)
            x, y, z = _apply(self.transform_matrix, pt.x, pt.y, pt.z)
            x, y, z = _apply(self.cloud_matrix_inv, x + tx, y + ty, z + tz)
            point = self.cloud[index]
            point.x, point.y, point.z = x + cx, y + cy, z + cz