"""Measuring the distance between two points picked on screen."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, Protocol

from cloudedit.tools import project_point

DEFAULT_TOLERANCE = 0.01
FIRST_POINT_LABEL = "第一个点("
SECOND_POINT_LABEL = "第二个点("
NO_POINT_MESSAGE = "没有选中任何点"
DISTANCE_LABEL = "距离为:"


class PickableCloud(Protocol):
    """What picking needs from a cloud."""

    def get_display_space_points(self) -> Sequence[Any]: ...

    def get_object_space_point(self, index: int) -> Any: ...


def _number(value: float) -> str:
    return f"{value:g}"


class Converter:
    """Finds the cloud point shown under a screen position."""

    def __init__(self, cloud: PickableCloud | None, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.cloud = cloud
        self.tolerance = tolerance

    def is_right_point(
        self,
        pt: Any,
        projection: Sequence[float],
        viewport: Sequence[int],
        screen_x: float,
        screen_y: float,
    ) -> bool:
        """Whether a display-space point projects within tolerance of the screen position."""
        projected = project_point(pt, projection)
        if projected is None:
            return False
        _, x, y = projected
        sx = screen_x / (viewport[2] * 0.5) - 1.0
        sy = screen_y / (viewport[3] * 0.5) - 1.0
        return abs(sx - x) <= self.tolerance and abs(sy - y) <= self.tolerance

    def find_point(
        self, x: int, y: int, projection: Sequence[float], viewport: Sequence[int]
    ) -> Any | None:
        """Return the object-space point under ``(x, y)``, or None if there is none."""
        if self.cloud is None:
            return None
        for i, pt in enumerate(self.cloud.get_display_space_points()):
            if self.is_right_point(pt, projection, viewport, x, y):
                return self.cloud.get_object_space_point(i)
        return None


class Ranging:
    """Collects two clicked points and reports the distance between them."""

    def __init__(self) -> None:
        self.times = 0
        self.point1: Any | None = None
        self.point2: Any | None = None
        self.distance = 0.0
        self.point1_str = ""
        self.point2_str = ""
        self.result_str = ""
        self.final_x: int | None = None
        self.final_y: int | None = None

    def get_distance_of_points(self) -> float:
        """Return the distance between the two picked points."""
        if self.point1 is None or self.point2 is None:
            raise ValueError("two points must be picked before measuring")
        p, q = self.point1, self.point2
        self.distance = math.dist((p.x, p.y, p.z), (q.x, q.y, q.z))
        return self.distance

    def pick_point(
        self,
        x: int,
        y: int,
        converter: Converter,
        projection: Sequence[float],
        viewport: Sequence[int],
    ) -> str:
        """Pick the point under ``(x, y)`` and return the message to show."""
        point = converter.find_point(x, y, projection, viewport)
        if point is None:
            return NO_POINT_MESSAGE
        coords = f"{_number(point.x)},{_number(point.y)},{_number(point.z)})"
        if self.times == 0:
            self.point1 = point
            label = FIRST_POINT_LABEL
            self.point1_str += label + coords
        else:
            self.point2 = point
            label = SECOND_POINT_LABEL
            self.point2_str += label + coords
        self.times += 1
        return label + coords

    def reset(self) -> None:
        """Start a new measurement."""
        self.times = 0
        self.point1_str = ""
        self.point2_str = ""
        self.result_str = ""

    def on_mouse_pressed(self, x: int, y: int) -> None:
        """Remember where the mouse went down."""
        self.final_x = x
        self.final_y = y

    def on_mouse_released(
        self,
        x: int,
        y: int,
        converter: Converter,
        projection: Sequence[float],
        viewport: Sequence[int],
    ) -> str | None:
        """Handle a click; return the message to show, or None for a drag."""
        message = None
        if self.final_x == x and self.final_y == y:
            message = self.pick_point(x, y, converter, projection, viewport)
        if self.times == 2:
            self.get_distance_of_points()
            self.result_str += DISTANCE_LABEL + _number(self.distance)
            message = self.result_str
            self.reset()
        return message