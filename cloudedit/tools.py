"""Mouse-driven tools for selecting points and moving the selection."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntFlag
from typing import Any, Protocol

from cloudedit.command import Command
from cloudedit.selection import Selection
from cloudedit.trackball import TrackBall, identity_matrix
from cloudedit.transform import TransformCommand, mult_matrix

DEFAULT_TRANSLATE_FACTOR = 0.001


class Modifier(IntFlag):
    """Keyboard modifiers held during a mouse interaction."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4


class Button(IntFlag):
    """Mouse buttons held during a mouse interaction."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    MIDDLE = 4


class SelectableCloud(Protocol):
    """What the rubber-band selection tool needs from a cloud."""

    def get_display_space_points(self) -> Sequence[Any]: ...

    def set_selection(self, selection: Selection) -> None: ...


class MovableCloud(Protocol):
    """What the selection transform tool needs from a cloud."""

    scaling_factor: float
    matrix: Sequence[float]
    center: tuple[float, float, float]

    def get_object_space_point(self, index: int) -> Any: ...

    def set_selection_translation(self, dx: float, dy: float, dz: float) -> None: ...

    def set_selection_rotation(self, matrix: Sequence[float]) -> None: ...

    def __getitem__(self, index: int) -> Any: ...


class CommandQueueLike(Protocol):
    """Something that runs commands and keeps them for undo."""

    def execute(self, command: Command) -> None: ...


def project_point(pt: Any, projection: Sequence[float]) -> tuple[float, float, float] | None:
    """Project a display-space point to normalised screen coordinates.

    Returns ``(w, x, y)``, or None when the point projects to infinity.
    """
    w = pt.z * projection[11]
    if w == 0:
        return None
    x = (pt.x * projection[0] + pt.z * projection[8]) / w
    y = (pt.y * projection[5] + pt.z * projection[9]) / w
    return w, x, y


class Select2DTool:
    """Selects the points that fall inside a rubber-band rectangle."""

    def __init__(self, selection: Selection, cloud: SelectableCloud | None) -> None:
        self.selection = selection
        self.cloud = cloud
        self.origin_x = 0
        self.origin_y = 0
        self.final_x = 0
        self.final_y = 0
        self.display_box = False

    def start(self, x: int, y: int, modifiers: Modifier, buttons: Button) -> None:
        """Anchor one corner of the rectangle."""
        if self.cloud is None:
            return
        self.origin_x = x
        self.origin_y = y

    def update(self, x: int, y: int, modifiers: Modifier, buttons: Button) -> None:
        """Move the opposite corner and show the rectangle."""
        if self.cloud is None:
            return
        self.final_x = x
        self.final_y = y
        self.display_box = True

    def end(
        self,
        x: int,
        y: int,
        modifiers: Modifier,
        buttons: Button,
        projection: Sequence[float],
        viewport: Sequence[int],
    ) -> None:
        """Finish the rectangle and update the selection.

        SHIFT adds the enclosed points, CTRL removes them, otherwise they
        replace the selection. A rectangle of zero width or height selects
        nothing.
        """
        if self.cloud is None:
            return
        self.final_x = x
        self.final_y = y
        self.display_box = False
        if self.final_x == self.origin_x or self.final_y == self.origin_y:
            return

        indices = [
            i
            for i, pt in enumerate(self.cloud.get_display_space_points())
            if self.is_in_select_box(pt, projection, viewport)
        ]
        if modifiers & Modifier.SHIFT:
            self.selection.add_indices(indices)
        elif modifiers & Modifier.CTRL:
            self.selection.remove_indices(indices)
        else:
            self.selection.clear()
            self.selection.add_indices(indices)
        self.cloud.set_selection(self.selection)

    def is_in_select_box(
        self, pt: Any, projection: Sequence[float], viewport: Sequence[int]
    ) -> bool:
        """Whether a display-space point projects inside the rectangle."""
        projected = project_point(pt, projection)
        if projected is None:
            return False
        w, x, y = projected
        half_w = viewport[2] * 0.5
        half_h = viewport[3] * 0.5
        min_x = min(self.origin_x, self.final_x) / half_w - 1.0
        max_x = max(self.origin_x, self.final_x) / half_w - 1.0
        max_y = (viewport[3] - min(self.origin_y, self.final_y)) / half_h - 1.0
        min_y = (viewport[3] - max(self.origin_y, self.final_y)) / half_h - 1.0
        # points behind the camera
        if w < 0:
            return False
        if x < min_x or x > max_x:
            return False
        if y < min_y or y > max_y:
            return False
        return True


class SelectionTransformTool:
    """Rotates or translates the selected points with the mouse.

    A plain drag rotates about the selection's centre, CTRL+drag moves in
    the screen plane and ALT+drag moves along the depth axis. The change is
    committed as a TransformCommand when the drag ends.
    """

    def __init__(
        self,
        selection: Selection | None,
        cloud: MovableCloud | None,
        command_queue: CommandQueueLike,
        trackball: TrackBall,
    ) -> None:
        self.selection = selection
        self.cloud = cloud
        self.command_queue = command_queue
        self.trackball = trackball
        self.translate_factor = DEFAULT_TRANSLATE_FACTOR
        self.center: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.transform_matrix = identity_matrix()
        self.modifiers = Modifier.NONE
        self.x = 0
        self.y = 0

    def _scale(self) -> float:
        return 1.0 / self.cloud.scaling_factor

    def start(self, x: int, y: int, modifiers: Modifier, buttons: Button) -> None:
        """Begin a drag on a non-empty selection with the left button."""
        if self.cloud is None or self.selection is None or len(self.selection) == 0:
            return
        if not buttons & Button.LEFT:
            return
        self.modifiers = Modifier(modifiers)
        self.x = x
        self.y = y
        self.find_selection_center()
        self.transform_matrix = identity_matrix()
        self.trackball.start(x, y)

    def update(self, x: int, y: int, modifiers: Modifier, buttons: Button) -> None:
        """Show the effect of the drag so far without changing any points."""
        if self.cloud is None:
            return
        if not buttons & Button.LEFT:
            return
        dx = x - self.x
        dy = y - self.y
        if dx == 0 and dy == 0:
            return
        self.trackball.update(x, y)

        factor = self.translate_factor * self._scale()
        if self.modifiers & Modifier.CTRL:
            # translation is applied at the end, so x and y stay anchored
            self.cloud.set_selection_translation(dx * factor, -dy * factor, 0.0)
            return
        if self.modifiers & Modifier.ALT:
            self.cloud.set_selection_translation(0.0, 0.0, dy * factor)
            return

        rotation = self.trackball.rotation_matrix()
        matrix = list(self.transform_matrix)
        for k, c in zip((12, 13, 14), self.center):
            matrix[k] -= c
        matrix = mult_matrix(matrix, rotation)
        for k, c in zip((12, 13, 14), self.center):
            matrix[k] += c
        self.transform_matrix = matrix
        self.cloud.set_selection_rotation(self.transform_matrix)
        self.x = x
        self.y = y

    def end(self, x: int, y: int, modifiers: Modifier, buttons: Button) -> None:
        """Commit the drag as an undoable transform command."""
        if self.cloud is None:
            return
        if not buttons & Button.LEFT:
            return
        factor = self.translate_factor * self._scale()
        dx = x - self.x
        dy = y - self.y
        self.update(x, y, modifiers, buttons)

        if self.modifiers & Modifier.CTRL:
            translation = (dx * factor, -dy * factor, 0.0)
        elif self.modifiers & Modifier.ALT:
            translation = (0.0, 0.0, dy * factor)
        else:
            translation = (0.0, 0.0, 0.0)
        command = TransformCommand(
            self.selection, self.cloud, list(self.transform_matrix), *translation
        )
        self.command_queue.execute(command)

        self.transform_matrix = identity_matrix()
        self.cloud.set_selection_rotation(self.transform_matrix)
        self.cloud.set_selection_translation(0.0, 0.0, 0.0)

    def find_selection_center(self) -> tuple[float, float, float]:
        """Set the centre to the middle of the selection's bounding box."""
        if self.selection is None or len(self.selection) == 0:
            return self.center
        points = [self.cloud.get_object_space_point(i) for i in self.selection]
        coords = [(p.x, p.y, p.z) for p in points]
        lows = [min(axis) for axis in zip(*coords)]
        highs = [max(axis) for axis in zip(*coords)]
        self.center = tuple(0.5 * (hi + lo) for lo, hi in zip(lows, highs))
        return self.center