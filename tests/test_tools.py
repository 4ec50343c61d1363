import math
from dataclasses import dataclass, replace

import pytest

from cloudedit.selection import Selection
from cloudedit.tools import Button, Modifier, Select2DTool, SelectionTransformTool
from cloudedit.trackball import TrackBall, identity_matrix

PROJECTION = [1.0, 0, 0, 0, 0, 1.0, 0, 0, 0, 0, 0, 1.0, 0, 0, 0, 0]
VIEWPORT = [0, 0, 200, 100]


@dataclass
class Point:
    x: float
    y: float
    z: float


class FakeCloud:
    def __init__(self, points):
        self.points = [Point(*p) for p in points]
        self.scaling_factor = 1.0
        self.matrix = identity_matrix()
        self.center = (0.0, 0.0, 0.0)
        self.selection_set = None
        self.rotations = []
        self.translations = []

    def __len__(self):
        return len(self.points)

    def __getitem__(self, index):
        return self.points[index]

    def get_display_space_points(self):
        return list(self.points)

    def get_object_space_point(self, index):
        return replace(self.points[index])

    def set_selection(self, selection):
        self.selection_set = selection

    def set_selection_rotation(self, matrix):
        self.rotations.append(list(matrix))

    def set_selection_translation(self, dx, dy, dz):
        self.translations.append((dx, dy, dz))


class FakeQueue:
    def __init__(self):
        self.commands = []

    def execute(self, command):
        command.execute()
        self.commands.append(command)


def make_2d(points):
    cloud = FakeCloud(points)
    selection = Selection(cloud)
    return Select2DTool(selection, cloud), selection, cloud


def drag_box(tool, modifiers=Modifier.NONE):
    tool.start(50, 25, modifiers, Button.LEFT)
    tool.update(150, 75, modifiers, Button.LEFT)
    tool.end(150, 75, modifiers, Button.LEFT, PROJECTION, VIEWPORT)


def test_box_selects_points_inside():
    tool, selection, cloud = make_2d([(0, 0, 1), (0.9, 0, 1), (0.2, -0.3, 1)])
    drag_box(tool)
    assert list(selection) == [0, 2]
    assert cloud.selection_set is selection
    assert tool.display_box is False


def test_points_behind_camera_are_ignored():
    tool, selection, _ = make_2d([(0, 0, -1), (0, 0, 1)])
    drag_box(tool)
    assert list(selection) == [1]


def test_update_shows_box():
    tool, _, _ = make_2d([(0, 0, 1)])
    tool.start(1, 2, Modifier.NONE, Button.LEFT)
    tool.update(5, 7, Modifier.NONE, Button.LEFT)
    assert tool.display_box is True
    assert (tool.final_x, tool.final_y) == (5, 7)


def test_degenerate_box_selects_nothing():
    tool, selection, cloud = make_2d([(0, 0, 1)])
    selection.add_index(0)
    tool.start(50, 25, Modifier.NONE, Button.LEFT)
    tool.end(50, 75, Modifier.NONE, Button.LEFT, PROJECTION, VIEWPORT)
    assert list(selection) == [0]
    assert cloud.selection_set is None


def test_plain_replaces_selection():
    tool, selection, _ = make_2d([(0, 0, 1), (0.9, 0, 1)])
    selection.add_index(1)
    drag_box(tool)
    assert list(selection) == [0]


def test_shift_adds_to_selection():
    tool, selection, _ = make_2d([(0, 0, 1), (0.9, 0, 1)])
    selection.add_index(1)
    drag_box(tool, Modifier.SHIFT)
    assert list(selection) == [0, 1]


def test_ctrl_removes_from_selection():
    tool, selection, _ = make_2d([(0, 0, 1), (0.9, 0, 1)])
    selection.add_indices([0, 1])
    drag_box(tool, Modifier.CTRL)
    assert list(selection) == [1]


def test_no_cloud_does_nothing():
    selection = Selection(None)
    tool = Select2DTool(selection, None)
    drag_box(tool)
    assert len(selection) == 0
    assert tool.display_box is False


def make_transform(points, selected):
    cloud = FakeCloud(points)
    selection = Selection(cloud)
    selection.add_indices(selected)
    queue = FakeQueue()
    tool = SelectionTransformTool(selection, cloud, queue, TrackBall(800, 600, 0.8))
    return tool, cloud, queue


def test_find_selection_center():
    tool, _, _ = make_transform([(0, 0, 0), (2, 4, -2), (9, 9, 9)], [0, 1])
    assert tool.find_selection_center() == (1.0, 2.0, -1.0)
    assert tool.center == (1.0, 2.0, -1.0)


def test_ctrl_drag_moves_in_screen_plane_and_undoes():
    tool, cloud, queue = make_transform([(1, 2, 3), (5, 5, 5)], [0])
    tool.start(10, 10, Modifier.CTRL, Button.LEFT)
    tool.end(20, 10, Modifier.CTRL, Button.LEFT)
    assert len(queue.commands) == 1
    assert cloud.points[0].x == pytest.approx(1 + 10 * tool.translate_factor)
    assert (cloud.points[0].y, cloud.points[0].z) == pytest.approx((2, 3))
    assert (cloud.points[1].x, cloud.points[1].y, cloud.points[1].z) == (5, 5, 5)
    assert cloud.rotations[-1] == identity_matrix()
    assert cloud.translations[-1] == (0.0, 0.0, 0.0)
    queue.commands[0].undo()
    assert (cloud.points[0].x, cloud.points[0].y, cloud.points[0].z) == pytest.approx((1, 2, 3))


def test_alt_drag_moves_in_depth():
    tool, cloud, queue = make_transform([(1, 2, 3)], [0])
    tool.start(10, 10, Modifier.ALT, Button.LEFT)
    tool.end(10, 30, Modifier.ALT, Button.LEFT)
    assert cloud.points[0].z == pytest.approx(3 + 20 * tool.translate_factor)
    assert (cloud.points[0].x, cloud.points[0].y) == pytest.approx((1, 2))


def test_right_button_is_ignored():
    tool, cloud, queue = make_transform([(1, 2, 3)], [0])
    tool.start(10, 10, Modifier.CTRL, Button.RIGHT)
    tool.end(20, 10, Modifier.CTRL, Button.RIGHT)
    assert queue.commands == []
    assert (cloud.points[0].x, cloud.points[0].y, cloud.points[0].z) == (1, 2, 3)