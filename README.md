# cloudedit

`cloudedit` holds the editing logic for an interactive point cloud viewer:
selections, undoable commands, trackball rotation, mouse tools and
point-to-point distance measurement. It has no dependencies beyond the
standard library.

## What is in it

- **`cloudedit.selection.Selection`** holds a set of unique point indices for
  a cloud. The cloud can be any object that supports `len()`. Iteration runs
  in ascending order, and `reversed()` runs in descending order.
  - `add_index`, `add_indices` and `add_index_range` select points. Negative
    indices raise `ValueError`.
  - `remove_index`, `remove_indices` and `remove_index_range` deselect points.
  - `is_selected(index)` is true only for selected indices that lie inside the
    cloud.
  - `invert_select()` selects exactly the points of the cloud that were not
    selected.
  - `copy()` returns an unregistered copy.
  - `get_stat()` returns `"Total number of selected points: N"`. It returns an
    empty string when nothing is selected.
- **`cloudedit.statistics`** has two parts:
  - `Statistics` is the abstract base for anything with a `get_stat()`.
  - `StatisticsRegistry` gathers providers with `register()`, or with a
    provider's `register_stats(registry)`. `get_stats()` joins their non-empty
    lines in registration order. When no provider has anything to report, it
    returns the prompt `"请载入点云文件."` ("please load a point cloud file").
- **`cloudedit.command`** has the undoable commands:
  - `Command` is the abstract base, with `execute()`, `undo()` and a
    `has_undo` flag. Commands refuse to be copied.
  - `PasteCommand(copy_buffer, selection, cloud)` appends `copy_buffer.get()`
    to the cloud and makes the appended points the selection. `undo()` shrinks
    the cloud back to its earlier size.
- **`cloudedit.transform`** works on matrices and moved points:
  - `mult_matrix(left, right)` multiplies 4x4 matrices.
  - `invert_matrix(matrix)` inverts a 4x4 matrix. It raises `ValueError` when
    the matrix is singular.
  - `TransformCommand(selection, cloud, matrix, tx, ty, tz)` rotates and
    translates the selected points relative to the cloud's display matrix and
    centre. `undo()` restores them.
- **`cloudedit.trackball`** turns mouse drags into rotations:
  - `TrackBall(window_width, window_height, radius_scale)` takes `start(x, y)`
    and `update(x, y)`. `rotation_matrix()` returns the current rotation.
  - Helpers: `identity_matrix()`, `normalize()`, `normalize_quaternion()`,
    `quaternion_from_angle_axis()` and `multiply_quaternion()`.
- **`cloudedit.tools`** holds the mouse tools. The `Modifier` (SHIFT, CTRL,
  ALT) and `Button` (LEFT, RIGHT, MIDDLE) flags describe mouse state.
  - `Select2DTool` does rubber-band selection.
    - `end()` takes the projection matrix and viewport, and selects the points
      inside the rectangle. SHIFT adds them, CTRL removes them, and with
      neither they replace the selection.
  - `SelectionTransformTool` works on the current selection with the
    left-button drag:
    - A plain drag rotates the selection about its bounding-box centre.
    - CTRL+drag moves it in the screen plane.
    - ALT+drag moves it along the depth axis.
    - When the drag ends, a `TransformCommand` goes to the command queue.
- **`cloudedit.ranging`** measures distances:
  - `Converter(cloud, tolerance=0.01)` finds the cloud point that projects
    within tolerance of a screen position.
  - `Ranging` records two clicked points. A press and a release at the same
    position count as a click. The second click yields the message with the
    distance. `get_distance_of_points()` raises `ValueError` until both points
    are picked. The messages it returns are in Chinese.

Matrices are flat sequences of 16 floats in OpenGL column-major order.
Viewports are `(x, y, width, height)`.

## What it does not do

`cloudedit` draws nothing and has no window, menus or dialogs. It does not
read or write point cloud files. It has no cloud class, copy buffer or
command queue of its own. The tools and commands work with any objects that
have the methods described by the protocols in each module:

- `EditableCloud` and `CopyBufferLike` in `command`
- `TransformableCloud` in `transform`
- `SelectableCloud`, `MovableCloud` and `CommandQueueLike` in `tools`
- `PickableCloud` in `ranging`

The projection matrix and viewport must be passed in by the caller.

## Example

```python
from cloudedit.selection import Selection
from cloudedit.statistics import StatisticsRegistry

cloud = [(0.0, 0.0, 0.0)] * 5  # anything with len() will do
registry = StatisticsRegistry()
selection = Selection(cloud, registry)
selection.add_index_range(0, 3)
selection.invert_select()
print(list(selection))        # [3, 4]
print(registry.get_stats())   # Total number of selected points: 2
```

## Tests

From a checkout of the project:

```
pip install -e .[test]
pytest
```