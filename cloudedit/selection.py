"""The set of point indices picked out by the selection tools."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sized

from cloudedit.statistics import Statistics, StatisticsRegistry

STAT_TITLE = "Total number of selected points: "


def _check_index(index: int) -> int:
    if index < 0:
        raise ValueError(f"point index must be non-negative, got {index}")
    return index


class Selection(Statistics):
    """A mask over a point cloud holding the indices of selected points.

    Indices are unique and iterate in ascending order.
    """

    def __init__(self, cloud: Sized | None, registry: StatisticsRegistry | None = None) -> None:
        self.cloud = cloud
        self._indices: set[int] = set()
        if registry is not None:
            self.register_stats(registry)

    def copy(self) -> Selection:
        """Return an unregistered selection over the same cloud with the same indices."""
        other = Selection(self.cloud)
        other._indices = set(self._indices)
        return other

    def add_index(self, index: int) -> None:
        """Select one point."""
        self._indices.add(_check_index(index))

    def remove_index(self, index: int) -> None:
        """Deselect one point; deselecting an unselected point does nothing."""
        self._indices.discard(index)

    def add_indices(self, indices: Iterable[int]) -> None:
        """Select every point in ``indices``."""
        self._indices.update(_check_index(i) for i in indices)

    def remove_indices(self, indices: Iterable[int]) -> None:
        """Deselect every point in ``indices``."""
        self._indices.difference_update(indices)

    def add_index_range(self, start: int, num: int) -> None:
        """Select ``num`` consecutive points beginning at ``start``."""
        self._indices.update(range(_check_index(start), start + num))

    def remove_index_range(self, start: int, num: int) -> None:
        """Deselect ``num`` consecutive points beginning at ``start``."""
        self._indices.difference_update(range(start, start + num))

    def clear(self) -> None:
        """Deselect everything."""
        self._indices.clear()

    def is_selected(self, index: int) -> bool:
        """Whether ``index`` is selected and lies within the cloud."""
        if self.cloud is None or index >= len(self.cloud):
            return False
        return index in self._indices

    def invert_select(self) -> None:
        """Select exactly the points of the cloud that were not selected."""
        size = len(self.cloud) if self.cloud is not None else 0
        self._indices = set(range(size)) - self._indices

    def get_stat(self) -> str:
        if not self._indices:
            return ""
        return f"{STAT_TITLE}{len(self._indices)}"

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._indices))

    def __reversed__(self) -> Iterator[int]:
        return iter(sorted(self._indices, reverse=True))

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def __repr__(self) -> str:
        return f"Selection({sorted(self._indices)!r})"