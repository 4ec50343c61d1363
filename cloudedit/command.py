"""Undoable editing commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sized
from typing import Any, Protocol

from cloudedit.selection import Selection


class EditableCloud(Protocol, Sized):
    """What the paste command needs from a cloud."""

    def append(self, points: Iterable[Any]) -> None: ...

    def resize(self, new_size: int) -> None: ...

    def set_selection(self, selection: Selection) -> None: ...


class CopyBufferLike(Protocol):
    """A buffer holding previously copied points."""

    def get(self) -> Iterable[Any]: ...


class Command(ABC):
    """An editing operation that can be executed and, usually, undone.

    Commands are not copyable.
    """

    has_undo: bool = True

    @abstractmethod
    def execute(self) -> None:
        """Carry out the command."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse the effect of the last ``execute``."""

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} objects cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} objects cannot be copied")


class PasteCommand(Command):
    """Append the copy buffer's points to the cloud and select them."""

    def __init__(
        self,
        copy_buffer: CopyBufferLike,
        selection: Selection,
        cloud: EditableCloud | None,
    ) -> None:
        self.copy_buffer = copy_buffer
        self.selection = selection
        self.cloud = cloud
        self._prev_cloud_size = 0

    def execute(self) -> None:
        if self.cloud is None:
            return
        self._prev_cloud_size = len(self.cloud)
        self.cloud.append(self.copy_buffer.get())
        self.selection.clear()
        self.selection.add_index_range(
            self._prev_cloud_size, len(self.cloud) - self._prev_cloud_size
        )
        self.cloud.set_selection(self.selection)

    def undo(self) -> None:
        if self.cloud is None:
            return
        self.selection.remove_index_range(
            self._prev_cloud_size, len(self.cloud) - self._prev_cloud_size
        )
        self.cloud.resize(self._prev_cloud_size)