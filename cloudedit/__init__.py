"""Selection, undoable commands, trackball rotation, mouse tools and distance measurement for point cloud editing."""

__version__ = "0.1.0"

__all__ = ["command", "ranging", "selection", "statistics", "tools", "trackball", "transform"]