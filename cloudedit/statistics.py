"""Collecting short textual statistics from the parts of the editor."""

from __future__ import annotations

from abc import ABC, abstractmethod

NO_CLOUD_MESSAGE = "请载入点云文件."


class Statistics(ABC):
    """Something that can describe its current state in one line of text."""

    @abstractmethod
    def get_stat(self) -> str:
        """Return the statistics string, or an empty string if there is none."""

    def register_stats(self, registry: StatisticsRegistry) -> None:
        """Add this provider to ``registry``."""
        registry.register(self)


class StatisticsRegistry:
    """An ordered collection of statistics providers."""

    def __init__(self) -> None:
        self._providers: list[Statistics] = []

    def register(self, provider: Statistics) -> None:
        """Add a provider; its statistics are reported in registration order."""
        self._providers.append(provider)

    def get_stats(self) -> str:
        """Join the non-empty statistics, one per line.

        When no provider has anything to report, a prompt to load a cloud
        is returned instead.
        """
        result = "".join(
            f"{stat}\n"
            for stat in (provider.get_stat() for provider in self._providers)
            if stat
        )
        return result or NO_CLOUD_MESSAGE

    def clear(self) -> None:
        """Forget every registered provider."""
        self._providers.clear()

    def __len__(self) -> int:
        return len(self._providers)