"""Clases base para fuentes de datos."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from clarity_plot.model import GlucoseReading


@dataclass(frozen=True)
class SourcePaths:
    """Container for the exported file location."""

    path: Path


class DataSource(ABC):
    """Abstract glucose data source."""

    def __init__(self, paths: SourcePaths) -> None:
        """Create a data source.

        Args:
            paths: Source paths configuration.
        """
        self._paths = paths

    @abstractmethod
    def validate(self) -> None:
        """Validate that the exported file exists.

        Raises:
            FileNotFoundError: If the file is missing.
        """

    @abstractmethod
    def load_readings(self, path: Path | None = None) -> list[GlucoseReading]:
        """Parse the export into readings ordered by timestamp."""
