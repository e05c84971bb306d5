"""
Snapshot capture - runs a full read and writes it out as a snapshot file.
"""

import json
from pathlib import Path
from typing import Optional

from ..errors import SnapshotError
from ..sync.read import ReadEngine, ReadReport
from .index import atomic_write_text


class SnapshotCapture:
    """Captures current network settings into a snapshot file."""

    def __init__(self, read_engine: ReadEngine):
        self.read_engine = read_engine

    @staticmethod
    def _serialize(report: ReadReport) -> str:
        if report.total == 0:
            return ""
        return json.dumps(report.to_snapshot_dict(), indent=2) + "\n"

    def capture_to(self, path: Path, category_name: Optional[str] = None) -> ReadReport:
        """
        Capture current settings to path.

        Args:
            path: Snapshot file to create
            category_name: Only capture this category name

        Returns:
            The ReadReport that was written

        Raises:
            SnapshotError: nothing was read or the file could not be written
        """
        path = Path(path)
        report = self.read_engine.collect(category_name=category_name)
        content = self._serialize(report)

        if not content.strip():
            path.unlink(missing_ok=True)
            raise SnapshotError("No settings were read; snapshot would be empty")

        try:
            atomic_write_text(path, content)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise SnapshotError(f"Failed to write snapshot {path}: {e.strerror}")

        if path.stat().st_size == 0:
            path.unlink(missing_ok=True)
            raise SnapshotError(f"Backup file is empty or was not created: {path}")

        return report
