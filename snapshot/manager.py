"""
Backup manager - high-level snapshot operations for a backup directory.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..errors import SnapshotNotFoundError
from ..sync.read import utc_timestamp
from .capture import SnapshotCapture
from .index import MetadataIndex, METADATA_FILE
from .models import BackupEntry


CREATED_BY = "android-netcfg backup"


def timestamp_name() -> str:
    """Local-time name like 20241122_063000."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def sanitize_name(name: str) -> str:
    return name.strip().replace(" ", "-").replace("/", "-")


class BackupManager:
    """Creates, lists and locates backups in one directory."""

    FIRST_RUN_NAME = "first-run"
    PRE_APPLY_NAME = "pre-apply"

    def __init__(self, backup_dir: Path, capture: Optional[SnapshotCapture] = None):
        """
        Args:
            backup_dir: Directory holding backup_*.json and metadata.json
            capture: Snapshot capture component (required to create backups)
        """
        self.backup_dir = Path(backup_dir)
        self._capture = capture

    @property
    def capture(self) -> SnapshotCapture:
        if self._capture is None:
            raise RuntimeError("Snapshot capture required to create backups")
        return self._capture

    @property
    def metadata_path(self) -> Path:
        return self.backup_dir / METADATA_FILE

    def backup_path(self, name: str) -> Path:
        return self.backup_dir / f"backup_{name}.json"

    def index(self) -> MetadataIndex:
        return MetadataIndex.load(self.metadata_path)

    def is_empty(self) -> bool:
        """True when the backup directory is absent or holds no files."""
        if not self.backup_dir.is_dir():
            return True
        return not any(self.backup_dir.iterdir())

    # =========================================================================
    # Core Operations
    # =========================================================================

    def create_backup(
        self,
        name: Optional[str] = None,
        description: str = "",
        created_by: str = CREATED_BY,
    ) -> BackupEntry:
        """
        Capture current settings and record them in the index.

        Args:
            name: Backup name (default: timestamp)
            description: Free-form description stored in the index
            created_by: Tool identifier stored in the index

        Returns:
            The BackupEntry appended to the index
        """
        name = sanitize_name(name or "") or timestamp_name()
        path = self.backup_path(name)
        self.backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = utc_timestamp()
        self.capture.capture_to(path)

        entry = BackupEntry(
            name=name,
            file=path.name,
            timestamp=timestamp,
            description=description,
            created_by=created_by,
        )
        self.index().append(entry)
        return entry

    def auto_backup(self) -> BackupEntry:
        """
        Snapshot taken before apply.

        Named first-run_<ts> when no backup exists yet, pre-apply_<ts> otherwise.
        """
        prefix = self.FIRST_RUN_NAME if self.is_empty() else self.PRE_APPLY_NAME
        return self.create_backup(
            name=f"{prefix}_{timestamp_name()}",
            description="Automatic backup before applying defaults",
            created_by="android-netcfg apply",
        )

    # =========================================================================
    # Query Operations
    # =========================================================================

    def list_backups(self) -> List[BackupEntry]:
        """Index records in insertion order."""
        return list(self.index().backups)

    def find(self, name: str) -> Path:
        """
        Path of the first backup with this name.

        Raises:
            SnapshotNotFoundError: index missing or no record matches
        """
        if not self.metadata_path.is_file():
            raise SnapshotNotFoundError(f"Metadata file not found: {self.metadata_path}")

        entry = self.index().find(name)
        if entry is None:
            raise SnapshotNotFoundError(f"Backup not found with name: {name}")
        return self.backup_dir / entry.file
