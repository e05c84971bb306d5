"""
Snapshot/Restore system for android-netcfg.

Captures the current value of every schema-defined setting into a
timestamped JSON file, records it in the backup directory's metadata index,
and writes captured values back on restore.

- Automatic backup before apply (first-run / pre-apply)
- Named manual backups
- Restore by file path or by name through the index
- Dry-run preview before restore
"""

from .models import Snapshot, SnapshotGroup, SnapshotRecord, BackupEntry, resolve_group
from .index import MetadataIndex, METADATA_FILE, INDEX_VERSION, atomic_write_text
from .capture import SnapshotCapture
from .restore import SnapshotRestore
from .manager import BackupManager

__all__ = [
    'Snapshot',
    'SnapshotGroup',
    'SnapshotRecord',
    'BackupEntry',
    'resolve_group',
    'MetadataIndex',
    'METADATA_FILE',
    'INDEX_VERSION',
    'atomic_write_text',
    'SnapshotCapture',
    'SnapshotRestore',
    'BackupManager',
]
