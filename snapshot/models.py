"""
Data models for snapshots and the backup metadata index.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from ..errors import SnapshotError
from ..schema.catalog import CATEGORY_LABELS


# Snapshot group prefixes -> category type. Full type names are accepted too.
GROUP_PREFIXES = {label: ctype for ctype, label in CATEGORY_LABELS.items()}
GROUP_PREFIXES.update({ctype: ctype for ctype in CATEGORY_LABELS})


def resolve_group(group_key: str) -> Optional[tuple]:
    """
    Split a snapshot group key into (category_type, category_name).

    'system_property_wifi' -> ('system_properties', 'wifi')
    Returns None when no known prefix matches.
    """
    # Longest prefix first so 'system_properties_x' is not read as 'system_property' + ...
    for prefix in sorted(GROUP_PREFIXES, key=len, reverse=True):
        if group_key.startswith(prefix + "_"):
            return GROUP_PREFIXES[prefix], group_key[len(prefix) + 1:]
    return None


@dataclass
class SnapshotRecord:
    """One setting as captured in a snapshot."""
    key: str
    current: str
    default: str = ""
    description: str = ""
    matches_default: Optional[bool] = None


@dataclass
class SnapshotGroup:
    """One '<label>_<category_name>' block of a snapshot."""
    group_key: str
    records: List[SnapshotRecord] = field(default_factory=list)

    @property
    def category(self) -> Optional[tuple]:
        return resolve_group(self.group_key)


@dataclass
class Snapshot:
    """Point-in-time capture of current values. Immutable once written."""
    timestamp: str
    groups: List[SnapshotGroup] = field(default_factory=list)
    path: Optional[str] = None

    @property
    def setting_count(self) -> int:
        return sum(len(g.records) for g in self.groups)

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> "Snapshot":
        """
        Parse and validate a snapshot document.

        Raises:
            SnapshotError: document does not have the snapshot shape
        """
        where = f" in {path}" if path else ""
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot must be a JSON object{where}")

        settings = data.get("network_settings")
        if not isinstance(settings, dict):
            raise SnapshotError(f"Snapshot has no 'network_settings' object{where}")

        groups = []
        for group_key, entries in settings.items():
            if not isinstance(entries, dict):
                raise SnapshotError(f"Snapshot group '{group_key}' must be an object{where}")

            group = SnapshotGroup(group_key=group_key)
            for key, record in entries.items():
                if not isinstance(record, dict):
                    raise SnapshotError(f"Snapshot entry '{group_key}.{key}' must be an object{where}")
                current = record.get("current", "")
                if current is None:
                    current = ""
                if not isinstance(current, str):
                    raise SnapshotError(f"Snapshot entry '{group_key}.{key}' has a non-string 'current'{where}")
                group.records.append(SnapshotRecord(
                    key=key,
                    current=current,
                    default=str(record.get("default") or ""),
                    description=str(record.get("description") or ""),
                    matches_default=record.get("matches_default"),
                ))
            groups.append(group)

        return cls(timestamp=str(data.get("timestamp", "")), groups=groups, path=path)

    @classmethod
    def load(cls, path: Path) -> "Snapshot":
        """Load a snapshot file."""
        path = Path(path)
        if not path.is_file():
            raise SnapshotError(f"Backup file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise SnapshotError(f"Backup file not readable: {path} ({e.strerror})")
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Backup file is not valid JSON: {path} (line {e.lineno}: {e.msg})")
        return cls.from_dict(data, path=str(path))


@dataclass
class BackupEntry:
    """One record of the metadata index."""
    name: str
    file: str
    timestamp: str
    description: str = ""
    created_by: str = "android-netcfg"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackupEntry":
        return cls(
            name=str(data.get("name", "")),
            file=str(data.get("file", "")),
            timestamp=str(data.get("timestamp", "")),
            description=str(data.get("description") or ""),
            created_by=str(data.get("created_by") or ""),
        )
