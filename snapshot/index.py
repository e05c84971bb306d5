"""
Metadata index - the ordered list of backups taken in a backup directory.

The file is loaded as a structured document, the new record appended, and
the whole document written to a temp file in the same directory and renamed
over the original. A crash mid-write leaves the previous index intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import MetadataError
from .models import BackupEntry


METADATA_FILE = "metadata.json"
INDEX_VERSION = "1.0"


def current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def atomic_write_text(path: Path, content: str) -> None:
    """Write content to path via temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; give the file the mode open() would have
        os.chmod(tmp_name, 0o666 & ~current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class MetadataIndex:
    """
    {version, backups: [...]} with first-match name lookup.
    """

    def __init__(self, path: Path, version: Any = INDEX_VERSION, backups: Optional[List[BackupEntry]] = None):
        self.path = Path(path)
        self.version = version
        self.backups: List[BackupEntry] = list(backups or [])
        # Top-level fields other than version/backups, kept as found
        self._extra: Dict[str, Any] = {}

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    @classmethod
    def load(cls, path: Path) -> "MetadataIndex":
        """
        Load an index; a missing file gives an empty index.

        Raises:
            MetadataError: file exists but is not a valid index
        """
        path = Path(path)
        if not path.is_file():
            return cls(path)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise MetadataError(f"Metadata file not readable: {path} ({e.strerror})")
        except json.JSONDecodeError as e:
            raise MetadataError(f"Metadata file is corrupt: {path} (line {e.lineno}: {e.msg})")

        if not isinstance(data, dict):
            raise MetadataError(f"Metadata file must contain a JSON object: {path}")

        raw_backups = data.get("backups", [])
        if not isinstance(raw_backups, list) or not all(isinstance(b, dict) for b in raw_backups):
            raise MetadataError(f"Metadata 'backups' must be a list of objects: {path}")

        index = cls(
            path,
            version=data.get("version", INDEX_VERSION),
            backups=[BackupEntry.from_dict(b) for b in raw_backups],
        )
        index._extra = {k: v for k, v in data.items() if k not in ("version", "backups")}
        return index

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version}
        data.update(self._extra)
        data["backups"] = [b.to_dict() for b in self.backups]
        return data

    def save(self) -> None:
        try:
            atomic_write_text(self.path, json.dumps(self.to_dict(), indent=2) + "\n")
        except OSError as e:
            raise MetadataError(f"Failed to write metadata file: {self.path} ({e.strerror})")

    def append(self, entry: BackupEntry) -> None:
        """Append a record and rewrite the index."""
        self.backups.append(entry)
        self.save()

    def find(self, name: str) -> Optional[BackupEntry]:
        """First record with this name, or None."""
        for entry in self.backups:
            if entry.name == name:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.backups)
