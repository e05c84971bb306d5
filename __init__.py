"""
android_netcfg - Android network configuration sync tool

Reads, applies, backs up and restores Android networking configuration
(system properties, kernel sysctl parameters, environment variables and
Settings-database entries) described by a JSON schema.

Usage:
    # As a module
    python -m android_netcfg read -s

    # Programmatically
    from android_netcfg import Catalog, ReadEngine, build_accessors

    catalog = Catalog.load("android-network-keys.json")
    report = ReadEngine(catalog, build_accessors()).collect(compare=True)
"""

__version__ = "1.0.0"

# Schema exports
from .schema import SchemaReader, Catalog, SettingDescriptor, CATEGORY_TYPES

# Accessor exports
from .accessors import build_accessors, CommandRunner, WriteOutcome, WriteResult

# Engine exports
from .sync import ApplyEngine, ReadEngine, ReadReport, SyncResult

# Snapshot exports
from .snapshot import BackupManager, MetadataIndex, Snapshot, SnapshotCapture, SnapshotRestore

# Config / errors
from .config import Config
from .errors import NetcfgError, SchemaError, SnapshotError, MetadataError

__all__ = [
    # Version
    "__version__",
    # Schema
    "SchemaReader",
    "Catalog",
    "SettingDescriptor",
    "CATEGORY_TYPES",
    # Accessors
    "build_accessors",
    "CommandRunner",
    "WriteOutcome",
    "WriteResult",
    # Engines
    "ApplyEngine",
    "ReadEngine",
    "ReadReport",
    "SyncResult",
    # Snapshots
    "BackupManager",
    "MetadataIndex",
    "Snapshot",
    "SnapshotCapture",
    "SnapshotRestore",
    # Config / errors
    "Config",
    "NetcfgError",
    "SchemaError",
    "SnapshotError",
    "MetadataError",
]
