"""
Exception types for android-netcfg.

Fatal conditions raise one of these and abort the run. Per-setting accessor
failures are never raised; they come back as WriteResult objects instead.
"""

from typing import Optional


class NetcfgError(Exception):
    """Base class for all fatal android-netcfg errors."""
    pass


class ConfigError(NetcfgError):
    """Configuration file could not be loaded or is invalid."""
    pass


class SchemaError(NetcfgError):
    """Schema document is missing, unreadable or does not match the restricted shape."""

    def __init__(self, message: str, path: Optional[str] = None, location: Optional[str] = None):
        self.path = path
        self.location = location
        parts = [message]
        if location:
            parts.append(f"at {location}")
        if path:
            parts.append(f"in {path}")
        super().__init__(" ".join(parts))


class SnapshotError(NetcfgError):
    """Snapshot could not be captured, written or parsed."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """No snapshot matches the requested name or path."""
    pass


class MetadataError(NetcfgError):
    """Metadata index is corrupt or could not be written."""
    pass


class InvalidIdentifierError(NetcfgError):
    """Setting identifier does not match the shape its accessor expects."""

    def __init__(self, identifier: str, expected: str):
        self.identifier = identifier
        self.expected = expected
        super().__init__(f"Invalid identifier '{identifier}' (expected: {expected})")
