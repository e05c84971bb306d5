"""
Synchronization engines - apply schema defaults and read current values.

Restore lives with the snapshot code in snapshot/restore.py.
"""

from .results import OutcomeCounts, SyncResult
from .read import ReadEngine, ReadReport, SettingGroup, SettingReading, utc_timestamp
from .apply import ApplyEngine, log_write

__all__ = [
    'OutcomeCounts',
    'SyncResult',
    'ReadEngine',
    'ReadReport',
    'SettingGroup',
    'SettingReading',
    'ApplyEngine',
    'log_write',
    'utc_timestamp',
]
