"""
Mock components for testing android-netcfg.

These mocks simulate the Android shell tools and the console so that the
engines can be exercised against the golden schema (golden_data.py)
without a device or root access.
"""

from .golden_data import (
    APPLYABLE_COUNT,
    SKIPPED_COUNT,
    DEVICE_PROPERTIES,
    DEVICE_SETTINGS,
    DEVICE_ENVIRON,
    PROC_VALUES,
    build_schema,
    make_proc_tree,
    write_schema,
    device_environ,
)

from .mock_runner import FakeCommandRunner, ALL_TOOLS
from .mock_console import RecordingConsoleUI

__all__ = [
    # Runner and console mocks
    'FakeCommandRunner',
    'RecordingConsoleUI',
    'ALL_TOOLS',
    # Golden data
    'APPLYABLE_COUNT',
    'SKIPPED_COUNT',
    'DEVICE_PROPERTIES',
    'DEVICE_SETTINGS',
    'DEVICE_ENVIRON',
    'PROC_VALUES',
    'build_schema',
    'make_proc_tree',
    'write_schema',
    'device_environ',
]
