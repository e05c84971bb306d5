"""
Accessor layer - uniform read/write over the four Android backing stores.
"""

from typing import Dict, MutableMapping, Optional

from .base import Accessor, WriteOutcome, WriteResult
from .runner import CommandRunner, CommandResult
from .properties import SystemPropertyAccessor
from .kernel import KernelParameterAccessor, DEFAULT_PROC_ROOT, sysctl_key
from .environment import EnvironmentAccessor, PERSISTENCE_WARNING
from .settings import AndroidSettingAccessor, split_identifier


def build_accessors(
    runner: Optional[CommandRunner] = None,
    environ: Optional[MutableMapping[str, str]] = None,
    proc_root: Optional[str] = None,
) -> Dict[str, Accessor]:
    """Create one accessor per category type. Kernel parameters are confined to proc_root."""
    runner = runner or CommandRunner()
    return {
        "system_properties": SystemPropertyAccessor(runner),
        "kernel_parameters": KernelParameterAccessor(runner, proc_root),
        "environment_variables": EnvironmentAccessor(environ),
        "android_specific": AndroidSettingAccessor(runner),
    }


__all__ = [
    'Accessor',
    'WriteOutcome',
    'WriteResult',
    'CommandRunner',
    'CommandResult',
    'SystemPropertyAccessor',
    'KernelParameterAccessor',
    'EnvironmentAccessor',
    'AndroidSettingAccessor',
    'PERSISTENCE_WARNING',
    'DEFAULT_PROC_ROOT',
    'build_accessors',
    'split_identifier',
    'sysctl_key',
]
