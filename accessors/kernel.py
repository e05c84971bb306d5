"""
Kernel parameter accessor (/proc/sys files, sysctl).
"""

import os
from pathlib import Path
from typing import Optional

from ..errors import InvalidIdentifierError
from .base import Accessor, WriteResult
from .runner import CommandRunner


PROC_SYS = "/proc/sys/"
DEFAULT_PROC_ROOT = "/proc/sys/net"


def sysctl_key(path: str) -> str:
    """/proc/sys/net/ipv4/ip_forward -> net.ipv4.ip_forward"""
    return path[len(PROC_SYS):].replace("/", ".")


class KernelParameterAccessor(Accessor):
    """
    Reads kernel parameters from their /proc/sys file.

    Writes try `sysctl -w` first for /proc/sys paths and fall back to writing
    the file directly. Only paths under proc_root are accepted, so a schema or
    snapshot cannot point a write at an arbitrary file.
    """

    category_type = "kernel_parameters"
    label = "kernel parameter"

    def __init__(self, runner: CommandRunner, proc_root: Optional[str] = None):
        self.runner = runner
        self.proc_root = (proc_root or DEFAULT_PROC_ROOT).rstrip("/")
        self.expected_format = f"absolute path under {self.proc_root}/"

    def is_allowed(self, identifier: str) -> bool:
        """Absolute path strictly inside proc_root, with no '..' components."""
        if not identifier or not identifier.startswith(self.proc_root + "/"):
            return False
        return ".." not in Path(identifier).parts

    def validate(self, identifier: str) -> None:
        if not self.is_allowed(identifier):
            raise InvalidIdentifierError(identifier, self.expected_format)

    def read(self, identifier: str) -> str:
        if not self.is_allowed(identifier):
            return ""
        path = Path(identifier)
        if not path.is_file() or not os.access(path, os.R_OK):
            return ""
        try:
            return path.read_text().strip()
        except OSError:
            return ""

    def _write(self, identifier: str, value: str) -> WriteResult:
        path = Path(identifier)
        if not path.is_file():
            return self._failed(identifier, value, f"Kernel parameter path not found: {identifier}")

        if identifier.startswith(PROC_SYS) and self.runner.available("sysctl"):
            result = self.runner.run("sysctl", "-w", f"{sysctl_key(identifier)}={value}")
            if result.ok:
                return self._applied(identifier, value, method="sysctl")

        try:
            with open(path, "w") as f:
                f.write(f"{value}\n")
        except OSError:
            return self._failed(identifier, value, f"Failed to set kernel parameter: {identifier} (may require root)")

        return self._applied(identifier, value, method="direct write")
