"""
CommandRunner - thin subprocess wrapper for the Android shell tools.

Every external command the accessors issue goes through here so tests can
substitute a fake runner.
"""

import shutil
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class CommandResult:
    """Outcome of one external command."""
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs local commands and remembers which tools exist."""

    def __init__(self, tool_paths: Optional[Dict[str, str]] = None):
        """
        Args:
            tool_paths: Optional mapping of tool name -> binary to invoke
                        (e.g. {"settings": "/system/bin/settings"})
        """
        self.tool_paths = dict(tool_paths or {})
        self._available: Dict[str, bool] = {}

    def resolve(self, tool: str) -> str:
        return self.tool_paths.get(tool, tool)

    def available(self, tool: str) -> bool:
        """Check whether a tool can be found on PATH (cached per runner)."""
        if tool not in self._available:
            self._available[tool] = shutil.which(self.resolve(tool)) is not None
        return self._available[tool]

    def run(self, tool: str, *args: str) -> CommandResult:
        """
        Run a tool with arguments.

        Never raises for command failures: a missing binary or OSError comes
        back as returncode 127 with the error text in stderr.
        """
        cmd = [self.resolve(tool), *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            return CommandResult(args=cmd, returncode=127, stderr=str(e))

        return CommandResult(
            args=cmd,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
