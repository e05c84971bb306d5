"""
Mock command runner for testing.

Simulates getprop/setprop/settings/sysctl against in-memory state so the
accessors can be exercised without an Android device.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from android_netcfg.accessors import CommandRunner, CommandResult

from .golden_data import device_properties, device_settings


ALL_TOOLS = ("getprop", "setprop", "sysctl", "settings")

MUTATING = {
    ("setprop",),
    ("settings", "put"),
    ("sysctl", "-w"),
}


class FakeCommandRunner(CommandRunner):
    """In-memory stand-in for the Android shell tools.

    Every call is recorded in `calls`. Tools not in `tools` report as
    unavailable. Identifiers in `failing` make the corresponding write exit
    non-zero, and so do ro.* properties.
    """

    def __init__(
        self,
        properties: Optional[Dict[str, str]] = None,
        settings: Optional[Dict[Tuple[str, str], str]] = None,
        tools: Iterable[str] = ALL_TOOLS,
        failing: Iterable[str] = (),
    ):
        super().__init__()
        self.properties = device_properties() if properties is None else dict(properties)
        self.settings = device_settings() if settings is None else dict(settings)
        self.tools: Set[str] = set(tools)
        self.failing: Set[str] = set(failing)
        self.calls: List[List[str]] = []

    def available(self, tool: str) -> bool:
        return tool in self.tools

    @property
    def writes(self) -> List[List[str]]:
        """Calls that would have mutated device state."""
        return [
            c for c in self.calls
            if tuple(c[:1]) in MUTATING or tuple(c[:2]) in MUTATING
        ]

    def run(self, tool: str, *args: str) -> CommandResult:
        cmd = [tool, *args]
        self.calls.append(cmd)

        if tool not in self.tools:
            return CommandResult(args=cmd, returncode=127, stderr=f"{tool}: not found")

        if tool == "getprop":
            return CommandResult(args=cmd, returncode=0, stdout=self.properties.get(args[0], "") + "\n")

        if tool == "setprop":
            key, value = args
            if key in self.failing or key.startswith("ro."):
                return CommandResult(args=cmd, returncode=1, stderr="setprop: failed to set property")
            self.properties[key] = value
            return CommandResult(args=cmd, returncode=0)

        if tool == "settings":
            verb, namespace, key = args[:3]
            if verb == "get":
                return CommandResult(args=cmd, returncode=0, stdout=self.settings.get((namespace, key), "null") + "\n")
            if f"settings.{namespace}.{key}" in self.failing:
                return CommandResult(args=cmd, returncode=255, stderr="Security exception")
            self.settings[(namespace, key)] = args[3]
            return CommandResult(args=cmd, returncode=0)

        if tool == "sysctl":
            assignment = args[-1]
            key = assignment.split("=", 1)[0]
            if key in self.failing:
                return CommandResult(args=cmd, returncode=1, stderr="sysctl: permission denied")
            return CommandResult(args=cmd, returncode=0)

        return CommandResult(args=cmd, returncode=127, stderr=f"{tool}: not found")
