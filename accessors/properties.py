"""
System property accessor (getprop / setprop).
"""

from ..errors import InvalidIdentifierError
from .base import Accessor, WriteResult
from .runner import CommandRunner


class SystemPropertyAccessor(Accessor):
    """Reads and writes Android system properties."""

    category_type = "system_properties"
    label = "property"
    expected_format = "property name"

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def validate(self, identifier: str) -> None:
        if not identifier or any(c.isspace() for c in identifier):
            raise InvalidIdentifierError(identifier, self.expected_format)

    @staticmethod
    def is_read_only(identifier: str) -> bool:
        """ro.* properties cannot be changed after boot."""
        return identifier.startswith("ro.")

    def read(self, identifier: str) -> str:
        if not self.runner.available("getprop"):
            return ""
        result = self.runner.run("getprop", identifier)
        if not result.ok:
            return ""
        return result.stdout.strip()

    def _write(self, identifier: str, value: str) -> WriteResult:
        if not self.runner.available("setprop"):
            return self._failed(
                identifier, value,
                f"setprop command not available, skipping property: {identifier}",
            )

        result = self.runner.run("setprop", identifier, value)
        if result.ok:
            return self._applied(identifier, value)

        if self.is_read_only(identifier):
            reason = "read-only property"
        else:
            reason = "may require root or be read-only"
        return self._failed(identifier, value, f"Failed to set property: {identifier} ({reason})")
