"""
Android Settings accessor (settings get / settings put).

Identifiers have the form settings.<namespace>.<key>, where namespace is
global, system or secure and key may itself contain dots.
"""

from typing import Tuple

from ..errors import InvalidIdentifierError
from .base import Accessor, WriteResult
from .runner import CommandRunner


def split_identifier(identifier: str) -> Tuple[str, str]:
    """
    Split 'settings.global.wifi_on' into ('global', 'wifi_on').

    Raises:
        InvalidIdentifierError: not three parts, empty parts, or namespace == key
    """
    parts = identifier.split(".", 2)
    if len(parts) != 3 or parts[0] != "settings":
        raise InvalidIdentifierError(identifier, AndroidSettingAccessor.expected_format)

    namespace, key = parts[1], parts[2]
    if not namespace or not key or namespace == key:
        raise InvalidIdentifierError(identifier, AndroidSettingAccessor.expected_format)
    return namespace, key


class AndroidSettingAccessor(Accessor):
    """Reads and writes the Android Settings provider."""

    category_type = "android_specific"
    label = "Android setting"
    expected_format = "settings.namespace.key with all parts present"

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def validate(self, identifier: str) -> None:
        split_identifier(identifier)

    def describe(self, identifier: str, value: str) -> str:
        namespace, key = split_identifier(identifier)
        return f"settings put {namespace} {key} {value}"

    def read(self, identifier: str) -> str:
        namespace, key = split_identifier(identifier)
        if not self.runner.available("settings"):
            return ""
        result = self.runner.run("settings", "get", namespace, key)
        if not result.ok:
            return ""
        value = result.stdout.strip()
        return "" if value == "null" else value

    def _write(self, identifier: str, value: str) -> WriteResult:
        namespace, key = split_identifier(identifier)
        if not self.runner.available("settings"):
            return self._failed(
                identifier, value,
                f"settings command not available, skipping: {namespace}/{key}",
            )

        result = self.runner.run("settings", "put", namespace, key, value)
        if result.ok:
            return self._applied(identifier, value)
        return self._failed(
            identifier, value,
            f"Failed to set Android setting: {namespace}/{key} (may require permissions)",
        )
