"""
Environment variable accessor.

Writes only affect this process and its children; nothing persists after
the run.
"""

import os
from typing import MutableMapping, Optional

from ..errors import InvalidIdentifierError
from .base import Accessor, WriteResult


PERSISTENCE_WARNING = "Environment variables are session-specific and may not persist"


class EnvironmentAccessor(Accessor):
    """Reads and exports environment variables."""

    category_type = "environment_variables"
    label = "environment variable"
    expected_format = "variable name"

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def validate(self, identifier: str) -> None:
        if not identifier or "=" in identifier or "\0" in identifier:
            raise InvalidIdentifierError(identifier, self.expected_format)

    def read(self, identifier: str) -> str:
        return self.environ.get(identifier, "")

    def _write(self, identifier: str, value: str) -> WriteResult:
        try:
            self.environ[identifier] = value
        except (OSError, ValueError) as e:
            return self._failed(identifier, value, f"Failed to set environment variable: {identifier} ({e})")
        return self._applied(identifier, value)
