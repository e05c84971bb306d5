"""
Accessor base types.

An accessor reads and writes one kind of backing store. Reads never fail:
an unreadable or unset value is "". Writes always produce a WriteResult;
soft failures are data, not exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import InvalidIdentifierError


class WriteOutcome(str, Enum):
    """Result of one write attempt."""
    APPLIED = "APPLIED"           # Value written
    FAILED = "FAILED"             # Soft failure: tool missing, permission, read-only, path missing
    WOULD_APPLY = "WOULD_APPLY"   # Dry-run: validated but not written
    REJECTED = "REJECTED"         # Malformed identifier, no accessor call made


@dataclass
class WriteResult:
    """Outcome of writing one value."""
    identifier: str
    value: str
    outcome: WriteOutcome
    message: str = ""
    method: Optional[str] = None   # e.g. "sysctl", "direct write"

    @property
    def ok(self) -> bool:
        return self.outcome in (WriteOutcome.APPLIED, WriteOutcome.WOULD_APPLY)


class Accessor:
    """
    Base accessor.

    Subclasses implement validate(), read() and _write(). write() handles
    validation and dry-run uniformly so every store goes through the same
    path.
    """

    category_type: str = ""
    label: str = "setting"
    expected_format: str = "identifier"

    def validate(self, identifier: str) -> None:
        """Raise InvalidIdentifierError if the identifier is malformed."""
        if not identifier:
            raise InvalidIdentifierError(identifier, self.expected_format)

    def read(self, identifier: str) -> str:
        raise NotImplementedError

    def describe(self, identifier: str, value: str) -> str:
        """Human-readable description of a write, used for dry-run lines."""
        return f"{identifier} = {value}"

    def write(self, identifier: str, value: str, dry_run: bool = False) -> WriteResult:
        """
        Write a value.

        Args:
            identifier: Accessor-specific key
            value: Value to write (opaque string)
            dry_run: Validate and report without mutating anything

        Returns:
            WriteResult with the outcome
        """
        try:
            self.validate(identifier)
        except InvalidIdentifierError as e:
            return WriteResult(
                identifier=identifier,
                value=value,
                outcome=WriteOutcome.REJECTED,
                message=str(e),
            )

        if dry_run:
            return WriteResult(
                identifier=identifier,
                value=value,
                outcome=WriteOutcome.WOULD_APPLY,
                message=f"Would set {self.label}: {self.describe(identifier, value)}",
            )

        return self._write(identifier, value)

    def _write(self, identifier: str, value: str) -> WriteResult:
        raise NotImplementedError

    def _applied(self, identifier: str, value: str, method: Optional[str] = None) -> WriteResult:
        suffix = f" via {method}" if method else ""
        return WriteResult(
            identifier=identifier,
            value=value,
            outcome=WriteOutcome.APPLIED,
            message=f"Successfully set {self.label}{suffix}: {identifier}",
            method=method,
        )

    def _failed(self, identifier: str, value: str, message: str) -> WriteResult:
        return WriteResult(
            identifier=identifier,
            value=value,
            outcome=WriteOutcome.FAILED,
            message=message,
        )
