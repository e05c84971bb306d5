"""
Result containers shared by the apply and restore engines.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..accessors import WriteOutcome, WriteResult


@dataclass
class OutcomeCounts:
    """Tally of write outcomes."""
    applied: int = 0
    failed: int = 0
    would_apply: int = 0
    rejected: int = 0
    skipped: int = 0

    def record(self, result: WriteResult):
        if result.outcome == WriteOutcome.APPLIED:
            self.applied += 1
        elif result.outcome == WriteOutcome.FAILED:
            self.failed += 1
        elif result.outcome == WriteOutcome.WOULD_APPLY:
            self.would_apply += 1
        elif result.outcome == WriteOutcome.REJECTED:
            self.rejected += 1

    @property
    def processed(self) -> int:
        """Writes attempted (or simulated), excluding skips."""
        return self.applied + self.failed + self.would_apply + self.rejected

    @property
    def failures(self) -> int:
        return self.failed + self.rejected


@dataclass
class SyncResult:
    """Outcome of an apply or restore run."""
    dry_run: bool = False
    cancelled: bool = False
    results: List[WriteResult] = field(default_factory=list)
    counts: Dict[str, OutcomeCounts] = field(default_factory=dict)
    backup_file: str = ""

    def record(self, category_type: str, result: WriteResult):
        self.results.append(result)
        self.counts.setdefault(category_type, OutcomeCounts()).record(result)

    def skip(self, category_type: str):
        self.counts.setdefault(category_type, OutcomeCounts()).skipped += 1

    def total(self) -> OutcomeCounts:
        total = OutcomeCounts()
        for c in self.counts.values():
            total.applied += c.applied
            total.failed += c.failed
            total.would_apply += c.would_apply
            total.rejected += c.rejected
            total.skipped += c.skipped
        return total

    @property
    def failures(self) -> int:
        return self.total().failures
