"""
Snapshot restore - writes the captured 'current' values back.

The snapshot is not cross-checked against the current schema: anything in
the snapshot is restored, anything missing from it is left alone.
"""

from typing import Callable, Dict, Optional

from ..accessors import Accessor, PERSISTENCE_WARNING
from ..schema.catalog import CATEGORY_TITLES
from ..schema.reader import CATEGORY_TYPES
from ..sync.apply import log_write
from ..sync.results import SyncResult
from ..ui.console import ConsoleUI
from .models import Snapshot


class SnapshotRestore:
    """Restores settings from a Snapshot through the accessor layer."""

    def __init__(self, accessors: Dict[str, Accessor], ui: Optional[ConsoleUI] = None):
        self.accessors = accessors
        self.ui = ui or ConsoleUI()

    def restore(
        self,
        snapshot: Snapshot,
        dry_run: bool = False,
        assume_yes: bool = False,
        confirm: Optional[Callable[[], bool]] = None,
    ) -> SyncResult:
        """
        Restore a snapshot.

        Args:
            snapshot: Parsed snapshot
            dry_run: Report what would be written without writing
            assume_yes: Skip the confirmation gate
            confirm: Callable returning True to proceed

        Returns:
            SyncResult with per-category-type counts
        """
        result = SyncResult(dry_run=dry_run)

        if dry_run:
            self.ui.warn("Running in DRY-RUN mode - no changes will be made")
        elif not assume_yes and confirm is not None:
            if not confirm():
                self.ui.info("Restoration cancelled by user.")
                result.cancelled = True
                return result
            self.ui.info("Proceeding with restoration...")

        if snapshot.timestamp:
            self.ui.info(f"Backup timestamp: {snapshot.timestamp}")

        # Bucket groups by category type, keeping snapshot order within each
        by_type = {ctype: [] for ctype in CATEGORY_TYPES}
        for group in snapshot.groups:
            resolved = group.category
            if resolved is None:
                self.ui.warn(f"Skipping unknown snapshot group: {group.group_key}")
                continue
            by_type[resolved[0]].append(group)

        for category_type in CATEGORY_TYPES:
            self._restore_category_type(category_type, by_type[category_type], result, dry_run)

        return result

    def _restore_category_type(self, category_type: str, groups, result: SyncResult, dry_run: bool):
        title = CATEGORY_TITLES[category_type].lower()
        self.ui.info(f"Restoring {title}...")
        if category_type == "environment_variables":
            self.ui.warn(f"Note: {PERSISTENCE_WARNING}")

        accessor = self.accessors[category_type]
        for group in groups:
            for record in group.records:
                if not record.current:
                    self.ui.verbose(f"Skipping {accessor.label} with empty captured value: {record.key}")
                    result.skip(category_type)
                    continue

                self.ui.verbose(f"Setting {accessor.label}: {record.key} = {record.current}")
                write = accessor.write(record.key, record.current, dry_run=dry_run)
                log_write(self.ui, write)
                result.record(category_type, write)

        counts = result.counts.get(category_type)
        processed = counts.processed if counts else 0
        self.ui.info(f"Processed {processed} {title}")
        if counts and counts.failures:
            self.ui.warn(f"{counts.failures} {title} failed to apply")
