"""
Apply engine - writes every applyable schema default into its backing store.

Phases:
1. CONFIRM - ask the user unless dry-run or --yes
2. BACKUP  - automatic snapshot unless dry-run or disabled
3. APPLY   - one write per applyable setting, in catalog order

No retries and no rollback: a failed write is logged and the run continues.
"""

from typing import Callable, Dict, Optional, TYPE_CHECKING

from ..accessors import Accessor, WriteOutcome, WriteResult, PERSISTENCE_WARNING
from ..errors import NetcfgError
from ..schema.catalog import Catalog, CATEGORY_TITLES
from ..schema.reader import CATEGORY_TYPES
from ..ui.console import ConsoleUI
from .results import SyncResult

if TYPE_CHECKING:
    from ..snapshot.manager import BackupManager


def log_write(ui: ConsoleUI, result: WriteResult):
    """Log one write result at the level its outcome calls for."""
    if result.outcome == WriteOutcome.APPLIED:
        ui.verbose(result.message)
    elif result.outcome == WriteOutcome.WOULD_APPLY:
        ui.dry_run(result.message)
    else:
        ui.warn(result.message)


class ApplyEngine:
    """Applies schema defaults through the accessor layer."""

    def __init__(
        self,
        catalog: Catalog,
        accessors: Dict[str, Accessor],
        ui: Optional[ConsoleUI] = None,
        backup_manager: Optional["BackupManager"] = None,
    ):
        self.catalog = catalog
        self.accessors = accessors
        self.ui = ui or ConsoleUI()
        self.backup_manager = backup_manager

    def run(
        self,
        dry_run: bool = False,
        assume_yes: bool = False,
        category_name: Optional[str] = None,
        confirm: Optional[Callable[[], bool]] = None,
    ) -> SyncResult:
        """
        Apply defaults.

        Args:
            dry_run: Report what would be written without writing
            assume_yes: Skip the confirmation gate
            category_name: Only apply this category name
            confirm: Callable returning True to proceed (the gate)

        Returns:
            SyncResult; cancelled=True if the user declined
        """
        result = SyncResult(dry_run=dry_run)

        if dry_run:
            self.ui.warn("Running in DRY-RUN mode - no changes will be made")
        elif not assume_yes and confirm is not None:
            if not confirm():
                self.ui.info("Apply cancelled by user. No changes were made.")
                result.cancelled = True
                return result

        if not dry_run:
            result.backup_file = self._auto_backup()

        for category_type in CATEGORY_TYPES:
            self._apply_category_type(category_type, result, dry_run, category_name)

        return result

    def _auto_backup(self) -> str:
        """Snapshot current state before changing it. Failure never aborts."""
        if self.backup_manager is None:
            return ""

        self.ui.info("Creating automatic backup of current settings...")
        try:
            entry = self.backup_manager.auto_backup()
        except (NetcfgError, OSError) as e:
            self.ui.error(f"Automatic backup failed: {e}")
            self.ui.warn("Continuing without a backup")
            return ""

        self.ui.info(f"Backup saved: {entry.file} (name: {entry.name})")
        return entry.file

    def _apply_category_type(
        self,
        category_type: str,
        result: SyncResult,
        dry_run: bool,
        category_name: Optional[str],
    ):
        title = CATEGORY_TITLES[category_type].lower()
        self.ui.info(f"Processing {title}...")

        names = self.catalog.category_names(category_type)
        if not names:
            self.ui.warn(f"No {title} found in configuration")
            return

        accessor = self.accessors[category_type]
        wrote_any = False

        for name in names:
            if category_name and name != category_name:
                continue
            self.ui.verbose(f"Processing category: {name}")

            for descriptor in self.catalog.settings(category_type, name):
                if not descriptor.applyable:
                    self.ui.verbose(f"Skipping {accessor.label} without default value: {descriptor.key}")
                    result.skip(category_type)
                    continue

                self.ui.verbose(
                    f"Applying {accessor.label}: {descriptor.key} = {descriptor.default} ({descriptor.description})"
                )
                write = accessor.write(descriptor.key, descriptor.default, dry_run=dry_run)
                log_write(self.ui, write)
                result.record(category_type, write)
                wrote_any = wrote_any or write.outcome == WriteOutcome.APPLIED

        if category_type == "environment_variables" and wrote_any:
            self.ui.warn(f"Note: {PERSISTENCE_WARNING}")
