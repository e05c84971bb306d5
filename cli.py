"""
CLI - Command-line interface for android-netcfg.

Subcommands:
    apply        Apply schema defaults (auto-backup, confirmation, dry-run)
    read         Show current values, optionally compared with defaults
    backup       Capture current values into a named backup
    restore      Restore a backup by file or name, or list backups
    init-config  Write an example config file
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.markup import escape
from rich.table import Table

from . import __version__
from .accessors import CommandRunner, build_accessors
from .config import Config, create_example_config
from .errors import NetcfgError
from .schema import Catalog
from .snapshot import BackupManager, Snapshot, SnapshotCapture, SnapshotRestore
from .sync import ApplyEngine, ReadEngine, SyncResult
from .ui import ConsoleUI, InteractionManager, ResultDisplay, OUTPUT_FORMATS


EXIT_OK = 0
EXIT_FATAL = 1


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        metavar="PATH",
        help="Config file (default: ./android-netcfg.toml or ~/.config/android-netcfg/config.toml)"
    )
    common.add_argument(
        "-f", "--file",
        metavar="PATH",
        help="Path to JSON schema file (default: android-network-keys.json)"
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="Enable verbose output"
    )
    common.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=None,
        help="Only print warnings, errors and data"
    )
    return common


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    common = _common_parser()

    parser = argparse.ArgumentParser(
        prog="android-netcfg",
        description="Read, apply, back up and restore Android network settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Dry run to see what would be applied
    android-netcfg apply -d

    # Apply defaults without prompting
    android-netcfg apply -y

    # Compare current WiFi values with defaults
    android-netcfg read -c wifi -s

    # Backup with a name and description
    android-netcfg backup -n pre-update -d "Before system update"

    # Restore by name (dry run first)
    android-netcfg restore -n pre-update -d
    android-netcfg restore -l

Environment Variables:
    NETCFG_SCHEMA       Schema file path
    NETCFG_BACKUP_DIR   Backup directory
    NETCFG_PROC_ROOT    Directory kernel parameters must live under
    NETCFG_VERBOSE      Enable verbose output (1/true/yes)
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # ==================== apply ====================
    apply_p = sub.add_parser("apply", parents=[common], help="Apply default settings from the schema")
    apply_p.add_argument(
        "-c", "--category",
        metavar="NAME",
        help="Apply only one category name (e.g. wifi, dns)"
    )
    apply_p.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Show what would be applied without making changes"
    )
    apply_p.add_argument(
        "-y", "--yes",
        action="store_true",
        default=None,
        help="Skip confirmation prompt"
    )
    apply_p.add_argument(
        "-b", "--backup-dir",
        metavar="PATH",
        help="Directory for the automatic backup (default: ./backups)"
    )
    apply_p.add_argument(
        "--no-backup",
        action="store_true",
        default=None,
        help="Do not create an automatic backup before applying"
    )

    # ==================== read ====================
    read_p = sub.add_parser("read", parents=[common], help="Read current network settings")
    read_p.add_argument(
        "-o", "--output",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: table)"
    )
    read_p.add_argument(
        "-c", "--category",
        metavar="NAME",
        help="Filter by category name (e.g. wifi, dns, proxy)"
    )
    read_p.add_argument(
        "-s", "--compare-defaults",
        action="store_true",
        help="Compare current values against defaults"
    )

    # ==================== backup ====================
    backup_p = sub.add_parser("backup", parents=[common], help="Backup current network settings")
    backup_p.add_argument(
        "-o", "--output",
        dest="backup_dir",
        metavar="PATH",
        help="Output directory for backups (default: ./backups)"
    )
    backup_p.add_argument(
        "-n", "--name",
        help="Backup name (default: timestamp)"
    )
    backup_p.add_argument(
        "-d", "--description",
        default="",
        help="Description stored in the metadata index"
    )

    # ==================== restore ====================
    restore_p = sub.add_parser("restore", parents=[common], help="Restore network settings from a backup")
    target = restore_p.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "-i", "--input",
        dest="backup_file",
        metavar="PATH",
        help="Backup file to restore"
    )
    target.add_argument(
        "-n", "--name",
        help="Restore backup by name (first match in the index)"
    )
    target.add_argument(
        "-l", "--list",
        action="store_true",
        help="List available backups"
    )
    restore_p.add_argument(
        "-b", "--backup-dir",
        metavar="PATH",
        help="Backup directory (default: ./backups)"
    )
    restore_p.add_argument(
        "-y", "--yes",
        action="store_true",
        default=None,
        help="Skip confirmation prompt"
    )
    restore_p.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Show what would be restored without applying"
    )

    # ==================== init-config ====================
    init_p = sub.add_parser("init-config", help="Write an example config file")
    init_p.add_argument(
        "path",
        nargs="?",
        default="android-netcfg.toml",
        help="Where to write the config (default: android-netcfg.toml)"
    )

    return parser.parse_args(argv)


class NetcfgApp:
    """Wires config, console and engines together for one CLI invocation."""

    def __init__(self, config: Config, ui: ConsoleUI, runner: Optional[CommandRunner] = None, environ=None):
        self.config = config
        self.ui = ui
        self.runner = runner or CommandRunner(config.tools.as_mapping())
        self.accessors = build_accessors(self.runner, environ, config.paths.proc_root)
        self.interaction = InteractionManager(ui.err_console)

    def load_catalog(self) -> Catalog:
        catalog = Catalog.load(self.config.paths.schema)
        self.ui.verbose(f"Loaded {len(catalog)} settings from {self.config.paths.schema}")
        return catalog

    def backup_manager(self, catalog: Catalog) -> BackupManager:
        capture = SnapshotCapture(ReadEngine(catalog, self.accessors, self.ui))
        return BackupManager(Path(self.config.paths.backup_dir), capture)

    def _print_summary(self, result: SyncResult, done: str):
        total = result.total()
        self.ui.blank()
        self.ui.info("=" * 42)
        self.ui.info(done)
        self.ui.info("=" * 42)
        if result.dry_run:
            self.ui.info(f"Would apply: {total.would_apply}, skipped: {total.skipped}, invalid: {total.rejected}")
            self.ui.info("This was a dry run. Re-run without -d to apply changes.")
        else:
            self.ui.info(f"Applied: {total.applied}, failed: {total.failures}, skipped: {total.skipped}")
            if total.failures:
                self.ui.warn(f"{total.failures} settings could not be applied")

    # =========================================================================
    # Commands
    # =========================================================================

    def cmd_apply(self, args) -> int:
        self.ui.print_banner("Android Network Defaults Configuration", f"Configuration file: {self.config.paths.schema}")
        catalog = self.load_catalog()

        manager = self.backup_manager(catalog) if self.config.apply.auto_backup else None
        engine = ApplyEngine(catalog, self.accessors, self.ui, backup_manager=manager)

        result = engine.run(
            dry_run=args.dry_run,
            assume_yes=self.config.apply.assume_yes,
            category_name=args.category,
            confirm=lambda: self.interaction.confirm(
                "apply default network settings",
                f"Schema: {self.config.paths.schema}",
            ),
        )
        if not result.cancelled:
            self._print_summary(result, "Configuration application complete")
        return EXIT_OK

    def cmd_read(self, args) -> int:
        output_format = self.config.output.format
        if output_format != "json":
            self.ui.print_banner("Android Network Settings Reader", f"Configuration file: {self.config.paths.schema}")
            if args.category:
                self.ui.info(f"Category filter: {args.category}")
            if args.compare_defaults:
                self.ui.info("Comparing with default values")

        catalog = self.load_catalog()
        report = ReadEngine(catalog, self.accessors, self.ui).collect(
            category_name=args.category,
            compare=args.compare_defaults,
        )
        ResultDisplay(self.ui).render(report, output_format)

        if output_format == "table":
            self.ui.info(f"Read {report.total} settings")
            if report.compare:
                self.ui.info(f"{report.mismatches} differ from defaults")
        return EXIT_OK

    def cmd_backup(self, args) -> int:
        self.ui.print_banner("Network Settings Backup")
        catalog = self.load_catalog()
        manager = self.backup_manager(catalog)

        if args.description:
            self.ui.info(f"Description: {args.description}")
        self.ui.info("Reading current network settings...")

        entry = manager.create_backup(name=args.name, description=args.description)
        path = manager.backup_dir / entry.file

        self.ui.info("Settings backed up successfully")
        self.ui.info(f"Backup name: {entry.name}")
        self.ui.info(f"Backup saved to: {path}")
        self.ui.info(f"Metadata: {manager.metadata_path}")
        self.ui.info(f"Backup size: {path.stat().st_size} bytes")
        return EXIT_OK

    def cmd_restore(self, args) -> int:
        manager = BackupManager(Path(self.config.paths.backup_dir))

        if args.list:
            return self._list_backups(manager)

        if args.backup_file:
            path = Path(args.backup_file)
            self.ui.verbose(f"Using specified backup file: {path}")
        else:
            self.ui.verbose(f"Finding backup by name: {args.name}")
            path = manager.find(args.name)

        self.ui.print_banner("Network Settings Restore", f"Backup file: {path}")
        snapshot = Snapshot.load(path)

        result = SnapshotRestore(self.accessors, self.ui).restore(
            snapshot,
            dry_run=args.dry_run,
            assume_yes=self.config.apply.assume_yes,
            confirm=lambda: self.interaction.confirm(
                "restore network settings from backup",
                f"Current settings will be replaced with values from: {path}",
            ),
        )
        if not result.cancelled:
            self._print_summary(result, "Restoration complete")
        return EXIT_OK

    def _list_backups(self, manager: BackupManager) -> int:
        if not manager.metadata_path.is_file():
            self.ui.warn(f"No backups found. Metadata file does not exist: {manager.metadata_path}")
            return EXIT_FATAL

        backups = manager.list_backups()
        if not backups:
            self.ui.warn("No backups found in metadata")
            return EXIT_FATAL

        table = Table(title="Available Backups", box=box.SIMPLE_HEAD, title_style="cyan")
        table.add_column("#", justify="right", style="green")
        table.add_column("Name", style="yellow")
        table.add_column("File")
        table.add_column("Time")
        table.add_column("Description", style="dim")
        for i, entry in enumerate(backups, 1):
            table.add_row(
                str(i),
                escape(entry.name),
                escape(entry.file),
                escape(entry.timestamp),
                escape(entry.description),
            )
        self.ui.print(table)
        self.ui.info(f"Total backups: {len(backups)}")
        return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    args = parse_args(argv)

    if args.command == "init-config":
        ui = ConsoleUI()
        try:
            path = create_example_config(args.path)
        except FileExistsError as e:
            ui.error(str(e))
            return EXIT_FATAL
        ui.info(f"Wrote example config to {path}")
        return EXIT_OK

    ui = ConsoleUI()
    try:
        config = Config.load(args.config).override_from_args(args)
        errors = config.validate()
        if errors:
            for message in errors:
                ui.error(message)
            return EXIT_FATAL

        ui = ConsoleUI(verbose=config.output.verbose, quiet=config.output.quiet)
        ui.verbose(config.summary())

        app = NetcfgApp(config, ui)
        handler = {
            "apply": app.cmd_apply,
            "read": app.cmd_read,
            "backup": app.cmd_backup,
            "restore": app.cmd_restore,
        }[args.command]
        return handler(args)

    except NetcfgError as e:
        ui.error(str(e))
        return EXIT_FATAL
    except KeyboardInterrupt:
        ui.error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
