"""
Tests for the apply engine.
"""

from android_netcfg.accessors import WriteOutcome
from android_netcfg.schema import Catalog, SchemaReader
from android_netcfg.snapshot import BackupManager, SnapshotCapture
from android_netcfg.sync import ApplyEngine, ReadEngine

from mocks import APPLYABLE_COUNT, SKIPPED_COUNT, build_schema


def _engine(catalog, accessors, ui, backup_dir=None):
    manager = None
    if backup_dir is not None:
        manager = BackupManager(backup_dir, SnapshotCapture(ReadEngine(catalog, accessors, ui)))
    return ApplyEngine(catalog, accessors, ui, backup_manager=manager)


def test_applies_every_applyable_default(catalog, accessors, runner, environ, proc_dir, ui):
    result = _engine(catalog, accessors, ui).run(assume_yes=True)

    total = result.total()
    assert total.applied == APPLYABLE_COUNT
    assert total.skipped == SKIPPED_COUNT
    assert total.failures == 0

    assert runner.properties["wifi.interface"] == "wlan0"
    assert runner.properties["net.dns1"] == "8.8.8.8"
    assert runner.settings[("global", "wifi_on")] == "1"
    assert (proc_dir / "tcp_congestion_control").read_text() == "cubic\n"
    assert environ["no_proxy"] == "localhost,127.0.0.1"


def test_no_write_for_settings_without_default(catalog, accessors, runner, ui):
    _engine(catalog, accessors, ui).run(assume_yes=True)

    written = [c[1] for c in runner.writes if c[0] == "setprop"]
    assert "ro.wifi.channels" not in written
    assert "net.dns2" not in written
    assert not any(c[:4] == ["settings", "put", "global", "private_dns_specifier"] for c in runner.writes)
    assert ui.contains("verbose", "Skipping property without default value: net.dns2")


def test_dry_run_issues_no_writes(catalog, accessors, runner, environ, proc_dir, ui):
    result = _engine(catalog, accessors, ui).run(dry_run=True)

    assert runner.writes == []
    assert environ["no_proxy"] == "localhost"
    assert (proc_dir / "ip_forward").read_text() == "1\n"
    assert result.total().would_apply == APPLYABLE_COUNT
    assert any("wifi.interface" in m and "wlan0" in m for m in ui.lines("dry_run"))


def test_dry_run_skips_confirmation_and_backup(catalog, accessors, ui, tmp_path):
    asked = []
    backup_dir = tmp_path / "backups"
    _engine(catalog, accessors, ui, backup_dir).run(dry_run=True, confirm=lambda: asked.append(1) or True)

    assert asked == []
    assert not backup_dir.exists()


def test_declined_confirmation_changes_nothing(catalog, accessors, runner, ui, tmp_path):
    backup_dir = tmp_path / "backups"
    result = _engine(catalog, accessors, ui, backup_dir).run(confirm=lambda: False)

    assert result.cancelled
    assert runner.writes == []
    assert not backup_dir.exists()
    assert ui.contains("info", "cancelled")


def test_assume_yes_bypasses_confirmation(catalog, accessors, ui):
    asked = []
    _engine(catalog, accessors, ui).run(assume_yes=True, confirm=lambda: asked.append(1) or False)
    assert asked == []


def test_auto_backup_runs_before_writes(catalog, accessors, runner, ui, tmp_path):
    backup_dir = tmp_path / "backups"
    result = _engine(catalog, accessors, ui, backup_dir).run(assume_yes=True)

    assert result.backup_file.startswith("backup_first-run_")
    manager = BackupManager(backup_dir)
    entries = manager.list_backups()
    assert len(entries) == 1
    assert entries[0].name.startswith("first-run_")

    # The snapshot holds pre-apply values
    content = (backup_dir / result.backup_file).read_text()
    assert '"current": "wlan1"' in content


def test_second_auto_backup_is_pre_apply(catalog, accessors, ui, tmp_path):
    backup_dir = tmp_path / "backups"
    _engine(catalog, accessors, ui, backup_dir).run(assume_yes=True)
    result = _engine(catalog, accessors, ui, backup_dir).run(assume_yes=True)

    assert result.backup_file.startswith("backup_pre-apply_")
    assert len(BackupManager(backup_dir).list_backups()) == 2


def test_backup_failure_does_not_abort(catalog, accessors, runner, ui, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")

    result = _engine(catalog, accessors, ui, blocker / "backups").run(assume_yes=True)

    assert result.backup_file == ""
    assert ui.contains("error", "Automatic backup failed")
    assert result.total().applied == APPLYABLE_COUNT


def test_missing_kernel_path_is_soft_failure(accessors, runner, ui, proc_dir):
    doc = build_schema(proc_dir / "absent")
    catalog = Catalog.build(SchemaReader(doc))

    result = _engine(catalog, accessors, ui).run(assume_yes=True)

    counts = result.counts["kernel_parameters"]
    assert counts.failed == 2
    assert counts.applied == 0
    assert any("Kernel parameter path not found" in m for m in ui.lines("warn"))
    # Processing continued into the later category types
    assert result.counts["android_specific"].applied == 2


def test_read_only_property_failure_continues(accessors, runner, ui, proc_dir):
    doc = build_schema(proc_dir)
    doc["categories"]["system_properties"]["wifi"]["ro.wifi.channels"]["default"] = "11"
    catalog = Catalog.build(SchemaReader(doc))

    result = _engine(catalog, accessors, ui).run(assume_yes=True)

    failed = [r for r in result.results if r.outcome == WriteOutcome.FAILED]
    assert [r.identifier for r in failed if r.identifier.startswith("ro.")] == ["ro.wifi.channels"]
    assert runner.properties["net.dns1"] == "8.8.8.8"


def test_malformed_android_key_is_rejected(accessors, runner, ui):
    doc = {"categories": {"android_specific": {"wifi": {
        "settings.global": {"default": "1"},
        "settings.global.wifi_on": {"default": "1"},
    }}}}
    catalog = Catalog.build(SchemaReader(doc))

    result = _engine(catalog, accessors, ui).run(assume_yes=True)

    counts = result.counts["android_specific"]
    assert counts.rejected == 1
    assert counts.applied == 1
    assert runner.writes == [["settings", "put", "global", "wifi_on", "1"]]


def test_category_filter(catalog, accessors, runner, environ, ui):
    result = _engine(catalog, accessors, ui).run(assume_yes=True, category_name="wifi")

    assert runner.properties["wifi.interface"] == "wlan0"
    assert runner.properties["net.dns1"] == "1.1.1.1"
    assert environ["no_proxy"] == "localhost"
    assert result.total().applied == 4


def test_empty_category_type_warns(accessors, ui):
    doc = {"categories": {"system_properties": {"wifi": {"wifi.interface": {"default": "wlan0"}}}}}
    catalog = Catalog.build(SchemaReader(doc))

    _engine(catalog, accessors, ui).run(assume_yes=True)

    assert ui.contains("warn", "No kernel parameters found in configuration")


def test_environment_persistence_note(catalog, accessors, ui):
    _engine(catalog, accessors, ui).run(assume_yes=True)
    assert ui.contains("warn", "session-specific")
