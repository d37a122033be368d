import json
import os
from datetime import datetime

import pytest

from retroboy_backup.core.backup_service import (
    BackupFormatError,
    BackupReadError,
    BackupService,
    EmptyStorageError,
    ExportError,
    RestoreError,
    default_export_filename,
    parse_backup_text,
    read_backup_file,
)
from retroboy_backup.core.storage import InMemoryStore, JsonFileStore

from .helpers import b64

CARTRIDGE = b64("test cartridge data")
RTC = json.dumps({"rtcData": "some rtc data"})


@pytest.fixture
def service(store):
    return BackupService(store)


def test_apply_settings_merges_into_settings_store(service, store):
    store.set_item("settings", json.dumps({"controls": "keyboard", "volume": 5}))
    snapshot = {"settings": json.dumps({"controls": "gamepad", "cheats": True})}

    service.apply_option("settings", snapshot)

    assert service.settings_store.load() == {"controls": "gamepad", "volume": 5, "cheats": True}


def test_apply_cartridge_writes_ram_and_rtc_verbatim(service, store):
    snapshot = {"POKEMON": CARTRIDGE, "POKEMON-rtc": RTC}

    service.apply_option("POKEMON", snapshot)

    assert store.get_item("POKEMON") == CARTRIDGE
    assert store.get_item("POKEMON-rtc") == RTC


def test_apply_cartridge_without_rtc_only_writes_ram(service, store):
    service.apply_option("ZELDA", {"ZELDA": CARTRIDGE})

    assert store.items() == [("ZELDA", CARTRIDGE)]


def test_apply_writes_rtc_companion_even_when_not_json(service, store):
    service.apply_option("POKEMON", {"POKEMON": CARTRIDGE, "POKEMON-rtc": "raw"})

    assert store.get_item("POKEMON-rtc") == "raw"


@pytest.mark.parametrize(
    "snapshot",
    [
        {},
        {"settings": "not json"},
        {"settings": "[1, 2]"},
        {"settings": {"controls": "gamepad"}},
    ],
)
def test_apply_settings_failures_raise_restore_error(service, snapshot):
    with pytest.raises(RestoreError):
        service.apply_option("settings", snapshot)


def test_apply_cartridge_with_non_string_rtc_writes_nothing(service, store):
    with pytest.raises(RestoreError):
        service.apply_option("POKEMON", {"POKEMON": CARTRIDGE, "POKEMON-rtc": {"rtcData": 1}})

    assert len(store) == 0


def test_apply_selection_continues_after_a_failure(service, store):
    snapshot = {
        "settings": "not json",
        "POKEMON": CARTRIDGE,
        "POKEMON-rtc": RTC,
        "ZELDA": CARTRIDGE,
    }

    result = service.apply_selection(snapshot, ["settings", "POKEMON", "MISSING", "ZELDA"])

    assert result.imported == ["POKEMON", "ZELDA"]
    assert set(result.failed) == {"settings", "MISSING"}
    assert not result.success
    assert store.keys() == ["POKEMON", "POKEMON-rtc", "ZELDA"]


def test_apply_selection_of_nothing_succeeds(service, store):
    result = service.apply_selection({"POKEMON": CARTRIDGE}, [])

    assert result.success
    assert result.imported == []
    assert len(store) == 0


def test_build_import_options_uses_reconciliation(service):
    options = service.build_import_options({"POKEMON": CARTRIDGE, "POKEMON-rtc": RTC, "junk": "x"})

    assert options == [("POKEMON", "POKEMON Cartridge RAM/RTC settings")]


def test_export_contains_every_stored_entry_unfiltered():
    store = InMemoryStore({"settings": "{}", "POKEMON": CARTRIDGE, "unrelated": "anything at all"})

    document = BackupService(store).export_backup()

    assert json.loads(document) == {"settings": "{}", "POKEMON": CARTRIDGE, "unrelated": "anything at all"}


def test_export_of_empty_storage_is_reported(service):
    with pytest.raises(EmptyStorageError):
        service.export_backup()


def test_write_export_into_directory_uses_timestamped_name(tmp_path):
    service = BackupService(InMemoryStore({"ZELDA": CARTRIDGE}))

    path = service.write_export(tmp_path, now=datetime(2026, 1, 19, 14, 30, 52))

    assert path == tmp_path / "retroboy-backup_20260119_143052.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"ZELDA": CARTRIDGE}


def test_write_export_to_named_file(tmp_path):
    service = BackupService(InMemoryStore({"ZELDA": CARTRIDGE}))
    target = tmp_path / "exports" / "mine.json"

    assert service.write_export(target) == target
    assert target.exists()


def test_write_export_of_empty_storage_writes_no_file(service, tmp_path):
    with pytest.raises(EmptyStorageError):
        service.write_export(tmp_path)

    assert list(tmp_path.iterdir()) == []


def test_write_export_failure_is_export_error(tmp_path):
    service = BackupService(InMemoryStore({"ZELDA": CARTRIDGE}))
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ExportError):
        service.write_export(blocker / "backup.json")


def test_default_export_filename():
    assert default_export_filename(datetime(2026, 10, 19, 8, 5, 3)) == "retroboy-backup_20261019_080503.json"


@pytest.mark.parametrize("text", ["not json", "[1, 2]", "null", '"text"', ""])
def test_parse_backup_text_rejects_non_objects(text):
    with pytest.raises(BackupFormatError):
        parse_backup_text(text)


def test_parse_backup_text_returns_snapshot():
    assert parse_backup_text('{"POKEMON": "dGVzdA=="}') == {"POKEMON": "dGVzdA=="}


def test_read_backup_file(tmp_path):
    path = tmp_path / "backup.json"
    path.write_text(json.dumps({"POKEMON": CARTRIDGE}), encoding="utf-8")

    assert read_backup_file(path) == {"POKEMON": CARTRIDGE}


def test_read_backup_file_rejects_missing_and_wrong_type(tmp_path):
    wrong_suffix = tmp_path / "backup.txt"
    wrong_suffix.write_text("{}", encoding="utf-8")

    with pytest.raises(BackupReadError):
        read_backup_file(tmp_path / "missing.json")
    with pytest.raises(BackupReadError):
        read_backup_file(wrong_suffix)


def test_read_backup_file_with_bad_contents(tmp_path):
    path = tmp_path / "backup.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(BackupFormatError):
        read_backup_file(path)


def test_export_then_import_restores_importable_entries(tmp_path):
    source = InMemoryStore({
        "settings": json.dumps({"controls": "gamepad"}),
        "POKEMON": CARTRIDGE,
        "POKEMON-rtc": RTC,
        "unrelated": "kept out of the import",
    })
    exported = BackupService(source).write_export(tmp_path)

    target = InMemoryStore()
    service = BackupService(target)
    snapshot = read_backup_file(exported)
    options = service.build_import_options(snapshot)
    result = service.apply_selection(snapshot, [option.key for option in options])

    assert result.imported == ["settings", "POKEMON"]
    assert dict(target.items()) == {
        "settings": json.dumps({"controls": "gamepad"}),
        "POKEMON": CARTRIDGE,
        "POKEMON-rtc": RTC,
    }


def test_failed_cartridge_write_leaves_storage_unchanged(tmp_path, monkeypatch):
    path = tmp_path / "storage.json"
    store = JsonFileStore(path)
    store.set_item("ZELDA", CARTRIDGE)
    service = BackupService(store)

    def fail_replace(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(RestoreError):
        service.apply_option("POKEMON", {"POKEMON": CARTRIDGE, "POKEMON-rtc": RTC})

    assert store.items() == [("ZELDA", CARTRIDGE)]
    assert json.loads(path.read_text(encoding="utf-8")) == {"ZELDA": CARTRIDGE}


def test_cartridge_and_rtc_are_written_together(tmp_path):
    path = tmp_path / "storage.json"

    BackupService(JsonFileStore(path)).apply_option("POKEMON", {"POKEMON": CARTRIDGE, "POKEMON-rtc": RTC})

    assert json.loads(path.read_text(encoding="utf-8")) == {"POKEMON": CARTRIDGE, "POKEMON-rtc": RTC}


@pytest.mark.parametrize("raw", ['{"volume": NaN}', '{"volume": Infinity}'])
def test_apply_settings_rejects_what_reconciliation_rejects(service, store, raw):
    snapshot = {"settings": raw}

    assert service.build_import_options(snapshot) == []
    with pytest.raises(RestoreError):
        service.apply_option("settings", snapshot)
    assert len(store) == 0


def test_write_export_replaces_unsafe_filename_characters(tmp_path):
    service = BackupService(InMemoryStore({"ZELDA": CARTRIDGE}))

    path = service.write_export(tmp_path / "my:backup?.json")

    assert path == tmp_path / "my_backup_.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"ZELDA": CARTRIDGE}
