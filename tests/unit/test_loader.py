"""Tests for the loader that reads a backup folder into memory."""

import json
from pathlib import Path

import pytest

from inkdrop_export.core.importer.loader import load_backup, resolve_records_dir
from inkdrop_export.errors import RecordError
from tests.unit.fakes import CONFIG, make_book, make_note, write_backup


def test_load_backup_groups_records_by_type(backup_dir: Path) -> None:
    backup = load_backup(backup_dir)

    assert set(backup.books) == {"book:1", "book:2", "book:3"}
    assert set(backup.files) == {"file:abc"}
    assert set(backup.tags) == {"tag:1"}
    assert set(backup.notes) == {"note:1", "note:2", "note:3", "note:4", "note:5"}
    assert backup.config.id == "config"


def test_load_backup_accepts_flat_records_folder(tmp_path: Path) -> None:
    (tmp_path / "book:1.json").write_text(json.dumps(make_book("1", "Notebook")))
    (tmp_path / "config.json").write_text(json.dumps(CONFIG))

    backup = load_backup(tmp_path)

    assert resolve_records_dir(tmp_path) == tmp_path
    assert backup.books["book:1"].name == "Notebook"


def test_load_backup_prefers_data_subfolder(backup_dir: Path) -> None:
    assert resolve_records_dir(backup_dir) == backup_dir / "data"


def test_load_backup_skips_unknown_record_types(tmp_path: Path, log_messages: list[str]) -> None:
    root = write_backup(tmp_path, {"book:1.json": make_book("1", "Notebook")})
    (root / "data" / "widget:1.json").write_text("{}")

    backup = load_backup(root)

    assert set(backup.books) == {"book:1"}
    assert any("WARNING" in m and "widget:1.json" in m for m in log_messages)


def test_load_backup_logs_counts(backup_dir: Path, log_messages: list[str]) -> None:
    load_backup(backup_dir)

    assert "INFO Book count: 3\n" in log_messages
    assert "INFO Note count: 5\n" in log_messages


def test_load_backup_fails_on_malformed_json(tmp_path: Path) -> None:
    root = write_backup(tmp_path, {"note:1.json": make_note("1", "Hello", "World", "book:1")})
    (root / "data" / "note:2.json").write_text("{not json")

    with pytest.raises(RecordError, match="Malformed JSON in note:2.json"):
        load_backup(root)


def test_load_backup_fails_without_config(tmp_path: Path) -> None:
    root = write_backup(tmp_path, {"book:1.json": make_book("1", "Notebook")}, config=None)

    with pytest.raises(RecordError, match="Missing config.json"):
        load_backup(root)


def test_load_backup_fails_for_missing_folder(tmp_path: Path) -> None:
    with pytest.raises(RecordError, match="not found"):
        load_backup(tmp_path / "nope")


def test_loaded_collections_are_read_only(backup_dir: Path) -> None:
    backup = load_backup(backup_dir)

    with pytest.raises(TypeError):
        backup.books["book:9"] = backup.books["book:1"]  # type: ignore[index]
