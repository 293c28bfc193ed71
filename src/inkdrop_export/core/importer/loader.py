"""Load an Inkdrop backup folder into memory."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from inkdrop_export.config import CONFIG_FILENAME, DATA_SUBDIR
from inkdrop_export.core.importer.json_reader import (
    parse_config_data,
    parse_record_data,
    parse_record_key,
)
from inkdrop_export.errors import RecordError
from inkdrop_export.models.record import Backup, RecordType


def resolve_records_dir(input_dir: Path) -> Path:
    """Return the directory holding the record files.

    A backup made by the app keeps its records in a ``data`` subfolder; a bare
    folder of records is accepted as well.
    """
    data_dir = input_dir / DATA_SUBDIR
    return data_dir if data_dir.is_dir() else input_dir


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Malformed JSON in {path.name}: {exc}"
        raise RecordError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path.name}"
        raise RecordError(msg)
    return data


def load_backup(input_dir: Path) -> Backup:
    """Read every record of a backup folder.

    Args:
        input_dir: The backup folder (or its ``data`` subfolder).

    Returns:
        Backup with books, files, notes and tags keyed by composite id.

    Raises:
        RecordError: if the folder, the config or any record cannot be read.
    """
    records_dir = resolve_records_dir(input_dir)
    if not records_dir.is_dir():
        msg = f"Backup folder not found: {records_dir}"
        raise RecordError(msg)

    collections: dict[RecordType, dict[str, Any]] = {t: {} for t in RecordType}

    for path in sorted(records_dir.iterdir()):
        try:
            key = parse_record_key(path.name)
        except ValueError as exc:
            logger.warning("Skipping {}: {}", path.name, exc)
            continue
        if key is None:
            continue
        collections[key.type][key.composite] = parse_record_data(key, _read_json(path))

    config_path = records_dir / CONFIG_FILENAME
    if not config_path.is_file():
        msg = f"Missing {CONFIG_FILENAME} in {records_dir}"
        raise RecordError(msg)
    config = parse_config_data(_read_json(config_path))

    backup = Backup(
        config=config,
        books=collections[RecordType.BOOK],
        files=collections[RecordType.FILE],
        notes=collections[RecordType.NOTE],
        tags=collections[RecordType.TAG],
    )
    logger.info("Book count: {}", len(backup.books))
    logger.info("File count: {}", len(backup.files))
    logger.info("Note count: {}", len(backup.notes))
    logger.info("Tag count: {}", len(backup.tags))
    return backup
