"""Parse Inkdrop backup records into domain models."""

from typing import Any

from inkdrop_export.errors import RecordError
from inkdrop_export.models.record import (
    BackupConfig,
    Book,
    FileAttachment,
    Note,
    RecordKey,
    RecordType,
    Tag,
)


def parse_record_key(filename: str) -> RecordKey | None:
    """Parse a record filename of the form ``<type>:<id>.json``.

    Returns:
        The parsed key, or None for files that are not records at all
        (no ``:`` separator, e.g. ``config.json``).

    Raises:
        ValueError: if the name has a separator but is not a valid record name.
    """
    if ":" not in filename:
        return None
    type_name, _, rest = filename.partition(":")
    if not rest.endswith(".json"):
        msg = f"Record file is not .json: {filename!r}"
        raise ValueError(msg)
    record_id = rest.removesuffix(".json")
    if not record_id:
        msg = f"Record file has an empty id: {filename!r}"
        raise ValueError(msg)
    try:
        record_type = RecordType(type_name)
    except ValueError:
        msg = f"Unknown record type {type_name!r} in {filename!r}"
        raise ValueError(msg) from None
    return RecordKey(type=record_type, id=record_id)


def _attachment_data(data: dict[str, Any]) -> str:
    try:
        return data["_attachments"]["index"]["data"]  # type: ignore[no-any-return]
    except (KeyError, TypeError):
        raise KeyError("_attachments.index.data") from None


def parse_record_data(key: RecordKey, data: dict[str, Any]) -> Book | FileAttachment | Note | Tag:
    """Build the model for one record.

    Args:
        key: Key parsed from the record filename.
        data: Raw JSON object of the record.

    Raises:
        RecordError: if a required field is missing.
    """
    record_id = data.get("_id", key.composite)
    try:
        if key.type is RecordType.BOOK:
            return Book(
                id=record_id,
                name=data["name"],
                parent_book_id=data.get("parentBookId"),
                created_at=data["createdAt"],
                updated_at=data["updatedAt"],
                rev=data.get("_rev", ""),
            )
        if key.type is RecordType.TAG:
            return Tag(
                id=record_id,
                name=data["name"],
                color=data.get("color", "default"),
                count=data.get("count", 0),
                created_at=data["createdAt"],
                updated_at=data["updatedAt"],
                rev=data.get("_rev", ""),
            )
        if key.type is RecordType.FILE:
            return FileAttachment(
                id=record_id,
                name=data.get("name", ""),
                content_type=data.get("contentType", ""),
                data=_attachment_data(data),
            )
        return Note(
            id=record_id,
            title=data["title"],
            body=data.get("body") or "",
            book_id=data["bookId"],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
            rev=data.get("_rev", ""),
            tags=tuple(data.get("tags") or ()),
            status=data.get("status") or "none",
            doctype=data.get("doctype") or "markdown",
            share=data.get("share") or "private",
            num_of_tasks=data.get("numOfTasks") or 0,
            num_of_checked_tasks=data.get("numOfCheckedTasks") or 0,
        )
    except KeyError as missing:
        msg = f"Record {key.composite!r} is missing field {missing.args[0]}"
        raise RecordError(msg) from missing


def parse_config_data(data: dict[str, Any]) -> BackupConfig:
    """Build the config model from ``config.json``."""
    try:
        return BackupConfig(
            id=data["_id"],
            rev=data.get("_rev", ""),
            updated_at=data["updatedAt"],
        )
    except KeyError as missing:
        msg = f"Config is missing field {missing.args[0]}"
        raise RecordError(msg) from missing
