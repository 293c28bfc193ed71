"""Render records as Markdown documents with YAML front matter."""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import frontmatter
import yaml

from inkdrop_export.errors import FrontMatterError
from inkdrop_export.models.record import BackupConfig, Book, Note, Tag

FRONT_MATTER_DELIMITER = "---\n"


def iso_timestamp(millis: int) -> str:
    """Format epoch milliseconds like ``2020-01-02T03:04:05.678Z``."""
    seconds, remainder = divmod(int(millis), 1000)
    dt = datetime.fromtimestamp(seconds, tz=UTC) + timedelta(milliseconds=remainder)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


_YAML = frontmatter.YAMLHandler()

# Generated fields left out of a note block when they have no value.
_OMIT_WHEN_EMPTY = ("status", "tasks", "tags")


def _dumps(metadata: Mapping[str, Any]) -> str:
    """Return a delimited YAML block, ending with a newline."""
    text = _YAML.export(dict(metadata), sort_keys=False)
    return f"{_YAML.START_DELIMITER}\n{text}\n{_YAML.END_DELIMITER}\n"


def _tag_entry(tag: Tag) -> dict[str, Any]:
    return {
        "name": tag.name,
        "color": tag.color,
        "count": tag.count,
        "created": iso_timestamp(tag.created_at),
        "updated": iso_timestamp(tag.updated_at),
        "_id": tag.id,
        "_rev": tag.rev,
    }


def render_config(config: BackupConfig, tags: Iterable[Tag]) -> str:
    """Render the root index file: backup config plus every tag."""
    return _dumps(
        {
            "updated": iso_timestamp(config.updated_at),
            "_type": "config",
            "_id": config.id,
            "_rev": config.rev,
            "tags": [_tag_entry(t) for t in sorted(tags, key=lambda t: t.id)],
        }
    )


def render_book(book: Book) -> str:
    """Render the index file of a book folder."""
    return _dumps(
        {
            "title": book.name,
            "created": iso_timestamp(book.created_at),
            "updated": iso_timestamp(book.updated_at),
            "_type": "book",
            "_id": book.id,
            "_rev": book.rev,
        }
    )


def note_metadata(note: Note, tag_names: list[str]) -> dict[str, Any]:
    """Build the front matter fields for a note, in output order.

    Status "none", no tasks and no tags leave their fields out. Other fields
    are always present, even when empty.
    """
    fields: dict[str, Any] = {
        "title": note.title,
        "created": iso_timestamp(note.created_at),
        "updated": iso_timestamp(note.updated_at),
        "status": "" if note.status == "none" else note.status,
        "doctype": note.doctype,
        "visibility": note.share,
        "tasks": (
            {"count": note.num_of_tasks, "completed": note.num_of_checked_tasks}
            if note.num_of_tasks
            else ""
        ),
        "tags": ", ".join(tag_names),
        "_type": note.doctype,
        "_bookId": note.book_id,
        "_id": note.id,
        "_rev": note.rev,
    }
    return {k: v for k, v in fields.items() if not (k in _OMIT_WHEN_EMPTY and v == "")}


def render_note(note: Note, tag_names: list[str], metadata: Mapping[str, Any] | None = None) -> str:
    """Render a note file.

    ``metadata`` (front matter already present in the note body) is merged on
    top of the generated fields. The body follows after a blank line as is,
    only gaining a final newline when it lacks one. Any front matter it starts
    with stays in place below the generated block.
    """
    fields = {**note_metadata(note, tag_names), **(metadata or {})}
    content = f"\n{note.body}"
    if not content.endswith("\n"):
        content += "\n"
    return _dumps(fields) + content


def extract_front_matter(body: str) -> dict[str, Any]:
    """Return the front matter fields a note body starts with.

    Returns an empty dict when the body has no (or non-mapping) front matter.

    Raises:
        FrontMatterError: if the front matter is not valid YAML. Line and
            column are 1-based and counted within the body.
    """
    if not body.startswith(FRONT_MATTER_DELIMITER):
        return {}
    try:
        metadata, _content = frontmatter.parse(body)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        reason = getattr(exc, "problem", None) or str(exc)
        if mark is None:
            raise FrontMatterError(reason) from exc
        # the parsed chunk starts on the opening delimiter line
        raise FrontMatterError(reason, line=mark.line + 1, column=mark.column + 1) from exc
    return dict(metadata)
