"""Tests for front matter rendering and extraction."""

import frontmatter
import pytest
import yaml

from inkdrop_export.core.render.front_matter import (
    extract_front_matter,
    iso_timestamp,
    render_book,
    render_config,
    render_note,
)
from inkdrop_export.errors import FrontMatterError
from inkdrop_export.models.record import BackupConfig, Book, Note, Tag
from tests.unit.fakes import CREATED, UPDATED


def _note(**overrides: object) -> Note:
    fields: dict[str, object] = {
        "id": "note:1",
        "title": "Hello",
        "body": "World",
        "book_id": "book:1",
        "created_at": CREATED,
        "updated_at": UPDATED,
        "rev": "1-note",
        "status": "none",
        "doctype": "markdown",
        "share": "private",
    }
    fields.update(overrides)
    return Note(**fields)  # type: ignore[arg-type]


def _front_matter(text: str) -> dict[str, object]:
    assert text.startswith("---\n")
    block = text.split("---\n")[1]
    return yaml.safe_load(block)  # type: ignore[no-any-return]


def test_iso_timestamp_matches_javascript_format() -> None:
    assert iso_timestamp(CREATED) == "2020-01-01T00:00:00.000Z"
    assert iso_timestamp(CREATED + 123) == "2020-01-01T00:00:00.123Z"


def test_render_book_fields_in_order() -> None:
    book = Book(
        id="book:1",
        name="Notebook",
        parent_book_id=None,
        created_at=CREATED,
        updated_at=UPDATED,
        rev="1-book",
    )

    text = render_book(book)
    fields = _front_matter(text)

    assert list(fields) == ["title", "created", "updated", "_type", "_id", "_rev"]
    assert fields["title"] == "Notebook"
    assert fields["created"] == "2020-01-01T00:00:00.000Z"
    assert fields["_type"] == "book"
    assert text.endswith("---\n")


def test_render_config_lists_tags() -> None:
    config = BackupConfig(id="config", rev="3-config", updated_at=UPDATED)
    tags = [
        Tag(id="tag:2", name="rust", color="red", count=0, created_at=CREATED,
            updated_at=UPDATED, rev="1"),
        Tag(id="tag:1", name="python", color="blue", count=4, created_at=CREATED,
            updated_at=UPDATED, rev="2"),
    ]

    fields = _front_matter(render_config(config, tags))

    assert list(fields) == ["updated", "_type", "_id", "_rev", "tags"]
    assert fields["_type"] == "config"
    assert [t["name"] for t in fields["tags"]] == ["python", "rust"]  # type: ignore[attr-defined]
    assert fields["tags"][0] == {  # type: ignore[index]
        "name": "python",
        "color": "blue",
        "count": 4,
        "created": "2020-01-01T00:00:00.000Z",
        "updated": "2020-01-02T00:00:00.000Z",
        "_id": "tag:1",
        "_rev": "2",
    }


def test_render_config_without_tags() -> None:
    config = BackupConfig(id="config", rev="1", updated_at=UPDATED)

    assert _front_matter(render_config(config, []))["tags"] == []


def test_render_note_example() -> None:
    text = render_note(_note(), [])
    lines = text.splitlines()

    assert "title: Hello" in lines
    assert "doctype: markdown" in lines
    assert "visibility: private" in lines
    assert not any(line.startswith("status:") for line in lines)
    assert not any(line.startswith("tasks:") for line in lines)
    assert not any(line.startswith("tags:") for line in lines)
    assert text.endswith("---\n\nWorld\n")


def test_render_note_field_order() -> None:
    text = render_note(_note(status="active", num_of_tasks=2, num_of_checked_tasks=1), ["a", "b"])

    fields = _front_matter(text)

    assert list(fields) == [
        "title", "created", "updated", "status", "doctype", "visibility",
        "tasks", "tags", "_type", "_bookId", "_id", "_rev",
    ]
    assert fields["status"] == "active"
    assert fields["tasks"] == {"count": 2, "completed": 1}
    assert fields["tags"] == "a, b"
    assert fields["_type"] == "markdown"
    assert fields["_bookId"] == "book:1"


def test_render_note_existing_metadata_takes_precedence() -> None:
    text = render_note(_note(), [], {"title": "Override", "author": "me"})

    fields = _front_matter(text)

    assert fields["title"] == "Override"
    assert list(fields)[0] == "title"
    assert list(fields)[-1] == "author"


def test_render_note_round_trips_identity_fields() -> None:
    post = frontmatter.loads(render_note(_note(), ["python"]))

    assert post["_id"] == "note:1"
    assert post["_rev"] == "1-note"
    assert post["title"] == "Hello"
    assert post["created"] == "2020-01-01T00:00:00.000Z"
    assert post["updated"] == "2020-01-02T00:00:00.000Z"
    assert post.content == "World"


def test_render_note_is_deterministic() -> None:
    assert render_note(_note(), ["x"], {"k": 1}) == render_note(_note(), ["x"], {"k": 1})


def test_extract_front_matter_without_block() -> None:
    assert extract_front_matter("plain body") == {}


def test_extract_front_matter_reads_mapping() -> None:
    assert extract_front_matter("---\nauthor: me\n---\nText") == {"author": "me"}


def test_extract_front_matter_ignores_non_mapping() -> None:
    assert extract_front_matter("---\njust words\n---\nText") == {}


def test_extract_front_matter_reports_position_of_bad_yaml() -> None:
    with pytest.raises(FrontMatterError) as exc_info:
        extract_front_matter("---\ntitle: [unclosed\n---\nText")

    assert exc_info.value.line is not None
    assert exc_info.value.column is not None
    assert "line" in str(exc_info.value)


def test_render_note_keeps_body_whitespace() -> None:
    text = render_note(_note(body="\n\n  World  \n\n"), [])

    assert text.endswith("---\n\n\n\n  World  \n\n")


def test_render_note_adds_only_missing_final_newline() -> None:
    assert render_note(_note(body="line  "), []).endswith("---\n\nline  \n")
    assert render_note(_note(body=""), []).endswith("---\n\n")


def test_render_note_keeps_empty_title_and_rev() -> None:
    post = frontmatter.loads(render_note(_note(title="", rev=""), []))

    assert post["title"] == ""
    assert post["_rev"] == ""
    assert "status" not in post.metadata
    assert "tasks" not in post.metadata
    assert "tags" not in post.metadata
