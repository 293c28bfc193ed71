"""Domain models for an Inkdrop backup."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class RecordType(str, Enum):
    """Record kinds stored one-per-file in a backup."""

    BOOK = "book"
    FILE = "file"
    NOTE = "note"
    TAG = "tag"


@dataclass(frozen=True)
class RecordKey:
    """Parsed form of a record filename such as ``note:abc123.json``."""

    type: RecordType
    id: str

    @property
    def composite(self) -> str:
        return f"{self.type.value}:{self.id}"


@dataclass(frozen=True)
class Book:
    """A notebook. Books nest through ``parent_book_id``."""

    id: str
    name: str
    parent_book_id: str | None
    created_at: int
    updated_at: int
    rev: str


@dataclass(frozen=True)
class Tag:
    """A note tag."""

    id: str
    name: str
    color: str
    count: int
    created_at: int
    updated_at: int
    rev: str


@dataclass(frozen=True)
class FileAttachment:
    """A binary attachment with its payload still base64 encoded."""

    id: str
    name: str
    content_type: str
    data: str

    @property
    def short_id(self) -> str:
        return self.id.split(":", 1)[-1]


@dataclass(frozen=True)
class Note:
    """A single note."""

    id: str
    title: str
    body: str
    book_id: str
    created_at: int
    updated_at: int
    rev: str
    tags: tuple[str, ...] = ()
    status: str = "none"
    doctype: str = "markdown"
    share: str = "private"
    num_of_tasks: int = 0
    num_of_checked_tasks: int = 0


@dataclass(frozen=True)
class BackupConfig:
    """The singleton ``config.json`` record."""

    id: str
    rev: str
    updated_at: int


def _frozen(mapping: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Backup:
    """All records of a backup, keyed by composite id (``type:uuid``)."""

    config: BackupConfig
    books: Mapping[str, Book] = field(default_factory=_frozen)
    files: Mapping[str, FileAttachment] = field(default_factory=_frozen)
    notes: Mapping[str, Note] = field(default_factory=_frozen)
    tags: Mapping[str, Tag] = field(default_factory=_frozen)

    def __post_init__(self) -> None:
        for name in ("books", "files", "notes", "tags"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
