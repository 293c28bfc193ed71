"""Convert a loaded backup into a Markdown folder tree."""

from dataclasses import dataclass, replace
from typing import Any

from loguru import logger

from inkdrop_export.config import README_FILENAME, TRASH_BOOK_ID, ExportOptions
from inkdrop_export.core.importer.loader import load_backup
from inkdrop_export.core.media.attachments import materialize_attachments
from inkdrop_export.core.media.references import rewrite_file_references
from inkdrop_export.core.render.front_matter import (
    FRONT_MATTER_DELIMITER,
    extract_front_matter,
    render_book,
    render_config,
    render_note,
)
from inkdrop_export.core.tree.navigation import BookPathResolver, sanitize_filename
from inkdrop_export.errors import DuplicateNoteError, FrontMatterError
from inkdrop_export.models.record import Backup, Note
from inkdrop_export.protocols import WriterProtocol
from inkdrop_export.writer import FileWriter


@dataclass(frozen=True)
class ExportStats:
    """Summary of an export run."""

    books_written: int
    files_written: int
    notes_written: int
    notes_skipped: int


def note_filename(title: str) -> str:
    """Return the output filename for a note title."""
    name = sanitize_filename(title)
    return name if title.endswith(".md") else f"{name}.md"


def _join(folder: str, name: str) -> str:
    return f"{folder}/{name}" if folder else name


class TreeExporter:
    """Write a backup out as folders (books) of Markdown files (notes).

    Phases run strictly in order: config, books, attachments, notes. Book
    folders and attachments must exist before any note refers to them.
    """

    def __init__(
        self,
        backup: Backup,
        writer: WriterProtocol,
        *,
        ignore_completed: bool = False,
    ) -> None:
        self._backup = backup
        self._writer = writer
        self._ignore_completed = ignore_completed

        # Output: book id -> folder relative to the output root.
        self.book_folders: dict[str, str] = {}

        # Output: composite file id -> attachment path relative to the output root.
        self.file_paths: dict[str, str] = {}

    def run(self) -> ExportStats:
        """Execute every phase and return counts."""
        self._write_config()
        self._write_books()

        logger.info("Writing all files...")
        self.file_paths = materialize_attachments(self._backup.files, self._writer)

        logger.info("Writing all notes...")
        written, skipped = self._write_notes()
        return ExportStats(
            books_written=len(self.book_folders),
            files_written=len(self.file_paths),
            notes_written=written,
            notes_skipped=skipped,
        )

    def _write_config(self) -> None:
        logger.debug("Writing config file: {}", README_FILENAME)
        contents = render_config(self._backup.config, self._backup.tags.values())
        self._writer.make_text_file(README_FILENAME, contents)

    def _write_books(self) -> None:
        resolver = BookPathResolver(self._backup.books)
        for book_id in sorted(self._backup.books):
            book = self._backup.books[book_id]
            folder = resolver.folder(book_id)
            self.book_folders[book_id] = folder
            logger.debug("Writing config for book: {}", folder)
            self._writer.make_dir(folder)
            self._writer.make_text_file(_join(folder, README_FILENAME), render_book(book))

    def _is_skippable(self, note: Note) -> bool:
        return note.book_id == TRASH_BOOK_ID or (
            note.status == "completed" and self._ignore_completed
        )

    def _tag_names(self, note: Note) -> list[str]:
        names: list[str] = []
        for tag_id in note.tags:
            tag = self._backup.tags.get(tag_id)
            if tag is None:
                logger.debug("Note {} has unknown tag {}", note.id, tag_id)
            elif tag.name:
                names.append(tag.name)
        return names

    def _existing_metadata(self, note_id: str, body: str) -> dict[str, Any]:
        try:
            return extract_front_matter(body)
        except FrontMatterError as exc:
            logger.warning("Ignoring bad frontmatter for note: {}", note_id)
            if exc.line is not None:
                logger.warning(
                    "Reason given: {} (line {}, column {})", exc.reason, exc.line, exc.column
                )
            else:
                logger.warning("Reason given: {}", exc.reason)
            return {}

    def _write_notes(self) -> tuple[int, int]:
        written = 0
        skipped = 0
        for note_id in sorted(self._backup.notes):
            note = self._backup.notes[note_id]
            if self._is_skippable(note):
                logger.debug("Skipping note: {}", note_id)
                skipped += 1
                continue
            folder = self.book_folders.get(note.book_id)
            if folder is None:
                # Usually a book deleted without moving its notes first.
                logger.debug("Found note without book: {}", note_id)
                skipped += 1
                continue

            body = rewrite_file_references(note.body, self.file_paths)
            metadata: dict[str, Any] = {}
            if body.startswith(FRONT_MATTER_DELIMITER):
                metadata = self._existing_metadata(note_id, body)

            filename = note_filename(note.title)
            file_path = _join(folder, filename)
            if filename != README_FILENAME and self._writer.has_written(file_path):
                raise DuplicateNoteError(note_id, file_path)

            logger.debug("Writing note: {}", file_path)
            rendered = render_note(replace(note, body=body), self._tag_names(note), metadata)
            self._writer.make_text_file(file_path, rendered)
            written += 1
        return written, skipped


def run_export(options: ExportOptions) -> ExportStats:
    """Load the backup at ``options.input_dir`` and write the tree to ``options.output_dir``."""
    logger.debug("Using input folder: {}", options.input_dir)
    logger.debug("Using output folder: {}", options.output_dir)

    backup = load_backup(options.input_dir)
    writer = FileWriter(options.output_dir)
    stats = TreeExporter(
        backup, writer, ignore_completed=options.ignore_completed
    ).run()
    writer.finalize()
    return stats
