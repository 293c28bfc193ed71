"""Exceptions raised while converting a backup."""


class ExportError(RuntimeError):
    """Base class for errors that abort a conversion run."""


class RecordError(ExportError):
    """Raised when a backup record or the config file cannot be read."""


class BookCycleError(ExportError):
    """Raised when following parent books leads back to a book already visited."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Cyclic book hierarchy: {' -> '.join(cycle)}")


class DuplicateNoteError(ExportError):
    """Raised when two notes would be written to the same file."""

    def __init__(self, note_id: str, path: str) -> None:
        self.note_id = note_id
        self.path = path
        super().__init__(f"Detected a note with a duplicate title ({note_id}) {path!r}")


class FrontMatterError(ExportError):
    """Raised when a note body starts with front matter that is not valid YAML."""

    def __init__(self, reason: str, *, line: int | None = None, column: int | None = None) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{reason}{where}")


class OutputPathError(ExportError):
    """Raised when an output path is absolute or points outside the output folder."""
