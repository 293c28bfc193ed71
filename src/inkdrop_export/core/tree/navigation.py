"""Book hierarchy: folder paths from parent references."""

from collections.abc import Mapping

from loguru import logger

from inkdrop_export.errors import BookCycleError
from inkdrop_export.models.record import Book


def sanitize_filename(name: str) -> str:
    """Make a book name or note title usable as a single path component."""
    return name.replace("/", "-").replace("\\", "-")


def folder_name(name: str) -> str:
    """Sanitize a book name so it never resolves to the current or parent folder."""
    segment = sanitize_filename(name)
    if segment.strip(".") == "":
        return segment.replace(".", "-") or "-"
    return segment


class BookPathResolver:
    """Compute folder paths for books by walking ``parent_book_id`` to the root.

    A parent id that is not in the loaded books ends the walk: the book is
    treated as a root, so an orphaned sub-tree lands at the top level.
    """

    def __init__(self, books: Mapping[str, Book]) -> None:
        self._books = books
        self._cache: dict[str, tuple[str, ...]] = {}

    def resolve_path(self, book_id: str) -> tuple[str, ...]:
        """Return sanitized folder names from the root down to ``book_id``.

        Raises:
            KeyError: if ``book_id`` is not a known book.
            BookCycleError: if the parent chain loops.
        """
        if book_id in self._cache:
            return self._cache[book_id]

        chain: list[str] = []
        visited: set[str] = set()
        current: str | None = book_id
        prefix: tuple[str, ...] = ()
        while current is not None and current in self._books:
            if current in self._cache:
                prefix = self._cache[current]
                break
            if current in visited:
                raise BookCycleError([*chain, current])
            visited.add(current)
            chain.append(current)

            parent_id = self._books[current].parent_book_id
            if parent_id and parent_id not in self._books:
                logger.debug("Book {} has missing parent {}, treating as root", current, parent_id)
            current = parent_id

        if not chain:
            raise KeyError(book_id)

        # chain is leaf-first; fill the cache from the top down
        path = prefix
        for chain_id in reversed(chain):
            path = (*path, folder_name(self._books[chain_id].name))
            self._cache[chain_id] = path
        return path

    def folder(self, book_id: str) -> str:
        """Return the book folder as a relative POSIX path."""
        return "/".join(self.resolve_path(book_id))
