"""Protocols for dependency injection in the exporter."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class WriterProtocol(Protocol):
    """Protocol for output writers used by the exporter."""

    def make_dir(self, dirname_rel: str) -> None:
        """Create a directory (and its parents) in the output tree."""
        ...

    def make_text_file(self, fname_rel: str, contents: str) -> None:
        """Write a UTF-8 text file to the output tree."""
        ...

    def make_binary_file(self, fname_rel: str, data: bytes) -> None:
        """Write a binary file to the output tree."""
        ...

    def has_written(self, fname_rel: str) -> bool:
        """Check whether a file was already written during this run."""
        ...
