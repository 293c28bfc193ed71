"""File writer for the output tree."""

from pathlib import Path

from loguru import logger

from inkdrop_export.errors import OutputPathError


class FileWriter:
    """Write output files in a smart way.

    - Do not override files if contents are the same.
    - Keep the set of files written this run, so callers can detect two
      records competing for one filename.

    Rerunning into an existing tree is equivalent to writing into an empty one,
    except that mtimes of unchanged files are preserved.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir).resolve()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Writer ready, output dir {!r}", str(self.output_dir))

        # Absolute paths written this run.
        self._files_made: set[Path] = set()

        self._num_same = 0
        self._num_changed = 0

    def _resolve(self, name_rel: str) -> Path:
        if Path(name_rel).is_absolute():
            msg = f"must be relative: {name_rel!r}"
            raise OutputPathError(msg)
        path = (self.output_dir / name_rel).resolve()
        if path != self.output_dir and self.output_dir not in path.parents:
            msg = f"Path escapes output dir: {name_rel!r}"
            raise OutputPathError(msg)
        return path

    def make_dir(self, dirname_rel: str) -> None:
        """Create a directory relative to the output directory, with parents."""
        self._resolve(dirname_rel).mkdir(parents=True, exist_ok=True)

    def has_written(self, fname_rel: str) -> bool:
        """Return True if ``fname_rel`` was written earlier in this run."""
        return self._resolve(fname_rel) in self._files_made

    def make_text_file(self, fname_rel: str, contents: str) -> None:
        """Write a UTF-8 text file relative to the output directory."""
        self.make_binary_file(fname_rel, contents.encode("utf-8"))

    def make_binary_file(self, fname_rel: str, data: bytes) -> None:
        """Write bytes to a file relative to the output directory.

        Parent directories are created as needed.
        """
        path = self._resolve(fname_rel)
        is_rewrite = path in self._files_made
        self._files_made.add(path)
        action = "create"
        try:
            if path.read_bytes() == data:
                if not is_rewrite:
                    self._num_same += 1
                return
            if not is_rewrite:
                self._num_changed += 1
            action = "update"
        except FileNotFoundError:
            pass

        logger.debug("Writing ({}) {!r}", action, fname_rel)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def finalize(self) -> None:
        """Log update statistics."""
        num_new = len(self._files_made) - self._num_same - self._num_changed
        log_msg = f"Outputs: {self._num_same} same, {self._num_changed} changed, {num_new} new"
        if self._num_same == len(self._files_made):
            logger.debug(log_msg)
        else:
            logger.info(log_msg)
