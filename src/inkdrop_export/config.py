"""Configuration constants for inkdrop-export."""

from dataclasses import dataclass
from pathlib import Path

# Backup layout. Records live in DATA_SUBDIR when it exists, else in the input root.
DATA_SUBDIR: str = "data"
CONFIG_FILENAME: str = "config.json"

# Output layout.
MEDIA_FOLDER: str = "_media"
README_FILENAME: str = "_README.md"

# Pseudo book id Inkdrop uses for deleted notes.
TRASH_BOOK_ID: str = "trash"

# Internal links look like "inkdrop://file:<id>".
LINK_SCHEME: str = "inkdrop"


@dataclass(frozen=True)
class ExportOptions:
    """Resolved settings for one conversion run."""

    input_dir: Path
    output_dir: Path
    ignore_completed: bool = False
    verbose: bool = False
