"""Write file attachments into the media folder."""

import base64
import binascii
import mimetypes
from collections.abc import Mapping
from pathlib import PurePosixPath

from loguru import logger

from inkdrop_export.config import MEDIA_FOLDER
from inkdrop_export.errors import RecordError
from inkdrop_export.models.record import FileAttachment
from inkdrop_export.protocols import WriterProtocol

# Only the built-in table, so results do not depend on the host's mime.types.
_MIME_TYPES = mimetypes.MimeTypes()


def resolve_extension(attachment: FileAttachment) -> str:
    """Pick a file extension (with a leading dot) for an attachment.

    The MIME content type wins; the extension of the original filename is the
    fallback. Returns an empty string when neither gives one.
    """
    extension = ""
    if attachment.content_type:
        extension = _MIME_TYPES.guess_extension(attachment.content_type) or ""
    if not extension:
        extension = PurePosixPath(attachment.name).suffix
    extension = extension.lstrip(".")
    return f".{extension}" if extension else ""


def attachment_path(attachment: FileAttachment) -> str:
    """Return the output path of an attachment, relative to the output root."""
    return f"{MEDIA_FOLDER}/{attachment.short_id}{resolve_extension(attachment)}"


def materialize_attachments(
    files: Mapping[str, FileAttachment],
    writer: WriterProtocol,
) -> dict[str, str]:
    """Decode every attachment and write it under the media folder.

    Args:
        files: Attachments keyed by composite id.
        writer: Output writer.

    Returns:
        Mapping of composite file id to output path relative to the output root.
    """
    writer.make_dir(MEDIA_FOLDER)
    paths: dict[str, str] = {}
    for file_id in sorted(files):
        attachment = files[file_id]
        path = attachment_path(attachment)
        try:
            payload = base64.b64decode(attachment.data)
        except binascii.Error as exc:
            msg = f"Attachment {file_id!r} has an invalid base64 payload: {exc}"
            raise RecordError(msg) from exc
        logger.debug("Writing file: {}", path)
        writer.make_binary_file(path, payload)
        paths[file_id] = path
    return paths
