"""
Upload handling for raw card images.

Validates each incoming file (type and size) and writes its bytes to the
upload directory under a generated name. Validation happens here, at the
boundary, so the ingestion pipeline only ever sees accepted files.
"""

import logging
from collections.abc import Sequence
from pathlib import Path, PurePath
from uuid import uuid4

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from tarotdeck.config import ALLOWED_IMAGE_TYPES, MAX_UPLOAD_BYTES
from tarotdeck.models.failure import (
    FileTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
)
from tarotdeck.parsers.filename import IMAGE_EXTENSIONS
from tarotdeck.services.bulk_ingestion import StoredFile

logger = logging.getLogger(__name__)


def validate_image_upload(filename: str, content_type: str | None, size: int) -> None:
    """
    Check an upload against the type and size limits.

    Raises:
        UnsupportedMediaTypeError: If content_type is not JPEG, PNG or WebP
        FileTooLargeError: If size exceeds MAX_UPLOAD_BYTES
    """
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedMediaTypeError(filename, content_type)
    if size > MAX_UPLOAD_BYTES:
        raise FileTooLargeError(filename, size, MAX_UPLOAD_BYTES)


def original_basename(filename: str | None) -> str:
    """Client filename without any directory components."""
    if not filename:
        return ""
    # Browsers on Windows may send "C:\\path\\card.png"
    return PurePath(filename.replace("\\", "/")).name


def stored_filename(original_name: str) -> str:
    """Generate a unique storage name, keeping a known image extension."""
    suffix = PurePath(original_name).suffix.lower()
    if suffix.lstrip(".") not in IMAGE_EXTENSIONS:
        suffix = ""
    return f"{uuid4().hex}{suffix}"


async def _upload_size(file: UploadFile) -> int:
    # The multipart parser records the size; files built by hand may not have one
    if file.size is not None:
        return file.size
    size = len(await file.read())
    await file.seek(0)
    return size


def _write_file(upload_dir: Path, filename: str, content: bytes) -> None:
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / filename).write_bytes(content)


async def save_upload(file: UploadFile, upload_dir: Path, url_prefix: str) -> StoredFile:
    """
    Validate an uploaded file and write it to the upload directory.

    The write runs in the threadpool so large batches do not block the
    event loop.

    Args:
        file: Incoming multipart file
        upload_dir: Directory the bytes are written to
        url_prefix: URL prefix the directory is served under

    Returns:
        StoredFile describing where the bytes now live

    Raises:
        UnsupportedMediaTypeError, FileTooLargeError: File rejected
        StorageError: The file could not be written
    """
    original_name = original_basename(file.filename)
    validate_image_upload(original_name, file.content_type, await _upload_size(file))
    content = await file.read()

    filename = stored_filename(original_name)
    try:
        await run_in_threadpool(_write_file, upload_dir, filename, content)
    except OSError as e:
        logger.error("Failed to write upload %s to %s: %s", original_name, upload_dir, e)
        raise StorageError("store uploaded file", detail=type(e).__name__) from e

    return StoredFile(
        filename=filename,
        original_name=original_name,
        file_url=f"{url_prefix.rstrip('/')}/{filename}",
    )


async def save_uploads(
    files: Sequence[UploadFile], upload_dir: Path, url_prefix: str
) -> list[StoredFile]:
    """
    Validate and store a batch of files in order.

    Every file is validated before any is written, so a rejected file
    leaves nothing behind on disk. Oversized files are rejected from their
    recorded size without being read.
    """
    for file in files:
        validate_image_upload(
            original_basename(file.filename), file.content_type, await _upload_size(file)
        )

    return [await save_upload(file, upload_dir, url_prefix) for file in files]
