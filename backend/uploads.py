"""Profile photo upload filter and storage."""

import logging
import random
import time
from pathlib import Path

from fastapi import File, UploadFile, status

from backend.core import config
from backend.core.errors import UploadRejected

logger = logging.getLogger(__name__)

UNSUPPORTED_TYPE_MESSAGE = 'Photo extension only can .jpg and .jpeg'
TOO_LARGE_MESSAGE = 'File too large'


def upload_directory() -> Path:
    return Path(config.UPLOAD_DIR)


def ensure_upload_directory() -> Path:
    directory = upload_directory()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def build_stored_filename(original_filename: str, field_name: str = config.PHOTO_FIELD_NAME) -> str:
    unique_suffix = f'{int(time.time() * 1000)}-{random.randint(0, 10**9)}'
    return f'{field_name}-{unique_suffix}{Path(original_filename).suffix}'


def photo_url(stored_filename: str) -> str:
    return f'{config.PUBLIC_BASE_URL}{config.STATIC_MOUNT_PATH}/{stored_filename}'


def validate_photo_type(content_type: str | None) -> None:
    if (content_type or '').lower() not in config.ALLOWED_PHOTO_TYPES:
        raise UploadRejected(UNSUPPORTED_TYPE_MESSAGE)


def read_limited(upload: UploadFile, limit: int) -> bytes:
    data = upload.file.read(limit + 1)
    if len(data) > limit:
        raise UploadRejected(TOO_LARGE_MESSAGE, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
    return data


def save_photo(upload: UploadFile) -> str:
    """Check ``upload`` against the photo filter and write it to the upload directory.

    Returns the randomized filename it was stored under.
    """
    validate_photo_type(upload.content_type)
    data = read_limited(upload, config.MAX_PHOTO_BYTES)

    stored_filename = build_stored_filename(upload.filename or '')
    destination = ensure_upload_directory() / stored_filename
    destination.write_bytes(data)

    logger.info('Stored photo %s (%d bytes)', stored_filename, len(data))
    return stored_filename


def accepted_photo(photo: UploadFile | None = File(None)) -> str | None:
    """Request dependency: runs the upload filter before the route body."""
    if photo is None or not photo.filename:
        return None
    return save_photo(photo)
