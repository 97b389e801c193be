# core/storage.py
# Image storage for project screenshots and profile avatars

import logging
import os
import uuid
from urllib.parse import unquote, urlparse

from django.conf import settings
from django.core.files.storage import default_storage

from .exceptions import ImageStorageError, ValidationError

logger = logging.getLogger("showcase")


def validate_image_size(image_file):
    """Field validator: reject images above MAX_IMAGE_UPLOAD_SIZE."""
    limit = settings.MAX_IMAGE_UPLOAD_SIZE
    if image_file.size > limit:
        raise ValidationError(f"Image must be at most {limit // (1024 * 1024)} MB.")
    return image_file


def upload_image(image_file, folder: str = "uploads") -> str:
    """
    Store an uploaded image and return its public URL.

    Args:
        image_file: The uploaded file (Django UploadedFile / File)
        folder: Folder inside the storage backend ("projects", "avatars")

    Returns:
        The durable URL of the stored image

    Raises:
        ImageStorageError if the backend rejects the write
    """
    _, ext = os.path.splitext(getattr(image_file, "name", "") or "")
    name = f"{folder}/{uuid.uuid4().hex}{ext.lower()}"

    try:
        stored_name = default_storage.save(name, image_file)
        url = default_storage.url(stored_name)
    except Exception as e:
        logger.error(f"Failed to upload image to {folder}: {e}")
        raise ImageStorageError() from e

    logger.info(f"Uploaded image to storage: {stored_name}")
    return url


def storage_name_from_url(url: str | None) -> str | None:
    """
    Map a URL produced by `upload_image` back to its storage name.

    URL format: <MEDIA_URL><folder>/<file>, e.g.
        /media/projects/3f2a....png
        https://bucket.s3.amazonaws.com/avatars/9c1e....jpg

    Returns None for URLs this storage does not manage.
    """
    if not url:
        return None

    media = urlparse(settings.MEDIA_URL)
    parsed = urlparse(url)

    # Absolute media URL (S3 / CDN): host must match
    if media.netloc and parsed.netloc and parsed.netloc != media.netloc:
        return None

    prefix = media.path or "/"
    if not parsed.path.startswith(prefix):
        return None

    name = unquote(parsed.path[len(prefix):])
    return name or None


def delete_image(url: str | None) -> bool:
    """
    Delete a previously stored image.

    Returns:
        True if a file was removed, False otherwise
    """
    name = storage_name_from_url(url)
    if not name:
        return False

    try:
        if not default_storage.exists(name):
            return False
        default_storage.delete(name)
    except Exception as e:
        # the record no longer points at the file, an orphan is harmless
        logger.error(f"Failed to delete image {name}: {e}")
        return False

    logger.info(f"Deleted image from storage: {name}")
    return True
