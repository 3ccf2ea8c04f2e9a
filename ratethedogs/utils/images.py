"""
Dog image URL resolution and local upload storage.
"""

import uuid
from pathlib import Path
from typing import Optional
from loguru import logger

from ..config import settings
from ..constants import IMAGE_SOURCE_DOG_CEO, IMAGE_SOURCE_USER_UPLOAD


PLACEHOLDER_IMAGE = "https://placedog.net/500/500?random"


def generate_image_key(content_type: str) -> str:
    """
    Generate a unique storage key for an upload.

    Args:
        content_type: MIME type of the image (e.g. "image/png")

    Returns:
        Key of the form "dogs/<uuid>.<ext>"
    """
    ext = content_type.split("/")[-1] if "/" in content_type else ""
    return f"dogs/{uuid.uuid4()}.{ext or 'jpg'}"


def _uploaded_image_url(image_key: str, public_url: Optional[str]) -> str:
    if public_url:
        return f"{public_url.rstrip('/')}/{image_key}"
    return f"/api/images/{image_key}"


def get_image_url(
    image_url: Optional[str],
    image_key: Optional[str],
    image_source: Optional[str],
    public_url: Optional[str] = None,
) -> str:
    """
    Resolve the public URL of a dog image.

    Dog CEO images are served from their stored URL. Uploads are served from
    the public image host when configured, otherwise through /api/images.

    Args:
        image_url: Stored absolute image URL
        image_key: Storage key of an uploaded image
        image_source: dog_ceo or user_upload
        public_url: Public base URL for uploads (defaults to settings.image_public_url)

    Returns:
        Image URL, or a placeholder when the dog has no image
    """
    if public_url is None:
        public_url = settings.image_public_url

    if image_source == IMAGE_SOURCE_DOG_CEO and image_url:
        return image_url

    if image_source == IMAGE_SOURCE_USER_UPLOAD and image_key:
        return _uploaded_image_url(image_key, public_url)

    if image_url:
        return image_url

    if image_key:
        return _uploaded_image_url(image_key, public_url)

    return PLACEHOLDER_IMAGE


def resolve_upload_path(image_key: str, upload_dir: Optional[Path] = None) -> Path:
    """
    Map a storage key to a file under the upload directory.

    Raises:
        ValueError: If the key escapes the upload directory
    """
    base = (upload_dir or settings.get_upload_path()).resolve()
    path = (base / image_key).resolve()
    if base not in path.parents:
        raise ValueError(f"Invalid image key: {image_key}")
    return path


def save_upload(image_key: str, data: bytes, upload_dir: Optional[Path] = None) -> Path:
    """Write uploaded image bytes to local storage."""
    path = resolve_upload_path(image_key, upload_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Stored upload {image_key} ({len(data)} bytes)")
    return path

