"""
Serves uploaded dog images from local storage.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..errors import NotFoundError
from ..utils.images import resolve_upload_path


router = APIRouter(prefix="/api/images", tags=["images"])


@router.get("/{image_key:path}")
def get_image(image_key: str):
    try:
        path = resolve_upload_path(image_key)
    except ValueError:
        raise NotFoundError("Image")

    if not path.is_file():
        raise NotFoundError("Image")
    return FileResponse(path)
