"""
Dog data models and schemas.
"""

import re
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import MAX_DB_INTEGER, UPLOAD_ALLOWED_TYPES


IMAGE_KEY_PATTERN = re.compile(r"^dogs/[\w-]+\.(jpg|jpeg|png|webp)$", re.IGNORECASE)


class DogStatus(str, Enum):
    """Moderation status of a dog."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ImageSource(str, Enum):
    """Where a dog image comes from."""
    DOG_CEO = "dog_ceo"
    USER_UPLOAD = "user_upload"


class DogDetails(BaseModel):
    """Dog with breed info and rating stats, as served to clients."""

    id: int
    name: Optional[str] = None
    breed_id: int
    breed_name: str
    breed_slug: str
    avg_rating: Optional[float] = None
    rating_count: int = 0
    image_url: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 42,
                "name": "Max",
                "breed_id": 3,
                "breed_name": "Golden Retriever",
                "breed_slug": "retriever-golden",
                "avg_rating": 4.5,
                "rating_count": 12,
                "image_url": "https://images.dog.ceo/breeds/retriever-golden/n02099601_1.jpg",
            }
        }
    )


class CreateDogRequest(BaseModel):
    """Body of POST /api/dogs."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, description="Optional dog name")
    image_key: str = Field(..., alias="imageKey", description="Storage key of the uploaded image")
    breed_id: int = Field(..., alias="breedId", gt=0, le=MAX_DB_INTEGER, description="Breed ID")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        """Trim the name and enforce the 50 character limit."""
        if v is None:
            return None
        v = v.strip()
        if len(v) > 50:
            raise ValueError("Dog name must be 50 characters or less")
        return v or None

    @field_validator("image_key")
    @classmethod
    def validate_image_key(cls, v: str) -> str:
        if not IMAGE_KEY_PATTERN.match(v):
            raise ValueError("Image key must be in format: dogs/{id}.{ext}")
        return v


class UploadUrlRequest(BaseModel):
    """Body of POST /api/dogs/upload-url."""

    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="contentType")

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, v: str) -> str:
        if v not in UPLOAD_ALLOWED_TYPES:
            raise ValueError(
                f"Content type must be one of: {', '.join(UPLOAD_ALLOWED_TYPES)}"
            )
        return v


class PendingDog(BaseModel):
    """Dog awaiting moderation."""

    id: int
    name: Optional[str] = None
    breed_id: int
    image_url: str
    image_source: ImageSource
    status: DogStatus
    uploader_anon_id: Optional[str] = None
    created_at: datetime


class PrefetchResult(BaseModel):
    """Batch of dogs for client-side prefetching."""

    items: List[DogDetails] = Field(default_factory=list)
