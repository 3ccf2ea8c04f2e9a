"""
Rating request and result schemas.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

from ..constants import RATING_INCREMENT, RATING_MAX, RATING_MIN


def is_valid_rating(value: float) -> bool:
    """Check a rating is within bounds and on a 0.5 step."""
    if value < RATING_MIN or value > RATING_MAX:
        return False
    steps = value / RATING_INCREMENT
    return abs(steps - round(steps)) < 1e-9


class RateRequest(BaseModel):
    """Body of POST /api/dogs/{id}/rate."""

    # JSON numbers only: booleans and numeric strings are rejected
    value: Union[StrictInt, StrictFloat] = Field(
        ..., description="Rating from 0.5 to 5.0 in 0.5 increments"
    )

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Union[int, float]) -> float:
        if v < RATING_MIN:
            raise ValueError(f"Rating must be at least {RATING_MIN}")
        if v > RATING_MAX:
            raise ValueError(f"Rating must be at most {RATING_MAX}")
        if not is_valid_rating(v):
            raise ValueError(f"Rating must be in {RATING_INCREMENT} increments")
        return float(v)


class RateResult(BaseModel):
    """Result of a successful rating, including the dog's updated stats."""

    rated: bool = True
    avg_rating: Optional[float] = None
    rating_count: int = 0
