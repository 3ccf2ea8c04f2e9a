"""Utility modules for RateTheDogs."""

from .api_clients import DogCeoAPIError, DogCeoClient
from .dog_ceo_breeds import get_breed_slug, get_readable_breed_name
from .helpers import as_utc, get_client_ip
from .images import get_image_url
from .rate_limit import KeyedRateLimiter, RateLimiter

__all__ = [
    "DogCeoAPIError",
    "DogCeoClient",
    "get_breed_slug",
    "get_readable_breed_name",
    "as_utc",
    "get_client_ip",
    "get_image_url",
    "KeyedRateLimiter",
    "RateLimiter",
]
