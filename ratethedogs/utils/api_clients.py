"""
External API clients for RateTheDogs.
Handles communication with the public Dog CEO API.
"""

import asyncio
from typing import Any, Dict, List, Optional
import aiohttp
from loguru import logger

from ..config import settings
from .dog_ceo_utils import BreedImages, get_breed_images_url
from .rate_limit import RateLimiter


class DogCeoAPIError(Exception):
    """Raised when the Dog CEO API cannot be reached or returns a failure."""


class DogCeoClient:
    """Client for the Dog CEO API (https://dog.ceo/dog-api/)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        batch_size: Optional[int] = None,
        batch_delay: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.dog_ceo_base_url).rstrip("/")
        self.max_retries = settings.api_max_retries if max_retries is None else max_retries
        self.retry_base_delay = (
            settings.api_retry_base_delay if retry_base_delay is None else retry_base_delay
        )
        self.batch_size = batch_size or settings.fetch_batch_size
        self.batch_delay = settings.fetch_batch_delay if batch_delay is None else batch_delay
        self.rate_limiter = RateLimiter(settings.api_rate_limit)

    async def _request(self, url: str) -> Dict[str, Any]:
        """Perform a single GET and decode the JSON body."""
        await self.rate_limiter.acquire()

        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=settings.api_timeout),
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Dog CEO API error: {response.status}, "
                        f"url='{response.url}', response='{error_text[:200]}'"
                    )
                response.raise_for_status()
                return await response.json()

    async def _get_json(self, url: str) -> Dict[str, Any]:
        """
        GET a URL with exponential backoff retries.

        Waits retry_base_delay * 2**attempt seconds between attempts.

        Args:
            url: Absolute URL

        Returns:
            Decoded JSON body

        Raises:
            DogCeoAPIError: If every attempt fails
        """
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                return await self._request(url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2 ** attempt)
                    logger.warning(
                        f"Request to {url} failed ({e}), retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    await asyncio.sleep(delay)

        raise DogCeoAPIError(
            f"Request to {url} failed after {self.max_retries + 1} attempts: {last_error}"
        )

    async def fetch_breed_list(self) -> Dict[str, List[str]]:
        """
        Fetch the nested breed list.

        Returns:
            {"bulldog": ["french", "english"], "beagle": [], ...}
        """
        logger.info("Fetching breed list...")
        data = await self._get_json(f"{self.base_url}/breeds/list/all")

        if data.get("status") != "success" or not data.get("message"):
            raise DogCeoAPIError("Failed to fetch breed list from Dog CEO API")

        return data["message"]

    async def fetch_breed_images(self, breed: str) -> List[str]:
        """
        Fetch every image URL of one breed.

        Args:
            breed: Breed key, e.g. "bulldog-french"

        Returns:
            Image URLs, or an empty list if the breed could not be fetched
        """
        url = get_breed_images_url(breed, self.base_url)
        try:
            data = await self._get_json(url)
        except DogCeoAPIError as e:
            logger.warning(f"Failed to fetch images for {breed}: {e}")
            return []

        if data.get("status") != "success" or not isinstance(data.get("message"), list):
            logger.warning(f"Failed to fetch images for {breed}")
            return []

        return data["message"]

    async def fetch_all_images(self, breed_list: List[str]) -> BreedImages:
        """
        Fetch images for many breeds in fixed-size concurrent batches.

        Batches run one after another with batch_delay seconds between them.

        Args:
            breed_list: Flat list of breed keys

        Returns:
            Map of breed key -> image URLs
        """
        breed_images: BreedImages = {}
        total_batches = (len(breed_list) + self.batch_size - 1) // self.batch_size

        for index in range(0, len(breed_list), self.batch_size):
            batch = breed_list[index:index + self.batch_size]
            batch_number = index // self.batch_size + 1
            logger.info(f"Fetching batch {batch_number}/{total_batches} ({len(batch)} breeds)")

            results = await asyncio.gather(
                *(self.fetch_breed_images(breed) for breed in batch)
            )
            for breed, images in zip(batch, results):
                breed_images[breed] = images

            if index + self.batch_size < len(breed_list) and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

        return breed_images
