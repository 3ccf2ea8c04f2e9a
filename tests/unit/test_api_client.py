"""
Unit tests for the Dog CEO API client.
"""

import pytest
import aiohttp
from unittest.mock import AsyncMock, call, patch

from ratethedogs.utils.api_clients import DogCeoAPIError, DogCeoClient


class TestDogCeoClient:
    """Unit tests for DogCeoClient."""

    @pytest.fixture
    def client(self):
        """Client with fast retries and no delay between batches."""
        return DogCeoClient(
            base_url="https://dog.ceo/api/",
            max_retries=2,
            retry_base_delay=1.0,
            batch_size=2,
            batch_delay=0,
        )

    def test_base_url_trailing_slash_removed(self, client):
        assert client.base_url == "https://dog.ceo/api"

    @pytest.mark.asyncio
    async def test_fetch_breed_list(self, client):
        client._request = AsyncMock(return_value={
            "status": "success",
            "message": {"bulldog": ["french"], "beagle": []},
        })

        breeds = await client.fetch_breed_list()

        assert breeds == {"bulldog": ["french"], "beagle": []}
        client._request.assert_awaited_once_with("https://dog.ceo/api/breeds/list/all")

    @pytest.mark.asyncio
    async def test_fetch_breed_list_failure_status(self, client):
        client._request = AsyncMock(return_value={"status": "error", "message": "nope"})

        with pytest.raises(DogCeoAPIError):
            await client.fetch_breed_list()

    @pytest.mark.asyncio
    async def test_retries_with_exponential_backoff(self, client):
        client._request = AsyncMock(side_effect=[
            aiohttp.ClientError("connection reset"),
            aiohttp.ClientError("connection reset"),
            {"status": "success", "message": ["https://images.dog.ceo/breeds/beagle/1.jpg"]},
        ])

        with patch("ratethedogs.utils.api_clients.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            images = await client.fetch_breed_images("beagle")

        assert images == ["https://images.dog.ceo/breeds/beagle/1.jpg"]
        assert client._request.await_count == 3
        assert mock_sleep.await_args_list == [call(1.0), call(2.0)]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, client):
        client._request = AsyncMock(side_effect=aiohttp.ClientError("down"))

        with patch("ratethedogs.utils.api_clients.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(DogCeoAPIError):
                await client._get_json("https://dog.ceo/api/breeds/list/all")

        assert client._request.await_count == 3

    @pytest.mark.asyncio
    async def test_fetch_breed_images_returns_empty_on_error(self, client):
        client._request = AsyncMock(side_effect=aiohttp.ClientError("down"))

        with patch("ratethedogs.utils.api_clients.asyncio.sleep", new_callable=AsyncMock):
            images = await client.fetch_breed_images("bulldog-french")

        assert images == []

    @pytest.mark.asyncio
    async def test_fetch_breed_images_sub_breed_url(self, client):
        client._request = AsyncMock(return_value={"status": "success", "message": []})

        await client.fetch_breed_images("bulldog-french")

        client._request.assert_awaited_once_with("https://dog.ceo/api/breed/bulldog/french/images")

    @pytest.mark.asyncio
    async def test_fetch_all_images_in_batches(self, client):
        client.batch_delay = 0.5

        async def fake_fetch(breed):
            return [f"https://images.dog.ceo/breeds/{breed}/1.jpg"]

        client.fetch_breed_images = AsyncMock(side_effect=fake_fetch)

        with patch("ratethedogs.utils.api_clients.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await client.fetch_all_images(["a", "b", "c", "d", "e"])

        assert list(result) == ["a", "b", "c", "d", "e"]
        assert result["c"] == ["https://images.dog.ceo/breeds/c/1.jpg"]
        # Three batches, pauses only between them
        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.5)
