"""
Unit tests for Dog CEO breed name mapping.
"""

import pytest

from ratethedogs.utils.dog_ceo_breeds import (
    DOG_CEO_BREED_MAP,
    get_all_breed_keys,
    get_all_breeds,
    get_api_path,
    get_breed_count,
    get_breed_slug,
    get_readable_breed_name,
    is_known_breed,
    search_breeds,
)


class TestReadableBreedName:
    """Tests for get_readable_breed_name."""

    def test_known_breed(self):
        assert get_readable_breed_name("retriever-golden") == "Golden Retriever"
        assert get_readable_breed_name("mix") == "Mixed Breed"

    def test_case_and_whitespace_insensitive(self):
        assert get_readable_breed_name("  Retriever-Golden ") == "Golden Retriever"

    def test_unknown_breed_is_title_cased(self):
        assert get_readable_breed_name("some-new-breed") == "Some New Breed"

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_invalid_input(self, value):
        assert get_readable_breed_name(value) == "Unknown Breed"

    def test_boston_terrier_listed_twice(self):
        """Both Dog CEO keys resolve to the same display name."""
        assert get_readable_breed_name("bulldog-boston") == "Boston Terrier"
        assert get_readable_breed_name("terrier-boston") == "Boston Terrier"


class TestBreedKeys:
    """Tests for slugs, API paths and lookups."""

    def test_slug(self):
        assert get_breed_slug("Retriever-Golden") == "retriever-golden"
        assert get_breed_slug("") == "unknown"

    def test_api_path_replaces_first_hyphen_only(self):
        assert get_api_path("retriever-golden") == "retriever/golden"
        assert get_api_path("beagle") == "beagle"
        assert get_api_path("a-b-c") == "a/b-c"
        assert get_api_path("") == ""

    def test_is_known_breed(self):
        assert is_known_breed("pug")
        assert is_known_breed("PUG")
        assert not is_known_breed("unicorn")
        assert not is_known_breed(None)

    def test_listing(self):
        assert get_breed_count() == len(DOG_CEO_BREED_MAP)
        assert len(get_all_breed_keys()) == get_breed_count()
        assert ("beagle", "Beagle") in get_all_breeds()

    def test_search_matches_key_and_name(self):
        results = dict(search_breeds("golden"))
        assert results["retriever-golden"] == "Golden Retriever"

        by_name = dict(search_breeds("Boston"))
        assert set(by_name) >= {"bulldog-boston", "terrier-boston"}

    def test_search_empty_query(self):
        assert search_breeds("") == []
