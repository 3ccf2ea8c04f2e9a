"""
Unit tests for request schemas.
"""

import pytest
from pydantic import ValidationError

from ratethedogs.schemas.dog import CreateDogRequest, UploadUrlRequest
from ratethedogs.schemas.rating import RateRequest, is_valid_rating


class TestRatingValidation:
    """Tests for rating values."""

    @pytest.mark.parametrize("value", [0.5, 1, 2.5, 4.5, 5.0])
    def test_valid_values(self, value):
        assert is_valid_rating(value)
        assert RateRequest(value=value).value == value

    @pytest.mark.parametrize("value", [0, 0.25, 1.3, 5.5, -1])
    def test_invalid_values(self, value):
        assert not is_valid_rating(value)

    @pytest.mark.parametrize("value,message", [
        (0.0, "Rating must be at least 0.5"),
        (5.5, "Rating must be at most 5.0"),
        (3.3, "Rating must be in 0.5 increments"),
    ])
    def test_rate_request_messages(self, value, message):
        with pytest.raises(ValidationError) as exc_info:
            RateRequest(value=value)
        assert message in str(exc_info.value)

    def test_rate_request_requires_number(self):
        with pytest.raises(ValidationError):
            RateRequest(value="great")

    @pytest.mark.parametrize("value", [True, False, "4.5", "5"])
    def test_rate_request_rejects_coercible_values(self, value):
        with pytest.raises(ValidationError):
            RateRequest(value=value)

    def test_whole_number_becomes_float(self):
        value = RateRequest(value=4).value
        assert value == 4.0
        assert isinstance(value, float)


class TestCreateDogRequest:
    """Tests for CreateDogRequest."""

    def test_camel_case_aliases(self):
        body = CreateDogRequest.model_validate({
            "imageKey": "dogs/abc-123.jpg",
            "breedId": 3,
            "name": "  Rex  ",
        })

        assert body.image_key == "dogs/abc-123.jpg"
        assert body.breed_id == 3
        assert body.name == "Rex"

    def test_snake_case_names_accepted(self):
        body = CreateDogRequest(image_key="dogs/abc.webp", breed_id=1)
        assert body.name is None

    def test_blank_name_becomes_none(self):
        body = CreateDogRequest(image_key="dogs/abc.png", breed_id=1, name="   ")
        assert body.name is None

    def test_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateDogRequest(image_key="dogs/abc.png", breed_id=1, name="x" * 51)
        assert "50 characters" in str(exc_info.value)

    @pytest.mark.parametrize("key", [
        "abc.jpg",
        "dogs/abc.gif",
        "dogs/../abc.jpg",
        "dogs/a/b.jpg",
    ])
    def test_invalid_image_key(self, key):
        with pytest.raises(ValidationError) as exc_info:
            CreateDogRequest(image_key=key, breed_id=1)
        assert "Image key must be in format" in str(exc_info.value)

    def test_breed_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            CreateDogRequest(image_key="dogs/abc.jpg", breed_id=0)


class TestUploadUrlRequest:
    """Tests for UploadUrlRequest."""

    def test_allowed_type(self):
        assert UploadUrlRequest.model_validate({"contentType": "image/png"}).content_type == "image/png"

    def test_rejected_type(self):
        with pytest.raises(ValidationError) as exc_info:
            UploadUrlRequest(content_type="image/gif")
        assert "Content type must be one of" in str(exc_info.value)

    def test_breed_id_must_fit_database_integer(self):
        with pytest.raises(ValidationError):
            CreateDogRequest(image_key="dogs/abc.jpg", breed_id=99999999999999999999)
