"""Tests for PydanticDecoder."""

import pytest
from pydantic import BaseModel

from vimeo_client.client.decoder import PydanticDecoder
from vimeo_client.client.exceptions import DecodeError
from vimeo_client.errors import LocalErrorCode


class Video(BaseModel):
    uri: str
    name: str
    duration: int = 0


class TestPydanticDecoder:
    """Tests for PydanticDecoder."""

    def test_decodes_model(self):
        """A valid payload becomes the target model."""
        video = PydanticDecoder().decode({"uri": "/videos/1", "name": "x"}, Video)
        assert video == Video(uri="/videos/1", name="x")

    def test_decodes_plain_types(self):
        """Any TypeAdapter-compatible target works."""
        assert PydanticDecoder().decode({"a": 1}, dict) == {"a": 1}

    def test_no_target(self):
        """No target type means no mapping class."""
        with pytest.raises(DecodeError) as exc_info:
            PydanticDecoder().decode({"a": 1}, None)
        assert exc_info.value.code is LocalErrorCode.NO_MAPPING_CLASS

    def test_mapping_failed(self):
        """Payloads that do not fit the model fail mapping."""
        with pytest.raises(DecodeError) as exc_info:
            PydanticDecoder().decode({"uri": "/videos/1"}, Video)
        assert exc_info.value.code is LocalErrorCode.MAPPING_FAILED

    def test_not_a_dictionary(self):
        """Non-object payloads are invalid response dictionaries."""
        with pytest.raises(DecodeError) as exc_info:
            PydanticDecoder().decode(["a"], Video)  # type: ignore[arg-type]
        assert exc_info.value.code is LocalErrorCode.INVALID_RESPONSE_DICTIONARY
