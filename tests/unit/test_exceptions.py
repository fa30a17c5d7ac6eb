"""Unit tests for makeimage exceptions."""

import pytest

from makeimage.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    MakeImageError,
    NetworkError,
    ResponseError,
    UrlError,
)


@pytest.mark.unit
class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [ConfigurationError, UrlError, EncodeError, ResponseError, DecodeError, NetworkError],
    )
    def test_subclasses_are_makeimage_error(self, cls):
        assert issubclass(cls, MakeImageError)

    def test_base_is_exception(self):
        assert issubclass(MakeImageError, Exception)


@pytest.mark.unit
class TestAttributes:
    def test_configuration_error_key(self):
        e = ConfigurationError("missing", key="APIKey")
        assert str(e) == "missing"
        assert e.key == "APIKey"
        assert ConfigurationError("missing").key == ""

    def test_url_error_url(self):
        assert UrlError("bad", url="ftp://x").url == "ftp://x"

    def test_response_error(self):
        e = ResponseError("failed", status_code=404, response="not found")
        assert e.status_code == 404
        assert e.response == "not found"
        assert str(e) == "failed"

    def test_decode_error_response(self):
        assert DecodeError("not json", response="<html>").response == "<html>"

    def test_network_error_original(self):
        inner = ConnectionError("refused")
        e = NetworkError("offline", original_error=inner)
        assert e.original_error is inner
        assert NetworkError("offline").original_error is None
