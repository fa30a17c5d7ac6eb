"""Shared fixtures for unit tests."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from makeimage import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        {
            "APIKey": "sk-test",
            "URL": "https://api.example.com",
            "GenerateImageEndpoint": "/v1/images/generations",
        },
        source="test",
    )


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for requests.Response stand-ins; body=None means the body is not JSON."""

    def _make(status_code: int = 200, body: object | None = None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if body is None:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        else:
            response.json.return_value = body
        return response

    return _make
