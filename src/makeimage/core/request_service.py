"""
Image generation requests.

ImageRequestService turns one prompt into one HTTP POST against
``<URL><GenerateImageEndpoint>`` and parses the JSON answer. Each call
completes exactly once with a GenerateImageResponse or an exception; there
are no retries.
"""

import base64
import binascii
import time
from concurrent.futures import Executor, Future
from typing import Any
from urllib.parse import urlsplit

import requests
from pydantic import ValidationError

from makeimage.core.models import DEFAULT_IMAGE_SIZE, GenerateImageRequest, GenerateImageResponse
from makeimage.core.settings import KEY_API_KEY, KEY_ENDPOINT, KEY_URL, Settings
from makeimage.logging_config import get_logger, log_prompts
from makeimage.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    NetworkError,
    ResponseError,
    UrlError,
)

logger = get_logger(__name__)

_RESPONSE_LOG_MAX = 2000
_ALLOWED_SCHEMES = ("http", "https")


def build_endpoint_url(base_url: str, endpoint: str) -> str:
    """
    Concatenate base URL and endpoint path and check the result is a usable URL.

    Raises:
        UrlError: If the result lacks an http(s) scheme or host, or contains whitespace
    """
    url = base_url + endpoint
    if not url or any(ch.isspace() for ch in url):
        raise UrlError(f"Invalid endpoint URL: {url!r}", url=url)
    try:
        parts = urlsplit(url)
        # accessing .port validates the port component
        parts.port
    except ValueError as e:
        raise UrlError(f"Invalid endpoint URL: {url!r} ({e})", url=url) from e
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.hostname:
        raise UrlError(f"Invalid endpoint URL: {url!r}", url=url)
    return url


def decode_first_image(response: GenerateImageResponse) -> bytes | None:
    """
    Decode the first image's base64 payload.

    Returns:
        Image bytes, or None if the payload is absent or not valid base64
    """
    payload = response.first_payload
    if payload is None:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def _truncate(text: str) -> str:
    if len(text) > _RESPONSE_LOG_MAX:
        return text[:_RESPONSE_LOG_MAX] + f"... <truncated, {len(text)} chars total>"
    return text


class ImageRequestService:
    """Issues image generation requests using the given Settings."""

    def __init__(self, settings: Settings, timeout: float | None = None) -> None:
        self.settings = settings
        self.timeout = timeout

    def _resolve(self) -> tuple[str, str, str]:
        """Return (api_key, base_url, endpoint). Raises ConfigurationError if any is missing."""
        resolved = {}
        for key in (KEY_API_KEY, KEY_URL, KEY_ENDPOINT):
            value = self.settings.string(key)
            if value is None:
                raise ConfigurationError(
                    f"Setting {key!r} is missing or not a string. "
                    "Check the OpenAI section of the settings file or the environment.",
                    key=key,
                )
            resolved[key] = value
        return resolved[KEY_API_KEY], resolved[KEY_URL], resolved[KEY_ENDPOINT]

    def validate(self) -> str:
        """
        Check that settings are complete and the endpoint URL is valid.

        Returns:
            The endpoint URL

        Raises:
            ConfigurationError: If a required setting is missing
            UrlError: If the endpoint URL is invalid
        """
        _, base_url, endpoint = self._resolve()
        return build_endpoint_url(base_url, endpoint)

    def build_request(self, prompt: str) -> tuple[str, dict[str, str], bytes]:
        """
        Build url, headers and JSON body for a prompt without sending anything.

        Raises:
            ConfigurationError: If a required setting is missing
            UrlError: If the endpoint URL is invalid
            EncodeError: If the body cannot be serialized
        """
        api_key, base_url, endpoint = self._resolve()
        url = build_endpoint_url(base_url, endpoint)
        headers = {
            "Authorization": f"Bearer {api_key}",
            "content-type": "application/json",
        }
        try:
            body = GenerateImageRequest(prompt=prompt).model_dump_json().encode("utf-8")
        except (ValidationError, TypeError, ValueError, UnicodeEncodeError) as e:
            raise EncodeError(f"Failed to encode request body: {e}") from e
        return url, headers, body

    def _parse_response(self, response: requests.Response) -> GenerateImageResponse:
        if not 200 <= response.status_code < 400:
            raise ResponseError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )
        try:
            data: Any = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Failed to parse API response as JSON: {e}",
                response=_truncate(response.text),
            ) from e
        try:
            return GenerateImageResponse.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected API response shape: {e.error_count()} validation error(s)",
                response=_truncate(response.text),
            ) from e

    def generate(self, prompt: str) -> GenerateImageResponse:
        """
        Generate one image for prompt.

        Args:
            prompt: Text describing the desired image

        Returns:
            Parsed GenerateImageResponse

        Raises:
            ConfigurationError: Missing APIKey, URL or GenerateImageEndpoint (no request made)
            UrlError: Endpoint URL is invalid (no request made)
            EncodeError: Body serialization failed (no request made)
            ResponseError: HTTP status outside [200, 400)
            DecodeError: Body is not the expected JSON
            NetworkError: Transport-level failure
        """
        url, headers, body = self.build_request(prompt)

        logger.info("Generating image size=%s", DEFAULT_IMAGE_SIZE)
        if log_prompts():
            logger.info("Prompt: %s", prompt)
        logger.debug("API request url=%s timeout=%s", url, self.timeout)

        start_time = time.time()
        try:
            response = requests.post(url, headers=headers, data=body, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(
                f"Request timed out after {self.timeout} seconds.", original_error=e
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(
                "Failed to connect to the image API. Please check your internet connection.",
                original_error=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error during API request: {e}", original_error=e) from e
        elapsed = time.time() - start_time
        logger.debug("API response status=%s time=%.2fs", response.status_code, elapsed)

        result = self._parse_response(response)
        logger.info(
            "Generated in %.1fs images=%d created=%s", elapsed, len(result.data), result.created
        )
        return result

    def submit(self, prompt: str, executor: Executor) -> "Future[GenerateImageResponse]":
        """Run generate(prompt) on executor and return its Future."""
        return executor.submit(self.generate, prompt)


__all__ = [
    "ImageRequestService",
    "build_endpoint_url",
    "decode_first_image",
]
