"""
Wire models for the image generation endpoint.

Request body:  {"prompt": str, "n": 1, "size": "1024x1024", "response_format": "b64_json"}
Response body: {"created": int, "data": [{"url": str | null, "b64_json": str | null}, ...]}
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_IMAGE_COUNT = 1
DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_RESPONSE_FORMAT = "b64_json"


class GenerateImageRequest(BaseModel):
    """Request body for one image generation call. Built fresh per call."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    n: int = DEFAULT_IMAGE_COUNT
    size: str = DEFAULT_IMAGE_SIZE
    response_format: str = DEFAULT_RESPONSE_FORMAT


class ImageDatum(BaseModel):
    """One generated image: a URL reference or an inline base64 payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str | None = None
    b64_json: str | None = Field(default=None, repr=False)


class GenerateImageResponse(BaseModel):
    """Parsed response body."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    created: int
    data: list[ImageDatum]

    @property
    def first_payload(self) -> str | None:
        """Base64 payload of the first image, or None if there is none."""
        if not self.data:
            return None
        return self.data[0].b64_json
