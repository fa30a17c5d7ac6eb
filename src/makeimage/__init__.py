"""
makeimage - two images side by side from random prompts

Calls an OpenAI-compatible image generation endpoint with two prompts at once
and joins the results.

Library usage:
- Build Settings once (Settings.from_env() or load_settings(path)) and pass it to
  ImageRequestService; there is no global configuration object.
- DualRequestCoordinator(service).generate(left, right) starts a round; read
  coordinator.state, subscribe() to changes, or wait() for the round to finish.
- Logging: control verbosity with set_verbosity(0|1|2) or configure_logging(verbose_level, quiet);
  MAKEIMAGE_VERBOSITY env (0/1/2) is read when the CLI runs.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("makeimage")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from makeimage.core.coordinator import (
    CompletionBarrier,
    CoordinatorState,
    DualRequestCoordinator,
)
from makeimage.core.models import GenerateImageRequest, GenerateImageResponse, ImageDatum
from makeimage.core.prompts import get_prompt_words, random_prompt_pair
from makeimage.core.request_service import (
    ImageRequestService,
    build_endpoint_url,
    decode_first_image,
)
from makeimage.core.settings import Settings, load_settings
from makeimage.logging_config import configure_logging, set_verbosity
from makeimage.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    MakeImageError,
    NetworkError,
    ResponseError,
    UrlError,
)

__all__ = [
    "CompletionBarrier",
    "ConfigurationError",
    "CoordinatorState",
    "DecodeError",
    "DualRequestCoordinator",
    "EncodeError",
    "GenerateImageRequest",
    "GenerateImageResponse",
    "ImageDatum",
    "ImageRequestService",
    "MakeImageError",
    "NetworkError",
    "ResponseError",
    "Settings",
    "UrlError",
    "build_endpoint_url",
    "configure_logging",
    "decode_first_image",
    "get_prompt_words",
    "load_settings",
    "random_prompt_pair",
    "set_verbosity",
]
