"""
Helpers for turning decoded image bytes into files and PIL images.

The coordinator stores raw bytes; presentation code uses these helpers to pick
a file extension or to hand a PIL Image to Gradio.
"""

import io

from PIL import Image, UnidentifiedImageError

from makeimage.logging_config import get_logger

logger = get_logger(__name__)

# PIL format name -> file extension
_EXTENSIONS = {"PNG": "png", "JPEG": "jpg", "WEBP": "webp", "GIF": "gif"}
DEFAULT_EXTENSION = "png"


def image_extension(data: bytes) -> str:
    """Return a file extension for image bytes; falls back to 'png' when unknown."""
    if not data:
        return DEFAULT_EXTENSION
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format or ""
    except (UnidentifiedImageError, OSError):
        return "bin"
    return _EXTENSIONS.get(fmt.upper(), fmt.lower() or DEFAULT_EXTENSION)


def to_pil(data: bytes) -> Image.Image | None:
    """Load image bytes into a PIL Image, or None if empty or not an image."""
    if not data:
        return None
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Bytes are not a loadable image: %s", e)
        return None
