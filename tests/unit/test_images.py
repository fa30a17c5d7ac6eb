"""Unit tests for image byte helpers."""

import io

import pytest
from PIL import Image

from makeimage.utils.images import image_extension, to_pil


def _encode(fmt: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color="blue").save(buf, format=fmt)
    return buf.getvalue()


@pytest.mark.unit
class TestImageExtension:
    @pytest.mark.parametrize("fmt,ext", [("PNG", "png"), ("JPEG", "jpg"), ("GIF", "gif")])
    def test_known_formats(self, fmt: str, ext: str):
        assert image_extension(_encode(fmt)) == ext

    def test_empty_defaults_to_png(self):
        assert image_extension(b"") == "png"

    def test_non_image_bytes(self):
        assert image_extension(b"hello") == "bin"


@pytest.mark.unit
class TestToPil:
    def test_loads_image(self):
        image = to_pil(_encode("PNG"))
        assert image is not None
        assert image.size == (4, 4)

    def test_empty_is_none(self):
        assert to_pil(b"") is None

    def test_garbage_is_none(self):
        assert to_pil(b"hello") is None
