#!/usr/bin/env python3
"""
Tests for image formats, the codec table and settings.

Run with: pytest tests/test_codecs.py -v
"""

import sys
from dataclasses import replace
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from oimage.core.config import Settings, get_settings
from oimage.models.image_format import ImageFormat
from oimage.models.schemas import SaveOptions
from oimage.services.codecs import CODECS, get_codec, open_image


class TestImageFormat:
    """Tests for the ImageFormat enumeration."""

    def test_identifiers(self):
        """Test the stable numeric identifiers."""
        assert ImageFormat.GIF == 1
        assert ImageFormat.JPEG == 2
        assert ImageFormat.PNG == 3
        assert ImageFormat.WEBP == 18

    @pytest.mark.parametrize("value,expected", [
        (ImageFormat.PNG, ImageFormat.PNG),
        (2, ImageFormat.JPEG),
        ("jpg", ImageFormat.JPEG),
        (".JPEG", ImageFormat.JPEG),
        ("image/webp", ImageFormat.WEBP),
        ("Gif", ImageFormat.GIF),
    ])
    def test_parse(self, value, expected):
        """Test the accepted spellings."""
        assert ImageFormat.parse(value) is expected

    def test_parse_unknown(self):
        """Test that unsupported names are rejected."""
        with pytest.raises(ValueError):
            ImageFormat.parse("bmp")

    def test_metadata(self):
        """Test MIME type and extension."""
        assert ImageFormat.JPEG.mime_type == "image/jpeg"
        assert ImageFormat.JPEG.extension == "jpg"
        assert ImageFormat.WEBP.extension == "webp"


class TestCodecTable:
    """Tests for the format dispatch table."""

    def test_every_format_has_codec(self):
        """Test that the table covers the enumeration."""
        assert set(CODECS) == set(ImageFormat)

    def test_capabilities(self):
        """Test the alpha, rotation and quality flags."""
        assert not CODECS[ImageFormat.GIF].supports_rotation
        assert all(CODECS[f].supports_rotation for f in (ImageFormat.JPEG, ImageFormat.PNG, ImageFormat.WEBP))
        assert {f for f, c in CODECS.items() if c.supports_alpha} == {ImageFormat.PNG, ImageFormat.WEBP}
        assert {f for f, c in CODECS.items() if c.honors_quality} == {ImageFormat.JPEG}

    def test_get_codec_by_name(self):
        """Test codec lookup with a string."""
        assert get_codec("jpg") is CODECS[ImageFormat.JPEG]

    def test_open_image_sniffs_content(self, tmp_path):
        """Test that open_image reports the real format."""
        path = tmp_path / "image.png"
        Image.new("RGB", (8, 4)).save(path, format="GIF")

        image_format, image = open_image(path)

        assert image_format is ImageFormat.GIF
        assert image.size == (8, 4)

    def test_open_image_rejects_other_formats(self, tmp_path):
        """Test that formats outside the table are not identified."""
        path = tmp_path / "image.tiff"
        Image.new("RGB", (8, 4)).save(path, format="TIFF")

        with pytest.raises(UnidentifiedImageError):
            open_image(path)

    def test_decode_rejects_wrong_format(self, jpeg_path):
        """Test that a codec only decodes its own format."""
        with pytest.raises(UnidentifiedImageError):
            CODECS[ImageFormat.PNG].decode(jpeg_path)

    @pytest.mark.parametrize("honors_quality,expected", [
        (True, {"quality": 30}),
        (False, {}),
    ])
    def test_quality_forwarded_by_flag(self, honors_quality, expected):
        """Test that only codecs flagged honors_quality receive the quality."""
        calls = []
        codec = replace(
            CODECS[ImageFormat.PNG],
            encoder=lambda image, target, **options: calls.append(options),
            honors_quality=honors_quality,
        )

        codec.encode(Image.new("RGB", (2, 2)), BytesIO(), 30)

        assert calls == [expected]

    def test_jpeg_encoder_drops_alpha(self):
        """Test that RGBA bitmaps can be encoded as JPEG."""
        buffer = BytesIO()

        CODECS[ImageFormat.JPEG].encode(Image.new("RGBA", (4, 4)), buffer, 75)

        buffer.seek(0)
        with Image.open(buffer) as encoded:
            assert encoded.format == "JPEG"


class TestSaveOptions:
    """Tests for save argument validation."""

    def test_defaults(self):
        options = SaveOptions()

        assert options.image_format is ImageFormat.JPEG
        assert options.quality == 75
        assert options.permissions is None

    def test_format_parsed(self):
        assert SaveOptions(image_format="webp").image_format is ImageFormat.WEBP

    @pytest.mark.parametrize("kwargs", [
        {"quality": -1},
        {"quality": 101},
        {"permissions": 0o10000},
        {"image_format": "tiff"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            SaveOptions(**kwargs)


class TestSettings:
    """Tests for environment driven settings."""

    def test_defaults(self, settings):
        """Test default values."""
        assert settings.jpeg_quality == 75
        assert settings.resize_filter == "lanczos"
        assert settings.rotate_filter == "bicubic"
        assert settings.log_level == "WARNING"

    def test_environment_override(self, monkeypatch):
        """Test that environment variables are read."""
        monkeypatch.setenv("OIMAGE_JPEG_QUALITY", "40")
        monkeypatch.setenv("OIMAGE_RESIZE_FILTER", "Bilinear")

        settings = get_settings()

        assert settings.jpeg_quality == 40
        assert settings.resize_filter == "bilinear"

    def test_nearest_rejected(self):
        """Test that nearest neighbour is not a valid filter."""
        with pytest.raises(ValidationError):
            Settings(resize_filter="nearest")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")
