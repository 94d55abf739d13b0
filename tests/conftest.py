"""
Pytest configuration and fixtures.
Sample images are generated with Pillow in a temporary directory.
"""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from oimage.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; make every test read the environment again."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings, independent from the environment."""
    return Settings()


@pytest.fixture
def jpeg_path(tmp_path):
    """200x100 red JPEG."""
    path = tmp_path / "sample.jpg"
    Image.new("RGB", (200, 100), color="red").save(path, format="JPEG")
    return path


@pytest.fixture
def png_path(tmp_path):
    """200x100 PNG, left half opaque blue, right half fully transparent."""
    path = tmp_path / "sample.png"
    image = Image.new("RGBA", (200, 100), (0, 0, 0, 0))
    image.paste((0, 0, 255, 255), (0, 0, 100, 100))
    image.save(path, format="PNG")
    return path


@pytest.fixture
def gif_path(tmp_path):
    """120x80 palette GIF."""
    path = tmp_path / "sample.gif"
    Image.new("P", (120, 80), color=3).save(path, format="GIF")
    return path


@pytest.fixture
def webp_path(tmp_path):
    """64x32 lossless WEBP, left half opaque green, right half fully transparent."""
    path = tmp_path / "sample.webp"
    image = Image.new("RGBA", (64, 32), (0, 0, 0, 0))
    image.paste((0, 255, 0, 255), (0, 0, 32, 32))
    image.save(path, format="WEBP", lossless=True)
    return path


@pytest.fixture
def sample_paths(jpeg_path, png_path, gif_path, webp_path):
    """All sample files keyed by format name."""
    return {
        "JPEG": jpeg_path,
        "PNG": png_path,
        "GIF": gif_path,
        "WEBP": webp_path,
    }
