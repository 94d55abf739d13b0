"""
Image handle service for OImage.
Loads one image file, reports its properties and writes modified copies.
"""

import logging
import math
import os
import sys
from pathlib import Path
from typing import BinaryIO, Mapping, Optional, Union

from PIL import Image

from oimage.core.config import Settings, get_settings
from oimage.core.constants import (
    ErrorKind,
    RESAMPLING_FILTERS,
    TRANSPARENT_BLACK,
    BLACK,
)
from oimage.core.exceptions import ImageError, ImageNotFoundError, build_error
from oimage.models.image_format import ImageFormat
from oimage.models.schemas import SaveOptions
from oimage.services import codecs, data_uri

logger = logging.getLogger(__name__)


def round_dimension(value: float) -> int:
    """Round half up to a whole pixel count, never below 1."""
    return max(1, int(math.floor(value + 0.5)))


class ImageHandle:
    """
    Owns at most one decoded image and exposes load/inspect/transform/save.

    Usage:
        with ImageHandle() as handle:
            handle.load("photo.png")
            handle.resize_to_width(320)
            handle.save("thumb.png", ImageFormat.PNG)
    """

    get_image_extension = staticmethod(data_uri.get_image_extension)
    save_image = staticmethod(data_uri.save_image)

    def __init__(
        self,
        messages: Optional[Mapping[ErrorKind, str]] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize an empty handle.

        Args:
            messages: Error message templates by kind, for localisation.
            settings: Settings instance. Defaults to the cached settings.
        """
        self.settings = settings or get_settings()
        self.messages = dict(messages or {})
        self.source_path: Optional[Path] = None
        self.image: Optional[Image.Image] = None
        self.image_format: Optional[ImageFormat] = None

    def __enter__(self) -> "ImageHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_loaded(self) -> bool:
        """Check if an image is decoded."""
        return self.image is not None

    def close(self) -> None:
        """Release the decoded image and return to the empty state."""
        if self.image is not None:
            self.image.close()
        self.source_path = None
        self.image = None
        self.image_format = None

    def _error(self, kind: ErrorKind, **context) -> ImageError:
        return build_error(kind, self.messages, **context)

    def _require_image(self) -> Image.Image:
        if self.image is None:
            raise self._error(ErrorKind.FILE_NOT_LOADED)
        return self.image

    def _replace_image(self, new_image: Image.Image) -> None:
        old_image = self.image
        self.image = new_image
        if old_image is not None and old_image is not new_image:
            old_image.close()

    @property
    def _codec(self) -> codecs.Codec:
        return codecs.CODECS[self.image_format]

    def load(self, path: Union[str, Path]) -> None:
        """
        Load into memory the specified file.

        Args:
            path: Path of the file to be loaded.

        Raises:
            ImageNotFoundError: If the path does not exist.
            ImageLoadError: If the file is not a supported, decodable image.
        """
        path = Path(path)
        try:
            if not path.exists():
                raise self._error(ErrorKind.FILE_NOT_FOUND, path=path)
            image_format, image = codecs.open_image(path)
        except ImageNotFoundError:
            self.close()
            raise
        except Exception as exc:
            self.close()
            raise self._error(ErrorKind.LOAD_ERROR, path=path) from exc

        self.close()
        self.source_path = path
        self.image = image
        self.image_format = image_format
        logger.debug("Loaded %s (%s, %dx%d)", path, image_format.name, image.width, image.height)

    def get_image_type(self) -> Optional[ImageFormat]:
        """Get the format of the loaded file, or None if nothing is loaded."""
        return self.image_format

    def get_width(self) -> int:
        """Get width of the loaded image."""
        return self._require_image().width

    def get_height(self) -> int:
        """Get height of the loaded image."""
        return self._require_image().height

    def resize(self, width: Union[int, float], height: Union[int, float]) -> None:
        """
        Resize image to a fixed width/height.

        Args:
            width: New width in pixels.
            height: New height in pixels.

        Raises:
            ImageNotLoadedError: If no image is loaded.
            ValueError: If a dimension is smaller than one pixel.
        """
        image = self._require_image()
        width = int(math.floor(width + 0.5))
        height = int(math.floor(height + 0.5))
        if width < 1 or height < 1:
            raise ValueError(f"Invalid size {width}x{height}")

        codec = self._codec
        source = image if image.mode == codec.working_mode else image.convert(codec.working_mode)
        resample = RESAMPLING_FILTERS[self.settings.resize_filter]
        # alpha formats resample in RGBA, so transparent areas stay transparent
        resized = source.resize((width, height), resample=resample)

        if source is not image:
            source.close()
        self._replace_image(resized)
        logger.debug("Resized to %dx%d", width, height)

    def resize_to_width(self, width: int) -> None:
        """Resize to a fixed width, keeping the aspect ratio."""
        image = self._require_image()
        if width <= 0:
            raise ValueError(f"Invalid width {width}")
        ratio = width / image.width
        self.resize(width, round_dimension(image.height * ratio))

    def resize_to_height(self, height: int) -> None:
        """Resize to a fixed height, keeping the aspect ratio."""
        image = self._require_image()
        if height <= 0:
            raise ValueError(f"Invalid height {height}")
        ratio = height / image.height
        self.resize(round_dimension(image.width * ratio), height)

    def scale(self, percent: Union[int, float]) -> None:
        """
        Scale image to a percentage of its current size.

        Args:
            percent: Scale ratio, 100 keeps the current size.

        Raises:
            ValueError: If percent is not positive.
        """
        image = self._require_image()
        if percent <= 0:
            raise ValueError(f"Invalid scale {percent}%")
        self.resize(
            round_dimension(image.width * percent / 100),
            round_dimension(image.height * percent / 100)
        )

    def rotate(self, degrees: Union[int, float]) -> None:
        """
        Rotate the original file counter-clockwise by the given degrees.

        The source file is decoded again, so resizes applied before the
        rotation are discarded. Formats without rotation support (GIF) are
        left untouched.

        Args:
            degrees: Rotation angle.
        """
        self._require_image()
        codec = self._codec
        if not codec.supports_rotation:
            logger.debug("Rotation not supported for %s, image left unchanged", codec.image_format.name)
            return

        source = codec.decode(self.source_path)
        fillcolor = TRANSPARENT_BLACK if codec.supports_alpha else BLACK
        rotation = source.rotate(
            degrees,
            resample=RESAMPLING_FILTERS[self.settings.rotate_filter],
            expand=True,
            fillcolor=fillcolor
        )
        source.close()
        self._replace_image(rotation)
        logger.debug("Rotated %s by %s degrees", self.source_path, degrees)

    def save(
        self,
        path: Union[str, Path],
        image_format: Union[ImageFormat, int, str] = ImageFormat.JPEG,
        quality: Optional[int] = None,
        permissions: Optional[int] = None
    ) -> None:
        """
        Save the image into the specified format, quality and permissions.

        Args:
            path: Path of the new file.
            image_format: Target format.
            quality: JPEG quality 0-100. Defaults to settings value.
            permissions: File mode applied after writing, e.g. 0o644.
        """
        image = self._require_image()
        options = SaveOptions(
            image_format=image_format,
            quality=self.settings.jpeg_quality if quality is None else quality,
            permissions=permissions
        )

        codecs.CODECS[options.image_format].encode(image, path, options.quality)
        if options.permissions is not None:
            os.chmod(path, options.permissions)
        logger.debug("Saved %s as %s", path, options.image_format.name)

    def output(
        self,
        image_format: Union[ImageFormat, int, str] = ImageFormat.JPEG,
        stream: Optional[BinaryIO] = None
    ) -> None:
        """
        Write the encoded image to standard output.

        Args:
            image_format: Target format.
            stream: Binary stream to write to instead of stdout.
        """
        image = self._require_image()
        stream = stream if stream is not None else sys.stdout.buffer
        codecs.get_codec(image_format).encode(image, stream, self.settings.jpeg_quality)
        stream.flush()
