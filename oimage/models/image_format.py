"""
Image format identifiers.
"""

from enum import IntEnum
from typing import Union


class ImageFormat(IntEnum):
    """Supported raster formats, numbered like the IMAGETYPE_* constants."""

    GIF = 1
    JPEG = 2
    PNG = 3
    WEBP = 18

    @property
    def pil_format(self) -> str:
        """Format name understood by Pillow."""
        return self.name

    @property
    def mime_type(self) -> str:
        return f"image/{self.name.lower()}"

    @property
    def extension(self) -> str:
        """Canonical file extension, without the dot."""
        return "jpg" if self is ImageFormat.JPEG else self.name.lower()

    @classmethod
    def from_pil(cls, pil_format: str) -> "ImageFormat":
        """Map a Pillow format name (Image.format) to a member."""
        return cls[pil_format.upper()]

    @classmethod
    def parse(cls, value: Union["ImageFormat", int, str]) -> "ImageFormat":
        """
        Accepts a member, its integer value or a name/extension.

        Args:
            value: e.g. ImageFormat.PNG, 3, "png", "jpg", "image/webp".

        Returns:
            The matching ImageFormat.

        Raises:
            ValueError: If the value names no supported format.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)

        name = str(value).strip().lower()
        name = name.rsplit("/", 1)[-1].lstrip(".")
        if name in ("jpg", "jpe"):
            name = "jpeg"
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unsupported image format: {value}") from None
