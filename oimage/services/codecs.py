"""
Format dispatch table.
Maps every ImageFormat to its Pillow decode/encode functions and capabilities.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Tuple, Union

from PIL import Image

from oimage.models.image_format import ImageFormat

logger = logging.getLogger(__name__)

Target = Union[str, Path, BinaryIO]


def _decode_true_color(image: Image.Image) -> Image.Image:
    if image.mode == "RGB":
        return image.copy()
    return image.convert("RGB")


def _decode_with_alpha(image: Image.Image) -> Image.Image:
    # Palette and greyscale images are expanded so transparency survives transforms
    if image.mode == "RGBA":
        return image.copy()
    return image.convert("RGBA")


def _decode_as_is(image: Image.Image) -> Image.Image:
    return image.copy()


def _encode_jpeg(image: Image.Image, target: Target, **options) -> None:
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    image.save(target, format="JPEG", **options)


def _encode_gif(image: Image.Image, target: Target, **options) -> None:
    image.save(target, format="GIF", **options)


def _encode_png(image: Image.Image, target: Target, **options) -> None:
    image.save(target, format="PNG", **options)


def _encode_webp(image: Image.Image, target: Target, **options) -> None:
    image.save(target, format="WEBP", **options)


@dataclass(frozen=True)
class Codec:
    """Decode/encode functions and capabilities of one format."""
    image_format: ImageFormat
    decoder: Callable[[Image.Image], Image.Image]
    encoder: Callable[..., None]
    supports_alpha: bool
    supports_rotation: bool
    honors_quality: bool

    @property
    def working_mode(self) -> str:
        """True-colour mode used for resampled bitmaps."""
        return "RGBA" if self.supports_alpha else "RGB"

    def decode(self, path: Union[str, Path]) -> Image.Image:
        """
        Decode a file that must contain this format.

        Args:
            path: Image file path.

        Returns:
            Decoded bitmap, detached from the file.
        """
        with Image.open(path, formats=[self.image_format.pil_format]) as source:
            source.load()
            return self.decoder(source)

    def encode(self, image: Image.Image, target: Target, quality: int) -> None:
        """
        Encode a bitmap to a path or a binary stream.

        quality is forwarded only to formats that honour it; the others
        use Pillow's own defaults.
        """
        options = {"quality": quality} if self.honors_quality else {}
        self.encoder(image, target, **options)


CODECS: Dict[ImageFormat, Codec] = {
    ImageFormat.JPEG: Codec(
        image_format=ImageFormat.JPEG,
        decoder=_decode_true_color,
        encoder=_encode_jpeg,
        supports_alpha=False,
        supports_rotation=True,
        honors_quality=True,
    ),
    ImageFormat.GIF: Codec(
        image_format=ImageFormat.GIF,
        decoder=_decode_as_is,
        encoder=_encode_gif,
        supports_alpha=False,
        supports_rotation=False,
        honors_quality=False,
    ),
    ImageFormat.PNG: Codec(
        image_format=ImageFormat.PNG,
        decoder=_decode_with_alpha,
        encoder=_encode_png,
        supports_alpha=True,
        supports_rotation=True,
        honors_quality=False,
    ),
    ImageFormat.WEBP: Codec(
        image_format=ImageFormat.WEBP,
        decoder=_decode_with_alpha,
        encoder=_encode_webp,
        supports_alpha=True,
        supports_rotation=True,
        honors_quality=False,
    ),
}

SUPPORTED_PIL_FORMATS = [fmt.pil_format for fmt in CODECS]


def get_codec(image_format) -> Codec:
    """Look up the codec for a format given as member, int or name."""
    return CODECS[ImageFormat.parse(image_format)]


def open_image(path: Union[str, Path]) -> Tuple[ImageFormat, Image.Image]:
    """
    Sniff the format from the file header and decode it.

    Args:
        path: Image file path.

    Returns:
        Tuple of detected format and decoded bitmap.

    Raises:
        PIL.UnidentifiedImageError: If the content is none of the supported formats.
        OSError: If decoding fails.
    """
    with Image.open(path, formats=SUPPORTED_PIL_FORMATS) as source:
        image_format = ImageFormat.from_pil(source.format)
        source.load()
        image = CODECS[image_format].decoder(source)

    logger.debug("Decoded %s as %s (%dx%d, %s)", path, image_format.name, image.width, image.height, image.mode)
    return image_format, image
