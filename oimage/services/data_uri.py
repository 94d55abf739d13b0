"""
Helpers for "data:<mime>;base64,<payload>" strings.
"""

import base64
import binascii
import logging
import os

from oimage.core.constants import ErrorKind
from oimage.core.exceptions import build_error

logger = logging.getLogger(__name__)


def get_image_extension(data: str) -> str:
    """
    Get the MIME subtype of a base64 encoded image, e.g. "png".

    Args:
        data: Data URI string, such as "data:image/png;base64,iVBOR...".

    Returns:
        Text after '/' and before ';' in the header.

    Raises:
        MalformedDataURIError: If the header has no ':' or no '/' separator.
    """
    header = data.partition(",")[0].split(";")[0]

    _scheme, colon, media_type = header.partition(":")
    if not colon:
        raise build_error(ErrorKind.MALFORMED_INPUT)

    _, slash, subtype = media_type.partition("/")
    if not slash or not subtype:
        raise build_error(ErrorKind.MALFORMED_INPUT)

    return subtype


def save_image(path: str, base64_string: str, name: str, ext: str, overwrite: bool = True) -> str:
    """
    Save a base64 encoded image on the given location.

    The target is built as path + name + "." + ext, so path needs its
    trailing separator. An existing file is always replaced; overwrite
    is accepted for compatibility and not consulted.

    Args:
        path: Directory prefix, including the trailing separator.
        base64_string: Data URI (payload after the first comma).
        name: File name without extension.
        ext: File extension.
        overwrite: Unused.

    Returns:
        Full path of the written file.

    Raises:
        MalformedDataURIError: If there is no comma or the payload is not base64.
    """
    _, comma, payload = base64_string.partition(",")
    if not comma:
        raise build_error(ErrorKind.MALFORMED_INPUT)
    try:
        content = base64.b64decode(payload)
    except binascii.Error as exc:
        raise build_error(ErrorKind.MALFORMED_INPUT) from exc

    full_path = f"{path}{name}.{ext}"
    if os.path.exists(full_path):
        os.remove(full_path)

    with open(full_path, "wb") as fp:
        fp.write(content)

    logger.debug("Wrote %d bytes to %s", len(content), full_path)
    return full_path
