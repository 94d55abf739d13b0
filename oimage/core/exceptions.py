"""
Exceptions raised by OImage.
"""

from typing import Dict, Mapping, Optional, Type

from oimage.core.constants import ErrorKind, ERROR_MESSAGES


class ImageError(Exception):
    """Base class for every error reported by the image handle."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message


class ImageNotFoundError(ImageError, FileNotFoundError):
    """The file to load does not exist."""


class ImageLoadError(ImageError):
    """The file exists but is not a supported, decodable image."""


class ImageNotLoadedError(ImageError):
    """An operation needed a decoded image but none is loaded."""


class MalformedDataURIError(ImageError, ValueError):
    """A data URI string is missing one of its separators."""


ERROR_TYPES: Dict[ErrorKind, Type[ImageError]] = {
    ErrorKind.FILE_NOT_FOUND: ImageNotFoundError,
    ErrorKind.LOAD_ERROR: ImageLoadError,
    ErrorKind.FILE_NOT_LOADED: ImageNotLoadedError,
    ErrorKind.MALFORMED_INPUT: MalformedDataURIError,
}


def build_error(
    kind: ErrorKind,
    messages: Optional[Mapping[ErrorKind, str]] = None,
    **context
) -> ImageError:
    """
    Create the exception for an error kind.

    Args:
        kind: Error kind.
        messages: Message templates overriding ERROR_MESSAGES.
        **context: Values available to the template (e.g. path).

    Returns:
        Exception instance, ready to be raised.
    """
    template = (messages or {}).get(kind, ERROR_MESSAGES[kind])
    return ERROR_TYPES[kind](kind, template.format(**context))
