"""
Constants for OImage.
Contains error kinds, default messages and resampling filters.
"""

from enum import Enum
from typing import Dict, Tuple

from PIL import Image


class ErrorKind(str, Enum):
    """Closed set of failures reported by the image handle."""
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    LOAD_ERROR = "LOAD_ERROR"
    FILE_NOT_LOADED = "FILE_NOT_LOADED"
    MALFORMED_INPUT = "MALFORMED_INPUT"


# Default (English) message templates, formatted with str.format(**context)
ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.FILE_NOT_FOUND: "File not found: {path}",
    ErrorKind.LOAD_ERROR: "Could not load image file: {path}",
    ErrorKind.FILE_NOT_LOADED: "No image file has been loaded",
    ErrorKind.MALFORMED_INPUT: "Malformed data URI",
}

# Smooth Pillow filters; nearest neighbour is deliberately absent
RESAMPLING_FILTERS: Dict[str, Image.Resampling] = {
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Background fills
TRANSPARENT_BLACK: Tuple[int, int, int, int] = (0, 0, 0, 0)
BLACK: int = 0
