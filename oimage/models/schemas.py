"""
Pydantic schemas for validating operation arguments and describing images.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from oimage.models.image_format import ImageFormat


class SaveOptions(BaseModel):
    """Arguments accepted by ImageHandle.save()."""
    image_format: ImageFormat = ImageFormat.JPEG
    quality: int = Field(default=75, ge=0, le=100)
    permissions: Optional[int] = Field(default=None, ge=0, le=0o7777)

    @field_validator("image_format", mode="before")
    @classmethod
    def parse_format(cls, value):
        return ImageFormat.parse(value)


class ImageInfo(BaseModel):
    """Summary of a loaded image."""
    path: str
    format: str
    mime_type: str
    width: int
    height: int
