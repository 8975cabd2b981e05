"""Shared data types for filecontrol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CameraInfo",
    "ContentType",
    "DirectoryListing",
    "ImageMetadata",
    "ImageProbe",
]


class ContentType(str, Enum):
    """Output shapes for ``DirectoryEntry.get_content()``."""

    ARRAY = "array"
    JSON = "json"
    OBJECT = "object"
    DEFAULT = "default"


@dataclass
class ImageProbe:
    """Result of detecting an image file.

    Attributes:
        mime: Detected MIME type (e.g. ``image/png``).
        width: Width in pixels.
        height: Height in pixels.
        exif: Tag-name keyed EXIF values (empty when the image carries none).
    """

    mime: str | None
    width: int
    height: int
    exif: dict[str, Any]

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions cannot be negative")


class CameraInfo(BaseModel):
    """Camera settings read from EXIF tags. Missing tags stay ``None``."""

    model_config = ConfigDict(populate_by_name=True)

    make: str | None = Field(default=None, alias="Make")
    model: str | None = Field(default=None, alias="Model")
    orientation: int | None = Field(default=None, alias="Orientation")
    x_resolution: float | None = Field(default=None, alias="XResolution")
    y_resolution: float | None = Field(default=None, alias="YResolution")
    resolution_unit: int | None = Field(default=None, alias="ResolutionUnit")
    software: str | None = Field(default=None, alias="Software")
    exposure_time: float | None = Field(default=None, alias="ExposureTime")
    f_number: float | None = Field(default=None, alias="FNumber")
    iso_speed_ratings: int | None = Field(default=None, alias="ISOSpeedRatings")
    shutter_speed_value: float | None = Field(default=None, alias="ShutterSpeedValue")
    aperture_value: float | None = Field(default=None, alias="ApertureValue")
    brightness_value: float | None = Field(default=None, alias="BrightnessValue")
    exposure_bias_value: float | None = Field(default=None, alias="ExposureBiasValue")
    max_aperture_value: float | None = Field(default=None, alias="MaxApertureValue")
    metering_mode: int | None = Field(default=None, alias="MeteringMode")
    flash: int | None = Field(default=None, alias="Flash")

    @classmethod
    def tag_names(cls) -> list[str]:
        """EXIF tag names covered by this record, in declaration order."""
        return [field.alias or name for name, field in cls.model_fields.items()]


class ImageMetadata(BaseModel):
    """Camera information plus creation time and detected MIME type."""

    camera: CameraInfo = Field(default_factory=CameraInfo)
    created: str | None = None
    mime: str | None = None


class DirectoryListing(BaseModel):
    """Record of the names directly inside a directory."""

    path: str
    names: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
