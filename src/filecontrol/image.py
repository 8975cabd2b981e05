"""Image detection and EXIF extraction using Pillow."""

from __future__ import annotations

import logging
from typing import Any

from PIL import Image
from PIL.ExifTags import TAGS
from PIL.TiffImagePlugin import IFDRational

from filecontrol.types import ImageProbe

logger = logging.getLogger(__name__)

# Pointer to the Exif sub-IFD holding exposure settings
EXIF_IFD_POINTER = 0x8769


def _normalize(value: Any) -> Any:
    """Turn raw EXIF values into plain Python values.

    Rationals become floats, byte strings are decoded and multi-valued tags
    keep their first value.
    """
    if isinstance(value, IFDRational):
        if value.denominator == 0:
            return None
        return float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value.rstrip("\x00").strip() or None
    if isinstance(value, tuple):
        return _normalize(value[0]) if value else None
    return value


class PillowImageInspector:
    """Image inspector backed by Pillow.

    Satisfies the ImageInspector protocol structurally.
    """

    def probe(self, path: str) -> ImageProbe | None:
        """Inspect a file.

        Args:
            path: Path to the file.

        Returns:
            ImageProbe if Pillow recognises the file, None otherwise.
        """
        try:
            with Image.open(path) as image:
                return ImageProbe(
                    mime=Image.MIME.get(image.format or ""),
                    width=image.width,
                    height=image.height,
                    exif=self._read_exif(image),
                )
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.debug("Not an image %s: %s", path, e)
            return None

    def _read_exif(self, image: Image.Image) -> dict[str, Any]:
        """Collect IFD0 and Exif sub-IFD tags keyed by tag name."""
        try:
            exif = image.getexif()
            tags: dict[str, Any] = {}
            for tag, value in exif.items():
                tags[TAGS.get(tag, str(tag))] = _normalize(value)
            for tag, value in exif.get_ifd(EXIF_IFD_POINTER).items():
                tags[TAGS.get(tag, str(tag))] = _normalize(value)
        except (OSError, ValueError, KeyError) as e:
            logger.debug("Unreadable EXIF data: %s", e)
            return {}
        return tags
