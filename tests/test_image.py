"""Tests for Pillow-backed image inspection."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL.TiffImagePlugin import IFDRational

from filecontrol.image import EXIF_IFD_POINTER, PillowImageInspector, _normalize
from filecontrol.protocols import ImageInspector


class TestNormalize:
    """Tests for EXIF value normalization."""

    def test_rational(self) -> None:
        """Test rationals become floats."""
        assert _normalize(IFDRational(1, 250)) == pytest.approx(0.004)

    def test_rational_zero_denominator(self) -> None:
        """Test undefined rationals become None."""
        assert _normalize(IFDRational(1, 0)) is None

    def test_bytes_and_padding(self) -> None:
        """Test byte strings are decoded and NUL padding stripped."""
        assert _normalize(b"Canon\x00\x00") == "Canon"
        assert _normalize("  ") is None

    def test_tuple_keeps_first_value(self) -> None:
        """Test multi-valued tags collapse to their first value."""
        assert _normalize((100, 200)) == 100
        assert _normalize(()) is None

    def test_plain_values_pass_through(self) -> None:
        """Test integers are returned unchanged."""
        assert _normalize(6) == 6


class TestPillowImageInspector:
    """Tests for PillowImageInspector."""

    def test_satisfies_protocol(self) -> None:
        """Test the inspector is a structural ImageInspector."""
        assert isinstance(PillowImageInspector(), ImageInspector)

    def test_probe_png(self, png_image: Path) -> None:
        """Test type and dimensions of a PNG."""
        probe = PillowImageInspector().probe(str(png_image))

        assert probe.mime == "image/png"
        assert (probe.width, probe.height) == (120, 120)
        assert probe.exif == {}

    def test_probe_camera_tags(self, camera_jpeg: Path) -> None:
        """Test IFD0 tags are keyed by name."""
        probe = PillowImageInspector().probe(str(camera_jpeg))

        assert probe.mime == "image/jpeg"
        assert probe.exif["Make"] == "Canon"
        assert probe.exif["DateTime"] == "2020:01:02 03:04:05"

    def test_read_exif_sub_ifd(self) -> None:
        """Test exposure tags are read from the Exif sub-IFD."""
        exif = MagicMock()
        exif.items.return_value = [(0x010F, b"Nikon\x00")]
        exif.get_ifd.return_value = {0x829D: IFDRational(28, 10), 0x8827: 400}
        image = MagicMock()
        image.getexif.return_value = exif

        tags = PillowImageInspector()._read_exif(image)

        exif.get_ifd.assert_called_once_with(EXIF_IFD_POINTER)
        assert tags["Make"] == "Nikon"
        assert tags["FNumber"] == pytest.approx(2.8)
        assert tags["ISOSpeedRatings"] == 400

    def test_read_exif_failure(self) -> None:
        """Test unreadable EXIF data gives an empty mapping."""
        image = MagicMock()
        image.getexif.side_effect = OSError("truncated")

        assert PillowImageInspector()._read_exif(image) == {}

    def test_probe_text_file(self, workspace: Path) -> None:
        """Test a non-image gives None."""
        path = workspace / "notes.txt"
        path.write_text("not an image")

        assert PillowImageInspector().probe(str(path)) is None

    def test_probe_missing(self, workspace: Path) -> None:
        """Test a missing file gives None."""
        assert PillowImageInspector().probe(str(workspace / "missing.png")) is None
