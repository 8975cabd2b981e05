"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from filecontrol.context import AppContext
from filecontrol.filesystem import RealFileSystem
from filecontrol.image import PillowImageInspector
from filecontrol.mime import MimeRegistry


@pytest.fixture
def mime_registry() -> MimeRegistry:
    """Create a registry seeded with the packaged table."""
    return MimeRegistry.create_default()


@pytest.fixture
def app_context(mime_registry: MimeRegistry) -> AppContext:
    """Create a context wired to the real filesystem."""
    return AppContext(
        mime=mime_registry,
        filesystem=RealFileSystem(),
        images=PillowImageInspector(),
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty working directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_file.return_value = False
    fs.is_dir.return_value = False
    fs.access.return_value = True
    return fs


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def png_image(workspace: Path) -> Path:
    """Create a 120x120 PNG without EXIF data."""
    path = workspace / "image.png"
    Image.new("RGB", (120, 120), "white").save(path)
    return path


@pytest.fixture
def plain_jpeg(workspace: Path) -> Path:
    """Create a JPEG without EXIF data."""
    path = workspace / "plain.jpg"
    Image.new("RGB", (40, 30), "blue").save(path, "JPEG")
    return path


@pytest.fixture
def camera_jpeg(workspace: Path) -> Path:
    """Create a JPEG carrying camera EXIF tags."""
    path = workspace / "camera.jpg"
    exif = Image.Exif()
    exif[0x010F] = "Canon"
    exif[0x0110] = "Canon EOS 5D"
    exif[0x0112] = 1
    exif[0x0131] = "filecontrol-tests"
    exif[0x0132] = "2020:01:02 03:04:05"
    Image.new("RGB", (64, 32), "red").save(path, "JPEG", exif=exif)
    return path
