"""Object-oriented wrappers around filesystem primitives."""

__version__ = "0.1.0"

from filecontrol.context import AppContext, create_context
from filecontrol.directory import DirectoryEntry
from filecontrol.errors import (
    DirectoryNotFoundError,
    DirectoryNotWritableError,
    FileControlError,
    NotReadableError,
    NotWritableError,
)
from filecontrol.file import FileEntry
from filecontrol.mime import MimeRegistry
from filecontrol.protocols import FileSystem, ImageInspector, MimeLookup
from filecontrol.types import CameraInfo, ContentType, DirectoryListing, ImageMetadata

__all__ = [
    "__version__",
    "AppContext",
    "CameraInfo",
    "ContentType",
    "DirectoryEntry",
    "DirectoryListing",
    "DirectoryNotFoundError",
    "DirectoryNotWritableError",
    "FileControlError",
    "FileEntry",
    "FileSystem",
    "ImageInspector",
    "ImageMetadata",
    "MimeLookup",
    "MimeRegistry",
    "NotReadableError",
    "NotWritableError",
    "create_context",
]
