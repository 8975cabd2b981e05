"""Application context for dependency injection.

This module separates object creation from object use. The MIME registry is
an explicitly constructed service held here and handed to every entry the
context builds, rather than a process-wide singleton.

Dependencies are typed using Protocols, so test doubles can be injected
without inheritance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from filecontrol.directory import DirectoryEntry
from filecontrol.file import FileEntry
from filecontrol.protocols import FileSystem, ImageInspector, MimeLookup


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from filecontrol.filesystem import RealFileSystem
    return RealFileSystem()


def _default_images() -> ImageInspector:
    """Create the default image inspector."""
    from filecontrol.image import PillowImageInspector
    return PillowImageInspector()


@dataclass
class AppContext:
    """Container for the services entries depend on.

    Provides a single injection point for the CLI and for library callers
    that want every entry to share one MIME registry.
    """

    mime: MimeLookup
    filesystem: FileSystem = field(default_factory=_default_filesystem)
    images: ImageInspector = field(default_factory=_default_images)

    def file(self, path: str | os.PathLike[str]) -> FileEntry:
        """Build a FileEntry wired to this context."""
        return FileEntry(path, self.filesystem, self.mime, self.images)

    def directory(self, path: str | os.PathLike[str]) -> DirectoryEntry:
        """Build a DirectoryEntry wired to this context."""
        return DirectoryEntry(path, self.filesystem, self.mime, self.images)

    def entry(self, path: str | os.PathLike[str]) -> FileEntry | DirectoryEntry:
        """Build a DirectoryEntry for directories and a FileEntry otherwise."""
        if self.filesystem.is_dir(os.fspath(path)):
            return self.directory(path)
        return self.file(path)


def create_context(mime_table: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        mime_table: Optional YAML table replacing the packaged MIME types.

    Returns:
        Configured AppContext with all dependencies.
    """
    from filecontrol.filesystem import RealFileSystem
    from filecontrol.image import PillowImageInspector
    from filecontrol.mime import MimeRegistry

    mime = MimeRegistry.from_file(mime_table) if mime_table else MimeRegistry.create_default()

    return AppContext(
        mime=mime,
        filesystem=RealFileSystem(),
        images=PillowImageInspector(),
    )
