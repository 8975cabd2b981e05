"""Protocol definitions for the services entries depend on.

Entries never reach for module-level singletons; the filesystem, the MIME
registry and the image inspector are handed to them. Designing to these
interfaces keeps test doubles trivial to substitute.

All concrete implementations satisfy these protocols structurally.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from filecontrol.types import ImageProbe


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the operating-system calls entries are built on.

    Query methods (``is_file``, ``is_dir``, ``exists``, ``access``) never
    raise. Every other method raises ``OSError`` on failure.
    """

    def stat(self, path: str, follow_symlinks: bool = True) -> os.stat_result:
        """Return the stat record for a path.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        ...

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file (following symlinks)."""
        ...

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory (following symlinks)."""
        ...

    def access(self, path: str, mode: int) -> bool:
        """Check ``os.R_OK``/``os.W_OK`` style permissions."""
        ...

    def open(self, path: str, mode: str) -> IO[Any]:
        """Open a file object."""
        ...

    def rename(self, src: str, dst: str) -> None:
        """Rename a file or directory."""
        ...

    def copy_file(self, src: str, dst: str) -> None:
        """Copy file content, overwriting ``dst``."""
        ...

    def unlink(self, path: str) -> None:
        """Remove a file or symlink."""
        ...

    def mkdir(self, path: str, mode: int) -> None:
        """Create a single directory."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    def scandir(self, path: str) -> list[os.DirEntry[str]]:
        """List the immediate children of a directory."""
        ...

    def chmod(self, path: str, mode: int) -> None:
        """Change permission bits."""
        ...

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change numeric owner and group; ``-1`` leaves a value unchanged."""
        ...

    def chown_by_name(self, path: str, user: str | None = None, group: str | None = None) -> None:
        """Change owner and/or group by name."""
        ...

    def utime(self, path: str, atime: float, mtime: float) -> None:
        """Set access and modification times."""
        ...

    def lock_exclusive(self, handle: IO[Any]) -> bool:
        """Take an exclusive advisory lock; False where locking is unsupported."""
        ...

    def unlock(self, handle: IO[Any]) -> None:
        """Release a lock taken with ``lock_exclusive``."""
        ...

    def user_name(self, uid: int) -> str | None:
        """Resolve a user id to a name; None without a user database."""
        ...

    def group_name(self, gid: int) -> str | None:
        """Resolve a group id to a name; None without a group database."""
        ...


@runtime_checkable
class MimeLookup(Protocol):
    """Protocol for extension to MIME type lookup."""

    def get(self, extension: str) -> str | None:
        """Return the MIME type for an extension, or None."""
        ...

    def has(self, extension: str) -> bool:
        """Check whether an extension is registered."""
        ...

    def all(self) -> dict[str, str]:
        """Return a snapshot of the whole mapping."""
        ...


@runtime_checkable
class ImageInspector(Protocol):
    """Protocol for image type, dimension and EXIF detection."""

    def probe(self, path: str) -> ImageProbe | None:
        """Inspect a file.

        Args:
            path: Path to the file.

        Returns:
            ImageProbe if the file is a recognised image, None otherwise.
        """
        ...
