"""Filesystem abstraction for testability.

RealFileSystem is the production implementation of the FileSystem protocol.
It wraps ``os`` and ``shutil`` calls one to one and lets ``OSError`` escape;
deciding whether a failure is an error or a ``False`` result is left to the
entries.
"""

from __future__ import annotations

import os
import shutil
from typing import IO, Any

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None

try:
    import grp
    import pwd
except ImportError:  # Windows
    grp = None
    pwd = None


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def stat(self, path: str, follow_symlinks: bool = True) -> os.stat_result:
        """Return the stat record for a path."""
        return os.stat(path, follow_symlinks=follow_symlinks)

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(path)

    def access(self, path: str, mode: int) -> bool:
        """Check access permissions for the current user."""
        return os.access(path, mode)

    def open(self, path: str, mode: str) -> IO[Any]:
        """Open a file object."""
        return open(path, mode)

    def rename(self, src: str, dst: str) -> None:
        """Rename a file or directory."""
        os.rename(src, dst)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy file content, overwriting the destination."""
        shutil.copyfile(src, dst)

    def unlink(self, path: str) -> None:
        """Remove a file or symlink."""
        os.unlink(path)

    def mkdir(self, path: str, mode: int) -> None:
        """Create a single directory."""
        os.mkdir(path, mode)

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def scandir(self, path: str) -> list[os.DirEntry[str]]:
        """List the immediate children of a directory."""
        with os.scandir(path) as entries:
            return list(entries)

    def chmod(self, path: str, mode: int) -> None:
        """Change permission bits."""
        os.chmod(path, mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change numeric owner and group."""
        os.chown(path, uid, gid)

    def chown_by_name(self, path: str, user: str | None = None, group: str | None = None) -> None:
        """Change owner and/or group by name."""
        shutil.chown(path, user=user, group=group)

    def utime(self, path: str, atime: float, mtime: float) -> None:
        """Set access and modification times."""
        os.utime(path, (atime, mtime))

    def lock_exclusive(self, handle: IO[Any]) -> bool:
        """Take an exclusive advisory lock on an open file."""
        if fcntl is None:
            return False
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        return True

    def unlock(self, handle: IO[Any]) -> None:
        """Release an advisory lock."""
        if fcntl is not None:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def user_name(self, uid: int) -> str | None:
        """Resolve a user id through the password database."""
        if pwd is None:
            return None
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return None

    def group_name(self, gid: int) -> str | None:
        """Resolve a group id through the group database."""
        if grp is None:
            return None
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            return None
