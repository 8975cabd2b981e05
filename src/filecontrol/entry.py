"""Base entry implementation with behaviour shared by files and directories.

Files and directories share the same metadata surface (timestamps,
ownership, permission bits, renaming, moving); they vary in how existence is
decided and how a relocation is carried out.

Pattern: Template Method - BaseEntry defines the operations, subclasses
provide ``exists()`` and may override ``_relocate()``.

Failure contract: precondition violations raise ``FileControlError``
subclasses. An ``OSError`` from the filesystem is logged, stored on
``last_error`` and turned into ``False`` (actions) or ``None`` (queries).
"""

from __future__ import annotations

import errno
import logging
import os
import re
import stat
from abc import ABC, abstractmethod
from typing import Any, Callable

from filecontrol.errors import DirectoryNotFoundError, DirectoryNotWritableError
from filecontrol.filesystem import RealFileSystem
from filecontrol.protocols import FileSystem

logger = logging.getLogger(__name__)

_OCTAL_MODE = re.compile(r"^(0o|0)?([0-7]{3,4})$")


def parse_mode(mode: int | str) -> int:
    """Convert a permission mode to an integer.

    Args:
        mode: An integer (``0o755``) or an octal string (``"755"``, ``"0755"``).

    Returns:
        The mode as an integer.

    Raises:
        ValueError: If a string is not an octal permission mode.
    """
    if isinstance(mode, int):
        return mode
    match = _OCTAL_MODE.match(mode.strip())
    if not match:
        raise ValueError(f"Invalid permission mode: {mode!r}")
    return int(match.group(2), 8)


class BaseEntry(ABC):
    """A path on disk plus the operations that apply to it.

    The entry holds no cached stat data; every accessor asks the filesystem
    again. Successful renames and moves replace the stored path.
    """

    def __init__(self, path: str | os.PathLike[str], filesystem: FileSystem | None = None) -> None:
        self._path = os.fspath(path)
        self.fs: FileSystem = filesystem or RealFileSystem()
        self.last_error: OSError | None = None

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the entry exists with the expected type."""
        ...

    @property
    def path(self) -> str:
        """The path this entry currently represents."""
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    # -------- Permissions --------

    def is_readable(self) -> bool:
        """Return True if the entry exists and is readable."""
        return self.exists() and self.fs.access(self._path, os.R_OK)

    def is_writable(self) -> bool:
        """Return True if the entry exists and is writable."""
        return self.exists() and self.fs.access(self._path, os.W_OK)

    def get_permissions(self) -> int | None:
        """Return the permission bits (e.g. ``0o644``)."""
        info = self._query(self.fs.stat, self._path)
        return stat.S_IMODE(info.st_mode) if info else None

    def chmod(self, mode: int | str) -> bool:
        """Change the permission bits.

        Args:
            mode: Integer or octal string mode, e.g. ``0o755`` or ``"755"``.
        """
        if not self.exists():
            return False
        return self._attempt(self.fs.chmod, self._path, parse_mode(mode))

    # -------- Paths --------

    def get_base_path(self) -> str:
        """Return the parent directory with a trailing separator."""
        return (os.path.dirname(self._path) or os.curdir) + os.sep

    def set_base_path(self, directory: str | os.PathLike[str]) -> bool:
        """Move the entry into another directory."""
        return self.move(directory)

    def rename(self, name: str) -> bool:
        """Rename the entry within its parent directory.

        Returns:
            True on success. False if the entry is missing, the target name is
            already taken, or the OS refuses the rename.
        """
        if not self.exists():
            return False

        target = os.path.join(os.path.dirname(self._path), name)
        if target != self._path and self.fs.exists(target):
            self.last_error = FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), target)
            logger.debug("Refusing to rename %s onto existing %s", self._path, target)
            return False

        if self._attempt(self.fs.rename, self._path, target):
            self._path = target
            return True
        return False

    def move(self, directory: str | os.PathLike[str]) -> bool:
        """Move the entry into ``directory`` keeping its name.

        Raises:
            DirectoryNotFoundError: If ``directory`` is not an existing directory.
            DirectoryNotWritableError: If ``directory`` is not writable.
        """
        directory = os.fspath(directory)
        self._check_target_directory(directory, "move")

        if not self.exists():
            return False

        target = os.path.join(directory, os.path.basename(self._path))
        if self._relocate(target):
            self._path = target
            return True
        return False

    def _relocate(self, target: str) -> bool:
        """Carry out a move. Subclasses may add fallbacks."""
        return self._attempt(self.fs.rename, self._path, target)

    def _check_target_directory(self, directory: str, operation: str) -> None:
        """Raise unless ``directory`` exists and is writable."""
        qualified = f"{type(self).__name__}.{operation}"
        if not self.fs.is_dir(directory):
            raise DirectoryNotFoundError(directory, qualified)
        if not self.fs.access(directory, os.W_OK):
            raise DirectoryNotWritableError(directory, qualified)

    # -------- Timestamps --------

    def get_modification_time(self) -> float | None:
        """Return the modification time as a Unix timestamp."""
        info = self._query(self.fs.stat, self._path)
        return info.st_mtime if info else None

    def set_modification_time(self, timestamp: float) -> bool:
        """Set the modification time, keeping the access time."""
        if not self.exists():
            return False
        access_time = self.get_access_time()
        if access_time is None:
            return False
        return self._attempt(self.fs.utime, self._path, access_time, timestamp)

    def get_access_time(self) -> float | None:
        """Return the last access time as a Unix timestamp."""
        info = self._query(self.fs.stat, self._path)
        return info.st_atime if info else None

    def set_access_time(self, timestamp: float) -> bool:
        """Set the access time, keeping the modification time."""
        if not self.exists():
            return False
        modification_time = self.get_modification_time()
        if modification_time is None:
            return False
        return self._attempt(self.fs.utime, self._path, timestamp, modification_time)

    # -------- Ownership --------

    def get_owner_id(self) -> int | None:
        """Return the numeric owner id."""
        info = self._query(self.fs.stat, self._path)
        return info.st_uid if info else None

    def get_owner(self) -> str | None:
        """Return the owner name, or None where no user database exists."""
        uid = self.get_owner_id()
        return self.fs.user_name(uid) if uid is not None else None

    def set_owner_id(self, uid: int) -> bool:
        """Change the owner by numeric id."""
        return self.chown(uid)

    def set_owner(self, name: str | None) -> bool:
        """Change the owner by user name."""
        if not name or not self.exists():
            return False
        return self._attempt(self.fs.chown_by_name, self._path, user=name)

    def chown(self, uid: int) -> bool:
        """Change the owner by numeric id, keeping the group."""
        if not self.exists():
            return False
        return self._attempt(self.fs.chown, self._path, uid, -1)

    def get_group_id(self) -> int | None:
        """Return the numeric group id."""
        info = self._query(self.fs.stat, self._path)
        return info.st_gid if info else None

    def get_group(self) -> str | None:
        """Return the group name, or None where no group database exists."""
        gid = self.get_group_id()
        return self.fs.group_name(gid) if gid is not None else None

    def set_group_id(self, gid: int) -> bool:
        """Change the group by numeric id, keeping the owner."""
        if not self.exists():
            return False
        return self._attempt(self.fs.chown, self._path, -1, gid)

    # -------- Error capture --------

    def _attempt(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Run an OS action, converting ``OSError`` into False."""
        try:
            operation(*args, **kwargs)
        except (OSError, LookupError) as e:
            self._record(operation, e)
            return False
        self.last_error = None
        return True

    def _query(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run an OS query, converting ``OSError`` into None."""
        try:
            result = operation(*args, **kwargs)
        except OSError as e:
            self._record(operation, e)
            return None
        self.last_error = None
        return result

    def _record(self, operation: Callable[..., Any], error: Exception) -> None:
        name = getattr(operation, "__name__", repr(operation))
        logger.debug("%s failed for %s: %s", name, self._path, error)
        if isinstance(error, OSError):
            self.last_error = error
        else:
            self.last_error = OSError(errno.EINVAL, str(error), self._path)
