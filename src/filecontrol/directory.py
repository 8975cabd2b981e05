"""Directory wrapper with recursive size, copy, purge and create."""

from __future__ import annotations

import errno
import json
import logging
import os
from pathlib import Path

from filecontrol.entry import BaseEntry, parse_mode
from filecontrol.errors import DirectoryNotFoundError
from filecontrol.file import FileEntry
from filecontrol.protocols import FileSystem, ImageInspector, MimeLookup
from filecontrol.types import ContentType, DirectoryListing

logger = logging.getLogger(__name__)

# Mode for directories created without an explicit one (umask applies)
DEFAULT_DIRECTORY_MODE = 0o777

_SEPARATORS = os.sep + (os.altsep or "")


class DirectoryEntry(BaseEntry):
    """A directory path and the operations that apply to it.

    Tree walks (size, copy, purge) use an explicit stack, so deep trees do not
    hit the recursion limit. Symlinks are never followed while sizing or
    purging; copying follows them but never enters the same directory twice.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        filesystem: FileSystem | None = None,
        mime: MimeLookup | None = None,
        images: ImageInspector | None = None,
    ) -> None:
        """Initialize a directory entry.

        Args:
            path: Path to the directory. Trailing separators are dropped.
            filesystem: Filesystem implementation. Defaults to RealFileSystem.
            mime: MIME registry handed to child file entries.
            images: Image inspector handed to child file entries.
        """
        raw = os.fspath(path)
        super().__init__(raw.rstrip(_SEPARATORS) or raw[:1] or os.curdir, filesystem)
        self._mime = mime
        self._images = images

    def exists(self) -> bool:
        """Check whether the path is an existing directory."""
        return self.fs.is_dir(self._path)

    def get_path(self) -> str:
        """Return the path with exactly one trailing separator."""
        return self._path.rstrip(_SEPARATORS) + os.sep

    def get_name(self) -> str:
        """Return the last path segment."""
        return os.path.basename(self._path)

    def set_name(self, name: str) -> bool:
        """Rename the directory."""
        return self.rename(name)

    # -------- Contents --------

    def get_size(self) -> int:
        """Return the total size in bytes of every regular file below.

        Symlinks are skipped. Returns 0 if the directory does not exist.
        """
        if not self.exists():
            return 0

        total = 0
        stack = [self._path]
        while stack:
            current = stack.pop()
            entries = self._query(self.fs.scandir, current)
            if entries is None:
                continue
            for entry in entries:
                if entry.is_symlink():
                    continue
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    info = self._query(entry.stat, follow_symlinks=False)
                    if info is not None:
                        total += info.st_size
        return total

    def get_content(
        self, content_type: ContentType | str = ContentType.DEFAULT
    ) -> list[str] | str | DirectoryListing | list[FileEntry | DirectoryEntry]:
        """List the immediate children, sorted by name.

        Args:
            content_type: Output shape. ``ARRAY`` gives names, ``JSON`` a JSON
                array of names, ``OBJECT`` a DirectoryListing and ``DEFAULT``
                FileEntry/DirectoryEntry instances.

        Raises:
            DirectoryNotFoundError: If the path is not a directory.
            ValueError: If ``content_type`` is unknown.
        """
        content_type = ContentType(content_type)
        if not self.exists():
            raise DirectoryNotFoundError(self.get_path(), "DirectoryEntry.get_content")

        entries = sorted(self._query(self.fs.scandir, self._path) or [], key=lambda e: e.name)
        names = [entry.name for entry in entries]

        if content_type is ContentType.ARRAY:
            return names
        if content_type is ContentType.JSON:
            return json.dumps(names)
        if content_type is ContentType.OBJECT:
            directories = [entry.name for entry in entries if entry.is_dir()]
            return DirectoryListing(
                path=self.get_path(),
                names=names,
                files=[name for name in names if name not in directories],
                directories=directories,
            )

        children: list[FileEntry | DirectoryEntry] = []
        for entry in entries:
            if entry.is_dir():
                children.append(DirectoryEntry(entry.path, self.fs, self._mime, self._images))
            else:
                children.append(FileEntry(entry.path, self.fs, self._mime, self._images))
        return children

    # -------- Lifecycle --------

    def create(self, mode: int | str = DEFAULT_DIRECTORY_MODE) -> bool:
        """Create the directory and every missing parent (like ``mkdir -p``).

        Args:
            mode: Permission bits for each created segment, subject to umask.

        Returns:
            True if the directory exists afterwards. False at the first
            segment that cannot be created; segments made before stay.
        """
        mode = parse_mode(mode)
        if self.exists():
            return True

        built = ""
        for segment in Path(self._path).parts:
            built = os.path.join(built, segment) if built else segment
            if self.fs.is_dir(built):
                continue
            if not self._attempt(self.fs.mkdir, built, mode) and not self.fs.is_dir(built):
                return False
        return True

    def clear(self) -> bool:
        """Remove everything inside the directory, keeping the directory.

        Returns:
            True if every descendant was removed.
        """
        if not self.exists():
            return False
        return self._purge()

    def delete(self) -> bool:
        """Remove the directory and everything inside it.

        Returns:
            True if the directory is gone. False if it did not exist.
        """
        if not self.exists():
            return False
        self._purge()
        return self._attempt(self.fs.rmdir, self._path)

    def copy(self, destination: str | os.PathLike[str]) -> bool:
        """Mirror the contents of this directory into ``destination``.

        ``destination`` and any missing subdirectories are created. Files with
        the same name are overwritten. This entry keeps its path.

        Returns:
            True if every file was copied. False if this directory is missing.
        """
        if not self.exists():
            return False
        return self._copy_tree(os.fspath(destination))

    def _relocate(self, target: str) -> bool:
        """Rename, falling back to copy and delete across filesystems."""
        try:
            self.fs.rename(self._path, target)
        except OSError as e:
            if e.errno != errno.EXDEV:
                self._record(self.fs.rename, e)
                return False
            logger.debug("Cross-device move of %s to %s, copying instead", self._path, target)
            if not self._copy_tree(target):
                return False
            self._purge()
            return self._attempt(self.fs.rmdir, self._path)
        self.last_error = None
        return True

    # -------- Tree walks --------

    def _purge(self) -> bool:
        """Delete every descendant, children before their parents."""
        removed = True
        stack: list[tuple[str, bool]] = [(self._path, False)]
        while stack:
            current, drained = stack.pop()
            if drained:
                if current != self._path:
                    removed = self._attempt(self.fs.rmdir, current) and removed
                continue

            entries = self._query(self.fs.scandir, current)
            if entries is None:
                removed = False
                continue

            stack.append((current, True))
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    stack.append((entry.path, False))
                else:
                    removed = self._attempt(self.fs.unlink, entry.path) and removed
        return removed

    def _copy_tree(self, destination: str) -> bool:
        """Copy every file below this directory into ``destination``."""
        target_root = DirectoryEntry(destination, self.fs)
        if not target_root.create():
            self.last_error = target_root.last_error
            return False

        # Directories already entered, plus the destination itself
        visited: set[tuple[int, int]] = set()
        for root in (self._path, destination):
            info = self._query(self.fs.stat, root)
            if info is None:
                return False
            visited.add((info.st_dev, info.st_ino))

        copied = True
        stack = [(self._path, destination)]
        while stack:
            source, target = stack.pop()
            entries = self._query(self.fs.scandir, source)
            if entries is None:
                copied = False
                continue

            for entry in entries:
                child_target = os.path.join(target, entry.name)
                if not entry.is_dir():
                    copied = self._attempt(self.fs.copy_file, entry.path, child_target) and copied
                    continue

                info = self._query(entry.stat)
                if info is None:
                    copied = False
                    continue
                identity = (info.st_dev, info.st_ino)
                if identity in visited:
                    logger.debug("Skipping %s, already copied or part of the destination", entry.path)
                    continue
                visited.add(identity)

                if not self.fs.is_dir(child_target) and not self._attempt(
                    self.fs.mkdir, child_target, DEFAULT_DIRECTORY_MODE
                ):
                    copied = False
                    continue
                stack.append((entry.path, child_target))
        return copied
