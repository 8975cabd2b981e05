"""Single file wrapper."""

from __future__ import annotations

import logging
import os
from typing import IO, Any

from pydantic import ValidationError

from filecontrol.entry import BaseEntry
from filecontrol.errors import NotReadableError, NotWritableError
from filecontrol.mime import MimeRegistry, extension_key
from filecontrol.protocols import FileSystem, ImageInspector, MimeLookup
from filecontrol.types import CameraInfo, ImageMetadata, ImageProbe

logger = logging.getLogger(__name__)


class FileEntry(BaseEntry):
    """A file path and the operations that apply to it.

    The file need not exist when the entry is created. Content methods are
    no-ops returning False/None while it is missing.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        filesystem: FileSystem | None = None,
        mime: MimeLookup | None = None,
        images: ImageInspector | None = None,
    ) -> None:
        """Initialize a file entry.

        Args:
            path: Path to the file (absolute or relative).
            filesystem: Filesystem implementation. Defaults to RealFileSystem.
            mime: MIME registry used by `get_mime_type()`. Defaults to the
                packaged table, loaded on first use.
            images: Image inspector. Defaults to the Pillow inspector.
        """
        super().__init__(path, filesystem)
        self._mime = mime
        self._images = images

    @property
    def mime(self) -> MimeLookup:
        """The MIME registry this entry consults."""
        if self._mime is None:
            self._mime = MimeRegistry.create_default()
        return self._mime

    @property
    def images(self) -> ImageInspector:
        """The image inspector this entry consults."""
        if self._images is None:
            from filecontrol.image import PillowImageInspector

            self._images = PillowImageInspector()
        return self._images

    def exists(self) -> bool:
        """Check whether the path is an existing regular file."""
        return self.fs.is_file(self._path)

    # -------- Names --------

    def get_path(self) -> str:
        """Return the path of the file."""
        return self._path

    def get_base_name(self) -> str:
        """Return the file name including its extension."""
        return os.path.basename(self._path)

    def get_name(self) -> str:
        """Return the file name without its extension."""
        base_name = self.get_base_name()
        if "." not in base_name:
            return base_name
        return base_name.rsplit(".", 1)[0]

    def get_extension(self) -> str | None:
        """Return the text after the last dot of the name, or None."""
        base_name = self.get_base_name()
        if "." not in base_name:
            return None
        return base_name.rsplit(".", 1)[1]

    def set_base_name(self, name: str) -> bool:
        """Rename the file to ``name`` (extension included)."""
        return self.rename(name)

    def set_name(self, name: str) -> bool:
        """Rename the file, keeping its current extension."""
        extension = self.get_extension()
        return self.rename(f"{name}.{extension}" if extension else name)

    def set_extension(self, extension: str) -> bool:
        """Replace the extension and rename the file.

        Args:
            extension: New extension, with or without a leading dot. An empty
                string drops the extension.
        """
        extension = extension.lstrip(".")
        stem = self.get_name() if self.get_extension() is not None else self.get_base_name()
        return self.rename(f"{stem}.{extension}" if extension else stem)

    # -------- Metadata --------

    def get_file_size(self) -> int | None:
        """Return the size in bytes; 0 if missing, None if stat fails."""
        if not self.exists():
            return 0
        info = self._query(self.fs.stat, self._path)
        return info.st_size if info else None

    def get_mime_type(self) -> str | None:
        """Return the MIME type registered for the file's extension."""
        key = extension_key(self.get_base_name())
        return self.mime.get(key) if key else None

    def get_width(self) -> int | None:
        """Return the image width, or None if the file is not an image."""
        probe = self._probe()
        return probe.width if probe else None

    def get_height(self) -> int | None:
        """Return the image height, or None if the file is not an image."""
        probe = self._probe()
        return probe.height if probe else None

    def get_camera_info(self) -> ImageMetadata | None:
        """Return camera information read from EXIF tags.

        Returns:
            ImageMetadata for any recognised image (tags missing from the file
            are None), or None if the file is not an image.
        """
        probe = self._probe()
        if probe is None:
            return None

        values = {name: probe.exif.get(name) for name in CameraInfo.tag_names()}
        try:
            camera = CameraInfo.model_validate(values)
        except ValidationError as e:
            for error in e.errors():
                logger.debug("Dropping EXIF tag %s from %s: %s", error["loc"], self._path, error["msg"])
                values.pop(str(error["loc"][0]), None)
            camera = CameraInfo.model_validate(values)

        created = probe.exif.get("DateTime")
        return ImageMetadata(
            camera=camera,
            created=str(created) if created is not None else None,
            mime=probe.mime,
        )

    def _probe(self) -> ImageProbe | None:
        if not self.exists():
            return None
        return self.images.probe(self._path)

    # -------- Lifecycle --------

    def create(self) -> bool:
        """Create an empty file if it does not exist yet.

        Returns:
            True if the file exists afterwards, False if it could not be
            created (e.g. the parent directory is missing).
        """
        if self.exists():
            return True
        return self._attempt(self._open_and_close, "xb")

    def delete(self) -> bool:
        """Delete the file. False if it does not exist."""
        if not self.exists():
            return False
        return self._attempt(self.fs.unlink, self._path)

    def copy(self, directory: str | os.PathLike[str], name: str | None = None) -> bool:
        """Copy the file into ``directory``, overwriting any existing file.

        Args:
            directory: An existing, writable directory.
            name: Optional name for the copy. Defaults to this file's name.

        Returns:
            True on success. This entry keeps pointing at the original.

        Raises:
            DirectoryNotFoundError: If ``directory`` is not an existing directory.
            DirectoryNotWritableError: If ``directory`` is not writable.
        """
        directory = os.fspath(directory)
        self._check_target_directory(directory, "copy")

        if not self.exists():
            return False

        target = os.path.join(directory, name or self.get_base_name())
        return self._attempt(self.fs.copy_file, self._path, target)

    # -------- Content --------

    def get_content(self, encoding: str = "utf-8", errors: str = "surrogateescape") -> str | None:
        """Return the full content of the file.

        Args:
            encoding: Text encoding used to decode the bytes.
            errors: Decoding error handler. The default keeps undecodable
                bytes as surrogates, so binary content round-trips through
                ``content.encode(encoding, errors)``.

        Returns:
            The decoded content, or None if the file does not exist.

        Raises:
            NotReadableError: If the file exists but is not readable.
        """
        if not self.exists():
            return None
        if not self.is_readable():
            raise NotReadableError(self._path)

        data = self._query(self._read_all)
        return data.decode(encoding, errors) if data is not None else None

    def append(self, data: str | bytes) -> bool:
        """Write ``data`` at the end of the file.

        Raises:
            NotWritableError: If the file exists but is not writable.
        """
        if not self.exists():
            return False
        if not self.is_writable():
            raise NotWritableError(self._path)
        return self._attempt(self._write_at_end, _as_bytes(data))

    def prepend(self, data: str | bytes) -> bool:
        """Insert ``data`` in front of the existing content.

        The file is rewritten in place, one chunk the size of ``data`` at a
        time: each step reads the next chunk, writes the pending one over it
        and carries the chunk that was read forward.

        Raises:
            NotWritableError: If the file exists but is not writable.
        """
        if not self.exists():
            return False
        if not self.is_writable():
            raise NotWritableError(self._path)
        return self._attempt(self._shift_in, _as_bytes(data))

    def flush(self) -> bool:
        """Truncate the file to zero length under an exclusive lock.

        Raises:
            NotWritableError: If the file exists but is not writable.
        """
        if not self.exists():
            return False
        if not self.is_writable():
            raise NotWritableError(self._path, "FileEntry.flush")
        return self._attempt(self._truncate)

    def _open_and_close(self, mode: str) -> None:
        with self.fs.open(self._path, mode):
            pass

    def _read_all(self) -> bytes:
        with self.fs.open(self._path, "rb") as handle:
            return handle.read()

    def _write_at_end(self, data: bytes) -> None:
        with self.fs.open(self._path, "ab") as handle:
            handle.write(data)

    def _shift_in(self, data: bytes) -> None:
        with self.fs.open(self._path, "r+b") as handle:
            _shift_chunks(handle, data)

    def _truncate(self) -> None:
        # Write-only open, so files without read permission can be flushed
        with self.fs.open(self._path, "ab") as handle:
            locked = self.fs.lock_exclusive(handle)
            try:
                handle.truncate(0)
                handle.flush()
            finally:
                if locked:
                    self.fs.unlock(handle)


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def _shift_chunks(handle: IO[Any], data: bytes) -> None:
    """Write ``data`` at offset 0 and slide the old content right."""
    position = 0
    pending = data
    while pending:
        handle.seek(position)
        displaced = handle.read(len(pending))
        handle.seek(position)
        handle.write(pending)
        position += len(pending)
        pending = displaced
