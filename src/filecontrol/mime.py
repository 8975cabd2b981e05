"""Extension to MIME type registry."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Packaged seed table
DEFAULT_MIME_TABLE = resources.files("filecontrol") / "data" / "mime_types.yaml"


def extension_key(name: str) -> str | None:
    """Return the lower-cased registry key for a file name.

    Args:
        name: A base name such as ``photo.JPG``.

    Returns:
        The text after the last dot, lower-cased, or None if there is none.
    """
    if "." not in name:
        return None
    return name.rsplit(".", 1)[1].lower() or None


def _load_table(text: str, origin: str) -> dict[str, str]:
    """Parse a YAML mapping of extension to MIME type.

    Raises:
        ValueError: If the document is not a flat mapping.
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"MIME table {origin} must be a mapping")
    return {str(ext): str(mime) for ext, mime in data.items()}


class MimeRegistry:
    """Mutable mapping from file extension to MIME type.

    Keys are lower-case extensions without the leading dot. Lookups are exact
    and case-sensitive. The registry is not synchronized; callers sharing one
    instance between threads must provide their own locking.
    """

    def __init__(self, types: dict[str, str] | None = None) -> None:
        """Initialize the registry.

        Args:
            types: Initial mapping. Copied, never referenced.

        Note:
            Use `create_default()` for a registry seeded with the built-in table.
        """
        self._types: dict[str, str] = dict(types or {})

    @classmethod
    def create_default(cls) -> MimeRegistry:
        """Create a registry seeded with the packaged MIME table."""
        return cls(_load_table(DEFAULT_MIME_TABLE.read_text(encoding="utf-8"), "default"))

    @classmethod
    def from_file(cls, path: Path) -> MimeRegistry:
        """Create a registry from a YAML mapping file.

        Args:
            path: Path to a YAML file of ``extension: mime/type`` pairs.

        Returns:
            Registry seeded from the file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not a mapping.
        """
        if not path.exists():
            raise FileNotFoundError(f"MIME table not found: {path}")

        types = _load_table(path.read_text(encoding="utf-8"), str(path))
        logger.debug("Loaded %d MIME types from %s", len(types), path)
        return cls(types)

    def get(self, extension: str) -> str | None:
        """Return the MIME type registered for an extension."""
        return self._types.get(extension)

    def add(self, extension: str, mime: str) -> None:
        """Register a MIME type unless the extension is already present."""
        self._types.setdefault(extension, mime)

    def set(self, extension: str, mime: str) -> None:
        """Register a MIME type, replacing any existing value."""
        self._types[extension] = mime

    def pull(self, extension: str) -> str | None:
        """Return the MIME type for an extension and remove it."""
        return self._types.pop(extension, None)

    def remove(self, extension: str) -> None:
        """Remove an extension if present."""
        self._types.pop(extension, None)

    def has(self, extension: str) -> bool:
        """Check whether an extension is registered."""
        return extension in self._types

    def all(self) -> dict[str, str]:
        """Return a snapshot of every registered extension."""
        return dict(self._types)

    def flush(self) -> None:
        """Remove every entry."""
        self._types.clear()

    def guess(self, path: str | Path) -> str | None:
        """Look up the MIME type for a path's (lower-cased) extension."""
        key = extension_key(Path(path).name)
        return self.get(key) if key else None

    def __contains__(self, extension: object) -> bool:
        return extension in self._types

    def __len__(self) -> int:
        return len(self._types)
