"""Tests for behaviour shared by files and directories."""

from __future__ import annotations

import errno
from unittest.mock import MagicMock

import pytest

from filecontrol.directory import DirectoryEntry
from filecontrol.entry import BaseEntry, parse_mode
from filecontrol.file import FileEntry


class TestParseMode:
    """Tests for parse_mode function."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (0o755, 0o755),
            ("755", 0o755),
            ("0755", 0o755),
            ("0o644", 0o644),
            ("1777", 0o1777),
            (" 700 ", 0o700),
        ],
    )
    def test_valid_modes(self, mode: int | str, expected: int) -> None:
        """Test integer and octal string modes."""
        assert parse_mode(mode) == expected

    @pytest.mark.parametrize("mode", ["", "rwx", "888", "75", "0x755", "075555"])
    def test_invalid_modes(self, mode: str) -> None:
        """Test malformed strings are rejected."""
        with pytest.raises(ValueError, match="Invalid permission mode"):
            parse_mode(mode)


class TestBaseEntry:
    """Tests for the shared entry surface."""

    def test_is_abstract(self) -> None:
        """Test BaseEntry cannot be instantiated directly."""
        with pytest.raises(TypeError):
            BaseEntry("/tmp")  # type: ignore[abstract]

    def test_repr(self) -> None:
        """Test the repr names the concrete class and path."""
        assert repr(FileEntry("/data/file.txt")) == "FileEntry('/data/file.txt')"
        assert repr(DirectoryEntry("/data/")) == "DirectoryEntry('/data')"

    def test_missing_entry_short_circuits(self, mock_filesystem: MagicMock) -> None:
        """Test actions on a missing entry never reach the filesystem."""
        entry = FileEntry("/data/file.txt", filesystem=mock_filesystem)

        assert entry.chmod(0o644) is False
        assert entry.rename("other.txt") is False
        assert entry.set_modification_time(0) is False

        mock_filesystem.chmod.assert_not_called()
        mock_filesystem.rename.assert_not_called()
        mock_filesystem.utime.assert_not_called()

    def test_rename_target(self, mock_filesystem: MagicMock) -> None:
        """Test renames stay in the parent directory."""
        mock_filesystem.is_file.return_value = True
        entry = FileEntry("/data/file.txt", filesystem=mock_filesystem)

        assert entry.rename("other.txt") is True

        mock_filesystem.rename.assert_called_once_with("/data/file.txt", "/data/other.txt")
        assert entry.path == "/data/other.txt"

    def test_lookup_error_is_recorded(self, mock_filesystem: MagicMock) -> None:
        """Test unknown user names surface as an OSError on last_error."""
        mock_filesystem.is_file.return_value = True
        mock_filesystem.chown_by_name.side_effect = LookupError("no such user: 'nobody-here'")
        entry = FileEntry("/data/file.txt", filesystem=mock_filesystem)

        assert entry.set_owner("nobody-here") is False

        assert isinstance(entry.last_error, OSError)
        assert entry.last_error.errno == errno.EINVAL
        assert "nobody-here" in entry.last_error.strerror

    def test_failures_are_logged(self, mock_filesystem: MagicMock, caplog: pytest.LogCaptureFixture) -> None:
        """Test suppressed OS errors leave a debug record."""
        mock_filesystem.is_file.return_value = True
        mock_filesystem.chmod.side_effect = PermissionError(errno.EPERM, "Operation not permitted")
        entry = FileEntry("/data/file.txt", filesystem=mock_filesystem)

        with caplog.at_level("DEBUG", logger="filecontrol.entry"):
            assert entry.chmod("600") is False

        assert "/data/file.txt" in caplog.text
        assert "Operation not permitted" in caplog.text
