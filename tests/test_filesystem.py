"""Tests for filesystem abstraction."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from filecontrol.filesystem import RealFileSystem
from filecontrol.protocols import FileSystem


class TestRealFileSystem:
    """Tests for RealFileSystem implementation."""

    def test_satisfies_protocol(self) -> None:
        """Test RealFileSystem is a structural FileSystem."""
        assert isinstance(RealFileSystem(), FileSystem)

    def test_is_file_and_is_dir(self, tmp_path: Path) -> None:
        """Test type probes for files, directories and missing paths."""
        fs = RealFileSystem()
        test_file = tmp_path / "file.txt"
        test_file.touch()

        assert fs.is_file(str(test_file)) is True
        assert fs.is_dir(str(test_file)) is False
        assert fs.is_dir(str(tmp_path)) is True
        assert fs.exists(str(tmp_path / "missing")) is False

    def test_open_and_stat(self, tmp_path: Path) -> None:
        """Test writing through open() shows up in stat()."""
        fs = RealFileSystem()
        test_file = tmp_path / "data.bin"

        with fs.open(str(test_file), "wb") as handle:
            handle.write(b"12345")

        assert fs.stat(str(test_file)).st_size == 5

    def test_stat_missing_raises(self, tmp_path: Path) -> None:
        """Test stat lets FileNotFoundError escape."""
        fs = RealFileSystem()

        with pytest.raises(FileNotFoundError):
            fs.stat(str(tmp_path / "missing"))

    def test_rename(self, tmp_path: Path) -> None:
        """Test renaming a file."""
        fs = RealFileSystem()
        src = tmp_path / "a.txt"
        src.write_text("a")

        fs.rename(str(src), str(tmp_path / "b.txt"))

        assert not src.exists()
        assert (tmp_path / "b.txt").read_text() == "a"

    def test_copy_file_overwrites(self, tmp_path: Path) -> None:
        """Test copy_file replaces an existing destination."""
        fs = RealFileSystem()
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        src.write_text("new")
        dst.write_text("old content")

        fs.copy_file(str(src), str(dst))

        assert dst.read_text() == "new"

    def test_mkdir_and_rmdir(self, tmp_path: Path) -> None:
        """Test creating and removing a single directory."""
        fs = RealFileSystem()
        new_dir = tmp_path / "newdir"

        fs.mkdir(str(new_dir), 0o755)
        assert new_dir.is_dir()

        fs.rmdir(str(new_dir))
        assert not new_dir.exists()

    def test_mkdir_without_parent_raises(self, tmp_path: Path) -> None:
        """Test mkdir does not create parents."""
        fs = RealFileSystem()

        with pytest.raises(FileNotFoundError):
            fs.mkdir(str(tmp_path / "a" / "b"), 0o755)

    def test_unlink_missing_raises(self, tmp_path: Path) -> None:
        """Test unlinking non-existent file raises FileNotFoundError."""
        fs = RealFileSystem()

        with pytest.raises(FileNotFoundError):
            fs.unlink(str(tmp_path / "missing.txt"))

    def test_scandir(self, tmp_path: Path) -> None:
        """Test listing returns every child including hidden ones."""
        fs = RealFileSystem()
        (tmp_path / "a.txt").touch()
        (tmp_path / ".hidden").touch()
        (tmp_path / "sub").mkdir()

        names = sorted(entry.name for entry in fs.scandir(str(tmp_path)))

        assert names == [".hidden", "a.txt", "sub"]

    def test_utime(self, tmp_path: Path) -> None:
        """Test setting both timestamps."""
        fs = RealFileSystem()
        test_file = tmp_path / "file.txt"
        test_file.touch()

        fs.utime(str(test_file), 1_000_000, 2_000_000)

        info = os.stat(test_file)
        assert info.st_atime == 1_000_000
        assert info.st_mtime == 2_000_000

    def test_chmod(self, tmp_path: Path) -> None:
        """Test changing permission bits."""
        fs = RealFileSystem()
        test_file = tmp_path / "file.txt"
        test_file.touch()

        fs.chmod(str(test_file), 0o600)

        assert os.stat(test_file).st_mode & 0o777 == 0o600

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX locking only")
    def test_lock_and_unlock(self, tmp_path: Path) -> None:
        """Test taking and releasing an exclusive lock."""
        fs = RealFileSystem()
        test_file = tmp_path / "file.txt"
        test_file.touch()

        with open(test_file, "r+b") as handle:
            assert fs.lock_exclusive(handle) is True
            fs.unlock(handle)

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX user database only")
    def test_user_and_group_names(self) -> None:
        """Test resolving the current user and group."""
        import grp
        import pwd

        fs = RealFileSystem()

        assert fs.user_name(os.getuid()) == pwd.getpwuid(os.getuid()).pw_name
        assert fs.group_name(os.getgid()) == grp.getgrgid(os.getgid()).gr_name

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX user database only")
    def test_unknown_ids_resolve_to_none(self) -> None:
        """Test ids missing from the databases give None."""
        fs = RealFileSystem()

        assert fs.user_name(2**31 - 2) is None
        assert fs.group_name(2**31 - 2) is None
