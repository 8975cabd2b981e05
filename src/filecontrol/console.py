"""Rich output for the command line interface."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from filecontrol.directory import DirectoryEntry
    from filecontrol.file import FileEntry
    from filecontrol.types import DirectoryListing, ImageMetadata


def _format_time(timestamp: float | None) -> str:
    if timestamp is None:
        return "unknown"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def _format_mode(mode: int | None) -> str:
    return f"{mode:04o}" if mode is not None else "unknown"


def _or_unknown(value: object) -> str:
    return "unknown" if value is None else str(value)


class Output:
    """Formats entries and messages for the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Rich console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_file(self, entry: FileEntry) -> None:
        """Display metadata for a file.

        Args:
            entry: The file to describe.
        """
        table = Table(title=entry.get_path(), show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        table.add_row("Name", entry.get_base_name())
        table.add_row("Extension", entry.get_extension() or "")
        table.add_row("MIME type", entry.get_mime_type() or "unknown")
        table.add_row("Size", f"{_or_unknown(entry.get_file_size())} bytes")
        table.add_row("Modified", _format_time(entry.get_modification_time()))
        table.add_row("Accessed", _format_time(entry.get_access_time()))
        table.add_row("Owner", f"{_or_unknown(entry.get_owner())} ({_or_unknown(entry.get_owner_id())})")
        table.add_row("Group", f"{_or_unknown(entry.get_group())} ({_or_unknown(entry.get_group_id())})")
        table.add_row("Mode", _format_mode(entry.get_permissions()))

        width = entry.get_width()
        if width is not None:
            table.add_row("Dimensions", f"{width}x{entry.get_height()}")

        self.console.print(table)

    def show_directory(self, entry: DirectoryEntry) -> None:
        """Display metadata for a directory.

        Args:
            entry: The directory to describe.
        """
        table = Table(title=entry.get_path(), show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        table.add_row("Name", entry.get_name())
        table.add_row("Size", f"{entry.get_size()} bytes")
        table.add_row("Modified", _format_time(entry.get_modification_time()))
        table.add_row("Accessed", _format_time(entry.get_access_time()))
        table.add_row("Owner", f"{_or_unknown(entry.get_owner())} ({_or_unknown(entry.get_owner_id())})")
        table.add_row("Group", f"{_or_unknown(entry.get_group())} ({_or_unknown(entry.get_group_id())})")
        table.add_row("Mode", _format_mode(entry.get_permissions()))

        self.console.print(table)

    def show_entries(self, title: str, entries: list[FileEntry | DirectoryEntry]) -> None:
        """Display a table of directory children.

        Args:
            title: Table title (usually the directory path).
            entries: Child entries to list.
        """
        if not entries:
            self.console.print("[yellow]Directory is empty[/yellow]")
            return

        from filecontrol.directory import DirectoryEntry

        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        table.add_column("Modified")

        for entry in entries:
            if isinstance(entry, DirectoryEntry):
                table.add_row(entry.get_name() + "/", "dir", "", _format_time(entry.get_modification_time()))
            else:
                table.add_row(
                    entry.get_base_name(),
                    entry.get_mime_type() or "file",
                    _or_unknown(entry.get_file_size()),
                    _format_time(entry.get_modification_time()),
                )

        self.console.print(table)

    def show_names(self, names: list[str]) -> None:
        """Print one name per line."""
        for name in names:
            self.console.print(name, markup=False, highlight=False)

    def show_listing(self, listing: DirectoryListing) -> None:
        """Display a listing record as files and directories."""
        self.console.print(f"\n[bold]{listing.path}[/bold]")
        for name in listing.directories:
            self.console.print(f"  [blue]{name}/[/blue]")
        for name in listing.files:
            self.console.print(f"  {name}", markup=False, highlight=False)

    def show_camera_info(self, path: str, metadata: ImageMetadata) -> None:
        """Display EXIF camera information.

        Args:
            path: Path of the image.
            metadata: Extracted image metadata.
        """
        table = Table(title=path, show_header=False)
        table.add_column("Tag", style="cyan")
        table.add_column("Value")

        table.add_row("MimeType", _or_unknown(metadata.mime))
        table.add_row("DateTime", _or_unknown(metadata.created))
        for tag, value in metadata.camera.model_dump(by_alias=True).items():
            table.add_row(tag, "" if value is None else str(value))

        self.console.print(table)

    def show_mime_types(self, types: dict[str, str]) -> None:
        """Display the MIME table.

        Args:
            types: Extension to MIME type mapping.
        """
        if not types:
            self.console.print("[yellow]No MIME types registered[/yellow]")
            return

        table = Table(title="MIME Types")
        table.add_column("Extension", style="cyan")
        table.add_column("MIME type")
        for extension in sorted(types):
            table.add_row(extension, types[extension])

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")
