"""CLI commands using Typer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from filecontrol.context import AppContext
    from filecontrol.directory import DirectoryEntry
    from filecontrol.file import FileEntry

import typer
from rich.console import Console
from rich.logging import RichHandler

from filecontrol import __version__
from filecontrol.context import create_context
from filecontrol.errors import FileControlError
from filecontrol.mime import extension_key
from filecontrol.console import Output
from filecontrol.types import ContentType

app = typer.Typer(
    name="filecontrol",
    help="Inspect and manipulate files and directories",
    no_args_is_help=True,
)

mime_app = typer.Typer(help="Look up MIME types")

app.add_typer(mime_app, name="mime")

console = Console()
output = Output(console)


@dataclass
class _Options:
    """Options given to the top-level callback."""

    mime_table: Path | None = None


_options = _Options()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"filecontrol v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log filesystem failures")] = False,
    mime_table: Annotated[
        Path | None, typer.Option("--mime-table", help="YAML table replacing the built-in MIME types")
    ] = None,
) -> None:
    """Inspect and manipulate files and directories."""
    _configure_logging(verbose)
    _options.mime_table = mime_table


def _get_context(_context: AppContext | None) -> AppContext:
    return _context or create_context(_options.mime_table)


def _fail(message: str, entry: FileEntry | DirectoryEntry | None = None) -> typer.Exit:
    """Report a failure and build the exit to raise."""
    if entry is not None and entry.last_error is not None:
        message = f"{message}: {entry.last_error.strerror or entry.last_error}"
    output.show_error(message)
    return typer.Exit(1)


def _existing(ctx: AppContext, path: str) -> FileEntry | DirectoryEntry:
    """Resolve a path to an existing entry.

    Raises:
        typer.Exit: If nothing exists at the path.
    """
    entry = ctx.entry(path)
    if not entry.exists():
        raise _fail(f"'{path}' does not exist")
    return entry


# ============================================================================
# Inspection Commands
# ============================================================================


@app.command()
def info(
    path: Annotated[str, typer.Argument(help="File or directory")],
    _context=None,
) -> None:
    """Show metadata for a file or directory."""
    ctx = _get_context(_context)
    entry = _existing(ctx, path)

    if ctx.filesystem.is_dir(path):
        output.show_directory(entry)
    else:
        output.show_file(entry)


@app.command("ls")
def list_directory(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    content_type: Annotated[
        ContentType, typer.Option("--format", "-f", help="Output shape")
    ] = ContentType.DEFAULT,
    _context=None,
) -> None:
    """List the contents of a directory."""
    ctx = _get_context(_context)
    directory = ctx.directory(path)

    try:
        content = directory.get_content(content_type)
    except FileControlError as e:
        raise _fail(str(e)) from e

    if content_type is ContentType.ARRAY:
        output.show_names(content)
    elif content_type is ContentType.JSON:
        console.print(content, markup=False, highlight=False)
    elif content_type is ContentType.OBJECT:
        output.show_listing(content)
    else:
        output.show_entries(directory.get_path(), content)


@app.command()
def size(
    path: Annotated[str, typer.Argument(help="File or directory")],
    _context=None,
) -> None:
    """Print the size in bytes (recursive for directories)."""
    ctx = _get_context(_context)
    entry = _existing(ctx, path)

    if ctx.filesystem.is_dir(path):
        total = entry.get_size()
    else:
        total = entry.get_file_size()
    if total is None:
        raise _fail(f"Could not read size of '{path}'", entry)
    console.print(total)


@app.command()
def camera(
    path: Annotated[str, typer.Argument(help="Image file")],
    _context=None,
) -> None:
    """Show EXIF camera information for an image."""
    ctx = _get_context(_context)
    entry = ctx.file(path)
    if not entry.exists():
        raise _fail(f"File '{path}' does not exist")

    metadata = entry.get_camera_info()
    if metadata is None:
        output.show_warning(f"'{path}' is not a recognised image")
        return
    if not any(value is not None for value in metadata.camera.model_dump().values()):
        output.show_info(f"'{path}' carries no camera EXIF tags")
        return
    output.show_camera_info(entry.get_path(), metadata)


# ============================================================================
# Modification Commands
# ============================================================================


@app.command()
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    mode: Annotated[str, typer.Option("--mode", "-m", help="Octal permission bits")] = "777",
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    ctx = _get_context(_context)
    directory = ctx.directory(path)

    try:
        created = directory.create(mode)
    except ValueError as e:
        raise _fail(str(e)) from e

    if not created:
        raise _fail(f"Could not create '{path}'", directory)
    output.show_success(f"Created {directory.get_path()}")


@app.command()
def touch(
    path: Annotated[str, typer.Argument(help="File to create or update")],
    mtime: Annotated[
        float | None, typer.Option("--mtime", help="Modification time (Unix timestamp)")
    ] = None,
    atime: Annotated[float | None, typer.Option("--atime", help="Access time (Unix timestamp)")] = None,
    _context=None,
) -> None:
    """Create a file if missing and optionally set its timestamps."""
    ctx = _get_context(_context)
    entry = ctx.file(path)

    if not entry.create():
        raise _fail(f"Could not create '{path}'", entry)
    if mtime is not None and not entry.set_modification_time(mtime):
        raise _fail(f"Could not set modification time of '{path}'", entry)
    if atime is not None and not entry.set_access_time(atime):
        raise _fail(f"Could not set access time of '{path}'", entry)
    output.show_success(f"Touched {entry.get_path()}")


@app.command("cp")
def copy(
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    destination: Annotated[str, typer.Argument(help="Target directory")],
    name: Annotated[str | None, typer.Option("--name", "-n", help="New name for a copied file")] = None,
    _context=None,
) -> None:
    """Copy a file into a directory, or mirror a directory tree."""
    ctx = _get_context(_context)
    entry = _existing(ctx, source)

    try:
        if ctx.filesystem.is_dir(source):
            copied = entry.copy(destination)
        else:
            copied = entry.copy(destination, name)
    except FileControlError as e:
        raise _fail(str(e)) from e

    if not copied:
        raise _fail(f"Could not copy '{source}' to '{destination}'", entry)
    output.show_success(f"Copied {source} to {destination}")


@app.command("mv")
def move(
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    destination: Annotated[str, typer.Argument(help="Target directory")],
    _context=None,
) -> None:
    """Move a file or directory into another directory."""
    ctx = _get_context(_context)
    entry = _existing(ctx, source)

    try:
        moved = entry.move(destination)
    except FileControlError as e:
        raise _fail(str(e)) from e

    if not moved:
        raise _fail(f"Could not move '{source}' to '{destination}'", entry)
    output.show_success(f"Moved {source} to {entry.path}")


@app.command("rm")
def remove(
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    _context=None,
) -> None:
    """Delete a file, or a directory with everything inside it."""
    ctx = _get_context(_context)
    entry = _existing(ctx, path)

    if not entry.delete():
        raise _fail(f"Could not delete '{path}'", entry)
    output.show_success(f"Deleted {path}")


@app.command()
def clear(
    path: Annotated[str, typer.Argument(help="Directory to empty")],
    _context=None,
) -> None:
    """Remove everything inside a directory, keeping the directory."""
    ctx = _get_context(_context)
    directory = ctx.directory(path)
    if not directory.exists():
        raise _fail(f"Directory '{path}' does not exist")

    if not directory.clear():
        raise _fail(f"Could not clear every entry in '{path}'", directory)
    output.show_success(f"Cleared {directory.get_path()}")


# ============================================================================
# MIME Commands
# ============================================================================


@mime_app.command("get")
def mime_get(
    extension: Annotated[str, typer.Argument(help="Extension or file name")],
    _context=None,
) -> None:
    """Look up the MIME type for an extension or file name."""
    ctx = _get_context(_context)
    key = extension_key(extension) or extension.lower()

    mime = ctx.mime.get(key)
    if mime is None:
        raise _fail(f"No MIME type registered for '{key}'")
    console.print(mime, markup=False, highlight=False)


@mime_app.command("list")
def mime_list(
    _context=None,
) -> None:
    """List every registered MIME type."""
    ctx = _get_context(_context)
    output.show_mime_types(ctx.mime.all())


if __name__ == "__main__":
    app()
