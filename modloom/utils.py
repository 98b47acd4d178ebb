"""Shared utility functions for modloom.

Provides file I/O, file-system helpers (script enumeration, path
normalisation, name validation) and Rich-based console reporting.  Console
output is routed through a single module-level ``Console`` so every command
prints with the same styling.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Iterator
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console()

# Project, module and folder names: letters, digits, hyphens and underscores.
NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]*$")

# ---------------------------------------------------------------------------
# Name / path helpers
# ---------------------------------------------------------------------------


def is_valid_name(name: str | None) -> bool:
    """Return ``True`` if *name* is non-blank and only uses ``A-Z 0-9 - _``.

    Examples::

        is_valid_name("core")        -> True
        is_valid_name("my-addon_2")  -> True
        is_valid_name("  ")          -> False
        is_valid_name("bad name")    -> False
    """
    if name is None or not name.strip():
        return False
    return NAME_PATTERN.match(name) is not None


def normalize_script_path(path: str | Path) -> str:
    """Return *path* with forward slashes and no repeated separators.

    Examples::

        normalize_script_path("demo-modules\\\\core\\\\sh_a.lua") -> "demo-modules/core/sh_a.lua"
        normalize_script_path("a//b///c.lua")                    -> "a/b/c.lua"
    """
    normalized = str(path).replace("\\", "/")
    return re.sub(r"/{2,}", "/", normalized)


def has_parent_traversal(path: str) -> bool:
    """Return ``True`` if *path* contains ``..`` anywhere.

    Names such as ``weird..name.lua`` are rejected along with real parent
    references.
    """
    return ".." in path


def iter_files(root: str | Path, suffix: str, *, sort: bool = False) -> Iterator[Path]:
    """Yield every file under *root* whose name ends with *suffix*.

    The walk is recursive and the suffix match is case-insensitive.  Without
    *sort* the order is whatever ``os.walk`` reports, which depends on the
    platform and file system.  With *sort* directories and files are visited
    in lexical order.

    Raises:
        OSError: If any directory under *root* cannot be listed.
    """
    suffix = suffix.lower()
    for dirpath, dirnames, filenames in os.walk(root, onerror=_reraise):
        if sort:
            dirnames.sort()
            filenames = sorted(filenames)
        for filename in filenames:
            if filename.lower().endswith(suffix):
                yield Path(dirpath) / filename


def _reraise(exc: OSError) -> None:
    raise exc


def iter_subdirectories(root: str | Path, *, sort: bool = False) -> Iterator[Path]:
    """Yield the immediate subdirectories of *root* in enumeration order."""
    with os.scandir(root) as entries:
        directories = [Path(entry.path) for entry in entries if entry.is_dir()]
    if sort:
        directories.sort(key=lambda p: p.name)
    yield from directories


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


async def save_text(content: str, path: str | Path) -> Path:
    """Write *content* to *path*, creating parent directories.

    The write runs in a worker thread so callers can await it.
    """
    file_path = Path(path)
    await asyncio.to_thread(_write_file, file_path, content)
    return file_path


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str = "") -> None:
    """Print a plain informational line."""
    console.print(escape(message))


def print_verbose(message: str, verbose: bool) -> None:
    """Print a dimmed line, only when *verbose* is enabled."""
    if verbose:
        console.print(f"[dim]{escape(message)}[/dim]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")

