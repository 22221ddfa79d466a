"""Project structure manifest used to ground the generated scripts in the real project layout."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

DEFAULT_SOURCE_EXTENSIONS = (".ts", ".js")
DEFAULT_EXCLUDED_DIRECTORIES = ("node_modules", ".git")

DIRECTORY_MARKER = "📁"
FILE_MARKER = "📄"


def _walk(directory: Path, extensions: tuple[str, ...], excluded: Collection[str]) -> Iterator[str]:
    # Entries are yielded in the order the filesystem enumerates them
    with os.scandir(directory) as entries:
        items = list(entries)

    for item in items:
        full_path = directory / item.name
        # Symlinks are neither listed nor followed
        if item.is_dir(follow_symlinks=False):
            if item.name in excluded:
                continue
            yield f"{DIRECTORY_MARKER} {full_path}"
            yield from _walk(full_path, extensions, excluded)
        elif item.is_file(follow_symlinks=False) and item.name.endswith(extensions):
            yield f"{FILE_MARKER} {full_path}"


def scan_project(
    root: Path | str,
    extensions: Collection[str] = DEFAULT_SOURCE_EXTENSIONS,
    excluded: Collection[str] = DEFAULT_EXCLUDED_DIRECTORIES,
) -> str:
    """Build a newline-joined listing of directories and source files below ``root``.

    Directories named in ``excluded`` are neither listed nor descended into.
    Raises ``FileNotFoundError``/``NotADirectoryError``/``PermissionError`` if ``root``
    can not be read.
    """
    return "\n".join(_walk(Path(root), tuple(extensions), frozenset(excluded)))
