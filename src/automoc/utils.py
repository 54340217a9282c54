"""Utility functions for automoc."""

from pathlib import PurePosixPath
from typing import Any, Iterable


def note_name(path: str) -> str:
    """File name of a vault path, e.g. ``Foo.md`` for ``dir/Foo.md``."""
    return PurePosixPath(path).name


def strip_md(path: str) -> str:
    """Drop the ``.md`` extension from a note path or name."""
    return path[:-3] if path.endswith(".md") else path


def is_markdown(path: str) -> bool:
    return path.endswith(".md")


def parse_ignored_folders(value: str) -> list[str]:
    """Parse a comma separated folder list, dropping surrounding slashes."""
    folders = []
    for part in value.strip().split(","):
        part = part.strip().strip("/")
        if part:
            folders.append(part)
    return folders


def is_ignored(path: str, ignored_folders: Iterable[str]) -> bool:
    """Whether any ignored folder occurs in the path."""
    return any(folder in path for folder in ignored_folders)


def normalize_string_or_list(value: Any) -> list[str]:
    """Canonicalize a frontmatter ``tags``/``aliases`` value to a list of strings.

    A list keeps its string items in order; a single string is split on
    ``", "``; anything else yields an empty list.
    """
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    if isinstance(value, str):
        return [item for item in value.split(", ") if item]
    return []


def sort_paths(paths: Iterable[str]) -> list[str]:
    """Sort note paths case-insensitively."""
    return sorted(paths, key=lambda p: (p.casefold(), p))
