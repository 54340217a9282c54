"""Per-line text indexing for markdown notes.

Turns a note's raw text into positional indices: one heading-or-not entry
per line, and the line numbers on which a search token occurs. Array index
equals line number, so ``entries[i]`` always describes line ``i``.
"""

import re
from typing import Optional

# ATX heading at line start: 1-6 '#', whitespace, then a title.
_HEADING_RE = re.compile(r"^#{1,6}\s.+")
_HEADING_MARKER_RE = re.compile(r"^#{1,6}\s+")


def split_lines(text: str) -> list[str]:
    """Split note text into lines; the empty note has no lines."""
    if not text:
        return []
    return text.split("\n")


def clean_heading_title(title: str) -> str:
    """Remove every '#' from a heading title and trim surrounding whitespace.

    All '#' characters are removed, not only the leading marker, so
    ``"Tips #useful"`` becomes ``"Tips useful"`` and ``"C# basics"`` becomes
    ``"C basics"``.
    """
    return title.replace("#", "").strip()


def index_headings(text: str) -> list[Optional[str]]:
    """Classify every line of a note as a heading title or ``None``.

    Args:
        text: Raw note content.

    Returns:
        A list with one entry per line: the cleaned heading title for ATX
        heading lines, ``None`` for every other line (blank lines included).
    """
    entries: list[Optional[str]] = []
    for line in split_lines(text):
        if _HEADING_RE.match(line):
            entries.append(clean_heading_title(_HEADING_MARKER_RE.sub("", line, count=1)))
        else:
            entries.append(None)
    return entries


def default_token(active_note_name: str) -> str:
    """Wikilink form of the active note's name, e.g. ``[[Foo]]`` for ``Foo.md``."""
    name = active_note_name.rsplit("/", 1)[-1]
    return "[[" + name.removesuffix(".md") + "]]"


def find_token_lines(
    text: str,
    token: Optional[str],
    active_note_name: str,
) -> list[int]:
    """Return the ascending line numbers whose text contains ``token``.

    Matching is a literal substring test per line, so a line counts once no
    matter how many times the token occurs on it. A token that is part of a
    longer token (``#tag`` inside ``#tagged``) also matches.

    When ``token`` is empty the wikilink to the active note is searched for.
    """
    to_search = token or default_token(active_note_name)
    return [
        number
        for number, line in enumerate(split_lines(text))
        if to_search in line
    ]
