"""Attribute mentions to the closest heading of a note."""

import math
from typing import Callable, Iterable, Optional

from .indexer import clean_heading_title, index_headings
from .models import HeadingMode


def _distance(index: int, entry: Optional[str], mention_line: int, mode: HeadingMode) -> float:
    if entry is None:
        return math.inf
    if mode == HeadingMode.NEAREST_PRECEDING:
        if index > mention_line:
            return math.inf
        return mention_line - index
    return abs(index - mention_line)


def closest_heading(
    heading_entries: list[Optional[str]],
    mention_line: int,
    mode: HeadingMode = HeadingMode.NEAREST,
) -> Optional[str]:
    """Pick the heading that governs the mention on ``mention_line``.

    With ``HeadingMode.NEAREST`` headings on either side compete; with
    ``HeadingMode.NEAREST_PRECEDING`` headings after the mention are never
    eligible. On equal distance the earlier heading wins.

    Returns:
        The heading title, or ``None`` when no heading is eligible.
    """
    best_index = -1
    best_distance = math.inf
    for index, entry in enumerate(heading_entries):
        distance = _distance(index, entry, mention_line, mode)
        if distance < best_distance:
            best_index = index
            best_distance = distance

    if best_index < 0:
        return None

    heading_entries[best_index] = clean_heading_title(heading_entries[best_index])
    return heading_entries[best_index]


def resolve_mentions_for_file(
    path: str,
    mention_lines: Iterable[int],
    mode: HeadingMode,
    read_text: Callable[[str], str],
    enabled: bool = True,
) -> list[str]:
    """Resolve every mention in a note to its closest heading.

    Args:
        path: Note to resolve against.
        mention_lines: Line numbers of the mentions inside that note.
        mode: Heading selection policy.
        read_text: Callable returning the note's text; a ``ReadError`` it
            raises is propagated.
        enabled: When false (linking to headings is switched off) nothing is
            read and the result is empty.

    Returns:
        Heading titles in ascending mention order, mentions without an
        eligible heading dropped.
    """
    if not enabled:
        return []

    lines = sorted(mention_lines)
    if not lines:
        return []

    entries = index_headings(read_text(path))
    headings = []
    for line in lines:
        heading = closest_heading(entries, line, mode)
        if heading is not None:
            headings.append(heading)
    return headings
