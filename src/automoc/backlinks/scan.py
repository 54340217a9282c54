"""Backlinks found by scanning the resolved-links graph."""

from typing import Optional

from ..utils import is_ignored
from .base import BacklinkSource


class ResolvedLinksBacklinkSource(BacklinkSource):
    """Walks every note's outgoing links looking for the target.

    Link positions are not known here; callers locate the mentions by
    searching the note text for the wikilink instead.
    """

    def __init__(self, metadata, ignored_folders: Optional[list[str]] = None):
        super().__init__(ignored_folders)
        self._metadata = metadata

    @property
    def name(self) -> str:
        return "resolved-links"

    def find(self, path: str) -> dict[str, Optional[list[int]]]:
        backlinks: dict[str, Optional[list[int]]] = {}
        for source, targets in self._metadata.resolved_links.items():
            if is_ignored(source, self._ignored_folders):
                continue
            if path in targets:
                backlinks[source] = None
        return backlinks
