"""Backlinks answered directly by the metadata index."""

from typing import Optional

from ..utils import is_ignored
from .base import BacklinkSource


class IndexBacklinkSource(BacklinkSource):
    """Uses the index's own backlink query, which knows every link position."""

    def __init__(self, metadata, ignored_folders: Optional[list[str]] = None):
        super().__init__(ignored_folders)
        self._metadata = metadata

    @property
    def name(self) -> str:
        return "index"

    def find(self, path: str) -> dict[str, Optional[list[int]]]:
        return {
            source: list(lines)
            for source, lines in self._metadata.backlinks_for(path).items()
            if not is_ignored(source, self._ignored_folders)
        }
