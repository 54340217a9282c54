"""Abstract base class for backlink sources."""

from abc import ABC, abstractmethod
from typing import Optional


class BacklinkSource(ABC):
    """Finds the notes that link to a given note.

    Implementations differ only in how much they know: some report the exact
    lines holding each link, others only which notes link at all.
    """

    def __init__(self, ignored_folders: Optional[list[str]] = None):
        self._ignored_folders = ignored_folders or []

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier for this source."""

    @abstractmethod
    def find(self, path: str) -> dict[str, Optional[list[int]]]:
        """Return {linking note path: link lines, or None when unknown}."""
