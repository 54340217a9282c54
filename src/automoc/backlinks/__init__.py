"""Backlink source factory."""

from typing import Optional

from .base import BacklinkSource
from .index import IndexBacklinkSource
from .scan import ResolvedLinksBacklinkSource


def get_backlink_source(
    metadata, ignored_folders: Optional[list[str]] = None
) -> BacklinkSource:
    """Pick the best backlink source the metadata supports."""
    if callable(getattr(metadata, "backlinks_for", None)):
        return IndexBacklinkSource(metadata, ignored_folders)
    return ResolvedLinksBacklinkSource(metadata, ignored_folders)
