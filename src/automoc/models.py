"""Data models for automoc."""

from dataclasses import dataclass, field
from enum import Enum


class HeadingMode(str, Enum):
    """How a mention is attributed to a heading."""

    NEAREST = "nearest"
    NEAREST_PRECEDING = "preceding"


class ItemType(str, Enum):
    """Which kind of reference a run collects mentions for."""

    LINK = "link"
    TAG = "tag"
    ALIAS = "alias"


class ListStyle(str, Enum):
    """Prefix applied to every inserted link line."""

    DISABLED = "disabled"
    ORDERED = "ordered"
    UNORDERED = "unordered"
    CHECKBOX = "checkbox"


@dataclass
class LinkMention:
    """A note referencing the subject, with the headings it should be linked under."""

    path: str
    headings: list[str] = field(default_factory=list)


@dataclass
class MocResult:
    """Outcome of a single run against the active note."""

    note_path: str
    text: str
    mentions: list[LinkMention] = field(default_factory=list)
    added: list[str] = field(default_factory=list)  # inserted link lines
    errors: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added)
