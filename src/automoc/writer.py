"""Insert link lines into the active note and write it back to the vault."""

from pathlib import Path
from typing import Optional

from .config import Config
from .formatter import format_link_lines, list_prefix
from .models import LinkMention, ListStyle
from .utils import normalize_string_or_list


def insert_lines(text: str, lines: list[str], insert_line: Optional[int] = None) -> str:
    """Insert ``lines`` before the 0-based ``insert_line`` (default: end of note).

    Every inserted line is newline-terminated, like typing at the cursor.
    """
    if not lines:
        return text
    block = "".join(line + "\n" for line in lines)
    # Lines are "\n"-separated, matching the numbering used by the indexer.
    parts = text.split("\n")
    line_count = len(parts) - 1 if text.endswith("\n") else len(parts)
    if insert_line is None or insert_line >= line_count:
        if text and not text.endswith("\n"):
            text += "\n"
        return text + block
    insert_line = max(insert_line, 0)
    before = "".join(part + "\n" for part in parts[:insert_line])
    return before + block + "\n".join(parts[insert_line:])


def _first_alias(metadata, path: str) -> str:
    aliases = normalize_string_or_list(metadata.frontmatter_of(path).get("aliases"))
    return aliases[0] if aliases else ""


def add_missing_links(
    text: str,
    present_links: list[str],
    mentions: list[LinkMention],
    metadata,
    config: Config,
    insert_line: Optional[int] = None,
) -> tuple[str, list[str]]:
    """Add a link for every mention the note does not link to yet.

    Returns:
        The new note text and the inserted link lines.
    """
    style = config.list_style
    number = 1
    added: list[str] = []

    for mention in mentions:
        if mention.path in present_links:
            continue

        alias = _first_alias(metadata, mention.path) if config.link_with_alias else ""
        prefix = list_prefix(style, config.ordered_list_separator, number)
        added.extend(
            format_link_lines(
                metadata.link_text(mention.path), mention.headings, prefix, alias
            )
        )
        if style == ListStyle.ORDERED:
            number += 1

    return insert_lines(text, added, insert_line), added


def write_note(vault_path: Path, note_path: str, text: str) -> Path:
    """Write the note text back into the vault. Returns the file path."""
    filepath = Path(vault_path) / note_path
    filepath.write_text(text, encoding="utf-8")
    return filepath
