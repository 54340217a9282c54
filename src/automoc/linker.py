"""Gather mentions of the active note and link the missing ones.

``metadata`` is the vault's read-only metadata capability (a ``VaultIndex``
or anything offering the same queries): ``resolved_links``,
``resolved_links_of``, ``tags_of``, ``frontmatter_of``, ``read``,
``link_text``, membership (``path in metadata``) and, optionally,
``backlinks_for``.
"""

from typing import Optional

import click

from .backlinks import get_backlink_source
from .config import Config
from .exceptions import AutoMOCError, NoteError, ReadError
from .indexer import find_token_lines
from .models import ItemType, LinkMention, MocResult
from .resolver import resolve_mentions_for_file
from .utils import (
    is_ignored,
    is_markdown,
    normalize_string_or_list,
    note_name,
    sort_paths,
)
from .writer import add_missing_links


def get_present_links(metadata, note_path: str) -> list[str]:
    """Notes the active note already links to."""
    return sorted(metadata.resolved_links_of(note_path))


def get_headings(
    metadata,
    path: str,
    config: Config,
    active_name: str,
    item: Optional[str] = None,
    link_lines: Optional[list[int]] = None,
) -> list[str]:
    """Headings of ``path`` under which the mentions sit.

    Mention lines come from ``link_lines`` when the backlink source knows
    them, otherwise from a search for ``item`` (or the wikilink to the
    active note) in the note text.
    """
    if not config.link_to_heading:
        return []
    text = metadata.read(path)
    if link_lines is None:
        link_lines = find_token_lines(text, item, active_name)
    return resolve_mentions_for_file(
        path, link_lines, config.heading_mode, lambda _: text
    )


def _with_headings(
    metadata,
    candidates: dict[str, Optional[list[int]]],
    config: Config,
    active_name: str,
    item: Optional[str],
    errors: Optional[list[str]],
) -> list[LinkMention]:
    mentions = []
    for path, lines in candidates.items():
        try:
            headings = get_headings(metadata, path, config, active_name, item, lines)
        except ReadError as e:
            if errors is not None:
                errors.append(str(e))
            click.echo(f"  Warning: skipping {path}: {e}", err=True)
            continue
        mentions.append(LinkMention(path=path, headings=headings))
        if config.verbose and headings:
            click.echo(f"  {path}: {', '.join(headings)}")
    return mentions


def get_linked_mentions(
    metadata,
    note_path: str,
    config: Config,
    item: Optional[str] = None,
    errors: Optional[list[str]] = None,
) -> list[LinkMention]:
    """Every note linking to ``note_path``, sorted by path ignoring case."""
    source = get_backlink_source(metadata, config.ignored_folder_list)
    if config.verbose:
        click.echo(f"  Backlink source: {source.name}")

    found = source.find(note_path)
    found.pop(note_path, None)
    candidates = {path: found[path] for path in sort_paths(found)}
    return _with_headings(
        metadata, candidates, config, note_name(note_path), item, errors
    )


def get_tagged_mentions(
    metadata,
    note_path: str,
    config: Config,
    tag: str,
    errors: Optional[list[str]] = None,
) -> list[LinkMention]:
    """Notes carrying ``tag`` in their body or frontmatter, each listed once."""
    to_compare = tag.replace("#", "", 1)
    ignored = config.ignored_folder_list
    candidates: dict[str, Optional[list[int]]] = {}

    for path in metadata.resolved_links:
        if path == note_path or is_ignored(path, ignored):
            continue
        body_tags = [t.replace("#", "", 1) for t in metadata.tags_of(path)]
        front_tags = normalize_string_or_list(metadata.frontmatter_of(path).get("tags"))
        if to_compare in body_tags or to_compare in front_tags:
            candidates[path] = None

    return _with_headings(
        metadata, candidates, config, note_name(note_path), tag, errors
    )


def get_alias_mentions(
    metadata,
    note_path: str,
    config: Config,
    alias: str,
    errors: Optional[list[str]] = None,
) -> list[LinkMention]:
    """Notes whose frontmatter aliases include ``alias``, each listed once."""
    ignored = config.ignored_folder_list
    candidates: dict[str, Optional[list[int]]] = {}

    for path in metadata.resolved_links:
        if path == note_path or is_ignored(path, ignored):
            continue
        aliases = normalize_string_or_list(metadata.frontmatter_of(path).get("aliases"))
        if alias in aliases:
            candidates[path] = None

    return _with_headings(
        metadata, candidates, config, note_name(note_path), alias, errors
    )


def run_auto_moc(
    metadata,
    note_path: str,
    item_type: ItemType,
    config: Config,
    item: Optional[str] = None,
    insert_line: Optional[int] = None,
) -> MocResult:
    """Link every missing mention of the chosen kind into the active note.

    Args:
        metadata: Vault metadata capability.
        note_path: Vault-relative path of the active note.
        item_type: Which mentions to collect.
        config: Linking settings.
        item: The tag or alias to collect mentions for.
        insert_line: 0-based line to insert at; end of note when omitted.

    Returns:
        A MocResult holding the new text (not yet written).

    Raises:
        NoteError: If the active note is not a markdown note in the vault.
        ReadError: If the active note itself cannot be read.
    """
    item_type = ItemType(item_type)
    if not is_markdown(note_path):
        raise NoteError(
            f"Failed to link mentions, {note_path} is not a markdown file"
        )
    if note_path not in metadata:
        raise NoteError(f"Note not found in vault: {note_path}")
    if item_type in (ItemType.TAG, ItemType.ALIAS) and not item:
        raise AutoMOCError(f"A {item_type.value} is required")

    text = metadata.read(note_path)
    result = MocResult(note_path=note_path, text=text)

    if item_type == ItemType.LINK:
        result.mentions = get_linked_mentions(
            metadata, note_path, config, item, result.errors
        )
    elif item_type == ItemType.TAG:
        result.mentions = get_tagged_mentions(
            metadata, note_path, config, item, result.errors
        )
    else:
        result.mentions = get_alias_mentions(
            metadata, note_path, config, item, result.errors
        )

    present_links = get_present_links(metadata, note_path)
    result.text, result.added = add_missing_links(
        text, present_links, result.mentions, metadata, config, insert_line
    )
    return result
