"""CLI entry point for automoc."""

import sys
from typing import Optional

import click

from .config import ORDERED_LIST_SEPARATORS, Config, load_config
from .exceptions import AutoMOCError, ConfigError
from .linker import run_auto_moc
from .models import ItemType, ListStyle
from .vault_index import VaultIndex
from .writer import write_note


_VAULT_OPTIONS = [
    click.option(
        "--vault-path",
        type=click.Path(),
        default=None,
        help="Path to the vault (default: current directory or OBSIDIAN_VAULT_PATH env var)",
    ),
    click.option(
        "--verbose", "-v",
        is_flag=True,
        default=False,
        help="Enable verbose output",
    ),
]


_LINK_OPTIONS = [
    click.option(
        "--line",
        type=click.IntRange(min=1),
        default=None,
        help="1-based line to insert the links at (default: end of note)",
    ),
    click.option(
        "--link-to-heading",
        is_flag=True,
        default=False,
        help="Link to the heading closest to each mention",
    ),
    click.option(
        "--no-link-to-heading",
        is_flag=True,
        default=False,
        help="Link to the note only, overriding AUTOMOC_LINK_TO_HEADING",
    ),
    click.option(
        "--heading-before",
        is_flag=True,
        default=False,
        help="Only consider headings above the mention",
    ),
    click.option(
        "--no-heading-before",
        is_flag=True,
        default=False,
        help="Consider headings on both sides, overriding AUTOMOC_LINK_TO_HEADING_BEFORE",
    ),
    click.option(
        "--list-style",
        type=click.Choice([style.value for style in ListStyle]),
        default=None,
        help="Insert the links as a list (default: disabled)",
    ),
    click.option(
        "--separator",
        type=click.Choice(list(ORDERED_LIST_SEPARATORS)),
        default=None,
        help="Character after the number in ordered lists (default: '.')",
    ),
    click.option(
        "--ignore",
        type=str,
        default=None,
        help="Comma separated folders whose notes are never linked",
    ),
    click.option(
        "--alias",
        "use_alias",
        is_flag=True,
        default=False,
        help="Use the first frontmatter alias of the linked note as link text",
    ),
    click.option(
        "--no-alias",
        "no_use_alias",
        is_flag=True,
        default=False,
        help="Do not use the first frontmatter alias of the linked note as link text",
    ),
    click.option(
        "--quiet", "-q",
        is_flag=True,
        default=False,
        help="Suppress notices",
    ),
    click.option(
        "--dry-run",
        is_flag=True,
        default=False,
        help="Print the links that would be added without writing the note",
    ),
]


def _apply(options):
    def decorator(func):
        for option in reversed(options):
            func = option(func)
        return func
    return decorator


vault_options = _apply(_VAULT_OPTIONS)
link_options = _apply(_LINK_OPTIONS)


def _switch(options: dict, name: str, flag: str) -> Optional[bool]:
    """Merge an --X / --no-X flag pair into True, False or None (not given)."""
    on = options.pop(name)
    off = options.pop("no_" + name)
    if on and off:
        raise click.UsageError(f"--{flag} and --no-{flag} are mutually exclusive")
    if on:
        return True
    if off:
        return False
    return None


def _load(vault_path, verbose, **overrides) -> Config:
    try:
        return load_config(vault_path=vault_path, verbose=verbose, **overrides)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)


def _scan(config: Config) -> VaultIndex:
    index = VaultIndex.scan(config.vault_path)
    if config.verbose:
        click.echo(f"Vault path: {config.vault_path}")
        click.echo(f"Found {len(index)} notes in vault")
    for path in index.skipped:
        click.echo(f"Warning: could not read {path}", err=True)
    return index


def pick_item(candidates: list[str], label: str) -> str:
    """Let the user choose one of ``candidates``; exits when there are none."""
    if not candidates:
        click.echo(f"No {label}s found in vault", err=True)
        sys.exit(1)
    for number, candidate in enumerate(candidates, start=1):
        click.echo(f"{number:>4}  {candidate}")
    choice = click.prompt(
        f"Select {label}",
        type=click.IntRange(1, len(candidates)),
    )
    return candidates[choice - 1]


def _run(item_type: ItemType, note: str, item: Optional[str], options: dict) -> None:
    """Shared body of the linking commands."""
    line = options.pop("line")
    dry_run = options.pop("dry_run")
    config = _load(
        options.pop("vault_path"),
        options.pop("verbose"),
        link_to_heading=_switch(options, "link_to_heading", "link-to-heading"),
        link_to_heading_before=_switch(options, "heading_before", "heading-before"),
        link_with_alias=_switch(options, "use_alias", "alias"),
        import_as_list=options.pop("list_style"),
        ordered_list_separator=options.pop("separator"),
        ignored_folders=options.pop("ignore"),
        quiet=options.pop("quiet"),
    )
    index = _scan(config)

    if item_type == ItemType.TAG:
        item = item or pick_item(index.all_tags(), "tag")
        item = "#" + item.lstrip("#")
    elif item_type == ItemType.ALIAS:
        item = item or pick_item(index.all_aliases(), "alias")

    if config.linking_mentions_notice:
        click.echo("Linking mentions")

    try:
        result = run_auto_moc(
            index,
            note,
            item_type,
            config,
            item=item,
            insert_line=line - 1 if line else None,
        )
    except AutoMOCError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    if dry_run:
        for link in result.added:
            click.echo(link)
    elif result.changed:
        try:
            write_note(config.vault_path, note, result.text)
        except OSError as e:
            click.echo(f"Failed to write {note}: {e}", err=True)
            sys.exit(2)

    if result.changed and config.new_links_added_notice:
        click.echo("New links added to note")
    elif not result.changed and config.no_new_links_notice:
        click.echo("No new links found")
    if config.verbose:
        click.echo(f"Added {len(result.added)} link(s) to {note}")

    if result.errors:
        click.echo(f"({len(result.errors)} note(s) skipped)", err=True)
        sys.exit(1)
    sys.exit(0)


@click.group()
def main():
    """Add missing links to a note from its backlinks, tags or aliases.

    Every note that mentions the active note (or carries the chosen tag or
    alias) but is not linked from it yet gets a link line inserted into
    the active note, optionally pointing at the heading closest to the
    mention.

    Example: automoc links "Projects/Garden.md" --link-to-heading
    """


@main.command()
@click.argument("note")
@vault_options
@link_options
def links(note, **options):
    """Add missing linked mentions of NOTE."""
    _run(ItemType.LINK, note, None, options)


@main.command()
@click.argument("note")
@click.argument("tag", required=False)
@vault_options
@link_options
def tag(note, tag, **options):
    """Add notes tagged with TAG to NOTE (prompts for TAG when omitted)."""
    _run(ItemType.TAG, note, tag, options)


@main.command()
@click.argument("note")
@click.argument("alias", required=False)
@vault_options
@link_options
def alias(note, alias, **options):
    """Add notes with alias ALIAS to NOTE (prompts for ALIAS when omitted)."""
    _run(ItemType.ALIAS, note, alias, options)


@main.command()
@vault_options
def tags(vault_path, verbose):
    """List every tag in the vault."""
    config = _load(vault_path, verbose)
    for name in _scan(config).all_tags():
        click.echo(name)


@main.command()
@vault_options
def aliases(vault_path, verbose):
    """List every alias in the vault."""
    config = _load(vault_path, verbose)
    for name in _scan(config).all_aliases():
        click.echo(name)
