"""Vault index scanner standing in for the note app's metadata cache.

Scans all .md files in a vault directory and records, per note, its YAML
frontmatter, its body tags and the wikilinks it contains, resolved to vault
paths with the line each link sits on. The index answers the read-only
queries the linker needs: resolved links, tags, frontmatter, backlinks and
note text.
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ReadError
from .utils import normalize_string_or_list, note_name, strip_md

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---[ \t]*(?:\n|$)", re.DOTALL)
_WIKILINK_RE = re.compile(r"!?\[\[([^\[\]|#^]*)(?:[#^][^\[\]|]*)?(?:\|[^\[\]]*)?\]\]")
_TAG_RE = re.compile(r"(?:(?<=\s)|^)#([\w/-]+)")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


@dataclass
class VaultNote:
    """A single note found in the vault."""

    path: str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)  # body tags, with leading '#'
    links: dict[str, list[int]] = field(default_factory=dict)  # target path -> lines


class VaultIndex:
    """Index of vault notes, their links, tags and frontmatter."""

    def __init__(
        self,
        vault_path: Path,
        notes: Optional[list[VaultNote]] = None,
        skipped: Optional[list[str]] = None,
    ):
        self.vault_path = Path(vault_path)
        self.notes: dict[str, VaultNote] = {note.path: note for note in notes or []}
        self.skipped: list[str] = skipped or []

    @classmethod
    def scan(cls, vault_path: Path) -> "VaultIndex":
        """Scan all .md files in vault_path and build an index.

        Hidden folders (``.obsidian``, ``.trash``...) are not scanned. Files
        that cannot be read are left out of the index and listed in
        ``skipped``.

        Args:
            vault_path: Root directory of the vault.

        Returns:
            A VaultIndex containing all readable notes.
        """
        vault_path = Path(vault_path)
        if not vault_path.is_dir():
            return cls(vault_path)

        paths = sorted(
            md_file.relative_to(vault_path).as_posix()
            for md_file in vault_path.rglob("*.md")
            if md_file.is_file() and not any(
                part.startswith(".") for part in md_file.relative_to(vault_path).parts
            )
        )
        resolver = _LinkResolver(paths)

        notes: list[VaultNote] = []
        skipped: list[str] = []
        for path in paths:
            try:
                text = _read(vault_path, path)
            except ReadError:
                skipped.append(path)
                continue
            notes.append(_parse_note(path, text, resolver))

        return cls(vault_path, notes, skipped)

    @property
    def resolved_links(self) -> dict[str, dict[str, int]]:
        """Map of note path to {linked note path: number of links}."""
        return {path: self.resolved_links_of(path) for path in self.notes}

    def resolved_links_of(self, path: str) -> dict[str, int]:
        note = self.notes.get(path)
        if note is None:
            return {}
        return {target: len(lines) for target, lines in note.links.items()}

    def tags_of(self, path: str) -> list[str]:
        note = self.notes.get(path)
        return list(note.tags) if note else []

    def frontmatter_of(self, path: str) -> dict[str, Any]:
        note = self.notes.get(path)
        return dict(note.frontmatter) if note else {}

    def backlinks_for(self, path: str) -> dict[str, list[int]]:
        """Notes linking to ``path``, with the lines holding those links."""
        backlinks = {}
        for note in self.notes.values():
            lines = note.links.get(path)
            if lines:
                backlinks[note.path] = sorted(lines)
        return backlinks

    def read(self, path: str) -> str:
        """Read a note's current text; raises ReadError when unavailable."""
        return _read(self.vault_path, path)

    def link_text(self, path: str) -> str:
        """Shortest link text that identifies the note: its name when unique."""
        name = note_name(path).casefold()
        same_name = [p for p in self.notes if note_name(p).casefold() == name]
        if len(same_name) <= 1:
            return strip_md(note_name(path))
        return strip_md(path)

    def all_tags(self) -> list[str]:
        """Every body and frontmatter tag in the vault, '#'-prefixed and sorted."""
        tags = set()
        for note in self.notes.values():
            tags.update(note.tags)
            for tag in normalize_string_or_list(note.frontmatter.get("tags")):
                tags.add("#" + tag.lstrip("#"))
        return sorted(tags)

    def all_aliases(self) -> list[str]:
        aliases = set()
        for note in self.notes.values():
            aliases.update(normalize_string_or_list(note.frontmatter.get("aliases")))
        return sorted(aliases)

    def __contains__(self, path: object) -> bool:
        return path in self.notes

    def __len__(self) -> int:
        return len(self.notes)


class _LinkResolver:
    """Resolve wikilink targets to vault paths the way the note app does."""

    def __init__(self, paths: list[str]):
        self._by_path = {p.casefold(): p for p in paths}
        self._by_name: dict[str, list[str]] = defaultdict(list)
        for p in paths:
            self._by_name[note_name(p).casefold()].append(p)

    def resolve(self, target: str) -> Optional[str]:
        target = target.strip().lstrip("/")
        if not target:
            return None
        if not target.endswith(".md"):
            target += ".md"
        key = target.casefold()
        if key in self._by_path:
            return self._by_path[key]
        candidates = [
            p for p in self._by_name.get(note_name(target).casefold(), [])
            if p.casefold().endswith("/" + key) or p.casefold() == key
            or "/" not in target
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda p: (p.count("/"), len(p), p))


def _read(vault_path: Path, path: str) -> str:
    try:
        return (vault_path / path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(path, str(e)) from e


def _parse_frontmatter(text: str) -> tuple[dict[str, Any], int]:
    """Return the parsed frontmatter and the number of lines it spans."""
    fm_match = _FRONTMATTER_RE.match(text)
    if not fm_match:
        return {}, 0
    span = fm_match.group(0).rstrip("\n").count("\n") + 1
    try:
        data = yaml.safe_load(fm_match.group(1))
    except yaml.YAMLError:
        return {}, span
    if not isinstance(data, dict):
        return {}, span
    return data, span


def _parse_note(path: str, text: str, resolver: _LinkResolver) -> VaultNote:
    """Parse a single note's text into a VaultNote.

    Links and tags inside fenced code blocks are ignored; tags inside the
    frontmatter block are read from the YAML instead.
    """
    frontmatter, fm_lines = _parse_frontmatter(text)
    tags: list[str] = []
    links: dict[str, list[int]] = defaultdict(list)

    in_fence = False
    for number, line in enumerate(text.split("\n")):
        if number < fm_lines:
            continue
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        for match in _WIKILINK_RE.finditer(line):
            target = resolver.resolve(match.group(1))
            if target and number not in links[target]:
                links[target].append(number)

        for match in _TAG_RE.finditer(line):
            tag = match.group(1)
            if not tag.isdigit() and "#" + tag not in tags:
                tags.append("#" + tag)

    return VaultNote(
        path=path,
        frontmatter=frontmatter,
        tags=tags,
        links=dict(links),
    )
