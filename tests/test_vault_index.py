"""Tests for the vault metadata index."""

import pytest

from automoc.exceptions import ReadError
from automoc.vault_index import VaultIndex

from .conftest import write_vault


def test_scan_finds_notes_sorted(index):
    assert list(index.notes) == [
        "Archive/Old.md",
        "Garden.md",
        "Plants/Basil.md",
        "Plants/Tomato.md",
        "Projects/Plan.md",
    ]
    assert len(index) == 5
    assert "Garden.md" in index


def test_scan_missing_vault_is_empty(tmp_path):
    assert len(VaultIndex.scan(tmp_path / "nope")) == 0


def test_hidden_folders_are_skipped(tmp_path):
    vault = write_vault(tmp_path, {".obsidian/x.md": "hidden", "A.md": "a"})
    assert list(VaultIndex.scan(vault).notes) == ["A.md"]


def test_frontmatter_parsed(index):
    assert index.frontmatter_of("Plants/Tomato.md") == {
        "aliases": ["Solanum"],
        "tags": ["veg"],
    }
    assert index.frontmatter_of("Projects/Plan.md")["tags"] == "veg, herb"
    assert index.frontmatter_of("Garden.md") == {}


def test_invalid_frontmatter_is_empty(tmp_path):
    vault = write_vault(tmp_path, {"A.md": "---\n: : [\n---\nbody\n"})
    assert VaultIndex.scan(vault).frontmatter_of("A.md") == {}


def test_body_tags(index):
    assert index.tags_of("Plants/Basil.md") == ["#herb"]
    assert index.tags_of("Projects/Plan.md") == ["#herb"]
    assert index.tags_of("Plants/Tomato.md") == []


def test_headings_and_numbers_are_not_tags(tmp_path):
    vault = write_vault(tmp_path, {"A.md": "# Title\nissue #42 and #real/nested\n"})
    assert VaultIndex.scan(vault).tags_of("A.md") == ["#real/nested"]


def test_links_in_code_fences_ignored(tmp_path):
    vault = write_vault(tmp_path, {
        "A.md": "```\n[[B]]\n```\n",
        "B.md": "b",
    })
    assert VaultIndex.scan(vault).resolved_links_of("A.md") == {}


def test_resolved_links(index):
    assert index.resolved_links_of("Plants/Basil.md") == {"Garden.md": 1}
    assert index.resolved_links["Garden.md"] == {}


def test_link_resolution_forms(tmp_path):
    vault = write_vault(tmp_path, {
        "A.md": "[[B#Heading]]\n![[Sub/C]]\n[[c.md|see c]]\n[[Missing]]\n[[#Local]]\n",
        "B.md": "b",
        "Sub/C.md": "c",
    })
    index = VaultIndex.scan(vault)
    assert index.resolved_links_of("A.md") == {"B.md": 1, "Sub/C.md": 2}


def test_basename_prefers_shortest_path(tmp_path):
    vault = write_vault(tmp_path, {
        "A.md": "[[Note]]",
        "deep/er/Note.md": "",
        "x/Note.md": "",
    })
    assert VaultIndex.scan(vault).resolved_links_of("A.md") == {"x/Note.md": 1}


def test_backlinks_carry_lines(index):
    assert index.backlinks_for("Garden.md") == {
        "Archive/Old.md": [1],
        "Plants/Basil.md": [0],
        "Plants/Tomato.md": [9],
    }


def test_read_and_read_error(index, vault):
    assert index.read("Garden.md").startswith("# Garden")
    (vault / "Garden.md").unlink()
    with pytest.raises(ReadError) as exc_info:
        index.read("Garden.md")
    assert exc_info.value.path == "Garden.md"


def test_unreadable_file_is_skipped(tmp_path):
    vault = write_vault(tmp_path, {"Good.md": "ok"})
    (vault / "Bad.md").write_bytes(b"\xff\xfe\xfa")
    index = VaultIndex.scan(vault)
    assert list(index.notes) == ["Good.md"]
    assert index.skipped == ["Bad.md"]


def test_link_text_uses_name_unless_ambiguous(tmp_path):
    vault = write_vault(tmp_path, {"a/Same.md": "", "b/Same.md": "", "Unique.md": ""})
    index = VaultIndex.scan(vault)
    assert index.link_text("Unique.md") == "Unique"
    assert index.link_text("a/Same.md") == "a/Same"


def test_all_tags_and_aliases(index):
    assert index.all_tags() == ["#herb", "#veg"]
    assert index.all_aliases() == ["Greens", "Solanum"]
