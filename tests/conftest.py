"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from automoc.config import Config
from automoc.vault_index import VaultIndex

VAULT_FILES = {
    "Garden.md": "# Garden\n\nLinks here\n",
    "Plants/Tomato.md": (
        "---\n"
        "aliases:\n"
        "  - Solanum\n"
        "tags:\n"
        "  - veg\n"
        "---\n"
        "# Tomato\n"
        "\n"
        "## Growing\n"
        "Plant near [[Garden]].\n"
        "\n"
        "## Harvest\n"
        "Pick in August.\n"
    ),
    "Plants/Basil.md": "Basil goes in the [[Garden|yard]].\n#herb\n",
    "Archive/Old.md": "# Old\nSee [[Garden]]\n",
    "Projects/Plan.md": (
        "---\n"
        "tags: veg, herb\n"
        "aliases: Greens\n"
        "---\n"
        "# Plan\n"
        "## Beds\n"
        "Build beds for the #herb garden\n"
    ),
}


def write_vault(root: Path, files: dict) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def vault(tmp_path):
    return write_vault(tmp_path / "vault", VAULT_FILES)


@pytest.fixture
def index(vault):
    return VaultIndex.scan(vault)


@pytest.fixture
def config(vault):
    return Config(
        vault_path=vault,
        linking_mentions_notice=False,
        no_new_links_notice=False,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep AUTOMOC_* and vault settings from the environment out of tests."""
    for name in (
        "OBSIDIAN_VAULT_PATH",
        "AUTOMOC_LINK_TO_HEADING",
        "AUTOMOC_LINK_TO_HEADING_BEFORE",
        "AUTOMOC_LINK_WITH_ALIAS",
        "AUTOMOC_IMPORT_AS_LIST",
        "AUTOMOC_ORDERED_LIST_SEPARATOR",
        "AUTOMOC_IGNORED_FOLDERS",
        "AUTOMOC_LINKING_MENTIONS_NOTICE",
        "AUTOMOC_NO_NEW_LINKS_NOTICE",
        "AUTOMOC_NEW_LINKS_ADDED_NOTICE",
    ):
        monkeypatch.delenv(name, raising=False)
