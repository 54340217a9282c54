"""Tests for configuration loading."""

import pytest

from automoc.config import Config, load_config
from automoc.exceptions import ConfigError
from automoc.models import HeadingMode, ListStyle


def test_defaults(vault):
    config = load_config(vault_path=str(vault))
    assert config.link_to_heading is False
    assert config.link_with_alias is True
    assert config.list_style == ListStyle.DISABLED
    assert config.heading_mode == HeadingMode.NEAREST
    assert config.linking_mentions_notice is True
    assert config.new_links_added_notice is False


def test_environment(vault, monkeypatch):
    monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(vault))
    monkeypatch.setenv("AUTOMOC_LINK_TO_HEADING", "yes")
    monkeypatch.setenv("AUTOMOC_LINK_TO_HEADING_BEFORE", "1")
    monkeypatch.setenv("AUTOMOC_IGNORED_FOLDERS", "Archive, Templates")
    config = load_config()
    assert config.vault_path == vault
    assert config.link_to_heading is True
    assert config.heading_mode == HeadingMode.NEAREST_PRECEDING
    assert config.ignored_folder_list == ["Archive", "Templates"]


def test_overrides_beat_environment(vault, monkeypatch):
    monkeypatch.setenv("AUTOMOC_LINK_WITH_ALIAS", "true")
    config = load_config(vault_path=str(vault), link_with_alias=False)
    assert config.link_with_alias is False


def test_quiet_disables_notices(vault):
    config = load_config(vault_path=str(vault), quiet=True)
    assert not config.linking_mentions_notice
    assert not config.no_new_links_notice


def test_bad_boolean(vault, monkeypatch):
    monkeypatch.setenv("AUTOMOC_LINK_TO_HEADING", "maybe")
    with pytest.raises(ConfigError):
        load_config(vault_path=str(vault))


def test_validation(vault, tmp_path):
    with pytest.raises(ConfigError):
        Config(vault_path=tmp_path / "missing").validate()
    with pytest.raises(ConfigError):
        Config(vault_path=vault, import_as_list="table").validate()
    with pytest.raises(ConfigError):
        Config(vault_path=vault, ordered_list_separator="-").validate()
