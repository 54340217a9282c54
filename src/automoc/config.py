"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError
from .models import HeadingMode, ListStyle
from .utils import parse_ignored_folders

ORDERED_LIST_SEPARATORS = (".", ")")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass
class Config:
    """Application configuration."""

    vault_path: Path = field(default_factory=Path.cwd)
    link_to_heading: bool = False
    link_to_heading_before: bool = False
    link_with_alias: bool = True
    import_as_list: str = ListStyle.DISABLED.value
    ordered_list_separator: str = "."
    ignored_folders: str = ""

    # notifications
    linking_mentions_notice: bool = True
    no_new_links_notice: bool = True
    new_links_added_notice: bool = False

    verbose: bool = False

    @property
    def heading_mode(self) -> HeadingMode:
        if self.link_to_heading_before:
            return HeadingMode.NEAREST_PRECEDING
        return HeadingMode.NEAREST

    @property
    def list_style(self) -> ListStyle:
        return ListStyle(self.import_as_list)

    @property
    def ignored_folder_list(self) -> list[str]:
        return parse_ignored_folders(self.ignored_folders)

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.vault_path.is_dir():
            raise ConfigError(f"Vault path is not a directory: {self.vault_path}")
        valid_styles = [style.value for style in ListStyle]
        if self.import_as_list not in valid_styles:
            raise ConfigError(
                f"Unknown list style: {self.import_as_list}. "
                f"Use one of: {', '.join(valid_styles)}."
            )
        if self.ordered_list_separator not in ORDERED_LIST_SEPARATORS:
            raise ConfigError(
                f"Unknown ordered list separator: {self.ordered_list_separator!r}. "
                "Use '.' or ')'."
            )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}.")


def _pick(override, env_value):
    return override if override is not None else env_value


def load_config(
    vault_path: Optional[str] = None,
    link_to_heading: Optional[bool] = None,
    link_to_heading_before: Optional[bool] = None,
    link_with_alias: Optional[bool] = None,
    import_as_list: Optional[str] = None,
    ordered_list_separator: Optional[str] = None,
    ignored_folders: Optional[str] = None,
    quiet: bool = False,
    verbose: bool = False,
) -> Config:
    """Load config from .env and the environment, then apply CLI overrides."""
    load_dotenv()

    config = Config(
        vault_path=Path(vault_path) if vault_path else Path(
            os.getenv("OBSIDIAN_VAULT_PATH", str(Path.cwd()))
        ),
        link_to_heading=_pick(
            link_to_heading, _env_bool("AUTOMOC_LINK_TO_HEADING", False)
        ),
        link_to_heading_before=_pick(
            link_to_heading_before, _env_bool("AUTOMOC_LINK_TO_HEADING_BEFORE", False)
        ),
        link_with_alias=_pick(
            link_with_alias, _env_bool("AUTOMOC_LINK_WITH_ALIAS", True)
        ),
        import_as_list=_pick(
            import_as_list, os.getenv("AUTOMOC_IMPORT_AS_LIST", ListStyle.DISABLED.value)
        ),
        ordered_list_separator=_pick(
            ordered_list_separator, os.getenv("AUTOMOC_ORDERED_LIST_SEPARATOR", ".")
        ),
        ignored_folders=_pick(
            ignored_folders, os.getenv("AUTOMOC_IGNORED_FOLDERS", "")
        ),
        linking_mentions_notice=not quiet and _env_bool("AUTOMOC_LINKING_MENTIONS_NOTICE", True),
        no_new_links_notice=not quiet and _env_bool("AUTOMOC_NO_NEW_LINKS_NOTICE", True),
        new_links_added_notice=not quiet and _env_bool("AUTOMOC_NEW_LINKS_ADDED_NOTICE", False),
        verbose=verbose,
    )

    config.validate()
    return config
