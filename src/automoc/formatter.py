"""Markdown link and list formatting."""

from typing import Optional

from .models import ListStyle


def format_markdown_link(
    link_text: str,
    heading: Optional[str] = None,
    alias: str = "",
) -> str:
    """Format a wikilink, optionally to a heading and with a display alias."""
    target = link_text
    if heading:
        target += "#" + heading
    if alias:
        target += "|" + alias
    return f"[[{target}]]"


def list_prefix(style: ListStyle, separator: str = ".", number: int = 1) -> str:
    """Prefix for a link line in the chosen list style."""
    if style == ListStyle.UNORDERED:
        return "* "
    if style == ListStyle.CHECKBOX:
        return "- [ ] "
    if style == ListStyle.ORDERED:
        return f"{number}{separator} "
    return ""


def format_link_lines(
    link_text: str,
    headings: list[str],
    prefix: str = "",
    alias: str = "",
) -> list[str]:
    """One link line per heading, or a single plain link when there are none."""
    if not headings:
        return [prefix + format_markdown_link(link_text, alias=alias)]
    return [
        prefix + format_markdown_link(link_text, heading, alias)
        for heading in headings
    ]
