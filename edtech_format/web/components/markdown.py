"""
Section summary formatting.

Summaries are written by course editors in markdown and shown to everyone who
can open the section. Headings h1-h3 are reserved for the page and section
titles, so summaries may only use h4 and below.
"""
from __future__ import annotations

from markdown_it import MarkdownIt
import bleach


SUMMARY_TAGS = [
    "p", "br", "strong", "em", "code", "pre", "blockquote",
    "h4", "h5", "h6",
    "ul", "ol", "li",
    "table", "thead", "tbody", "tr", "th", "td",
    "a",
]
SUMMARY_ATTRIBUTES = {"a": ["href", "title"]}
SUMMARY_PROTOCOLS = ["http", "https", "mailto"]

# Raw HTML is rendered as text; single newlines become <br>.
_parser = MarkdownIt(
    "commonmark",
    {"html": False, "linkify": False, "typographer": False, "breaks": True},
).enable("table")


def render_markdown_safe(src: str) -> str:
    """Return sanitised HTML for a section summary ("" for an empty one)."""
    if not src:
        return ""
    return bleach.clean(
        _parser.render(str(src)),
        tags=SUMMARY_TAGS,
        attributes=SUMMARY_ATTRIBUTES,
        protocols=SUMMARY_PROTOCOLS,
        strip=False,
    ).strip()


__all__ = ["render_markdown_safe"]
