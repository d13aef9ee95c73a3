"""
Section tab strip.

Renders the tab list that switches between section panes on the course page.
Each tab targets the pane with id ``section-N``.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .base import Component


@dataclass
class SectionTab:
    """Single tab in the strip."""

    section: int
    label: str
    active: bool = False


class SectionTabs(Component):
    """Renders tabs in the given order; at most one should be active."""

    def __init__(self, tabs: Iterable[SectionTab]) -> None:
        self.tabs = list(tabs)

    def render(self) -> str:
        items: List[str] = []
        for tab in self.tabs:
            anchor = f"section-{tab.section}"
            link_attrs = self.attributes(
                href=f"#{anchor}",
                aria_controls=anchor,
                role="tab",
                data_toggle="tab",
            )
            li_attrs = self.attributes(
                role="presentation",
                class_="active" if tab.active else None,
            )
            items.append(f"<li {li_attrs}><a {link_attrs}>{self.escape(tab.label)}</a></li>")

        return f'<ul class="nav nav-tabs" role="tablist">{"".join(items)}</ul>'
