"""
Icon and output helpers: pix URLs, icon images, spacers, access-hidden text.
"""
from __future__ import annotations

from typing import Optional

from ..config import FormatSettings
from .base import Component


def pix_url(name: str, settings: Optional[FormatSettings] = None) -> str:
    """Return the image URL for an icon name such as ``i/marked``."""
    base = (settings or FormatSettings()).pix_base
    return f"{base}/{name.strip('/')}.svg"


class PixIcon(Component):
    """Icon image with alt text (and title unless suppressed)."""

    def __init__(
        self,
        name: str,
        alt: str,
        *,
        css_class: str = "icon",
        settings: Optional[FormatSettings] = None,
        with_title: bool = True,
    ) -> None:
        self.name = name
        self.alt = alt
        self.css_class = css_class
        self.settings = settings
        self.with_title = with_title

    def render(self) -> str:
        return self.empty_tag(
            "img",
            src=pix_url(self.name, self.settings),
            alt=self.alt,
            title=self.alt if self.with_title else None,
            class_=self.css_class,
        )


def spacer(settings: Optional[FormatSettings] = None) -> str:
    """Empty placeholder used where a column has no content."""
    return Component.empty_tag("img", src=pix_url("spacer", settings), alt="", class_="spacer", width="1", height="1")


def accesshide(text: str) -> str:
    """Text only screen readers announce."""
    return Component.tag("span", Component.escape(text), class_="accesshide")


__all__ = ["pix_url", "PixIcon", "spacer", "accesshide"]
