"""
Base component class and markup helpers for the course format.

Components build HTML in plain Python. The helpers below cover the small set
of tag operations the renderer needs (open/close containers, links, empty
tags, headings) and escape attribute values consistently.
"""

from typing import Any, Optional
import html


class Component:
    """Base class for all course page components."""

    def render(self) -> str:
        """Render the component as an HTML string."""
        raise NotImplementedError("Subclasses must implement render()")

    @staticmethod
    def escape(text: Optional[str]) -> str:
        """Escape HTML entities; None renders as an empty string."""
        return html.escape(str(text)) if text is not None else ""

    @staticmethod
    def classes(*args: str, **conditionals: bool) -> str:
        """Build a CSS class string with conditional classes.

        Example:
            >>> Component.classes("tab-pane", "fade", hidden=True, active=False)
            'tab-pane fade hidden'
        """
        classes = [arg for arg in args if arg]
        classes.extend(key for key, value in conditionals.items() if value)
        return " ".join(classes)

    @staticmethod
    def attributes(**attrs: Any) -> str:
        """Build HTML attributes from keyword arguments.

        Example:
            >>> Component.attributes(id="section-1", class_="section", aria_label="Topic 1")
            'id="section-1" class="section" aria-label="Topic 1"'
        """
        result = []
        for key, value in attrs.items():
            # class_ -> class, for_ -> for
            if key.endswith("_"):
                key = key[:-1]
            else:
                # data_toggle -> data-toggle
                key = key.replace("_", "-")

            if value is True:
                result.append(key)
            elif value is not False and value is not None:
                result.append(f'{key}="{html.escape(str(value))}"')

        return " ".join(result)

    # ------------------------------------------------------------------ #
    # Tag helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def start_tag(cls, name: str, **attrs: Any) -> str:
        attr_html = cls.attributes(**attrs)
        return f"<{name} {attr_html}>" if attr_html else f"<{name}>"

    @staticmethod
    def end_tag(name: str) -> str:
        return f"</{name}>"

    @classmethod
    def tag(cls, name: str, content: str, **attrs: Any) -> str:
        """Wrap pre-rendered `content` (not escaped) in a tag."""
        return f"{cls.start_tag(name, **attrs)}{content}{cls.end_tag(name)}"

    @classmethod
    def empty_tag(cls, name: str, **attrs: Any) -> str:
        attr_html = cls.attributes(**attrs)
        return f"<{name} {attr_html} />" if attr_html else f"<{name} />"

    @classmethod
    def link(cls, url: Any, content: str, **attrs: Any) -> str:
        """Anchor around pre-rendered `content`; `url` may be a PageUrl or str."""
        return cls.tag("a", content, href=str(url), **attrs)

    @classmethod
    def heading(cls, content: str, level: int = 2, classes: str = "") -> str:
        return cls.tag(f"h{level}", content, class_=classes.strip() or None)
