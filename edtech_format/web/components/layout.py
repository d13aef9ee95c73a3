"""
Layout component for the course page.

Wraps pre-rendered page content in a complete HTML document, or returns just
the main fragment for HTMX swaps.
"""

from typing import Optional
from .base import Component


class Layout(Component):
    """Main layout component that assembles the complete page"""

    def __init__(
        self,
        title: str,
        content: str,
        *,
        heading: Optional[str] = None,
        header_actions: str = "",
    ):
        """
        Args:
            title: Page title (will be escaped)
            content: Main content HTML (pre-rendered components)
            heading: Visible page heading; defaults to the title (escaped)
            header_actions: Pre-rendered controls shown next to the heading
        """
        self.title = title
        self.content = content
        self.heading_text = heading if heading is not None else title
        self.header_actions = header_actions

    def render(self) -> str:
        """Render the complete HTML document."""
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{self.escape(self.title)}</title>
</head>
<body>
    <a href="#main-content" class="skip-link">Skip to main content</a>
    <main id="main-content" class="main-content" role="main">
        {self.render_fragment()}
    </main>
</body>
</html>"""

    def render_fragment(self) -> str:
        """Return only the children of <main> so HTMX swaps do not nest <main>."""
        actions_html = (
            f'<div class="page-header-actions">{self.header_actions}</div>'
            if self.header_actions
            else ""
        )
        return (
            '<header class="page-header">'
            f'<h1 class="coursetitle">{self.escape(self.heading_text)}</h1>'
            f"{actions_html}"
            "</header>"
            f'<div class="course-content">{self.content}</div>'
        )
