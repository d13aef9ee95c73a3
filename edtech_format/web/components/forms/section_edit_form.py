"""
Section edit form.

Purpose: SSR form to edit a section's custom name and markdown summary.
Submits to POST /course/editsection with the session key; the route enforces
`course:update`.
"""
from typing import Dict, Optional

from edtech_format.course.domain import SectionInfo

from ...urls import PageUrl
from ..base import Component
from .fields import SubmitButton, TextAreaField, TextInputField


class SectionEditForm(Component):
    """Render the edit form for one section."""

    def __init__(
        self,
        section: SectionInfo,
        *,
        sesskey: str,
        default_name: str,
        section_return: Optional[int] = None,
        values: Optional[Dict[str, str]] = None,
        error: Optional[str] = None,
        wwwroot: str = "",
    ) -> None:
        self.section = section
        self.sesskey = sesskey
        self.default_name = default_name
        self.section_return = section_return
        self.values = values if values is not None else {
            "name": section.name or "",
            "summary": section.summary,
        }
        self.error = error
        self.wwwroot = wwwroot

    def render(self) -> str:
        action = PageUrl("/course/editsection", {"id": self.section.id}, base=self.wwwroot)
        if self.section_return is not None:
            action.param("sr", self.section_return)
        name_field = TextInputField(
            "name",
            "Section name",
            help_text="Leave empty to use the default name.",
        )
        summary_field = TextAreaField("summary", "Summary", help_text="Markdown is supported.")
        error_html = f'<div class="form-error" role="alert">{self.escape(self.error)}</div>' if self.error else ""
        return (
            f'<form method="post" action="{action.out()}" class="section-edit-form">'
            f'<input type="hidden" name="sesskey" value="{self.escape(self.sesskey)}">'
            f"{name_field.render(self.values.get('name', ''), placeholder=self.default_name)}"
            f"{summary_field.render(self.values.get('summary', ''))}"
            f"{error_html}"
            f'<div class="form-actions">{SubmitButton("Save changes").render()}</div>'
            "</form>"
        )
