"""
Form components for the course format.

Used by the section summary editor reachable from the "edit summary" link.
"""

from .fields import FormField, TextAreaField, TextInputField, SubmitButton
from .section_edit_form import SectionEditForm

__all__ = [
    "FormField",
    "TextAreaField",
    "TextInputField",
    "SubmitButton",
    "SectionEditForm",
]
