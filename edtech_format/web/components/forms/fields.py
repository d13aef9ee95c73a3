"""
Form field components.

Small wrappers that keep label, input, help and error markup consistent.
"""

from typing import Optional

from ..base import Component


class FormField(Component):
    """Wrapper that renders label, input slot, help, and error text."""

    def __init__(
        self,
        field_id: str,
        label: str,
        *,
        required: bool = False,
        help_text: Optional[str] = None,
        error_text: Optional[str] = None,
    ) -> None:
        self.field_id = field_id
        self.label = label
        self.required = required
        self.help_text = help_text
        self.error_text = error_text

    def _described_by(self) -> Optional[str]:
        return f"{self.field_id}-help" if self.help_text else None

    def render(self, input_html: str) -> str:
        state_class = " form-field--error" if self.error_text else ""
        required_marker = (
            '<span class="form-required" aria-hidden="true">*</span>'
            if self.required
            else ""
        )
        help_html = (
            f'<p class="form-help" id="{self.field_id}-help">{self.escape(self.help_text)}</p>'
            if self.help_text
            else ""
        )
        error_html = (
            f'<p class="form-error" role="alert" id="{self.field_id}-error">{self.escape(self.error_text)}</p>'
            if self.error_text
            else ""
        )
        label_attrs = self.attributes(for_=self.field_id, class_="form-label")

        return (
            f'<div class="form-field{state_class}">'
            f"<label {label_attrs}>{self.escape(self.label)}{required_marker}</label>"
            f"{input_html}"
            f"{help_html}"
            f"{error_html}"
            "</div>"
        )


class TextAreaField(FormField):
    """Multi-line text (section summaries are markdown)."""

    def render(self, value: str = "", rows: int = 8, **attrs: str) -> str:
        textarea_attrs = self.attributes(
            id=self.field_id,
            name=self.field_id,
            rows=str(rows),
            aria_describedby=self._described_by(),
            aria_invalid="true" if self.error_text else "false",
            **attrs,
        )
        return super().render(f"<textarea {textarea_attrs}>{self.escape(value)}</textarea>")


class TextInputField(FormField):
    """Single-line text input."""

    def render(self, value: str = "", *, placeholder: Optional[str] = None, **attrs: str) -> str:
        input_attrs = self.attributes(
            id=self.field_id,
            name=self.field_id,
            type="text",
            value=value,
            placeholder=placeholder,
            required=self.required,
            aria_describedby=self._described_by(),
            aria_invalid="true" if self.error_text else "false",
            **attrs,
        )
        return super().render(f"<input {input_attrs}>")


class SubmitButton(Component):
    """Primary form action button."""

    def __init__(self, label: str, *, disabled: bool = False) -> None:
        self.label = label
        self.disabled = disabled

    def render(self) -> str:
        attrs = self.attributes(type="submit", class_="btn btn-primary", disabled=self.disabled)
        return f"<button {attrs}>{self.escape(self.label)}</button>"
