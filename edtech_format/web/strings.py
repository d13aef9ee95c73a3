"""
Language strings for the course format.

Why: Keep user-facing labels in one table so components stay free of literal
text and tests can assert against the same source.
"""
from __future__ import annotations

STRINGS = {
    "topicoutline": "Topic outline",
    "section0name": "General",
    "sectionname": "Topic",
    "currentsection": "This topic",
    "markthistopic": "Highlight this topic as the current topic",
    "markedthistopic": "This topic is highlighted as the current topic",
    "edit": "Edit",
    "editsummary": "Edit summary",
    "hidefromothers": "Hide topic",
    "showfromothers": "Show topic",
    "moveup": "Move up",
    "movedown": "Move down",
    "increasesections": "Increase the number of sections",
    "reducesections": "Reduce the number of sections",
    "notavailable": "Not available",
    "restricted": "Restricted",
    "orphanedactivitiesinsectionno": "Orphaned activities ({name})",
    "addresourceoractivity": "Add an activity or resource",
    "completionhelp": "Your progress",
    "turneditingon": "Turn editing on",
    "turneditingoff": "Turn editing off",
}


def get_string(key: str, **params: object) -> str:
    """Return the label for `key`, formatted with `params`.

    Unknown keys render as `[[key]]` so missing strings stay visible in the UI.
    """
    template = STRINGS.get(key)
    if template is None:
        return f"[[{key}]]"
    if not params:
        return template
    return template.format(**params)


__all__ = ["STRINGS", "get_string"]
