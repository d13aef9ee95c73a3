"""
Course domain types and constants.

Why:
- Keep the read-only snapshots the renderer consumes in one place.
- Centralize capability names so routes, renderer and tests never drift.

Terms:
- Section 0 is the general section and is not counted in `numsections`.
- A section whose index is greater than `numsections` is a stealth section.
- `marker` stores the current section index (0 means none).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

COURSE_DISPLAY_SINGLEPAGE = 0
COURSE_DISPLAY_MULTIPAGE = 1

CAP_UPDATE = "course:update"
CAP_SET_CURRENT_SECTION = "course:setcurrentsection"
CAP_VIEW_HIDDEN_SECTIONS = "course:viewhiddensections"
CAP_SECTION_VISIBILITY = "course:sectionvisibility"
CAP_MOVE_SECTIONS = "course:movesections"
CAP_MANAGE_ACTIVITIES = "course:manageactivities"

# Upper bound for numbered sections when none is configured.
DEFAULT_MAX_SECTIONS = 52

# Any of these lets a user switch the course page into editing mode.
EDITING_CAPABILITIES = frozenset({CAP_UPDATE, CAP_MANAGE_ACTIVITIES, CAP_SET_CURRENT_SECTION})


@dataclass(frozen=True)
class Course:
    id: int
    fullname: str
    numsections: int
    shortname: str = ""
    marker: int = 0
    coursedisplay: int = COURSE_DISPLAY_SINGLEPAGE
    # False: hidden sections are shown in collapsed form. True: completely invisible.
    hiddensections: bool = False
    enablecompletion: bool = False
    format: str = "edtech"


@dataclass(frozen=True)
class SectionInfo:
    """Per-viewer snapshot of a course section."""

    id: int
    section: int
    name: Optional[str] = None
    summary: str = ""
    visible: bool = True
    available: bool = True
    availableinfo: str = ""
    fullinfo: str = ""
    uservisible: bool = True

    @property
    def is_general(self) -> bool:
        return self.section == 0


@dataclass(frozen=True)
class CourseModule:
    """Activity or resource placed in a section."""

    id: int
    section: int
    name: str
    modname: str
    url: Optional[str] = None
    visible: bool = True
    uservisible: bool = True
    availableinfo: str = ""


__all__ = [
    "COURSE_DISPLAY_SINGLEPAGE",
    "COURSE_DISPLAY_MULTIPAGE",
    "CAP_UPDATE",
    "CAP_SET_CURRENT_SECTION",
    "CAP_VIEW_HIDDEN_SECTIONS",
    "CAP_SECTION_VISIBILITY",
    "CAP_MOVE_SECTIONS",
    "CAP_MANAGE_ACTIVITIES",
    "EDITING_CAPABILITIES",
    "DEFAULT_MAX_SECTIONS",
    "Course",
    "SectionInfo",
    "CourseModule",
]
