"""
Collaborator ports consumed by the course page renderer.

Intent:
    The renderer only emits markup. Everything it needs from the host
    (course format rules, module info, capability checks, activity lists,
    persistence for section actions) is reached through these small
    protocols so tests can supply simple fakes.

Design:
    - Read ports: CourseFormatProtocol, ModInfoProtocol,
      CapabilityCheckerProtocol, ActivityRendererProtocol
    - Write port: CourseRepoProtocol (used by the section service only)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Mapping, Optional, Protocol, Union

from .domain import Course, CourseModule, SectionInfo

if TYPE_CHECKING:  # pragma: no cover
    from edtech_format.web.urls import PageUrl


# ----------------------------- Read ports -----------------------------------


class CourseFormatProtocol(Protocol):
    """Format rules for one course (naming, current section, view URLs)."""

    def get_course(self) -> Course:
        ...

    def is_section_current(self, section: Union[int, SectionInfo]) -> bool:
        ...

    def get_section_name(self, section: Union[int, SectionInfo]) -> str:
        ...

    def course_url(
        self, section: Optional[int] = None, *, navigation: bool = False
    ) -> Optional["PageUrl"]:
        ...


class ModInfoProtocol(Protocol):
    """Per-viewer snapshot of sections and their modules."""

    sections: Mapping[int, List[int]]
    cms: Mapping[int, CourseModule]

    def get_section_info_all(self) -> Mapping[int, SectionInfo]:
        ...


class CapabilityCheckerProtocol(Protocol):
    """Answers permission questions for the current viewer in the course."""

    def has_capability(self, capability: str) -> bool:
        ...

    def user_is_editing(self) -> bool:
        ...

    def sesskey(self) -> str:
        ...


class ActivityRendererProtocol(Protocol):
    """Renders the module list of a section and the add-activity control."""

    def course_section_cm_list(self, course: Course, section: SectionInfo, section_return: int = 0) -> str:
        ...

    def course_section_add_cm_control(self, course: Course, section: int, section_return: int = 0) -> str:
        ...


# ----------------------------- Write port -----------------------------------


class CourseRepoProtocol(Protocol):
    """Repository contract expected by the course section service."""

    def get_course(self, course_id: int) -> Optional[Course]:
        ...

    def update_course(self, course_id: int, **fields: object) -> Optional[Course]:
        ...

    def list_sections(self, course_id: int) -> List[SectionInfo]:
        ...

    def add_section(self, course_id: int, *, section: Optional[int] = None, **fields: object) -> SectionInfo:
        ...

    def update_section(self, course_id: int, section: int, **fields: object) -> Optional[SectionInfo]:
        ...

    def find_section(self, section_id: int) -> Optional[tuple[int, SectionInfo]]:
        ...

    def swap_sections(self, course_id: int, first: int, second: int) -> None:
        ...


__all__ = [
    "CourseFormatProtocol",
    "ModInfoProtocol",
    "CapabilityCheckerProtocol",
    "ActivityRendererProtocol",
    "CourseRepoProtocol",
]
