"""Course section service layer (framework-independent)."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .domain import DEFAULT_MAX_SECTIONS, Course, SectionInfo
from .ports import CourseRepoProtocol

logger = logging.getLogger("edtech_format.course.services")

MAX_SECTION_NAME_LENGTH = 255


@dataclass
class CourseSectionsService:
    """Use cases behind the section edit controls.

    Errors:
        - LookupError("course_not_found") when the course does not exist.
        - ValueError("invalid_section") when the section index is out of range
          for the requested action.
        - ValueError("invalid_direction") when a move is not -1 or +1.
        - LookupError("section_not_found") / ValueError("invalid_name") when
          editing a section.

    Permissions:
        Callers must check capabilities and the session key first; this layer
        only enforces structural rules.
    """

    repo: CourseRepoProtocol
    max_sections: int = DEFAULT_MAX_SECTIONS

    def _require_course(self, course_id: int) -> Course:
        course = self.repo.get_course(course_id)
        if course is None:
            raise LookupError("course_not_found")
        return course

    def set_marker(self, course_id: int, marker: int) -> Course:
        """Highlight `marker` as the current section (0 clears the highlight)."""
        course = self._require_course(course_id)
        if marker < 0 or marker > course.numsections:
            raise ValueError("invalid_section")
        updated = self.repo.update_course(course_id, marker=marker)
        logger.info("Course %s marker set to %s", course_id, marker)
        return updated or course

    def find_section(self, section_id: int) -> tuple[Course, SectionInfo]:
        """Return the course and section for a section record id."""
        found = self.repo.find_section(section_id)
        if found is None:
            raise LookupError("section_not_found")
        course_id, section = found
        return self._require_course(course_id), section

    def edit_section(self, section_id: int, *, name: object, summary: object) -> SectionInfo:
        """Update a section's custom name and summary.

        An empty name clears the custom name so the default applies.
        """
        course, section = self.find_section(section_id)
        clean_name = str(name or "").strip()
        if len(clean_name) > MAX_SECTION_NAME_LENGTH:
            raise ValueError("invalid_name")
        clean_summary = str(summary or "").strip()
        updated = self.repo.update_section(
            course.id,
            section.section,
            name=clean_name or None,
            summary=clean_summary,
        )
        if updated is None:
            raise LookupError("section_not_found")
        logger.info("Course %s section %s summary updated", course.id, section.section)
        return updated

    def set_section_visibility(self, course_id: int, section: int, visible: bool) -> None:
        course = self._require_course(course_id)
        if section < 1 or section > course.numsections:
            raise ValueError("invalid_section")
        if self.repo.update_section(course_id, section, visible=visible) is None:
            raise ValueError("invalid_section")
        logger.info("Course %s section %s visible=%s", course_id, section, visible)

    def move_section(self, course_id: int, section: int, direction: int) -> Course:
        """Swap `section` with its neighbour; the marker follows the moved section."""
        if direction not in (-1, 1):
            raise ValueError("invalid_direction")
        course = self._require_course(course_id)
        destination = section + direction
        if section < 1 or destination < 1 or max(section, destination) > course.numsections:
            raise ValueError("invalid_section")
        self.repo.swap_sections(course_id, section, destination)
        if course.marker == section:
            course = self.repo.update_course(course_id, marker=destination) or course
        elif course.marker == destination:
            course = self.repo.update_course(course_id, marker=section) or course
        logger.info("Course %s section %s moved to %s", course_id, section, destination)
        return course

    def change_numsections(self, course_id: int, increase: bool) -> Course:
        """Add or remove one numbered section.

        Behavior:
            - Increasing stops at `max_sections`; missing section records are
              created on the way.
            - Reducing stops at 0. Sections beyond the new count become stealth
              sections; a marker pointing past the count is cleared.
        """
        course = self._require_course(course_id)
        if increase:
            if course.numsections >= self.max_sections:
                return course
            numsections = course.numsections + 1
            existing = {info.section for info in self.repo.list_sections(course_id)}
            if numsections not in existing:
                self.repo.add_section(course_id, section=numsections)
        else:
            if course.numsections <= 0:
                return course
            numsections = course.numsections - 1
        fields: dict[str, object] = {"numsections": numsections}
        if course.marker > numsections:
            fields["marker"] = 0
        updated = self.repo.update_course(course_id, **fields)
        logger.info("Course %s numsections %s -> %s", course_id, course.numsections, numsections)
        return updated or course


__all__ = ["CourseSectionsService"]
