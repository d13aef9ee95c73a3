"""
Format rules for tabbed "edtech" courses.

Intent:
    Answer the questions the renderer asks about a course: which section is
    current, what a section is called and where a section link points.
"""
from __future__ import annotations

from typing import Optional, Union

from edtech_format.course.domain import COURSE_DISPLAY_MULTIPAGE, Course, SectionInfo

from .config import FormatSettings
from .strings import get_string
from .urls import PageUrl


class EdtechCourseFormat:
    """Implements CourseFormatProtocol for one course snapshot."""

    def __init__(
        self,
        course: Course,
        *,
        settings: Optional[FormatSettings] = None,
        sections: Optional[dict[int, SectionInfo]] = None,
    ) -> None:
        self._course = course
        self._settings = settings or FormatSettings()
        self._sections = dict(sections or {})

    def get_course(self) -> Course:
        return self._course

    @staticmethod
    def _section_number(section: Union[int, SectionInfo]) -> int:
        return section.section if isinstance(section, SectionInfo) else int(section)

    def is_section_current(self, section: Union[int, SectionInfo]) -> bool:
        """True when `section` is highlighted by the course marker (never section 0)."""
        number = self._section_number(section)
        return bool(number) and number == self._course.marker

    def get_section_name(self, section: Union[int, SectionInfo]) -> str:
        """Custom section name, otherwise "General" for 0 and "Topic N" for others."""
        number = self._section_number(section)
        info = section if isinstance(section, SectionInfo) else self._sections.get(number)
        if info is not None and info.name:
            return info.name
        if number == 0:
            return get_string("section0name")
        return f"{get_string('sectionname')} {number}"

    def course_url(self, section: Optional[int] = None, *, navigation: bool = False) -> Optional[PageUrl]:
        """Return the course view URL, optionally pointing at `section`.

        Behavior:
            - Multi-page courses address a section with `?section=N`.
            - Single-page courses use the `#section-N` anchor; navigation links
              return None when section links are disabled.
        """
        url = PageUrl(f"/course/view/{self._course.id}", base=self._settings.wwwroot)
        if section is None:
            return url
        if self._course.coursedisplay == COURSE_DISPLAY_MULTIPAGE:
            url.param("section", section)
            return url
        if navigation and not self._settings.link_course_sections:
            return None
        return url.set_anchor(f"section-{section}")


__all__ = ["EdtechCourseFormat"]
