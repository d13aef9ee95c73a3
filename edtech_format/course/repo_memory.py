"""
In-memory course store for tests and local offline work.

Why:
    The renderer and the section service talk to the host through ports. This
    store implements `CourseRepoProtocol` and builds per-viewer `ModInfo`
    snapshots so the web adapter runs without a database.

Notes:
    Not a persistence layer. State lives for the process lifetime only.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from typing import Dict, List, Optional

from .domain import Course, CourseModule, SectionInfo
from .modinfo import ModInfo

logger = logging.getLogger("edtech_format.course.repo")


class InMemoryCourseRepo:
    def __init__(self) -> None:
        self.courses: Dict[int, Course] = {}
        # sections[course_id][section_index] = SectionInfo (stored flags, uservisible ignored)
        self.sections: Dict[int, Dict[int, SectionInfo]] = {}
        self.modules: Dict[int, CourseModule] = {}
        # module ids per (course_id, section_index), in display order
        self.module_ids_by_section: Dict[tuple[int, int], List[int]] = {}
        self._course_ids = itertools.count(1)
        self._section_ids = itertools.count(1)
        self._module_ids = itertools.count(1)

    # --- Courses ---------------------------------------------------------------

    def create_course(self, *, fullname: str, numsections: int = 4, **options: object) -> Course:
        normalized = (fullname or "").strip()
        if not normalized:
            raise ValueError("invalid_fullname")
        if numsections < 0:
            raise ValueError("invalid_numsections")
        course = Course(id=next(self._course_ids), fullname=normalized, numsections=numsections, **options)  # type: ignore[arg-type]
        self.courses[course.id] = course
        self.sections[course.id] = {}
        for index in range(numsections + 1):
            self.add_section(course.id, section=index)
        return course

    def get_course(self, course_id: int) -> Optional[Course]:
        return self.courses.get(course_id)

    def update_course(self, course_id: int, **fields: object) -> Optional[Course]:
        course = self.courses.get(course_id)
        if course is None:
            return None
        updated = replace(course, **fields)  # type: ignore[arg-type]
        self.courses[course_id] = updated
        return updated

    # --- Sections --------------------------------------------------------------

    def add_section(self, course_id: int, *, section: Optional[int] = None, **fields: object) -> SectionInfo:
        """Create a section record. Without `section` the next free index is used."""
        bucket = self.sections.setdefault(course_id, {})
        index = section if section is not None else (max(bucket) + 1 if bucket else 0)
        if index in bucket:
            raise ValueError("section_exists")
        info = SectionInfo(id=next(self._section_ids), section=index, **fields)  # type: ignore[arg-type]
        bucket[index] = info
        return info

    def list_sections(self, course_id: int) -> List[SectionInfo]:
        bucket = self.sections.get(course_id) or {}
        return [bucket[index] for index in sorted(bucket)]

    def update_section(self, course_id: int, section: int, **fields: object) -> Optional[SectionInfo]:
        bucket = self.sections.get(course_id) or {}
        info = bucket.get(section)
        if info is None:
            return None
        updated = replace(info, **fields)  # type: ignore[arg-type]
        bucket[section] = updated
        return updated

    def find_section(self, section_id: int) -> Optional[tuple[int, SectionInfo]]:
        """Return (course_id, section) for a section record id."""
        for course_id, bucket in self.sections.items():
            for info in bucket.values():
                if info.id == section_id:
                    return course_id, info
        return None

    def swap_sections(self, course_id: int, first: int, second: int) -> None:
        bucket = self.sections[course_id]
        a, b = bucket[first], bucket[second]
        bucket[first] = replace(b, section=first)
        bucket[second] = replace(a, section=second)
        ids_a = self.module_ids_by_section.pop((course_id, first), [])
        ids_b = self.module_ids_by_section.pop((course_id, second), [])
        if ids_b:
            self.module_ids_by_section[(course_id, first)] = ids_b
        if ids_a:
            self.module_ids_by_section[(course_id, second)] = ids_a
        for cm_id in ids_b:
            self.modules[cm_id] = replace(self.modules[cm_id], section=first)
        for cm_id in ids_a:
            self.modules[cm_id] = replace(self.modules[cm_id], section=second)

    # --- Modules ---------------------------------------------------------------

    def add_module(
        self,
        course_id: int,
        section: int,
        *,
        name: str,
        modname: str,
        url: Optional[str] = None,
        visible: bool = True,
        availableinfo: str = "",
    ) -> CourseModule:
        if section not in (self.sections.get(course_id) or {}):
            self.add_section(course_id, section=section)
        cm = CourseModule(
            id=next(self._module_ids),
            section=section,
            name=name,
            modname=modname,
            url=url,
            visible=visible,
            availableinfo=availableinfo,
        )
        self.modules[cm.id] = cm
        self.module_ids_by_section.setdefault((course_id, section), []).append(cm.id)
        return cm

    # --- Snapshots -------------------------------------------------------------

    def get_modinfo(self, course_id: int, *, can_view_hidden: bool = False) -> ModInfo:
        """Build the viewer-specific snapshot consumed by the renderer.

        Behavior:
            - A section is user-visible when it is visible and available, or
              when the viewer may see hidden sections.
            - A module is user-visible when its section is, and the module is
              visible (or the viewer may see hidden content).
        """
        if course_id not in self.courses:
            raise LookupError("course_not_found")
        modinfo = ModInfo(course_id=course_id)
        for info in self.list_sections(course_id):
            uservisible = can_view_hidden or (info.visible and info.available)
            modinfo.section_infos[info.section] = replace(info, uservisible=uservisible)
            cm_ids = list(self.module_ids_by_section.get((course_id, info.section), []))
            if cm_ids:
                modinfo.sections[info.section] = cm_ids
            for cm_id in cm_ids:
                cm = self.modules[cm_id]
                cm_visible = uservisible and (cm.visible or can_view_hidden)
                modinfo.cms[cm_id] = replace(cm, uservisible=cm_visible)
        logger.debug("Built modinfo for course %s (%d sections)", course_id, len(modinfo.section_infos))
        return modinfo


__all__ = ["InMemoryCourseRepo"]
