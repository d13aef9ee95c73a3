"""Per-viewer snapshot of a course's sections and modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .domain import CourseModule, SectionInfo


@dataclass
class ModInfo:
    """Read-only section/module lookup handed to the renderer.

    Parameters:
        course_id: Course the snapshot belongs to.
        section_infos: Section snapshots keyed by section index.
        sections: Module ids per section index, in display order. Sections
            without modules may be missing.
        cms: Module snapshots keyed by module id.
    """

    course_id: int
    section_infos: Dict[int, SectionInfo] = field(default_factory=dict)
    sections: Dict[int, List[int]] = field(default_factory=dict)
    cms: Dict[int, CourseModule] = field(default_factory=dict)

    def get_section_info_all(self) -> Mapping[int, SectionInfo]:
        """Return all sections in ascending index order."""
        return {index: self.section_infos[index] for index in sorted(self.section_infos)}

    def section_modules(self, section: int) -> List[CourseModule]:
        return [self.cms[cm_id] for cm_id in self.sections.get(section, []) if cm_id in self.cms]


__all__ = ["ModInfo"]
