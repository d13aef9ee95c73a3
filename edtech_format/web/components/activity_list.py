"""
Activity list rendering for course sections.

Implements ActivityRendererProtocol: the module list inside a section and
the "add an activity or resource" control shown to editors.
"""
from __future__ import annotations

from typing import List, Optional

from edtech_format.course.domain import CAP_MANAGE_ACTIVITIES, Course, CourseModule, SectionInfo
from edtech_format.course.modinfo import ModInfo
from edtech_format.course.ports import CapabilityCheckerProtocol

from ..config import FormatSettings
from ..strings import get_string
from ..urls import PageUrl
from .base import Component
from .icons import PixIcon, accesshide


class ActivityListRenderer(Component):
    """Renders modules from a ModInfo snapshot for the current viewer.

    Module links and the add-activity target (`/course/modedit`) belong to the
    host site; this adapter serves neither.
    """

    def __init__(
        self,
        modinfo: ModInfo,
        context: CapabilityCheckerProtocol,
        *,
        settings: Optional[FormatSettings] = None,
    ) -> None:
        self.modinfo = modinfo
        self.context = context
        self.settings = settings or FormatSettings()

    def course_section_cm_list(self, course: Course, section: SectionInfo, section_return: int = 0) -> str:
        """Return the module list of `section`.

        Modules hidden from the viewer are skipped unless they carry an
        availability explanation, which is then shown instead of a link.
        """
        items: List[str] = []
        for cm in self.modinfo.section_modules(section.section):
            if not cm.uservisible and not cm.availableinfo:
                continue
            items.append(self._render_module(cm))
        return self.tag("ul", "".join(items), class_="section img-text")

    def _render_module(self, cm: CourseModule) -> str:
        name_html = self.tag("span", self.escape(cm.name), class_="instancename")
        if cm.uservisible and cm.url:
            body = self.link(cm.url, name_html, class_=self.classes("aalink", dimmed=not cm.visible))
        else:
            body = self.tag("div", name_html, class_="dimmed_text")
        if not cm.uservisible and cm.availableinfo:
            body += self.tag(
                "div",
                f"{self.escape(get_string('notavailable'))}: {self.escape(cm.availableinfo)}",
                class_="availabilityinfo",
            )
        return self.tag(
            "li",
            self.tag("div", body, class_="activityinstance"),
            id=f"module-{cm.id}",
            class_=f"activity {cm.modname} modtype_{cm.modname}",
        )

    def course_section_add_cm_control(self, course: Course, section: int, section_return: int = 0) -> str:
        """Return the add-activity control; empty unless editing with manage rights."""
        if not (self.context.user_is_editing() and self.context.has_capability(CAP_MANAGE_ACTIVITIES)):
            return ""
        label = get_string("addresourceoractivity")
        url = PageUrl(
            "/course/modedit",
            {"course": course.id, "section": section, "sr": section_return},
            base=self.settings.wwwroot,
        )
        icon = PixIcon("t/add", label, css_class="smallicon", settings=self.settings, with_title=False).render()
        link_html = self.link(url, icon + accesshide(label), class_="section-modchooser-link")
        return self.tag(
            "div",
            self.tag("div", link_html, class_="section-modchooser"),
            id=f"add_menus-section-{section}",
            class_="section_add_menus",
        )


__all__ = ["ActivityListRenderer"]
