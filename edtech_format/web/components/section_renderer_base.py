"""
Shared section rendering for course formats.

Why:
    Course formats differ in page assembly and headers, but they share the
    generic pieces: section edit controls (hide/show, move), side columns,
    stealth and hidden section blocks, multi-page section summaries and
    availability messages. Format renderers subclass this and override what
    they change.

Markup contract:
    Every block that opens containers closes them itself, except
    header/footer pairs: `stealth_section_header` opens two containers that
    `stealth_section_footer` closes in reverse order.
"""
from __future__ import annotations

from collections import Counter
from typing import List, Optional

from edtech_format.course.domain import (
    CAP_MOVE_SECTIONS,
    CAP_SECTION_VISIBILITY,
    CAP_VIEW_HIDDEN_SECTIONS,
    Course,
    SectionInfo,
)
from edtech_format.course.ports import (
    ActivityRendererProtocol,
    CapabilityCheckerProtocol,
    CourseFormatProtocol,
    ModInfoProtocol,
)

from ..config import FormatSettings
from ..strings import get_string
from ..urls import PageUrl
from .base import Component
from .icons import PixIcon, accesshide, spacer
from .markdown import render_markdown_safe


class SectionRendererBase(Component):
    """Generic section rendering on top of the collaborator ports.

    Args:
        course_format: Format rules for the course being rendered.
        modinfo: Per-viewer section/module snapshot.
        context: Capability checks, editing mode and session key.
        activity_renderer: Renders module lists and add-activity controls.
        settings: Link/icon settings (defaults when omitted).
    """

    # Classes every section pane carries; formats may extend them.
    pane_classes = "section main clearfix"

    def __init__(
        self,
        course_format: CourseFormatProtocol,
        modinfo: ModInfoProtocol,
        context: CapabilityCheckerProtocol,
        activity_renderer: ActivityRendererProtocol,
        *,
        settings: Optional[FormatSettings] = None,
    ) -> None:
        self.course_format = course_format
        self.modinfo = modinfo
        self.context = context
        self.activity_renderer = activity_renderer
        self.settings = settings or FormatSettings()

    # --------------------------------------------------------------------- #
    # Format hooks
    # --------------------------------------------------------------------- #

    def start_section_list(self) -> str:
        raise NotImplementedError

    def end_section_list(self) -> str:
        raise NotImplementedError

    def page_title(self) -> str:
        raise NotImplementedError

    # --------------------------------------------------------------------- #
    # Edit controls and side columns
    # --------------------------------------------------------------------- #

    def _section_action_url(self, course: Course, section: SectionInfo, onsectionpage: bool) -> PageUrl:
        url = self.course_format.course_url(section.section if onsectionpage else None)
        if url is None:
            url = PageUrl(f"/course/view/{course.id}", base=self.settings.wwwroot)
        url.param("sesskey", self.context.sesskey())
        return url

    def _control_link(self, url: PageUrl, icon: str, label: str, css_class: str) -> str:
        icon_html = PixIcon(icon, label, settings=self.settings, with_title=False).render()
        return self.link(url, icon_html, title=label, class_=css_class)

    def section_edit_controls(self, course: Course, section: SectionInfo, onsectionpage: bool = False) -> List[str]:
        """Hide/show and move controls, in that order. Empty outside editing mode."""
        if not self.context.user_is_editing():
            return []

        base_url = self._section_action_url(course, section, onsectionpage)
        isstealth = section.section > course.numsections
        controls: List[str] = []

        if not isstealth and self.context.has_capability(CAP_SECTION_VISIBILITY):
            url = base_url.copy()
            if section.visible:
                url.param("hide", section.section)
                controls.append(self._control_link(url, "i/hide", get_string("hidefromothers"), "editing_showhide"))
            else:
                url.param("show", section.section)
                controls.append(self._control_link(url, "i/show", get_string("showfromothers"), "editing_showhide"))

        if not isstealth and not onsectionpage and self.context.has_capability(CAP_MOVE_SECTIONS):
            if section.section > 1:
                url = base_url.copy().param("section", section.section).param("move", -1)
                controls.append(self._control_link(url, "t/up", get_string("moveup"), "moveup"))
            if section.section < course.numsections:
                url = base_url.copy().param("section", section.section).param("move", 1)
                controls.append(self._control_link(url, "t/down", get_string("movedown"), "movedown"))

        return controls

    def section_right_content(self, section: SectionInfo, course: Course, onsectionpage: bool) -> str:
        """Edit controls joined by line breaks; section 0 never gets controls."""
        if not section.is_general:
            controls = self.section_edit_controls(course, section, onsectionpage)
            if controls:
                return "<br />".join(controls)
        return spacer(self.settings)

    def section_left_content(self, section: SectionInfo, course: Course, onsectionpage: bool) -> str:
        if section.section != 0 and self.course_format.is_section_current(section):
            return accesshide(get_string("currentsection"))
        return spacer(self.settings)

    # --------------------------------------------------------------------- #
    # Section body helpers
    # --------------------------------------------------------------------- #

    def format_summary_text(self, section: SectionInfo) -> str:
        return render_markdown_safe(section.summary)

    def section_availability_message(self, section: SectionInfo, canviewhidden: bool) -> str:
        """Explain why a section is unavailable, or show restrictions to staff."""
        if not section.uservisible:
            if section.availableinfo:
                text = f"{self.escape(get_string('notavailable'))}: {self.escape(section.availableinfo)}"
                return self.tag("div", text, class_="availabilityinfo")
            return ""
        if canviewhidden and section.visible and section.fullinfo:
            text = f"{self.escape(get_string('restricted'))}: {self.escape(section.fullinfo)}"
            return self.tag("div", text, class_="availabilityinfo")
        return ""

    def section_activity_summary(self, section: SectionInfo) -> str:
        """Module counts per type, for the multi-page summary view."""
        counts: Counter[str] = Counter()
        for cm_id in self.modinfo.sections.get(section.section, []):
            cm = self.modinfo.cms.get(cm_id)
            if cm is not None and cm.uservisible:
                counts[cm.modname] += 1
        if not counts:
            return ""
        spans = "".join(
            self.tag("span", f"{self.escape(modname)}: {count}", class_="activity-count")
            for modname, count in sorted(counts.items())
        )
        return self.tag("div", spans, class_="section-summary-activities mdl-right")

    # --------------------------------------------------------------------- #
    # Self-contained section blocks
    # --------------------------------------------------------------------- #

    def section_hidden(self, sectionno: int, course_id: int, *, active: bool = False) -> str:
        """Collapsed placeholder for a section the viewer may not open."""
        title = self.course_format.get_section_name(sectionno)
        classes = self.classes(self.pane_classes, "hidden", **{"current in active": active})
        o = self.start_tag(
            "div",
            id=f"section-{sectionno}",
            class_=classes,
            role="tabpanel",
            aria_label=title,
        )
        o += self.tag("div", spacer(self.settings), class_="left side")
        o += self.tag("div", spacer(self.settings), class_="right side")
        o += self.start_tag("div", class_="content")
        o += self.heading(self.escape(title), 3, "sectionname")
        o += self.tag("div", self.escape(get_string("notavailable")), class_="section_availability")
        o += self.end_tag("div")
        o += self.end_tag("div")
        return o

    def section_summary(self, section: SectionInfo, course: Course, *, active: bool = False) -> str:
        """Summary block linking to the section's own page (multi-page display)."""
        name = self.course_format.get_section_name(section)
        classes = self.classes(
            self.pane_classes,
            "section-summary",
            hidden=not section.visible,
            current=section.visible and self.course_format.is_section_current(section),
            **{"in active": active},
        )
        title = self.escape(name)
        if section.uservisible:
            url = self.course_format.course_url(section.section)
            if url is not None:
                title = self.link(url, title, class_="dimmed_text" if not section.visible else None)

        o = self.start_tag(
            "div",
            id=f"section-{section.section}",
            class_=classes,
            role="tabpanel",
            aria_label=name,
        )
        o += self.tag("div", "", class_="left side")
        o += self.tag("div", "", class_="right side")
        o += self.start_tag("div", class_="content")
        o += self.heading(title, 3, "section-title")
        o += self.tag("div", self.format_summary_text(section), class_="summarytext")
        o += self.section_activity_summary(section)
        o += self.section_availability_message(
            section, self.context.has_capability(CAP_VIEW_HIDDEN_SECTIONS)
        )
        o += self.end_tag("div")
        o += self.end_tag("div")
        return o

    # --------------------------------------------------------------------- #
    # Stealth sections (editing only)
    # --------------------------------------------------------------------- #

    def stealth_section_header(self, sectionno: int) -> str:
        course = self.course_format.get_course()
        section = self.modinfo.get_section_info_all()[sectionno]
        o = self.start_tag(
            "div",
            id=f"section-{sectionno}",
            class_="section main clearfix orphaned hidden",
        )
        o += self.tag("div", "", class_="left side")
        o += self.tag("div", self.section_right_content(section, course, False), class_="right side")
        o += self.start_tag("div", class_="content")
        heading = get_string(
            "orphanedactivitiesinsectionno",
            name=self.course_format.get_section_name(section),
        )
        o += self.heading(self.escape(heading), 3, "sectionname")
        return o

    def stealth_section_footer(self) -> str:
        return self.end_tag("div") + self.end_tag("div")


__all__ = ["SectionRendererBase"]
