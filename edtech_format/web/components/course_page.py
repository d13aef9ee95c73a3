"""
Course page renderer for the tabbed "edtech" format.

Renders every section of a course on one page as bootstrap-style tabs: a tab
strip, one pane per section (section 0 first), then stealth sections and the
section-count controls for editors.

Behavior:
    - The active section is decided once per render: the first rendered
      section that is current, otherwise section 0. The tab strip and the
      section panes both use it, so the highlighted tab always matches the
      visible pane.
    - Section 0 is rendered when it has a summary or modules, or while editing.
    - Sections beyond `numsections` (stealth) appear only for editors with
      `course:update`, and only when they hold modules.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from edtech_format.course.domain import (
    CAP_SET_CURRENT_SECTION,
    CAP_UPDATE,
    CAP_VIEW_HIDDEN_SECTIONS,
    COURSE_DISPLAY_MULTIPAGE,
    Course,
    SectionInfo,
)

from ..strings import get_string
from ..urls import PageUrl
from .icons import PixIcon, accesshide
from .section_renderer_base import SectionRendererBase
from .section_tabs import SectionTab, SectionTabs

logger = logging.getLogger("edtech_format.web.renderer")

SECTION_SHOWN = "shown"
SECTION_COLLAPSED = "collapsed"

_FORMAT_STYLES = """<style>
    .left {display:none;}
    .right {float:right;}
    .section-modchooser {
        width: 20px;
        height: 20px;
        background-color: red;
        border-radius: 50%;
        text-align: center;
        float: right;
    }
    .section-modchooser-link img.smallicon {padding-bottom: 3px;}
    .coursetitle {text-transform: uppercase; padding-bottom: 5px;}
</style>"""


class CoursePageRenderer(SectionRendererBase):
    """Renders the multiple-section page of an edtech course."""

    pane_classes = "tab-pane fade section main clearfix"

    def start_section_list(self) -> str:
        return self.start_tag("div", class_="tab-content")

    def end_section_list(self) -> str:
        return self.end_tag("div")

    def page_title(self) -> str:
        return get_string("topicoutline")

    # --------------------------------------------------------------------- #
    # Section pieces
    # --------------------------------------------------------------------- #

    def section_edit_controls(self, course: Course, section: SectionInfo, onsectionpage: bool = False) -> List[str]:
        """Marker toggle first, followed by the generic controls in their order."""
        if not self.context.user_is_editing():
            return []

        url = self._section_action_url(course, section, onsectionpage)
        isstealth = section.section > course.numsections
        controls: List[str] = []
        if not isstealth and self.context.has_capability(CAP_SET_CURRENT_SECTION):
            if course.marker == section.section:
                url.param("marker", 0)
                controls.append(self._control_link(url, "i/marked", get_string("markedthistopic"), "editing_highlight"))
            else:
                url.param("marker", section.section)
                controls.append(self._control_link(url, "i/marker", get_string("markthistopic"), "editing_highlight"))

        return controls + super().section_edit_controls(course, section, onsectionpage)

    def section_title(self, section: SectionInfo, course: Course) -> str:
        title = self.escape(self.course_format.get_section_name(section))
        url = self.course_format.course_url(section.section, navigation=True)
        if url is not None:
            title = self.link(url, title)
        return title

    def section_header(
        self,
        section: SectionInfo,
        course: Course,
        onsectionpage: bool,
        section_return: Optional[int] = None,
        active: bool = False,
    ) -> str:
        """Open the section pane and its content column.

        Opens two containers (pane, content) that `section_footer` closes.
        """
        style = ""
        if section.section != 0:
            if not section.visible:
                style = " hidden current in active" if active else " hidden"
            elif self.course_format.is_section_current(section) or active:
                style = " current in active"
        elif active:
            style = " current in active"

        o = self.start_tag(
            "div",
            id=f"section-{section.section}",
            class_=f"{self.pane_classes}{style}",
            role="tabpanel",
            aria_label=self.course_format.get_section_name(section),
        )
        o += self.tag("div", self.section_left_content(section, course, onsectionpage), class_="left side")
        o += self.tag("div", self.section_right_content(section, course, onsectionpage), class_="right side")
        o += self.start_tag("div", class_="content")

        # Off a section page every title shows except an unnamed section 0;
        # on a section page only a custom section 0 name shows.
        has_name_off_page = not onsectionpage and (section.section != 0 or section.name is not None)
        has_name_on_page = onsectionpage and section.section == 0 and section.name is not None
        heading_classes = "sectionname" if (has_name_off_page or has_name_on_page) else "sectionname accesshide"
        o += self.heading(self.section_title(section, course), 3, heading_classes)

        o += self.start_tag("div", class_="summary")
        o += self.format_summary_text(section)
        if self.context.user_is_editing() and self.context.has_capability(CAP_UPDATE):
            url = PageUrl("/course/editsection", {"id": section.id}, base=self.settings.wwwroot)
            if section_return is not None:
                url.param("sr", section_return)
            icon = PixIcon("i/settings", get_string("edit"), css_class="iconsmall edit", settings=self.settings, with_title=False)
            o += self.link(url, icon.render(), title=get_string("editsummary"))
        o += self.end_tag("div")

        o += self.section_availability_message(
            section, self.context.has_capability(CAP_VIEW_HIDDEN_SECTIONS)
        )
        return o

    def section_footer(self) -> str:
        return self.end_tag("div") + self.end_tag("div")

    # --------------------------------------------------------------------- #
    # Page assembly
    # --------------------------------------------------------------------- #

    def section_display(self, course: Course, section: SectionInfo) -> Optional[str]:
        """How a numbered section appears: shown, collapsed notice, or not at all.

        A section is shown when the viewer may access it, or when it is not
        available but carries an explanation. Otherwise it collapses to a
        "not available" notice when the course shows hidden sections in
        collapsed form and the availability system is not hiding it.
        """
        showsection = section.uservisible or (
            section.visible and not section.available and bool(section.availableinfo)
        )
        if showsection:
            return SECTION_SHOWN
        if not course.hiddensections and section.available:
            return SECTION_COLLAPSED
        return None

    def _plan_sections(self, course: Course, sections: Mapping[int, SectionInfo]) -> Dict[int, str]:
        plan: Dict[int, str] = {}
        for number, section in sections.items():
            if number == 0 or number > course.numsections:
                continue
            display = self.section_display(course, section)
            if display is not None:
                plan[number] = display
        return plan

    def _active_section(self, plan: Mapping[int, str]) -> int:
        for number in plan:
            if self.course_format.is_section_current(number):
                return number
        return 0

    def render_tabs(self, sections: Mapping[int, SectionInfo], plan: Mapping[int, str], active: int) -> str:
        """Section 0 tab first, then one tab per planned section in index order."""
        general_label = self.course_format.get_section_name(sections[0] if 0 in sections else 0)
        tabs = [SectionTab(section=0, label=general_label, active=active == 0)]
        tabs.extend(
            SectionTab(
                section=number,
                label=self.course_format.get_section_name(sections[number]),
                active=number == active,
            )
            for number in plan
        )
        return SectionTabs(tabs).render()

    def _general_section(self, course: Course, section: SectionInfo, active: bool) -> str:
        has_modules = bool(self.modinfo.sections.get(0))
        if not (section.summary or has_modules or self.context.user_is_editing()):
            return ""
        o = self.section_header(section, course, False, 0, active=active)
        o += self.activity_renderer.course_section_cm_list(course, section, 0)
        o += self.activity_renderer.course_section_add_cm_control(course, 0, 0)
        o += self.section_footer()
        return o

    def _numbered_section(self, course: Course, section: SectionInfo, display: str, active: bool) -> str:
        if display == SECTION_COLLAPSED:
            return self.section_hidden(section.section, course.id, active=active)
        if not self.context.user_is_editing() and course.coursedisplay == COURSE_DISPLAY_MULTIPAGE:
            return self.section_summary(section, course, active=active)
        o = self.section_header(section, course, False, 0, active=active)
        if section.uservisible:
            o += self.activity_renderer.course_section_cm_list(course, section, 0)
            o += self.activity_renderer.course_section_add_cm_control(course, section.section, 0)
        o += self.section_footer()
        return o

    def _stealth_sections(self, course: Course, sections: Mapping[int, SectionInfo]) -> str:
        o = ""
        for number, section in sections.items():
            if number <= course.numsections or not self.modinfo.sections.get(number):
                continue
            o += self.stealth_section_header(number)
            o += self.activity_renderer.course_section_cm_list(course, section, 0)
            o += self.stealth_section_footer()
        return o

    def change_number_sections(self, course: Course) -> str:
        """Controls to increase or reduce the declared number of sections."""
        o = self.start_tag("div", id="changenumsections", class_="mdl-right")
        if course.numsections < self.settings.max_sections:
            label = get_string("increasesections")
            url = PageUrl(
                "/course/changenumsections",
                {"courseid": course.id, "increase": True, "sesskey": self.context.sesskey()},
                base=self.settings.wwwroot,
            )
            icon = PixIcon("t/switch_plus", label, settings=self.settings).render()
            o += self.link(url, icon + accesshide(label), class_="increase-sections")
        if course.numsections > 0:
            label = get_string("reducesections")
            url = PageUrl(
                "/course/changenumsections",
                {"courseid": course.id, "increase": False, "sesskey": self.context.sesskey()},
                base=self.settings.wwwroot,
            )
            icon = PixIcon("t/switch_minus", label, settings=self.settings).render()
            o += self.link(url, icon + accesshide(label), class_="reduce-sections")
        o += self.end_tag("div")
        return o

    def _completion_help(self, course: Course) -> str:
        if not course.enablecompletion:
            return ""
        label = get_string("completionhelp")
        icon = PixIcon("i/completion", label, settings=self.settings).render()
        return self.tag("span", icon + accesshide(label), id="completionprogressid", class_="completionprogress")

    def render(self) -> str:
        course = self.course_format.get_course()
        sections = self.modinfo.get_section_info_all()
        editing = self.context.user_is_editing()

        plan = self._plan_sections(course, sections)
        active = self._active_section(plan)
        logger.debug(
            "Rendering course %s: %d sections, active=%s, editing=%s",
            course.id,
            len(sections),
            active,
            editing,
        )

        parts: List[str] = [
            self._completion_help(course),
            self.heading(self.escape(self.page_title()), 2, "accesshide"),
            _FORMAT_STYLES,
            self.start_tag("div", class_="tabbable tabs-left"),
            self.render_tabs(sections, plan, active),
            self.start_section_list(),
        ]

        general = ""
        body: List[str] = []
        for number, section in sections.items():
            if number == 0:
                general = self._general_section(course, section, active == 0)
                continue
            display = plan.get(number)
            if display is None:
                # Stealth sections and sections hidden without trace.
                continue
            body.append(self._numbered_section(course, section, display, number == active))

        parts.append(general)
        parts.extend(body)

        if editing and self.context.has_capability(CAP_UPDATE):
            parts.append(self._stealth_sections(course, sections))
            parts.append(self.end_section_list())
            parts.append(self.end_tag("div"))
            parts.append(self.change_number_sections(course))
        else:
            parts.append(self.end_section_list())
            parts.append(self.end_tag("div"))

        return "".join(parts)


__all__ = ["CoursePageRenderer", "SECTION_SHOWN", "SECTION_COLLAPSED"]
