"""Shared builders and HTML probes for course format tests."""
from __future__ import annotations

import re
from typing import Iterable, Optional

from edtech_format.course.domain import CAP_VIEW_HIDDEN_SECTIONS
from edtech_format.course.repo_memory import InMemoryCourseRepo
from edtech_format.web.components import ActivityListRenderer, CoursePageRenderer
from edtech_format.web.config import FormatSettings
from edtech_format.web.context import RenderContext
from edtech_format.web.course_format import EdtechCourseFormat

SESSKEY = "sk123"


def build_renderer(
    repo: InMemoryCourseRepo,
    course_id: int,
    *,
    editing: bool = False,
    capabilities: Iterable[str] = (),
    settings: Optional[FormatSettings] = None,
) -> CoursePageRenderer:
    """Wire a renderer the same way the course view route does."""
    settings = settings or FormatSettings()
    context = RenderContext(editing=editing, capabilities=frozenset(capabilities), session_key=SESSKEY)
    modinfo = repo.get_modinfo(course_id, can_view_hidden=context.has_capability(CAP_VIEW_HIDDEN_SECTIONS))
    course_format = EdtechCourseFormat(repo.get_course(course_id), settings=settings, sections=dict(modinfo.section_infos))
    return CoursePageRenderer(
        course_format,
        modinfo,
        context,
        ActivityListRenderer(modinfo, context, settings=settings),
        settings=settings,
    )


def tab_sections(html: str) -> list[int]:
    """Section numbers of the tabs, in order."""
    strip = re.search(r'<ul class="nav nav-tabs" role="tablist">(.*?)</ul>', html)
    assert strip, "tab strip missing"
    return [int(n) for n in re.findall(r'href="#section-(\d+)"', strip.group(1))]


def active_tabs(html: str) -> list[int]:
    return [int(n) for n in re.findall(r'<li role="presentation" class="active"><a href="#section-(\d+)"', html)]


def pane_sections(html: str) -> list[int]:
    """Section numbers of the rendered section blocks, in document order."""
    return [int(n) for n in re.findall(r'<div id="section-(\d+)"', html)]


def count_open_close(html: str, tag: str) -> tuple[int, int]:
    return len(re.findall(rf"<{tag}[\s>]", html)), html.count(f"</{tag}>")
