"""
Course page routes: view page, section actions and section editing.

Why:
    Serve the tabbed course page and handle the links its edit controls
    produce. The adapter checks capabilities and the session key, delegates
    state changes to `CourseSectionsService` and renders with
    `CoursePageRenderer`.

Notes:
    - Persistence is injected. The default is an in-memory repo; tests call
      `set_repo` to swap it.
    - Every state change requires editing mode, the matching capability and
      the `sesskey` of the viewer's session, then redirects (303) back to the
      course view.
"""
from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import BaseModel, Field, ValidationError
from pydantic.functional_validators import field_validator

from edtech_format.course.domain import (
    CAP_MOVE_SECTIONS,
    CAP_SECTION_VISIBILITY,
    CAP_SET_CURRENT_SECTION,
    CAP_UPDATE,
    CAP_VIEW_HIDDEN_SECTIONS,
    EDITING_CAPABILITIES,
    Course,
)
from edtech_format.course.repo_memory import InMemoryCourseRepo
from edtech_format.course.services import CourseSectionsService

from ..components import ActivityListRenderer, CoursePageRenderer, Layout, SectionEditForm
from ..components.base import Component
from ..config import current_environment, load_settings
from ..context import RenderContext
from ..course_format import EdtechCourseFormat
from ..strings import get_string
from ..urls import PageUrl

course_router = APIRouter(tags=["Course"])
logger = logging.getLogger("edtech_format.web.course")


# --- Repository wiring -----------------------------------------------------------

def _seed_demo_course(repo: InMemoryCourseRepo) -> None:
    course = repo.create_course(fullname="Introduction to EdTech", shortname="EDT101", numsections=3, marker=1)
    repo.update_section(course.id, 0, summary="Welcome! Start with the **course guide**.")
    repo.add_module(course.id, 0, name="Announcements", modname="forum", url="/mod/forum/view?id=1")
    repo.add_module(course.id, 1, name="Course guide", modname="page", url="/mod/page/view?id=2")
    repo.add_module(course.id, 2, name="First quiz", modname="quiz", url="/mod/quiz/view?id=3")


def _build_default_repo() -> InMemoryCourseRepo:
    repo = InMemoryCourseRepo()
    if current_environment() == "dev":
        _seed_demo_course(repo)
    return repo


_REPO = None


def _get_repo():  # pragma: no cover - simple accessor
    global _REPO
    if _REPO is None:
        _REPO = _build_default_repo()
    return _REPO


def set_repo(repo) -> None:
    """Allow tests to swap the course repository implementation."""
    global _REPO
    _REPO = repo


def _get_service() -> CourseSectionsService:
    return CourseSectionsService(_get_repo(), max_sections=load_settings().max_sections)


# --- Query models ----------------------------------------------------------------

class ViewActions(BaseModel):
    """Optional actions carried on the course view URL."""

    edit: Optional[Literal["on", "off"]] = None
    marker: Optional[int] = Field(default=None, ge=0)
    hide: Optional[int] = Field(default=None, ge=1)
    show: Optional[int] = Field(default=None, ge=1)
    section: Optional[int] = Field(default=None, ge=0)
    move: Optional[int] = None
    sesskey: Optional[str] = None

    @field_validator("move")
    @classmethod
    def _valid_direction(cls, v):
        if v is not None and v not in (-1, 1):
            raise ValueError("move must be -1 or 1")
        return v

    def has_action(self) -> bool:
        return any(
            value is not None
            for value in (self.edit, self.marker, self.hide, self.show, self.move)
        )


class ChangeNumSectionsParams(BaseModel):
    courseid: int
    increase: bool
    sesskey: str = ""


class EditSectionParams(BaseModel):
    id: int
    sr: Optional[int] = Field(default=None, ge=0)


# --- Helpers ---------------------------------------------------------------------

def _user(request: Request) -> dict:
    return getattr(request.state, "user", None) or {}


def _render_context(request: Request) -> RenderContext:
    """Build the viewer's render context from the session user.

    Editing mode only sticks for users allowed to edit.
    """
    user = _user(request)
    capabilities = frozenset(user.get("capabilities") or ())
    editing = bool(user.get("editing")) and bool(capabilities & EDITING_CAPABILITIES)
    return RenderContext(editing=editing, capabilities=capabilities, session_key=str(user.get("sesskey") or ""))


def _sesskey_ok(context: RenderContext, supplied: Optional[str]) -> bool:
    return bool(context.sesskey()) and supplied == context.sesskey()


def _page_response(layout: Layout, request: Request, *, status_code: int = 200) -> HTMLResponse:
    body = layout.render_fragment() if request.headers.get("HX-Request") else layout.render()
    response = HTMLResponse(content=body, status_code=status_code)
    response.headers["Cache-Control"] = "private, no-store"
    return response


def _error_response(request: Request, status_code: int, message: str) -> HTMLResponse:
    content = f'<div class="alert alert-error" role="alert">{Component.escape(message)}</div>'
    return _page_response(Layout(title="Error", content=content), request, status_code=status_code)


def _view_redirect(course_id: int, anchor: Optional[str] = None) -> RedirectResponse:
    settings = load_settings()
    url = PageUrl(f"/course/view/{course_id}", anchor=anchor, base=settings.wwwroot)
    return RedirectResponse(url=str(url), status_code=303)


def _editing_toggle(course: Course, context: RenderContext) -> str:
    if not context.user_allowed_editing():
        return ""
    settings = load_settings()
    url = PageUrl(f"/course/view/{course.id}", base=settings.wwwroot)
    url.param("edit", "off" if context.user_is_editing() else "on").param("sesskey", context.sesskey())
    label = get_string("turneditingoff" if context.user_is_editing() else "turneditingon")
    return Component.link(url, Component.escape(label), class_="btn btn-secondary editing-toggle")


# --- Routes ----------------------------------------------------------------------

@course_router.get("/course/view/{course_id}", response_class=HTMLResponse)
async def course_view(request: Request, course_id: int):
    """Render the course page or apply an action from an edit control.

    Behavior:
        - Unknown course: 404.
        - With an action (`edit`, `marker`, `hide`, `show`, `move`): requires a
          matching `sesskey` (403), editing mode and the action's capability
          (403); invalid parameters give 400. Success redirects to the view.
        - Without an action: renders the full page (fragment for HTMX).
    """
    repo = _get_repo()
    course = repo.get_course(course_id)
    if course is None:
        return _error_response(request, 404, "Course not found.")

    context = _render_context(request)
    try:
        actions = ViewActions.model_validate(dict(request.query_params))
    except ValidationError as exc:
        logger.warning("Rejected course view params for course=%s: %s", course_id, exc.error_count())
        return _error_response(request, 400, "Invalid parameters.")

    if actions.has_action():
        return _apply_view_action(request, course, context, actions)

    settings = load_settings()
    modinfo = repo.get_modinfo(course_id, can_view_hidden=context.has_capability(CAP_VIEW_HIDDEN_SECTIONS))
    course_format = EdtechCourseFormat(course, settings=settings, sections=dict(modinfo.section_infos))
    renderer = CoursePageRenderer(
        course_format,
        modinfo,
        context,
        ActivityListRenderer(modinfo, context, settings=settings),
        settings=settings,
    )
    layout = Layout(
        title=course.fullname,
        content=renderer.render(),
        header_actions=_editing_toggle(course, context),
    )
    return _page_response(layout, request)


def _apply_view_action(request: Request, course: Course, context: RenderContext, actions: ViewActions) -> Response:
    if not _sesskey_ok(context, actions.sesskey):
        logger.warning("Invalid sesskey for course=%s action", course.id)
        return _error_response(request, 403, "Invalid session key.")

    if actions.edit is not None:
        if not context.user_allowed_editing():
            return _error_response(request, 403, "Editing is not allowed.")
        sid = getattr(request.state, "session_id", None)
        store = getattr(request.app.state, "session_store", None)
        if sid and store is not None:
            store.set_editing(sid, actions.edit == "on")
        return _view_redirect(course.id)

    if not context.user_is_editing():
        return _error_response(request, 403, "Turn editing on first.")

    service = _get_service()
    try:
        if actions.marker is not None:
            if not context.has_capability(CAP_SET_CURRENT_SECTION):
                raise PermissionError("forbidden")
            service.set_marker(course.id, actions.marker)
            return _view_redirect(course.id)
        if actions.hide is not None or actions.show is not None:
            if not context.has_capability(CAP_SECTION_VISIBILITY):
                raise PermissionError("forbidden")
            if actions.hide is not None:
                service.set_section_visibility(course.id, actions.hide, False)
                return _view_redirect(course.id, f"section-{actions.hide}")
            service.set_section_visibility(course.id, actions.show, True)  # type: ignore[arg-type]
            return _view_redirect(course.id, f"section-{actions.show}")
        if actions.move is not None:
            if not context.has_capability(CAP_MOVE_SECTIONS):
                raise PermissionError("forbidden")
            if actions.section is None:
                raise ValueError("invalid_section")
            service.move_section(course.id, actions.section, actions.move)
            return _view_redirect(course.id, f"section-{actions.section + actions.move}")
    except PermissionError:
        logger.warning("Forbidden section action on course=%s", course.id)
        return _error_response(request, 403, "You do not have permission to do this.")
    except LookupError as exc:
        logger.warning("Section action failed on course=%s: %s", course.id, exc.__class__.__name__)
        return _error_response(request, 404, "Course not found.")
    except ValueError as exc:
        logger.warning("Section action rejected on course=%s: %s", course.id, exc)
        return _error_response(request, 400, "Invalid section.")
    return _view_redirect(course.id)


@course_router.get("/course/changenumsections", response_class=HTMLResponse)
async def change_number_of_sections(request: Request):
    """Increase or reduce the declared number of sections.

    Requires editing mode, `course:update` and a matching `sesskey`.
    """
    try:
        params = ChangeNumSectionsParams.model_validate(dict(request.query_params))
    except ValidationError:
        return _error_response(request, 400, "Invalid parameters.")

    context = _render_context(request)
    if not _sesskey_ok(context, params.sesskey):
        logger.warning("Invalid sesskey for changenumsections course=%s", params.courseid)
        return _error_response(request, 403, "Invalid session key.")
    if not (context.user_is_editing() and context.has_capability(CAP_UPDATE)):
        return _error_response(request, 403, "You do not have permission to do this.")

    try:
        _get_service().change_numsections(params.courseid, params.increase)
    except LookupError:
        return _error_response(request, 404, "Course not found.")
    return _view_redirect(params.courseid, "changenumsections")


def _load_section_for_edit(request: Request) -> tuple:
    """Resolve (params, context, course, section) or an error response."""
    try:
        params = EditSectionParams.model_validate(dict(request.query_params))
    except ValidationError:
        return None, _error_response(request, 400, "Invalid parameters.")
    context = _render_context(request)
    if not (context.user_is_editing() and context.has_capability(CAP_UPDATE)):
        return None, _error_response(request, 403, "You do not have permission to do this.")
    try:
        course, section = _get_service().find_section(params.id)
    except LookupError:
        return None, _error_response(request, 404, "Section not found.")
    return (params, context, course, section), None


@course_router.get("/course/editsection", response_class=HTMLResponse)
async def edit_section_form(request: Request):
    """Render the section name/summary form (editing mode + `course:update`)."""
    loaded, error = _load_section_for_edit(request)
    if error is not None:
        return error
    params, context, course, section = loaded
    settings = load_settings()
    course_format = EdtechCourseFormat(course, settings=settings)
    form = SectionEditForm(
        section,
        sesskey=context.sesskey(),
        default_name=course_format.get_section_name(section.section),
        section_return=params.sr,
        wwwroot=settings.wwwroot,
    )
    layout = Layout(
        title=f"{get_string('editsummary')} - {course.fullname}",
        heading=course_format.get_section_name(section),
        content=form.render(),
    )
    return _page_response(layout, request)


@course_router.post("/course/editsection", response_class=HTMLResponse)
async def edit_section_submit(request: Request):
    """Save the section name/summary and return to the course page."""
    loaded, error = _load_section_for_edit(request)
    if error is not None:
        return error
    params, context, course, section = loaded
    form = await request.form()
    if not _sesskey_ok(context, str(form.get("sesskey") or "")):
        logger.warning("Invalid sesskey for editsection section=%s", section.id)
        return _error_response(request, 403, "Invalid session key.")
    values = {"name": str(form.get("name") or ""), "summary": str(form.get("summary") or "")}
    try:
        updated = _get_service().edit_section(section.id, name=values["name"], summary=values["summary"])
    except ValueError:
        settings = load_settings()
        course_format = EdtechCourseFormat(course, settings=settings)
        form_html = SectionEditForm(
            section,
            sesskey=context.sesskey(),
            default_name=course_format.get_section_name(section.section),
            section_return=params.sr,
            values=values,
            error="The section name is too long.",
            wwwroot=settings.wwwroot,
        ).render()
        layout = Layout(title=get_string("editsummary"), heading=course_format.get_section_name(section), content=form_html)
        return _page_response(layout, request, status_code=400)
    return _view_redirect(course.id, f"section-{updated.section}")


__all__ = ["course_router", "set_repo", "ViewActions"]
