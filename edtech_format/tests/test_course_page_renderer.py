"""
Course page renderer: tab strip, section order and editing affordances.

Focus:
    - Section 0 always comes first and its tab is always present.
    - The active tab and the active pane agree (current section or section 0).
    - Hidden, collapsed, unavailable and stealth sections follow the
      visibility rules.
    - Containers opened by the page are closed again in every mode.
"""
from __future__ import annotations

from edtech_format.course.domain import (
    CAP_MANAGE_ACTIVITIES,
    CAP_SET_CURRENT_SECTION,
    CAP_UPDATE,
    CAP_VIEW_HIDDEN_SECTIONS,
    COURSE_DISPLAY_MULTIPAGE,
)
from edtech_format.web.config import FormatSettings

from .helpers import active_tabs, count_open_close, pane_sections, tab_sections

EDITOR_CAPS = (CAP_UPDATE, CAP_SET_CURRENT_SECTION, CAP_MANAGE_ACTIVITIES, CAP_VIEW_HIDDEN_SECTIONS)


def _course_with_general_content(repo, **options):
    course = repo.create_course(fullname="Physics", **options)
    repo.update_section(course.id, 0, summary="Welcome to the course")
    return course


def test_scenario_current_section_and_hidden_section_without_trace(repo, make_renderer):
    """N=2, section 1 current, section 2 hidden and hidden sections invisible."""
    course = _course_with_general_content(repo, numsections=2, marker=1, hiddensections=True)
    repo.update_section(course.id, 2, visible=False)
    repo.add_module(course.id, 1, name="Lab notes", modname="page", url="/mod/page/view?id=9")

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1]
    assert active_tabs(html) == [1]
    assert pane_sections(html) == [0, 1]
    assert "section-2" not in html
    assert 'id="section-0" class="tab-pane fade section main clearfix" role="tabpanel"' in html
    assert 'id="section-1" class="tab-pane fade section main clearfix current in active"' in html
    assert "Lab notes" in html


def test_section_zero_is_active_when_no_section_is_current(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=3)

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1, 2, 3]
    assert active_tabs(html) == [0]
    assert pane_sections(html) == [0, 1, 2, 3]
    assert 'id="section-0" class="tab-pane fade section main clearfix current in active"' in html
    assert html.count('id="section-0"') == 1


def test_section_zero_stays_first_whatever_section_is_current(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=4, marker=3)

    html = make_renderer(course.id).render()

    assert pane_sections(html)[0] == 0
    assert tab_sections(html)[0] == 0
    assert active_tabs(html) == [3]
    # Exactly one section-0 header, and it is the plain variant.
    assert html.count('id="section-0"') == 1
    assert 'id="section-0" class="tab-pane fade section main clearfix current in active"' not in html


def test_empty_section_zero_keeps_its_tab_but_renders_no_pane(repo, make_renderer):
    course = repo.create_course(fullname="Empty", numsections=1)

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1]
    assert pane_sections(html) == [1]


def test_empty_section_zero_renders_while_editing(repo, make_renderer):
    course = repo.create_course(fullname="Empty", numsections=1)

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert pane_sections(html)[0] == 0


def test_section_zero_renders_when_it_holds_modules(repo, make_renderer):
    course = repo.create_course(fullname="Forum only", numsections=1)
    repo.add_module(course.id, 0, name="News", modname="forum", url="/mod/forum/view?id=1")

    html = make_renderer(course.id).render()

    assert pane_sections(html) == [0, 1]
    assert 'id="module-' in html


def test_hidden_section_collapses_to_not_available_notice(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, hiddensections=False)
    repo.update_section(course.id, 2, visible=False, summary="Secret plans")

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1, 2]
    assert 'id="section-2" class="tab-pane fade section main clearfix hidden"' in html
    assert '<div class="section_availability">Not available</div>' in html
    assert "Secret plans" not in html


def test_hidden_section_is_shown_to_viewers_who_may_see_hidden_sections(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, hiddensections=True)
    repo.update_section(course.id, 2, visible=False, summary="Draft")

    html = make_renderer(course.id, capabilities=(CAP_VIEW_HIDDEN_SECTIONS,)).render()

    assert tab_sections(html) == [0, 1, 2]
    assert 'id="section-2" class="tab-pane fade section main clearfix hidden"' in html
    assert "Draft" in html


def test_current_hidden_section_is_the_active_pane_for_staff(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, marker=2)
    repo.update_section(course.id, 2, visible=False)

    html = make_renderer(course.id, capabilities=(CAP_VIEW_HIDDEN_SECTIONS,)).render()

    assert active_tabs(html) == [2]
    assert 'id="section-2" class="tab-pane fade section main clearfix hidden current in active"' in html


def test_current_section_hidden_without_trace_falls_back_to_section_zero(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, marker=2, hiddensections=True)
    repo.update_section(course.id, 2, visible=False)

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1]
    assert active_tabs(html) == [0]
    assert pane_sections(html) == [0, 1]
    assert 'id="section-0" class="tab-pane fade section main clearfix current in active"' in html
    assert "section-2" not in html


def test_current_collapsed_section_is_the_active_placeholder(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, marker=2, hiddensections=False)
    repo.update_section(course.id, 2, visible=False)

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0, 1, 2]
    assert active_tabs(html) == [2]
    assert 'id="section-2" class="tab-pane fade section main clearfix hidden current in active"' in html
    assert '<div class="section_availability">Not available</div>' in html
    assert 'id="section-0" class="tab-pane fade section main clearfix" role="tabpanel"' in html


def test_unavailable_section_with_explanation_shows_header_without_modules(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=1)
    repo.update_section(course.id, 1, available=False, availableinfo="Opens on Monday")
    repo.add_module(course.id, 1, name="Quiz 1", modname="quiz", url="/mod/quiz/view?id=4")

    html = make_renderer(course.id).render()

    assert pane_sections(html) == [0, 1]
    assert '<div class="availabilityinfo">Not available: Opens on Monday</div>' in html
    assert "Quiz 1" not in html


def test_unavailable_section_without_explanation_renders_nothing_when_availability_hides_it(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=1, hiddensections=False)
    repo.update_section(course.id, 1, available=False)

    html = make_renderer(course.id).render()

    assert tab_sections(html) == [0]
    assert "section-1" not in html


def test_stealth_sections_are_invisible_without_editing(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)
    repo.add_module(course.id, 4, name="Old worksheet", modname="resource", url="/mod/resource/view?id=7")

    for renderer in (
        make_renderer(course.id),
        make_renderer(course.id, editing=True, capabilities=(CAP_SET_CURRENT_SECTION,)),
    ):
        html = renderer.render()
        assert "section-4" not in html
        assert "Old worksheet" not in html
        assert 4 not in tab_sections(html)


def test_stealth_sections_follow_numbered_sections_for_editors(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)
    repo.add_module(course.id, 4, name="Old worksheet", modname="resource", url="/mod/resource/view?id=7")
    repo.add_section(course.id, section=5)  # empty stealth section

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert pane_sections(html) == [0, 1, 2, 4]
    assert 'id="section-4" class="section main clearfix orphaned hidden"' in html
    assert "Orphaned activities (Topic 4)" in html
    assert "Old worksheet" in html
    assert 4 not in tab_sections(html)
    assert html.index('id="section-4"') < html.index('id="changenumsections"')


def test_change_number_of_sections_controls(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert 'id="changenumsections"' in html
    assert 'href="/course/changenumsections?courseid=1&amp;increase=1&amp;sesskey=sk123"' in html
    assert 'href="/course/changenumsections?courseid=1&amp;increase=0&amp;sesskey=sk123"' in html
    assert 'class="increase-sections"' in html
    assert 'class="reduce-sections"' in html


def test_reduce_control_hidden_without_numbered_sections(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=0)

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert 'class="increase-sections"' in html
    assert 'class="reduce-sections"' not in html


def test_increase_control_hidden_at_section_limit(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)

    html = make_renderer(
        course.id,
        editing=True,
        capabilities=EDITOR_CAPS,
        settings=FormatSettings(max_sections=2),
    ).render()

    assert 'class="increase-sections"' not in html
    assert 'class="reduce-sections"' in html


def test_no_editing_affordances_for_students(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)

    html = make_renderer(course.id).render()

    assert "changenumsections" not in html
    assert "editing_highlight" not in html
    assert 'class="section-modchooser"' not in html
    assert 'id="add_menus-section-' not in html
    assert "/course/editsection" not in html


def test_add_activity_control_per_rendered_section(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2)

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    for number in (0, 1, 2):
        assert f'id="add_menus-section-{number}"' in html


def test_multipage_display_renders_section_summaries(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, coursedisplay=COURSE_DISPLAY_MULTIPAGE)
    repo.update_section(course.id, 1, summary="Kinematics")
    repo.add_module(course.id, 1, name="Reading", modname="page", url="/mod/page/view?id=3")
    repo.add_module(course.id, 1, name="Check", modname="quiz", url="/mod/quiz/view?id=4")

    html = make_renderer(course.id).render()

    assert 'id="section-1" class="tab-pane fade section main clearfix section-summary"' in html
    assert '<a href="/course/view/1?section=1">Topic 1</a>' in html
    assert '<span class="activity-count">page: 1</span><span class="activity-count">quiz: 1</span>' in html
    # Module links are only on the section's own page.
    assert "Reading" not in html


def test_multipage_display_renders_full_sections_while_editing(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=1, coursedisplay=COURSE_DISPLAY_MULTIPAGE)
    repo.add_module(course.id, 1, name="Reading", modname="page", url="/mod/page/view?id=3")

    html = make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert "section-summary" not in html
    assert "Reading" in html


def test_page_preamble(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=1, enablecompletion=True)

    html = make_renderer(course.id).render()

    assert html.index('id="completionprogressid"') < html.index('<h2 class="accesshide">Topic outline</h2>')
    assert "<style>" in html
    assert '<div class="tabbable tabs-left">' in html
    assert '<div class="tab-content">' in html


def test_containers_are_balanced_in_every_mode(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=3, marker=2, hiddensections=False)
    repo.update_section(course.id, 3, visible=False)
    repo.add_module(course.id, 1, name="Reading", modname="page", url="/mod/page/view?id=3")
    repo.add_module(course.id, 6, name="Orphan", modname="page", url="/mod/page/view?id=5")

    for kwargs in ({}, {"editing": True, "capabilities": EDITOR_CAPS}):
        html = make_renderer(course.id, **kwargs).render()
        opened, closed = count_open_close(html, "div")
        assert opened == closed
        opened, closed = count_open_close(html, "ul")
        assert opened == closed
        assert html.endswith("</div>")


def test_render_does_not_mutate_course_state(repo, make_renderer):
    course = _course_with_general_content(repo, numsections=2, marker=1)
    before = (repo.get_course(course.id), repo.list_sections(course.id))

    make_renderer(course.id, editing=True, capabilities=EDITOR_CAPS).render()

    assert (repo.get_course(course.id), repo.list_sections(course.id)) == before
