"""
Settings from the environment, page URLs, language strings and format rules.
"""
from __future__ import annotations

import pytest

from edtech_format.course.domain import COURSE_DISPLAY_MULTIPAGE, DEFAULT_MAX_SECTIONS, Course, SectionInfo
from edtech_format.course.repo_memory import InMemoryCourseRepo
from edtech_format.course.services import CourseSectionsService
from edtech_format.web.config import (
    FormatSettings,
    current_environment,
    ensure_secure_config_on_startup,
    load_settings,
)
from edtech_format.web.course_format import EdtechCourseFormat
from edtech_format.web.strings import get_string
from edtech_format.web.urls import PageUrl


def test_settings_defaults(monkeypatch):
    for name in ("EDTECH_WWWROOT", "EDTECH_PIX_BASE", "EDTECH_MAX_SECTIONS", "EDTECH_LINK_COURSE_SECTIONS"):
        monkeypatch.delenv(name, raising=False)

    assert load_settings() == FormatSettings()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("EDTECH_WWWROOT", "https://school.example/")
    monkeypatch.setenv("EDTECH_PIX_BASE", "/pix/")
    monkeypatch.setenv("EDTECH_MAX_SECTIONS", "5000")
    monkeypatch.setenv("EDTECH_LINK_COURSE_SECTIONS", "off")

    settings = load_settings()

    assert settings.wwwroot == "https://school.example"
    assert settings.pix_base == "/pix"
    assert settings.max_sections == 1000
    assert settings.link_course_sections is False


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_max_sections_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("EDTECH_MAX_SECTIONS", raw)

    assert load_settings().max_sections == DEFAULT_MAX_SECTIONS


def test_service_and_settings_share_the_section_limit():
    assert FormatSettings().max_sections == DEFAULT_MAX_SECTIONS
    assert CourseSectionsService(InMemoryCourseRepo()).max_sections == DEFAULT_MAX_SECTIONS


def test_environment_defaults_to_dev(monkeypatch):
    monkeypatch.delenv("EDTECH_ENV", raising=False)
    assert current_environment() == "dev"
    monkeypatch.setenv("EDTECH_ENV", " PROD ")
    assert current_environment() == "prod"


def test_startup_guard_rejects_plain_http_in_prod(monkeypatch):
    monkeypatch.setenv("EDTECH_ENV", "prod")
    monkeypatch.setenv("EDTECH_WWWROOT", "http://school.example")

    with pytest.raises(SystemExit):
        ensure_secure_config_on_startup()


def test_startup_guard_is_permissive_in_dev(monkeypatch):
    monkeypatch.setenv("EDTECH_ENV", "dev")
    monkeypatch.setenv("EDTECH_WWWROOT", "http://localhost:8000")

    ensure_secure_config_on_startup()


def test_page_url_params_and_escaping():
    url = PageUrl("/course/view/3", {"sesskey": "abc"}, base="https://school.example")
    url.param("marker", 2).param("editing", True)

    assert str(url) == "https://school.example/course/view/3?sesskey=abc&marker=2&editing=1"
    assert url.out() == "https://school.example/course/view/3?sesskey=abc&amp;marker=2&amp;editing=1"


def test_page_url_copy_is_independent():
    base = PageUrl("/course/view/3", {"sesskey": "abc"})
    moved = base.copy().param("move", -1).set_anchor("section-2")

    assert str(base) == "/course/view/3?sesskey=abc"
    assert str(moved) == "/course/view/3?sesskey=abc&move=-1#section-2"
    assert moved == PageUrl("/course/view/3", {"sesskey": "abc", "move": -1}, anchor="section-2")


def test_strings_lookup_and_placeholders():
    assert get_string("section0name") == "General"
    assert get_string("orphanedactivitiesinsectionno", name="Topic 7") == "Orphaned activities (Topic 7)"
    assert get_string("no_such_string") == "[[no_such_string]]"


def test_course_format_names_and_current_section():
    course = Course(id=4, fullname="Maths", numsections=3, marker=2)
    fmt = EdtechCourseFormat(course, sections={1: SectionInfo(id=11, section=1, name="Algebra")})

    assert fmt.get_section_name(0) == "General"
    assert fmt.get_section_name(1) == "Algebra"
    assert fmt.get_section_name(SectionInfo(id=12, section=2)) == "Topic 2"
    assert fmt.is_section_current(2) is True
    assert fmt.is_section_current(SectionInfo(id=12, section=2)) is True
    assert fmt.is_section_current(1) is False


def test_section_zero_is_never_current():
    fmt = EdtechCourseFormat(Course(id=4, fullname="Maths", numsections=3, marker=0))

    assert fmt.is_section_current(0) is False


def test_course_urls_for_single_and_multi_page_display():
    single = EdtechCourseFormat(Course(id=4, fullname="Maths", numsections=3))
    multi = EdtechCourseFormat(Course(id=4, fullname="Maths", numsections=3, coursedisplay=COURSE_DISPLAY_MULTIPAGE))
    unlinked = EdtechCourseFormat(
        Course(id=4, fullname="Maths", numsections=3),
        settings=FormatSettings(link_course_sections=False),
    )

    assert str(single.course_url()) == "/course/view/4"
    assert str(single.course_url(2, navigation=True)) == "/course/view/4#section-2"
    assert str(multi.course_url(2, navigation=True)) == "/course/view/4?section=2"
    assert unlinked.course_url(2, navigation=True) is None
    assert str(unlinked.course_url(2)) == "/course/view/4#section-2"
