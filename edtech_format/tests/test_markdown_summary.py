"""
Section summaries render as sanitised markdown.
"""
from __future__ import annotations

from edtech_format.web.components.markdown import render_markdown_safe


def test_empty_summary_renders_nothing():
    assert render_markdown_safe("") == ""


def test_basic_markdown():
    html = render_markdown_safe("**Week 1**\n- read\n- write")

    assert "<strong>Week 1</strong>" in html
    assert "<li>read</li>" in html


def test_raw_html_is_not_passed_through():
    html = render_markdown_safe('<img src=x onerror="alert(1)"> hello')

    assert "<img" not in html
    assert "hello" in html


def test_unsafe_link_protocol_is_dropped():
    html = render_markdown_safe("[click](javascript:alert(1)) and [ok](https://example.org)")

    assert 'href="javascript' not in html
    assert '<a href="https://example.org">ok</a>' in html


def test_page_level_headings_are_not_allowed_in_summaries():
    html = render_markdown_safe("# Big\n\n#### Small")

    assert "<h1>" not in html
    assert "<h4>Small</h4>" in html
