"""
Pytest configuration for course format tests.

Why: Force AnyIO to use the asyncio backend and give every test a fresh
in-memory course store.
"""
from __future__ import annotations

import pytest

from edtech_format.course.repo_memory import InMemoryCourseRepo

from .helpers import build_renderer


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repo() -> InMemoryCourseRepo:
    return InMemoryCourseRepo()


@pytest.fixture
def make_renderer(repo):
    def _make(course_id: int, **kwargs):
        return build_renderer(repo, course_id, **kwargs)

    return _make
