# Course format component system
# Pure Python components for HTML generation

from .base import Component
from .layout import Layout
from .section_tabs import SectionTab, SectionTabs
from .activity_list import ActivityListRenderer
from .section_renderer_base import SectionRendererBase
from .course_page import CoursePageRenderer
from .forms import SectionEditForm

__all__ = [
    "Component",
    "Layout",
    "SectionTab",
    "SectionTabs",
    "ActivityListRenderer",
    "SectionRendererBase",
    "CoursePageRenderer",
    "SectionEditForm",
]
