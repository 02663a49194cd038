"""
Report component - Suite result rendering.
"""

from .component import SUITE_NAME, build_junit, render_line, render_summary, write_junit

__all__ = [
    "SUITE_NAME",
    "build_junit",
    "render_line",
    "render_summary",
    "write_junit",
]
