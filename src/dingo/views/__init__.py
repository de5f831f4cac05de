"""Template views backed by kida.

    from dingo.views import FileView, ViewRegistry

    views = ViewRegistry(template_dir="templates")
    FileView("layout.html", views)
    FileView("index.html", views).extends("layout.html")
"""

from dingo.views.file import FileView
from dingo.views.view import BUILTIN_HELPERS, EMPTY_TEMPLATE, MemoryView, View, ViewRegistry

__all__ = [
    "BUILTIN_HELPERS",
    "EMPTY_TEMPLATE",
    "FileView",
    "MemoryView",
    "View",
    "ViewRegistry",
]
