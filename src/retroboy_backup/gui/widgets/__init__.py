"""Reusable widget components.

Widgets:
    PathSelector: Entry field with browse button for file/directory selection
"""

from .path_selector import PathSelector

__all__ = [
    "PathSelector",
]
