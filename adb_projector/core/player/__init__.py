"""
adb_projector/core/player

Display package for adb-projector: the PySide6 window the capture loop
draws into.
"""

from .projector_window import ProjectorWindow, create_projector_window

__all__ = [
    "ProjectorWindow",
    "create_projector_window",
]
