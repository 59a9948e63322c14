"""
Visualization Tools

Provides:
- Drawing of corners, line segments and count labels
- OpenCV and headless display backends
- Text artifact writers / readers
"""

from .draw_features import as_bgr, draw_corners, draw_lines, draw_count_label, render_overlay
from .display import OpenCVDisplay, HeadlessDisplay, THRESHOLD_CHANGED, DISMISSED
from .save_outputs import save_features, load_features, save_pixel_dump

__all__ = [
    "as_bgr",
    "draw_corners",
    "draw_lines",
    "draw_count_label",
    "render_overlay",
    "OpenCVDisplay",
    "HeadlessDisplay",
    "THRESHOLD_CHANGED",
    "DISMISSED",
    "save_features",
    "load_features",
    "save_pixel_dump",
]
