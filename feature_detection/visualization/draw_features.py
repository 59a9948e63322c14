"""
Visualization utilities for rendering detected features.

This module provides:
    • draw_corners(img, corners, color, radius, thickness)
    • draw_lines(img, lines, color, thickness)
    • draw_count_label(img, text)
    • render_overlay(base, store, kind, label)

It is used by:
    - pipeline.py (report stage)
    - tuner.py (line map redraws)
"""

from typing import List, Tuple

import cv2
import numpy as np

from feature_detection.config import (
    COLOR_CORNER,
    COLOR_LABEL,
    COLOR_LINE,
    CORNER_RADIUS,
    DRAW_THICKNESS,
)
from feature_detection.models.features import CornerPoint, FeatureStore, LineSegment


def as_bgr(image: np.ndarray) -> np.ndarray:
    """
    Returns a 3-channel copy so colored overlays stay visible on gray input.
    """
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()


# ---------------------------------------------------------------------
#  BASIC: points and segments
# ---------------------------------------------------------------------

def draw_corners(
    image,
    corners: List[CornerPoint],
    color: Tuple[int, int, int] = COLOR_CORNER,
    radius: int = CORNER_RADIUS,
    thickness: int = DRAW_THICKNESS
):
    """
    Draws a hollow circle around every corner (modified in-place).
    """
    for c in corners:
        cv2.circle(image, (int(c.x), int(c.y)), radius, color, thickness)
    return image


def draw_lines(
    image,
    lines: List[LineSegment],
    color: Tuple[int, int, int] = COLOR_LINE,
    thickness: int = DRAW_THICKNESS
):
    """
    Draws a simple list of LineSegments onto an image.

    Args:
        image: BGR numpy array (modified in-place)
        lines: list of LineSegment
        color: (B, G, R)
        thickness: pixel width
    """
    for ln in lines:
        cv2.line(
            image,
            (int(ln.x1), int(ln.y1)),
            (int(ln.x2), int(ln.y2)),
            color,
            thickness
        )
    return image


def draw_count_label(image, text: str, margin: int = 50, scale: float = 1.0):
    """
    Writes a feature-count label near the bottom-left corner.
    """
    h = image.shape[0]
    y = max(h - margin, 20)
    cv2.putText(image, text, (10, y), cv2.FONT_HERSHEY_SIMPLEX, scale, COLOR_LABEL, 2)
    return image


# ---------------------------------------------------------------------
#  HIGH-LEVEL: annotated overlay for one detector kind
# ---------------------------------------------------------------------

def render_overlay(base: np.ndarray, store: FeatureStore, kind: str, label: str):
    """
    Draws the features of one kind on a copy of base and adds the
    "<label>: <count>" caption.

    Returns (overlay, caption).
    """
    vis = as_bgr(base)

    if kind == "corner":
        draw_corners(vis, store.corners)
        caption = f"{label}: {store.corner_count}"
    else:
        draw_lines(vis, store.lines)
        caption = f"{label}: {store.line_count}"

    draw_count_label(vis, caption)
    return vis, caption
