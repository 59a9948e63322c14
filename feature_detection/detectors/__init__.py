"""
Detectors Package

Contains the detection strategies used by the pipeline:
- Harris corner detection
- Canny edge map + probabilistic Hough line detection
"""

from .corner_detector import corner_response, detect_corners, detect_corner_features
from .line_detector import compute_edge_map, detect_segments, detect_lines, detect_line_features
from .strategy import (
    DetectionStrategy,
    CORNER_STRATEGY,
    LINE_STRATEGY,
    STRATEGIES,
    get_strategy,
)

__all__ = [
    "corner_response",
    "detect_corners",
    "detect_corner_features",
    "compute_edge_map",
    "detect_segments",
    "detect_lines",
    "detect_line_features",
    "DetectionStrategy",
    "CORNER_STRATEGY",
    "LINE_STRATEGY",
    "STRATEGIES",
    "get_strategy",
]
