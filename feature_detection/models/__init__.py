"""
Data Models

Defines the core data structures:
- ImageBuffer
- CornerPoint, LineSegment, FeatureSet, FeatureStore
- ScaleFactor, ThresholdState, DetectionSettings
"""

from .image_buffer import ImageBuffer
from .features import CornerPoint, LineSegment, FeatureSet, FeatureStore
from .parameters import ScaleFactor, ThresholdState, DetectionSettings

__all__ = [
    "ImageBuffer",
    "CornerPoint",
    "LineSegment",
    "FeatureSet",
    "FeatureStore",
    "ScaleFactor",
    "ThresholdState",
    "DetectionSettings",
]
