"""
Detection strategies.

A strategy is a tagged record pairing a detector kind with its
detect function, so one pipeline type can run either detector:

    strategy = get_strategy("corner")
    feature_set = strategy.detect(image_buffer, settings)
"""

from dataclasses import dataclass
from typing import Callable

from feature_detection.config import ARTIFACT_NAMES, WINDOW_CORNERS, WINDOW_LINES
from feature_detection.detectors.corner_detector import detect_corner_features
from feature_detection.detectors.line_detector import detect_line_features
from feature_detection.errors import InvalidParameterError
from feature_detection.models.features import FeatureSet


@dataclass(frozen=True)
class DetectionStrategy:
    kind: str
    detect: Callable[..., FeatureSet]
    window_name: str
    count_label: str
    supports_tuning: bool = False

    def artifact_name(self, filtered: bool) -> str:
        return ARTIFACT_NAMES[(self.kind, filtered)]


CORNER_STRATEGY = DetectionStrategy(
    kind="corner",
    detect=detect_corner_features,
    window_name=WINDOW_CORNERS,
    count_label="Corners Detected",
)

LINE_STRATEGY = DetectionStrategy(
    kind="line",
    detect=detect_line_features,
    window_name=WINDOW_LINES,
    count_label="Edges Detected",
    supports_tuning=True,
)

STRATEGIES = {s.kind: s for s in (CORNER_STRATEGY, LINE_STRATEGY)}


def get_strategy(kind) -> DetectionStrategy:
    if isinstance(kind, DetectionStrategy):
        return kind
    try:
        return STRATEGIES[kind]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown detector '{kind}', expected one of {', '.join(STRATEGIES)}"
        ) from None
