"""
Validated detection parameters.

    • ScaleFactor       — resize multiplier, strictly positive
    • ThresholdState    — Canny low threshold bound to [0, maximum]
    • DetectionSettings — quality level + threshold carried by a pipeline

Every setter validates; out-of-range values raise before anything is stored.
"""

from feature_detection.config import CORNER, LINE
from feature_detection.errors import InvalidParameterError, InvalidScaleError


class ScaleFactor:

    def __init__(self, value=1.0):
        self._value = None
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, v):
        v = float(v)
        if not v > 0:
            raise InvalidScaleError("Scale factor must be greater than 0")
        self._value = v

    @property
    def is_identity(self) -> bool:
        return self._value == 1.0

    def __repr__(self):
        return f"ScaleFactor({self._value})"


class ThresholdState:
    """
    Low Canny threshold plus its upper bound.
    The high threshold is always derived as ratio * low.
    """

    def __init__(self, low=LINE["LOW_THRESHOLD"], maximum=LINE["MAX_THRESHOLD"],
                 ratio=LINE["HIGH_THRESHOLD_RATIO"]):
        if maximum < 0:
            raise InvalidParameterError(f"Maximum threshold must be non-negative, got {maximum}")
        self.maximum = int(maximum)
        self.ratio = ratio
        self._low = 0
        self.low = low

    @property
    def low(self) -> int:
        return self._low

    @low.setter
    def low(self, v):
        v = int(v)
        if v < 0 or v > self.maximum:
            raise InvalidParameterError(
                f"Threshold {v} outside of range [0, {self.maximum}]"
            )
        self._low = v

    @property
    def high(self) -> int:
        return self._low * self.ratio

    @property
    def pair(self):
        return self.low, self.high

    def with_low(self, low):
        return ThresholdState(low, self.maximum, self.ratio)

    def __eq__(self, other):
        if not isinstance(other, ThresholdState):
            return NotImplemented
        return self.pair == other.pair and self.maximum == other.maximum

    def __repr__(self):
        return f"ThresholdState(low={self.low}, high={self.high}, max={self.maximum})"


class DetectionSettings:
    """User-adjustable knobs passed to every detection strategy."""

    def __init__(self, quality_level=CORNER["QUALITY_LEVEL"],
                 low_threshold=LINE["LOW_THRESHOLD"],
                 max_threshold=LINE["MAX_THRESHOLD"]):
        self._quality_level = 0
        self.quality_level = quality_level
        self.threshold = ThresholdState(low_threshold, max_threshold)

    @property
    def quality_level(self) -> int:
        return self._quality_level

    @quality_level.setter
    def quality_level(self, q):
        q = int(q)
        if q < 0 or q > CORNER["MAX_QUALITY_LEVEL"]:
            raise InvalidParameterError(
                f"Quality level {q} outside of range [0, {CORNER['MAX_QUALITY_LEVEL']}]"
            )
        self._quality_level = q

    @property
    def low_threshold(self) -> int:
        return self.threshold.low

    @low_threshold.setter
    def low_threshold(self, v):
        self.threshold.low = v

    def __repr__(self):
        return (f"DetectionSettings(quality_level={self.quality_level}, "
                f"threshold={self.threshold})")
