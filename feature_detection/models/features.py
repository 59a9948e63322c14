from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional


class CornerPoint(NamedTuple):
    x: int
    y: int


class LineSegment(NamedTuple):
    x1: int
    y1: int
    x2: int
    y2: int


@dataclass(frozen=True)
class FeatureSet:
    """
    Output of one detection strategy call.

    A field left as None means the detector does not produce that kind
    of feature, so the store keeps whatever it already holds.
    """

    corners: Optional[List[CornerPoint]] = None
    lines: Optional[List[LineSegment]] = None


@dataclass
class FeatureStore:
    """
    Mutable container of detected corners and line segments.

    Written by detection passes (always a full replace), read by the
    display and persistence layers.
    """

    corners: List[CornerPoint] = field(default_factory=list)
    lines: List[LineSegment] = field(default_factory=list)

    # -------------------------------------------------------------
    #   Replacement
    # -------------------------------------------------------------

    def replace_corners(self, corners):
        self.corners = [CornerPoint(int(x), int(y)) for x, y in corners]

    def replace_lines(self, lines):
        self.lines = [LineSegment(*(int(v) for v in seg)) for seg in lines]

    def apply(self, feature_set: FeatureSet):
        if feature_set.corners is not None:
            self.replace_corners(feature_set.corners)
        if feature_set.lines is not None:
            self.replace_lines(feature_set.lines)

    def add_corner(self, corner):
        """Append a single corner, keeping scan order."""
        x, y = corner
        self.corners.append(CornerPoint(int(x), int(y)))
        return self

    # -------------------------------------------------------------
    #   Counts
    # -------------------------------------------------------------

    @property
    def corner_count(self) -> int:
        return len(self.corners)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def __repr__(self):
        return f"FeatureStore(corners={self.corner_count}, lines={self.line_count})"
