"""
Text artifacts written by the feature detection pipeline.

This module provides:
    • save_features(path, store)
    • load_features(path)
    • save_pixel_dump(path, pixels)

Formats (one line per item, no header, no trailer):
    Point: (x, y)
    Line: (x1, y1) -> (x2, y2)
    Pixel (y, x): R: <red>, G: <green>, B: <blue>
"""

import re

import numpy as np

from feature_detection.errors import EmptyImageError, InvalidParameterError
from feature_detection.models.features import CornerPoint, FeatureStore, LineSegment
from feature_detection.utils.image_io import open_artifact


POINT_RE = re.compile(r"^Point: \((-?\d+), (-?\d+)\)$")
LINE_RE = re.compile(r"^Line: \((-?\d+), (-?\d+)\) -> \((-?\d+), (-?\d+)\)$")


def format_corner(c: CornerPoint) -> str:
    return f"Point: ({c.x}, {c.y})"


def format_line(ln: LineSegment) -> str:
    return f"Line: ({ln.x1}, {ln.y1}) -> ({ln.x2}, {ln.y2})"


# -------------------------------------------------------------------------
#   Feature artifact
# -------------------------------------------------------------------------

def save_features(path: str, store: FeatureStore):
    """
    Writes corners first, then lines.
    """
    with open_artifact(path) as f:
        for c in store.corners:
            f.write(format_corner(c) + "\n")
        for ln in store.lines:
            f.write(format_line(ln) + "\n")

    print(f"[OK] Features saved to file: {path}")
    return path


def load_features(path: str) -> FeatureStore:
    """
    Parses a feature artifact back into a FeatureStore.
    Lines that match neither format raise ValueError.
    """
    store = FeatureStore()

    with open(path, "r", encoding="utf-8") as f:
        for lineno, raw in enumerate(f, 1):
            text = raw.rstrip("\n")
            if not text:
                continue

            m = POINT_RE.match(text)
            if m:
                store.corners.append(CornerPoint(*map(int, m.groups())))
                continue

            m = LINE_RE.match(text)
            if m:
                store.lines.append(LineSegment(*map(int, m.groups())))
                continue

            raise ValueError(f"{path}:{lineno}: unrecognized feature line {text!r}")

    return store


# -------------------------------------------------------------------------
#   Raw pixel dump
# -------------------------------------------------------------------------

def save_pixel_dump(path: str, pixels: np.ndarray):
    """
    Writes every BGR pixel row-major as "Pixel (y, x): R: r, G: g, B: b".
    """
    if pixels is None or pixels.size == 0:
        raise EmptyImageError("image is empty, nothing to dump")
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise InvalidParameterError("pixel dump needs a 3-channel BGR image")

    h, w = pixels.shape[:2]

    with open_artifact(path) as f:
        for y in range(h):
            row = pixels[y]
            for x in range(w):
                blue, green, red = (int(v) for v in row[x][:3])
                f.write(f"Pixel ({y}, {x}): R: {red}, G: {green}, B: {blue}\n")

    print(f"[OK] RGB values {path} successfully saved to file")
    return path
