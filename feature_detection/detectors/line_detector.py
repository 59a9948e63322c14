import math
from typing import List

import cv2
import numpy as np

from feature_detection.config import get_active_params
from feature_detection.models.features import FeatureSet, LineSegment
from feature_detection.models.image_buffer import ImageBuffer
from feature_detection.models.parameters import ThresholdState


def compute_edge_map(image_gray: np.ndarray, threshold: ThresholdState) -> np.ndarray:
    """
    Binary Canny edge map for the (low, high) pair held by threshold.
    """
    low, high = threshold.pair
    return cv2.Canny(image_gray, low, high)


def detect_segments(edge_map: np.ndarray) -> List[LineSegment]:
    """
    Extracts straight segments from an edge map with the probabilistic
    Hough transform, using the fixed accumulator parameters from config.

    Parameters
    ----------
    edge_map : np.ndarray
        Binary edge image (uint8).

    Returns
    -------
    list[LineSegment]
        Segments in the order HoughLinesP emits them.
    """
    params = get_active_params()

    detected = cv2.HoughLinesP(
        edge_map,
        rho=params["HOUGH_RHO"],
        theta=math.radians(params["HOUGH_THETA_DEG"]),
        threshold=params["HOUGH_VOTES"],
        minLineLength=params["HOUGH_MIN_LENGTH"],
        maxLineGap=params["HOUGH_MAX_GAP"],
    )

    if detected is None:
        return []

    # Reshape output to Nx4
    detected = detected.reshape(-1, 4)

    return [LineSegment(*(int(v) for v in seg)) for seg in detected]


def detect_lines(image_gray: np.ndarray, threshold: ThresholdState):
    """
    Edge map + segments for one threshold pair.
    Returns (edge_map, segments).
    """
    edges = compute_edge_map(image_gray, threshold)
    return edges, detect_segments(edges)


def detect_line_features(image: ImageBuffer, settings) -> FeatureSet:
    gray = image.require_grayscale()
    _, segments = detect_lines(gray, settings.threshold)

    if not segments:
        print(f"[WARN] No lines detected with threshold {settings.threshold.pair}")
    else:
        print(f"[INFO] {len(segments)} lines detected and stored in features")

    return FeatureSet(lines=segments)
