from typing import List

import cv2
import numpy as np

from feature_detection.config import get_active_params
from feature_detection.models.features import CornerPoint, FeatureSet
from feature_detection.models.image_buffer import ImageBuffer


def corner_response(image_gray: np.ndarray) -> np.ndarray:
    """
    Harris response normalized to [0, 255] (float32, same shape as input).
    """
    params = get_active_params()

    dst = cv2.cornerHarris(
        np.float32(image_gray),
        blockSize=params["HARRIS_BLOCK_SIZE"],
        ksize=params["HARRIS_APERTURE"],
        k=params["HARRIS_K"],
    )
    return cv2.normalize(dst, None, 0, 255, cv2.NORM_MINMAX, dtype=cv2.CV_32F)


def detect_corners(image_gray: np.ndarray, quality_level: int) -> List[CornerPoint]:
    """
    Detects corners as pixels whose normalized Harris response, truncated
    to an integer, strictly exceeds quality_level.

    Parameters
    ----------
    image_gray : np.ndarray
        Grayscale input image.
    quality_level : int
        Acceptance threshold in [0, 100].

    Returns
    -------
    list[CornerPoint]
        Accepted pixels in row-major scan order.
    """
    response = corner_response(image_gray)

    # np.nonzero walks the array in C order, i.e. row by row
    ys, xs = np.nonzero(response.astype(np.int32) > quality_level)

    return [CornerPoint(int(x), int(y)) for y, x in zip(ys, xs)]


def detect_corner_features(image: ImageBuffer, settings) -> FeatureSet:
    gray = image.require_grayscale()
    corners = detect_corners(gray, settings.quality_level)

    if not corners:
        print(f"[WARN] No corners above quality level {settings.quality_level}")
    else:
        print(f"[INFO] {len(corners)} corners detected and stored in features")

    return FeatureSet(corners=corners)
