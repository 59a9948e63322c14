"""
Preprocessing transforms applied before detection.

    • to_grayscale(buf)
    • rescale(buf, factor)
    • denoise(buf, kind)

Each takes an ImageBuffer and returns a new one; the input is never
modified, so a failed step leaves the caller's buffer as it was.
"""

from dataclasses import replace

import cv2

from feature_detection.config import get_active_params, FILTER_KINDS
from feature_detection.errors import (
    ConversionError,
    EmptyImageError,
    InvalidParameterError,
    InvalidScaleError,
)
from feature_detection.models.image_buffer import ImageBuffer


def to_grayscale(buf: ImageBuffer) -> ImageBuffer:
    if buf.is_empty:
        raise ConversionError("The image could not be converted to gray type.")

    if buf.pixels.ndim == 2:
        gray = buf.pixels.copy()
    else:
        gray = cv2.cvtColor(buf.pixels, cv2.COLOR_BGR2GRAY)

    print("[INFO] Image converted to grayscale")
    return replace(buf, grayscale=gray)


def rescale(buf: ImageBuffer, factor: float) -> ImageBuffer:
    """
    Resizes pixels and grayscale (when present) by the same factor.
    """
    factor = float(factor)
    if not factor > 0:
        raise InvalidScaleError("Scale value cannot be less than or equal to 0.")
    if buf.is_empty:
        raise EmptyImageError("image is empty, rescale cannot be applied!")

    h, w = buf.pixels.shape[:2]
    new_size = (int(round(w * factor)), int(round(h * factor)))
    if new_size[0] < 1 or new_size[1] < 1:
        raise InvalidScaleError(
            f"Scale value {factor} shrinks the {w}x{h} image to nothing"
        )

    pixels = cv2.resize(buf.pixels, new_size)
    gray = None
    if buf.has_grayscale:
        gray = cv2.resize(buf.grayscale, new_size)

    print(f"[INFO] Image resized by {factor}")
    return ImageBuffer(pixels=pixels, grayscale=gray)


def denoise(buf: ImageBuffer, kind: str) -> ImageBuffer:
    """
    Smooths the working raster (grayscale if present) with a fixed kernel:
        gaussian → 3x3, sigma derived from the kernel
        median   → aperture 11
    """
    if kind not in FILTER_KINDS:
        raise InvalidParameterError(
            f"Unknown filter '{kind}', expected one of {', '.join(FILTER_KINDS)}"
        )
    if buf.is_empty or buf.working.size == 0:
        raise EmptyImageError("image file is empty filter operation cannot be applied!")

    params = get_active_params()
    src = buf.working

    if kind == "gaussian":
        out = cv2.GaussianBlur(src, params["GAUSSIAN_KERNEL"], params["GAUSSIAN_SIGMA"])
    else:
        out = cv2.medianBlur(src, params["MEDIAN_APERTURE"])

    print(f"[INFO] Noise in the image was cleaned using the {kind} filter")

    if buf.has_grayscale:
        return replace(buf, grayscale=out)
    return replace(buf, pixels=out)
