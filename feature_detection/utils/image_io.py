"""
Image I/O utilities for the feature detection pipeline.

This module provides:
    • load_image(path)
    • ensure_output_dir(path)
    • artifact_path(output_dir, name, artifact)
    • open_artifact(path)

Handles all filesystem interaction in a consistent, testable way.
"""

import os

import cv2

from feature_detection.errors import FileWriteError, LoadError
from feature_detection.models.image_buffer import ImageBuffer


# -------------------------------------------------------------------------
#  IMAGE LOADING
# -------------------------------------------------------------------------

def load_image(path: str) -> ImageBuffer:
    """
    Decodes one image as 3-channel BGR.

    Raises LoadError when the file is missing or not a decodable raster.
    """
    if not path or not os.path.isfile(path):
        raise LoadError(f"Image could not be loaded : {path}")

    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise LoadError(f"Image could not be loaded : {path}")

    print(f"[INFO] Loaded {path} ({img.shape[1]}x{img.shape[0]})")
    return ImageBuffer(pixels=img)


# -------------------------------------------------------------------------
#  OUTPUT DIRECTORY HANDLING
# -------------------------------------------------------------------------

def ensure_output_dir(path: str):
    """
    Ensures that an output directory exists.
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def artifact_path(output_dir: str, name: str, artifact: str) -> str:
    """
    Example:
        artifact_path('out', 'Plane', 'Corners.txt') → 'out/Plane_Corners.txt'
    """
    filename = f"{name}_{artifact}" if name else artifact
    return os.path.join(output_dir, filename)


def open_artifact(path: str):
    """
    Opens a text artifact for writing, creating its directory first.
    """
    try:
        ensure_output_dir(os.path.dirname(path))
        return open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(f"Could not open file: {path}") from exc
