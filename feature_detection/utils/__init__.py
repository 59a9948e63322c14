"""
Utility Functions

Provides image I/O and the preprocessing transforms applied before detection.
"""

from .image_io import load_image, ensure_output_dir, artifact_path, open_artifact
from .preprocessing import to_grayscale, rescale, denoise

__all__ = [
    "load_image",
    "ensure_output_dir",
    "artifact_path",
    "open_artifact",
    "to_grayscale",
    "rescale",
    "denoise",
]
