"""
Feature Detection Package

Single-image corner and line detection, including:

- Image loading and preprocessing (grayscale, rescale, denoise)
- Harris corner detection
- Canny + probabilistic Hough line detection
- A shared detection pipeline with text and overlay reporting
- Interactive Canny threshold tuning
"""
__all__ = [
    "config",
    "errors",
    "main",
    "pipeline",
    "tuner",
    "detectors",
    "models",
    "utils",
    "visualization",
]
