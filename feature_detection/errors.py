"""
Exception types for the feature detection pipeline.

Every component raises one of these immediately; nothing retries.
Only main.py catches them.
"""


class DetectionError(Exception):
    """Base class for every failure raised by the pipeline."""


class LoadError(DetectionError):
    """The image path does not resolve to a decodable raster."""


class ConversionError(DetectionError):
    """Grayscale conversion was requested on an empty image, or grayscale is missing."""


class EmptyImageError(DetectionError):
    """A filter was applied to an image with no pixels."""


class InvalidScaleError(DetectionError, ValueError):
    """Scale factor is not strictly positive."""


class InvalidParameterError(DetectionError, ValueError):
    """Quality level, threshold, filter kind or detector kind out of range."""


class FileWriteError(DetectionError):
    """An output artifact could not be opened for writing."""
