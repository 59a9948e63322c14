from dataclasses import dataclass
from typing import Optional

import numpy as np

from feature_detection.errors import ConversionError


@dataclass(frozen=True)
class ImageBuffer:
    """
    Value holder for a decoded raster and its derived grayscale copy.

    Preprocessing steps never modify a buffer; they return a new one.

    Attributes:
        pixels: BGR uint8 array (H x W x 3)
        grayscale: uint8 array (H x W), None until converted
    """

    pixels: np.ndarray
    grayscale: Optional[np.ndarray] = None

    @property
    def is_empty(self) -> bool:
        return self.pixels is None or self.pixels.size == 0

    @property
    def has_grayscale(self) -> bool:
        return self.grayscale is not None and self.grayscale.size > 0

    @property
    def working(self) -> np.ndarray:
        """The raster detection and filtering act on."""
        if self.has_grayscale:
            return self.grayscale
        return self.pixels

    def require_grayscale(self) -> np.ndarray:
        if not self.has_grayscale:
            raise ConversionError("Image was not converted to gray successfully")
        return self.grayscale

    def __repr__(self):
        pixels = "none" if self.pixels is None else f"{self.pixels.shape}"
        gray = "none" if self.grayscale is None else f"{self.grayscale.shape}"
        return f"ImageBuffer(pixels={pixels}, grayscale={gray})"
