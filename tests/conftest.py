import cv2
import numpy as np
import pytest

from feature_detection.models.image_buffer import ImageBuffer
from feature_detection.visualization.display import HeadlessDisplay


def make_rectangles(intensity=255, size=(200, 240)):
    """Black canvas with one filled rectangle, BGR uint8."""
    h, w = size
    img = np.zeros((h, w, 3), dtype=np.uint8)
    cv2.rectangle(img, (60, 50), (180, 150), (intensity, intensity, intensity), thickness=-1)
    return img


@pytest.fixture
def rect_pixels():
    return make_rectangles()


@pytest.fixture
def rect_buffer(rect_pixels):
    return ImageBuffer(pixels=rect_pixels)


@pytest.fixture
def weak_rect_pixels():
    # Edge gradient 4 * 45 = 180 and corner gradient 6 * 45 = 270 (L1 Sobel):
    # strong for Canny(50, 150), below the high threshold of Canny(100, 300).
    return make_rectangles(intensity=45)


@pytest.fixture
def rect_file(tmp_path, rect_pixels):
    path = tmp_path / "rect.png"
    cv2.imwrite(str(path), rect_pixels)
    return str(path)


@pytest.fixture
def display():
    return HeadlessDisplay()
