"""
Configuration file for the feature detection pipeline.

Detector constants are fixed; only the output folder can be overridden
from the environment. Modules should read values using the
get_active_params() function.
"""

import os


# ---------------------------------------------------------------
# I/O PATHS
# ---------------------------------------------------------------

OUTPUT_FOLDER = os.environ.get("FEATURE_OUTPUT_DIR", ".")

ARTIFACT_NAMES = {
    ("corner", False): "Corners.txt",
    ("corner", True): "CornersFiltered.txt",
    ("line", False): "Lines.txt",
    ("line", True): "LinesFiltered.txt",
}


# ---------------------------------------------------------------
# PREPROCESSING
# ---------------------------------------------------------------

DEFAULT_SCALE = 1.0

GAUSSIAN_KERNEL = (3, 3)
GAUSSIAN_SIGMA = 0                 # derived from kernel size
MEDIAN_APERTURE = 11

FILTER_KINDS = ("gaussian", "median")


# ===============================================================
# CORNER DETECTION (Harris)
# ===============================================================

CORNER = {
    "HARRIS_BLOCK_SIZE": 2,
    "HARRIS_APERTURE": 3,
    "HARRIS_K": 0.04,
    "QUALITY_LEVEL": 50,
    "MAX_QUALITY_LEVEL": 100,
}


# ===============================================================
# LINE DETECTION (Canny + probabilistic Hough)
# ===============================================================

LINE = {
    "LOW_THRESHOLD": 50,
    "MAX_THRESHOLD": 255,
    "HIGH_THRESHOLD_RATIO": 3,      # high = ratio * low
    "HOUGH_RHO": 1,
    "HOUGH_THETA_DEG": 1,
    "HOUGH_VOTES": 50,
    "HOUGH_MIN_LENGTH": 50,
    "HOUGH_MAX_GAP": 10,
}


# ---------------------------------------------------------------
# WINDOW NAMES
# ---------------------------------------------------------------

WINDOW_RAW = "Raw Image"
WINDOW_GRAY = "GrayScale"
WINDOW_RESIZED = "Resized"
WINDOW_FILTERED = "Filtered"
WINDOW_CORNERS = "Detected Corners"
WINDOW_LINES = "Detected Lines"
WINDOW_EDGE_MAP = "Edge Map"
WINDOW_LINE_MAP = "Line Map"
TRACKBAR_NAME = "Min Threshold:"


# ---------------------------------------------------------------
# VISUALIZATION
# ---------------------------------------------------------------

COLOR_CORNER = (0, 255, 0)       # green
COLOR_LINE = (255, 0, 0)         # blue
COLOR_LABEL = (255, 255, 255)    # white

CORNER_RADIUS = 5
DRAW_THICKNESS = 2


# ---------------------------------------------------------------
# PARAMETER ACCESS LOGIC
# ---------------------------------------------------------------

def get_active_params():
    """
    Returns the merged parameter dictionary used by the detectors,
    so they only import one dictionary.
    """

    base = {
        "GAUSSIAN_KERNEL": GAUSSIAN_KERNEL,
        "GAUSSIAN_SIGMA": GAUSSIAN_SIGMA,
        "MEDIAN_APERTURE": MEDIAN_APERTURE,
    }
    base.update(CORNER)
    base.update(LINE)

    return base
