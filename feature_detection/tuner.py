"""
Interactive Canny threshold tuning for line detection.

The trackbar callback only enqueues a (THRESHOLD_CHANGED, value) event.
run() is a single-threaded loop that blocks on display.wait_event(),
and for every change recomputes the edge map and the Hough segments,
swaps them into the FeatureStore and redraws "Edge Map" / "Line Map".
The loop ends on a DISMISSED event.
"""

import queue

import numpy as np

from feature_detection.config import (
    TRACKBAR_NAME,
    WINDOW_EDGE_MAP,
    WINDOW_LINE_MAP,
)
from feature_detection.detectors.line_detector import detect_lines
from feature_detection.models.features import FeatureStore
from feature_detection.models.parameters import ThresholdState
from feature_detection.visualization.display import DISMISSED, THRESHOLD_CHANGED
from feature_detection.visualization.draw_features import render_overlay


class InteractiveTuner:

    def __init__(self, image: np.ndarray, store: FeatureStore, display, threshold: ThresholdState):
        """
        Args:
            image: working grayscale raster (already rescaled / filtered)
            store: FeatureStore whose line sequence is kept in sync
            display: OpenCVDisplay or HeadlessDisplay
            threshold: starting threshold state
        """
        self.image = image
        self.store = store
        self.display = display
        self.threshold = threshold

        self.events = queue.Queue()
        self.edge_map = None
        self.caption = None
        self.renders = 0

    # ------------------------------------------------------------
    # Trackbar callback
    # ------------------------------------------------------------
    def on_trackbar(self, value):
        self.events.put((THRESHOLD_CHANGED, int(value)))

    # ------------------------------------------------------------
    # Recompute + redraw
    # ------------------------------------------------------------
    def apply_threshold(self, low: int):
        threshold = self.threshold.with_low(low)
        edges, segments = detect_lines(self.image, threshold)

        self.store.replace_lines(segments)
        self.edge_map = edges
        self.threshold = threshold

        self._render()
        print(f"[INFO] Edge map updated with threshold: {threshold.low} ({self.caption})")

    def _render(self):
        self.display.refresh(WINDOW_EDGE_MAP, self.edge_map)

        line_map, caption = render_overlay(self.image, self.store, "line", "Lines Detected")
        self.display.refresh(WINDOW_LINE_MAP, line_map)

        self.caption = caption
        self.renders += 1

    def _latest_change(self, value):
        """
        Coalesces changes queued while the last redraw was running.
        Returns (latest_value, dismissed).
        """
        while True:
            try:
                kind, next_value = self.events.get_nowait()
            except queue.Empty:
                return value, False
            if kind == DISMISSED:
                return value, True
            value = next_value

    # ------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------
    def run(self):
        self.display.create_trackbar(
            TRACKBAR_NAME,
            WINDOW_EDGE_MAP,
            self.threshold.low,
            self.threshold.maximum,
            self.on_trackbar,
        )
        self.apply_threshold(self.threshold.low)

        try:
            while True:
                kind, value = self.display.wait_event(self.events)
                if kind == DISMISSED:
                    break

                value, dismissed = self._latest_change(value)
                self.apply_threshold(value)
                if dismissed:
                    break
        finally:
            self.display.close_all()

        print(f"[OK] Tuning dismissed at threshold {self.threshold.low}, {self.store.line_count} lines")
        return self.store

    def __repr__(self):
        return f"InteractiveTuner(threshold={self.threshold}, renders={self.renders})"
