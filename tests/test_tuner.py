import cv2
import numpy as np
import pytest

from feature_detection.config import TRACKBAR_NAME, WINDOW_EDGE_MAP, WINDOW_LINE_MAP
from feature_detection.detectors.line_detector import detect_lines
from feature_detection.models.features import FeatureStore
from feature_detection.models.image_buffer import ImageBuffer
from feature_detection.models.parameters import ThresholdState
from feature_detection.pipeline import DetectionPipeline
from feature_detection.tuner import InteractiveTuner
from feature_detection.utils.preprocessing import to_grayscale
from feature_detection.visualization.display import DISMISSED, HeadlessDisplay, THRESHOLD_CHANGED


@pytest.fixture
def weak_gray(weak_rect_pixels):
    return to_grayscale(ImageBuffer(pixels=weak_rect_pixels)).grayscale


def test_initial_render_uses_starting_threshold(weak_gray):
    display = HeadlessDisplay()
    store = FeatureStore()
    tuner = InteractiveTuner(weak_gray, store, display, ThresholdState(50))
    tuner.run()

    _, expected = detect_lines(weak_gray, ThresholdState(50))
    assert tuner.renders == 1
    assert store.lines == expected
    assert display.trackbars[(WINDOW_EDGE_MAP, TRACKBAR_NAME)]["maximum"] == 255
    assert display.window_names == [WINDOW_EDGE_MAP, WINDOW_LINE_MAP]
    assert display.closed


def test_threshold_change_regenerates_edges_and_lines(weak_gray):
    display = HeadlessDisplay(trackbar_script=[100])
    store = FeatureStore()
    tuner = InteractiveTuner(weak_gray, store, display, ThresholdState(50))
    tuner.run()

    _, before = detect_lines(weak_gray, ThresholdState(50))
    edges_after, after = detect_lines(weak_gray, ThresholdState(100))

    # the faint rectangle survives Canny(50, 150) but not Canny(100, 300)
    assert len(before) > 0
    assert after == []

    assert tuner.threshold.pair == (100, 300)
    assert tuner.renders == 2
    assert store.lines == after
    assert np.array_equal(tuner.edge_map, edges_after)
    assert np.array_equal(tuner.edge_map, cv2.Canny(weak_gray, 100, 300))
    assert tuner.caption == f"Lines Detected: {len(after)}"

    edge_frames = display.images_for(WINDOW_EDGE_MAP)
    assert len(edge_frames) == 2
    assert np.array_equal(edge_frames[-1], edges_after)


def test_queued_changes_are_coalesced(weak_gray):
    display = HeadlessDisplay()
    store = FeatureStore()
    tuner = InteractiveTuner(weak_gray, store, display, ThresholdState(50))
    tuner.events.put((THRESHOLD_CHANGED, 80))
    tuner.events.put((THRESHOLD_CHANGED, 120))
    tuner.run()

    _, expected = detect_lines(weak_gray, ThresholdState(120))
    assert tuner.renders == 2
    assert tuner.threshold.low == 120
    assert store.lines == expected


def test_dismiss_while_draining_applies_last_change(weak_gray):
    display = HeadlessDisplay(trackbar_script=[200])
    store = FeatureStore()
    tuner = InteractiveTuner(weak_gray, store, display, ThresholdState(50))
    tuner.events.put((THRESHOLD_CHANGED, 120))
    tuner.events.put((DISMISSED, None))
    tuner.run()

    _, expected = detect_lines(weak_gray, ThresholdState(120))
    assert tuner.renders == 2
    assert tuner.threshold.low == 120
    assert store.lines == expected
    # the session ended before the scripted slider move was consumed
    assert display.trackbars[(WINDOW_EDGE_MAP, TRACKBAR_NAME)]["value"] == 50
    assert display.closed


def test_trackbar_callback_only_enqueues(weak_gray):
    store = FeatureStore()
    tuner = InteractiveTuner(weak_gray, store, HeadlessDisplay(), ThresholdState(50))
    tuner.on_trackbar(200)

    assert tuner.events.get_nowait() == (THRESHOLD_CHANGED, 200)
    assert tuner.renders == 0
    assert store.lines == []


def test_pipeline_tune_updates_settings(weak_rect_pixels, tmp_path):
    display = HeadlessDisplay(trackbar_script=[100])
    p = DetectionPipeline(
        ImageBuffer(pixels=weak_rect_pixels), "Weak",
        detector="line", display=display, output_dir=str(tmp_path),
    )
    p.run()
    assert p.features.line_count > 0

    tuner = p.tune()
    assert p.low_threshold == 100
    assert p.features is tuner.store
    assert p.features.lines == []
