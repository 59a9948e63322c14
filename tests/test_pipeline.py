import os

import numpy as np
import pytest

from feature_detection.config import (
    WINDOW_CORNERS,
    WINDOW_FILTERED,
    WINDOW_GRAY,
    WINDOW_LINES,
    WINDOW_RAW,
    WINDOW_RESIZED,
)
from feature_detection.detectors.corner_detector import detect_corners
from feature_detection.errors import (
    ConversionError,
    InvalidParameterError,
    InvalidScaleError,
    LoadError,
)
from feature_detection.models.features import CornerPoint
from feature_detection.models.image_buffer import ImageBuffer
from feature_detection.pipeline import DetectionPipeline, PipelineState
from feature_detection.visualization.save_outputs import load_features


def make_pipeline(buf, display, tmp_path, **kwargs):
    return DetectionPipeline(buf, "Plane", display=display, output_dir=str(tmp_path), **kwargs)


def test_default_run_states_and_windows(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path)
    store = p.run()

    assert p.history == [
        PipelineState.LOADED,
        PipelineState.DISPLAYED_RAW,
        PipelineState.GRAYSCALED,
        PipelineState.DETECTED,
        PipelineState.REPORTED,
    ]
    assert p.state is PipelineState.REPORTED
    assert display.window_names == [WINDOW_RAW, WINDOW_GRAY, WINDOW_CORNERS]
    assert store is p.features


def test_unit_scale_skips_rescale(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, scale=1.0)
    p.run()
    assert WINDOW_RESIZED not in display.window_names
    assert p.image.grayscale.shape == rect_buffer.pixels.shape[:2]


def test_double_scale_doubles_image(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, scale=2.0)
    p.run()

    h, w = rect_buffer.pixels.shape[:2]
    assert WINDOW_RESIZED in display.window_names
    assert PipelineState.RESCALED in p.history
    assert p.image.grayscale.shape == (2 * h, 2 * w)
    assert p.image.pixels.shape[:2] == (2 * h, 2 * w)


def test_filtered_run_adds_filter_state(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, scale=2.0, detector="line")
    p.run_filtered("median")

    assert p.history == [
        PipelineState.LOADED,
        PipelineState.DISPLAYED_RAW,
        PipelineState.GRAYSCALED,
        PipelineState.RESCALED,
        PipelineState.FILTERED,
        PipelineState.DETECTED,
        PipelineState.REPORTED,
    ]
    assert display.window_names == [
        WINDOW_RAW, WINDOW_GRAY, WINDOW_RESIZED, WINDOW_FILTERED, WINDOW_LINES,
    ]
    assert p.artifact == os.path.join(str(tmp_path), "Plane_LinesFiltered.txt")


def test_unknown_filter_rejected_before_running(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path)
    with pytest.raises(InvalidParameterError):
        p.run_filtered("sobel")
    assert display.shown == []


def test_report_writes_detected_corners(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path)
    p.quality_level = 30
    p.run()

    assert p.artifact == os.path.join(str(tmp_path), "Plane_Corners.txt")
    loaded = load_features(p.artifact)
    assert loaded.corners == p.features.corners
    assert loaded.lines == []
    assert p.features.corners == detect_corners(p.image.grayscale, 30)


def test_repeated_runs_replace_features(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path)
    p.quality_level = 10
    first = list(p.run().corners)
    p.quality_level = 90
    second = list(p.run().corners)

    assert len(second) <= len(first)
    assert p.features.corners == second


def test_overlay_has_bgr_channels(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, detector="line")
    p.run()
    assert p.overlay.ndim == 3
    assert display.images_for(WINDOW_LINES)[0].shape == p.overlay.shape


def test_empty_image_fails_and_keeps_store(display, tmp_path):
    empty = ImageBuffer(pixels=np.zeros((0, 0, 3), dtype=np.uint8))
    p = make_pipeline(empty, display, tmp_path)
    p.features.add_corner((3, 4))

    with pytest.raises(ConversionError):
        p.run()

    assert p.features.corners == [CornerPoint(3, 4)]
    assert p.state is PipelineState.DISPLAYED_RAW
    assert p.artifact is None


@pytest.mark.parametrize("scale", [0, -1.5])
def test_invalid_scale_rejected_at_construction(rect_buffer, display, tmp_path, scale):
    with pytest.raises(InvalidScaleError):
        make_pipeline(rect_buffer, display, tmp_path, scale=scale)


def test_collapsing_scale_aborts_run(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, scale=0.001)
    with pytest.raises(InvalidScaleError):
        p.run()
    assert p.state is PipelineState.GRAYSCALED
    assert p.artifact is None


def test_invalid_scale_setter_keeps_value(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, scale=2.0)
    with pytest.raises(InvalidScaleError):
        p.scale_factor = -3
    assert p.scale_factor == 2.0


def test_from_path_checks_scale_before_loading(tmp_path):
    # the missing file would raise LoadError if it were read first
    with pytest.raises(InvalidScaleError):
        DetectionPipeline.from_path(str(tmp_path / "missing.png"), "x", scale=0)
    with pytest.raises(LoadError):
        DetectionPipeline.from_path(str(tmp_path / "missing.png"), "x", scale=1.0)


def test_dump_pixels_uses_loaded_image(rect_file, display, tmp_path):
    p = DetectionPipeline.from_path(rect_file, "Plane", display=display, output_dir=str(tmp_path))
    path = p.dump_pixels()

    with open(path, encoding="utf-8") as f:
        count = sum(1 for _ in f)
    h, w = p.source.pixels.shape[:2]
    assert count == h * w


def test_corner_pipeline_has_no_tuner(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path)
    p.run()
    with pytest.raises(InvalidParameterError):
        p.create_tuner()


def test_tuner_needs_grayscale(rect_buffer, display, tmp_path):
    p = make_pipeline(rect_buffer, display, tmp_path, detector="line")
    with pytest.raises(ConversionError):
        p.create_tuner()
