"""
Feature Detection Pipeline

One pipeline type runs either detector through the same workflow:

    LOADED → DISPLAYED_RAW → GRAYSCALED → [RESCALED] → [FILTERED] → DETECTED → REPORTED

RESCALED only happens when the scale factor is not 1.0, FILTERED only in
run_filtered(). Any exception aborts the run where it was raised.

Usage:
    pipeline = DetectionPipeline.from_path("plane.jpg", "Plane", scale=1.0, detector="line")
    pipeline.run_filtered("median")
    pipeline.tune()
"""

from enum import Enum

from feature_detection.config import (
    FILTER_KINDS,
    OUTPUT_FOLDER,
    WINDOW_FILTERED,
    WINDOW_GRAY,
    WINDOW_RAW,
    WINDOW_RESIZED,
)
from feature_detection.detectors.strategy import get_strategy
from feature_detection.errors import InvalidParameterError
from feature_detection.models.features import FeatureStore
from feature_detection.models.image_buffer import ImageBuffer
from feature_detection.models.parameters import DetectionSettings, ScaleFactor, ThresholdState
from feature_detection.tuner import InteractiveTuner
from feature_detection.utils.image_io import artifact_path, load_image
from feature_detection.utils.preprocessing import denoise, rescale, to_grayscale
from feature_detection.visualization.display import OpenCVDisplay
from feature_detection.visualization.draw_features import render_overlay
from feature_detection.visualization.save_outputs import save_features, save_pixel_dump


class PipelineState(Enum):
    LOADED = 1
    DISPLAYED_RAW = 2
    GRAYSCALED = 3
    RESCALED = 4
    FILTERED = 5
    DETECTED = 6
    REPORTED = 7


class DetectionPipeline:
    """Owns one image, one FeatureStore and one detection strategy."""

    def __init__(self, image: ImageBuffer, name: str, scale=1.0, detector="corner",
                 display=None, settings=None, output_dir=None):
        self._scale = ScaleFactor(scale.value if isinstance(scale, ScaleFactor) else scale)
        self.strategy = get_strategy(detector)
        self.settings = settings if settings is not None else DetectionSettings()
        self.name = name
        self.display = display if display is not None else OpenCVDisplay()
        self.output_dir = OUTPUT_FOLDER if output_dir is None else output_dir

        self.source = image
        self.image = image
        self.features = FeatureStore()

        self.history = [PipelineState.LOADED]
        self.artifact = None
        self.overlay = None

    @classmethod
    def from_path(cls, image_path: str, name: str, scale=1.0, **kwargs):
        """
        Validates the scale before touching the disk, then decodes the image.
        """
        scale = ScaleFactor(scale)
        return cls(load_image(image_path), name, scale=scale, **kwargs)

    # ------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------
    @property
    def scale_factor(self) -> float:
        return self._scale.value

    @scale_factor.setter
    def scale_factor(self, value):
        self._scale.value = value

    @property
    def quality_level(self) -> int:
        return self.settings.quality_level

    @quality_level.setter
    def quality_level(self, q):
        self.settings.quality_level = q

    @property
    def low_threshold(self) -> int:
        return self.settings.low_threshold

    @low_threshold.setter
    def low_threshold(self, v):
        self.settings.low_threshold = v

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    # ------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------
    def run(self) -> FeatureStore:
        """Default run: no noise filter."""
        return self._run(None)

    def run_filtered(self, kind: str = "gaussian") -> FeatureStore:
        """Run with exactly one noise filter ("gaussian" or "median")."""
        if kind not in FILTER_KINDS:
            raise InvalidParameterError(
                f"Unknown filter '{kind}', expected one of {', '.join(FILTER_KINDS)}"
            )
        return self._run(kind)

    def _enter(self, state: PipelineState):
        self.history.append(state)
        print(f"[INFO] {self.name}: {state.name.lower()}")

    def _run(self, filter_kind):
        self.image = self.source
        self.history = [PipelineState.LOADED]

        self.display.show(WINDOW_RAW, self.image.pixels)
        self._enter(PipelineState.DISPLAYED_RAW)

        self.image = to_grayscale(self.image)
        self.display.show(WINDOW_GRAY, self.image.grayscale)
        self._enter(PipelineState.GRAYSCALED)

        if not self._scale.is_identity:
            self.image = rescale(self.image, self._scale.value)
            self.display.show(WINDOW_RESIZED, self.image.grayscale)
            self._enter(PipelineState.RESCALED)

        if filter_kind is not None:
            self.image = denoise(self.image, filter_kind)
            self.display.show(WINDOW_FILTERED, self.image.grayscale)
            self._enter(PipelineState.FILTERED)

        self.detect()
        self._enter(PipelineState.DETECTED)

        self.report(filtered=filter_kind is not None)
        self._enter(PipelineState.REPORTED)

        print(f"[OK] Finished {self.name}")
        return self.features

    # ------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------
    def detect(self) -> FeatureStore:
        feature_set = self.strategy.detect(self.image, self.settings)
        self.features.apply(feature_set)
        return self.features

    def report(self, filtered: bool = False):
        """
        Saves the feature artifact, then shows the annotated overlay.
        """
        path = artifact_path(self.output_dir, self.name, self.strategy.artifact_name(filtered))
        self.artifact = save_features(path, self.features)

        self.overlay, caption = render_overlay(
            self.image.working, self.features, self.strategy.kind, self.strategy.count_label
        )
        print(f"[INFO] {caption}")
        self.display.show(self.strategy.window_name, self.overlay)
        return self.artifact

    def dump_pixels(self, path: str = None) -> str:
        """Writes the raw-pixel dump of the loaded image."""
        if path is None:
            path = artifact_path(self.output_dir, self.name, "RGB.txt")
        return save_pixel_dump(path, self.source.pixels)

    # ------------------------------------------------------------
    # Interactive tuning (line detection only)
    # ------------------------------------------------------------
    def create_tuner(self) -> InteractiveTuner:
        if not self.strategy.supports_tuning:
            raise InvalidParameterError(
                f"Interactive tuning is not available for the {self.strategy.kind} detector"
            )
        gray = self.image.require_grayscale()
        threshold = ThresholdState(self.settings.low_threshold, self.settings.threshold.maximum)
        return InteractiveTuner(gray, self.features, self.display, threshold)

    def tune(self) -> InteractiveTuner:
        tuner = self.create_tuner()
        tuner.run()
        self.settings.low_threshold = tuner.threshold.low
        return tuner

    def __repr__(self):
        return (f"DetectionPipeline(name={self.name!r}, detector={self.strategy.kind}, "
                f"state={self.state.name}, features={self.features})")
