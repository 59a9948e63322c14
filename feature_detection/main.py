"""
Command-line entry point.

Usage:
    feature-detect <image_path> <name> [--scale 1.0] [--detector corner|line]
                   [--filter gaussian|median] [--output-dir DIR]
                   [--quality-level Q] [--low-threshold T]
                   [--dump-pixels PATH] [--no-tuner] [--headless]

Any failure is reported on stderr and the process exits with status 1.
"""

import argparse
import sys

from feature_detection.config import (
    CORNER,
    DEFAULT_SCALE,
    FILTER_KINDS,
    LINE,
    OUTPUT_FOLDER,
)
from feature_detection.detectors.strategy import STRATEGIES
from feature_detection.models.parameters import DetectionSettings
from feature_detection.pipeline import DetectionPipeline
from feature_detection.visualization.display import HeadlessDisplay, OpenCVDisplay


def build_parser():
    parser = argparse.ArgumentParser(description="Corner / line feature detection on a single image")
    parser.add_argument("image_path", type=str, help="Path of the image to process")
    parser.add_argument("name", type=str, help="Display name, also used to prefix output files")
    parser.add_argument("--scale", "-s", type=float, default=DEFAULT_SCALE,
                        help="Resize factor applied after grayscale conversion (default: 1.0)")
    parser.add_argument("--detector", "-d", choices=sorted(STRATEGIES), default="corner",
                        help="Detector to run (default: corner)")
    parser.add_argument("--filter", "-f", choices=FILTER_KINDS, default=None,
                        help="Apply a noise filter before detection")
    parser.add_argument("--output-dir", "-o", type=str, default=OUTPUT_FOLDER,
                        help="Directory for the text artifacts")
    parser.add_argument("--quality-level", type=int, default=CORNER["QUALITY_LEVEL"],
                        help="Corner acceptance threshold in [0, 100]")
    parser.add_argument("--low-threshold", type=int, default=LINE["LOW_THRESHOLD"],
                        help="Initial Canny low threshold in [0, 255]")
    parser.add_argument("--dump-pixels", type=str, default=None, metavar="PATH",
                        help="Also write the raw pixel dump to PATH")
    parser.add_argument("--no-tuner", action="store_true",
                        help="Skip the interactive threshold window after line detection")
    parser.add_argument("--headless", action="store_true",
                        help="Do not open any window")
    return parser


def run(args):
    settings = DetectionSettings(
        quality_level=args.quality_level,
        low_threshold=args.low_threshold,
    )
    display = HeadlessDisplay() if args.headless else OpenCVDisplay()

    pipeline = DetectionPipeline.from_path(
        args.image_path,
        args.name,
        scale=args.scale,
        detector=args.detector,
        display=display,
        settings=settings,
        output_dir=args.output_dir,
    )

    if args.dump_pixels:
        pipeline.dump_pixels(args.dump_pixels)

    if args.filter:
        pipeline.run_filtered(args.filter)
    else:
        pipeline.run()

    if pipeline.strategy.supports_tuning and not args.no_tuner:
        pipeline.tune()

    return pipeline


def main(argv=None):
    """
    Main entry point:
      - Parses the fixed invocation
      - Runs one pipeline
      - Reports any failure and returns a non-zero status
    """
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except Exception as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
