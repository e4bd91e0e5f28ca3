"""Command-line interface for artifact-judge."""
import argparse
import asyncio
import json
import logging
import math
import sys
from pathlib import Path

from .exceptions import DecodeFailure
from .features import ThumbnailFeatureExtractor
from .judge import ImageJudge
from .report import (
    analysis_to_dict,
    banner_text,
    binary_label,
    frame_detail,
    summary_lines,
    verdict_to_dict,
)
from .types import AnalysisOptions
from .video import VideoAggregator


def _positive_float(value: str) -> float:
    """argparse type for strictly positive, finite seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds, got {value!r}")
    return number


def _build_judge(args) -> ImageJudge:
    options = AnalysisOptions(
        sample_interval=getattr(args, "interval", 1.0),
        seed=getattr(args, "seed", None),
    )
    extractor = None if getattr(args, "no_extractor", False) else ThumbnailFeatureExtractor()
    return ImageJudge(extractor=extractor, options=options)


def _require_file(path_arg: str) -> Path:
    path = Path(path_arg)
    if not path.exists():
        print(f"Error: File not found: {path_arg}", file=sys.stderr)
        sys.exit(1)
    return path


def image_command(args):
    """Judge a still image."""
    path = _require_file(args.file)
    judge = _build_judge(args)

    verdict = asyncio.run(judge.judge_bytes(path.read_bytes(), path.name))

    if args.json:
        print(json.dumps(verdict_to_dict(verdict), indent=2))
    else:
        print(f"\n{'='*60}")
        print("  Image Analysis Report")
        print(f"{'='*60}\n")
        print(f"File: {path.resolve()}")
        print(banner_text(verdict))
        print(f"Verdict: {binary_label(verdict)}")
        print(f"Explanation: {verdict.explanation}")
        print(f"Confidence: {verdict.confidence:.0%}")

        if verdict.details is not None:
            d = verdict.details
            print("\nArtifact Scores:")
            print(f"  • Color distribution: {d.color_distribution:.2f}")
            print(f"  • Edge patterns: {d.edge_patterns:.2f}")
            print(f"  • Facial anomalies: {d.facial_anomalies:.2f}")
            print(f"  • Texture inconsistencies: {d.texture_inconsistencies:.2f}")
            print(f"  • Average: {d.average:.2f}")

        print(f"\n{'='*60}\n")

    sys.exit(0)


def video_command(args):
    """Sample and judge a video."""
    path = _require_file(args.file)
    aggregator = VideoAggregator(judge=_build_judge(args))

    try:
        analysis = asyncio.run(aggregator.analyze_file(path))
    except (DecodeFailure, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(analysis_to_dict(analysis), indent=2))
    else:
        print(f"\n{'='*60}")
        print("  Video Analysis Report")
        print(f"{'='*60}\n")
        print(f"File: {path.resolve()}")
        for line in summary_lines(analysis.summary):
            print(line)

        print("\nTimeline:")
        for _, frame in analysis.timeline():
            print(f"  {frame_detail(frame)}")

        if analysis.summary.highlighted is not None:
            print(f"\nHighlighted frame: {frame_detail(analysis.summary.highlighted)}")

        print(f"\n{'='*60}\n")

    sys.exit(0)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="artifact-judge",
        description="Heuristic AI-artifact scoring for images and videos"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Image command
    image_parser = subparsers.add_parser("image", help="Analyze a still image")
    image_parser.add_argument("file", help="Image file to analyze")
    image_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    image_parser.add_argument("-s", "--seed", type=int, help="Seed for the random sub-scores")
    image_parser.add_argument("--no-extractor", action="store_true", help="Skip feature extraction")
    image_parser.set_defaults(func=image_command)

    # Video command
    video_parser = subparsers.add_parser("video", help="Analyze a video frame by frame")
    video_parser.add_argument("file", help="Video file to analyze")
    video_parser.add_argument("-i", "--interval", type=_positive_float, default=1.0,
                              help="Seconds between sampled frames (default: 1)")
    video_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    video_parser.add_argument("-s", "--seed", type=int, help="Seed for the random sub-scores")
    video_parser.add_argument("--no-extractor", action="store_true", help="Skip feature extraction")
    video_parser.set_defaults(func=video_command)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
