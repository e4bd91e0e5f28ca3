"""
artifact-judge - Python Implementation

Heuristic artifact scoring for still images and sampled video frames.
The scores are not a validated AI-generation classifier.
"""

from .types import (
    PixelBuffer,
    ArtifactScores,
    Verdict,
    FrameResult,
    VideoSummary,
    VideoAnalysis,
    VideoVerdict,
    AnalysisOptions,
)
from .exceptions import (
    DetectionError,
    ExtractorUnavailable,
    DecodeFailure,
    FrameAnalysisFailure,
)
from .scoring import ArtifactScorer
from .override import filename_override
from .features import FeatureExtractor, ThumbnailFeatureExtractor
from .judge import ImageJudge
from .video import VideoAggregator, CancellationToken, sample_points, summarize
from .media import VideoSource, decode_image, load_image

__version__ = "0.0.1"
__all__ = [
    "PixelBuffer",
    "ArtifactScores",
    "Verdict",
    "FrameResult",
    "VideoSummary",
    "VideoAnalysis",
    "VideoVerdict",
    "AnalysisOptions",
    "DetectionError",
    "ExtractorUnavailable",
    "DecodeFailure",
    "FrameAnalysisFailure",
    "ArtifactScorer",
    "filename_override",
    "FeatureExtractor",
    "ThumbnailFeatureExtractor",
    "ImageJudge",
    "VideoAggregator",
    "CancellationToken",
    "sample_points",
    "summarize",
    "VideoSource",
    "decode_image",
    "load_image",
]
