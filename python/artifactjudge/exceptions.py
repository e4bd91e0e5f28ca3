"""Exception types raised inside the detection pipeline."""
from typing import Optional


class DetectionError(Exception):
    """Base class for all detection pipeline errors."""


class ExtractorUnavailable(DetectionError):
    """The feature extractor failed to load or was used before initialize()."""


class DecodeFailure(DetectionError):
    """An image or video frame could not be rasterized."""


class FrameAnalysisFailure(DetectionError):
    """Analysis of a single sampled video frame failed."""

    def __init__(self, message: str, time_point: Optional[float] = None):
        super().__init__(message)
        self.time_point = time_point
