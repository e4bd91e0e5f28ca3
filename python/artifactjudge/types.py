"""Type definitions for artifact-judge."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .exceptions import DecodeFailure


class VideoVerdict(Enum):
    """Classification labels shared by frames and whole videos."""
    AI_GENERATED = "AI-Generated"
    POSSIBLY_MANIPULATED = "Possibly Manipulated"
    LIKELY_AUTHENTIC = "Likely Authentic"

    @classmethod
    def for_probability(cls, ai_probability: int) -> "VideoVerdict":
        """Label a single 0-100 probability with the per-frame thresholds."""
        if ai_probability > 70:
            return cls.AI_GENERATED
        if ai_probability > 30:
            return cls.POSSIBLY_MANIPULATED
        return cls.LIKELY_AUTHENTIC


class PixelBuffer:
    """Decoded image as a read-only (height, width, 4) RGBA uint8 grid.

    The constructor takes ownership of the array and marks it read-only;
    use from_array to build a buffer from an array the caller keeps.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim != 3 or data.shape[2] != 4 or data.dtype != np.uint8:
            raise DecodeFailure(f"Expected uint8 RGBA array, got {data.dtype} {data.shape}")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise DecodeFailure("Pixel buffer is empty")
        data = np.ascontiguousarray(data)
        data.setflags(write=False)
        self._data = data

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a gray, RGB or RGBA array."""
        array = np.asarray(array)
        if array.size == 0:
            raise DecodeFailure("Pixel buffer is empty")
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)

        if array.ndim == 2:
            array = np.stack([array] * 3, axis=-1)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise DecodeFailure(f"Unsupported pixel array shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=-1)
        else:
            array = array.copy()
        return cls(array)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> np.ndarray:
        return self._data[..., :3]

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class ArtifactScores:
    """Four heuristic sub-scores, each in [0, 1]."""
    color_distribution: float
    edge_patterns: float
    facial_anomalies: float
    texture_inconsistencies: float

    def __post_init__(self):
        for name in ("color_distribution", "edge_patterns",
                     "facial_anomalies", "texture_inconsistencies"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @property
    def average(self) -> float:
        return (self.color_distribution + self.edge_patterns
                + self.facial_anomalies + self.texture_inconsistencies) / 4


@dataclass(frozen=True)
class Verdict:
    """Classification record for one still image or video frame."""
    ai_probability: int
    confidence: float
    explanation: str
    details: Optional[ArtifactScores] = None
    error: Optional[str] = None
    features: Optional[np.ndarray] = field(default=None, repr=False, compare=False)

    @property
    def label(self) -> VideoVerdict:
        return VideoVerdict.for_probability(self.ai_probability)


@dataclass(frozen=True)
class FrameResult:
    """Verdict summary for one sampled video frame."""
    time_point: float
    ai_probability: int
    explanation: str

    @property
    def label(self) -> VideoVerdict:
        return VideoVerdict.for_probability(self.ai_probability)


@dataclass(frozen=True)
class VideoSummary:
    """Aggregate over a completed sequence of frame results."""
    total_frames: int
    ai_frames: int
    suspicious_frames: int
    ai_percentage: int
    suspicious_percentage: int
    overall_ratio: float
    verdict: VideoVerdict
    highlighted: Optional[FrameResult] = None


@dataclass
class VideoAnalysis:
    """Frame results and summary produced by one video analysis session."""
    frames: List[FrameResult]
    summary: VideoSummary
    duration: float
    cancelled: bool = False

    def timeline(self) -> Iterator[Tuple[float, FrameResult]]:
        """Yield (position percent, frame) pairs for timeline markers."""
        for frame in self.frames:
            position = frame.time_point / self.duration * 100 if self.duration > 0 else 0.0
            yield position, frame


@dataclass
class AnalysisOptions:
    """Options for image and video analysis."""
    sample_interval: float = 1.0
    extractor_timeout: Optional[float] = 10.0
    default_canvas_size: int = 300
    seed: Optional[int] = None
