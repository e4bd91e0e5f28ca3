"""
Frame-sampled video analysis.

Samples a video at a fixed interval, judges each decoded frame with an
ImageJudge, and aggregates the per-frame results into an overall verdict.

Sampling is strictly sequential: a frame is seeked, decoded and judged
before the next seek is issued, since the decoder has one cursor and one
scratch canvas.  A failed frame is replaced by a zero-probability
placeholder and the run continues.
"""
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .exceptions import FrameAnalysisFailure
from .judge import ImageJudge, to_percent
from .types import (
    AnalysisOptions,
    FrameResult,
    VideoAnalysis,
    VideoSummary,
    VideoVerdict,
)

logger = logging.getLogger(__name__)

FAILED_FRAME_EXPLANATION = "Frame analysis failed"


class CancellationToken:
    """Cooperative cancellation flag checked between sampled frames."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def sample_points(duration: float, interval: float) -> List[float]:
    """Time points 0, interval, 2*interval, ... covering the duration.

    At least one point is returned, even for zero-length or very short
    videos.  A NaN or infinite duration counts as zero.
    """
    if not interval > 0 or not math.isfinite(interval):
        raise ValueError(f"Sample interval must be positive, got {interval}")
    if not math.isfinite(duration):
        duration = 0.0
    count = max(1, math.floor(max(duration, 0.0) / interval))
    return [i * interval for i in range(count)]


def summarize(frames: Sequence[FrameResult]) -> VideoSummary:
    """Aggregate frame results into counts, percentages and a verdict.

    Whole-video thresholds (50% / 15% of frames above 70) are stricter than
    the per-frame thresholds.
    """
    total = len(frames)
    ai_frames = [f for f in frames if f.ai_probability > VideoAggregator.THRESHOLDS['frame_ai']]
    suspicious_frames = [
        f for f in frames
        if VideoAggregator.THRESHOLDS['frame_suspicious'] < f.ai_probability <= VideoAggregator.THRESHOLDS['frame_ai']
    ]

    if total == 0:
        return VideoSummary(
            total_frames=0,
            ai_frames=0,
            suspicious_frames=0,
            ai_percentage=0,
            suspicious_percentage=0,
            overall_ratio=0.0,
            verdict=VideoVerdict.LIKELY_AUTHENTIC,
            highlighted=None,
        )

    overall_ratio = len(ai_frames) * 100 / total
    if overall_ratio > VideoAggregator.THRESHOLDS['video_ai']:
        verdict = VideoVerdict.AI_GENERATED
    elif overall_ratio > VideoAggregator.THRESHOLDS['video_suspicious']:
        verdict = VideoVerdict.POSSIBLY_MANIPULATED
    else:
        verdict = VideoVerdict.LIKELY_AUTHENTIC

    if ai_frames:
        highlighted = ai_frames[0]
    elif suspicious_frames:
        highlighted = suspicious_frames[0]
    else:
        highlighted = frames[0]

    return VideoSummary(
        total_frames=total,
        ai_frames=len(ai_frames),
        suspicious_frames=len(suspicious_frames),
        ai_percentage=to_percent(len(ai_frames) / total),
        suspicious_percentage=to_percent(len(suspicious_frames) / total),
        overall_ratio=overall_ratio,
        verdict=verdict,
        highlighted=highlighted,
    )


def find_frame(frames: Sequence[FrameResult], time_point: float) -> Optional[FrameResult]:
    """Return the frame result sampled at time_point, if any."""
    for frame in frames:
        if frame.time_point == time_point:
            return frame
    return None


class VideoAggregator:
    """Frame-sampling video analysis built on an ImageJudge."""

    THRESHOLDS = {
        'frame_ai': 70,          # frame probability above this counts as AI
        'frame_suspicious': 30,  # frame probability above this counts as suspicious
        'video_ai': 50,          # percent of AI frames for an AI-Generated video
        'video_suspicious': 15,  # percent of AI frames for a Possibly Manipulated video
    }

    def __init__(self, judge: Optional[ImageJudge] = None, options: Optional[AnalysisOptions] = None):
        """Initialize VideoAggregator.

        Args:
            judge: Judge used for every sampled frame.
            options: Analysis options (sample interval, canvas size).
        """
        self.options = options or (judge.options if judge is not None else AnalysisOptions())
        self.judge = judge or ImageJudge(options=self.options)

    async def analyze(
        self,
        video,
        sample_interval: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> VideoAnalysis:
        """Sample and judge a video.

        Args:
            video: Object with a ``duration`` in seconds and an async
                ``read_frame(time_point)`` returning a PixelBuffer, such as
                media.VideoSource.  Its ``release()`` is called when the run
                ends or is cancelled.
            sample_interval: Seconds between samples (default from options).
            cancel_token: Checked before each sample.  When set, the frames
                analyzed so far are returned with ``cancelled=True``.

        Returns:
            VideoAnalysis with per-frame results in sample order.
        """
        interval = sample_interval if sample_interval is not None else self.options.sample_interval
        duration = float(video.duration or 0.0)
        if not math.isfinite(duration):
            duration = 0.0

        frames: List[FrameResult] = []
        cancelled = False
        try:
            points = sample_points(duration, interval)
            logger.info(f"Analyzing video: duration={duration:.2f}s, {len(points)} sample point(s)")
            for time_point in points:
                if cancel_token is not None and cancel_token.cancelled:
                    logger.info(f"Video analysis cancelled after {len(frames)} frame(s)")
                    cancelled = True
                    break
                frames.append(await self._analyze_frame(video, time_point))
        finally:
            release = getattr(video, 'release', None)
            if release is not None:
                release()

        summary = summarize(frames)
        logger.info(
            f"Video verdict: {summary.verdict.value} "
            f"({summary.ai_frames}/{summary.total_frames} AI frames)"
        )
        return VideoAnalysis(frames=frames, summary=summary, duration=duration, cancelled=cancelled)

    async def analyze_file(
        self,
        source: Union[str, Path, bytes],
        sample_interval: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> VideoAnalysis:
        """Open a video file (or bytes) with OpenCV and analyze it.

        Raises:
            DecodeFailure: The video cannot be opened at all.
        """
        from .media import VideoSource

        video = VideoSource(source, default_canvas_size=self.options.default_canvas_size)
        return await self.analyze(video, sample_interval, cancel_token)

    async def _judge_frame(self, video, time_point: float):
        try:
            pixels = await video.read_frame(time_point)
            # Filename overrides do not apply to frames
            return await self.judge.judge(pixels, None)
        except Exception as e:
            raise FrameAnalysisFailure(str(e) or type(e).__name__, time_point) from e

    async def _analyze_frame(self, video, time_point: float) -> FrameResult:
        try:
            verdict = await self._judge_frame(video, time_point)
        except FrameAnalysisFailure as e:
            logger.warning(f"Error analyzing video frame at {e.time_point:.2f}s: {e}")
            return FrameResult(time_point=time_point, ai_probability=0,
                               explanation=FAILED_FRAME_EXPLANATION)

        logger.debug(f"Frame {time_point:.2f}s: {verdict.ai_probability}%")
        return FrameResult(
            time_point=time_point,
            ai_probability=verdict.ai_probability,
            explanation=verdict.explanation,
        )
