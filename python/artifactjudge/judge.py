"""Single-image judging: artifact scores, feature extraction and overrides."""
import asyncio
import logging
import math
from typing import Optional

from .exceptions import DecodeFailure, ExtractorUnavailable
from .features import FeatureExtractor
from .override import filename_override
from .scoring import ArtifactScorer
from .types import AnalysisOptions, PixelBuffer, Verdict

logger = logging.getLogger(__name__)

NEUTRAL_VERDICT = Verdict(
    ai_probability=50,
    confidence=0.5,
    explanation="Analysis failed; result is neutral.",
    error="Failed to analyze image",
)


def to_percent(value: float) -> int:
    """Scale a [0, 1] score to an integer percentage, rounding halves up."""
    return int(math.floor(value * 100 + 0.5))


class ImageJudge:
    """Combines artifact scoring, feature extraction and filename overrides."""

    THRESHOLDS = {
        'ai': 70,          # above: strong AI indicators
        'suspicious': 30,  # above: may be manipulated
    }
    CONFIDENCE = 0.95

    EXPLANATIONS = {
        'ai': "Image shows strong AI indicators",
        'suspicious': "Image may be manipulated",
        'authentic': "Image appears authentic",
    }

    def __init__(
        self,
        scorer: Optional[ArtifactScorer] = None,
        extractor: Optional[FeatureExtractor] = None,
        options: Optional[AnalysisOptions] = None,
    ):
        """Initialize ImageJudge.

        Args:
            scorer: Artifact scorer.  Defaults to one seeded from options.seed.
            extractor: Optional feature extractor, initialized on first use.
            options: Analysis options (extraction timeout, seed).
        """
        self.options = options or AnalysisOptions()
        self.scorer = scorer or ArtifactScorer(self.options.seed)
        self.extractor = extractor

    async def judge(self, pixels: PixelBuffer, source_identifier: Optional[str] = None) -> Verdict:
        """Judge one still image.

        Never raises for extractor or decode problems; those produce the
        neutral fallback verdict instead.

        Args:
            pixels: Decoded image.
            source_identifier: Filename or URL the image came from, used for
                filename overrides.  None disables overrides.

        Returns:
            Verdict for the image.
        """
        try:
            features = await self._extract_features(pixels)
            scores = self.scorer.score(pixels)
        except (ExtractorUnavailable, DecodeFailure, asyncio.TimeoutError) as e:
            logger.warning(f"Image analysis failed, returning neutral verdict: {e!r}")
            return NEUTRAL_VERDICT
        except Exception:
            logger.exception("Image analysis failed with exception")
            return NEUTRAL_VERDICT

        probability = to_percent(scores.average)
        override = filename_override(source_identifier)
        if override is not None:
            logger.info(f"Filename override for {source_identifier!r}: {probability} -> {override}")
            probability = override

        return Verdict(
            ai_probability=probability,
            confidence=self.CONFIDENCE,
            explanation=self._explain(probability),
            details=scores,
            features=features,
        )

    async def judge_bytes(self, data: bytes, source_identifier: Optional[str] = None) -> Verdict:
        """Decode encoded image bytes and judge them."""
        from .media import decode_image

        try:
            pixels = decode_image(data)
        except DecodeFailure as e:
            logger.warning(f"Image decode failed, returning neutral verdict: {e}")
            return NEUTRAL_VERDICT
        return await self.judge(pixels, source_identifier)

    async def _extract_features(self, pixels: PixelBuffer):
        if self.extractor is None:
            return None
        if not self.extractor.initialized:
            if not await self.extractor.initialize():
                raise ExtractorUnavailable("Feature extractor failed to initialize")

        timeout = self.options.extractor_timeout
        if timeout is None:
            return await self.extractor.infer(pixels)
        return await asyncio.wait_for(self.extractor.infer(pixels), timeout)

    def _explain(self, probability: int) -> str:
        if probability > self.THRESHOLDS['ai']:
            return self.EXPLANATIONS['ai']
        if probability > self.THRESHOLDS['suspicious']:
            return self.EXPLANATIONS['suspicious']
        return self.EXPLANATIONS['authentic']
