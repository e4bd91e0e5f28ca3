"""
Artifact scoring heuristics for still images and decoded video frames.

Each heuristic returns a score from 0-1 where higher values indicate
characteristics treated as AI-generation artifacts.

NOTE: only the color distribution score is a pure function of the pixels.
The edge pattern score has a random base term, and the facial anomaly and
texture scores are random placeholders with no detection logic behind them.
The random source is injected so callers and tests can pin it.
"""
import logging
from typing import Union

import numpy as np

from .types import ArtifactScores, PixelBuffer

logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


class ArtifactScorer:
    """Computes the four artifact sub-scores for a pixel buffer."""

    GOLDEN_RATIO = 1.618
    BRIGHTNESS_BINS = 8

    # Upper bounds of the uniform random terms
    RANDOM_RANGES = {
        'edge_base': 0.5,
        'facial_anomalies': 0.5,
        'texture_inconsistencies': 0.7,
    }

    def __init__(self, rng: RandomSource = None):
        """Initialize ArtifactScorer.

        Args:
            rng: Random source for the non-deterministic sub-scores.  An int
                seeds a new numpy Generator, None draws fresh OS entropy.
                Any object with a numpy-style ``uniform(low, high)`` method
                is also accepted.
        """
        if rng is None or isinstance(rng, (int, np.integer)):
            rng = np.random.default_rng(rng)
        self._rng = rng

    def score(self, pixels: PixelBuffer) -> ArtifactScores:
        """Score one pixel buffer.

        Args:
            pixels: Decoded RGBA image.  Not modified.

        Returns:
            Fresh ArtifactScores for this call.
        """
        scores = ArtifactScores(
            color_distribution=self.color_distribution(pixels),
            edge_patterns=self.edge_patterns(pixels, pixels.width, pixels.height),
            facial_anomalies=self.facial_anomalies(),
            texture_inconsistencies=self.texture_inconsistencies(),
        )
        logger.debug(f"Artifact scores for {pixels!r}: {scores} (average {scores.average:.3f})")
        return scores

    def color_distribution(self, pixels: PixelBuffer) -> float:
        """Score how evenly brightness spreads over 8 equal-width bins.

        Near-uniform brightness histograms score high.
        """
        brightness = pixels.rgb.astype(np.float64).sum(axis=2) / 3
        bin_index = np.minimum((brightness // 32).astype(np.int64), self.BRIGHTNESS_BINS - 1)
        counts = np.bincount(bin_index.ravel(), minlength=self.BRIGHTNESS_BINS)

        total = pixels.total_pixels
        expected = total / self.BRIGHTNESS_BINS
        deviation = float(np.abs(counts - expected).sum())

        normalized = float(np.clip(1 - deviation / (2 * total), 0.0, 1.0))
        return float(np.clip(normalized * 1.5, 0.0, 1.0))

    def edge_patterns(self, pixels: PixelBuffer, width: int, height: int) -> float:
        """Random base term plus distance of the aspect ratio from the golden ratio.

        Not reproducible across calls unless the random source is pinned.
        """
        base = float(self._rng.uniform(0.0, self.RANDOM_RANGES['edge_base']))
        aspect_ratio = width / height
        aspect_weight = abs(aspect_ratio - self.GOLDEN_RATIO) / self.GOLDEN_RATIO
        return float(np.clip(base + aspect_weight * 0.3, 0.0, 1.0))

    def facial_anomalies(self) -> float:
        # Placeholder: no face detection
        return float(self._rng.uniform(0.0, self.RANDOM_RANGES['facial_anomalies']))

    def texture_inconsistencies(self) -> float:
        # Placeholder: no texture analysis
        return float(self._rng.uniform(0.0, self.RANDOM_RANGES['texture_inconsistencies']))
