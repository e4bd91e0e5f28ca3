"""Tests for ImageJudge."""

import asyncio

import numpy as np
import pytest

from artifactjudge import (
    ArtifactScorer,
    FeatureExtractor,
    ImageJudge,
    PixelBuffer,
    ThumbnailFeatureExtractor,
)
from artifactjudge.judge import NEUTRAL_VERDICT, to_percent
from artifactjudge.types import AnalysisOptions, VideoVerdict


class _FailingExtractor(FeatureExtractor):
    async def _load(self):
        raise OSError("model weights not found")


class _SlowExtractor(FeatureExtractor):
    async def _infer(self, pixels):
        await asyncio.sleep(5)
        return np.zeros(4)


class _BrokenExtractor(FeatureExtractor):
    async def _infer(self, pixels):
        raise RuntimeError("inference crashed")


def _judge(judge, pixels, name=None):
    return asyncio.run(judge.judge(pixels, name))


class TestOverrides:
    def test_aigen_filename_forces_95(self, gray_pixels, banded_pixels, noise_pixels):
        judge = ImageJudge(scorer=ArtifactScorer(1))
        for pixels in (gray_pixels, banded_pixels, noise_pixels):
            verdict = _judge(judge, pixels, "sample-aigen.jpg")
            assert verdict.ai_probability == 95
            assert verdict.explanation == "Image shows strong AI indicators"

    def test_original_filename_forces_5(self, gray_pixels, banded_pixels, noise_pixels):
        judge = ImageJudge(scorer=ArtifactScorer(1))
        for pixels in (gray_pixels, banded_pixels, noise_pixels):
            verdict = _judge(judge, pixels, "original-1.png")
            assert verdict.ai_probability == 5
            assert verdict.explanation == "Image appears authentic"

    def test_override_keeps_computed_details(self, gray_pixels, pinned_judge):
        verdict = _judge(pinned_judge, gray_pixels, "fake.png")
        assert verdict.details is not None
        assert verdict.details.color_distribution == pytest.approx(0.1875)

    def test_no_identifier_means_no_override(self, gray_pixels, pinned_judge):
        verdict = _judge(pinned_judge, gray_pixels, None)
        assert verdict.ai_probability == to_percent(verdict.details.average)


class TestComputedProbability:
    def test_probability_is_rounded_average(self, noise_pixels):
        for seed in range(10):
            judge = ImageJudge(scorer=ArtifactScorer(seed))
            verdict = _judge(judge, noise_pixels, "photo.jpg")
            assert verdict.ai_probability == to_percent(verdict.details.average)
            assert 0 <= verdict.ai_probability <= 100

    def test_pinned_gray_is_authentic(self, gray_pixels, pinned_judge):
        verdict = _judge(pinned_judge, gray_pixels, "photo.jpg")
        # (0.1875 + 0.364586 + 0.25 + 0.35) / 4 = 0.288
        assert verdict.ai_probability == 29
        assert verdict.explanation == "Image appears authentic"
        assert verdict.confidence == 0.95
        assert verdict.label is VideoVerdict.LIKELY_AUTHENTIC

    def test_seventy_is_not_strong(self, banded_pixels, make_fixed_rng):
        # (1.0 + 0.614586 + 0.5 + 0.7) / 4 = 0.7036 -> 70
        judge = ImageJudge(scorer=ArtifactScorer(make_fixed_rng(1.0)))
        verdict = _judge(judge, banded_pixels, "photo.jpg")
        assert verdict.ai_probability == 70
        assert verdict.explanation == "Image may be manipulated"

    def test_idempotent_for_same_random_source(self, noise_pixels):
        first = _judge(ImageJudge(scorer=ArtifactScorer(11)), noise_pixels, "photo.jpg")
        second = _judge(ImageJudge(scorer=ArtifactScorer(11)), noise_pixels, "photo.jpg")
        assert first.ai_probability == second.ai_probability
        assert first.explanation == second.explanation

    def test_idempotent_with_pinned_source(self, noise_pixels, pinned_judge):
        first = _judge(pinned_judge, noise_pixels)
        second = _judge(pinned_judge, noise_pixels)
        assert first == second

    def test_seed_from_options(self, noise_pixels):
        options = AnalysisOptions(seed=3)
        first = _judge(ImageJudge(options=options), noise_pixels)
        second = _judge(ImageJudge(options=options), noise_pixels)
        assert first.details == second.details


class TestHalfUpRounding:
    @pytest.mark.parametrize("value,expected", [
        (0.0, 0), (0.004, 0), (0.125, 13), (0.625, 63), (0.999, 100), (1.0, 100),
    ])
    def test_to_percent(self, value, expected):
        assert to_percent(value) == expected


class TestFeatureExtraction:
    def test_lazy_initialization(self, noise_pixels, fixed_rng):
        extractor = ThumbnailFeatureExtractor(size=8)
        judge = ImageJudge(scorer=ArtifactScorer(fixed_rng), extractor=extractor)
        assert extractor.initialized is False

        verdict = _judge(judge, noise_pixels)
        assert extractor.initialized is True
        assert verdict.features.shape == (64,)
        assert verdict.features.min() >= 0.0
        assert verdict.features.max() <= 1.0

    def test_failed_initialization_is_neutral(self, noise_pixels, fixed_rng):
        judge = ImageJudge(scorer=ArtifactScorer(fixed_rng), extractor=_FailingExtractor())
        verdict = _judge(judge, noise_pixels, "sample-aigen.jpg")
        assert verdict == NEUTRAL_VERDICT
        assert verdict.ai_probability == 50
        assert verdict.confidence == 0.5
        assert verdict.explanation == "Analysis failed; result is neutral."

    def test_timeout_is_neutral(self, noise_pixels, fixed_rng):
        judge = ImageJudge(
            scorer=ArtifactScorer(fixed_rng),
            extractor=_SlowExtractor(),
            options=AnalysisOptions(extractor_timeout=0.05),
        )
        verdict = _judge(judge, noise_pixels)
        assert verdict.ai_probability == 50
        assert verdict.error == "Failed to analyze image"

    def test_unexpected_error_is_neutral(self, noise_pixels, fixed_rng):
        judge = ImageJudge(scorer=ArtifactScorer(fixed_rng), extractor=_BrokenExtractor())
        verdict = _judge(judge, noise_pixels)
        assert verdict.ai_probability == 50
        assert verdict.details is None


class TestJudgeBytes:
    def test_png_bytes(self, sample_png_bytes, fixed_rng):
        judge = ImageJudge(scorer=ArtifactScorer(fixed_rng))
        verdict = asyncio.run(judge.judge_bytes(sample_png_bytes, "original.png"))
        assert verdict.ai_probability == 5
        assert verdict.details is not None

    def test_invalid_bytes_are_neutral(self, fixed_rng):
        judge = ImageJudge(scorer=ArtifactScorer(fixed_rng))
        verdict = asyncio.run(judge.judge_bytes(b"\x00" * 64, "aigen.jpg"))
        assert verdict == NEUTRAL_VERDICT
