"""Tests for artifact-judge type definitions."""

import pytest

from artifactjudge.types import (
    AnalysisOptions,
    FrameResult,
    Verdict,
    VideoAnalysis,
    VideoVerdict,
)
from artifactjudge.video import summarize


class TestVideoVerdict:
    def test_values(self):
        assert VideoVerdict.AI_GENERATED.value == "AI-Generated"
        assert VideoVerdict.POSSIBLY_MANIPULATED.value == "Possibly Manipulated"
        assert VideoVerdict.LIKELY_AUTHENTIC.value == "Likely Authentic"

    def test_from_value(self):
        assert VideoVerdict("AI-Generated") is VideoVerdict.AI_GENERATED

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            VideoVerdict("Unknown")

    @pytest.mark.parametrize("probability,expected", [
        (100, VideoVerdict.AI_GENERATED),
        (71, VideoVerdict.AI_GENERATED),
        (70, VideoVerdict.POSSIBLY_MANIPULATED),
        (31, VideoVerdict.POSSIBLY_MANIPULATED),
        (30, VideoVerdict.LIKELY_AUTHENTIC),
        (0, VideoVerdict.LIKELY_AUTHENTIC),
    ])
    def test_for_probability(self, probability, expected):
        assert VideoVerdict.for_probability(probability) is expected


class TestVerdict:
    def test_defaults(self):
        v = Verdict(ai_probability=40, confidence=0.95, explanation="Image may be manipulated")
        assert v.details is None
        assert v.error is None
        assert v.label is VideoVerdict.POSSIBLY_MANIPULATED

    def test_immutable(self):
        v = Verdict(ai_probability=40, confidence=0.95, explanation="x")
        with pytest.raises(AttributeError):
            v.ai_probability = 90


class TestFrameResult:
    def test_label(self):
        assert FrameResult(2.0, 85, "").label is VideoVerdict.AI_GENERATED


class TestVideoAnalysis:
    def test_zero_duration_timeline(self):
        frames = [FrameResult(0.0, 10, "")]
        analysis = VideoAnalysis(frames=frames, summary=summarize(frames), duration=0.0)
        assert list(analysis.timeline()) == [(0.0, frames[0])]


class TestAnalysisOptions:
    def test_defaults(self):
        opts = AnalysisOptions()
        assert opts.sample_interval == 1.0
        assert opts.extractor_timeout == 10.0
        assert opts.default_canvas_size == 300
        assert opts.seed is None
