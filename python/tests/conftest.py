"""Shared pytest fixtures for artifact-judge tests."""

import io
import os
import tempfile

import cv2
import numpy as np
import pytest

from artifactjudge import ArtifactScorer, ImageJudge, PixelBuffer


# ---------------------------------------------------------------------------
# Random source fixtures
# ---------------------------------------------------------------------------


class FixedRandom:
    """Random source whose uniform(low, high) always returns the same fraction."""

    def __init__(self, fraction: float = 0.5):
        self.fraction = fraction
        self.calls = 0

    def uniform(self, low, high):
        self.calls += 1
        return low + self.fraction * (high - low)


@pytest.fixture()
def fixed_rng():
    """Random source pinned to the middle of every range."""
    return FixedRandom(0.5)


@pytest.fixture()
def make_fixed_rng():
    """Factory for random sources pinned to a given fraction."""
    return FixedRandom


@pytest.fixture()
def pinned_judge(fixed_rng):
    """ImageJudge with the random sub-scores pinned and no extractor."""
    return ImageJudge(scorer=ArtifactScorer(fixed_rng))


# ---------------------------------------------------------------------------
# Pixel fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def gray_pixels():
    """64x64 flat mid-gray image: every pixel in brightness bin 4."""
    return PixelBuffer.from_array(np.full((64, 64, 3), 128, dtype=np.uint8))


@pytest.fixture()
def banded_pixels():
    """64x64 image with 8 equal bands, one per brightness bin."""
    arr = np.zeros((64, 64, 3), dtype=np.uint8)
    for band in range(8):
        arr[band * 8:(band + 1) * 8, :, :] = band * 32
    return PixelBuffer.from_array(arr)


@pytest.fixture()
def noise_pixels():
    rng = np.random.default_rng(1234)
    return PixelBuffer.from_array(rng.integers(0, 256, (48, 80, 3), dtype=np.uint8))


@pytest.fixture()
def sample_png_bytes():
    """Minimal synthetic PNG buffer."""
    from PIL import Image

    img = Image.new("RGB", (64, 64), color=(100, 150, 200))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Video fixtures
# ---------------------------------------------------------------------------


class FakeVideo:
    """In-memory video source with scripted per-frame failures."""

    def __init__(self, duration, fail_at=(), on_read=None, size=(32, 32)):
        self.duration = duration
        self.fail_at = set(fail_at)
        self.on_read = on_read
        self.size = size
        self.reads = []
        self.released = False

    async def read_frame(self, time_point):
        self.reads.append(time_point)
        if self.on_read is not None:
            self.on_read(time_point)
        if time_point in self.fail_at:
            raise RuntimeError(f"seek failed at {time_point}")
        h, w = self.size
        value = int(time_point * 40) % 256
        return PixelBuffer.from_array(np.full((h, w, 3), value, dtype=np.uint8))

    def release(self):
        self.released = True


@pytest.fixture()
def fake_video():
    """Factory for in-memory video sources."""
    return FakeVideo


def make_mp4(frames: list, fps: float = 10.0) -> bytes:
    """Write a list of BGR uint8 frames to an MP4 byte buffer via temp file."""
    h, w = frames[0].shape[:2]
    tmp = tempfile.NamedTemporaryFile(suffix=".mp4", delete=False)
    try:
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(tmp.name, fourcc, fps, (w, h))
        for frame in frames:
            writer.write(frame)
        writer.release()
        tmp.close()
        with open(tmp.name, "rb") as f:
            return f.read()
    finally:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass


@pytest.fixture()
def sample_mp4_bytes():
    """Three seconds of 10 fps video with slowly changing brightness."""
    frames = []
    for i in range(30):
        frame = np.full((48, 64, 3), 40 + i * 6, dtype=np.uint8)
        frame[:, : 8 + i, 2] = 220
        frames.append(frame)
    return make_mp4(frames, fps=10.0)
