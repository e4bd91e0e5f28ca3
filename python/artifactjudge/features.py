"""Feature extractor boundary.

The judge treats the extractor as an opaque oracle: its output is attached
to the verdict but does not enter the artifact score.
"""
import asyncio
import logging

import cv2
import numpy as np

from .exceptions import ExtractorUnavailable
from .types import PixelBuffer

logger = logging.getLogger(__name__)


class FeatureExtractor:
    """Base class for asynchronous feature extractors."""

    def __init__(self):
        self.initialized = False

    async def initialize(self) -> bool:
        """Load the extractor.  Returns False on failure instead of raising."""
        try:
            await self._load()
        except Exception as e:
            logger.error(f"Failed to initialize feature extractor: {e}")
            self.initialized = False
            return False
        self.initialized = True
        logger.info(f"{type(self).__name__} initialized successfully")
        return True

    async def infer(self, pixels: PixelBuffer) -> np.ndarray:
        """Return the feature vector for a pixel buffer."""
        if not self.initialized:
            raise ExtractorUnavailable(f"{type(self).__name__} used before initialize()")
        return await self._infer(pixels)

    async def _load(self) -> None:
        pass

    async def _infer(self, pixels: PixelBuffer) -> np.ndarray:
        raise NotImplementedError


class ThumbnailFeatureExtractor(FeatureExtractor):
    """Downsampled grayscale thumbnail, flattened and scaled to [0, 1]."""

    def __init__(self, size: int = 16):
        super().__init__()
        self.size = size

    async def _infer(self, pixels: PixelBuffer) -> np.ndarray:
        return await asyncio.to_thread(self._thumbnail, pixels)

    def _thumbnail(self, pixels: PixelBuffer) -> np.ndarray:
        gray = cv2.cvtColor(pixels.data.copy(), cv2.COLOR_RGBA2GRAY)
        thumb = cv2.resize(gray, (self.size, self.size), interpolation=cv2.INTER_AREA)
        return thumb.astype(np.float32).ravel() / 255.0
