"""
Media decoding for still images and video frames.

Still images are decoded with Pillow.  Video is read with OpenCV; raw bytes
go through a temporary file because OpenCV's VideoCapture doesn't support
reading from memory buffers directly.
"""
import asyncio
import io
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeFailure
from .types import PixelBuffer

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (JPEG, PNG, ...) to an RGBA pixel buffer."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = np.asarray(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeFailure(f"Failed to decode image data: {e}") from e
    return PixelBuffer.from_array(rgba)


def load_image(path: Union[str, Path]) -> PixelBuffer:
    """Read and decode an image file."""
    return decode_image(Path(path).read_bytes())


class VideoSource:
    """Seekable video decoder producing RGBA frames.

    Frames must be requested one at a time: the capture keeps a single
    decode cursor and a single scratch buffer.
    """

    def __init__(self, source: Union[str, Path, bytes], default_canvas_size: int = 300):
        """Open a video file or raw video bytes.

        Args:
            source: Path to a video file, or the file's bytes.
            default_canvas_size: Frame size used when the container reports
                zero width or height.

        Raises:
            DecodeFailure: The video cannot be opened.
        """
        self._tmp_path: Optional[str] = None
        if isinstance(source, bytes):
            tmp = tempfile.NamedTemporaryFile(suffix='.mp4', delete=False)
            tmp.write(source)
            tmp.close()
            self._tmp_path = tmp.name
            path = tmp.name
        else:
            path = str(source)

        self._cap = cv2.VideoCapture(path)
        if not self._cap.isOpened():
            self.release()
            label = "<bytes>" if isinstance(source, bytes) else source
            raise DecodeFailure(f"Failed to open video: {label}")

        fps = self._cap.get(cv2.CAP_PROP_FPS)
        self.fps = fps if math.isfinite(fps) and fps > 0 else 30.0
        frame_count = self._cap.get(cv2.CAP_PROP_FRAME_COUNT)
        frame_count = int(frame_count) if math.isfinite(frame_count) else 0
        self.duration = frame_count / self.fps if frame_count > 0 else 0.0
        width = self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)
        height = self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)
        self.width = int(width) if math.isfinite(width) and width > 0 else default_canvas_size
        self.height = int(height) if math.isfinite(height) and height > 0 else default_canvas_size
        self._canvas = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        logger.debug(f"Opened video: {self.width}x{self.height}, {self.fps:.1f} fps, {self.duration:.2f}s")

    async def read_frame(self, time_point: float) -> PixelBuffer:
        """Seek to time_point seconds and decode the frame there."""
        return await asyncio.to_thread(self._read_frame, time_point)

    def _read_frame(self, time_point: float) -> PixelBuffer:
        if self._cap is None:
            raise DecodeFailure("Video source has been released")
        self._cap.set(cv2.CAP_PROP_POS_MSEC, time_point * 1000.0)
        ret, frame = self._cap.read()
        if not ret or frame is None:
            raise DecodeFailure(f"No frame decoded at {time_point:.2f}s")

        if frame.shape[1] != self.width or frame.shape[0] != self.height:
            frame = cv2.resize(frame, (self.width, self.height))
        cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA, dst=self._canvas)
        # PixelBuffer takes ownership of a copy; the canvas is reused
        return PixelBuffer(self._canvas.copy())

    def release(self) -> None:
        if getattr(self, '_cap', None) is not None:
            self._cap.release()
            self._cap = None
        if self._tmp_path is not None:
            try:
                os.unlink(self._tmp_path)
            except OSError:
                pass
            self._tmp_path = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
