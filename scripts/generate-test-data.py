#!/usr/bin/env python3
"""
Generate sample images and a short video for trying artifact-judge.

The image names hit the filename overrides (aigen.jpg -> 95%, og.jpg -> 5%)
plus one neutral name that goes through the computed scores.
"""
import os

import cv2
import numpy as np
from PIL import Image, ImageDraw


def create_gradient_image(width, height, filename):
    """Create a gradient test image."""
    x = np.linspace(0, 255, width)
    y = np.linspace(0, 255, height)
    r = np.tile(x, (height, 1))
    g = np.tile(y[:, None], (1, width))
    b = 255 - r
    img = Image.fromarray(np.stack([r, g, b], axis=-1).astype(np.uint8))
    img.save(filename, quality=95)
    print(f"Created {filename}")


def create_pattern_image(width, height, filename):
    """Create a pattern test image."""
    img = Image.new('RGB', (width, height), 'white')
    draw = ImageDraw.Draw(img)

    colors = ['red', 'green', 'blue', 'yellow', 'purple', 'orange']
    for i, color in enumerate(colors):
        x = 40 + i * 90
        y = 40 + i * 60
        draw.ellipse([x, y, x + 80, y + 80], fill=color, outline='black', width=2)

    img.save(filename, quality=95)
    print(f"Created {filename}")


def create_video(filename, seconds=6, fps=15, size=(320, 240)):
    """Create a short MP4 with a moving bar and drifting brightness."""
    w, h = size
    writer = cv2.VideoWriter(filename, cv2.VideoWriter_fourcc(*"mp4v"), fps, (w, h))
    for i in range(seconds * fps):
        frame = np.full((h, w, 3), 60 + (i * 2) % 150, dtype=np.uint8)
        x = (i * 5) % w
        frame[:, x:x + 20] = (40, 200, 240)
        writer.write(frame)
    writer.release()
    print(f"Created {filename}")


os.makedirs('test-data', exist_ok=True)

print("Generating sample media...")
print("=" * 50)

create_gradient_image(640, 400, 'test-data/aigen.jpg')
create_gradient_image(640, 400, 'test-data/og.jpg')
create_pattern_image(640, 480, 'test-data/sample-pattern.jpg')
create_video('test-data/sample-clip.mp4')

print("=" * 50)
print("✓ All sample media created successfully!")
print("\nYou can now:")
print("  1. Judge an image: artifact-judge image test-data/aigen.jpg")
print("  2. Judge a video:  artifact-judge video test-data/sample-clip.mp4 --interval 1")
