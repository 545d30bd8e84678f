"""
Post-processing for celebration frames.

Glow bloom, soft highlight compression and a hue helper for the
pink-to-red emblem palette.
"""

import colorsys

import numpy as np
from PIL import Image, ImageFilter


def hue_to_rgba(hue_deg: float, alpha: float, saturation: float = 0.75,
                value: float = 0.95) -> tuple[int, int, int, int]:
    """HSV (hue in degrees, wraps) to an 8-bit RGBA tuple."""
    r, g, b = colorsys.hsv_to_rgb((hue_deg % 360.0) / 360.0, saturation, value)
    a = int(round(np.clip(alpha, 0.0, 1.0) * 255))
    return (int(r * 255), int(g * 255), int(b * 255), a)


def tone_map_soft(
    frame: np.ndarray,
    shoulder: float = 0.78,
) -> np.ndarray:
    """
    Soft-knee tone mapping to compress highlights without hard clipping.

    Pixels below ``shoulder`` (as a fraction of 255) pass through unchanged;
    brighter ones approach 255 along a Reinhard-style curve.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        shoulder: Brightness fraction (0-1) where compression begins.

    Returns:
        (H, W, 3) uint8 RGB array with compressed highlights.
    """
    threshold = shoulder * 255.0
    headroom = 255.0 - threshold

    f = frame.astype(np.float32)
    above = np.maximum(f - threshold, 0.0)
    compressed = threshold + above * headroom / (above + headroom)

    result = np.where(f > threshold, compressed, f)
    return result.astype(np.uint8)


def add_glow(
    frame: np.ndarray,
    intensity: float = 0.3,
    radius: int = 15,
) -> np.ndarray:
    """
    Screen-blend a gaussian-blurred copy for bloom/glow.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        intensity: Glow opacity (0-1).
        radius: Blur radius in pixels.

    Returns:
        (H, W, 3) uint8 RGB array with glow applied.
    """
    if intensity <= 0:
        return frame

    img = Image.fromarray(frame)
    blurred = img.filter(ImageFilter.GaussianBlur(radius=radius))
    b = np.asarray(blurred, dtype=np.float32) / 255.0 * intensity
    a = frame.astype(np.float32) / 255.0

    # Screen blend: 1 - (1-a)(1-b)
    screen = 1.0 - (1.0 - a) * (1.0 - b)
    return (screen * 255).astype(np.uint8)
