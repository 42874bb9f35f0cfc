"""RGB <-> HSL conversion."""

import math
from typing import Tuple


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 0-255 RGB channels to HSL components in [0, 1].

    Hue is the conventional angle divided by 360.
    """
    r, g, b = r / 255, g / 255, b / 255
    high = max(r, g, b)
    low = min(r, g, b)
    l = (high + low) / 2

    if high == low:
        return 0.0, 0.0, l

    d = high - low
    s = d / (2 - high - low) if l > 0.5 else d / (high + low)
    if high == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif high == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return h / 6, s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL components in [0, 1] to 0-255 RGB channels."""
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)
    return _round_half_up(r * 255), _round_half_up(g * 255), _round_half_up(b * 255)
