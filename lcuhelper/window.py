"""Geometry and parameter rules used when adjusting the client window."""

from __future__ import annotations

import math
import os
import struct
from collections.abc import Mapping

BASE_WIDTH = 1280
BASE_HEIGHT = 720
TARGET_RATIO = 0.5625

MIN_OPACITY = 30
MAX_OPACITY = 100

DEFAULT_CONTINUE_X_RATIO = 0.5
DEFAULT_CONTINUE_Y_RATIO = 0.935

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_i32(value: float) -> int:
    """Truncate a float to a 32-bit integer, saturating; NaN becomes 0."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _half(value: int) -> int:
    """Integer halving that rounds toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


def need_resize(left: int, top: int, right: int, bottom: int) -> bool:
    """True if the rectangle's height/width ratio is not exactly 9:16."""
    width = right - left
    height = bottom - top
    if width <= 0:
        return False
    return height / width != TARGET_RATIO


def target_window_geometry(
    zoom_scale: float, screen_w: int, screen_h: int
) -> tuple[int, int, int, int] | None:
    """``(x, y, width, height)`` of the window centred on screen at the given zoom.

    None when the zoom yields an empty size.
    """
    target_w = _to_i32(BASE_WIDTH * zoom_scale)
    target_h = _to_i32(BASE_HEIGHT * zoom_scale)
    if target_w <= 0 or target_h <= 0:
        return None
    return (
        _half(screen_w - target_w),
        _half(screen_h - target_h),
        target_w,
        target_h,
    )


def opacity_alpha(percent: int) -> int:
    """Layered-window alpha (0–255) for an opacity percentage clamped to 30–100."""
    clamped = min(max(percent, MIN_OPACITY), MAX_OPACITY)
    fraction = _f32(clamped / 100.0)
    return int(_f32(fraction * 255.0))


def _clamp_ratio(ratio: float) -> float:
    if math.isnan(ratio):
        return ratio
    return min(max(ratio, 0.0), 1.0)


def client_click_point(
    width: int, height: int, x_ratio: float, y_ratio: float
) -> tuple[int, int] | None:
    """Client-area pixel for proportional coordinates; None for an empty client area."""
    if width <= 0 or height <= 0:
        return None
    x = _to_i32(width * _clamp_ratio(x_ratio))
    y = _to_i32(height * _clamp_ratio(y_ratio))
    return x, y


def _parse_ratio(text: str | None, default: float) -> float:
    if text is None or text != text.strip() or "_" in text:
        return default
    try:
        return float(text)
    except ValueError:
        return default


def postgame_continue_ratios(environ: Mapping[str, str] | None = None) -> tuple[float, float]:
    """Position of the post-game "continue" button as client-area ratios.

    Read from ``POSTGAME_CONTINUE_X_RATIO`` / ``POSTGAME_CONTINUE_Y_RATIO``;
    missing or unparsable values fall back to the defaults.
    """
    env = os.environ if environ is None else environ
    return (
        _parse_ratio(env.get("POSTGAME_CONTINUE_X_RATIO"), DEFAULT_CONTINUE_X_RATIO),
        _parse_ratio(env.get("POSTGAME_CONTINUE_Y_RATIO"), DEFAULT_CONTINUE_Y_RATIO),
    )