"""Overlay geometry for the bench slots and colour choices for the info panel."""

from __future__ import annotations

from dataclasses import dataclass

TEMPLATE_W = 1920.0
TEMPLATE_H = 1080.0

SLOT_START_X = 528.0
SLOT_START_Y = 16.0
SLOT_SIZE = 74.0
SLOT_GAP = 14.2
SLOTS_PADDING_H = 3.0
SLOTS_PADDING_V = 3.0
BENCH_SLOT_COUNT = 10

BENCH_L = SLOT_START_X - SLOTS_PADDING_H
BENCH_T = SLOT_START_Y - SLOTS_PADDING_V
BENCH_W = SLOT_SIZE * BENCH_SLOT_COUNT + SLOT_GAP * (BENCH_SLOT_COUNT - 1.0) + SLOTS_PADDING_H * 2.0
BENCH_H = SLOT_SIZE + SLOTS_PADDING_V * 2.0
BENCH_R = BENCH_L + BENCH_W
BENCH_B = BENCH_T + BENCH_H


def rgb(r: int, g: int, b: int) -> int:
    """Pack a colour into a 0x00BBGGRR integer."""
    return (r & 0xFF) | ((g & 0xFF) << 8) | ((b & 0xFF) << 16)


TITLE_COLOR = rgb(0, 255, 0)
OUTLINE_COLOR = rgb(10, 10, 10)

_LINE_COLORS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("通天代",), rgb(255, 215, 0)),
    (("小代",), rgb(255, 100, 255)),
    (("上等马",), rgb(255, 80, 80)),
    (("中等马",), rgb(100, 255, 100)),
    (("获取失败", "加载中"), rgb(120, 120, 120)),
    (("[蓝方]", "[我方评分]"), rgb(100, 149, 237)),
    (("[红方]", "[敌方评分]"), rgb(255, 69, 0)),
)
_BRACKET_COLOR = rgb(0, 255, 255)
_DEFAULT_LINE_COLOR = rgb(200, 200, 200)


def line_color(line: str) -> int:
    """Colour used to draw one info panel line."""
    for markers, color in _LINE_COLORS:
        if any(marker in line for marker in markers):
            return color
    if line.startswith("["):
        return _BRACKET_COLOR
    return _DEFAULT_LINE_COLOR


@dataclass(frozen=True)
class FRect:
    """Axis-aligned rectangle with floating-point coordinates."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def contains(self, px: float, py: float) -> bool:
        """True if the point lies inside; right and bottom edges are excluded."""
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h

    def right(self) -> float:
        return self.x + self.w

    def bottom(self) -> float:
        return self.y + self.h


def get_bench_container_rect(win_w: int, win_h: int) -> FRect:
    """Bench container rectangle in client coordinates for a window of the given size."""
    scale_x = win_w / TEMPLATE_W
    scale_y = win_h / TEMPLATE_H
    return FRect(
        BENCH_L * scale_x,
        BENCH_T * scale_y,
        (BENCH_R - BENCH_L) * scale_x,
        (BENCH_B - BENCH_T) * scale_y,
    )


def get_slot_rect(index: int, container: FRect, win_w: int, win_h: int) -> FRect:
    """Rectangle of bench slot ``index`` relative to the same origin as ``container``."""
    scale_x = win_w / TEMPLATE_W
    scale_y = win_h / TEMPLATE_H
    slot_w = SLOT_SIZE * scale_x
    slot_h = SLOT_SIZE * scale_y
    return FRect(
        container.x + SLOTS_PADDING_H * scale_x + index * (slot_w + SLOT_GAP * scale_x),
        container.y + SLOTS_PADDING_V * scale_y,
        slot_w,
        slot_h,
    )


def hit_slot(px: float, py: float, visible: bool, lcu_w: int, lcu_h: int) -> int | None:
    """Index of the bench slot under a point local to the bench overlay, or None."""
    if not visible or lcu_w <= 0 or lcu_h <= 0:
        return None
    full = get_bench_container_rect(lcu_w, lcu_h)
    if not FRect(0.0, 0.0, full.w, full.h).contains(px, py):
        return None
    for index in range(BENCH_SLOT_COUNT):
        slot = get_slot_rect(index, full, lcu_w, lcu_h)
        local = FRect(slot.x - full.x, slot.y - full.y, slot.w, slot.h)
        if local.contains(px, py):
            return index
    return None