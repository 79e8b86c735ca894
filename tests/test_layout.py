import pytest

from lcuhelper.layout import (
    BENCH_SLOT_COUNT,
    FRect,
    get_bench_container_rect,
    get_slot_rect,
    hit_slot,
    line_color,
    rgb,
)


def _local_slot(index, w, h):
    full = get_bench_container_rect(w, h)
    slot = get_slot_rect(index, full, w, h)
    return FRect(slot.x - full.x, slot.y - full.y, slot.w, slot.h)


def test_rgb_packs_channels_low_to_high():
    assert rgb(255, 255, 255) == 0xFFFFFF
    assert rgb(0x12, 0x34, 0x56) == 0x563412


def test_rgb_channels_round_trip():
    value = rgb(10, 20, 30)
    assert (value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF) == (10, 20, 30)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("甲 评分: 36 通天代", (255, 215, 0)),
        ("乙 小代", (255, 100, 255)),
        ("丙 上等马", (255, 80, 80)),
        ("丁 中等马", (100, 255, 100)),
        ("获取失败", (120, 120, 120)),
        ("加载中...", (120, 120, 120)),
        ("[蓝方] 标题", (100, 149, 237)),
        ("[我方评分]", (100, 149, 237)),
        ("[红方] 标题", (255, 69, 0)),
        ("[敌方评分]", (255, 69, 0)),
        ("[其他]", (0, 255, 255)),
        ("普通文本", (200, 200, 200)),
    ],
)
def test_line_color(line, expected):
    assert line_color(line) == rgb(*expected)


def test_line_color_grade_takes_priority_over_side():
    assert line_color("[红方] 通天代") == rgb(255, 215, 0)
    assert line_color("下等马 加载中") == rgb(120, 120, 120)


def test_frect_contains_is_half_open():
    r = FRect(0.0, 0.0, 10.0, 10.0)
    assert r.contains(0.0, 0.0)
    assert not r.contains(10.0, 5.0)
    assert not r.contains(5.0, 10.0)
    assert r.right() == 10.0
    assert r.bottom() == 10.0


def test_container_scales_linearly():
    base = get_bench_container_rect(1920, 1080)
    double = get_bench_container_rect(3840, 2160)
    assert double.x == pytest.approx(base.x * 2)
    assert double.y == pytest.approx(base.y * 2)
    assert double.w == pytest.approx(base.w * 2)
    assert double.h == pytest.approx(base.h * 2)


def test_slots_fill_container_with_padding():
    w, h = 1920, 1080
    container = get_bench_container_rect(w, h)
    first = get_slot_rect(0, container, w, h)
    last = get_slot_rect(BENCH_SLOT_COUNT - 1, container, w, h)
    assert first.x - container.x == pytest.approx(container.right() - last.right())
    assert first.y - container.y == pytest.approx(container.bottom() - first.bottom())


def test_slots_are_ordered_and_disjoint():
    w, h = 1280, 720
    container = get_bench_container_rect(w, h)
    slots = [get_slot_rect(i, container, w, h) for i in range(BENCH_SLOT_COUNT)]
    for left, right in zip(slots, slots[1:]):
        assert left.right() < right.x
        assert left.w == pytest.approx(right.w)


@pytest.mark.parametrize("index", range(BENCH_SLOT_COUNT))
def test_hit_slot_center(index):
    slot = _local_slot(index, 1600, 900)
    cx = slot.x + slot.w / 2
    cy = slot.y + slot.h / 2
    assert hit_slot(cx, cy, True, 1600, 900) == index


def test_hit_slot_in_gap_is_none():
    slot = _local_slot(0, 1920, 1080)
    assert hit_slot(slot.right() + 1.0, slot.y + 1.0, True, 1920, 1080) is None


def test_hit_slot_outside_container_is_none():
    container = get_bench_container_rect(1920, 1080)
    assert hit_slot(-1.0, 5.0, True, 1920, 1080) is None
    assert hit_slot(container.w + 1.0, 5.0, True, 1920, 1080) is None


def test_hit_slot_hidden_or_empty_window_is_none():
    slot = _local_slot(3, 1920, 1080)
    cx, cy = slot.x + 1.0, slot.y + 1.0
    assert hit_slot(cx, cy, True, 1920, 1080) == 3
    assert hit_slot(cx, cy, False, 1920, 1080) is None
    assert hit_slot(cx, cy, True, 0, 1080) is None
    assert hit_slot(cx, cy, True, 1920, -5) is None