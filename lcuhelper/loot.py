"""Finding and claiming forgotten loot rewards."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lcuhelper.api import LcuApiError

log = logging.getLogger(__name__)

NOTHING_FOUND_MESSAGE = "没有发现可领取的遗忘资源。"

_CHEST_RECIPE = "CHEST_generic_OPEN"
_REWARD_RECIPE = "REWARD_claim"


@dataclass(frozen=True)
class ClaimableLoot:
    """A loot entry that can be claimed with a recipe."""

    loot_id: str
    name: str
    recipe: str
    count: int


def _as_i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _str_field(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _is_reward(loot_id: str) -> bool:
    return (
        loot_id.startswith("REWARD_")
        or "champion_faceoff" in loot_id
        or loot_id.startswith("CHEST_")
        or "_REWARD" in loot_id
    )


def find_claimable_loot(loot_list: Any) -> list[ClaimableLoot]:
    """Pick out the reward entries with a positive count from the player's loot."""
    if not isinstance(loot_list, list):
        return []
    claimable = []
    for loot in loot_list:
        if not isinstance(loot, dict):
            continue
        loot_id = _str_field(loot, "lootId") or ""
        count = _as_i64(loot.get("count")) or 0
        name = _str_field(loot, "localizedName")
        if name is None:
            name = _str_field(loot, "localizedDescription")
        if name is None:
            name = loot_id
        if count <= 0 or not _is_reward(loot_id):
            continue
        recipe = _CHEST_RECIPE if loot_id.startswith("CHEST_") else _REWARD_RECIPE
        claimable.append(ClaimableLoot(loot_id, name, recipe, count))
    return claimable


def format_loot_summary(claimable: list[ClaimableLoot]) -> str:
    """The confirmation text listing what will be claimed."""
    listing = "".join(f" - {item.name} (数量: {item.count})\n" for item in claimable)
    return f"发现以下可领取资源：\n\n{listing}\n是否立即找回？"


async def handle_find_forgotten_loot(
    api: Any,
    confirm: Callable[[str], bool],
    notify: Callable[[str], None],
) -> list[ClaimableLoot]:
    """Offer to claim forgotten rewards; returns the entries that were claimed.

    ``confirm`` is asked with the summary text; ``notify`` is told when nothing was found.
    Failures of individual claims are ignored.
    """
    try:
        loot_list = await api.get_player_loot()
    except LcuApiError as exc:
        log.error("获取战利品失败: %s", exc)
        return []

    if not isinstance(loot_list, list):
        return []

    claimable = find_claimable_loot(loot_list)
    if not claimable:
        notify(NOTHING_FOUND_MESSAGE)
        return []

    if not confirm(format_loot_summary(claimable)):
        return []

    log.info("正在开始找回战利品...")
    for item in claimable:
        log.debug("正在领取: %s (ID: %s, 配方: %s)", item.name, item.loot_id, item.recipe)
        try:
            await api.call_loot_recipe(item.loot_id, item.recipe)
        except LcuApiError as exc:
            log.debug("领取失败: %s", exc)
    log.info("找回任务执行完毕。")
    return claimable