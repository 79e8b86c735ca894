import pytest

from lcuhelper.api import HttpError, LcuApiError
from lcuhelper.loot import (
    NOTHING_FOUND_MESSAGE,
    ClaimableLoot,
    find_claimable_loot,
    format_loot_summary,
    handle_find_forgotten_loot,
)


class FakeApi:
    def __init__(self, loot=None, error=None, fail_ids=()):
        self.loot = loot
        self.error = error
        self.fail_ids = set(fail_ids)
        self.calls = []

    async def get_player_loot(self):
        if self.error is not None:
            raise self.error
        return self.loot

    async def call_loot_recipe(self, loot_id, recipe_name):
        self.calls.append((loot_id, recipe_name))
        if loot_id in self.fail_ids:
            raise HttpError(500, "POST", "/craft", "")
        return None


SAMPLE = [
    {"lootId": "CHEST_128", "count": 2, "localizedName": "Chest"},
    {"lootId": "REWARD_event", "count": 1, "localizedDescription": "Event reward"},
    {"lootId": "CURRENCY_champion_faceoff", "count": 3},
    {"lootId": "CURRENCY_champion", "count": 5, "localizedName": "Essence"},
    {"lootId": "REWARD_empty", "count": 0, "localizedName": "Empty"},
    {"lootId": "PASS_REWARD_x", "count": 1, "localizedName": 7, "localizedDescription": "Pass"},
]


def test_find_claimable_loot_selection_and_recipes():
    result = find_claimable_loot(SAMPLE)
    assert result == [
        ClaimableLoot("CHEST_128", "Chest", "CHEST_generic_OPEN", 2),
        ClaimableLoot("REWARD_event", "Event reward", "REWARD_claim", 1),
        ClaimableLoot("CURRENCY_champion_faceoff", "CURRENCY_champion_faceoff", "REWARD_claim", 3),
        ClaimableLoot("PASS_REWARD_x", "Pass", "REWARD_claim", 1),
    ]


def test_find_claimable_loot_non_list():
    assert find_claimable_loot({"lootId": "CHEST_1", "count": 1}) == []
    assert find_claimable_loot(None) == []


def test_find_claimable_loot_ignores_bad_counts():
    loot = [{"lootId": "REWARD_a", "count": True}, {"lootId": "REWARD_b", "count": "3"}]
    assert find_claimable_loot(loot) == []


def test_format_loot_summary_lists_every_item():
    items = find_claimable_loot(SAMPLE)
    text = format_loot_summary(items)
    assert text.startswith("发现以下可领取资源：\n\n")
    assert text.endswith("\n是否立即找回？")
    for item in items:
        assert f" - {item.name} (数量: {item.count})\n" in text


@pytest.mark.asyncio
async def test_handle_claims_after_confirmation():
    api = FakeApi(loot=SAMPLE, fail_ids={"CHEST_128"})
    asked = []
    claimed = await handle_find_forgotten_loot(api, lambda m: asked.append(m) or True, lambda m: None)
    expected = find_claimable_loot(SAMPLE)
    assert claimed == expected
    assert api.calls == [(i.loot_id, i.recipe) for i in expected]
    assert asked == [format_loot_summary(expected)]


@pytest.mark.asyncio
async def test_handle_declined_claims_nothing():
    api = FakeApi(loot=SAMPLE)
    claimed = await handle_find_forgotten_loot(api, lambda m: False, lambda m: None)
    assert claimed == []
    assert api.calls == []


@pytest.mark.asyncio
async def test_handle_nothing_found_notifies():
    api = FakeApi(loot=[{"lootId": "CURRENCY_champion", "count": 5}])
    notes = []
    claimed = await handle_find_forgotten_loot(api, lambda m: True, notes.append)
    assert claimed == []
    assert notes == [NOTHING_FOUND_MESSAGE]


@pytest.mark.asyncio
async def test_handle_fetch_error_is_silent():
    api = FakeApi(error=LcuApiError("down"))
    notes = []
    claimed = await handle_find_forgotten_loot(api, lambda m: True, notes.append)
    assert claimed == []
    assert notes == []


@pytest.mark.asyncio
async def test_handle_non_list_response_is_silent():
    api = FakeApi(loot={"unexpected": True})
    notes = []
    claimed = await handle_find_forgotten_loot(api, lambda m: True, notes.append)
    assert (claimed, notes, api.calls) == ([], [], [])