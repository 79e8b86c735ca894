"""Pure helpers for reading champion-select session documents."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

_MISSING = object()


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, _MISSING)
    return _MISSING


def _as_i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _same(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def extract_bench_champion_ids(session: Any) -> list[int]:
    """Return bench champion ids from either of the two known field layouts."""
    ids = _field(session, "benchChampionIds")
    if isinstance(ids, list) and ids:
        return [i for i in map(_as_i64, ids) if i is not None]
    champions = _field(session, "benchChampions")
    if isinstance(champions, list):
        return [i for i in (_as_i64(_field(c, "championId")) for c in champions) if i is not None]
    return []


def get_local_player(session: Any) -> dict | None:
    """Return the local player's entry in ``myTeam``, if any."""
    cell_id = _field(session, "localPlayerCellId")
    team = _field(session, "myTeam")
    if cell_id is _MISSING or not isinstance(team, list):
        return None
    return next((p for p in team if _same(_field(p, "cellId"), cell_id)), None)


def iter_actions(session: Any) -> Iterator[dict]:
    """Yield every action object, flattening the nested action lists."""
    actions = _field(session, "actions")
    if not isinstance(actions, list):
        return
    for action_set in actions:
        if isinstance(action_set, list):
            yield from (a for a in action_set if isinstance(a, dict))
        elif isinstance(action_set, dict):
            yield action_set


def find_local_action(session: Any, action_type: str, only_unfinished: bool = True) -> dict | None:
    """Find the local player's first action of the given type."""
    cell_id = _field(session, "localPlayerCellId")
    if cell_id is _MISSING:
        return None
    for action in iter_actions(session):
        if not _same(_field(action, "actorCellId"), cell_id):
            continue
        if not _same(_field(action, "type"), action_type):
            continue
        if only_unfinished and _field(action, "completed") is True:
            continue
        return action
    return None