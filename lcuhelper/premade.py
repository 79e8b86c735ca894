"""Premade (pre-formed party) detection from shared match history.

Players whose recent histories share at least ``threshold`` games with the
same result are linked; linked players are merged into groups.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from lcuhelper.api import LcuApiError

log = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 3
DEFAULT_HISTORY_COUNT = 20

_FALLBACK_NAME = "召唤师"
_LOCAL_FALLBACK_NAME = "本地召唤师"
_UNKNOWN_FALLBACK_NAME = "未知召唤师"
_BLUE_TEAM = 100
_RED_TEAM = 200
_MISSING = object()

ChampSelectPlayer = tuple[str, str, int]
Player = tuple[str, str]


@dataclass
class PremadeGroup:
    """One group of players believed to be queued together."""

    summoner_names: list[str] = field(default_factory=list)
    times: int = 0


@dataclass
class TeamPremade:
    """Premade analysis result for one team."""

    team_name: str
    groups: list[PremadeGroup] = field(default_factory=list)


# ── JSON helpers ──────────────────────────────────────────────────


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, _MISSING)
    return _MISSING


def _as_i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _as_u64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 2**64:
        return value
    return None


def _non_empty_str(obj: Any, key: str) -> str | None:
    value = _field(obj, key)
    return value if isinstance(value, str) and value else None


def _player_id(p: Any) -> str | None:
    puuid = _non_empty_str(p, "puuid")
    if puuid is not None:
        return puuid
    summoner_id = _as_i64(_field(p, "summonerId"))
    return str(summoner_id) if summoner_id is not None else None


def _riot_id(p: Any) -> str | None:
    game_name = _non_empty_str(p, "gameName")
    if game_name is None:
        return None
    tag_line = _non_empty_str(p, "tagLine")
    return f"{game_name}#{tag_line}" if tag_line is not None else game_name


# ── analysis entry ────────────────────────────────────────────────


async def analyze_premade(
    api: Any,
    my_team: list[Player],
    their_team: list[Player],
    threshold: int = DEFAULT_THRESHOLD,
    history_count: int = DEFAULT_HISTORY_COUNT,
) -> tuple[TeamPremade, TeamPremade]:
    """Analyse both teams; teams are lists of ``(puuid, display_name)``."""
    players = [*my_team, *their_team]
    puuids = [puuid for puuid, _ in players]
    maps = await asyncio.gather(*(_fetch_win_map(api, p, history_count) for p in puuids))
    histories = dict(zip(puuids, maps))
    return (
        calc_inferred_premade("我方", my_team, histories, threshold),
        calc_inferred_premade("对方", their_team, histories, threshold),
    )


async def _fetch_win_map(api: Any, puuid: str, count: int) -> dict[int, bool]:
    try:
        raw = await api.get_match_history(puuid, count)
    except LcuApiError as exc:
        log.warning("PUUID=%s 战绩拉取失败: %s", puuid[:8], exc)
        return {}
    games = extract_game_win_map(raw)
    log.debug("PUUID=%s 战绩拉取完成，共 %d 场", puuid[:8], len(games))
    return games


def extract_game_win_map(raw: Any) -> dict[int, bool]:
    """Map game id to win flag from a match-history document (either layout)."""
    games = _field(raw, "games")
    if not isinstance(games, list):
        games = _field(games, "games")
    if not isinstance(games, list):
        return {}

    result: dict[int, bool] = {}
    for game in games:
        game_id = _as_i64(_field(game, "gameId"))
        if game_id is None:
            continue
        participants = _field(game, "participants")
        win = False
        if isinstance(participants, list) and participants:
            win = _field(_field(participants[0], "stats"), "win") is True
        result[game_id] = win
    return result


# ── inference ─────────────────────────────────────────────────────


def count_common_games(a: dict[int, bool] | None, b: dict[int, bool] | None) -> int:
    """Number of games both players appear in with the same result."""
    if a is None or b is None:
        return 0
    return sum(1 for game_id, win in a.items() if game_id in b and b[game_id] == win)


def calc_inferred_premade(
    team_name: str,
    team: list[Player],
    histories: dict[str, dict[int, bool]],
    threshold: int,
) -> TeamPremade:
    """Group a team's players by shared-game links."""
    if len(team) < 2:
        return TeamPremade(team_name)

    edges: list[tuple[int, int, int]] = []
    for i, (puuid_a, _) in enumerate(team):
        for j in range(i + 1, len(team)):
            count = count_common_games(histories.get(puuid_a), histories.get(team[j][0]))
            if count >= threshold:
                edges.append((i, j, count))

    if not edges:
        return TeamPremade(team_name)

    parent = list(range(len(team)))

    def find(i: int) -> int:
        root = i
        while parent[root] != root:
            root = parent[root]
        while parent[i] != root:
            parent[i], i = root, parent[i]
        return root

    for i, j, _ in edges:
        root_i, root_j = find(i), find(j)
        if root_i != root_j:
            parent[root_i] = root_j

    members: dict[int, list[str]] = {}
    for i, (_, name) in enumerate(team):
        members.setdefault(find(i), []).append(name)

    groups: list[PremadeGroup] = []
    for root, names in members.items():
        if len(names) < 2:
            continue
        counts = [c for i, _, c in edges if find(i) == root]
        times = min([999, *counts]) if counts else threshold
        groups.append(PremadeGroup(sorted(names), times))

    groups.sort(key=lambda g: len(g.summoner_names), reverse=True)
    return TeamPremade(team_name, groups)


# ── session extraction ────────────────────────────────────────────


def _champ_select_team(session: Any, key: str) -> list[ChampSelectPlayer]:
    players = _field(session, key)
    if not isinstance(players, list):
        return []
    result = []
    for p in players:
        puuid = _player_id(p)
        if puuid is None:
            continue
        name = (
            _riot_id(p)
            or _non_empty_str(p, "displayName")
            or _non_empty_str(p, "summonerName")
            or _FALLBACK_NAME
        )
        champ_id = _as_i64(_field(p, "championId"))
        if not champ_id:
            champ_id = _as_i64(_field(p, "championPickIntent"))
        result.append((puuid, name, champ_id or 0))
    return result


def _team_side(session: Any, key: str) -> int | None:
    players = _field(session, key)
    if not isinstance(players, list) or not players:
        return None
    side = _as_u64(_field(players[0], "team"))
    return side & 0xFFFFFFFF if side is not None else None


def extract_teams_from_session(
    session: Any,
) -> tuple[list[ChampSelectPlayer], list[ChampSelectPlayer], int | None, int | None]:
    """Extract ``(puuid, name, champion_id)`` lists and sides from a champ-select session."""
    return (
        _champ_select_team(session, "myTeam"),
        _champ_select_team(session, "theirTeam"),
        _team_side(session, "myTeam"),
        _team_side(session, "theirTeam"),
    )


def _gameflow_team(game_data: Any, key: str, id_name_map: dict[int, str]) -> list[Player]:
    players = _field(game_data, key)
    if not isinstance(players, list):
        return []
    result = []
    for p in players:
        puuid = _player_id(p)
        if puuid is None:
            continue
        name = _riot_id(p) or _non_empty_str(p, "displayName") or _FALLBACK_NAME
        champ_id = _as_i64(_field(p, "championId")) or 0
        label = name
        if champ_id != 0 and champ_id in id_name_map:
            champ_name = id_name_map[champ_id]
            if name == _FALLBACK_NAME or name.startswith("Summoner "):
                label = champ_name
            else:
                label = f"{name}({champ_name})"
        result.append((puuid, label))
    return result


def _contains(team: list[Player], puuid: str) -> bool:
    return any(p == puuid for p, _ in team)


def extract_teams_from_gameflow_session(
    session: Any,
    my_puuid: str,
    id_name_map: dict[int, str],
) -> tuple[list[Player], list[Player], int | None, int | None]:
    """Extract ``(my_team, their_team, my_side, their_side)`` from an in-game session."""
    game_data = session.get("gameData") if isinstance(session, dict) and "gameData" in session else session

    t1 = _gameflow_team(game_data, "teamOne", id_name_map)
    t2 = _gameflow_team(game_data, "teamTwo", id_name_map)

    local = _field(game_data, "localPlayer")
    if local is not _MISSING:
        local_id = _field(local, "puuid")
        if isinstance(local_id, str) and not _contains(t1, local_id) and not _contains(t2, local_id):
            team_id = _as_i64(_field(local, "teamId")) or 0
            champ_id = _as_i64(_field(local, "championId")) or 0
            entry = (local_id, id_name_map.get(champ_id, _LOCAL_FALLBACK_NAME))
            (t1 if team_id == _BLUE_TEAM else t2).append(entry)

    participants = _field(game_data, "participants")
    if isinstance(participants, list):
        for p in participants:
            p_id = _field(p, "puuid")
            if not isinstance(p_id, str) or _contains(t1, p_id) or _contains(t2, p_id):
                continue
            team_id = _as_i64(_field(p, "teamId")) or 0
            champ_id = _as_i64(_field(p, "championId")) or 0
            entry = (p_id, id_name_map.get(champ_id, _UNKNOWN_FALLBACK_NAME))
            if team_id == _BLUE_TEAM:
                t1.append(entry)
            elif team_id == _RED_TEAM:
                t2.append(entry)

    if not t1 and not t2:
        t1 = _gameflow_team(game_data, "myTeam", id_name_map)
        t2 = _gameflow_team(game_data, "theirTeam", id_name_map)

    if _contains(t1, my_puuid):
        return t1, t2, _BLUE_TEAM, _RED_TEAM
    return t2, t1, _RED_TEAM, _BLUE_TEAM


# ── formatting ────────────────────────────────────────────────────


def _side_label(side: int | None) -> str:
    return {_BLUE_TEAM: "[蓝方]", _RED_TEAM: "[红方]"}.get(side, "")


def _format_team(team: TeamPremade) -> str | None:
    if not team.groups:
        return None
    lines = "\n".join(
        f"  {len(g.summoner_names)}黑（{g.times}局）：{' / '.join(g.summoner_names)}"
        for g in team.groups
    )
    return f"{team.team_name}：\n{lines}"


def format_premade_message(
    my_team: TeamPremade,
    their_team: TeamPremade,
    my_side: int | None,
    their_side: int | None,
) -> str:
    """Render the analysis as a chat/HUD message."""
    title = f"[对局组黑分析] {_side_label(my_side)}"
    parts = [title, *(t for t in (_format_team(my_team), _format_team(their_team)) if t is not None)]
    if len(parts) == 1:
        return f"{title}\n纯路人局"
    return "\n".join(parts)