"""Player performance scoring from recent match history."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

_MISSING = object()


def get_grade_name(score: float) -> str:
    """Map a total score to its grade label."""
    if score >= 35.0:
        return "通天代"
    if score >= 31.0:
        return "小代"
    if score >= 27.0:
        return "上等马"
    if score >= 23.0:
        return "中等马"
    if score >= 19.0:
        return "下等马"
    if score >= 15.0:
        return "纯牛马"
    return "没有马"


@dataclass
class PlayerPerformance:
    """Summary rating for one player."""

    puuid: str = ""
    name: str = ""
    score: float = 0.0
    avg_kda: float = 0.0
    win_rate: float = 0.0
    count: int = 0


@dataclass
class AkariScore:
    """Component scores of the detailed rating."""

    kda_score: float = 0.0
    win_rate_score: float = 0.0
    dmg_score: float = 0.0
    dmg_taken_score: float = 0.0
    cs_score: float = 0.0
    gold_score: float = 0.0
    participation_score: float = 0.0
    total: float = 0.0


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, _MISSING)
    return _MISSING


def _num(obj: Any, key: str, default: float = 0.0) -> float:
    value = _field(obj, key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def _as_i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _same(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def _kda_score(avg_kda: float) -> float:
    return _sqrt(avg_kda) * 1.44


def _win_rate_score(win_rate: float) -> float:
    return (win_rate - 0.5) * 4.0


def _find_participant(game: Any, puuid: str) -> dict | None:
    """Locate the participant entry belonging to ``puuid`` in a detailed game."""
    identities = _field(game, "participantIdentities")
    participants = _field(game, "participants")
    if not isinstance(identities, list) or not isinstance(participants, list):
        return None
    identity = next(
        (i for i in identities if _same(_field(_field(i, "player"), "puuid"), puuid)),
        None,
    )
    if identity is None:
        return None
    pid = _as_i64(_field(identity, "participantId"))
    if pid is None:
        return None
    return next(
        (p for p in participants if _as_i64(_field(p, "participantId")) == pid),
        None,
    )


def calculate_akari_score(self_puuid: str, matches: list) -> AkariScore | None:
    """Score a player from detailed games; None if any game lacks the needed data."""
    if not matches:
        return None

    total_kda = wins = 0.0
    dmg_share = dmg_taken_share = gold_share = 0.0
    cs_per_min = participation = 0.0

    for game in matches:
        participants = _field(game, "participants")
        if not isinstance(participants, list) or not isinstance(
            _field(game, "participantIdentities"), list
        ):
            return None
        duration = _num(game, "gameDuration", 1.0)

        me = _find_participant(game, self_puuid)
        if me is None:
            return None
        my_stats = _field(me, "stats")
        my_team_id = _field(me, "teamId")
        if my_stats is _MISSING or my_team_id is _MISSING:
            return None

        max_dmg = max_dmg_taken = max_gold = team_kills = 0.0
        for p in participants:
            if not _same(_field(p, "teamId"), my_team_id):
                continue
            stats = _field(p, "stats")
            if stats is _MISSING:
                return None
            max_dmg = max(max_dmg, _num(stats, "totalDamageDealtToChampions"))
            max_dmg_taken = max(max_dmg_taken, _num(stats, "totalDamageTaken"))
            max_gold = max(max_gold, _num(stats, "goldEarned"))
            team_kills += _num(stats, "kills")

        kills = _num(my_stats, "kills")
        deaths = _num(my_stats, "deaths")
        assists = _num(my_stats, "assists")
        cs = _num(my_stats, "totalMinionsKilled") + _num(my_stats, "neutralMinionsKilled")

        total_kda += (kills + assists) / max(deaths, 1.0)
        if _field(my_stats, "win") is True:
            wins += 1.0
        dmg_share += _num(my_stats, "totalDamageDealtToChampions") / max(max_dmg, 1.0)
        dmg_taken_share += _num(my_stats, "totalDamageTaken") / max(max_dmg_taken, 1.0)
        gold_share += _num(my_stats, "goldEarned") / max(max_gold, 1.0)
        cs_per_min += cs / max(duration / 60.0, 1.0)
        participation += (kills + assists) / max(team_kills, 1.0)

    count = float(len(matches))
    avg_cs = cs_per_min / count

    kda_score = _kda_score(total_kda / count)
    win_rate_score = _win_rate_score(wins / count)
    dmg_score = dmg_share / count * 10.0
    dmg_taken_score = dmg_taken_share / count * 8.0
    cs_score = avg_cs * min(max(0.04 * avg_cs, 0.1), 0.4)
    gold_score = gold_share / count * 4.0
    participation_score = participation / count * 4.0

    return AkariScore(
        kda_score=kda_score,
        win_rate_score=win_rate_score,
        dmg_score=dmg_score,
        dmg_taken_score=dmg_taken_score,
        cs_score=cs_score,
        gold_score=gold_score,
        participation_score=participation_score,
        total=kda_score
        + win_rate_score
        + dmg_score
        + dmg_taken_score
        + cs_score
        + gold_score
        + participation_score,
    )


def _detailed_rating(puuid: str, matches: list, akari: AkariScore) -> PlayerPerformance | None:
    total_kda = wins = 0.0
    for game in matches:
        me = _find_participant(game, puuid)
        if me is None:
            return None
        stats = _field(me, "stats")
        if stats is _MISSING:
            return None
        deaths = max(_num(stats, "deaths", 1.0), 1.0)
        total_kda += (_num(stats, "kills") + _num(stats, "assists")) / deaths
        if _field(stats, "win") is True:
            wins += 1.0
    return PlayerPerformance(
        puuid=puuid,
        score=akari.total,
        avg_kda=total_kda / len(matches),
        win_rate=wins / len(matches),
        count=len(matches),
    )


def calculate_player_rating(puuid: str, matches: list) -> PlayerPerformance | None:
    """Rate a player, using detailed games when available and summaries otherwise."""
    if not matches:
        return None

    if _field(matches[0], "participantIdentities") is not _MISSING:
        akari = calculate_akari_score(puuid, matches)
        if akari is not None:
            return _detailed_rating(puuid, matches, akari)

    total_kda = wins = 0.0
    for game in matches:
        participants = _field(game, "participants")
        if not isinstance(participants, list) or not participants:
            return None
        stats = _field(participants[0], "stats")
        if stats is _MISSING:
            return None
        total_kda += (_num(stats, "kills") + _num(stats, "assists")) / max(_num(stats, "deaths"), 1.0)
        if _field(stats, "win") is True:
            wins += 1.0

    count = len(matches)
    avg_kda = total_kda / count
    win_rate = wins / count
    return PlayerPerformance(
        puuid=puuid,
        score=_kda_score(avg_kda) + _win_rate_score(win_rate) + 15.0,
        avg_kda=avg_kda,
        win_rate=win_rate,
        count=count,
    )