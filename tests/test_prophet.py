import pytest

from lcuhelper.prophet import (
    AkariScore,
    calculate_akari_score,
    calculate_player_rating,
    get_grade_name,
)


@pytest.mark.parametrize(
    "score, grade",
    [
        (35.0, "通天代"),
        (31.0, "小代"),
        (27.0, "上等马"),
        (23.0, "中等马"),
        (19.0, "下等马"),
        (15.0, "纯牛马"),
        (14.99, "没有马"),
    ],
)
def test_grade_names(score, grade):
    assert get_grade_name(score) == grade


def _stats(**overrides):
    base = {
        "kills": 0,
        "deaths": 0,
        "assists": 0,
        "win": False,
        "totalDamageDealtToChampions": 0,
        "totalDamageTaken": 0,
        "goldEarned": 0,
        "totalMinionsKilled": 0,
        "neutralMinionsKilled": 0,
    }
    base.update(overrides)
    return base


def make_game(win=True, my_minions=0, duration=1800):
    return {
        "gameDuration": duration,
        "participantIdentities": [
            {"participantId": 1, "player": {"puuid": "me"}},
            {"participantId": 2, "player": {"puuid": "ally"}},
            {"participantId": 3, "player": {"puuid": "foe"}},
        ],
        "participants": [
            {
                "participantId": 1,
                "teamId": 100,
                "stats": _stats(
                    kills=1,
                    deaths=1,
                    win=win,
                    totalDamageDealtToChampions=1000,
                    totalDamageTaken=500,
                    goldEarned=9000,
                    totalMinionsKilled=my_minions,
                ),
            },
            {
                "participantId": 2,
                "teamId": 100,
                "stats": _stats(
                    win=win,
                    totalDamageDealtToChampions=500,
                    totalDamageTaken=400,
                    goldEarned=5000,
                ),
            },
            {
                "participantId": 3,
                "teamId": 200,
                "stats": _stats(
                    kills=10,
                    win=not win,
                    totalDamageDealtToChampions=99999,
                    totalDamageTaken=99999,
                    goldEarned=99999,
                ),
            },
        ],
    }


def test_akari_components_for_team_leader():
    score = calculate_akari_score("me", [make_game()])
    assert score.kda_score == pytest.approx(1.44)
    assert score.dmg_score == pytest.approx(10.0)
    assert score.dmg_taken_score == pytest.approx(8.0)
    assert score.gold_score == pytest.approx(4.0)
    assert score.participation_score == pytest.approx(4.0)
    assert score.cs_score == pytest.approx(0.0)
    assert score.win_rate_score == pytest.approx(2.0)


def test_akari_total_is_sum_of_parts():
    s = calculate_akari_score("me", [make_game(my_minions=150), make_game(win=False)])
    parts = (
        s.kda_score
        + s.win_rate_score
        + s.dmg_score
        + s.dmg_taken_score
        + s.cs_score
        + s.gold_score
        + s.participation_score
    )
    assert s.total == pytest.approx(parts)


def test_akari_win_loss_difference():
    won = calculate_akari_score("me", [make_game(win=True)])
    lost = calculate_akari_score("me", [make_game(win=False)])
    assert won.win_rate_score - lost.win_rate_score == pytest.approx(4.0)


def test_akari_cs_factor_is_clamped():
    cs_per_min = 60.0
    score = calculate_akari_score("me", [make_game(my_minions=60, duration=60)])
    assert 0.1 * cs_per_min <= score.cs_score <= 0.4 * cs_per_min + 1e-9


def test_akari_none_cases():
    assert calculate_akari_score("me", []) is None
    assert calculate_akari_score("ghost", [make_game()]) is None
    assert calculate_akari_score("me", [{"participants": []}]) is None


def test_akari_none_if_any_game_broken():
    broken = make_game()
    del broken["participants"][1]["stats"]
    assert calculate_akari_score("me", [make_game(), broken]) is None


def test_rating_detailed_uses_akari_total():
    games = [make_game()]
    perf = calculate_player_rating("me", games)
    akari = calculate_akari_score("me", games)
    assert isinstance(akari, AkariScore)
    assert perf.score == pytest.approx(akari.total)
    assert perf.avg_kda == pytest.approx(1.0)
    assert perf.win_rate == pytest.approx(1.0)
    assert (perf.puuid, perf.count) == ("me", 1)


def test_rating_fallback_summary():
    matches = [
        {"participants": [{"stats": _stats(win=True)}]},
        {"participants": [{"stats": _stats(win=False)}]},
    ]
    perf = calculate_player_rating("me", matches)
    assert perf.score == pytest.approx(15.0)
    assert perf.win_rate == pytest.approx(0.5)
    assert perf.avg_kda == pytest.approx(0.0)
    assert perf.count == 2


def test_rating_detailed_unknown_puuid_falls_back_to_first_participant():
    game = make_game()
    summary = {"participants": [game["participants"][0]]}
    fallback = calculate_player_rating("ghost", [game])
    direct = calculate_player_rating("me", [summary])
    assert fallback.score == pytest.approx(direct.score)
    assert fallback.puuid == "ghost"


def test_rating_none_cases():
    assert calculate_player_rating("me", []) is None
    assert calculate_player_rating("me", [{"participants": []}]) is None
    assert calculate_player_rating("me", [{"participants": [{"noStats": 1}]}]) is None