"""Async client for the League client's local HTTP API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from lcuhelper.session import find_local_action

log = logging.getLogger(__name__)

PHASE_NONE = "None"
PHASE_LOBBY = "Lobby"
PHASE_MATCHMAKING = "Matchmaking"
PHASE_READY_CHECK = "ReadyCheck"
PHASE_CHAMP_SELECT = "ChampSelect"
PHASE_GAME_START = "GameStart"
PHASE_IN_PROGRESS = "InProgress"
PHASE_RECONNECT = "Reconnect"
PHASE_WAITING_FOR_STATS = "WaitingForStats"
PHASE_PRE_END_OF_GAME = "PreEndOfGame"
PHASE_END_OF_GAME = "EndOfGame"
PHASE_TERMINATED_IN_ERROR = "TerminatedInError"

_ASSET_MARKER = "lol-game-data/assets"
_ASSET_CONCURRENCY = 8
_HISTORY_MAX_RETRIES = 2
_SGP_CN_REGIONS = ("hn", "tj", "sh", "gz")


class LcuApiError(Exception):
    """A call to the client API failed."""


class HttpError(LcuApiError):
    """The server answered with an error status."""

    def __init__(self, status: int, method: str, endpoint: str, body: str) -> None:
        super().__init__(f"HTTP {status} {method} {endpoint}: {body}")
        self.status = status
        self.method = method
        self.endpoint = endpoint
        self.body = body


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _as_i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _short(puuid: str) -> str:
    return puuid[:8]


def is_match_history_valid(value: Any) -> bool:
    """True if a match-history document holds at least one game."""
    games = _get(value, "games")
    if not isinstance(games, list):
        games = _get(games, "games")
    return isinstance(games, list) and bool(games)


def _normalise_sgp_history(value: Any) -> Any:
    if isinstance(value, list):
        return {"games": {"games": value}}
    if isinstance(value, dict) and "games" in value:
        games = value["games"]
        if isinstance(games, list):
            return {"games": {"games": games}}
        return value
    return {"games": {"games": [value]}}


class LcuClient:
    """Thin async wrapper around the client's REST endpoints."""

    history_retry_delay = 0.6

    def __init__(self, base_url: str, http_client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = http_client if http_client is not None else httpx.AsyncClient(verify=False)
        self._asset_semaphore = asyncio.Semaphore(_ASSET_CONCURRENCY)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    def url(self, endpoint: str) -> str:
        """Absolute URL for an endpoint path."""
        return f"{self.base_url}{endpoint}"

    # ── low-level HTTP ─────────────────────────────────────────────

    async def _request(self, method: str, endpoint: str, body: Any = None, *, has_body: bool = False) -> Any:
        kwargs = {"json": body} if has_body else {}
        try:
            response = await self.client.request(method, self.url(endpoint), **kwargs)
        except httpx.HTTPError as exc:
            raise LcuApiError(f"网络错误: {exc}") from exc
        if response.status_code >= 400:
            raise HttpError(response.status_code, method, endpoint, response.text)
        return self._json_or_null(response)

    @staticmethod
    def _json_or_null(response: httpx.Response) -> Any:
        text = response.text
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise LcuApiError(f"JSON 解析错误: {exc}") from exc

    async def get_json(self, endpoint: str) -> Any:
        log.debug("GET %s", endpoint)
        if _ASSET_MARKER in endpoint:
            async with self._asset_semaphore:
                return await self._request("GET", endpoint)
        return await self._request("GET", endpoint)

    async def post_json(self, endpoint: str, body: Any = None) -> Any:
        log.debug("POST %s", endpoint)
        return await self._request("POST", endpoint, body, has_body=body is not None)

    async def patch_json(self, endpoint: str, body: Any) -> Any:
        log.debug("PATCH %s", endpoint)
        return await self._request("PATCH", endpoint, body, has_body=True)

    async def delete_json(self, endpoint: str) -> Any:
        log.debug("DELETE %s", endpoint)
        return await self._request("DELETE", endpoint)

    # ── summoner ───────────────────────────────────────────────────

    async def get_current_summoner(self) -> Any:
        return await self.get_json("/lol-summoner/v1/current-summoner")

    # ── gameflow ───────────────────────────────────────────────────

    async def get_gameflow_phase(self) -> str:
        """Current gameflow phase, ``"None"`` if the answer is not a string."""
        value = await self.get_json("/lol-gameflow/v1/gameflow-phase")
        return value if isinstance(value, str) else PHASE_NONE

    async def get_gameflow_session(self) -> Any:
        return await self.get_json("/lol-gameflow/v1/session")

    async def get_riotclient_zoom_scale(self) -> float:
        value = await self.get_json("/riotclient/zoom-scale")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise LcuApiError(f"无效的 zoom-scale 响应: {value!r}")

    async def reload_ux(self) -> None:
        """Restart the client UI without dropping queue or game."""
        await self.post_json("/riotclient/kill-and-restart-ux")

    # ── lobby ──────────────────────────────────────────────────────

    async def play_again(self) -> None:
        await self.post_json("/lol-lobby/v2/play-again")

    async def get_lobby(self) -> Any:
        return await self.get_json("/lol-lobby/v2/lobby")

    async def get_ready_check(self) -> Any:
        return await self.get_json("/lol-matchmaking/v1/ready-check")

    async def accept_ready_check(self) -> Any:
        return await self.post_json("/lol-matchmaking/v1/ready-check/accept")

    async def decline_ready_check(self) -> Any:
        return await self.post_json("/lol-matchmaking/v1/ready-check/decline")

    async def dismiss_end_of_game_stats(self) -> bool:
        try:
            await self.post_json("/lol-end-of-game/v1/state/dismiss-stats")
        except HttpError:
            return False
        return True

    # ── chat ───────────────────────────────────────────────────────

    async def get_chat_me(self) -> Any:
        return await self.get_json("/lol-chat/v1/me")

    async def open_conversation(self, pid: str) -> str:
        """Open (or reuse) a one-to-one conversation and return its id."""
        value = await self.post_json("/lol-chat/v1/conversations", {"pid": pid, "type": "chat"})
        conv_id = _get(value, "id")
        if not isinstance(conv_id, str):
            raise LcuApiError("open_conversation：响应缺少 id 字段")
        return conv_id

    async def send_chat_message(self, conversation_id: str, body: str) -> None:
        await self.post_json(
            f"/lol-chat/v1/conversations/{conversation_id}/messages",
            {"body": body, "type": "chat"},
        )

    async def send_message_to_self(self, body: str) -> None:
        """Send a private message only the local player can see."""
        me = await self.get_chat_me()
        pid = _get(me, "pid")
        if not isinstance(pid, str):
            raise LcuApiError("get_chat_me：响应缺少 pid 字段")
        conv_id = await self.open_conversation(pid)
        await self.send_chat_message(conv_id, body)

    # ── loot ───────────────────────────────────────────────────────

    async def get_player_loot(self) -> Any:
        return await self.get_json("/lol-loot/v1/player-loot")

    async def call_loot_recipe(self, loot_id: str, recipe_name: str) -> Any:
        return await self.post_json(f"/lol-loot/v1/recipes/{recipe_name}/craft?repeat=1", [loot_id])

    # ── honor ──────────────────────────────────────────────────────

    async def get_honor_ballot(self) -> Any:
        return await self.get_json("/lol-honor-v2/v1/ballot")

    async def skip_honor_vote(self) -> bool:
        """Try the known ways of skipping the honor vote; True once one works."""
        try:
            ballot = await self.get_honor_ballot()
        except LcuApiError:
            return False

        game_id = _as_i64(_get(ballot, "gameId"))
        if game_id is not None:
            payloads = [
                {"gameId": game_id, "honorCategory": "OPT_OUT", "summonerId": 0},
                {"gameId": game_id, "honorCategory": "NONE", "summonerId": 0},
                {"gameId": game_id, "honorType": "OPT_OUT", "summonerId": 0},
            ]
            for payload in payloads:
                try:
                    await self.post_json("/lol-honor-v2/v1/honor-player", payload)
                except HttpError:
                    continue
                return True

        for endpoint in ("/lol-honor-v2/v1/ballot/skip", "/lol-honor-v2/v1/skip"):
            try:
                await self.post_json(endpoint)
            except HttpError:
                continue
            return True
        return False

    # ── champion select ────────────────────────────────────────────

    async def get_champ_select_session(self) -> Any:
        return await self.get_json("/lol-champ-select/v1/session")

    async def get_pickable_champion_ids(self) -> list[int]:
        value = await self.get_json("/lol-champ-select/v1/pickable-champion-ids")
        if not isinstance(value, list):
            return []
        return [i for i in map(_as_i64, value) if i is not None]

    async def get_owned_champions_minimal(self) -> list[dict]:
        summoner = await self.get_current_summoner()
        summoner_id = _as_i64(_get(summoner, "summonerId"))
        if summoner_id is None:
            raise LcuApiError("未找到 summonerId")
        value = await self.get_json(f"/lol-champions/v1/inventories/{summoner_id}/champions-minimal")
        if not isinstance(value, list):
            return []
        return [c for c in value if isinstance(c, dict)]

    async def act_champion(self, champion_id: int, completed: bool, action_id: int | None = None) -> Any:
        """Hover (``completed=False``) or lock in a champion."""
        if action_id is None:
            session = await self.get_champ_select_session()
            action = find_local_action(session, "pick", True)
            if action is None:
                raise LcuApiError("当前没有可用的 pick 行动")
            action_id = _as_i64(action.get("id"))
            if action_id is None:
                raise LcuApiError("action 缺少 id 字段")
        return await self.patch_json(
            f"/lol-champ-select/v1/session/actions/{action_id}",
            {"championId": champion_id, "completed": completed},
        )

    async def hover_champion(self, champion_id: int, action_id: int | None = None) -> Any:
        return await self.act_champion(champion_id, False, action_id)

    async def lock_champion(self, champion_id: int, action_id: int | None = None) -> Any:
        return await self.act_champion(champion_id, True, action_id)

    async def reroll_aram(self) -> Any:
        return await self.post_json("/lol-champ-select/v1/session/my-selection/reroll")

    async def swap_bench_champion(self, champion_id: int) -> Any:
        return await self.post_json(f"/lol-champ-select/v1/session/bench/swap/{champion_id}")

    async def get_champion_id_name_map(self) -> dict[int, str]:
        """Map owned champion ids to their display names."""
        names: dict[int, str] = {}
        for champ in await self.get_owned_champions_minimal():
            champ_id = _as_i64(champ.get("id"))
            if champ_id is None:
                continue
            raw = champ["name"] if "name" in champ else champ.get("alias")
            names[champ_id] = raw if isinstance(raw, str) else f"Champion-{champ_id}"
        return names

    # ── match history ──────────────────────────────────────────────

    async def get_game(self, game_id: int) -> Any:
        return await self.get_json(f"/lol-match-history/v1/games/{game_id}")

    async def get_entitlements_token(self) -> str:
        value = await self.get_json("/lol-entitlements/v1/token")
        token = _get(value, "accessToken")
        if not isinstance(token, str):
            raise LcuApiError("未找到 entitlements token")
        return token

    async def get_access_token(self) -> str:
        value = await self.get_json("/lol-rso-auth/v1/authorization/access-token")
        token = _get(value, "token")
        if not isinstance(token, str):
            raise LcuApiError("未找到 access token")
        return token

    async def get_match_history(self, puuid: str, count: int) -> Any:
        """Recent games of a player: the local cache first, the remote service as fallback."""
        lcu_value: Any = None
        lcu_error: LcuApiError | None = None
        try:
            lcu_value = await self._match_history_lcu(puuid, count)
        except LcuApiError as exc:
            lcu_error = exc
        else:
            if is_match_history_valid(lcu_value):
                return lcu_value

        log.debug("LCU 战绩为空或失败，尝试通过 SGP 获取 (PUUID=%s)", _short(puuid))
        try:
            return await self._match_history_sgp(puuid, count)
        except LcuApiError as exc:
            log.warning("SGP 战绩获取也失败: %s", exc)
            if lcu_error is not None:
                raise lcu_error
            return lcu_value

    async def _match_history_lcu(self, puuid: str, count: int) -> Any:
        end = max(count - 1, 0)
        endpoint = f"/lol-match-history/v1/products/lol/{puuid}/matches?begIndex=0&endIndex={end}"
        for attempt in range(_HISTORY_MAX_RETRIES + 1):
            last = attempt == _HISTORY_MAX_RETRIES
            try:
                value = await self.get_json(endpoint)
            except LcuApiError:
                if last:
                    raise
            else:
                if last or is_match_history_valid(value):
                    return value
            await asyncio.sleep(self.history_retry_delay)
        raise AssertionError("unreachable")

    async def _match_history_sgp(self, puuid: str, count: int) -> Any:
        access_token = await self.get_access_token()
        ent_token = await self.get_entitlements_token()

        try:
            locale = await self.get_json("/riotclient/region-locale")
        except LcuApiError:
            region = "hn1"
        else:
            raw_region = _get(locale, "region")
            region = (raw_region if isinstance(raw_region, str) else "hn1").lower()

        if any(marker in region for marker in _SGP_CN_REGIONS):
            url = (
                "https://bgp.pallas.penta.qq.com/sgp/shno/v1/products/lol/player-history/v1/"
                f"products/lol/{puuid}/matches?begIndex=0&endIndex={max(count - 1, 0)}"
            )
        else:
            url = f"https://sgp.pvp.net/match-history-query/v1/products/lol/player/{puuid}/SUMMARY?count={count}"

        headers = {"Authorization": f"Bearer {access_token}", "X-Riot-Entitlements-JWT": ent_token}
        try:
            response = await self.client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise LcuApiError(f"网络错误: {exc}") from exc
        if not response.is_success:
            raise HttpError(response.status_code, "GET (SGP)", url, response.text)
        try:
            value = response.json()
        except ValueError as exc:
            raise LcuApiError(f"JSON 解析错误: {exc}") from exc
        return _normalise_sgp_history(value)