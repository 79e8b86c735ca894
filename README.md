# lcuhelper

A library of helpers for automating the League of Legends client. It has no
command-line entry point; you import it from your own code.

## Modules

- `lcuhelper.api` – `LcuClient(base_url, http_client=None)`, an async client
  for the client's local HTTP API built on `httpx`. It covers the summoner, the
  gameflow phase and session, zoom scale, UI reload, lobby, ready check,
  end-of-game stats, chat (`send_message_to_self` and friends), loot, honor
  (`skip_honor_vote`), champion select (hover, lock, reroll, bench swap,
  `get_champion_id_name_map`) and match history. `get_match_history` tries the
  local endpoint first (with two retries) and falls back to the remote history
  service. Error statuses raise `HttpError` (with `status`, `method`,
  `endpoint`, `body`); other failures raise `LcuApiError`. Phase names are
  available as constants such as `PHASE_CHAMP_SELECT`.
- `lcuhelper.websocket` – `listen_events(port, auth_header)` is an async
  generator that connects to `wss://127.0.0.1:<port>` without certificate
  checks, subscribes to `OnJsonApiEvent` and yields `LcuEvent`s whose URI
  concerns gameflow, champ-select, ready-check or lobby. `parse_ws_message`,
  `is_relevant_uri` and `subscribe_message` are the pure pieces it uses.
- `lcuhelper.events` – `LcuEvent`, `parse_lcu_event`, the `TrayAction` enum,
  `tray_action_for_command` for menu command ids, and frozen dataclasses for
  application events (`LcuConnected`, `Tick`, `BenchClick`, `ScoutResult`,
  `WindowRectUpdated`, `Quit`, ...), joined in the `AppEvent` union.
- `lcuhelper.premade` – infers premade groups: two players are linked when
  their recent histories share at least `threshold` games (default 3) with the
  same result, and linked players are merged. `analyze_premade` fetches
  histories concurrently through an `LcuClient`; `calc_inferred_premade`,
  `count_common_games` and `extract_game_win_map` do the work on data you
  already have. `extract_teams_from_session` and
  `extract_teams_from_gameflow_session` pull players from session documents,
  and `format_premade_message` renders the result as text.
- `lcuhelper.prophet` – `calculate_player_rating`, `calculate_akari_score` and
  `get_grade_name` score players from recent matches.
- `lcuhelper.loot` – `find_claimable_loot`, `format_loot_summary` and
  `handle_find_forgotten_loot(api, confirm, notify)`, which asks your `confirm`
  callback before claiming and calls `notify` when nothing is found.
- `lcuhelper.session` – pure readers for champion-select sessions:
  `extract_bench_champion_ids`, `get_local_player`, `iter_actions`,
  `find_local_action`.
- `lcuhelper.config` – `AppConfig`, `load_config(path=None)`,
  `AppConfig.save(path=None)` and `default_config_path()`, which is
  `%APPDATA%/lol-lcu/config.json` (or `./lol-lcu/config.json` without
  `APPDATA`). Loading falls back to defaults when the file is missing or
  invalid; saving ignores file-system errors.
- `lcuhelper.state` – `RuntimeState`, `ViewModel` and `LcuRect` dataclasses.
- `lcuhelper.layout` – bench-slot geometry (`get_bench_container_rect`,
  `get_slot_rect`, `hit_slot`, `FRect`) and info-panel colours (`rgb`,
  `line_color`).
- `lcuhelper.window` – window rules as plain calculations: `need_resize`,
  `target_window_geometry`, `opacity_alpha`, `client_click_point`,
  `postgame_continue_ratios`.

## What it does not do

- It does not find the running client or read its port and credentials; you
  pass the base URL, port and `Authorization` value yourself.
- It draws no overlay, tray icon or dialogs and calls no window-system APIs;
  `layout` and `window` only compute coordinates, colours and sizes.
- It has no main loop or program to run; wiring events to actions is up to you.

## Installation

```
pip install .
```

## Example

```python
import asyncio
import httpx
from lcuhelper.api import LcuClient
from lcuhelper.websocket import listen_events

async def main():
    async with httpx.AsyncClient(verify=False, headers={"Authorization": "Basic token"}) as http:
        api = LcuClient("https://127.0.0.1:2999", http)
        print(await api.get_gameflow_phase())

    async for event in listen_events(2999, "Basic token"):
        print(event.uri, event.event_type)

asyncio.run(main())
```

## Running the tests

```
pip install -e .[test]
pytest
```