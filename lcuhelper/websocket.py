"""Client WebSocket subscription and event filtering."""

from __future__ import annotations

import json
import logging
import ssl
from collections.abc import AsyncIterator

import websockets
from websockets.asyncio.client import connect

from lcuhelper.events import LcuEvent, parse_lcu_event

log = logging.getLogger(__name__)

_OPCODE_SUBSCRIBE = 5
_OPCODE_EVENT = 8
_EVENT_NAME = "OnJsonApiEvent"
_MAX_MESSAGE_SIZE = 64 * 1024 * 1024
_RELEVANT_MARKERS = ("gameflow", "champ-select", "ready-check", "lobby")


def subscribe_message() -> str:
    """The message that subscribes to every API event."""
    return json.dumps([_OPCODE_SUBSCRIBE, _EVENT_NAME], separators=(",", ":"))


def is_relevant_uri(uri: str) -> bool:
    """True for event URIs the application cares about."""
    return any(marker in uri for marker in _RELEVANT_MARKERS)


def parse_ws_message(text: str) -> LcuEvent | None:
    """Extract the API event from a WebSocket text frame, or None."""
    try:
        message = json.loads(text)
    except ValueError:
        return None
    if not isinstance(message, list) or len(message) < 3:
        return None
    opcode = message[0]
    if not isinstance(opcode, int) or isinstance(opcode, bool) or opcode != _OPCODE_EVENT:
        return None
    if message[1] != _EVENT_NAME:
        return None
    try:
        return parse_lcu_event(message[2])
    except ValueError:
        return None


def _insecure_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


async def listen_events(port: int, auth_header: str) -> AsyncIterator[LcuEvent]:
    """Connect to the client WebSocket and yield relevant events until it closes.

    Connection errors propagate; a closed or broken connection ends the stream.
    """
    url = f"wss://127.0.0.1:{port}"
    log.info("正在连接 LCU WebSocket: %s...", url)
    async with connect(
        url,
        ssl=_insecure_context(),
        additional_headers={"Authorization": auth_header},
        max_size=_MAX_MESSAGE_SIZE,
    ) as ws:
        await ws.send(subscribe_message())
        log.info("已成功订阅 LCU OnJsonApiEvent")
        try:
            async for message in ws:
                if not isinstance(message, str):
                    continue
                event = parse_ws_message(message)
                if event is None or not is_relevant_uri(event.uri):
                    continue
                log.debug("WS 广播事件: %s (%s)", event.uri, event.event_type)
                yield event
            log.warning("LCU WebSocket 连接已关闭")
        except websockets.exceptions.ConnectionClosed as exc:
            log.error("LCU WebSocket 读取错误: %s", exc)
    log.info("WebSocket 任务已退出")