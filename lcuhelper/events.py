"""Application events passed between the connection, UI and main loop."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from lcuhelper.api import LcuClient


class TrayAction(enum.Enum):
    """Actions offered by the tray menu."""

    RELOAD_UX = "reload_ux"
    PLAY_AGAIN = "play_again"
    FIND_FORGOTTEN_LOOT = "find_forgotten_loot"
    FIX_WINDOW = "fix_window"
    TOGGLE_AUTO_ACCEPT = "toggle_auto_accept"
    TOGGLE_AUTO_HONOR = "toggle_auto_honor"
    TOGGLE_PREMADE_CHAMP = "toggle_premade_champ"
    TOGGLE_MEMORY_MONITOR = "toggle_memory_monitor"
    EXIT = "exit"


ID_QUIT = 1001
ID_RELOAD_UX = 1002
ID_PLAY_AGAIN = 1003
ID_FIND_LOOT = 1004
ID_FIX_WINDOW = 1005
ID_AUTO_ACCEPT = 2001
ID_AUTO_HONOR = 2002
ID_PREMADE_CHAMP = 2003
ID_MEMORY_MONITOR = 2004

_COMMAND_ACTIONS = {
    ID_FIX_WINDOW: TrayAction.FIX_WINDOW,
    ID_FIND_LOOT: TrayAction.FIND_FORGOTTEN_LOOT,
    ID_PLAY_AGAIN: TrayAction.PLAY_AGAIN,
    ID_RELOAD_UX: TrayAction.RELOAD_UX,
    ID_AUTO_ACCEPT: TrayAction.TOGGLE_AUTO_ACCEPT,
    ID_AUTO_HONOR: TrayAction.TOGGLE_AUTO_HONOR,
    ID_PREMADE_CHAMP: TrayAction.TOGGLE_PREMADE_CHAMP,
    ID_MEMORY_MONITOR: TrayAction.TOGGLE_MEMORY_MONITOR,
    ID_QUIT: TrayAction.EXIT,
}


def tray_action_for_command(command_id: int) -> TrayAction | None:
    """Map a tray menu command id to its action; None for unknown ids."""
    return _COMMAND_ACTIONS.get(command_id)


@dataclass(frozen=True)
class LcuEvent:
    """A raw event pushed by the client over its WebSocket."""

    uri: str
    payload: Any
    event_type: str

    def to_dict(self) -> dict:
        """The event in its wire layout."""
        return {"uri": self.uri, "data": self.payload, "eventType": self.event_type}


def parse_lcu_event(data: Any) -> LcuEvent:
    """Build an event from its wire form; raises ValueError if it is malformed."""
    if isinstance(data, dict):
        for key in ("uri", "data", "eventType"):
            if key not in data:
                raise ValueError(f"missing field `{key}`")
        uri, payload, event_type = data["uri"], data["data"], data["eventType"]
    elif isinstance(data, list):
        if len(data) != 3:
            raise ValueError(f"invalid length {len(data)}, expected 3 fields")
        uri, payload, event_type = data
    else:
        raise ValueError("event must be an object")
    if not isinstance(uri, str):
        raise ValueError("`uri` must be a string")
    if not isinstance(event_type, str):
        raise ValueError("`eventType` must be a string")
    return LcuEvent(uri, payload, event_type)


@dataclass(frozen=True)
class LcuConnected:
    """The client API became reachable."""

    api: LcuClient


@dataclass(frozen=True)
class LcuDisconnected:
    """The client connection was lost."""


@dataclass(frozen=True)
class LcuEventReceived:
    """A WebSocket event arrived from the client."""

    event: LcuEvent


@dataclass(frozen=True)
class TrayActionEvent:
    """A tray menu entry was chosen."""

    action: TrayAction


@dataclass(frozen=True)
class BenchClick:
    """A bench slot on the overlay was clicked."""

    slot: int


@dataclass(frozen=True)
class SniperFinished:
    """A champion grab task for a bench slot ended."""

    slot: int


@dataclass(frozen=True)
class HotKeyF1:
    """The global F1 hotkey was pressed."""


@dataclass(frozen=True)
class Tick:
    """Once-per-second timer signal."""


@dataclass(frozen=True)
class ScoutResult:
    """A finished player rating or premade analysis."""

    puuid: str
    content: str
    is_premade: bool
    is_enemy: bool


@dataclass(frozen=True)
class WindowRectUpdated:
    """The client window moved, resized or changed zoom."""

    x: int
    y: int
    width: int
    height: int
    zoom_scale: float


@dataclass(frozen=True)
class Quit:
    """The program should exit."""


AppEvent = Union[
    LcuConnected,
    LcuDisconnected,
    LcuEventReceived,
    TrayActionEvent,
    BenchClick,
    SniperFinished,
    HotKeyF1,
    Tick,
    ScoutResult,
    WindowRectUpdated,
    Quit,
]