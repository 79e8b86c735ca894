"""In-memory runtime state and the view model shown by the overlay."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RuntimeState:
    """Live session state shared between handlers."""

    current_bench_ids: list[int] = field(default_factory=list)
    premade_analysis_done: bool = False
    premade_ingame_done: bool = False
    active_pick_slot: int | None = None

    def reset_premade_status(self) -> None:
        """Allow premade analysis to run again."""
        self.premade_analysis_done = False
        self.premade_ingame_done = False

    def cancel_pick_task(self) -> None:
        """Forget the bench slot currently being grabbed."""
        self.active_pick_slot = None


@dataclass
class LcuRect:
    """Client window position and size in screen pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class ViewModel:
    """Everything the overlay needs to draw itself."""

    hud1_visible: bool = False
    hud1_title: str = ""
    hud1_lines: list[str] = field(default_factory=list)
    hud2_visible: bool = False
    hud2_selected_slot: int | None = None
    countdown_secs: int | None = None
    lcu_rect: LcuRect = field(default_factory=LcuRect)
    zoom_scale: float = 0.0
    is_connected: bool = False
    current_phase: str = ""