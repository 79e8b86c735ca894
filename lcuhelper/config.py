"""User-adjustable runtime options, persisted as a JSON file."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import asdict, dataclass, fields
from pathlib import Path

log = logging.getLogger(__name__)

_U64_MAX = 2**64 - 1
_U8_MAX = 255
_BYTE_FIELDS = frozenset({"opacity"})


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the configuration file path under ``%APPDATA%`` (or the current directory)."""
    env = os.environ if environ is None else environ
    return Path(env.get("APPDATA", ".")) / "lol-lcu" / "config.json"


@dataclass
class AppConfig:
    """Persistable user configuration."""

    auto_accept_enabled: bool = True
    auto_accept_delay_secs: int = 5
    auto_honor_skip: bool = True
    premade_champ_select: bool = True
    premade_ingame: bool = True
    memory_monitor: bool = True
    memory_threshold_mb: int = 1500
    opacity: int = 95

    @classmethod
    def from_dict(cls, data: Mapping) -> AppConfig:
        """Build a config from a mapping; missing keys take defaults.

        Raises ValueError if a present key holds a value of the wrong kind.
        """
        values = {}
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            if isinstance(field.default, bool):
                if not isinstance(value, bool):
                    raise ValueError(f"{field.name} must be a boolean")
            else:
                limit = _U8_MAX if field.name in _BYTE_FIELDS else _U64_MAX
                if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
                    raise ValueError(f"{field.name} must be an integer in 0..={limit}")
            values[field.name] = value
        return cls(**values)

    def to_json(self) -> str:
        """Serialise as pretty-printed JSON."""
        return json.dumps(asdict(self), indent=2, ensure_ascii=False)

    def save(self, path: str | os.PathLike | None = None) -> None:
        """Write the configuration; file-system errors are ignored."""
        target = Path(path) if path is not None else default_config_path()
        with suppress(OSError):
            target.parent.mkdir(parents=True, exist_ok=True)
        with suppress(OSError):
            target.write_text(self.to_json(), encoding="utf-8")


def load_config(path: str | os.PathLike | None = None) -> AppConfig:
    """Load the configuration, falling back to defaults on any problem."""
    target = Path(path) if path is not None else default_config_path()
    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return AppConfig()
    log.info("已加载配置: %s", target)
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        return AppConfig.from_dict(data)
    except ValueError:
        return AppConfig()