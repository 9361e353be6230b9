from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional, Union

from .categories import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_data_dir() -> Path:
    """
    Local-only storage:
    - macOS: ~/Library/Application Support/typeracer
    - Linux: $XDG_DATA_HOME/typeracer or ~/.local/share/typeracer
    """
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "typeracer"
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "typeracer"
    return home / ".local" / "share" / "typeracer"


def default_config_path() -> Path:
    env = os.environ.get("TYPERACER_CONFIG")
    if env:
        return Path(env)
    return default_data_dir() / "config.json"


THEMES: Dict[str, Dict[str, str]] = {
    "slate": {
        "title": "#e5e7eb",
        "muted": "#64748b",
        "hint": "#93c5fd",
        "ok": "green",
        "bad": "white on red",
        "current": "black on white",
        "upcoming": "#cbd5e1",
        "plot": "#60a5fa",
    },
    "ember": {
        "title": "#fef3c7",
        "muted": "#d6a08a",
        "hint": "#fbbf24",
        "ok": "#fcd34d",
        "bad": "#fef3c7 on #991b1b",
        "current": "#1a1210 on #fde68a",
        "upcoming": "#f3e8e1",
        "plot": "#f97316",
    },
    "mint": {
        "title": "#d1fae5",
        "muted": "#7dd3c7",
        "hint": "#5eead4",
        "ok": "#5eead4",
        "bad": "#d1fae5 on #9f1239",
        "current": "#07161a on #c7f9f1",
        "upcoming": "#c7f9f1",
        "plot": "#34d399",
    },
}


@dataclass
class Settings:
    texts_dir: Path = Path("texts")
    category: str = DEFAULT_CATEGORY
    history_path: Path = field(default_factory=lambda: default_data_dir() / "history.log")
    theme: str = "slate"
    log_level: str = "WARNING"
    log_file: Optional[Path] = field(default_factory=lambda: default_data_dir() / "typeracer.log")

    @property
    def palette(self) -> Dict[str, str]:
        return THEMES.get(self.theme, THEMES["slate"])


_PATH_FIELDS = {"texts_dir", "history_path", "log_file"}
_SETTING_FIELDS = {f.name for f in fields(Settings)}


def load_config(path: Union[str, Path, None] = None) -> Settings:
    """Read settings from a JSON file; missing or broken files give defaults."""
    config_path = Path(path) if path is not None else default_config_path()
    settings = Settings()
    if not config_path.exists():
        return settings
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("ignoring unreadable config %s", config_path, exc_info=True)
        return settings
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: not a JSON object", config_path)
        return settings

    for key, value in data.items():
        if key not in _SETTING_FIELDS:
            logger.warning("unknown config key %r", key)
            continue
        expected = (str, type(None)) if key in _PATH_FIELDS else str
        if not isinstance(value, expected):
            logger.warning("ignoring config key %r: unexpected value %r", key, value)
            continue
        if key in _PATH_FIELDS:
            value = Path(value).expanduser() if value else None
            if value is None and key != "log_file":
                continue
        setattr(settings, key, value)

    if settings.theme not in THEMES:
        logger.warning("unknown theme %r, using slate", settings.theme)
        settings.theme = "slate"
    return settings


def setup_logging(settings: Settings) -> None:
    """Send log output to a file; the terminal belongs to the UI."""
    level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    if settings.log_file is None:
        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.NullHandler()])
        return
    try:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])
