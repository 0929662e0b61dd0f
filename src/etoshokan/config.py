from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "DEFAULT_JMDICT_URL",
    "DictionaryConfig",
    "JMDICT_CACHE_KEY",
    "JMDICT_VERSION",
    "load_config",
]

JMDICT_VERSION = "3.6.2+20260202123847"
DEFAULT_JMDICT_URL = (
    "https://github.com/scriptin/jmdict-simplified/releases/download/"
    f"{JMDICT_VERSION}/jmdict-eng-{JMDICT_VERSION}.json.zip"
)
JMDICT_CACHE_KEY = "etoshokan:jm_dict_json"

_STATE_DIR_ENV = "ETOSHOKAN_STATE_DIR"
_JMDICT_URL_ENV = "ETOSHOKAN_JMDICT_URL"
_JMDICT_ZIP_ENV = "ETOSHOKAN_JMDICT_ZIP"


def _state_dir() -> Path:
    env_dir = os.environ.get(_STATE_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".local" / "share" / "etoshokan"


def _archive_path() -> Path | None:
    env_path = os.environ.get(_JMDICT_ZIP_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return None


@dataclass(slots=True)
class DictionaryConfig:
    archive_url: str = field(default_factory=lambda: os.environ.get(_JMDICT_URL_ENV) or DEFAULT_JMDICT_URL)
    archive_path: Path | None = field(default_factory=_archive_path)
    state_dir: Path = field(default_factory=_state_dir)
    cache_key: str = JMDICT_CACHE_KEY
    timeout: float = 60.0
    show_progress: bool = False


def load_config(**overrides: object) -> DictionaryConfig:
    """Build a config from the environment, then apply non-None keyword overrides."""
    config = DictionaryConfig()
    for name, value in overrides.items():
        if value is None:
            continue
        if not hasattr(config, name):
            raise TypeError(f"Unknown dictionary config option: {name}")
        if name in {"archive_path", "state_dir"}:
            value = Path(str(value)).expanduser()
        setattr(config, name, value)
    return config
