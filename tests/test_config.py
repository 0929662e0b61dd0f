from __future__ import annotations

from pathlib import Path

import pytest

from etoshokan.config import DEFAULT_JMDICT_URL, JMDICT_CACHE_KEY, load_config


def test_defaults_without_environment(monkeypatch, tmp_path: Path) -> None:
    for name in ("ETOSHOKAN_STATE_DIR", "ETOSHOKAN_JMDICT_URL", "ETOSHOKAN_JMDICT_ZIP"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    config = load_config()

    assert config.archive_url == DEFAULT_JMDICT_URL
    assert config.archive_path is None
    assert config.state_dir == tmp_path / ".local" / "share" / "etoshokan"
    assert config.cache_key == JMDICT_CACHE_KEY == "etoshokan:jm_dict_json"


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ETOSHOKAN_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("ETOSHOKAN_JMDICT_URL", "https://mirror.test/jmdict.zip")
    monkeypatch.setenv("ETOSHOKAN_JMDICT_ZIP", str(tmp_path / "jmdict.zip"))

    config = load_config()

    assert config.state_dir == tmp_path / "state"
    assert config.archive_url == "https://mirror.test/jmdict.zip"
    assert config.archive_path == tmp_path / "jmdict.zip"


def test_keyword_overrides_win_and_none_is_ignored(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ETOSHOKAN_JMDICT_URL", "https://mirror.test/jmdict.zip")

    config = load_config(archive_url=None, state_dir=str(tmp_path), timeout=5.0)

    assert config.archive_url == "https://mirror.test/jmdict.zip"
    assert config.state_dir == tmp_path
    assert config.timeout == 5.0


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(TypeError, match="colour"):
        load_config(colour="blue")
