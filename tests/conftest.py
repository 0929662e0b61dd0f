from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path

import pytest

from etoshokan.config import DictionaryConfig


def _word(word_id, kanji, kana, senses):
    return {
        "id": word_id,
        "kanji": [{"text": text, "common": True, "tags": []} for text in kanji],
        "kana": [
            {"text": text, "common": True, "tags": [], "appliesToKanji": ["*"]}
            for text in kana
        ],
        "sense": senses,
    }


def _sense(pos, *glosses, misc=(), info=(), extra_langs=()):
    gloss = [{"lang": "eng", "gender": None, "type": None, "text": text} for text in glosses]
    gloss.extend(
        {"lang": lang, "gender": None, "type": None, "text": text} for lang, text in extra_langs
    )
    return {
        "partOfSpeech": list(pos),
        "appliesToKanji": ["*"],
        "appliesToKana": ["*"],
        "related": [],
        "antonym": [],
        "field": [],
        "dialect": [],
        "misc": list(misc),
        "info": list(info),
        "languageSource": [],
        "gloss": gloss,
    }


def build_sample_payload() -> dict[str, object]:
    return {
        "version": "3.6.2",
        "languages": ["eng"],
        "commonOnly": False,
        "dictDate": "2026-02-02",
        "dictRevisions": ["1.09"],
        "tags": {"n": "noun (common) (futsuumeishi)", "uk": "word usually written using kana alone"},
        "words": [
            _word(
                "1467640",
                ["猫"],
                ["ねこ"],
                [_sense(["n"], "cat", extra_langs=[("ger", "Katze")])],
            ),
            _word("1374030", ["木"], ["き"], [_sense(["n"], "tree", "shrub")]),
            _word(
                "1501150",
                ["木"],
                ["もく"],
                [_sense(["n-adv", "n"], "Thursday", info=["abbreviation"], misc=["abbr"])],
            ),
            _word("1221520", ["気"], ["き"], [_sense(["n"], "spirit", "mind")]),
            _word("2000010", [], ["ぼく"], [_sense(["pn"], "I (male)")]),
            _word("2000020", ["ぼく"], ["ボク"], [_sense(["n"], "servant (archaic)")]),
        ],
    }


@pytest.fixture
def sample_payload() -> dict[str, object]:
    return build_sample_payload()


@pytest.fixture
def sample_zip(tmp_path: Path) -> Path:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(
            "jmdict-eng-3.6.2.json",
            json.dumps(build_sample_payload(), ensure_ascii=False),
        )
    archive = tmp_path / "jmdict-eng-3.6.2.json.zip"
    archive.write_bytes(buffer.getvalue())
    return archive


@pytest.fixture
def dictionary_config(tmp_path: Path) -> DictionaryConfig:
    return DictionaryConfig(
        archive_url="",
        archive_path=None,
        state_dir=tmp_path / "state",
    )
