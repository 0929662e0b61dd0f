from __future__ import annotations

import pytest

from etoshokan.romaji import is_romaji, to_hiragana


@pytest.mark.parametrize("text", ["neko", "Tokyo", "kan'i", "tōkyō", "konnichiwa ", "123"])
def test_is_romaji_accepts_latin_input(text: str) -> None:
    assert is_romaji(text)


@pytest.mark.parametrize("text", ["", "猫", "ねこ", "neko猫", "ネコ"])
def test_is_romaji_rejects_japanese_and_empty(text: str) -> None:
    assert not is_romaji(text)


@pytest.mark.parametrize(
    ("romaji", "kana"),
    [
        ("neko", "ねこ"),
        ("aiueo", "あいうえお"),
        ("kakikukeko", "かきくけこ"),
        ("hahihuheho", "はひふへほ"),
        ("Neko", "ねこ"),
        ("kitte", "きって"),
        ("matcha", "まっちゃ"),
        ("shinbun", "しんぶん"),
        ("konnichiwa", "こんにちわ"),
        ("onna", "おんな"),
        ("kan'i", "かんい"),
        ("tōkyō", "とうきょう"),
        ("kyoushi", "きょうし"),
        ("sushi", "すし"),
        ("tsukue", "つくえ"),
        ("chikatetsu", "ちかてつ"),
        ("jisho", "じしょ"),
        ("fuji", "ふじ"),
        ("sensei", "せんせい"),
        ("hon", "ほん"),
        ("si", "し"),
        ("tu", "つ"),
        ("ryokou", "りょこう"),
        ("gyuunyuu", "ぎゅうにゅう"),
        ("wo", "を"),
        ("xtsu", "っ"),
        ("ra-men", "らーめん"),
    ],
)
def test_to_hiragana(romaji: str, kana: str) -> None:
    assert to_hiragana(romaji) == kana


@pytest.mark.parametrize(
    ("romaji", "kana"),
    [
        ("NEKO", "ネコ"),
        ("BOKU", "ボク"),
        ("KITTE", "キッテ"),
        ("TŌKYŌ", "トウキョウ"),
        ("RA-MEN", "ラーメン"),
    ],
)
def test_upper_case_romaji_becomes_katakana(romaji: str, kana: str) -> None:
    assert to_hiragana(romaji) == kana


def test_to_hiragana_preserves_surrounding_whitespace() -> None:
    assert to_hiragana(" neko ") == " ねこ "


def test_to_hiragana_passes_unknown_characters_through() -> None:
    assert to_hiragana("neko1") == "ねこ1"
