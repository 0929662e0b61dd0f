"""
Romaji detection and romaji → hiragana conversion.

Accepts Hepburn and Kunrei-shiki spellings (``shi``/``si``, ``tsu``/``tu``,
``chi``/``ti``, ``fu``/``hu``), doubled consonants for the small tsu
(``kitte`` → きって, ``matcha`` → まっちゃ), ``n'`` / ``nn`` for the moraic
nasal, macron vowels (``tōkyō`` → とうきょう) and ``x``/``l`` prefixes for small
kana. Characters that have no kana equivalent are passed through unchanged.
Upper-case spellings produce katakana (``NEKO`` → ネコ, ``BOKU`` → ボク).
"""

from __future__ import annotations

__all__ = ["is_romaji", "to_hiragana"]

# Column order of the kana rows below.
_VOWELS = "aiueo"

_MACRONS = {
    "ā": "aa",
    "ē": "ee",
    "ī": "ii",
    "ō": "ou",
    "ū": "uu",
    "â": "aa",
    "ê": "ee",
    "î": "ii",
    "ô": "ou",
    "û": "uu",
    "Ā": "AA",
    "Ē": "EE",
    "Ī": "II",
    "Ō": "OU",
    "Ū": "UU",
}

# Extra characters accepted as romaji besides 7-bit ASCII: macron vowels and
# typographic quotes.
_ROMAJI_EXTRA = set(_MACRONS) | set("‘’“”")

_PUNCTUATION = {
    ".": "。",
    ",": "、",
    "-": "ー",
    "~": "〜",
    "!": "！",
    "?": "？",
    "[": "「",
    "]": "」",
    "(": "（",
    ")": "）",
    " ": " ",
}

_ROWS = {
    "": ("あ", "い", "う", "え", "お"),
    "k": ("か", "き", "く", "け", "こ"),
    "g": ("が", "ぎ", "ぐ", "げ", "ご"),
    "s": ("さ", "し", "す", "せ", "そ"),
    "z": ("ざ", "じ", "ず", "ぜ", "ぞ"),
    "t": ("た", "ち", "つ", "て", "と"),
    "d": ("だ", "ぢ", "づ", "で", "ど"),
    "n": ("な", "に", "ぬ", "ね", "の"),
    "h": ("は", "ひ", "ふ", "へ", "ほ"),
    "b": ("ば", "び", "ぶ", "べ", "ぼ"),
    "p": ("ぱ", "ぴ", "ぷ", "ぺ", "ぽ"),
    "m": ("ま", "み", "む", "め", "も"),
    "r": ("ら", "り", "る", "れ", "ろ"),
    "y": ("や", "い", "ゆ", "いぇ", "よ"),
    "w": ("わ", "うぃ", "う", "うぇ", "を"),
    "v": ("ゔぁ", "ゔぃ", "ゔ", "ゔぇ", "ゔぉ"),
    "f": ("ふぁ", "ふぃ", "ふ", "ふぇ", "ふぉ"),
    "j": ("じゃ", "じ", "じゅ", "じぇ", "じょ"),
    "sh": ("しゃ", "し", "しゅ", "しぇ", "しょ"),
    "ch": ("ちゃ", "ち", "ちゅ", "ちぇ", "ちょ"),
    "ts": ("つぁ", "つぃ", "つ", "つぇ", "つぉ"),
    "dz": ("ぢゃ", "ぢ", "づ", "ぢぇ", "ぢょ"),
}

# Consonant + y combinations (kya, sha via sy, ...), using the i-column kana.
_YOUON_BASES = {
    "k": "き",
    "g": "ぎ",
    "s": "し",
    "z": "じ",
    "t": "ち",
    "c": "ち",
    "d": "ぢ",
    "n": "に",
    "h": "ひ",
    "b": "び",
    "p": "ぴ",
    "m": "み",
    "r": "り",
    "j": "じ",
}

_SMALL_Y = {"a": "ゃ", "u": "ゅ", "o": "ょ", "e": "ぇ", "i": "ぃ"}

_SMALL_KANA = {
    "a": "ぁ",
    "i": "ぃ",
    "u": "ぅ",
    "e": "ぇ",
    "o": "ぉ",
    "ya": "ゃ",
    "yu": "ゅ",
    "yo": "ょ",
    "tu": "っ",
    "tsu": "っ",
    "wa": "ゎ",
    "ka": "ゕ",
    "ke": "ゖ",
}


def _build_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for consonant, kana in _ROWS.items():
        for vowel, value in zip(_VOWELS, kana):
            table[consonant + vowel] = value
    for consonant, base in _YOUON_BASES.items():
        for vowel, small in _SMALL_Y.items():
            table[f"{consonant}y{vowel}"] = base + small
    for prefix in ("x", "l"):
        for key, value in _SMALL_KANA.items():
            table[prefix + key] = value
    table.update(
        {
            # Kunrei-shiki and common alternates.
            "si": "し",
            "ti": "ち",
            "tu": "つ",
            "hu": "ふ",
            "zi": "じ",
            "di": "ぢ",
            "du": "づ",
            "ca": "か",
            "cu": "く",
            "co": "こ",
            "ci": "し",
            "ce": "せ",
            "qa": "くぁ",
            "qi": "くぃ",
            "qe": "くぇ",
            "qo": "くぉ",
            "wi": "うぃ",
            "we": "うぇ",
            "ye": "いぇ",
            "thi": "てぃ",
            "dhi": "でぃ",
            "twu": "とぅ",
            "dwu": "どぅ",
            "tsu": "つ",
            "n'": "ん",
            "xn": "ん",
        }
    )
    return table


_TABLE = _build_table()
_MAX_CHUNK = max(len(key) for key in _TABLE)


def is_romaji(text: str) -> bool:
    """
    Return True when every character of ``text`` can be romaji input.

    Latin letters, digits, ASCII punctuation and whitespace, macron vowels and
    typographic quotes all qualify; an empty string does not.
    """
    if not text:
        return False
    return all(ord(ch) < 0x80 or ch in _ROMAJI_EXTRA for ch in text)


def _expand_macrons(text: str) -> str:
    return "".join(_MACRONS.get(ch, ch) for ch in text)


def _to_katakana(kana: str) -> str:
    return "".join(chr(ord(ch) + 0x60) if 0x3041 <= ord(ch) <= 0x3096 else ch for ch in kana)


def to_hiragana(text: str) -> str:
    original = _expand_macrons(text)
    source = original.lower()
    result: list[str] = []

    def emit(kana: str, start: int, size: int) -> None:
        # Upper-case romaji is written in katakana.
        result.append(_to_katakana(kana) if original[start : start + size].isupper() else kana)

    index = 0
    length = len(source)
    while index < length:
        ch = source[index]
        nxt = source[index + 1] if index + 1 < length else ""

        if ch == "n":
            if nxt == "'":
                emit("ん", index, 2)
                index += 2
                continue
            if nxt == "n":
                after = source[index + 2] if index + 2 < length else ""
                emit("ん", index, 1)
                # "nna" keeps the second n for な; a trailing or consonant-led "nn" is one ん.
                index += 1 if after and after in "aeiouy" else 2
                continue
            if not nxt or (nxt not in _VOWELS and nxt != "y"):
                emit("ん", index, 1)
                index += 1
                continue

        if ch.isalpha() and ch not in _VOWELS and ch != "n":
            if nxt == ch or (ch == "t" and nxt == "c"):
                emit("っ", index, 1)
                index += 1
                continue

        for size in range(min(_MAX_CHUNK, length - index), 0, -1):
            kana = _TABLE.get(source[index : index + size])
            if kana is not None:
                emit(kana, index, size)
                index += size
                break
        else:
            result.append(_PUNCTUATION.get(ch, ch))
            index += 1
    return "".join(result)
