from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .dictionary import Example, Language, PartOfSpeech, Sense, SenseMeta, WordEntry
from .jmdict import JMdictRoot, JMdictSense, JMdictWord
from .normalization import normalize_key

__all__ = [
    "ENGLISH_GLOSS_CODES",
    "JMdictIndexes",
    "JMdictSenseMeta",
    "LookupIndex",
    "PART_OF_SPEECH_RULES",
    "build_indexes",
    "build_sense",
    "build_senses",
    "index_word",
    "map_part_of_speech",
]


# jmdict-simplified tags glosses with ISO 639-2 codes; "en" is accepted as well.
ENGLISH_GLOSS_CODES: tuple[str, ...] = ("eng", "en")

# Ordered (match kind, pattern, category) rules applied to the first JMdict
# part-of-speech tag, lowercased. The first matching rule wins.
PART_OF_SPEECH_RULES: tuple[tuple[str, str, PartOfSpeech], ...] = (
    ("prefix", "n", "noun"),
    ("prefix", "v", "verb"),
    ("prefix", "adj", "adjective"),
    ("prefix", "adv", "adverb"),
    ("prefix", "pron", "pronoun"),
    ("exact", "prt", "particle"),
    ("contains", "particle", "particle"),
    ("exact", "conj", "conjunction"),
    ("contains", "conjunction", "conjunction"),
    ("exact", "int", "interjection"),
    ("contains", "interjection", "interjection"),
    ("exact", "aux", "auxiliary"),
    ("exact", "pref", "prefix"),
    ("exact", "suf", "suffix"),
    ("contains", "expression", "expression"),
)


def _rule_matches(kind: str, pattern: str, tag: str) -> bool:
    if kind == "prefix":
        return tag.startswith(pattern)
    if kind == "exact":
        return tag == pattern
    return pattern in tag


def map_part_of_speech(tags: Sequence[str] | None) -> PartOfSpeech | None:
    if not tags:
        return None
    tag = tags[0].lower()
    for kind, pattern, category in PART_OF_SPEECH_RULES:
        if _rule_matches(kind, pattern, tag):
            return category
    return None


@dataclass(frozen=True, slots=True)
class JMdictSenseMeta(SenseMeta):
    """Raw JMdict detail kept alongside the normalized sense."""

    glosses: tuple[str, ...] = ()
    pos: tuple[str, ...] = ()
    applies_to_kanji: tuple[str, ...] = ()
    applies_to_kana: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "glosses": list(self.glosses),
            "pos": list(self.pos),
            "applies_to_kanji": list(self.applies_to_kanji),
            "applies_to_kana": list(self.applies_to_kana),
        }


def _build_examples(sense: JMdictSense, gloss_languages: tuple[str, ...]) -> tuple[Example, ...]:
    examples: list[Example] = []
    for example in sense.examples:
        text = example.sentences.get("jpn")
        if not text:
            continue
        translation = next(
            (example.sentences[lang] for lang in gloss_languages if lang in example.sentences),
            None,
        )
        examples.append(Example(text=text, translation=translation))
    return tuple(examples)


def build_sense(sense: JMdictSense, gloss_languages: tuple[str, ...] = ENGLISH_GLOSS_CODES) -> Sense:
    notes = [*sense.info, *sense.misc]
    return Sense(
        part_of_speech=map_part_of_speech(sense.part_of_speech),
        notes=tuple(notes) if notes else None,
        examples=_build_examples(sense, gloss_languages),
        meta=JMdictSenseMeta(
            glosses=tuple(sense.glosses_for(*gloss_languages)),
            pos=tuple(sense.part_of_speech),
            applies_to_kanji=tuple(sense.applies_to_kanji),
            applies_to_kana=tuple(sense.applies_to_kana),
        ),
    )


def build_senses(
    senses: Iterable[JMdictSense],
    gloss_languages: tuple[str, ...] = ENGLISH_GLOSS_CODES,
) -> tuple[Sense, ...]:
    return tuple(build_sense(sense, gloss_languages) for sense in senses)


@dataclass(slots=True)
class LookupIndex:
    """Normalized spelling → entries, kept in insertion order per key."""

    entries: dict[str, list[WordEntry]] = field(default_factory=dict)

    def add(self, spelling: str, entry: WordEntry) -> None:
        self.entries.setdefault(normalize_key(spelling), []).append(entry)

    def get(self, key: str) -> list[WordEntry]:
        return self.entries.get(key, [])

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


@dataclass(slots=True)
class JMdictIndexes:
    kanji: LookupIndex = field(default_factory=LookupIndex)
    kana: LookupIndex = field(default_factory=LookupIndex)
    words: int = 0

    def probe(self, key: str) -> list[WordEntry]:
        """Return kanji matches then kana matches, dropping repeated (term, reading) pairs."""
        seen: set[tuple[str, str]] = set()
        results: list[WordEntry] = []
        for entry in (*self.kanji.get(key), *self.kana.get(key)):
            identity = entry.identity
            if identity in seen:
                continue
            seen.add(identity)
            results.append(entry)
        return results


def index_word(
    indexes: JMdictIndexes,
    word: JMdictWord,
    *,
    language: Language,
    gloss_languages: tuple[str, ...],
) -> None:
    senses = build_senses(word.sense, gloss_languages)
    canonical_reading = word.kana[0].text if word.kana else None
    for kanji in word.kanji:
        indexes.kanji.add(
            kanji.text,
            WordEntry(
                term=kanji.text,
                reading=canonical_reading,
                language=language,
                senses=senses,
            ),
        )
    for kana in word.kana:
        indexes.kana.add(
            kana.text,
            WordEntry(
                term=kana.text,
                reading=kana.text,
                language=language,
                senses=senses,
            ),
        )
    indexes.words += 1


def build_indexes(
    document: JMdictRoot,
    *,
    language: Language = "jp",
    gloss_languages: tuple[str, ...] = ENGLISH_GLOSS_CODES,
) -> JMdictIndexes:
    indexes = JMdictIndexes()
    for word in document.words:
        index_word(indexes, word, language=language, gloss_languages=gloss_languages)
    return indexes
