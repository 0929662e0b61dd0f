from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

__all__ = [
    "JMdictExample",
    "JMdictGloss",
    "JMdictKana",
    "JMdictKanji",
    "JMdictLanguageSource",
    "JMdictRoot",
    "JMdictSense",
    "JMdictWord",
]


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _mapping_list(value: object) -> list[Mapping[str, object]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(slots=True)
class JMdictKanji:
    text: str
    common: bool = False
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictKanji":
        return cls(
            text=str(data.get("text", "")),
            common=bool(data.get("common", False)),
            tags=_str_list(data.get("tags")),
        )

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, "common": self.common, "tags": list(self.tags)}


@dataclass(slots=True)
class JMdictKana:
    text: str
    common: bool = False
    tags: list[str] = field(default_factory=list)
    applies_to_kanji: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictKana":
        return cls(
            text=str(data.get("text", "")),
            common=bool(data.get("common", False)),
            tags=_str_list(data.get("tags")),
            applies_to_kanji=_str_list(data.get("appliesToKanji")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "text": self.text,
            "common": self.common,
            "tags": list(self.tags),
            "appliesToKanji": list(self.applies_to_kanji),
        }


@dataclass(slots=True)
class JMdictGloss:
    lang: str
    text: str
    gender: str | None = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictGloss":
        return cls(
            lang=str(data.get("lang", "")),
            text=str(data.get("text", "")),
            gender=_optional_str(data.get("gender")),
            type=_optional_str(data.get("type")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "lang": self.lang,
            "gender": self.gender,
            "type": self.type,
            "text": self.text,
        }


@dataclass(slots=True)
class JMdictLanguageSource:
    lang: str
    text: str | None = None
    partial: bool = False
    wasei: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictLanguageSource":
        return cls(
            lang=str(data.get("lang", "")),
            text=_optional_str(data.get("text")),
            partial=bool(data.get("partial", False)),
            wasei=bool(data.get("wasei", False)),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "lang": self.lang,
            "text": self.text,
            "partial": self.partial,
            "wasei": self.wasei,
        }


@dataclass(slots=True)
class JMdictExample:
    """Example sentence pair attached to a sense (jmdict-examples builds only)."""

    source: str | None
    text: str
    sentences: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictExample":
        source = data.get("source")
        source_value = None
        if isinstance(source, Mapping):
            source_value = _optional_str(source.get("value"))
        sentences: dict[str, str] = {}
        for sentence in _mapping_list(data.get("sentences")):
            lang = sentence.get("land") or sentence.get("lang")
            text = sentence.get("text")
            if isinstance(lang, str) and isinstance(text, str):
                sentences.setdefault(lang, text)
        return cls(
            source=source_value,
            text=str(data.get("text", "")),
            sentences=sentences,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "source": {"type": "tatoeba", "value": self.source} if self.source else None,
            "text": self.text,
            "sentences": [
                {"land": lang, "text": text} for lang, text in self.sentences.items()
            ],
        }


def _related_list(value: object) -> list[list[str | int]]:
    if not isinstance(value, list):
        return []
    related: list[list[str | int]] = []
    for item in value:
        if isinstance(item, list):
            related.append([part for part in item if isinstance(part, (str, int))])
    return related


@dataclass(slots=True)
class JMdictSense:
    part_of_speech: list[str] = field(default_factory=list)
    applies_to_kanji: list[str] = field(default_factory=list)
    applies_to_kana: list[str] = field(default_factory=list)
    related: list[list[str | int]] = field(default_factory=list)
    antonym: list[list[str | int]] = field(default_factory=list)
    field_tags: list[str] = field(default_factory=list)
    dialect: list[str] = field(default_factory=list)
    misc: list[str] = field(default_factory=list)
    info: list[str] = field(default_factory=list)
    language_source: list[JMdictLanguageSource] = field(default_factory=list)
    gloss: list[JMdictGloss] = field(default_factory=list)
    examples: list[JMdictExample] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictSense":
        return cls(
            part_of_speech=_str_list(data.get("partOfSpeech")),
            applies_to_kanji=_str_list(data.get("appliesToKanji")),
            applies_to_kana=_str_list(data.get("appliesToKana")),
            related=_related_list(data.get("related")),
            antonym=_related_list(data.get("antonym")),
            field_tags=_str_list(data.get("field")),
            dialect=_str_list(data.get("dialect")),
            misc=_str_list(data.get("misc")),
            info=_str_list(data.get("info")),
            language_source=[
                JMdictLanguageSource.from_dict(item)
                for item in _mapping_list(data.get("languageSource"))
            ],
            gloss=[JMdictGloss.from_dict(item) for item in _mapping_list(data.get("gloss"))],
            examples=[
                JMdictExample.from_dict(item) for item in _mapping_list(data.get("examples"))
            ],
        )

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "partOfSpeech": list(self.part_of_speech),
            "appliesToKanji": list(self.applies_to_kanji),
            "appliesToKana": list(self.applies_to_kana),
            "related": [list(item) for item in self.related],
            "antonym": [list(item) for item in self.antonym],
            "field": list(self.field_tags),
            "dialect": list(self.dialect),
            "misc": list(self.misc),
            "info": list(self.info),
            "languageSource": [item.to_dict() for item in self.language_source],
            "gloss": [item.to_dict() for item in self.gloss],
        }
        if self.examples:
            payload["examples"] = [item.to_dict() for item in self.examples]
        return payload

    def glosses_for(self, *langs: str) -> list[str]:
        return [gloss.text for gloss in self.gloss if gloss.lang in langs]


@dataclass(slots=True)
class JMdictWord:
    id: str
    kanji: list[JMdictKanji] = field(default_factory=list)
    kana: list[JMdictKana] = field(default_factory=list)
    sense: list[JMdictSense] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "JMdictWord":
        return cls(
            id=str(data.get("id", "")),
            kanji=[JMdictKanji.from_dict(item) for item in _mapping_list(data.get("kanji"))],
            kana=[JMdictKana.from_dict(item) for item in _mapping_list(data.get("kana"))],
            sense=[JMdictSense.from_dict(item) for item in _mapping_list(data.get("sense"))],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "kanji": [item.to_dict() for item in self.kanji],
            "kana": [item.to_dict() for item in self.kana],
            "sense": [item.to_dict() for item in self.sense],
        }


@dataclass(slots=True)
class JMdictRoot:
    """
    Parsed jmdict-simplified document.

    Mirrors the camelCase JSON published by the jmdict-simplified project;
    ``from_dict``/``to_dict`` convert between the two so that a cached copy
    parses back into an identical document.
    """

    version: str
    languages: list[str] = field(default_factory=list)
    common_only: bool = False
    dict_date: str = ""
    dict_revisions: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    words: list[JMdictWord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: object) -> "JMdictRoot":
        if not isinstance(data, Mapping):
            raise ValueError("JMdict document must be a JSON object.")
        words = data.get("words")
        if not isinstance(words, list):
            raise ValueError("JMdict document has no 'words' list.")
        raw_tags = data.get("tags")
        tags: dict[str, str] = {}
        if isinstance(raw_tags, Mapping):
            tags = {str(key): str(value) for key, value in raw_tags.items()}
        return cls(
            version=str(data.get("version", "")),
            languages=_str_list(data.get("languages")),
            common_only=bool(data.get("commonOnly", False)),
            dict_date=str(data.get("dictDate", "")),
            dict_revisions=_str_list(data.get("dictRevisions")),
            tags=tags,
            words=[JMdictWord.from_dict(item) for item in words if isinstance(item, Mapping)],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "languages": list(self.languages),
            "commonOnly": self.common_only,
            "dictDate": self.dict_date,
            "dictRevisions": list(self.dict_revisions),
            "tags": dict(self.tags),
            "words": [word.to_dict() for word in self.words],
        }
