from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Literal

__all__ = [
    "Dictionary",
    "DictionaryError",
    "Example",
    "InitializationError",
    "LANGUAGES",
    "Language",
    "LookupOptions",
    "PartOfSpeech",
    "PARTS_OF_SPEECH",
    "Sense",
    "SenseMeta",
    "UnsupportedLanguageError",
    "WordEntry",
    "parse_language",
    "serialize_word_entries",
]

Language = Literal["en", "jp"]
LANGUAGES: tuple[Language, ...] = ("en", "jp")

PartOfSpeech = Literal[
    "noun",
    "verb",
    "adjective",
    "adverb",
    "pronoun",
    "particle",
    "conjunction",
    "interjection",
    "auxiliary",
    "prefix",
    "suffix",
    "expression",
]

PARTS_OF_SPEECH: tuple[str, ...] = (
    "noun",
    "verb",
    "adjective",
    "adverb",
    "pronoun",
    "particle",
    "conjunction",
    "interjection",
    "auxiliary",
    "prefix",
    "suffix",
    "expression",
)


class DictionaryError(RuntimeError):
    """Base class for dictionary failures."""


class InitializationError(DictionaryError):
    """Raised when the dictionary source cannot be fetched, unpacked or parsed."""


class UnsupportedLanguageError(DictionaryError, ValueError):
    """Raised when a lookup asks for a gloss language the dictionary lacks."""

    def __init__(self, supported: str, target: str, requested: str) -> None:
        self.supported = supported
        self.target = target
        self.requested = requested
        super().__init__(
            f"Unsupported language '{requested}', dictionary only supports "
            f"'{supported}' to '{target}' translations"
        )


@dataclass(frozen=True, slots=True)
class Example:
    text: str
    translation: str | None = None


@dataclass(frozen=True, slots=True)
class SenseMeta:
    """
    Dictionary-specific extras attached to a sense.

    Subclasses add typed fields for one dictionary source; consumers that only
    need the shared contract can ignore ``meta`` entirely.
    """

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Sense:
    part_of_speech: PartOfSpeech | None = None
    notes: tuple[str, ...] | None = None
    examples: tuple[Example, ...] = ()
    meta: SenseMeta | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        if self.part_of_speech is not None:
            payload["part_of_speech"] = self.part_of_speech
        if self.notes is not None:
            payload["notes"] = list(self.notes)
        if self.examples:
            payload["examples"] = [asdict(example) for example in self.examples]
        if self.meta is not None:
            payload["meta"] = self.meta.to_dict()
        return payload


@dataclass(frozen=True, slots=True)
class WordEntry:
    """
    One dictionary hit for a single spelling of a lexical entry.

    ``term`` is the spelling the entry was indexed under; ``reading`` is the
    phonetic spelling shown alongside it. Entries produced from the same
    source word share their ``senses`` tuple.
    """

    term: str
    language: Language
    senses: tuple[Sense, ...] = ()
    reading: str | None = None

    @property
    def identity(self) -> tuple[str, str]:
        return (self.term, self.reading or "")

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"term": self.term}
        if self.reading is not None:
            payload["reading"] = self.reading
        payload["language"] = self.language
        payload["senses"] = [sense.to_dict() for sense in self.senses]
        return payload


def serialize_word_entries(entries: list[WordEntry]) -> list[dict[str, object]]:
    return [entry.to_dict() for entry in entries]


@dataclass(slots=True)
class LookupOptions:
    target_language: Language = "en"


def parse_language(value: str) -> Language:
    """Return ``value`` as a ``Language`` code; unknown codes raise ``ValueError``."""
    for language in LANGUAGES:
        if value == language:
            return language
    raise ValueError(f"Unknown language code '{value}', expected one of: {', '.join(LANGUAGES)}")


class Dictionary(ABC):
    """
    Contract shared by every dictionary source.

    ``initialize`` loads and indexes the source once, ``lookup`` answers point
    queries (initializing on demand) and ``clear`` evicts the persisted copy
    of the source data.
    """

    name: str
    supported_language: Language
    target_language: Language = "en"

    @abstractmethod
    async def initialize(self) -> None: ...

    @abstractmethod
    async def lookup(
        self,
        term: str,
        options: LookupOptions | None = None,
    ) -> list[WordEntry]: ...

    @abstractmethod
    async def clear(self) -> None: ...

    def check_target_language(self, options: LookupOptions | None) -> None:
        requested = options.target_language if options is not None else "en"
        if requested != self.target_language:
            raise UnsupportedLanguageError(
                self.supported_language,
                self.target_language,
                requested,
            )
