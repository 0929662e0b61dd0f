from .dictionary import (
    Dictionary,
    DictionaryError,
    Example,
    InitializationError,
    LookupOptions,
    Sense,
    SenseMeta,
    UnsupportedLanguageError,
    WordEntry,
)
from .index import JMdictSenseMeta
from .jmdict_dictionary import JMDictDictionary
from .normalization import normalize_key
from .romaji import is_romaji, to_hiragana

__all__ = [
    "Dictionary",
    "DictionaryError",
    "Example",
    "InitializationError",
    "JMDictDictionary",
    "JMdictSenseMeta",
    "LookupOptions",
    "Sense",
    "SenseMeta",
    "UnsupportedLanguageError",
    "WordEntry",
    "is_romaji",
    "normalize_key",
    "to_hiragana",
]
