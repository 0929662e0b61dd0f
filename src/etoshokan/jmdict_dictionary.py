from __future__ import annotations

import asyncio
import time
import warnings
from typing import Callable

from .archive import ArchiveError, load_jmdict_archive
from .config import DictionaryConfig, load_config
from .dictionary import (
    Dictionary,
    InitializationError,
    Language,
    LookupOptions,
    WordEntry,
)
from .index import JMdictIndexes, build_indexes
from .jmdict import JMdictRoot
from .logging_utils import debug_log
from .normalization import normalize_key
from .romaji import is_romaji, to_hiragana
from .storage import JsonFileStore, KeyValueStore, StorageError

__all__ = ["JMDictDictionary"]

DocumentLoader = Callable[[DictionaryConfig], JMdictRoot]


class JMDictDictionary(Dictionary):
    """
    Japanese → English dictionary backed by the jmdict-simplified JSON export.

    The parsed document is cached in ``store`` under ``config.cache_key`` so
    later sessions skip the download. Two indexes are built from it: one keyed
    by kanji spellings and one keyed by kana spellings. Concurrent first
    callers of ``initialize``/``lookup`` wait on the same build.
    """

    name = "JMDict"
    supported_language: Language = "jp"
    target_language: Language = "en"

    def __init__(
        self,
        config: DictionaryConfig | None = None,
        *,
        store: KeyValueStore | None = None,
        loader: DocumentLoader | None = None,
        romaji_detector: Callable[[str], bool] = is_romaji,
        romaji_converter: Callable[[str], str] = to_hiragana,
    ) -> None:
        self.config = config or load_config()
        self.store: KeyValueStore = store if store is not None else JsonFileStore(self.config.state_dir)
        self._loader = loader or load_jmdict_archive
        self._is_romaji = romaji_detector
        self._to_kana = romaji_converter
        self._indexes: JMdictIndexes | None = None
        self._init_lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._indexes is not None

    async def initialize(self) -> None:
        if self._indexes is not None:
            return
        async with self._init_lock:
            if self._indexes is not None:
                return
            document = await self._load_document()
            started = time.perf_counter()
            indexes = await asyncio.to_thread(
                build_indexes,
                document,
                language=self.supported_language,
            )
            elapsed = (time.perf_counter() - started) * 1000
            debug_log(
                f"Indexed {indexes.words} words "
                f"({len(indexes.kanji)} kanji keys, {len(indexes.kana)} kana keys) in {elapsed:.1f}ms"
            )
            self._indexes = indexes

    async def _load_document(self) -> JMdictRoot:
        document = await self._read_cached_document()
        if document is not None:
            return document
        try:
            document = await asyncio.to_thread(self._loader, self.config)
        except (ArchiveError, OSError, ValueError) as exc:
            raise InitializationError(f"Failed to load JMdict: {exc}") from exc
        await self._write_cached_document(document)
        return document

    async def _read_cached_document(self) -> JMdictRoot | None:
        key = self.config.cache_key
        try:
            payload = await self.store.get(key)
        except (StorageError, OSError) as exc:
            warnings.warn(
                f"Ignoring unreadable JMdict cache entry '{key}': {exc}",
                RuntimeWarning,
                stacklevel=2,
            )
            return None
        if payload is None:
            debug_log(f"Cache miss for {key}")
            return None
        try:
            document = JMdictRoot.from_dict(payload)
        except ValueError as exc:
            warnings.warn(
                f"Ignoring malformed JMdict cache entry '{key}': {exc}",
                RuntimeWarning,
                stacklevel=2,
            )
            return None
        debug_log(f"Cache hit for {key}")
        return document

    async def _write_cached_document(self, document: JMdictRoot) -> None:
        try:
            await self.store.set(self.config.cache_key, document.to_dict())
        except Exception as exc:
            warnings.warn(
                f"Failed to cache JMdict document: {exc}",
                RuntimeWarning,
                stacklevel=2,
            )

    async def lookup(
        self,
        term: str,
        options: LookupOptions | None = None,
    ) -> list[WordEntry]:
        self.check_target_language(options)
        if self._indexes is None:
            await self.initialize()
        indexes = self._indexes
        if indexes is None:  # pragma: no cover - initialize either sets it or raises
            raise InitializationError("JMdict indexes are not available.")

        query = self._to_kana(term) if self._is_romaji(term) else term
        return indexes.probe(normalize_key(query))

    async def clear(self) -> None:
        """Evict the cached source document. In-memory indexes stay loaded; see ``unload``."""
        key = self.config.cache_key
        try:
            await self.store.delete(key)
        except (StorageError, OSError) as exc:
            debug_log(f"Ignoring cache delete failure for {key}: {exc}")

    def unload(self) -> None:
        self._indexes = None

    def stats(self) -> dict[str, int]:
        if self._indexes is None:
            return {"words": 0, "kanji_keys": 0, "kana_keys": 0}
        return {
            "words": self._indexes.words,
            "kanji_keys": len(self._indexes.kanji),
            "kana_keys": len(self._indexes.kana),
        }
