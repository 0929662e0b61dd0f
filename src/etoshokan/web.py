from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from .config import DictionaryConfig, load_config
from .dictionary import (
    Dictionary,
    InitializationError,
    LookupOptions,
    UnsupportedLanguageError,
    parse_language,
    serialize_word_entries,
)
from .jmdict_dictionary import JMDictDictionary


@dataclass(slots=True)
class WebConfig:
    dictionary: DictionaryConfig = field(default_factory=load_config)
    preload: bool = False


def create_app(config: WebConfig, dictionary: Dictionary | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        if config.preload:
            await app.state.dictionary.initialize()
        yield

    app = FastAPI(title="etoshokan dictionary", lifespan=_lifespan)
    app.state.config = config
    app.state.dictionary = dictionary or JMDictDictionary(config.dictionary)

    def _dictionary() -> Dictionary:
        return app.state.dictionary

    def _loaded(current: Dictionary) -> bool:
        return bool(getattr(current, "is_loaded", False))

    @app.get("/api/dictionary")
    async def api_dictionary_info() -> JSONResponse:
        current = _dictionary()
        return JSONResponse(
            {
                "name": current.name,
                "source_language": current.supported_language,
                "target_language": current.target_language,
                "loaded": _loaded(current),
            }
        )

    @app.get("/api/lookup")
    async def api_lookup(
        term: str = Query(..., description="Kanji, kana or romaji to look up."),
        target: str = Query("en", description="Gloss language."),
    ) -> JSONResponse:
        if not term.strip():
            raise HTTPException(status_code=400, detail="Lookup term must not be empty.")
        try:
            options = LookupOptions(target_language=parse_language(target))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            entries = await _dictionary().lookup(term, options)
        except UnsupportedLanguageError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except InitializationError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return JSONResponse({"term": term, "entries": serialize_word_entries(entries)})

    @app.post("/api/dictionary/initialize")
    async def api_initialize() -> JSONResponse:
        current = _dictionary()
        try:
            await current.initialize()
        except InitializationError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        stats = current.stats() if hasattr(current, "stats") else {}
        return JSONResponse({"loaded": _loaded(current), "stats": stats})

    @app.delete("/api/dictionary/cache")
    async def api_clear_cache() -> JSONResponse:
        await _dictionary().clear()
        return JSONResponse({"cleared": True})

    return app


__all__ = ["WebConfig", "create_app"]
