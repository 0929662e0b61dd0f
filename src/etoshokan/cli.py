from __future__ import annotations

import argparse
import asyncio
import json
import sys
from importlib import metadata
from pathlib import Path

import tomllib
import uvicorn
from rich.console import Console
from rich.markup import escape

from .config import DictionaryConfig, load_config
from .dictionary import (
    LANGUAGES,
    DictionaryError,
    LookupOptions,
    WordEntry,
    serialize_word_entries,
)
from .jmdict_dictionary import JMDictDictionary
from .logging_utils import build_uvicorn_log_config, set_debug_logging
from .storage import JsonFileStore
from .web import WebConfig, create_app


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover - installed without a source tree
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("etoshokan")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"etoshokan {__version__}",
    )


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--zip",
        help="Path to a previously downloaded jmdict-eng *.json.zip archive.",
    )
    parser.add_argument(
        "--url",
        help="Download URL for the JMdict archive (default: ETOSHOKAN_JMDICT_URL or the bundled release).",
    )
    parser.add_argument(
        "--state-dir",
        help="Directory holding the dictionary cache (default: ETOSHOKAN_STATE_DIR or ~/.local/share/etoshokan).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging (cache hits, download, index sizes).",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="etoshokan",
        description="Japanese → English dictionary lookups backed by JMdict.",
    )
    _add_version_flag(ap)
    subparsers = ap.add_subparsers(dest="command")

    lookup = subparsers.add_parser("lookup", help="Look up a kanji, kana or romaji term.")
    lookup.add_argument("term", help="Term to look up (e.g. 猫, ねこ or neko).")
    lookup.add_argument(
        "--target",
        default="en",
        choices=LANGUAGES,
        help="Gloss language (default: en).",
    )
    lookup.add_argument(
        "--json",
        action="store_true",
        help="Print the matching entries as JSON.",
    )
    _add_source_options(lookup)

    cache = subparsers.add_parser("cache", help="Manage the cached JMdict document.")
    cache.add_argument("cache_cmd", choices=["warm", "clear", "status"])
    _add_source_options(cache)

    web = subparsers.add_parser("web", help="Serve the dictionary over HTTP.")
    web.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface for the web server (default: 127.0.0.1).",
    )
    web.add_argument(
        "--port",
        type=int,
        default=2047,
        help="Port for the web server (default: 2047).",
    )
    web.add_argument(
        "--preload",
        action="store_true",
        help="Load and index the dictionary before accepting requests.",
    )
    _add_source_options(web)
    return ap


def _config_from_args(args: argparse.Namespace, *, show_progress: bool) -> DictionaryConfig:
    return load_config(
        archive_path=getattr(args, "zip", None),
        archive_url=getattr(args, "url", None),
        state_dir=getattr(args, "state_dir", None),
        show_progress=show_progress,
    )


def _format_entry(index: int, entry: WordEntry) -> list[str]:
    header = f"[bold]{escape(entry.term)}[/bold]"
    if entry.reading and entry.reading != entry.term:
        header += f" 【{escape(entry.reading)}】"
    lines = [f"{index}. {header}"]
    for number, sense in enumerate(entry.senses, start=1):
        glosses = list(getattr(sense.meta, "glosses", ()) or ())
        label = f"({sense.part_of_speech}) " if sense.part_of_speech else ""
        lines.append(f"   {number}) {escape(label)}{escape('; '.join(glosses))}")
        if sense.notes:
            lines.append(f"      [dim]{escape(', '.join(sense.notes))}[/dim]")
        for example in sense.examples:
            example_line = f"      「{escape(example.text)}」"
            if example.translation:
                example_line += f" {escape(example.translation)}"
            lines.append(example_line)
    return lines


def _run_lookup(args: argparse.Namespace, console: Console) -> int:
    dictionary = JMDictDictionary(_config_from_args(args, show_progress=not args.json))
    try:
        entries = asyncio.run(
            dictionary.lookup(args.term, LookupOptions(target_language=args.target))
        )
    except DictionaryError as exc:
        raise SystemExit(str(exc)) from exc
    if args.json:
        print(json.dumps(serialize_word_entries(entries), ensure_ascii=False, indent=2))
        return 0
    if not entries:
        console.print(f"No entries found for {escape(args.term)}.")
        return 0
    for index, entry in enumerate(entries, start=1):
        for line in _format_entry(index, entry):
            console.print(line)
    return 0


def _run_cache(args: argparse.Namespace, console: Console) -> int:
    config = _config_from_args(args, show_progress=True)
    dictionary = JMDictDictionary(config)
    if args.cache_cmd == "warm":
        try:
            asyncio.run(dictionary.initialize())
        except DictionaryError as exc:
            raise SystemExit(str(exc)) from exc
        stats = dictionary.stats()
        console.print(
            f"JMdict ready: {stats['words']} words, "
            f"{stats['kanji_keys']} kanji keys, {stats['kana_keys']} kana keys."
        )
        return 0
    if args.cache_cmd == "clear":
        asyncio.run(dictionary.clear())
        console.print(f"Cleared cached JMdict document ({config.cache_key}).")
        return 0
    if args.cache_cmd == "status":
        store = JsonFileStore(config.state_dir)
        keys = asyncio.run(store.keys())
        location = store.path_for(config.cache_key)
        if config.cache_key in keys:
            console.print(f"Cached JMdict document: {location}")
        else:
            console.print(f"No cached JMdict document. Expected location: {location}")
        return 0
    raise SystemExit(f"Unknown cache subcommand: {args.cache_cmd}")


def _run_web(args: argparse.Namespace) -> None:
    config = WebConfig(
        dictionary=_config_from_args(args, show_progress=False),
        preload=args.preload,
    )
    app = create_app(config)
    print(f"Serving etoshokan dictionary on http://{args.host}:{args.port}/api/lookup?term=...")
    print("Press Ctrl+C to stop.\n")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info",
        log_config=build_uvicorn_log_config(),
    )


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    set_debug_logging(bool(getattr(args, "debug", False)))
    console = Console()

    if args.command == "lookup":
        return _run_lookup(args, console)
    if args.command == "cache":
        return _run_cache(args, console)
    if args.command == "web":
        _run_web(args)
        return 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
