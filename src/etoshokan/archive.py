from __future__ import annotations

import io
import json
import zipfile
import zlib
from pathlib import Path

import requests
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
)

from .config import DictionaryConfig
from .jmdict import JMdictRoot
from .logging_utils import debug_log

__all__ = [
    "ArchiveError",
    "download_archive",
    "load_jmdict_archive",
    "parse_jmdict_text",
    "read_single_entry",
]


class ArchiveError(RuntimeError):
    """Raised when the JMdict archive cannot be downloaded, unpacked or parsed."""


def download_archive(
    url: str,
    *,
    timeout: float = 60.0,
    show_progress: bool = False,
) -> bytes:
    try:
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ArchiveError(f"Failed to download JMdict archive: {exc}") from exc

    total = response.headers.get("Content-Length")
    total_bytes = int(total) if total and total.isdigit() else None
    buffer = io.BytesIO()
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TimeRemainingColumn(),
        transient=True,
        disable=not show_progress,
    )
    try:
        with progress:
            task = progress.add_task("Downloading JMdict", total=total_bytes)
            for chunk in response.iter_content(chunk_size=1024 * 1024):
                if not chunk:
                    continue
                buffer.write(chunk)
                progress.advance(task, len(chunk))
    except requests.RequestException as exc:
        raise ArchiveError(f"Failed to download JMdict archive: {exc}") from exc
    return buffer.getvalue()


def read_single_entry(data: bytes) -> str:
    """Return the first member of a zip archive decoded as UTF-8 text."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            members = [info for info in zf.infolist() if not info.is_dir()]
            raw = zf.read(members[0]) if members else None
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"JMdict archive is not a valid zip file: {exc}") from exc
    except (zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
        raise ArchiveError(f"Failed to decompress JMdict archive entry: {exc}") from exc
    if raw is None:
        raise ArchiveError("JMdict archive contains no entries.")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ArchiveError(f"JMdict archive entry is not UTF-8 text: {exc}") from exc


def parse_jmdict_text(text: str) -> JMdictRoot:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ArchiveError(f"JMdict archive entry is not valid JSON: {exc}") from exc
    try:
        return JMdictRoot.from_dict(payload)
    except ValueError as exc:
        raise ArchiveError(str(exc)) from exc


def _read_local_archive(path: Path) -> bytes:
    if not path.is_file():
        raise ArchiveError(f"Archive not found: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ArchiveError(f"Failed to read JMdict archive {path}: {exc}") from exc


def load_jmdict_archive(config: DictionaryConfig) -> JMdictRoot:
    """Fetch the archive (local file first, then URL), unpack its one entry and parse it."""
    if config.archive_path is not None:
        debug_log(f"Reading JMdict archive from {config.archive_path}")
        data = _read_local_archive(config.archive_path)
    else:
        if not config.archive_url:
            raise ArchiveError("No download URL provided for the JMdict archive.")
        debug_log(f"Downloading JMdict archive from {config.archive_url}")
        data = download_archive(
            config.archive_url,
            timeout=config.timeout,
            show_progress=config.show_progress,
        )
    document = parse_jmdict_text(read_single_entry(data))
    debug_log(f"Parsed JMdict {document.version} with {len(document.words)} words")
    return document
