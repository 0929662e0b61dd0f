from __future__ import annotations

import asyncio
import io
import json
import zipfile
from pathlib import Path

import pytest
import requests

import etoshokan.archive as archive
from etoshokan.archive import (
    ArchiveError,
    load_jmdict_archive,
    parse_jmdict_text,
    read_single_entry,
)
from etoshokan.config import DictionaryConfig
from etoshokan.dictionary import InitializationError
from etoshokan.jmdict_dictionary import JMDictDictionary
from etoshokan.storage import MemoryStore


def _zip_bytes(members: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buffer.getvalue()


class _FakeResponse:
    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self._body = body
        self.status_code = status_code
        self.headers = {"Content-Length": str(len(body))}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self._body), 7):
            yield self._body[start : start + 7]


def test_read_single_entry_returns_first_member_text() -> None:
    data = _zip_bytes({"jmdict.json": '{"words": []}'.encode("utf-8"), "extra.txt": b"ignored"})
    assert read_single_entry(data) == '{"words": []}'


def test_read_single_entry_strips_bom() -> None:
    data = _zip_bytes({"jmdict.json": "\ufeff{}".encode("utf-8")})
    assert read_single_entry(data) == "{}"


def test_read_single_entry_rejects_empty_archive() -> None:
    with pytest.raises(ArchiveError, match="no entries"):
        read_single_entry(_zip_bytes({}))


def test_read_single_entry_rejects_non_zip() -> None:
    with pytest.raises(ArchiveError, match="not a valid zip"):
        read_single_entry(b"definitely not a zip")


def _corrupt_deflate_zip() -> bytes:
    name = "jmdict.json"
    text = json.dumps({"words": [{"id": str(n), "kanji": [], "kana": []} for n in range(200)]})
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(name, text)
    data = bytearray(buffer.getvalue())
    start = 30 + len(name)
    for offset in range(start, start + 8):
        data[offset] ^= 0xFF
    return bytes(data)


def _unsupported_method_zip() -> bytes:
    data = bytearray(_zip_bytes({"jmdict.json": b"{}"}))
    local = data.index(b"PK\x03\x04")
    central = data.index(b"PK\x01\x02")
    # 9 is deflate64, which zipfile cannot decompress.
    data[local + 8 : local + 10] = (9).to_bytes(2, "little")
    data[central + 10 : central + 12] = (9).to_bytes(2, "little")
    return bytes(data)


def test_read_single_entry_rejects_corrupt_deflate_data() -> None:
    with pytest.raises(ArchiveError):
        read_single_entry(_corrupt_deflate_zip())


def test_read_single_entry_rejects_unsupported_compression() -> None:
    with pytest.raises(ArchiveError, match="Failed to decompress"):
        read_single_entry(_unsupported_method_zip())


def test_corrupt_archive_fails_initialization(tmp_path: Path) -> None:
    archive_path = tmp_path / "jmdict.json.zip"
    archive_path.write_bytes(_corrupt_deflate_zip())
    config = DictionaryConfig(archive_url="", archive_path=archive_path, state_dir=tmp_path)
    dictionary = JMDictDictionary(config, store=MemoryStore())

    with pytest.raises(InitializationError) as excinfo:
        asyncio.run(dictionary.initialize())

    assert isinstance(excinfo.value.__cause__, ArchiveError)
    assert not dictionary.is_loaded


def test_parse_jmdict_text_rejects_invalid_json() -> None:
    with pytest.raises(ArchiveError, match="not valid JSON"):
        parse_jmdict_text("{not json")


def test_parse_jmdict_text_rejects_wrong_shape() -> None:
    with pytest.raises(ArchiveError):
        parse_jmdict_text(json.dumps(["words"]))


def test_load_from_local_archive(sample_zip: Path, tmp_path: Path) -> None:
    config = DictionaryConfig(archive_url="", archive_path=sample_zip, state_dir=tmp_path)

    document = load_jmdict_archive(config)

    assert document.version == "3.6.2"
    assert [word.id for word in document.words][:2] == ["1467640", "1374030"]


def test_missing_local_archive_raises(tmp_path: Path) -> None:
    config = DictionaryConfig(
        archive_url="",
        archive_path=tmp_path / "missing.zip",
        state_dir=tmp_path,
    )
    with pytest.raises(ArchiveError, match="Archive not found"):
        load_jmdict_archive(config)


def test_no_source_configured_raises(tmp_path: Path) -> None:
    config = DictionaryConfig(archive_url="", archive_path=None, state_dir=tmp_path)
    with pytest.raises(ArchiveError, match="No download URL"):
        load_jmdict_archive(config)


def test_download_archive_streams_body(monkeypatch, sample_zip: Path, tmp_path: Path) -> None:
    body = sample_zip.read_bytes()
    seen: dict[str, object] = {}

    def _fake_get(url, stream, timeout):
        seen.update(url=url, stream=stream, timeout=timeout)
        return _FakeResponse(body)

    monkeypatch.setattr(archive.requests, "get", _fake_get)
    config = DictionaryConfig(
        archive_url="https://example.test/jmdict-eng.json.zip",
        archive_path=None,
        state_dir=tmp_path,
        timeout=5.0,
    )

    document = load_jmdict_archive(config)

    assert seen == {
        "url": "https://example.test/jmdict-eng.json.zip",
        "stream": True,
        "timeout": 5.0,
    }
    assert len(document.words) == 6


def test_download_archive_wraps_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        archive.requests,
        "get",
        lambda url, stream, timeout: _FakeResponse(b"", status_code=404),
    )
    with pytest.raises(ArchiveError, match="404"):
        archive.download_archive("https://example.test/missing.zip")


def test_download_archive_wraps_connection_errors(monkeypatch) -> None:
    def _boom(url, stream, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(archive.requests, "get", _boom)
    with pytest.raises(ArchiveError, match="connection refused"):
        archive.download_archive("https://example.test/jmdict.zip")
