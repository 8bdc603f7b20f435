"""Unit tests for HTTP download helpers."""

from __future__ import annotations

import pytest
import requests

from ingest.remote_fetch import download_to_path


class _FakeResponse:
    def __init__(self, chunks: list[bytes], status_code: int = 200) -> None:
        self._chunks = chunks
        self.status_code = status_code

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size: int) -> list[bytes]:
        return self._chunks


def test_download_to_path_streams_chunks(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Downloaded chunks should be joined into the destination file."""
    calls: list[tuple[str, float]] = []

    def _fake_get(url: str, stream: bool, timeout: float) -> _FakeResponse:
        calls.append((url, timeout))
        return _FakeResponse([b"abc", b"def"])

    monkeypatch.setattr("ingest.remote_fetch.requests.get", _fake_get)
    destination = tmp_path / "data" / "box.arrow"

    download_to_path("https://example.org/box", destination, timeout=5.0)

    assert destination.read_bytes() == b"abcdef"
    assert calls == [("https://example.org/box", 5.0)]
    assert sorted(path.name for path in destination.parent.iterdir()) == ["box.arrow"]


def test_download_to_path_leaves_nothing_on_http_error(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """HTTP errors should propagate without leaving partial files."""
    monkeypatch.setattr(
        "ingest.remote_fetch.requests.get",
        lambda url, stream, timeout: _FakeResponse([], status_code=404),
    )
    destination = tmp_path / "box.arrow"

    with pytest.raises(requests.HTTPError):
        download_to_path("https://example.org/missing", destination, timeout=5.0)

    assert list(tmp_path.iterdir()) == []
