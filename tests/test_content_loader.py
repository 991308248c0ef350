from __future__ import annotations

import json

import pytest
import requests
from graph_factory import sample_document

from docsync.core.io import content_loader
from docsync.core.io.content_loader import (
    ContentLoadError,
    is_url,
    load_content_graph,
    read_content_json,
)


class _Response:
    def __init__(self, payload=None, status=200, body_error=False):
        self._payload = payload
        self._status = status
        self._body_error = body_error

    def raise_for_status(self):
        if self._status >= 400:
            raise requests.HTTPError(f"{self._status} error")

    def json(self):
        if self._body_error:
            raise ValueError("not json")
        return self._payload


def test_is_url() -> None:
    assert is_url("https://example.org/doc.json")
    assert is_url("HTTP://example.org/doc.json")
    assert not is_url("/tmp/doc.json")


def test_load_content_graph_from_file(tmp_path) -> None:
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(sample_document()), encoding="utf-8")
    graph = load_content_graph(str(path))
    assert graph.name == "report"
    assert len(graph.texts) == 3
    assert graph.pages[1].height == 792.0


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(ContentLoadError, match="not found"):
        read_content_json(str(tmp_path / "missing.json"))


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentLoadError, match="Invalid JSON"):
        read_content_json(path)


def test_non_object_document_raises(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ContentLoadError, match="JSON object"):
        read_content_json(path)


def test_url_is_fetched_with_timeout(monkeypatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _Response(sample_document())

    monkeypatch.setattr(content_loader.requests, "get", fake_get)
    payload = read_content_json("https://example.org/doc.json", timeout=5)
    assert payload["name"] == "report"
    assert calls == [("https://example.org/doc.json", 5)]


@pytest.mark.parametrize(
    "response", [_Response(status=404), _Response(body_error=True)]
)
def test_url_failures_raise_content_load_error(monkeypatch, response) -> None:
    monkeypatch.setattr(content_loader.requests, "get", lambda url, timeout: response)
    with pytest.raises(ContentLoadError):
        read_content_json("https://example.org/doc.json")
