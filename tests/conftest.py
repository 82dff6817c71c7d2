"""Shared fixtures: small JSONL collections on disk and in memory."""

import json

import pytest


@pytest.fixture
def single_page_line():
    return json.dumps({
        "unique_id": "p1",
        "title": "T",
        "chunks": [{
            "id": 0,
            "unique_id": "c0",
            "content": "x",
            "parent_id": None,
            "url_links": [{"url": "http://a"}],
        }],
    })


@pytest.fixture
def collection_text():
    """Two pages; p2 has a nested chunk, an orphan, and a URL shared with p1."""
    lines = [
        {
            "unique_id": "p1",
            "title": "First",
            "copyright": "CC-BY",
            "keywords": ["alpha", "beta"],
            "summary": "The first page",
            "chunks": [
                {"id": 0, "unique_id": "p1-0", "content": "root", "parent_id": None,
                 "url_links": [{"url": "http://shared"}]},
            ],
        },
        {
            "unique_id": "p2",
            "title": "Second",
            "chunks": [
                {"id": 0, "unique_id": "p2-0", "content": "root", "parent_id": None,
                 "url_links": []},
                {"id": 1, "unique_id": "p2-1", "content": "child", "parent_id": 0,
                 "parent_unique_id": "p2-0", "url_links": [{"url": "http://shared"}]},
                {"id": 2, "unique_id": "p2-2", "content": "orphan", "parent_id": 99,
                 "url_links": []},
            ],
        },
    ]
    return "\n".join(json.dumps(line) for line in lines) + "\n"


@pytest.fixture
def collection_file(tmp_path, collection_text):
    path = tmp_path / "collection.jsonl"
    path.write_text(collection_text, encoding="utf-8")
    return path
