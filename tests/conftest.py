"""Shared test fixtures."""

import copy
from datetime import datetime, timezone

import pytest

from musicthread_feed.client import MusicThreadClient
from musicthread_feed.parser import parse_thread_payload

API_BASE = "https://api.musicthread.test"

FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

SAMPLE_PAYLOAD = {
    "thread": {
        "key": "abc",
        "title": "My Thread",
        "description": "",
        "tags": ["jazz"],
        "author": {"name": "Alice"},
    },
    "links": [
        {
            "key": "l1",
            "title": "Song A",
            "artist": "Bob",
            "description": "",
            "type": "song",
            "thumbnail_url": "https://x/y.jpg",
            "submitted_at": "2024-01-01T00:00:00Z",
        }
    ],
}


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sample_payload() -> dict:
    """The raw "get thread" response for a one-link thread."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def rich_payload() -> dict:
    """A thread with descriptions, several tags and several links."""
    return {
        "thread": {
            "key": "rich",
            "title": "Late Night <i>Jazz</i>",
            "description": "Songs for 2am & after",
            "tags": ["jazz", "late night", "r&b"],
            "author": {"name": "Carol \"CJ\" O'Neil"},
        },
        "links": [
            {
                "key": "first",
                "title": "Round Midnight",
                "artist": "Thelonious Monk",
                "description": "A <em>classic</em>",
                "type": "SONG",
                "thumbnail_url": "https://img.test/a.jpg?w=200",
                "submitted_at": "2024-02-01T10:00:00Z",
            },
            {
                "key": "second",
                "title": "Kind of Blue",
                "artist": "Miles Davis",
                "description": None,
                "type": "album",
                "thumbnail_url": "https://img.test/b.jpg",
                "submitted_at": "2024-02-02T11:30:00Z",
            },
            {
                "key": "third",
                "title": "Live at <Newport>",
                "artist": "Duke Ellington & His Orchestra",
                "type": "video",
                "thumbnail_url": "https://img.test/c.jpg",
                "submitted_at": "2024-02-03T12:45:00Z",
            },
        ],
    }


@pytest.fixture
def sample_thread(sample_payload):
    return parse_thread_payload(sample_payload)


@pytest.fixture
def api_client():
    with MusicThreadClient(base_url=API_BASE) as client:
        yield client
