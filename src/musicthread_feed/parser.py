"""Parse the MusicThread "get thread" JSON response into model objects.

Expected shape:
    {
        "thread": {"key", "title", "description", "tags": [...], "author": {"name"}},
        "links": [{"key", "title", "artist", "description", "type",
                   "thumbnail_url", "submitted_at"}, ...]
    }

Missing or wrongly typed required fields raise ``GenerationFailure`` naming
the offending field, e.g. ``links[2].artist``.
"""

import logging
from typing import Any

from .errors import GenerationFailure
from .models import Author, Link, Thread, ThreadPayload

logger = logging.getLogger(__name__)

LINK_FIELDS = ("key", "title", "artist", "type", "thumbnail_url", "submitted_at")


def parse_thread_payload(data: Any) -> ThreadPayload:
    """Convert a decoded JSON response into a ``ThreadPayload``."""
    root = _require_object(data, "response")
    thread = _parse_thread(_require_object(root.get("thread"), "thread"))

    raw_links = root.get("links")
    if raw_links is None:
        raw_links = []
    if not isinstance(raw_links, list):
        raise GenerationFailure("links: expected a list")

    links = [
        _parse_link(_require_object(raw, f"links[{i}]"), f"links[{i}]")
        for i, raw in enumerate(raw_links)
    ]
    logger.debug("Parsed thread %s with %d links", thread.key, len(links))
    return ThreadPayload(thread=thread, links=links)


def _parse_thread(raw: dict) -> Thread:
    author = _require_object(raw.get("author"), "thread.author")

    tags = raw.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list):
        raise GenerationFailure("thread.tags: expected a list")
    for i, tag in enumerate(tags):
        if not isinstance(tag, str):
            raise GenerationFailure(f"thread.tags[{i}]: expected a string")

    return Thread(
        key=_require_str(raw, "key", "thread"),
        title=_require_str(raw, "title", "thread"),
        author=Author(name=_require_str(author, "name", "thread.author")),
        description=_optional_str(raw, "description", "thread"),
        tags=list(tags),
    )


def _parse_link(raw: dict, path: str) -> Link:
    values = {name: _require_str(raw, name, path) for name in LINK_FIELDS}
    return Link(description=_optional_str(raw, "description", path), **values)


def _require_object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise GenerationFailure(f"{path}: expected an object")
    return value


def _require_str(raw: dict, name: str, path: str) -> str:
    value = raw.get(name)
    if not isinstance(value, str):
        raise GenerationFailure(f"{path}.{name}: expected a string, got {type(value).__name__}")
    return value


def _optional_str(raw: dict, name: str, path: str) -> str:
    """Missing, null and empty are all "no value"."""
    value = raw.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise GenerationFailure(f"{path}.{name}: expected a string, got {type(value).__name__}")
    return value
