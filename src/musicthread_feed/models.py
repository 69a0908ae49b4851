"""Data models for a MusicThread thread and its links."""

from dataclasses import dataclass, field


@dataclass
class Author:
    name: str


@dataclass
class Link:
    key: str
    title: str
    artist: str
    type: str  # media kind, e.g. "song", "album", "video"
    thumbnail_url: str
    submitted_at: str  # timestamp string, passed through untouched
    description: str = ""


@dataclass
class Thread:
    key: str
    title: str  # may contain markup, rendered as-is
    author: Author
    description: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class ThreadPayload:
    """The "get thread" API response: a thread and its links, in feed order."""

    thread: Thread
    links: list[Link] = field(default_factory=list)
