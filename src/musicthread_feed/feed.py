"""Render a MusicThread thread as an Atom feed.

The feed carries one entry per link, in thread order. Entry content is an
HTML fragment (thumbnail, title, artist, description and a link back to
MusicThread) that is escaped as a whole inside ``<content type="html">``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from markupsafe import Markup

from .markup import Element, render_document, serialize_fragment
from .models import Link, Thread, ThreadPayload
from .text import capitalize_first_lower_rest, escape_html, format_timestamp, utc_now

logger = logging.getLogger(__name__)

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
MEDIA_NAMESPACE = "http://search.yahoo.com/mrss/"

GENERATOR_NAME = "MusicThread RSS"
GENERATOR_URI = "https://github.com/brushedtype/musicthread-rss"
GENERATOR_VERSION = "0.9.0"

FEED_BASE_URL = "https://feed.musicthread.app"
SITE_BASE_URL = "https://musicthread.app"

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class FeedLinks:
    """Builds the canonical URLs a feed points at."""

    feed_base_url: str = FEED_BASE_URL
    site_base_url: str = SITE_BASE_URL

    def self_url(self, thread_key: str) -> Markup:
        return Markup(f"{self.feed_base_url.rstrip('/')}/thread/{thread_key}")

    def thread_url(self, thread_key: str) -> Markup:
        return Markup(f"{self.site_base_url.rstrip('/')}/thread/{thread_key}")

    def link_url(self, link_key: str) -> Markup:
        return Markup(f"{self.site_base_url.rstrip('/')}/link/{link_key}")


DEFAULT_LINKS = FeedLinks()


def render_feed(
    payload: ThreadPayload,
    clock: Clock = utc_now,
    links: FeedLinks = DEFAULT_LINKS,
) -> str:
    """Return the Atom XML document for ``payload``.

    Apart from reading ``clock`` for the feed's ``<updated>`` value this is
    a pure function.
    """
    thread = payload.thread
    feed = Element("feed", {"xmlns": Markup(ATOM_NAMESPACE)})

    feed.add(
        "generator",
        Markup(GENERATOR_NAME),
        uri=Markup(GENERATOR_URI),
        version=Markup(GENERATOR_VERSION),
    )
    feed.add("updated", Markup(format_timestamp(clock())))
    feed.add("author").add("name", thread.author.name)
    feed.add(
        "link",
        href=links.self_url(thread.key),
        rel=Markup("self"),
        type=Markup("application/atom+xml"),
    )
    feed.add(
        "link",
        href=links.thread_url(thread.key),
        rel=Markup("alternate"),
        type=Markup("text/html"),
    )
    feed.add("id", links.self_url(thread.key))
    # Thread titles are trusted markup from MusicThread and are not escaped.
    feed.add("title", Markup(thread.title), type=Markup("html"))
    if thread.description:
        feed.add("subtitle", thread.description)
    for tag in thread.tags:
        feed.add("category", term=tag)

    for link in payload.links:
        feed.append(_render_entry(link, links))

    logger.debug("Rendered feed for thread %s (%d entries)", thread.key, len(payload.links))
    return render_document(feed)


def _render_entry(link: Link, links: FeedLinks) -> Element:
    entry = Element("entry")
    entry.add("title", link.title, type=Markup("html"))
    entry.add(
        "link",
        href=links.link_url(link.key),
        rel=Markup("alternate"),
        title=link.title,
        type=Markup("text/html"),
    )
    entry.add("published", Markup(link.submitted_at))
    entry.add("updated", Markup(link.submitted_at))
    entry.add("id", links.link_url(link.key))
    entry.add("author").add("name", link.artist)
    entry.add(
        "category",
        term=Markup("type"),
        label=Markup(capitalize_first_lower_rest(link.type)),
    )
    if link.description:
        entry.add("summary", link.description, type=Markup("html"))
    entry.add(
        "media:thumbnail",
        **{
            "url": Markup(link.thumbnail_url),
            "xmlns:media": Markup(MEDIA_NAMESPACE),
        },
    )
    entry.add(
        "content",
        double_escape_content(render_item_content(link, links)),
        type=Markup("html"),
    )
    return entry


def render_item_content(link: Link, links: FeedLinks = DEFAULT_LINKS) -> Markup:
    """Build the HTML shown by feed readers for one link.

    Title and artist are escaped; the thumbnail URL and the description are
    inserted as-is.
    """
    parts = [
        Element("img", {"src": Markup(link.thumbnail_url)}),
        Element("h1", children=[link.title]),
        Element("h3", children=[Markup("by ") + escape_html(link.artist)]),
    ]
    if link.description:
        parts.append(Element("p", children=[Markup(link.description)]))

    open_link = Element("p")
    open_link.add("a", Markup("Open in MusicThread"), href=links.link_url(link.key))
    parts.append(open_link)
    return serialize_fragment(parts)


def double_escape_content(fragment: Markup) -> Markup:
    """Escape an already-rendered HTML fragment for ``<content type="html">``.

    The fragment's own text was escaped while it was built; escaping the
    whole string again means readers decode it back to that HTML.
    """
    return escape_html(str(fragment))
