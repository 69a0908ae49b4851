"""Request pipeline: validate -> fetch -> parse -> render.

Every outcome is a complete ``FeedResponse``. Failures short-circuit with the
status and plain-text message of the matching ``FeedError``; the internal
detail only goes to the log.
"""

import logging
from dataclasses import dataclass

from .client import MusicThreadClient
from .errors import FeedError, GenerationFailure
from .feed import DEFAULT_LINKS, Clock, FeedLinks, render_feed
from .parser import parse_thread_payload
from .router import validate
from .text import utc_now

logger = logging.getLogger(__name__)

FEED_CONTENT_TYPE = "application/xml;charset=UTF-8"
ERROR_CONTENT_TYPE = "text/plain;charset=UTF-8"


@dataclass
class FeedResponse:
    status: int
    body: str
    content_type: str = FEED_CONTENT_TYPE


class ThreadFeedHandler:
    """Turns ``/thread/<key>`` requests into Atom feeds."""

    def __init__(
        self,
        client: MusicThreadClient,
        clock: Clock = utc_now,
        links: FeedLinks = DEFAULT_LINKS,
        invalid_path_status: int = 404,
    ):
        self.client = client
        self.clock = clock
        self.links = links
        self.invalid_path_status = invalid_path_status

    def handle(self, method: str, url: str) -> FeedResponse:
        try:
            thread_key = validate(method, url, self.invalid_path_status)
            raw = self.client.fetch_thread(thread_key)
            feed, entry_count = self._generate(raw)
        except FeedError as e:
            return self._error_response(e, method, url)
        except Exception as e:
            logger.exception("Unexpected error handling %s %s", method, url)
            return self._error_response(
                FeedError(f"{type(e).__name__}: {e}"), method, url
            )

        logger.info("Served feed for thread %s (%d entries)", thread_key, entry_count)
        return FeedResponse(status=200, body=feed)

    def _generate(self, raw) -> tuple[str, int]:
        try:
            payload = parse_thread_payload(raw)
            feed = render_feed(payload, clock=self.clock, links=self.links)
            return feed, len(payload.links)
        except FeedError:
            raise
        except Exception as e:
            logger.exception("Unexpected error while generating feed")
            raise GenerationFailure(f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _error_response(error: FeedError, method: str, url: str) -> FeedResponse:
        if error.status >= 500:
            logger.error("%s %s failed with %d: %s", method, url, error.status, error)
        else:
            logger.warning("%s %s rejected with %d: %s", method, url, error.status, error)
        return FeedResponse(
            status=error.status,
            body=error.public_message,
            content_type=ERROR_CONTENT_TYPE,
        )
