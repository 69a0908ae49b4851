"""Validate inbound requests and extract the thread key from the path.

The only supported route is ``GET /thread/<thread_key>``. The key is passed
to MusicThread untouched; MusicThread decides whether it exists.
"""

import logging
from urllib.parse import urlsplit

from .errors import InvalidMethod, InvalidPath

logger = logging.getLogger(__name__)

SUPPORTED_METHOD = "GET"
THREAD_SEGMENT = "thread"


def parse_thread_key(url: str) -> str | None:
    """Return the thread key from a request URL or path, or None if invalid.

    Accepts a full URL or a bare path; query strings are ignored.
    """
    path = urlsplit(url).path
    components = path[1:].split("/") if path.startswith("/") else path.split("/")

    if len(components) != 2:
        return None
    if components[0] != THREAD_SEGMENT:
        return None
    if not components[1]:
        return None
    return components[1]


def validate(method: str, url: str, invalid_path_status: int = 404) -> str:
    """Check method and path; return the thread key.

    Raises:
        InvalidMethod: anything other than GET.
        InvalidPath: the path is not ``/thread/<thread_key>``.
    """
    # HTTP methods are case-sensitive.
    if method != SUPPORTED_METHOD:
        raise InvalidMethod(f"Rejected {method} {url}")

    thread_key = parse_thread_key(url)
    if thread_key is None:
        raise InvalidPath(f"Unsupported path in {url}", status=invalid_path_status)

    logger.debug("Request %s resolved to thread %s", url, thread_key)
    return thread_key
