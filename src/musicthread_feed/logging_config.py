"""Configure logging for the application."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(debug: bool = False, access_log: bool = True) -> None:
    """Send ``musicthread_feed`` logs to stderr.

    ``access_log=False`` silences the per-request lines written by the HTTP
    server while keeping warnings and errors.
    """
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger("musicthread_feed")
    root.setLevel(level)
    # Replace rather than stack handlers when called more than once
    for existing in list(root.handlers):
        root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    if not access_log:
        logging.getLogger("musicthread_feed.server").setLevel(logging.WARNING)

    # Upstream request lines from httpx only in debug mode
    httpx_level = logging.DEBUG if debug else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_level)
    logging.getLogger("httpcore").setLevel(httpx_level)
