"""Local HTTP server exposing ``/thread/<key>`` feeds.

Production deployments put any HTTP runtime in front of
``ThreadFeedHandler.handle``; this server is that runtime for local use and
simple hosting. Every method is forwarded so unsupported ones get the
handler's 400 response rather than the stdlib's 501.
"""

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from .handler import FeedResponse, ThreadFeedHandler

logger = logging.getLogger(__name__)


class FeedHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], feed_handler: ThreadFeedHandler):
        super().__init__(address, FeedRequestHandler)
        self.feed_handler = feed_handler


class FeedRequestHandler(BaseHTTPRequestHandler):
    server: FeedHTTPServer

    def _dispatch(self) -> None:
        response = self.server.feed_handler.handle(self.command, self.path)
        self._send(response)

    def _send(self, response: FeedResponse) -> None:
        body = response.body.encode("utf-8")
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    do_GET = _dispatch
    do_HEAD = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_PATCH = _dispatch
    do_DELETE = _dispatch
    do_OPTIONS = _dispatch

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(feed_handler: ThreadFeedHandler, host: str, port: int) -> FeedHTTPServer:
    return FeedHTTPServer((host, port), feed_handler)
