"""Errors that end a feed request.

Each error carries the HTTP status and the plain-text body returned to the
client. ``str(error)`` holds the internal detail, which is logged but never
sent back.
"""

FETCH_FAILED_MESSAGE = "Failed to fetch response from MusicThread"


class FeedError(RuntimeError):
    status = 500
    public_message = "Internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_message)


class InvalidMethod(FeedError):
    status = 400
    public_message = "Only GET is supported"


class InvalidPath(FeedError):
    public_message = (
        "Unsupported request path, expects valid MusicThread thread path"
    )

    def __init__(self, detail: str | None = None, status: int = 404):
        super().__init__(detail)
        self.status = status


class UpstreamRejected(FeedError):
    """MusicThread answered with an error status (>= 400)."""

    def __init__(self, status: int, message: str | None = None):
        self.status = status
        self.upstream_message = message
        if message:
            self.public_message = f"{FETCH_FAILED_MESSAGE} ({message})"
        else:
            self.public_message = FETCH_FAILED_MESSAGE
        super().__init__(f"MusicThread returned HTTP {status}: {message or 'no message'}")


class UpstreamUnreachable(FeedError):
    """The request to MusicThread failed or returned an unreadable body."""

    public_message = FETCH_FAILED_MESSAGE


class GenerationFailure(FeedError):
    """The thread payload could not be turned into a feed."""

    public_message = "Failed to generate feed for MusicThread thread"
