"""Text helpers shared by the feed renderer.

Escaping follows the rules feed readers have always been served by this
project: the five HTML-significant characters become entities and the first
forward slash becomes ``&#x2F;``. Only the first slash is replaced; this has
been the observable behavior since the first release and is kept so the
generated bytes stay stable. Flip ``ESCAPE_FIRST_SLASH_ONLY`` to replace
every slash.
"""

from datetime import datetime, timezone

from markupsafe import Markup, escape

ESCAPE_FIRST_SLASH_ONLY = True

SLASH_ENTITY = "&#x2F;"


def escape_html(text: str) -> Markup:
    """Return an HTML/XML-escaped copy of ``text``.

    ``markupsafe.escape`` handles ``& < > ' "`` (as ``&amp; &lt; &gt; &#39;
    &#34;``). The input is always treated as plain text, even when it is
    already ``Markup``; escaping a rendered fragment again is how entry
    content is nested inside the feed.
    """
    escaped = str(escape(str(text)))
    if ESCAPE_FIRST_SLASH_ONLY:
        escaped = escaped.replace("/", SLASH_ENTITY, 1)
    else:
        escaped = escaped.replace("/", SLASH_ENTITY)
    return Markup(escaped)


def capitalize_first_lower_rest(value: str) -> str:
    """Upper-case the first character and lower-case the rest ("VIDEO" -> "Video")."""
    return value[:1].upper() + value[1:].lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format as ISO-8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z.

    Naive datetimes are assumed to already be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
