"""HTTP-date formatting and parsing (RFC 9110 §5.6.7).

HTTP dates have one-second precision, so every timestamp that crosses
this module is truncated to whole seconds.
"""

from datetime import UTC
from email.utils import formatdate, parsedate_to_datetime


def http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an IMF-fixdate string.

    ``http_date(0)`` -> ``"Thu, 01 Jan 1970 00:00:00 GMT"``
    """
    return formatdate(int(timestamp), usegmt=True)


def parse_http_date(value: str | None) -> int | None:
    """Parse an HTTP-date header value into POSIX seconds.

    Accepts the three formats RFC 9110 requires recipients to handle.
    Returns ``None`` for missing or malformed values instead of raising,
    so callers can treat a bad header as absent.
    """
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        # obsolete asctime format carries no zone; HTTP dates are always GMT
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())
