"""
Helper utilities for RateTheDogs.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import Request

from ..constants import MAX_DB_INTEGER


def get_client_ip(request: Request) -> str:
    """
    Get the client IP address of a request.

    Prefers the Cloudflare CF-Connecting-IP header, then the first
    X-Forwarded-For entry, then the socket peer.

    Args:
        request: Incoming request

    Returns:
        Client IP, or "unknown"
    """
    cf_ip = request.headers.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip.strip()

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_rating_key(value: float) -> str:
    """
    Format a rating value as a distribution key.

    Whole numbers drop the decimal part: 5.0 -> "5", 4.5 -> "4.5".
    """
    return f"{value:g}"


def round_rating(value: Optional[float], digits: int = 2) -> Optional[float]:
    if value is None:
        return None
    return round(float(value), digits)


def parse_int(value: Optional[str], default: int) -> int:
    """
    Parse a query string integer, falling back to a default.

    Args:
        value: Raw query parameter
        default: Value used when missing or not an integer

    Returns:
        Parsed integer or default
    """
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_id_list(value: Optional[str]) -> list:
    """
    Parse "1,2,x,3" into [1, 2, 3].

    Entries that are not ASCII digits, or that do not fit a database
    INTEGER, are ignored.
    """
    if not value:
        return []
    ids = []
    for part in value.split(","):
        part = part.strip()
        if not (part.isascii() and part.isdigit()):
            continue
        parsed = int(part)
        if parsed <= MAX_DB_INTEGER:
            ids.append(parsed)
    return ids
