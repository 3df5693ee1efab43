"""Expiry handling for time-limited media URLs."""

from urllib.parse import parse_qs, urlsplit


def get_expiry_from_url(url: str) -> int:
    """
    Read the ``expires`` query parameter of a resolved media URL.

    Args:
        url: Direct media URL returned by the resolver

    Returns:
        int: Unix timestamp, or 0 when absent or unparseable
    """
    try:
        values = parse_qs(urlsplit(url).query).get("expires")
        if not values:
            return 0
        return int(float(values[0]))
    except (TypeError, ValueError, OverflowError):
        return 0


def is_url_fresh(expiry: int, now: float, margin: float = 10.0) -> bool:
    """Return True while the URL stays valid for more than ``margin`` seconds."""
    return expiry > now + margin
