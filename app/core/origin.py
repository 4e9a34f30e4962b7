"""
core/origin.py
--------------
Hostname extraction for origin binding.

The Origin header is always a full origin (scheme://host[:port]). A tenant's
stored domain may be a bare hostname, a host:port pair or a full URL. Only the
hostname component of each side is compared; scheme and port are ignored.

Browsers send internationalized hostnames in their ASCII (punycode) form, so
both sides are converted to it before comparing.
"""

from typing import Optional
from urllib.parse import urlsplit


def _to_ascii(hostname: str) -> str:
    if hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return hostname


def origin_hostname(origin: str) -> Optional[str]:
    """Hostname of an Origin header value, or None if it has none (e.g. 'null')."""
    try:
        hostname = urlsplit(origin.strip()).hostname
    except ValueError:
        return None
    return _to_ascii(hostname) if hostname else None


def normalize_domain(domain: str) -> str:
    """
    Hostname of a stored domain.

    A missing scheme is filled in with http:// before parsing. If the value
    still cannot be parsed into a hostname, the raw string is returned so the
    comparison falls back to plain equality.
    """
    candidate = domain if "://" in domain else f"http://{domain}"
    try:
        hostname = urlsplit(candidate).hostname
    except ValueError:
        return domain
    return _to_ascii(hostname) if hostname else domain
