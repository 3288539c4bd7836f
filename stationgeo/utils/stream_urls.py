"""Offline stream URL audit.

Flags stations whose stream URL is missing, malformed, or one of the sample
URLs stamped into generated datasets (https://sample-streams.com/hls/tv-0.m3u8).
Nothing here touches the network.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlparse

from .coordinates import first_present

logger = logging.getLogger(__name__)

URL_FIELDS = ("url_resolved", "url")

PLACEHOLDER_HOSTS = {
    "sample-streams.com",
    "example.com",
    "example.org",
    "example.net",
    "localhost",
}

OK = "ok"
MISSING = "missing"
MALFORMED = "malformed"
PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class UrlCheck:
    index: int
    name: Optional[str]
    url: Optional[str]
    status: str


def is_placeholder_host(host: str) -> bool:
    """Check host (or any parent domain) against known sample hosts."""
    host = host.lower().rstrip('.')
    return any(host == h or host.endswith('.' + h) for h in PLACEHOLDER_HOSTS)


def classify_stream_url(url) -> str:
    """Return 'ok', 'missing', 'malformed' or 'placeholder' for a URL value."""
    if not isinstance(url, str) or not url.strip():
        return MISSING

    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
    except ValueError:
        return MALFORMED

    if parsed.scheme not in ('http', 'https') or not host:
        return MALFORMED
    if is_placeholder_host(host):
        return PLACEHOLDER
    return OK


def check_stream_urls(stations: Sequence[Mapping]) -> List[UrlCheck]:
    """Classify each station's stream URL (url_resolved, falling back to url)."""
    checks = []
    for index, station in enumerate(stations):
        url = first_present(station, URL_FIELDS)
        status = classify_stream_url(url)
        if status != OK:
            logger.debug(f"Stream URL {status} at index {index}: {url!r}")
        checks.append(UrlCheck(index, station.get("name"), url, status))
    return checks


def summarize_url_checks(checks: Sequence[UrlCheck]) -> Dict[str, int]:
    """Count checks per status; every status is present in the result."""
    counts = Counter(c.status for c in checks)
    return {status: counts.get(status, 0) for status in (OK, MISSING, MALFORMED, PLACEHOLDER)}
