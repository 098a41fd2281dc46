"""Link header pagination helpers."""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

_LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


def parse_link_header(link_header: str | None) -> dict[str, str]:
    """Parse Link header to extract pagination URLs.

    Args:
        link_header: Link header value from response.

    Returns:
        Dict mapping rel type to URL (e.g., {"next": "url", "last": "url"}).
    """
    if not link_header:
        return {}

    links = {}
    # Link header format: <url>; rel="next", <url>; rel="last"
    for match in _LINK_PATTERN.finditer(link_header):
        url, rel = match.groups()
        links[rel] = url

    return links


@dataclass(frozen=True)
class PageCursor:
    """Pointer to the next page of a listing."""

    url: str

    @property
    def host(self) -> str:
        return urlparse(self.url).netloc

    def belongs_to(self, base_url: str) -> bool:
        """Check that the cursor targets the same host as ``base_url``."""
        return self.host == urlparse(base_url).netloc


def next_page_cursor(headers: httpx.Headers) -> PageCursor | None:
    """Return the ``rel="next"`` cursor of a response, if any."""
    links = parse_link_header(headers.get("link"))
    if "next" not in links:
        return None
    return PageCursor(links["next"])
