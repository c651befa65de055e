"""HTTP helpers for the auto-strategy profile page lookup."""

from __future__ import annotations

from urllib.parse import quote

import httpx

_PROFILE_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/125.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}


def profile_page_url(template: str, handle: str) -> str:
    """Fill ``{handle}`` in *template*, percent-encoding the handle."""
    return template.format(handle=quote(handle, safe=""))


async def fetch_profile_page(
    template: str,
    handle: str,
    *,
    timeout: float = 30.0,
) -> str:
    """GET the public profile page of *handle* and return its HTML.

    Raises ``httpx.HTTPError`` on transport failures and non-2xx replies.
    """
    async with httpx.AsyncClient(
        timeout=timeout, follow_redirects=True, headers=_PROFILE_HEADERS
    ) as client:
        resp = await client.get(profile_page_url(template, handle))
        resp.raise_for_status()
        return resp.text
