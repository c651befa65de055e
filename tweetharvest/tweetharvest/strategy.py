"""Pick the fetch strategy for an account."""

from __future__ import annotations

import logging
import re

from tweetharvest.models import Strategy, StrategyMode
from tweetharvest.utils.http import fetch_profile_page, profile_page_url

logger = logging.getLogger(__name__)

# A full-profile dump is only reliable for accounts up to about this many tweets.
PROFILE_THRESHOLD = 3100

_COUNT_PATTERNS: list[re.Pattern[str]] = [
    # Nitter: <li class="posts"> ... <span class="profile-stat-num">1,234</span>
    re.compile(
        r'class="posts".*?class="profile-stat-num"[^>]*>\s*([\d,.]+)\s*<',
        re.IGNORECASE | re.DOTALL,
    ),
    # Legacy twitter.com profile nav.
    re.compile(
        r'ProfileNav-item--tweets.*?data-count="?(\d+)',
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(r'"statuses_count"\s*:\s*(\d+)'),
]


def extract_post_count(html: str) -> int | None:
    """Best-effort tweet count from a profile page, or ``None``."""
    for pattern in _COUNT_PATTERNS:
        match = pattern.search(html)
        if not match:
            continue
        digits = re.sub(r"[,.]", "", match.group(1))
        if digits.isdigit():
            return int(digits)
    return None


async def select_strategy(
    handle: str,
    mode: StrategyMode,
    *,
    profile_url: str = "https://nitter.net/{handle}",
    timeout: float = 30.0,
) -> Strategy:
    """Resolve *mode* to a concrete strategy for *handle*.

    In ``AUTO`` mode the account's profile page is fetched once; a readable
    tweet count at or below ``PROFILE_THRESHOLD`` selects a profile dump,
    anything else (including a failed fetch) selects interval scanning.
    """
    if mode is StrategyMode.INTERVAL:
        return Strategy.INTERVAL
    if mode is StrategyMode.PROFILE:
        return Strategy.PROFILE

    url = profile_page_url(profile_url, handle)
    try:
        html = await fetch_profile_page(profile_url, handle, timeout=timeout)
    except Exception:
        logger.warning("Fetching %s failed, falling back to interval scan", url, exc_info=True)
        return Strategy.INTERVAL

    count = extract_post_count(html)
    if count is None:
        logger.warning("No tweet count found at %s, falling back to interval scan", url)
        return Strategy.INTERVAL

    logger.info("%s has %d tweets", handle, count)
    return Strategy.PROFILE if count <= PROFILE_THRESHOLD else Strategy.INTERVAL


__all__ = ["PROFILE_THRESHOLD", "Strategy", "StrategyMode", "extract_post_count", "select_strategy"]
