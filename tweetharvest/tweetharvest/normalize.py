"""Map raw scraper output onto ``NormalizedRecord``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from tweetharvest.models import (
    QUERY_TYPE,
    Hashtag,
    MediaEntry,
    NormalizedRecord,
    QueryRef,
    TweetUser,
)


def _none_if_empty(value: Any) -> Any:
    return None if value == "" else value


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)


def _tweet_time(created_at: Any) -> datetime | None:
    # The scraper reports creation time in milliseconds since the epoch.
    if created_at is None or created_at == "":
        return None
    return datetime.fromtimestamp(int(created_at) / 1000, tz=timezone.utc)


def _hashtags(tags: list[str]) -> list[Hashtag]:
    hashtags: list[Hashtag] = []
    for tag in tags:
        bare = tag.removeprefix("#")
        hashtags.append(Hashtag(tag=bare.lower(), original_tag=bare))
    return hashtags


def _media(photos: list[str], video: Any, link: str | None) -> list[MediaEntry]:
    # Images, then the video, then the tweet's own url; the url entry is
    # emitted even when the scraper reported no link.
    media = [MediaEntry(type="image", term=url) for url in photos]
    if video == 1:
        media.append(MediaEntry(type="video", term=link))
    media.append(MediaEntry(type="url", term=link))
    return media


def normalize_tweet(raw: dict[str, Any], query: int | str) -> NormalizedRecord:
    """Build the canonical record for one raw tweet.

    *query* is the account reference the tweet was harvested for and is
    recorded verbatim in ``_sc_queries``.
    """
    tweet_time = _tweet_time(raw.get("created_at"))
    link = raw.get("link")
    retweets = raw.get("retweets_count")
    likes = raw.get("likes_count")

    return NormalizedRecord(
        media=_media(raw.get("photos") or [], raw.get("video"), link),
        pubdates={"source": tweet_time},
        queries=[QueryRef(type=QUERY_TYPE, term=str(query))],
        tweet_id=str(raw["id"]),
        tweet_time=tweet_time,
        geo=_none_if_empty(raw.get("geo")),
        place=_none_if_empty(raw.get("place")),
        lang=_none_if_empty(raw.get("lang")),
        hashtags=_hashtags(raw.get("hashtags") or []),
        tweet=raw.get("tweet"),
        href=link,
        retweet_count=0 if retweets is None else retweets,
        favorite_count=0 if likes is None else likes,
        user=TweetUser(
            name=raw.get("name"),
            screen_name=raw.get("username"),
            user_id=_str_or_none(raw.get("user_id")),
        ),
    )
