"""Core data models for tweetharvest."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

QUERY_TYPE = "twitter_user"

_TS_FMT = "%Y-%m-%d %H:%M:%S"


class Strategy(str, Enum):
    """How a single account is fetched."""

    INTERVAL = "interval"
    PROFILE = "profile"


class StrategyMode(str, Enum):
    """Configured strategy; ``AUTO`` defers the choice to a profile page lookup."""

    AUTO = "auto"
    INTERVAL = "interval"
    PROFILE = "profile"


class TimeWindow(BaseModel, frozen=True):
    """Half-open ``[start, end)`` span bounding one scraper request."""

    start: datetime
    end: datetime

    @property
    def since(self) -> str:
        return self.start.strftime(_TS_FMT)

    @property
    def until(self) -> str:
        return self.end.strftime(_TS_FMT)


class ScrapeTask(BaseModel, frozen=True):
    """One invocation of the external scraper."""

    handle: str
    window: TimeWindow | None = None
    temp_path: Path


class MediaEntry(BaseModel, frozen=True):
    type: str
    term: str | None = None


class Hashtag(BaseModel, frozen=True):
    tag: str
    original_tag: str


class TweetUser(BaseModel, frozen=True):
    name: str | None = None
    screen_name: str | None = None
    user_id: str | None = None


class QueryRef(BaseModel, frozen=True):
    type: str = QUERY_TYPE
    term: str


class NormalizedRecord(BaseModel, frozen=True, populate_by_name=True):
    """Canonical post handed to the downstream pipeline.

    Serialise with ``model_dump(by_alias=True)`` to get the ``_sc_*`` keys.
    """

    id_fields: list[str] = Field(default_factory=lambda: ["tweet_id"], alias="_sc_id_fields")
    content_fields: list[str] = Field(default_factory=lambda: ["tweet"], alias="_sc_content_fields")
    media: list[MediaEntry] = Field(default_factory=list, alias="_sc_media")
    pubdates: dict[str, datetime | None] = Field(default_factory=dict, alias="_sc_pubdates")
    queries: list[QueryRef] = Field(default_factory=list, alias="_sc_queries")

    tweet_id: str
    tweet_time: datetime | None = None
    geo: Any = None
    place: Any = None
    lang: str | None = None
    hashtags: list[Hashtag] = Field(default_factory=list)
    tweet: str | None = None
    href: str | None = None
    retweet_count: int = 0
    favorite_count: int = 0
    user: TweetUser = Field(default_factory=TweetUser)


class FailureRecord(BaseModel, frozen=True):
    term: str
    reason: str


class JobResult(BaseModel, frozen=True):
    """Everything one job produced."""

    records: list[NormalizedRecord] = Field(default_factory=list)
    total: int = 0
    success: int = 0
    failures: list[FailureRecord] = Field(default_factory=list)
