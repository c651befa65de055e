"""Configuration management for tweetharvest."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field

from tweetharvest.models import StrategyMode


@dataclass(frozen=True)
class Config:
    """Job configuration, resolved once before the first account is fetched."""

    strategy: StrategyMode = StrategyMode.AUTO
    executable: str = "twint"
    concurrency: int = 8
    scratch_dir: str = field(default_factory=tempfile.gettempdir)
    retry_attempts: int = 3
    retry_backoff: float = 1.0
    http_timeout: float = 30.0
    profile_url: str = "https://nitter.net/{handle}"
    progress_step: int = 10

    def __post_init__(self) -> None:
        # Accept plain strings from env vars and CLI flags.
        object.__setattr__(self, "strategy", StrategyMode(self.strategy))

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            strategy=StrategyMode(os.getenv("TWEETHARVEST_STRATEGY", "auto")),
            executable=os.getenv("TWEETHARVEST_TWINT", "twint"),
            concurrency=int(os.getenv("TWEETHARVEST_CONCURRENCY", "8")),
            scratch_dir=os.getenv("TWEETHARVEST_SCRATCH_DIR") or tempfile.gettempdir(),
            retry_attempts=int(os.getenv("TWEETHARVEST_RETRIES", "3")),
            retry_backoff=float(os.getenv("TWEETHARVEST_RETRY_BACKOFF", "1.0")),
            http_timeout=float(os.getenv("TWEETHARVEST_TIMEOUT", "30")),
            profile_url=os.getenv("TWEETHARVEST_PROFILE_URL", cls.profile_url),
            progress_step=int(os.getenv("TWEETHARVEST_PROGRESS_STEP", "10")),
        )
