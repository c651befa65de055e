"""tweetharvest — collect every tweet of an account as normalized records."""

from tweetharvest.config import Config
from tweetharvest.harvester import Harvester
from tweetharvest.models import JobResult, NormalizedRecord, Strategy, StrategyMode, TimeWindow

__all__ = [
    "Config",
    "Harvester",
    "JobResult",
    "NormalizedRecord",
    "Strategy",
    "StrategyMode",
    "TimeWindow",
]
