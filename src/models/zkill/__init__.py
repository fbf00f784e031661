"""zKillboard data models."""

from .kill import ZKillEntry, ZKillMeta
from .stats import (
    SHIP_TYPE_LIST,
    KillboardStats,
    RegionActivity,
    TopList,
    parse_count,
    parse_number,
)

__all__ = [
    "SHIP_TYPE_LIST",
    "KillboardStats",
    "RegionActivity",
    "TopList",
    "ZKillEntry",
    "ZKillMeta",
    "parse_count",
    "parse_number",
]
