from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .day import DayKey
from .entities import WellnessCheck


class IntakeSeverity(str, Enum):
    """Ordered intake tiers: NORMAL < YELLOW < RED < OVER"""
    NORMAL = "normal"
    YELLOW = "yellow"
    RED = "red"
    OVER = "over"


class Trend(str, Enum):
    """Direction of a wellness score versus the previous evening"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class IntakeSummary:
    """
    Intake rollup for one day.

    `percent` is capped at 100 for display; `raw_percent` is not, and
    `severity` is derived from the uncapped values.
    """
    total_ml: int
    limit_ml: int
    percent: int
    raw_percent: int
    severity: IntakeSeverity
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_ml": self.total_ml,
            "limit_ml": self.limit_ml,
            "percent": self.percent,
            "raw_percent": self.raw_percent,
            "severity": self.severity.value,
            "byType": dict(self.by_type),
        }


@dataclass(frozen=True)
class OutputEntry:
    """Output event projected for display"""
    time: str
    fluid_type: str
    amount_ml: Optional[int]
    logged_at: str

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "fluid_type": self.fluid_type,
            "amount_ml": self.amount_ml,
            "logged_at": self.logged_at,
        }


@dataclass(frozen=True)
class DaySummary:
    """Derived rollup of one logical day. Never persisted."""
    day_key: DayKey
    label: str
    is_today: bool
    intake: IntakeSummary
    outputs: list[OutputEntry]
    gag_count: int
    afternoon: Optional[WellnessCheck]
    evening: Optional[WellnessCheck]
    collapsed: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            self.intake.total_ml == 0
            and not self.outputs
            and self.gag_count == 0
            and self.afternoon is None
            and self.evening is None
        )

    def to_dict(self) -> dict:
        return {
            "dayKey": str(self.day_key),
            "label": self.label,
            "isToday": self.is_today,
            "isEmpty": self.is_empty,
            "collapsed": self.collapsed,
            "intake": self.intake.to_dict(),
            "outputs": [o.to_dict() for o in self.outputs],
            "gagCount": self.gag_count,
            "wellness": {
                "afternoon": self.afternoon.to_dict() if self.afternoon else None,
                "evening": self.evening.to_dict() if self.evening else None,
            },
        }
