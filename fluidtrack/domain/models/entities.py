"""
Domain Models - Entities
Raw tracker events and the enums that classify them.
Pure domain objects with no infrastructure dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class IntakeFluid(str, Enum):
    """Fluid types that count toward the daily intake limit"""
    WATER = "water"
    JUICE = "juice"
    VITAMIN_WATER = "vitamin_water"
    MILK = "milk"
    PEDIASURE = "pediasure"
    YOGURT_DRINK = "yogurt_drink"


class OutputFluid(str, Enum):
    """Output types"""
    URINE = "urine"
    POOP = "poop"
    VOMIT = "vomit"


class WellnessSlot(str, Enum):
    """Twice-daily wellness check slots"""
    AFTERNOON = "afternoon"
    EVENING = "evening"


WELLNESS_FIELDS = ("appetite", "energy", "mood", "cyanosis")

FLUID_LABELS = {
    "water": "Water",
    "juice": "Juice",
    "vitamin_water": "Vitamin Water",
    "milk": "Milk",
    "pediasure": "PediaSure",
    "yogurt_drink": "Yogurt Drink",
    "urine": "Urine",
    "poop": "Poop",
    "vomit": "Vomit",
}


def fluid_label(fluid_type: str) -> str:
    return FLUID_LABELS.get(fluid_type, fluid_type)


@dataclass(frozen=True)
class IntakeEvent:
    """A drink logged toward the daily limit"""
    logged_at: datetime
    fluid_type: IntakeFluid
    amount_ml: int

    def __post_init__(self):
        if self.amount_ml <= 0:
            raise ValueError("Intake amount must be positive")


@dataclass(frozen=True)
class OutputEvent:
    """Urine, stool or vomit; amount is optional"""
    logged_at: datetime
    fluid_type: OutputFluid
    amount_ml: Optional[int] = None


@dataclass(frozen=True)
class GagEvent:
    """A single gag episode"""
    logged_at: datetime


@dataclass(frozen=True)
class WellnessCheck:
    """
    One wellness check. Each score is an ordinal integer or None when it
    was not recorded; 0 is a real score.
    """
    slot: WellnessSlot
    appetite: Optional[int] = None
    energy: Optional[int] = None
    mood: Optional[int] = None
    cyanosis: Optional[int] = None
    logged_at: Optional[datetime] = None

    def score(self, name: str) -> Optional[int]:
        if name not in WELLNESS_FIELDS:
            raise KeyError(f"Unknown wellness field: {name}")
        return getattr(self, name)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in WELLNESS_FIELDS}


@dataclass(frozen=True)
class DayEvents:
    """Everything the event store holds for one logical day"""
    intake: list[IntakeEvent] = field(default_factory=list)
    outputs: list[OutputEvent] = field(default_factory=list)
    gags: list[GagEvent] = field(default_factory=list)
    afternoon: Optional[WellnessCheck] = None
    evening: Optional[WellnessCheck] = None
