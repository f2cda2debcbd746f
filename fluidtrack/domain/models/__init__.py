"""
Domain Models Package
Export all domain entities
"""

from .day import DayKey
from .delivery import DeliveryResult, DispatchReport
from .entities import (
    # Enums
    IntakeFluid,
    OutputFluid,
    WellnessSlot,

    # Entities
    DayEvents,
    GagEvent,
    IntakeEvent,
    OutputEvent,
    WellnessCheck,

    # Helpers
    WELLNESS_FIELDS,
    fluid_label,
)
from .summary import DaySummary, IntakeSeverity, IntakeSummary, OutputEntry, Trend
from .tracker_config import DEFAULT_REPORT_TIME_1, DEFAULT_REPORT_TIME_2, TrackerConfig

__all__ = [
    # Enums
    "IntakeFluid",
    "IntakeSeverity",
    "OutputFluid",
    "Trend",
    "WellnessSlot",

    # Entities
    "DayEvents",
    "DayKey",
    "DaySummary",
    "DeliveryResult",
    "DispatchReport",
    "GagEvent",
    "IntakeEvent",
    "IntakeSummary",
    "OutputEntry",
    "OutputEvent",
    "TrackerConfig",
    "WellnessCheck",

    # Helpers
    "DEFAULT_REPORT_TIME_1",
    "DEFAULT_REPORT_TIME_2",
    "WELLNESS_FIELDS",
    "fluid_label",
]
