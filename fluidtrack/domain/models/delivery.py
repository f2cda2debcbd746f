from dataclasses import dataclass, field
from typing import Optional

from .day import DayKey


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of sending one report to one recipient"""
    recipient_id: int
    ok: bool
    error: Optional[str] = None

    @classmethod
    def sent(cls, recipient_id: int) -> "DeliveryResult":
        return cls(recipient_id=recipient_id, ok=True)

    @classmethod
    def failed(cls, recipient_id: int, reason: str) -> "DeliveryResult":
        return cls(recipient_id=recipient_id, ok=False, error=reason or "unknown error")


@dataclass(frozen=True)
class DispatchReport:
    """Everything that happened during one trigger firing"""
    label: str
    day_key: Optional[DayKey]
    results: list[DeliveryResult] = field(default_factory=list)
    error_notice: bool = False

    @property
    def delivered(self) -> list[int]:
        return [r.recipient_id for r in self.results if r.ok]

    @property
    def failed(self) -> list[DeliveryResult]:
        return [r for r in self.results if not r.ok]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "day_key": str(self.day_key) if self.day_key else None,
            "error_notice": self.error_notice,
            "delivered": self.delivered,
            "failed": [
                {"recipient_id": r.recipient_id, "error": r.error} for r in self.failed
            ],
        }
