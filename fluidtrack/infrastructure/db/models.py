"""
Database Models (SQLAlchemy ORM)
Append-only event logs keyed by logical day, plus key/value settings
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Enum as SQLEnum, Index, UniqueConstraint
)

from fluidtrack.domain.models import IntakeFluid, OutputFluid, WellnessSlot
from fluidtrack.infrastructure.db.database import Base


class IntakeLogModel(Base):
    """Fluid intake"""
    __tablename__ = "intake_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_key = Column(String(10), nullable=False, index=True)
    logged_at = Column(DateTime, nullable=False)  # naive UTC
    fluid_type = Column(SQLEnum(IntakeFluid, native_enum=False, length=20), nullable=False)
    amount_ml = Column(Integer, nullable=False)


class OutputLogModel(Base):
    """Fluid output"""
    __tablename__ = "output_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_key = Column(String(10), nullable=False, index=True)
    logged_at = Column(DateTime, nullable=False)
    fluid_type = Column(SQLEnum(OutputFluid, native_enum=False, length=20), nullable=False)
    amount_ml = Column(Integer, nullable=True)


class GagLogModel(Base):
    """Gag episode"""
    __tablename__ = "gag_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_key = Column(String(10), nullable=False, index=True)
    logged_at = Column(DateTime, nullable=False)


class WellnessCheckModel(Base):
    """Wellness check, one per slot per day"""
    __tablename__ = "wellness_check"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_key = Column(String(10), nullable=False)
    slot = Column(SQLEnum(WellnessSlot, native_enum=False, length=20), nullable=False)
    appetite = Column(Integer, nullable=True)
    energy = Column(Integer, nullable=True)
    mood = Column(Integer, nullable=True)
    cyanosis = Column(Integer, nullable=True)
    logged_at = Column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint("day_key", "slot", name="uq_wellness_day_slot"),
        Index("ix_wellness_day", "day_key"),
    )


class SettingModel(Base):
    """Caregiver-editable setting, stored as text"""
    __tablename__ = "setting"

    key = Column(String(64), primary_key=True)
    value = Column(String(255), nullable=True)
