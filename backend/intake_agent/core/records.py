"""Structured intake records consumed by the triage and routing engine.

Records are immutable snapshots. Callers load a fresh record every turn and
derive updated copies with ``model_copy`` (see ``intake_agent.records.merge``).
Input accepts both snake_case and the camelCase names used on the wire.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from intake_agent.core.types import TemperatureUnit, TriageDecision, WeightUnit


class RecordModel(BaseModel):
    """Base config shared by every record model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TemperatureReading(RecordModel):
    value: float
    unit: TemperatureUnit = "celsius"
    collected_at: Optional[datetime] = None


class WeightReading(RecordModel):
    value: float
    unit: WeightUnit = "kg"
    collected_at: Optional[datetime] = None


class BloodPressureReading(RecordModel):
    """Blood pressure group; either number may be missing on a partial capture."""

    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    collected_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.systolic is not None and self.diastolic is not None


class VitalsRecord(RecordModel):
    """Per-session snapshot of the vitals stage."""

    patient_age: Optional[int] = None
    temperature: Optional[TemperatureReading] = None
    weight: Optional[WeightReading] = None
    blood_pressure: Optional[BloodPressureReading] = None
    current_status: Optional[str] = None
    vitals_collected: bool = False
    vitals_stage_completed: bool = False
    triage_decision: TriageDecision = "pending"
    triage_reason: Optional[str] = None
    triage_factors: tuple[str, ...] = ()

    @property
    def status_text(self) -> str:
        return self.current_status or ""


class SBAR(RecordModel):
    """Clinical handover summary written at the end of intake."""

    situation: str
    background: str
    assessment: str
    recommendation: str


class MedicalRecord(RecordModel):
    """Cumulative structured intake data for one session."""

    chief_complaint: Optional[str] = None
    hpi: Optional[str] = None
    records_check_completed: bool = False
    history_check_completed: bool = False
    medications: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()
    past_medical_history: tuple[str, ...] = ()
    family_history: Optional[str] = None
    social_history: Optional[str] = None
    clinical_handover: Optional[SBAR] = None
    vitals: Optional[VitalsRecord] = None

    @classmethod
    def initial(cls) -> "MedicalRecord":
        """Empty record created at session start."""
        return cls(vitals=VitalsRecord())
