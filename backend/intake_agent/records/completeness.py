"""Data-completeness checks shared by triage and agent routing."""
from __future__ import annotations

from typing import Optional

from intake_agent.core.records import MedicalRecord, VitalsRecord

HPI_MIN_CHARS = 50


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def vitals_stage_completed(record: MedicalRecord) -> bool:
    return record.vitals is not None and record.vitals.vitals_stage_completed


def has_chief_complaint(record: MedicalRecord) -> bool:
    return _has_text(record.chief_complaint)


def hpi_is_sufficient(record: MedicalRecord) -> bool:
    return len((record.hpi or "").strip()) >= HPI_MIN_CHARS


def has_history_data(record: MedicalRecord) -> bool:
    return bool(record.medications or record.allergies or record.past_medical_history)


def history_satisfied(record: MedicalRecord) -> bool:
    """History is settled once any list is filled or the patient explicitly reported none."""
    return record.history_check_completed or has_history_data(record)


def missing_vitals(vitals: VitalsRecord) -> list[str]:
    """Names of vitals not collected; a partial blood pressure counts as missing."""
    missing: list[str] = []
    if vitals.temperature is None:
        missing.append("temperature")
    if vitals.weight is None:
        missing.append("weight")
    if vitals.blood_pressure is None or not vitals.blood_pressure.is_complete:
        missing.append("blood pressure")
    return missing


def calculate_intake_completeness(record: Optional[MedicalRecord]) -> int:
    """
    Percentage of the structured intake that has been filled in.

    Weights: chief complaint 20, HPI 20, records check 10, medications,
    allergies and past history 10 each, family and social history 5 each,
    clinical handover 10.
    """
    if record is None:
        return 0

    history_done = record.records_check_completed or record.history_check_completed
    completeness = 0
    if has_chief_complaint(record):
        completeness += 20
    if _has_text(record.hpi):
        completeness += 20
    if record.records_check_completed:
        completeness += 10
    for items in (record.medications, record.allergies, record.past_medical_history):
        if items or history_done:
            completeness += 10
    if _has_text(record.family_history):
        completeness += 5
    if _has_text(record.social_history):
        completeness += 5
    if record.clinical_handover is not None:
        completeness += 10
    return min(completeness, 100)
