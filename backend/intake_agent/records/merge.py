"""Apply one turn's extracted structured updates to a medical record."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel

from intake_agent.core.records import (
    BloodPressureReading,
    MedicalRecord,
    TemperatureReading,
    VitalsRecord,
    WeightReading,
)

_TEXT_FIELDS = ("chief_complaint", "hpi", "family_history", "social_history")
_LIST_FIELDS = ("medications", "allergies", "past_medical_history")
_READING_MODELS: dict[str, type[BaseModel]] = {
    "temperature": TemperatureReading,
    "weight": WeightReading,
    "blood_pressure": BloodPressureReading,
}


def _normalize_keys(model: type[BaseModel], update: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase or snake_case keys onto field names, dropping unknown keys."""
    by_alias = {info.alias: name for name, info in model.model_fields.items() if info.alias}
    normalized: dict[str, Any] = {}
    for key, value in update.items():
        if key in model.model_fields:
            normalized[key] = value
        elif key in by_alias:
            normalized[by_alias[key]] = value
    return normalized


def _merge_reading(model: type[BaseModel], current: Optional[BaseModel], update: Any) -> Any:
    if update is None:
        return current.model_dump() if current is not None else None
    if isinstance(update, BaseModel):
        update = update.model_dump(exclude_unset=True)
    base = current.model_dump() if current is not None else {}
    return {**base, **_normalize_keys(model, update)}


def merge_vitals(existing: Optional[VitalsRecord], update: Mapping[str, Any]) -> VitalsRecord:
    """
    Merge a partial vitals update field by field.

    The stage flag and the triage decision, reason and factors are never
    taken from an update; only ``record_triage_result`` sets them.
    """
    current = existing or VitalsRecord()
    changes = _normalize_keys(VitalsRecord, update)
    merged = current.model_dump()

    for name in ("patient_age", "current_status", "vitals_collected"):
        if changes.get(name) is not None:
            merged[name] = changes[name]

    for name, model in _READING_MODELS.items():
        if name in changes:
            merged[name] = _merge_reading(model, getattr(current, name), changes[name])

    return VitalsRecord.model_validate(merged)


def merge_medical_data(existing: MedicalRecord, update: Optional[Mapping[str, Any]]) -> MedicalRecord:
    """
    Return a new record with ``update`` applied on top of ``existing``.

    Null values never erase collected data; lists are replaced wholesale;
    ``history_check_completed`` is sticky. Raises ``pydantic.ValidationError``
    when the update carries values of the wrong shape.
    """
    if not update:
        return existing

    changes = _normalize_keys(MedicalRecord, update)
    merged = existing.model_dump()

    for name in _TEXT_FIELDS:
        if changes.get(name) is not None:
            merged[name] = changes[name]

    for name in _LIST_FIELDS:
        if isinstance(changes.get(name), (list, tuple)):
            merged[name] = list(changes[name])

    if changes.get("records_check_completed") is not None:
        merged["records_check_completed"] = changes["records_check_completed"]
    if changes.get("history_check_completed") is not None:
        merged["history_check_completed"] = changes["history_check_completed"]

    if changes.get("clinical_handover") is not None:
        merged["clinical_handover"] = changes["clinical_handover"]

    vitals_update = changes.get("vitals")
    if isinstance(vitals_update, VitalsRecord):
        vitals_update = vitals_update.model_dump(exclude_unset=True)
    if vitals_update:
        merged["vitals"] = merge_vitals(existing.vitals, vitals_update)

    record = MedicalRecord.model_validate(merged)
    if existing.history_check_completed and not record.history_check_completed:
        record = record.model_copy(update={"history_check_completed": True})
    return record
