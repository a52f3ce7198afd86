from datetime import datetime, timezone

import pytest

from intake_agent.config import TriagePolicy
from intake_agent.core.records import (
    BloodPressureReading,
    MedicalRecord,
    TemperatureReading,
    VitalsRecord,
    WeightReading,
)
from intake_agent.triage import analyze_vitals, evaluate_complexity, record_triage_result

NOW = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


def _base_vitals(**overrides) -> VitalsRecord:
    fields = {
        "patient_age": 35,
        "temperature": TemperatureReading(value=37.0, collected_at=NOW),
        "weight": WeightReading(value=70, collected_at=NOW),
        "blood_pressure": BloodPressureReading(systolic=120, diastolic=80, collected_at=NOW),
        "current_status": "mild headache",
        "vitals_collected": True,
    }
    fields.update(overrides)
    return VitalsRecord(**fields)


def test_critical_symptoms_escalate_without_any_vitals():
    vitals = VitalsRecord(current_status="severe chest pain and difficulty breathing")

    result = analyze_vitals(vitals)

    assert result.decision == "emergency"
    assert result.confidence == 1.0
    assert result.reason.startswith("Emergency condition detected")
    assert result.emergency.is_emergency is True
    assert result.factors


def test_high_temperature_escalates():
    result = analyze_vitals(_base_vitals(temperature=TemperatureReading(value=40.0)))

    assert result.decision == "emergency"
    assert result.emergency.indicators[0].type == "temperature"


def test_hypertensive_crisis_escalates():
    result = analyze_vitals(
        _base_vitals(blood_pressure=BloodPressureReading(systolic=190, diastolic=110))
    )

    assert result.decision == "emergency"
    assert result.emergency.indicators[0].type == "blood_pressure"


def test_missing_vitals_with_simple_status_goes_direct():
    result = analyze_vitals(VitalsRecord(current_status="mild headache"))

    assert result.decision == "direct-to-diagnosis"
    assert "temperature not collected" in result.factors
    assert "weight not collected" in result.factors
    assert "blood pressure not collected" in result.factors
    assert result.confidence < 1.0


def test_simple_case_lists_what_made_it_simple():
    result = analyze_vitals(_base_vitals())

    assert result.decision == "direct-to-diagnosis"
    assert "Straightforward" in result.reason
    assert "Normal temperature" in result.factors
    assert "Normal blood pressure" in result.factors
    assert "Clear, concise symptom description" in result.factors
    assert not any("not collected" in factor for factor in result.factors)


def test_multiple_symptoms_route_to_agent_assisted():
    result = analyze_vitals(_base_vitals(current_status="headache, fever, cough, and fatigue"))

    assert result.decision == "agent-assisted"
    assert "complexity" in result.reason
    assert 0 < result.confidence < 1.0
    assert any("symptom" in factor for factor in result.factors)


def test_elevated_blood_pressure_routes_to_agent_assisted():
    result = analyze_vitals(
        _base_vitals(
            blood_pressure=BloodPressureReading(systolic=160, diastolic=95),
            current_status="feeling unwell",
        )
    )

    assert result.decision == "agent-assisted"
    assert any("blood pressure" in factor for factor in result.factors)


def test_chronic_multi_week_presentation_routes_to_agent_assisted():
    result = analyze_vitals(_base_vitals(current_status="chronic back pain for weeks"))

    assert result.decision == "agent-assisted"
    assert any("chronic" in factor.lower() for factor in result.factors)
    assert "Symptoms persisting for weeks or longer" in result.factors


def test_symptoms_alone_can_require_agent_assistance():
    vitals = VitalsRecord(
        current_status=(
            "I have chronic pain, fever, cough, nausea, dizziness, and have been "
            "taking medication for multiple conditions"
        )
    )

    result = analyze_vitals(vitals)

    assert result.decision == "agent-assisted"
    assert "weight not collected" in result.factors


def test_mild_fever_alone_stays_below_threshold():
    result = analyze_vitals(_base_vitals(temperature=TemperatureReading(value=38.0)))

    assert result.decision == "direct-to-diagnosis"


def test_partial_blood_pressure_is_reported_missing():
    result = analyze_vitals(
        VitalsRecord(
            blood_pressure=BloodPressureReading(systolic=150),
            current_status="tired",
        )
    )

    assert result.decision == "direct-to-diagnosis"
    assert "blood pressure not collected" in result.factors


@pytest.mark.parametrize(
    "vitals",
    [
        VitalsRecord(),
        VitalsRecord(current_status=""),
        VitalsRecord(current_status="   "),
        VitalsRecord(patient_age=40, weight=WeightReading(value=80)),
        _base_vitals(current_status=None),
    ],
)
def test_factors_are_never_empty(vitals):
    result = analyze_vitals(vitals)

    assert result.decision in {"emergency", "agent-assisted", "direct-to-diagnosis"}
    assert result.factors
    assert 0.0 <= result.confidence <= 1.0


@pytest.mark.parametrize(
    ("age", "status", "expected_factor"),
    [
        (3, "fever and cough", "Young child"),
        (75, "feeling weak", "Elderly"),
    ],
)
def test_age_factors(age, status, expected_factor):
    result = evaluate_complexity(_base_vitals(patient_age=age, current_status=status))

    assert any(expected_factor in factor for factor in result.factors)


def test_missing_vitals_carry_no_weight():
    sparse = evaluate_complexity(VitalsRecord(current_status="headache"))
    complete = evaluate_complexity(_base_vitals(current_status="headache"))

    assert sparse.score == complete.score == 0
    assert sparse.missing_vitals == ("temperature", "weight", "blood pressure")
    assert complete.missing_vitals == ()


def test_temperature_watch_band_follows_the_emergency_cutoff():
    vitals = _base_vitals(temperature=TemperatureReading(value=38.3))

    default = evaluate_complexity(vitals)
    lowered = evaluate_complexity(vitals, TriagePolicy(temperature_high_c=39.0))

    assert "Mild fever detected (38.3°C)" in default.factors
    assert "Elevated temperature (38.3°C) approaching concerning levels" in lowered.factors
    assert lowered.score == default.score + 1


def test_systolic_watch_band_follows_the_emergency_cutoff():
    vitals = _base_vitals(
        blood_pressure=BloodPressureReading(systolic=130, diastolic=80, collected_at=NOW)
    )

    assert evaluate_complexity(vitals).score == 0
    assert "Normal blood pressure" in analyze_vitals(vitals).factors

    policy = TriagePolicy(systolic_high=160)
    shifted = evaluate_complexity(vitals, policy)
    assert "Elevated systolic blood pressure (130 mmHg)" in shifted.factors
    assert "Normal blood pressure" not in analyze_vitals(vitals, policy).factors


def test_normal_temperature_range_follows_the_low_cutoff():
    vitals = _base_vitals(temperature=TemperatureReading(value=36.2))

    assert "Normal temperature" in analyze_vitals(vitals).factors

    policy = TriagePolicy(temperature_low_c=35.5)
    assert "Normal temperature" not in analyze_vitals(vitals, policy).factors
    assert "Low temperature (36.2°C) approaching concerning levels" in evaluate_complexity(
        vitals, policy
    ).factors


def test_record_triage_result_closes_the_vitals_stage():
    record = MedicalRecord.initial()
    result = analyze_vitals(VitalsRecord(current_status="mild headache"))

    updated = record_triage_result(record, result)

    assert updated.vitals.vitals_stage_completed is True
    assert updated.vitals.triage_decision == "direct-to-diagnosis"
    assert updated.vitals.triage_reason == result.reason
    assert updated.vitals.triage_factors == result.factors
    assert record.vitals.vitals_stage_completed is False
    assert record.vitals.triage_decision == "pending"


def test_record_triage_result_does_not_overwrite_a_recorded_decision():
    first = analyze_vitals(VitalsRecord(current_status="mild headache"))
    second = analyze_vitals(VitalsRecord(current_status="chest pain"))
    record = record_triage_result(MedicalRecord.initial(), first)

    replayed = record_triage_result(record, second)

    assert replayed is record
    assert replayed.vitals.triage_decision == "direct-to-diagnosis"


def test_record_triage_result_creates_vitals_when_absent():
    result = analyze_vitals(VitalsRecord())

    updated = record_triage_result(MedicalRecord(), result)

    assert updated.vitals is not None
    assert updated.vitals.vitals_stage_completed is True
