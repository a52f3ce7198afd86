"""Deterministic emergency detection over a vitals snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from intake_agent.config import DEFAULT_POLICY, TriagePolicy
from intake_agent.core.records import BloodPressureReading, TemperatureReading, VitalsRecord
from intake_agent.core.types import EmergencySeverity, IndicatorType

from .text import matched_phrases, normalize_text

GENERAL_RECOMMENDATION = "Seek immediate medical attention"


@dataclass(frozen=True)
class EmergencyIndicator:
    """One vitals reading or symptom phrase that crossed an emergency cutoff."""

    type: IndicatorType
    value: str
    threshold: str
    message: str
    matched_terms: tuple[str, ...] = ()


@dataclass(frozen=True)
class EmergencyResult:
    is_emergency: bool
    indicators: tuple[EmergencyIndicator, ...] = ()
    recommendations: tuple[str, ...] = ()
    severity: EmergencySeverity = "normal"


def to_celsius(reading: TemperatureReading) -> float:
    if reading.unit == "fahrenheit":
        return (reading.value - 32) * 5 / 9
    return reading.value


def _to_fahrenheit(celsius: float) -> float:
    return round(celsius * 9 / 5 + 32, 1)


def _format_temperature(reading: TemperatureReading) -> str:
    suffix = "F" if reading.unit == "fahrenheit" else "C"
    return f"{reading.value}°{suffix}"


def check_temperature(
    reading: Optional[TemperatureReading], policy: TriagePolicy = DEFAULT_POLICY
) -> Optional[EmergencyIndicator]:
    if reading is None:
        return None

    celsius = to_celsius(reading)
    if celsius > policy.temperature_high_c:
        high = policy.temperature_high_c
        return EmergencyIndicator(
            type="temperature",
            value=_format_temperature(reading),
            threshold=f">{high}°C ({_to_fahrenheit(high)}°F)",
            message="Dangerously high temperature detected",
        )
    if celsius < policy.temperature_low_c:
        low = policy.temperature_low_c
        return EmergencyIndicator(
            type="temperature",
            value=_format_temperature(reading),
            threshold=f"<{low}°C ({_to_fahrenheit(low)}°F)",
            message="Dangerously low temperature detected (hypothermia risk)",
        )
    return None


def check_blood_pressure(
    reading: Optional[BloodPressureReading], policy: TriagePolicy = DEFAULT_POLICY
) -> Optional[EmergencyIndicator]:
    """Only a complete systolic/diastolic pair can fire; partial captures are a completeness gap."""
    if reading is None or not reading.is_complete:
        return None

    systolic, diastolic = reading.systolic, reading.diastolic
    value = f"{systolic}/{diastolic} mmHg"
    if systolic > policy.systolic_high:
        return EmergencyIndicator(
            type="blood_pressure",
            value=value,
            threshold=f"Systolic >{policy.systolic_high} mmHg",
            message="Dangerously high blood pressure (hypertensive crisis)",
        )
    if diastolic > policy.diastolic_high:
        return EmergencyIndicator(
            type="blood_pressure",
            value=value,
            threshold=f"Diastolic >{policy.diastolic_high} mmHg",
            message="Dangerously high diastolic pressure (hypertensive crisis)",
        )
    if systolic < policy.systolic_low:
        return EmergencyIndicator(
            type="blood_pressure",
            value=value,
            threshold=f"Systolic <{policy.systolic_low} mmHg",
            message="Dangerously low blood pressure (hypotension)",
        )
    if diastolic < policy.diastolic_low:
        return EmergencyIndicator(
            type="blood_pressure",
            value=value,
            threshold=f"Diastolic <{policy.diastolic_low} mmHg",
            message="Dangerously low diastolic pressure (hypotension)",
        )
    return None


def check_symptoms(
    status: Optional[str], policy: TriagePolicy = DEFAULT_POLICY
) -> Optional[EmergencyIndicator]:
    matches = matched_phrases(normalize_text(status), policy.critical_symptoms)
    if not matches:
        return None
    return EmergencyIndicator(
        type="symptoms",
        value=matches[0],
        threshold="Critical symptom keyword",
        message=f"Critical symptom detected: {matches[0]}",
        matched_terms=matches,
    )


def _indicator_recommendations(indicator: EmergencyIndicator) -> list[str]:
    if indicator.type == "temperature":
        if "high" in indicator.message:
            return [
                "Call emergency services or go to the nearest emergency room",
                "Stay hydrated and in a cool environment",
            ]
        return [
            "Call emergency services immediately",
            "Keep warm with blankets while waiting for help",
        ]

    if indicator.type == "blood_pressure":
        if "high" in indicator.message:
            return [
                "Call emergency services - this may be a hypertensive crisis",
                "Sit down and remain calm while waiting for help",
            ]
        return [
            "Call emergency services - severe hypotension requires immediate care",
            "Lie down with legs elevated if possible",
        ]

    if "chest pain" in indicator.value:
        return [
            "Call emergency services immediately - possible heart attack",
            "Do not drive yourself to the hospital",
        ]
    if "breath" in indicator.value:
        return [
            "Call emergency services immediately",
            "Sit upright and try to remain calm",
        ]
    if "stroke" in indicator.value:
        return [
            "Call emergency services immediately - time is critical for stroke",
            "Note the time symptoms started",
        ]
    return ["Call emergency services or go to the emergency room immediately"]


def build_recommendations(indicators: tuple[EmergencyIndicator, ...]) -> tuple[str, ...]:
    """General advice first, then per-indicator guidance, deduplicated in order."""
    recommendations = [GENERAL_RECOMMENDATION]
    for indicator in indicators:
        recommendations.extend(_indicator_recommendations(indicator))
    return tuple(dict.fromkeys(recommendations))


def detect_emergency(vitals: VitalsRecord, policy: TriagePolicy = DEFAULT_POLICY) -> EmergencyResult:
    """
    Evaluate temperature, blood pressure and symptom text independently.

    Every check runs, so several indicators may fire together. Missing
    readings simply produce no indicator.
    """
    checks = (
        check_temperature(vitals.temperature, policy),
        check_blood_pressure(vitals.blood_pressure, policy),
        check_symptoms(vitals.current_status, policy),
    )
    indicators = tuple(indicator for indicator in checks if indicator is not None)
    if not indicators:
        return EmergencyResult(is_emergency=False)

    return EmergencyResult(
        is_emergency=True,
        indicators=indicators,
        recommendations=build_recommendations(indicators),
        severity="critical",
    )
