"""One-time triage decision for the vitals stage."""
from __future__ import annotations

from dataclasses import dataclass

from intake_agent.config import DEFAULT_POLICY, TriagePolicy
from intake_agent.core.records import MedicalRecord, VitalsRecord
from intake_agent.core.types import FinalTriageDecision

from .complexity import evaluate_complexity
from .emergency import EmergencyResult, detect_emergency, to_celsius

EMERGENCY_CONFIDENCE = 1.0
AGENT_ASSISTED_CONFIDENCE = 0.8
DIRECT_CONFIDENCE = 0.7


@dataclass(frozen=True)
class TriageResult:
    decision: FinalTriageDecision
    reason: str
    factors: tuple[str, ...]
    confidence: float
    emergency: EmergencyResult = EmergencyResult(is_emergency=False)


def _simple_factors(
    vitals: VitalsRecord, missing: tuple[str, ...], policy: TriagePolicy
) -> list[str]:
    factors: list[str] = []
    if vitals.temperature is not None:
        celsius = to_celsius(vitals.temperature)
        if policy.temperature_watch_low_c <= celsius <= policy.fever_c:
            factors.append("Normal temperature")

    bp = vitals.blood_pressure
    if bp is not None and bp.is_complete:
        systolic_normal = policy.systolic_watch_low <= bp.systolic <= policy.systolic_watch_high
        diastolic_normal = policy.diastolic_watch_low <= bp.diastolic <= policy.diastolic_watch_high
        if systolic_normal and diastolic_normal:
            factors.append("Normal blood pressure")

    if 0 < len(vitals.status_text) <= 100:
        factors.append("Clear, concise symptom description")

    factors.extend(f"{name} not collected" for name in missing)
    if not factors:
        factors.append("Straightforward presentation based on available data")
    return factors


def analyze_vitals(vitals: VitalsRecord, policy: TriagePolicy = DEFAULT_POLICY) -> TriageResult:
    """
    Classify a vitals snapshot as emergency, agent-assisted or direct-to-diagnosis.

    Ordered, first match wins:
    1. Any emergency indicator (vitals need not be complete).
    2. Complexity score at or above the policy threshold.
    3. Everything else goes straight to diagnosis.

    Never raises for missing data; gaps are reported in ``factors``.
    """
    emergency = detect_emergency(vitals, policy)
    if emergency.is_emergency:
        messages = tuple(indicator.message for indicator in emergency.indicators)
        return TriageResult(
            decision="emergency",
            reason=f"Emergency condition detected: {', '.join(messages)}",
            factors=messages,
            confidence=EMERGENCY_CONFIDENCE,
            emergency=emergency,
        )

    complexity = evaluate_complexity(vitals, policy)
    if complexity.is_complex:
        return TriageResult(
            decision="agent-assisted",
            reason=f"Case complexity requires agent-assisted intake. {complexity.factors[0]}",
            factors=complexity.factors,
            confidence=AGENT_ASSISTED_CONFIDENCE,
        )

    return TriageResult(
        decision="direct-to-diagnosis",
        reason="Straightforward case - proceeding directly to diagnosis based on available data",
        factors=tuple(_simple_factors(vitals, complexity.missing_vitals, policy)),
        confidence=DIRECT_CONFIDENCE,
    )


def record_triage_result(record: MedicalRecord, result: TriageResult) -> MedicalRecord:
    """
    Return a copy of ``record`` with the vitals stage closed on ``result``.

    A record whose stage is already completed comes back unchanged, so a
    replayed turn cannot overwrite the original decision.
    """
    vitals = record.vitals or VitalsRecord()
    if vitals.vitals_stage_completed:
        return record

    closed = vitals.model_copy(
        update={
            "vitals_stage_completed": True,
            "triage_decision": result.decision,
            "triage_reason": result.reason,
            "triage_factors": result.factors,
        }
    )
    return record.model_copy(update={"vitals": closed})
