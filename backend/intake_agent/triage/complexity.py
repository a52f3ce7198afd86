"""Complexity scoring that decides between agent-assisted and direct intake."""
from __future__ import annotations

from dataclasses import dataclass

from intake_agent.config import DEFAULT_POLICY, TriagePolicy
from intake_agent.core.records import VitalsRecord
from intake_agent.records.completeness import missing_vitals

from .emergency import to_celsius
from .text import contains_any, matched_phrases, normalize_text

SYMPTOM_KEYWORDS: tuple[str, ...] = (
    "pain",
    "fever",
    "cough",
    "nausea",
    "vomiting",
    "diarrhea",
    "headache",
    "dizziness",
    "fatigue",
    "weakness",
    "swelling",
    "rash",
    "bleeding",
    "shortness of breath",
    "chest",
    "abdomen",
)
CONJUNCTION_MARKERS: tuple[str, ...] = (",", " and ", " also ", " plus ", " with ")
CHRONIC_KEYWORDS: tuple[str, ...] = (
    "chronic",
    "ongoing",
    "persistent",
    "recurring",
    "history of",
    "diagnosed with",
    "previously had",
)
DURATION_KEYWORDS: tuple[str, ...] = (
    "for weeks",
    "past week",
    "several weeks",
    "few weeks",
    "for a month",
    "months",
)
MEDICATION_KEYWORDS: tuple[str, ...] = (
    "medication",
    "medicine",
    "pills",
    "prescription",
    "taking",
)


@dataclass(frozen=True)
class ComplexityResult:
    is_complex: bool
    score: int
    factors: tuple[str, ...]
    missing_vitals: tuple[str, ...] = ()


def _score_description(text: str, factors: list[str]) -> int:
    score = 0
    normalized = normalize_text(text)

    if len(text) > 200:
        factors.append("Detailed symptom description suggests complex case")
        score += 2
    elif len(text) > 100:
        factors.append("Moderate symptom description length")
        score += 1

    keyword_count = len(matched_phrases(normalized, SYMPTOM_KEYWORDS))
    if keyword_count >= 3:
        factors.append(f"Multiple symptoms reported ({keyword_count} symptom keywords)")
        score += 3
    elif keyword_count >= 2:
        factors.append(f"Several symptoms mentioned ({keyword_count} symptom keywords)")
        score += 2

    if len(matched_phrases(normalized, CONJUNCTION_MARKERS)) >= 2:
        factors.append("Multiple interconnected symptoms")
        score += 1

    if contains_any(normalized, CHRONIC_KEYWORDS):
        factors.append("Chronic or ongoing condition mentioned")
        score += 2

    if contains_any(normalized, DURATION_KEYWORDS):
        factors.append("Symptoms persisting for weeks or longer")
        score += 2

    if contains_any(normalized, MEDICATION_KEYWORDS):
        factors.append("Current medication use mentioned")
        score += 1

    return score


def _score_vitals(vitals: VitalsRecord, policy: TriagePolicy, factors: list[str]) -> int:
    score = 0

    if vitals.temperature is not None:
        celsius = to_celsius(vitals.temperature)
        if policy.temperature_watch_high_c < celsius <= policy.temperature_high_c:
            factors.append(f"Elevated temperature ({celsius:.1f}°C) approaching concerning levels")
            score += 2
        elif policy.fever_c < celsius <= policy.temperature_watch_high_c:
            factors.append(f"Mild fever detected ({celsius:.1f}°C)")
            score += 1
        elif policy.temperature_low_c <= celsius < policy.temperature_watch_low_c:
            factors.append(f"Low temperature ({celsius:.1f}°C) approaching concerning levels")
            score += 2

    bp = vitals.blood_pressure
    if bp is not None:
        if bp.systolic is not None:
            if policy.systolic_watch_high < bp.systolic <= policy.systolic_high:
                factors.append(f"Elevated systolic blood pressure ({bp.systolic} mmHg)")
                score += 2
            elif policy.systolic_low <= bp.systolic < policy.systolic_watch_low:
                factors.append(f"Low systolic blood pressure ({bp.systolic} mmHg)")
                score += 2
        if bp.diastolic is not None:
            if policy.diastolic_watch_high < bp.diastolic <= policy.diastolic_high:
                factors.append(f"Elevated diastolic blood pressure ({bp.diastolic} mmHg)")
                score += 2
            elif policy.diastolic_low <= bp.diastolic < policy.diastolic_watch_low:
                factors.append(f"Low diastolic blood pressure ({bp.diastolic} mmHg)")
                score += 2

    if vitals.patient_age is not None:
        if vitals.patient_age < 5:
            factors.append("Young child - requires careful assessment")
            score += 1
        elif vitals.patient_age > 65:
            factors.append("Elderly patient - may require additional consideration")
            score += 1

    return score


def evaluate_complexity(vitals: VitalsRecord, policy: TriagePolicy = DEFAULT_POLICY) -> ComplexityResult:
    """
    Score how much conversational follow-up a presentation needs.

    Missing vitals are reported as factors but carry no weight, so sparse
    data alone never forces agent-assisted intake.
    """
    factors: list[str] = []
    score = _score_description(vitals.status_text, factors)
    score += _score_vitals(vitals, policy, factors)

    missing = missing_vitals(vitals)
    factors.extend(f"{name} not collected" for name in missing)

    return ComplexityResult(
        is_complex=score >= policy.complexity_threshold,
        score=score,
        factors=tuple(factors),
        missing_vitals=tuple(missing),
    )
