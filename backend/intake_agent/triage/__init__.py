"""Triage module: emergency detection and the vitals-stage decision."""
from .complexity import ComplexityResult, evaluate_complexity
from .emergency import EmergencyIndicator, EmergencyResult, detect_emergency
from .service import TriageResult, analyze_vitals, record_triage_result

__all__ = [
    "ComplexityResult",
    "evaluate_complexity",
    "EmergencyIndicator",
    "EmergencyResult",
    "detect_emergency",
    "TriageResult",
    "analyze_vitals",
    "record_triage_result",
]
