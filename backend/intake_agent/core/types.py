"""Common type definitions for the intake engine."""
from typing import Literal, get_args

# Type aliases for clarity
AgentRole = Literal[
    "VitalsTriageAgent",
    "Triage",
    "ClinicalInvestigator",
    "RecordsClerk",
    "HistorySpecialist",
    "HandoverSpecialist",
]
TriageDecision = Literal["pending", "emergency", "agent-assisted", "direct-to-diagnosis"]
FinalTriageDecision = Literal["emergency", "agent-assisted", "direct-to-diagnosis"]
IntakeStage = Literal["vitals", "triage", "investigation", "records", "profile", "summary"]
IndicatorType = Literal["temperature", "blood_pressure", "symptoms"]
EmergencySeverity = Literal["critical", "normal"]
TemperatureUnit = Literal["celsius", "fahrenheit"]
WeightUnit = Literal["kg", "lbs"]

AGENT_ROLES: tuple[str, ...] = get_args(AgentRole)
