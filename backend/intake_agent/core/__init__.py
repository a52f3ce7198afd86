"""Core records, types and schemas for the intake engine."""
from .records import (
    SBAR,
    BloodPressureReading,
    MedicalRecord,
    TemperatureReading,
    VitalsRecord,
    WeightReading,
)
from .types import AGENT_ROLES, AgentRole, IntakeStage, TriageDecision
from .schemas import (
    AgentRouteResponse,
    EmergencyResponse,
    IntakeTurnData,
    IntakeTurnRequest,
    IntakeTurnResponse,
    StatusResponse,
    TriageAnalysisResponse,
)

__all__ = [
    # Records
    "SBAR",
    "BloodPressureReading",
    "MedicalRecord",
    "TemperatureReading",
    "VitalsRecord",
    "WeightReading",
    # Types
    "AGENT_ROLES",
    "AgentRole",
    "IntakeStage",
    "TriageDecision",
    # Schemas
    "AgentRouteResponse",
    "EmergencyResponse",
    "IntakeTurnData",
    "IntakeTurnRequest",
    "IntakeTurnResponse",
    "StatusResponse",
    "TriageAnalysisResponse",
]
