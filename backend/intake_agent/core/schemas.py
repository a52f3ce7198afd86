"""API request and response schemas for the intake engine."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from intake_agent.core.records import MedicalRecord
from intake_agent.core.types import (
    AgentRole,
    EmergencySeverity,
    FinalTriageDecision,
    IndicatorType,
    IntakeStage,
)


class ApiModel(BaseModel):
    """camelCase on the wire; validates from engine dataclasses by attribute."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============= Request Schemas =============

class IntakeTurnRequest(ApiModel):
    """Request schema for /intake/turn.

    ``record`` is the freshly loaded session record; ``update`` holds the
    structured fields extracted from the patient's latest message.
    """
    record: MedicalRecord = Field(
        default_factory=MedicalRecord.initial,
        description="Current session record (defaults to a new session)",
    )
    update: Dict[str, Any] = Field(
        default_factory=dict,
        description="Extracted field updates for this turn",
    )
    session_id: Optional[str] = Field(None, description="Session identifier attached to log lines")
    turn_id: Optional[int] = Field(None, description="Turn counter attached to log lines")


# ============= Response Schemas =============

class EmergencyIndicatorSchema(ApiModel):
    type: IndicatorType
    value: str
    threshold: str
    message: str
    matched_terms: List[str] = Field(default_factory=list)


class EmergencyResponse(ApiModel):
    """Response from /triage/emergency."""
    is_emergency: bool
    indicators: List[EmergencyIndicatorSchema] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    severity: EmergencySeverity = "normal"


class TriageAnalysisResponse(ApiModel):
    """Response from /triage/analyze.

    Callers persist ``decision`` and ``reason`` and close the vitals stage
    in the same transaction as the message that triggered triage.
    """
    decision: FinalTriageDecision
    reason: str
    factors: List[str]
    confidence: float = Field(..., ge=0.0, le=1.0)
    emergency: EmergencyResponse


class AgentRouteResponse(ApiModel):
    """Response from /agents/route."""
    agent: AgentRole
    stage: IntakeStage
    priority: int
    reason: str = Field(..., description="Condition that selected the agent")
    completeness: int = Field(..., ge=0, le=100)


class IntakeTurnData(ApiModel):
    record: MedicalRecord
    agent: AgentRole
    stage: IntakeStage
    completeness: int
    triage: Optional[TriageAnalysisResponse] = None
    recommendations: List[str] = Field(default_factory=list)


class IntakeTurnResponse(ApiModel):
    """Envelope response from /intake/turn."""
    success: bool = Field(..., description="Whether the turn was applied")
    data: Optional[IntakeTurnData] = None
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error metadata when success is false",
    )


class StatusResponse(BaseModel):
    """Generic status response for health check endpoints."""
    status: str = Field(..., description="Service status")
    system: Optional[str] = Field(None, description="System identifier")
