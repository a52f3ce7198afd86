from fastapi import APIRouter, Depends
from pydantic import ValidationError

from intake_agent.config import TriagePolicy, get_triage_policy
from intake_agent.core import (
    AgentRouteResponse,
    EmergencyResponse,
    IntakeTurnData,
    IntakeTurnRequest,
    IntakeTurnResponse,
    MedicalRecord,
    StatusResponse,
    TriageAnalysisResponse,
    VitalsRecord,
)
from intake_agent.core.logging_utils import clear_log_context, log_event, set_session_id, set_turn_id
from intake_agent.pipelines import advance_intake_turn
from intake_agent.records import calculate_intake_completeness
from intake_agent.routing import agent_to_stage, select_rule
from intake_agent.triage import analyze_vitals, detect_emergency

INVALID_RECORD_UPDATE = "INVALID_RECORD_UPDATE"

router = APIRouter()


def get_policy() -> TriagePolicy:
    return get_triage_policy()


def _build_error_payload(code: str, message: str, details: str | None = None) -> dict:
    payload: dict[str, str] = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return payload


@router.get("/", response_model=StatusResponse)
def read_root():
    return {"status": "online", "system": "Intake Triage Engine"}


@router.post("/triage/emergency", response_model=EmergencyResponse)
def check_emergency(vitals: VitalsRecord, policy: TriagePolicy = Depends(get_policy)):
    return EmergencyResponse.model_validate(detect_emergency(vitals, policy))


@router.post("/triage/analyze", response_model=TriageAnalysisResponse)
def analyze(vitals: VitalsRecord, policy: TriagePolicy = Depends(get_policy)):
    result = analyze_vitals(vitals, policy)
    log_event(
        component="http",
        event="triage_analyzed",
        details={"decision": result.decision, "confidence": result.confidence},
    )
    return TriageAnalysisResponse.model_validate(result)


@router.post("/agents/route", response_model=AgentRouteResponse)
def route_agent(record: MedicalRecord):
    rule = select_rule(record)
    return AgentRouteResponse(
        agent=rule.role,
        stage=agent_to_stage(rule.role),
        priority=rule.priority,
        reason=rule.description,
        completeness=calculate_intake_completeness(record),
    )


@router.post("/intake/turn", response_model=IntakeTurnResponse)
def intake_turn(request: IntakeTurnRequest, policy: TriagePolicy = Depends(get_policy)):
    set_session_id(request.session_id)
    set_turn_id(request.turn_id)
    try:
        result = advance_intake_turn(request.record, request.update, policy=policy)
    except ValidationError as err:
        log_event(
            component="http",
            event="intake_turn_rejected",
            level="WARNING",
            details={"error_count": err.error_count()},
        )
        return {
            "success": False,
            "data": None,
            "error": _build_error_payload(
                INVALID_RECORD_UPDATE,
                "Turn update does not match the medical record schema.",
                details=str(err),
            ),
        }
    finally:
        clear_log_context()

    return IntakeTurnResponse(success=True, data=IntakeTurnData.model_validate(result))
