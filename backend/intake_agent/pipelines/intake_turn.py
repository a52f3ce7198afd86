"""Per-turn orchestration: merge updates, triage once, route the next agent."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import DEFAULT_POLICY, TriagePolicy
from ..core.logging_utils import describe_text, log_event
from ..core.records import MedicalRecord, VitalsRecord
from ..core.types import AgentRole, IntakeStage
from ..records import calculate_intake_completeness, merge_medical_data
from ..routing import agent_to_stage, determine_agent
from ..triage import TriageResult, analyze_vitals, detect_emergency, record_triage_result


@dataclass(frozen=True)
class IntakeTurnResult:
    record: MedicalRecord
    agent: AgentRole
    stage: IntakeStage
    completeness: int
    triage: Optional[TriageResult] = None

    @property
    def recommendations(self) -> tuple[str, ...]:
        """Emergency guidance to surface this turn; empty unless triage just escalated."""
        if self.triage is None or self.triage.decision != "emergency":
            return ()
        return self.triage.emergency.recommendations


def should_run_triage(vitals: Optional[VitalsRecord], policy: TriagePolicy = DEFAULT_POLICY) -> bool:
    """
    Triage runs while the vitals stage is open, once the vitals agent has
    finished collecting or as soon as an emergency is visible.
    """
    if vitals is None or vitals.vitals_stage_completed:
        return False
    return vitals.vitals_collected or detect_emergency(vitals, policy).is_emergency


def advance_intake_turn(
    record: MedicalRecord,
    update: Optional[Mapping[str, Any]] = None,
    *,
    policy: TriagePolicy = DEFAULT_POLICY,
) -> IntakeTurnResult:
    """
    Process one inbound patient turn against a freshly loaded record.

    1. Apply the turn's extracted updates.
    2. While the vitals stage is open, decide triage at most once and
       persist the decision on the returned record.
    3. Select the agent that answers next.

    The input record is never modified; the caller stores ``result.record``.
    """
    updated = merge_medical_data(record, update)

    triage_result: Optional[TriageResult] = None
    if should_run_triage(updated.vitals, policy):
        triage_result = analyze_vitals(updated.vitals, policy)
        updated = record_triage_result(updated, triage_result)
        log_event(
            component="intake_turn",
            event="triage_decided",
            level="WARNING" if triage_result.decision == "emergency" else "INFO",
            details={
                "decision": triage_result.decision,
                "confidence": triage_result.confidence,
                "factor_count": len(triage_result.factors),
                "indicator_types": [i.type for i in triage_result.emergency.indicators],
                "status_text": describe_text(updated.vitals.current_status),
            },
        )

    agent = determine_agent(updated)
    stage = agent_to_stage(agent)
    completeness = calculate_intake_completeness(updated)
    log_event(
        component="intake_turn",
        event="agent_selected",
        details={
            "agent": agent,
            "stage": stage,
            "completeness": completeness,
            "triage_decision": updated.vitals.triage_decision if updated.vitals else None,
        },
    )

    return IntakeTurnResult(
        record=updated,
        agent=agent,
        stage=stage,
        completeness=completeness,
        triage=triage_result,
    )
