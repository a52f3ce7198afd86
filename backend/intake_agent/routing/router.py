"""Deterministic selection of the agent persona that answers the next turn."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from intake_agent.core.records import MedicalRecord
from intake_agent.core.types import AgentRole, IntakeStage
from intake_agent.records.completeness import (
    has_chief_complaint,
    history_satisfied,
    hpi_is_sufficient,
    vitals_stage_completed,
)


@dataclass(frozen=True)
class RoutingRule:
    priority: int
    role: AgentRole
    applies: Callable[[MedicalRecord], bool]
    description: str


# Evaluated top to bottom; each predicate may assume every earlier one failed.
ROUTING_RULES: tuple[RoutingRule, ...] = (
    RoutingRule(
        0,
        "VitalsTriageAgent",
        lambda record: not vitals_stage_completed(record),
        "Vitals stage not completed",
    ),
    RoutingRule(
        1,
        "Triage",
        lambda record: not has_chief_complaint(record),
        "Chief complaint missing",
    ),
    RoutingRule(
        2,
        "ClinicalInvestigator",
        lambda record: not hpi_is_sufficient(record),
        "History of present illness shorter than 50 characters",
    ),
    RoutingRule(
        3,
        "RecordsClerk",
        lambda record: not record.records_check_completed,
        "Records check not completed",
    ),
    RoutingRule(
        4,
        "HistorySpecialist",
        lambda record: not history_satisfied(record),
        "Medications, allergies and past history all empty",
    ),
    RoutingRule(
        5,
        "HandoverSpecialist",
        lambda record: True,
        "Record complete",
    ),
)

_PRIORITY_BY_ROLE: dict[str, int] = {rule.role: rule.priority for rule in ROUTING_RULES}

_STAGE_BY_ROLE: dict[str, IntakeStage] = {
    "VitalsTriageAgent": "vitals",
    "Triage": "triage",
    "ClinicalInvestigator": "investigation",
    "RecordsClerk": "records",
    "HistorySpecialist": "profile",
    "HandoverSpecialist": "summary",
}


def select_rule(record: MedicalRecord) -> RoutingRule:
    for rule in ROUTING_RULES:
        if rule.applies(record):
            return rule
    return ROUTING_RULES[-1]


def determine_agent(record: MedicalRecord) -> AgentRole:
    """
    Pick the single agent allowed to respond to the next turn.

    The triage decision itself does not alter the chain: once the vitals
    stage is completed every outcome resumes at the Triage agent.
    """
    return select_rule(record).role


def priority_of(role: AgentRole) -> int:
    return _PRIORITY_BY_ROLE[role]


def agent_to_stage(role: AgentRole) -> IntakeStage:
    return _STAGE_BY_ROLE[role]
