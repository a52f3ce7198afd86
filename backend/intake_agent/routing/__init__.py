"""Agent routing module."""
from .router import (
    ROUTING_RULES,
    RoutingRule,
    agent_to_stage,
    determine_agent,
    priority_of,
    select_rule,
)

__all__ = [
    "ROUTING_RULES",
    "RoutingRule",
    "agent_to_stage",
    "determine_agent",
    "priority_of",
    "select_rule",
]
