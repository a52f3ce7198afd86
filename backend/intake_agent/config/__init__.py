"""Configuration module for the intake engine."""
from .settings import (
    DEFAULT_CRITICAL_SYMPTOMS,
    DEFAULT_POLICY,
    TriagePolicy,
    get_triage_policy,
    load_triage_policy,
    reset_triage_policy,
)

__all__ = [
    "DEFAULT_CRITICAL_SYMPTOMS",
    "DEFAULT_POLICY",
    "TriagePolicy",
    "get_triage_policy",
    "load_triage_policy",
    "reset_triage_policy",
]
