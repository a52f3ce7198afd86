"""Pipeline orchestration for intake turns."""
from .intake_turn import IntakeTurnResult, advance_intake_turn, should_run_triage

__all__ = ["IntakeTurnResult", "advance_intake_turn", "should_run_triage"]
