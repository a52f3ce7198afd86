"""
Intake Agent Package for Medical Triage.

This package provides the deterministic decision engine behind the
patient-facing intake assistant:
- Emergency detection over vitals and free-text status
- One-time triage decision for the vitals stage
- Priority-based routing to the agent persona that answers next

Main entry points:
    analyze_vitals: Triage decision for a vitals snapshot
    determine_agent: Agent selection for a medical record
    advance_intake_turn: Merge, triage and route for one patient turn

Core components:
    - core: Records, types, schemas and structured logging
    - triage: Emergency detector and triage decision service
    - routing: Agent priority chain
    - records: Completeness helpers and incremental merging
    - pipelines: Per-turn orchestration
    - config: Triage policy configuration
"""

# Engine (primary public API)
from .triage import analyze_vitals, detect_emergency, record_triage_result
from .routing import determine_agent
from .pipelines import advance_intake_turn

# Records
from .core import MedicalRecord, VitalsRecord

# Configuration
from .config import TriagePolicy, get_triage_policy

__all__ = [
    # Engine
    "analyze_vitals",
    "detect_emergency",
    "record_triage_result",
    "determine_agent",
    "advance_intake_turn",
    # Records
    "MedicalRecord",
    "VitalsRecord",
    # Config
    "TriagePolicy",
    "get_triage_policy",
]

__version__ = "1.0.0"
