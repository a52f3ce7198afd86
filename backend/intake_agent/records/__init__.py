"""Record helpers: completeness checks and incremental merging."""
from .completeness import (
    HPI_MIN_CHARS,
    calculate_intake_completeness,
    has_chief_complaint,
    has_history_data,
    history_satisfied,
    hpi_is_sufficient,
    missing_vitals,
    vitals_stage_completed,
)
from .merge import merge_medical_data, merge_vitals

__all__ = [
    "HPI_MIN_CHARS",
    "calculate_intake_completeness",
    "has_chief_complaint",
    "has_history_data",
    "history_satisfied",
    "hpi_is_sufficient",
    "missing_vitals",
    "vitals_stage_completed",
    "merge_medical_data",
    "merge_vitals",
]
