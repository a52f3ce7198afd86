"""Triage policy configuration loaded from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CRITICAL_SYMPTOMS: tuple[str, ...] = (
    "severe chest pain",
    "chest pain",
    "difficulty breathing",
    "can't breathe",
    "cannot breathe",
    "loss of consciousness",
    "unconscious",
    "passed out",
    "severe bleeding",
    "bleeding heavily",
    "stroke",
    "face drooping",
    "arm weakness",
    "speech difficulty",
    "severe allergic reaction",
    "anaphylaxis",
    "throat closing",
    "severe headache",
    "worst headache",
    "seizure",
    "convulsion",
    "suicidal",
    "self-harm",
)


def _require_ordered(name: str, low: float, high: float) -> None:
    if low >= high:
        raise ValueError(f"{name} low cutoff ({low}) must be below high cutoff ({high})")


@dataclass(frozen=True)
class TriagePolicy:
    """Numeric cutoffs and vocabulary used by emergency and complexity checks.

    Temperatures are in Celsius, blood pressure in mmHg. A reading fires when
    it is strictly above the high cutoff or strictly below the low cutoff.

    The ``*_band`` widths place the complexity watch zones directly inside
    each emergency cutoff, so moving a cutoff moves its watch zone with it.
    A mild fever is the temperature band just below the high watch zone.
    """

    temperature_high_c: float = 39.5
    temperature_low_c: float = 35.0
    systolic_high: int = 180
    systolic_low: int = 90
    diastolic_high: int = 120
    diastolic_low: int = 60
    critical_symptoms: tuple[str, ...] = DEFAULT_CRITICAL_SYMPTOMS
    complexity_threshold: int = 3
    temperature_band_c: float = 1.0
    systolic_high_band: int = 40
    systolic_low_band: int = 10
    diastolic_high_band: int = 30
    diastolic_low_band: int = 10

    def __post_init__(self) -> None:
        _require_ordered("temperature", self.temperature_low_c, self.temperature_high_c)
        _require_ordered("systolic", self.systolic_low, self.systolic_high)
        _require_ordered("diastolic", self.diastolic_low, self.diastolic_high)
        if self.complexity_threshold < 1:
            raise ValueError("complexity_threshold must be at least 1")
        if not self.critical_symptoms:
            raise ValueError("critical_symptoms must not be empty")
        for name in (
            "temperature_band_c",
            "systolic_high_band",
            "systolic_low_band",
            "diastolic_high_band",
            "diastolic_low_band",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def temperature_watch_high_c(self) -> float:
        return self.temperature_high_c - self.temperature_band_c

    @property
    def fever_c(self) -> float:
        return self.temperature_high_c - 2 * self.temperature_band_c

    @property
    def temperature_watch_low_c(self) -> float:
        return self.temperature_low_c + self.temperature_band_c

    @property
    def systolic_watch_high(self) -> int:
        return self.systolic_high - self.systolic_high_band

    @property
    def systolic_watch_low(self) -> int:
        return self.systolic_low + self.systolic_low_band

    @property
    def diastolic_watch_high(self) -> int:
        return self.diastolic_high - self.diastolic_high_band

    @property
    def diastolic_watch_low(self) -> int:
        return self.diastolic_low + self.diastolic_low_band


DEFAULT_POLICY = TriagePolicy()

_policy: TriagePolicy | None = None


def _env_number(env_name: str, default: float, cast: type = float):
    raw = os.environ.get(env_name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as err:
        raise ValueError(f"{env_name} must be a number, got '{raw}'") from err


def _env_phrases(env_name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(env_name, "").strip()
    if not raw:
        return default
    phrases = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    if not phrases:
        raise ValueError(f"{env_name} must list at least one phrase")
    return phrases


def load_triage_policy() -> TriagePolicy:
    """Build a policy from TRIAGE_* environment variables, falling back to defaults."""
    return TriagePolicy(
        temperature_high_c=_env_number("TRIAGE_TEMP_HIGH_C", DEFAULT_POLICY.temperature_high_c),
        temperature_low_c=_env_number("TRIAGE_TEMP_LOW_C", DEFAULT_POLICY.temperature_low_c),
        systolic_high=_env_number("TRIAGE_SYSTOLIC_HIGH", DEFAULT_POLICY.systolic_high, int),
        systolic_low=_env_number("TRIAGE_SYSTOLIC_LOW", DEFAULT_POLICY.systolic_low, int),
        diastolic_high=_env_number("TRIAGE_DIASTOLIC_HIGH", DEFAULT_POLICY.diastolic_high, int),
        diastolic_low=_env_number("TRIAGE_DIASTOLIC_LOW", DEFAULT_POLICY.diastolic_low, int),
        critical_symptoms=_env_phrases("TRIAGE_CRITICAL_SYMPTOMS", DEFAULT_POLICY.critical_symptoms),
        complexity_threshold=_env_number(
            "TRIAGE_COMPLEXITY_THRESHOLD", DEFAULT_POLICY.complexity_threshold, int
        ),
        temperature_band_c=_env_number("TRIAGE_TEMP_BAND_C", DEFAULT_POLICY.temperature_band_c),
        systolic_high_band=_env_number(
            "TRIAGE_SYSTOLIC_HIGH_BAND", DEFAULT_POLICY.systolic_high_band, int
        ),
        systolic_low_band=_env_number("TRIAGE_SYSTOLIC_LOW_BAND", DEFAULT_POLICY.systolic_low_band, int),
        diastolic_high_band=_env_number(
            "TRIAGE_DIASTOLIC_HIGH_BAND", DEFAULT_POLICY.diastolic_high_band, int
        ),
        diastolic_low_band=_env_number(
            "TRIAGE_DIASTOLIC_LOW_BAND", DEFAULT_POLICY.diastolic_low_band, int
        ),
    )


def get_triage_policy() -> TriagePolicy:
    """
    Get or load the process-wide triage policy.

    The environment is read once; call ``reset_triage_policy`` to reload.
    """
    global _policy
    if _policy is None:
        _policy = load_triage_policy()
    return _policy


def reset_triage_policy() -> None:
    """Drop the cached policy so the next lookup re-reads the environment."""
    global _policy
    _policy = None
