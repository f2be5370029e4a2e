"""Adaptive strength-training periodization engine.

Scores fatigue, estimates performance, decides deloads and phase transitions,
and recommends per-exercise progression. Pure computation: no I/O.
"""

from periodization_engine.deload import evaluate_deload
from periodization_engine.engine import PeriodizationEngine
from periodization_engine.exceptions import (
    ConcurrentModificationError,
    InsufficientDataError,
    InvalidInputError,
    InvalidPlanStateError,
    PeriodizationError,
)
from periodization_engine.fatigue import score_fatigue
from periodization_engine.performance import estimate_performance
from periodization_engine.plan_builder import create_plan
from periodization_engine.progression import apply_progression, recommend_progression
from periodization_engine.state_machine import (
    apply_transition,
    evaluate_phase_transition,
    override_phase,
)

__all__ = [
    "ConcurrentModificationError",
    "InsufficientDataError",
    "InvalidInputError",
    "InvalidPlanStateError",
    "PeriodizationEngine",
    "PeriodizationError",
    "apply_progression",
    "apply_transition",
    "create_plan",
    "estimate_performance",
    "evaluate_deload",
    "evaluate_phase_transition",
    "override_phase",
    "recommend_progression",
    "score_fatigue",
]
