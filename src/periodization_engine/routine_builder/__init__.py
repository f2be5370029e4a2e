"""Routine builder: applies phase parameters and deloads to a training week."""

from periodization_engine.routine_builder.deload_week import build_deload_microcycle
from periodization_engine.routine_builder.phase_adapter import adapt_day_to_phase, target_rir_for_phase

__all__ = ["adapt_day_to_phase", "build_deload_microcycle", "target_rir_for_phase"]
