"""Periodization plan: an ordered list of phase templates plus a cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from periodization_engine.exceptions import InvalidInputError, InvalidPlanStateError
from periodization_engine.models.enums import (
    DEFAULT_ADHERENCE_THRESHOLD,
    DEFAULT_FATIGUE_THRESHOLD,
    DEFAULT_PROGRESS_THRESHOLD,
    PhaseType,
    TransitionTrigger,
)


def _check_range(name: str, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if low > high:
        raise InvalidInputError(f"{name} min {low} exceeds max {high}", field=name)
    if low < 0:
        raise InvalidInputError(f"{name} must be non-negative", field=name)


@dataclass(frozen=True)
class PeriodizationPhase:
    """Immutable phase template.

    Ranges are (min, max) tuples. ``intensity_range`` is in %1RM.
    """

    id: str
    type: PhaseType
    duration_weeks: int
    volume_multiplier: float
    intensity_range: tuple[float, float]
    sets_range: tuple[int, int]
    reps_range: tuple[int, int]
    rest_range_seconds: tuple[int, int]
    name: str = ""

    def __post_init__(self) -> None:
        if self.duration_weeks < 1:
            raise InvalidInputError(
                f"phase {self.id} duration_weeks must be >= 1", field="duration_weeks"
            )
        if self.volume_multiplier <= 0:
            raise InvalidInputError(
                f"phase {self.id} volume_multiplier must be positive", field="volume_multiplier"
            )
        _check_range("intensity_range", self.intensity_range)
        _check_range("sets_range", self.sets_range)
        _check_range("reps_range", self.reps_range)
        _check_range("rest_range_seconds", self.rest_range_seconds)


@dataclass(frozen=True)
class AdaptiveSettings:
    """Per-plan thresholds for the adaptive phase-transition criteria.

    fatigue_threshold is on the 0-100 fatigue scale; the other two are
    fractions (0-1) compared against weekly progress entries.
    """

    fatigue_threshold: float = DEFAULT_FATIGUE_THRESHOLD
    progress_threshold: float = DEFAULT_PROGRESS_THRESHOLD
    adherence_threshold: float = DEFAULT_ADHERENCE_THRESHOLD


@dataclass(frozen=True)
class WeeklyProgress:
    """One completed training week within a phase."""

    phase_id: str
    week: int
    adherence_rate: float  # 0-1
    performance_gain: float
    volume_completed: float = 0.0
    fatigue_level: float | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.adherence_rate <= 1.0:
            raise InvalidInputError(
                f"adherence_rate={self.adherence_rate} outside [0, 1]", field="adherence_rate"
            )


@dataclass(frozen=True)
class PhaseRecord:
    """History row written whenever the plan enters a phase."""

    phase_index: int
    phase_id: str
    phase_type: PhaseType
    started_at: datetime
    ended_at: datetime | None = None
    trigger: TransitionTrigger | None = None
    transition_id: str | None = None


@dataclass(frozen=True)
class PeriodizationPlan:
    """A trainee's plan. Phases are only ever appended or inserted ahead of
    the cursor; completed phases are never rewritten."""

    id: str
    user_id: str
    total_duration_weeks: int
    current_phase_index: int
    phases: tuple[PeriodizationPhase, ...]
    created_at: datetime
    last_adjusted_at: datetime
    adaptive_settings: AdaptiveSettings = field(default_factory=AdaptiveSettings)
    phase_history: tuple[PhaseRecord, ...] = field(default_factory=tuple)
    completed_at: datetime | None = None

    def validate(self) -> None:
        """Raise InvalidPlanStateError unless the cursor points at a real phase."""
        if not self.phases:
            raise InvalidPlanStateError(f"plan {self.id} has no phases", plan_id=self.id)
        if not 0 <= self.current_phase_index < len(self.phases):
            raise InvalidPlanStateError(
                f"plan {self.id} current_phase_index {self.current_phase_index} "
                f"out of range for {len(self.phases)} phases",
                plan_id=self.id,
            )

    @property
    def current_phase(self) -> PeriodizationPhase:
        self.validate()
        return self.phases[self.current_phase_index]

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None

    @property
    def is_last_phase(self) -> bool:
        return self.current_phase_index == len(self.phases) - 1

    @property
    def scheduled_weeks(self) -> int:
        """Sum of phase durations; may drift from total_duration_weeks."""
        return sum(p.duration_weeks for p in self.phases)
