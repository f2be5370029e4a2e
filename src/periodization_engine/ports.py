"""Collaborator interfaces the engine's host provides.

The core never calls these itself; they describe what a hosting service
(for example ``scheduler.nightly`` with ``plan_store.JsonPlanStore``) must
offer to feed the engine and persist its decisions.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable

from periodization_engine.models.deload import DeloadEvent
from periodization_engine.models.plan import PeriodizationPlan
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot


@runtime_checkable
class MetricsReader(Protocol):
    """Time-ordered reads of a user's check-ins and logged sets."""

    def read_wellness(self, user_id: str, start: date, end: date) -> list[WellnessSnapshot]:
        ...

    def read_performance(self, user_id: str, start: date, end: date) -> list[PerformanceLog]:
        ...


@runtime_checkable
class PlanRepository(Protocol):
    """Single-plan reads and writes with optimistic concurrency.

    ``save_plan`` raises ConcurrentModificationError when the stored plan's
    ``last_adjusted_at`` differs from ``expected_last_adjusted_at``.
    """

    def get_plan(self, plan_id: str) -> PeriodizationPlan:
        ...

    def save_plan(
        self,
        plan: PeriodizationPlan,
        expected_last_adjusted_at: datetime | None = None,
    ) -> None:
        ...


@runtime_checkable
class DeloadEventWriter(Protocol):
    """Append-only deload event log; returns False for a duplicate id."""

    def append_deload_event(self, event: DeloadEvent) -> bool:
        ...
