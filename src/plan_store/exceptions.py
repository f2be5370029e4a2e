"""Custom exception hierarchy for the plan store.

Optimistic-concurrency conflicts raise the engine's own
``periodization_engine.exceptions.ConcurrentModificationError``.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all plan_store errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PlanNotFoundError(StoreError, KeyError):
    """No plan is stored under the requested id."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(f"No plan stored with id {plan_id!r}")
        self.plan_id = plan_id

    def __str__(self) -> str:
        return self.args[0]
