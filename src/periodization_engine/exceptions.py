"""Custom exception hierarchy for the periodization engine."""

from __future__ import annotations


class PeriodizationError(Exception):
    """Base exception for all periodization_engine errors."""


class InsufficientDataError(PeriodizationError):
    """A calculation needs more observations than it was given.

    Raised by low-level math helpers only. Public operations catch it and
    fall back to a low-confidence default.
    """


class InvalidPlanStateError(PeriodizationError):
    """The plan cannot be evaluated (empty phases, index out of range, ...)."""

    def __init__(self, message: str, plan_id: str | None = None) -> None:
        super().__init__(message)
        self.plan_id = plan_id


class InvalidInputError(PeriodizationError, ValueError):
    """An input value is outside its valid range."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConcurrentModificationError(PeriodizationError):
    """A plan changed between read and write; re-read and retry."""

    def __init__(self, message: str, plan_id: str | None = None) -> None:
        super().__init__(message)
        self.plan_id = plan_id
