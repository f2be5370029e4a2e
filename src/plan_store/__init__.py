"""File-backed store for plans, metrics, deload events and recommendations."""

from plan_store.exceptions import PlanNotFoundError, StoreError
from plan_store.store import JsonPlanStore

__all__ = ["JsonPlanStore", "PlanNotFoundError", "StoreError"]
