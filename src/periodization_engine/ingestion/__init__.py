"""Metric ingestion: turn stored records and wearable payloads into engine models."""

from periodization_engine.ingestion.garmin import merge_objective_fields, objective_fields_from_garmin
from periodization_engine.ingestion.records import (
    log_from_record,
    sessions_to_logs,
    snapshot_from_record,
    sort_logs,
    to_date,
    upsert_snapshots,
)

__all__ = [
    "log_from_record",
    "merge_objective_fields",
    "objective_fields_from_garmin",
    "sessions_to_logs",
    "snapshot_from_record",
    "sort_logs",
    "to_date",
    "upsert_snapshots",
]
