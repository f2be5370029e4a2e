"""JSON-compatible dict conversion for engine models and results."""

from periodization_engine.serialization.json_dict import (
    assessment_from_dict,
    deload_event_from_dict,
    plan_from_dict,
    progress_from_dict,
    to_dict,
    to_json_string,
)

__all__ = [
    "assessment_from_dict",
    "deload_event_from_dict",
    "plan_from_dict",
    "progress_from_dict",
    "to_dict",
    "to_json_string",
]
