"""Serialization module: JSON-compatible payloads for engine outputs."""

from marathon_engine.serialization.payloads import (
    biomechanics_to_dict,
    decision_to_dict,
    decision_to_json_string,
    prompt_to_dict,
)

__all__ = [
    "biomechanics_to_dict",
    "decision_to_dict",
    "decision_to_json_string",
    "prompt_to_dict",
]
