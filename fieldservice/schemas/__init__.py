"""Pydantic schemas for stored configuration."""

from fieldservice.schemas.step_conditions import (
    StepConditionPayload,
    StepConditionsConfig,
    auto_rule_from_row,
    parse_rule_set,
    rule_set_to_payload,
    workflow_step_from_library_item,
)

__all__ = [
    "StepConditionPayload",
    "StepConditionsConfig",
    "auto_rule_from_row",
    "parse_rule_set",
    "rule_set_to_payload",
    "workflow_step_from_library_item",
]
