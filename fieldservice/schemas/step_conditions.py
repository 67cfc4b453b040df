"""Pydantic schemas for stored step conditions and their conversion to domain.

Stored configuration comes from library items (metadata["step_conditions"])
and auto-rule rows ("conditions"). parse_rule_set is lenient: a malformed
clause becomes an inert condition and a malformed blob becomes a rule set
that never matches, so one corrupted record cannot block step computation.
"""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fieldservice.core.config import get_settings
from fieldservice.domain.entities.auto_rule import AutoRuleEntity
from fieldservice.domain.entities.condition import Condition, RuleSet
from fieldservice.domain.entities.workflow_step import WorkflowStepEntity
from fieldservice.domain.enums import RuleLogic
from fieldservice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ConditionValueInput = bool | int | float | str | None


class StepConditionPayload(BaseModel):
    """One stored condition clause."""

    model_config = ConfigDict(extra="ignore")

    field: str = Field(..., min_length=1, max_length=128)
    operator: str = Field(..., min_length=1, max_length=64)
    value: ConditionValueInput = None

    @field_validator("field", "operator", mode="before")
    @classmethod
    def strip_token(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def to_domain(self) -> Condition:
        return Condition(field=self.field, operator=self.operator, value=self.value)


class StepConditionsConfig(BaseModel):
    """Stored rule set: conditions combined with 'all' or 'any' logic."""

    model_config = ConfigDict(extra="ignore")

    logic: RuleLogic | None = None
    conditions: list[StepConditionPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, rule_set: RuleSet) -> "StepConditionsConfig":
        """Build the storable form; inert clauses have no stored form and are dropped."""
        return cls(
            logic=rule_set.logic,
            conditions=[
                StepConditionPayload(field=c.field, operator=c.operator, value=c.value)
                for c in rule_set.conditions
                if not c.is_inert
            ],
        )


def _load_blob(data: Any) -> Any:
    if isinstance(data, (str, bytes)):
        try:
            return json.loads(data)
        except ValueError:
            return None
    return data


def parse_rule_set(
    data: Any,
    *,
    default_logic: RuleLogic | None = None,
) -> RuleSet | None:
    """Convert stored step conditions into a RuleSet without raising.

    Args:
        data: Stored blob (mapping, JSON string, RuleSet, or None).
        default_logic: Logic used when the blob omits it; settings default otherwise.

    Returns:
        None when nothing is stored, otherwise a RuleSet. Malformed clauses
        are replaced by inert conditions; an unreadable blob yields
        RuleSet.never_matching().
    """
    if data is None:
        return None
    if isinstance(data, RuleSet):
        return data
    blob = _load_blob(data)
    if not isinstance(blob, Mapping):
        logger.warning("Stored step conditions are not an object; rule never matches")
        return RuleSet.never_matching()

    raw_logic = blob.get("logic")
    if raw_logic is None:
        logic = default_logic or get_settings().default_rule_logic
    else:
        if isinstance(raw_logic, str):
            raw_logic = raw_logic.strip().lower()
        try:
            logic = RuleLogic(raw_logic)
        except ValueError:
            logger.warning(
                "Stored step conditions have unknown logic %r; rule never matches",
                raw_logic,
            )
            return RuleSet.never_matching()

    raw_conditions = blob.get("conditions")
    if raw_conditions is None:
        raw_conditions = []
    if not isinstance(raw_conditions, list):
        logger.warning("Stored step conditions list is malformed; rule never matches")
        return RuleSet.never_matching()

    conditions: list[Condition] = []
    for index, item in enumerate(raw_conditions):
        try:
            conditions.append(StepConditionPayload.model_validate(item).to_domain())
        except ValidationError as e:
            logger.warning(
                "Stored condition #%d is malformed (%d error(s)); it will never match",
                index,
                e.error_count(),
            )
            conditions.append(Condition.inert())
    return RuleSet(logic=logic, conditions=tuple(conditions))


def rule_set_to_payload(rule_set: RuleSet) -> dict[str, Any]:
    """Serialize a RuleSet into the stored JSON shape."""
    return StepConditionsConfig.from_domain(rule_set).model_dump(mode="json")


def workflow_step_from_library_item(
    item: Mapping[str, Any],
    *,
    metadata_key: str | None = None,
) -> WorkflowStepEntity:
    """Build a step from a stored library item.

    Library items keep step conditions inside their free-form metadata. The
    conditions are lifted into rule_set and removed from the step's metadata.

    Args:
        item: Library item mapping (id, name, metadata, is_active, display_order).
        metadata_key: Metadata key holding the conditions; settings default otherwise.
    """
    key = metadata_key or get_settings().step_conditions_metadata_key
    raw_metadata = item.get("metadata")
    metadata = dict(raw_metadata) if isinstance(raw_metadata, Mapping) else {}
    stored = metadata.pop(key, None)
    display_order = item.get("display_order")
    return WorkflowStepEntity(
        id=str(item.get("id", "")),
        name=str(item.get("name", "")),
        rule_set=parse_rule_set(stored),
        metadata=metadata,
        is_active=bool(item.get("is_active", True)),
        display_order=display_order if isinstance(display_order, int) else 0,
    )


def auto_rule_from_row(
    row: Mapping[str, Any],
    *,
    target_key: str = "service_type_id",
) -> AutoRuleEntity:
    """Build an auto rule from a project or service auto-rule row.

    Args:
        row: Stored rule (id, name, conditions, is_active, priority, ...).
        target_key: Column naming what the rule creates
            ("project_type_id" for project rules, "service_type_id" for service rules).
    """
    priority = row.get("priority")
    return AutoRuleEntity(
        id=str(row.get("id", "")),
        name=str(row.get("name", "")),
        rule_set=parse_rule_set(row.get("conditions")) or RuleSet(),
        is_active=bool(row.get("is_active", True)),
        priority=priority if isinstance(priority, int) else 0,
        target_id=row.get(target_key),
        default_step_id=row.get("default_step_id"),
        prevent_duplicates=bool(row.get("prevent_duplicates", True)),
    )
