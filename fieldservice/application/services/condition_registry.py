"""Condition field registry and operator tables.

The registry is the catalog of service fields a condition may reference,
together with the table of legal operators per field type. Workflow step
registries use the closed per-type table; project and service auto-creation
rules use the single operator list their editors offer for every field.
Registries are immutable once built and shared by the evaluator and the
authoring UI.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from fieldservice.domain.entities.condition import ConditionField
from fieldservice.domain.enums import ConditionOperator, FieldType
from fieldservice.domain.exceptions import RegistryConfigurationException

_EMPTINESS = (ConditionOperator.IS_EMPTY, ConditionOperator.IS_NOT_EMPTY)

# Workflow step conditions.
OPERATORS_BY_FIELD_TYPE: MappingProxyType[FieldType, tuple[ConditionOperator, ...]] = (
    MappingProxyType(
        {
            FieldType.TEXT: _EMPTINESS
            + (
                ConditionOperator.EQUALS,
                ConditionOperator.NOT_EQUALS,
                ConditionOperator.CONTAINS,
                ConditionOperator.NOT_CONTAINS,
            ),
            FieldType.NUMBER: _EMPTINESS
            + (
                ConditionOperator.EQUALS,
                ConditionOperator.NOT_EQUALS,
                ConditionOperator.GREATER_THAN,
                ConditionOperator.LESS_THAN,
            ),
            FieldType.BOOLEAN: _EMPTINESS + (ConditionOperator.EQUALS,),
            FieldType.SELECT: _EMPTINESS
            + (ConditionOperator.EQUALS, ConditionOperator.NOT_EQUALS),
        }
    )
)

# Project and service auto-creation rules: one list for every field.
RULE_OPERATORS: tuple[ConditionOperator, ...] = _EMPTINESS + (
    ConditionOperator.EQUALS,
    ConditionOperator.NOT_EQUALS,
    ConditionOperator.CONTAINS,
    ConditionOperator.STARTS_WITH,
    ConditionOperator.ENDS_WITH,
    ConditionOperator.IN,
)

RULE_OPERATORS_BY_FIELD_TYPE: MappingProxyType[
    FieldType, tuple[ConditionOperator, ...]
] = MappingProxyType({field_type: RULE_OPERATORS for field_type in FieldType})

OPERATOR_LABELS: MappingProxyType[ConditionOperator, str] = MappingProxyType(
    {
        ConditionOperator.IS_EMPTY: "Is empty",
        ConditionOperator.IS_NOT_EMPTY: "Is not empty",
        ConditionOperator.EQUALS: "Equals",
        ConditionOperator.NOT_EQUALS: "Does not equal",
        ConditionOperator.CONTAINS: "Contains",
        ConditionOperator.NOT_CONTAINS: "Does not contain",
        ConditionOperator.STARTS_WITH: "Starts with",
        ConditionOperator.ENDS_WITH: "Ends with",
        ConditionOperator.IN: "Is one of (comma-separated)",
        ConditionOperator.GREATER_THAN: "Greater than",
        ConditionOperator.LESS_THAN: "Less than",
    }
)


def operators_for(field_type: FieldType) -> tuple[ConditionOperator, ...]:
    """Return the legal step-condition operators for a field type, emptiness first."""
    return OPERATORS_BY_FIELD_TYPE.get(field_type, ())


def operator_label(operator: ConditionOperator) -> str:
    """Return the human-readable label shown in condition editors."""
    return OPERATOR_LABELS[operator]


class ConditionFieldRegistry:
    """Immutable catalog of condition fields keyed by field key.

    Args:
        fields: Fields in display order; keys must be unique and non-empty.
        operators: Legal operators per field type. Defaults to the workflow
            step table.
    """

    def __init__(
        self,
        fields: Iterable[ConditionField],
        operators: Mapping[FieldType, tuple[ConditionOperator, ...]] | None = None,
    ) -> None:
        by_key: dict[str, ConditionField] = {}
        for f in fields:
            if not f.key or not f.key.strip():
                raise RegistryConfigurationException(
                    "Condition field key must be a non-empty string", key=f.key
                )
            if f.key in by_key:
                raise RegistryConfigurationException(
                    f"Duplicate condition field key '{f.key}'", key=f.key
                )
            if not isinstance(f.type, FieldType):
                raise RegistryConfigurationException(
                    f"Condition field '{f.key}' has unsupported type {f.type!r}",
                    key=f.key,
                )
            by_key[f.key] = f
        self._by_key = MappingProxyType(by_key)
        self._fields = tuple(by_key.values())
        self.operators = MappingProxyType(
            dict(operators if operators is not None else OPERATORS_BY_FIELD_TYPE)
        )

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[ConditionField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def fields(self) -> tuple[ConditionField, ...]:
        """Registered fields in registration order."""
        return self._fields

    @property
    def keys(self) -> tuple[str, ...]:
        """Registered field keys in registration order."""
        return tuple(self._by_key)

    def field_by_key(self, key: str) -> ConditionField | None:
        """Return the field for key, or None when not registered."""
        return self._by_key.get(key)

    def fields_in_group(self, group: str) -> tuple[ConditionField, ...]:
        """Return the fields tagged with group, in registration order."""
        return tuple(f for f in self._fields if f.group == group)

    def operators_for(self, field_type: FieldType) -> tuple[ConditionOperator, ...]:
        """Return the operators this registry allows for a field type."""
        return self.operators.get(field_type, ())

    def is_operator_allowed(
        self, field: ConditionField, operator: ConditionOperator
    ) -> bool:
        """Return whether operator is legal for the field's declared type."""
        return operator in self.operators_for(field.type)

    def operator_options(self, key: str) -> list[dict[str, Any]]:
        """Return selectable operators for a field as {value, label} dicts.

        Unknown keys get an empty list.
        """
        field = self.field_by_key(key)
        if field is None:
            return []
        return [
            {"value": op.value, "label": OPERATOR_LABELS[op]}
            for op in self.operators_for(field.type)
        ]


# Service fields available to workflow step conditions.
SERVICE_CONDITION_FIELDS: tuple[ConditionField, ...] = (
    ConditionField("primary_technician_id", "Primary Technician", FieldType.SELECT),
    ConditionField("status", "Status", FieldType.SELECT),
    ConditionField("urgency", "Urgency", FieldType.SELECT),
    ConditionField("service_type_id", "Service Type", FieldType.SELECT),
    ConditionField("project_id", "Project", FieldType.SELECT),
    ConditionField("title", "Title", FieldType.TEXT),
    ConditionField("reference_number", "Reference Number", FieldType.TEXT),
    ConditionField("customer_signature", "Customer Signature", FieldType.TEXT),
    ConditionField("technician_signature", "Technician Signature", FieldType.TEXT),
    ConditionField("country", "Country", FieldType.TEXT),
    ConditionField("city", "City", FieldType.TEXT),
    ConditionField("equipment_count", "Equipment Count", FieldType.NUMBER),
    ConditionField("travel_duration", "Travel Duration (min)", FieldType.NUMBER),
    ConditionField("max_actions", "Max Actions", FieldType.NUMBER),
    ConditionField("allow_merge", "Allow Merge", FieldType.BOOLEAN),
)

# Location fields used by project auto-creation rules.
LOCATION_CONDITION_FIELDS: tuple[ConditionField, ...] = (
    ConditionField("client", "Client", FieldType.SELECT),
    ConditionField("country", "Country", FieldType.TEXT),
    ConditionField("state", "State/Region", FieldType.TEXT),
    ConditionField("city", "City", FieldType.TEXT),
    ConditionField("type", "Location Type", FieldType.SELECT),
    ConditionField("status", "Status", FieldType.SELECT),
    ConditionField("name", "Name", FieldType.TEXT),
    ConditionField("code", "Code", FieldType.TEXT),
    ConditionField("postal_code", "Postal Code", FieldType.TEXT),
)

PROJECT_CONDITION_FIELDS: tuple[ConditionField, ...] = (
    ConditionField("project_type_id", "Project Type", FieldType.SELECT, "project"),
    ConditionField("billing_model", "Billing Model", FieldType.SELECT, "project"),
    ConditionField("sla_tier", "SLA Tier", FieldType.SELECT, "project"),
    ConditionField("priority", "Priority", FieldType.SELECT, "project"),
    ConditionField("status", "Project Status", FieldType.SELECT, "project"),
    ConditionField("name", "Project Name", FieldType.TEXT, "project"),
    ConditionField("project_id", "Project ID", FieldType.TEXT, "project"),
)

# Service auto-creation rules see project and location fields together.
SERVICE_RULE_CONDITION_FIELDS: tuple[ConditionField, ...] = (
    ConditionField("project_type_id", "Project Type", FieldType.SELECT, "project"),
    ConditionField("billing_model", "Billing Model", FieldType.SELECT, "project"),
    ConditionField("sla_tier", "SLA Tier", FieldType.SELECT, "project"),
    ConditionField("priority", "Priority", FieldType.SELECT, "project"),
    ConditionField("status", "Project Status", FieldType.SELECT, "project"),
    ConditionField("client", "Client", FieldType.SELECT, "location"),
    ConditionField("country", "Country", FieldType.TEXT, "location"),
    ConditionField("state", "State/Region", FieldType.TEXT, "location"),
    ConditionField("city", "City", FieldType.TEXT, "location"),
    ConditionField("type", "Location Type", FieldType.SELECT, "location"),
    ConditionField("postal_code", "Postal Code", FieldType.TEXT, "location"),
    ConditionField("location_status", "Location Status", FieldType.SELECT, "location"),
)


@lru_cache
def get_default_registry() -> ConditionFieldRegistry:
    """Return the shared registry of service fields for workflow step conditions."""
    return ConditionFieldRegistry(SERVICE_CONDITION_FIELDS)


def rule_registry(fields: Iterable[ConditionField]) -> ConditionFieldRegistry:
    """Return a registry for auto-creation rules (same operators for every field)."""
    return ConditionFieldRegistry(fields, RULE_OPERATORS_BY_FIELD_TYPE)


@lru_cache
def get_location_rule_registry() -> ConditionFieldRegistry:
    """Return the registry of location fields used by project auto-creation rules."""
    return rule_registry(LOCATION_CONDITION_FIELDS)


@lru_cache
def get_service_rule_registry() -> ConditionFieldRegistry:
    """Return the registry of project and location fields used by service auto-creation rules."""
    return rule_registry(SERVICE_RULE_CONDITION_FIELDS)
