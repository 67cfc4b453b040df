"""Condition domain entities.

A condition field describes one addressable attribute of a service record.
A condition is one field/operator/value clause; a rule set combines clauses
with ALL/ANY logic and is attached to a workflow step or an auto rule.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fieldservice.domain.enums import ConditionOperator, FieldType, RuleLogic

# Operator token that no registry accepts; marks a clause that can never match.
INERT_OPERATOR = "__inert__"


@dataclass(frozen=True)
class ConditionField:
    """Field that conditions may reference (key, display label, semantic type)."""

    key: str
    label: str
    type: FieldType
    group: str | None = None


@dataclass(frozen=True)
class Condition:
    """Single comparison clause.

    operator is kept as the stored token so that unknown or renamed operators
    stay inert instead of failing to load.
    """

    field: str
    operator: str
    value: Any = None

    @classmethod
    def inert(cls) -> "Condition":
        """Return a clause that never matches (stand-in for a malformed one)."""
        return cls(field="", operator=INERT_OPERATOR)

    @property
    def is_inert(self) -> bool:
        return self.operator == INERT_OPERATOR

    @property
    def parsed_operator(self) -> ConditionOperator | None:
        return ConditionOperator.parse(self.operator)


@dataclass(frozen=True)
class RuleSet:
    """ALL/ANY group of conditions.

    An empty conditions tuple means "no restriction". Condition order only
    affects display and editing, never the result. logic accepts the stored
    token ("all"/"any"); items that are not Condition instances become inert
    clauses so the rule set fails closed instead of breaking evaluation.
    """

    logic: RuleLogic = RuleLogic.ALL
    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        logic = self.logic
        if isinstance(logic, str) and not isinstance(logic, RuleLogic):
            logic = logic.strip().lower()
        try:
            object.__setattr__(self, "logic", RuleLogic(logic))
        except ValueError:
            raise ValueError(
                f"Rule logic must be one of {RuleLogic.values()}, got {logic!r}"
            ) from None
        conditions = self.conditions
        if conditions is None:
            conditions = ()
        elif isinstance(conditions, (str, bytes, Mapping)) or not isinstance(
            conditions, Iterable
        ):
            # A single stored blob in place of a list of clauses.
            conditions = (Condition.inert(),)
        object.__setattr__(
            self,
            "conditions",
            tuple(c if isinstance(c, Condition) else Condition.inert() for c in conditions),
        )

    @property
    def is_unrestricted(self) -> bool:
        """Return whether the rule set places no restriction on records."""
        return not self.conditions

    @classmethod
    def never_matching(cls) -> "RuleSet":
        """Rule set for a stored configuration that could not be read at all."""
        return cls(logic=RuleLogic.ALL, conditions=(Condition.inert(),))
