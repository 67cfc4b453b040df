"""Application services: field registry, condition/rule evaluation, step and rule selection."""

from fieldservice.application.services.auto_rule_selector import AutoRuleSelector
from fieldservice.application.services.condition_evaluator import (
    ConditionEvaluator,
    evaluate,
)
from fieldservice.application.services.condition_registry import (
    LOCATION_CONDITION_FIELDS,
    OPERATOR_LABELS,
    OPERATORS_BY_FIELD_TYPE,
    PROJECT_CONDITION_FIELDS,
    RULE_OPERATORS,
    RULE_OPERATORS_BY_FIELD_TYPE,
    SERVICE_CONDITION_FIELDS,
    SERVICE_RULE_CONDITION_FIELDS,
    ConditionFieldRegistry,
    get_default_registry,
    get_location_rule_registry,
    get_service_rule_registry,
    operator_label,
    operators_for,
    rule_registry,
)
from fieldservice.application.services.rule_evaluator import (
    RuleEvaluator,
    describe,
    matches,
)
from fieldservice.application.services.rule_set_validator import RuleSetValidator
from fieldservice.application.services.step_matcher import StepMatcher, matching_steps

__all__ = [
    "AutoRuleSelector",
    "ConditionEvaluator",
    "ConditionFieldRegistry",
    "LOCATION_CONDITION_FIELDS",
    "OPERATOR_LABELS",
    "OPERATORS_BY_FIELD_TYPE",
    "PROJECT_CONDITION_FIELDS",
    "RULE_OPERATORS",
    "RULE_OPERATORS_BY_FIELD_TYPE",
    "RuleEvaluator",
    "RuleSetValidator",
    "SERVICE_CONDITION_FIELDS",
    "SERVICE_RULE_CONDITION_FIELDS",
    "StepMatcher",
    "describe",
    "evaluate",
    "get_default_registry",
    "get_location_rule_registry",
    "get_service_rule_registry",
    "matches",
    "matching_steps",
    "operator_label",
    "operators_for",
    "rule_registry",
]
