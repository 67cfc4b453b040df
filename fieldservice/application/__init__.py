"""Application layer: DTOs and services.

Depends only on the domain, configuration and shared telemetry.
"""

from fieldservice.application.dtos import ConditionOutcome, StepMatchResult
from fieldservice.application.services import (
    AutoRuleSelector,
    ConditionEvaluator,
    ConditionFieldRegistry,
    RuleEvaluator,
    RuleSetValidator,
    StepMatcher,
)

__all__ = [
    "AutoRuleSelector",
    "ConditionEvaluator",
    "ConditionFieldRegistry",
    "ConditionOutcome",
    "RuleEvaluator",
    "RuleSetValidator",
    "StepMatchResult",
    "StepMatcher",
]
