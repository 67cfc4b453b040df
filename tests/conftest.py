"""Pytest configuration and fixtures for the field-service condition engine.

Fixtures build a small registry (country/equipment_count/requires_permit/urgency)
and the evaluator stack on top of it. Settings are re-read for every test so
tests may override environment variables with monkeypatch.
"""

import pytest

from fieldservice.application.services.condition_evaluator import ConditionEvaluator
from fieldservice.application.services.condition_registry import ConditionFieldRegistry
from fieldservice.application.services.rule_evaluator import RuleEvaluator
from fieldservice.application.services.step_matcher import StepMatcher
from fieldservice.core.config import get_settings
from fieldservice.domain.entities.condition import ConditionField
from fieldservice.domain.enums import FieldType


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry() -> ConditionFieldRegistry:
    """Registry with one field per field type."""
    return ConditionFieldRegistry(
        [
            ConditionField("country", "Country", FieldType.TEXT),
            ConditionField("equipment_count", "Equipment Count", FieldType.NUMBER),
            ConditionField("requires_permit", "Requires Permit", FieldType.BOOLEAN),
            ConditionField("urgency", "Urgency", FieldType.SELECT),
        ]
    )


@pytest.fixture
def evaluator(registry: ConditionFieldRegistry) -> ConditionEvaluator:
    return ConditionEvaluator(registry)


@pytest.fixture
def rule_evaluator(evaluator: ConditionEvaluator) -> RuleEvaluator:
    return RuleEvaluator(evaluator)


@pytest.fixture
def matcher(rule_evaluator: RuleEvaluator) -> StepMatcher:
    return StepMatcher(rule_evaluator)
