"""Tests for ConditionEvaluator: operator dispatch, coercion and fail-closed policy."""

import logging

import pytest

from fieldservice.application.services.condition_evaluator import (
    ConditionEvaluator,
    evaluate,
)
from fieldservice.application.services.condition_registry import rule_registry
from fieldservice.core.config import Settings
from fieldservice.domain.entities.condition import Condition, ConditionField
from fieldservice.domain.enums import ConditionIssue, ConditionOperator, FieldType
from fieldservice.domain.exceptions import RecordContractException

_LOGGER = "fieldservice.application.services.condition_evaluator"


class TestEmptiness:
    """is_empty / is_not_empty treat missing, None and blank text alike."""

    @pytest.mark.parametrize(
        "record",
        [{}, {"country": None}, {"country": ""}, {"country": "   "}],
    )
    def test_is_empty_true(self, evaluator: ConditionEvaluator, record) -> None:
        assert evaluator.evaluate(Condition("country", "is_empty"), record) is True
        assert evaluator.evaluate(Condition("country", "is_not_empty"), record) is False

    def test_falsy_values_are_not_empty(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate(Condition("country", "is_empty"), {"country": "0"}) is False
        assert (
            evaluator.evaluate(Condition("equipment_count", "is_empty"), {"equipment_count": 0})
            is False
        )
        assert (
            evaluator.evaluate(Condition("requires_permit", "is_empty"), {"requires_permit": False})
            is False
        )

    def test_is_not_empty_ignores_value(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("urgency", "is_not_empty", value="ignored")
        assert evaluator.evaluate(cond, {"urgency": "high"}) is True


class TestEquality:
    def test_text_equals_is_case_and_trim_insensitive(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "equals", "france")
        assert evaluator.evaluate(cond, {"country": " France "}) is True
        assert evaluator.evaluate(cond, {"country": "Germany"}) is False

    def test_number_equals_is_numeric(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate(Condition("equipment_count", "equals", "5"), {"equipment_count": 5})
        assert evaluator.evaluate(Condition("equipment_count", "equals", 5), {"equipment_count": "5.0"})
        assert not evaluator.evaluate(Condition("equipment_count", "equals", 5), {"equipment_count": 6})

    def test_boolean_equals(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate(Condition("requires_permit", "equals", "true"), {"requires_permit": True})
        assert evaluator.evaluate(Condition("requires_permit", "equals", False), {"requires_permit": False})
        assert not evaluator.evaluate(Condition("requires_permit", "equals", True), {"requires_permit": "no"})

    def test_not_equals(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "not_equals", "France")
        assert evaluator.evaluate(cond, {"country": "Germany"}) is True
        assert evaluator.evaluate(cond, {"country": "FRANCE"}) is False

    def test_not_equals_holds_for_absent_value(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate(Condition("country", "not_equals", "France"), {}) is True

    def test_not_equals_fails_on_uncoercible_record_value(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("equipment_count", "not_equals", 3)
        outcome = evaluator.outcome(cond, {"equipment_count": "lots"})
        assert outcome.matched is False
        assert outcome.issue is ConditionIssue.INVALID_RECORD_VALUE


class TestTextOperators:
    def test_contains(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "contains", " fran")
        assert evaluator.evaluate(cond, {"country": "  FRANCE "}) is True
        assert evaluator.evaluate(cond, {"country": "Spain"}) is False
        assert evaluator.evaluate(cond, {}) is False

    def test_not_contains(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "not_contains", "ger")
        assert evaluator.evaluate(cond, {"country": "France"}) is True
        assert evaluator.evaluate(cond, {"country": "Germany"}) is False
        assert evaluator.evaluate(cond, {}) is True

    def test_starts_ends_with_and_in_are_not_step_operators(
        self, evaluator: ConditionEvaluator
    ) -> None:
        record = {"country": "France", "urgency": "high"}
        for cond in (
            Condition("country", "in", "France,Spain"),
            Condition("country", "starts_with", "Fr"),
            Condition("country", "ends_with", "ce"),
            Condition("urgency", "in", "high,low"),
        ):
            assert evaluator.evaluate(cond, record) is False
            assert evaluator.check(cond) is ConditionIssue.OPERATOR_NOT_ALLOWED


class TestAutoRuleOperators:
    """Auto-creation rule registries offer the same operators for every field."""

    @pytest.fixture
    def location_evaluator(self) -> ConditionEvaluator:
        return ConditionEvaluator(
            rule_registry(
                [
                    ConditionField("country", "Country", FieldType.TEXT),
                    ConditionField("client", "Client", FieldType.SELECT),
                ]
            )
        )

    def test_starts_and_ends_with(self, location_evaluator: ConditionEvaluator) -> None:
        record = {"country": "New Zealand"}
        assert location_evaluator.evaluate(Condition("country", "starts_with", "new"), record)
        assert location_evaluator.evaluate(Condition("country", "ends_with", "ZEALAND "), record)
        assert not location_evaluator.evaluate(Condition("country", "starts_with", "zealand"), record)

    def test_in_matches_comma_separated_items(self, location_evaluator: ConditionEvaluator) -> None:
        cond = Condition("client", "in", "acme, GLOBEX ,")
        assert location_evaluator.evaluate(cond, {"client": "globex"}) is True
        assert location_evaluator.evaluate(cond, {"client": "initech"}) is False

    def test_in_with_only_separators_is_missing_value(
        self, location_evaluator: ConditionEvaluator
    ) -> None:
        cond = Condition("client", "in", " , ,")
        assert location_evaluator.check(cond) is ConditionIssue.MISSING_VALUE
        assert location_evaluator.evaluate(cond, {"client": "acme"}) is False

    def test_contains_allowed_on_select(self, location_evaluator: ConditionEvaluator) -> None:
        assert location_evaluator.evaluate(Condition("client", "contains", "corp"), {"client": "Acme Corp"})

    def test_not_contains_is_not_a_rule_operator(self, location_evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "not_contains", "x")
        assert location_evaluator.check(cond) is ConditionIssue.OPERATOR_NOT_ALLOWED
        assert location_evaluator.evaluate(cond, {"country": "France"}) is False


class TestNumericComparison:
    def test_greater_and_less_than(self, evaluator: ConditionEvaluator) -> None:
        gt = Condition("equipment_count", "greater_than", 3)
        lt = Condition("equipment_count", "less_than", "3")
        assert evaluator.evaluate(gt, {"equipment_count": 5}) is True
        assert evaluator.evaluate(gt, {"equipment_count": 3}) is False
        assert evaluator.evaluate(lt, {"equipment_count": 2.5}) is True
        assert evaluator.evaluate(lt, {"equipment_count": "3"}) is False

    def test_non_numeric_record_value_fails(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("equipment_count", "greater_than", 3)
        assert evaluator.evaluate(cond, {"equipment_count": "abc"}) is False
        assert evaluator.evaluate(cond, {"equipment_count": True}) is False

    def test_non_numeric_condition_value_fails(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("equipment_count", "greater_than", "many")
        assert evaluator.evaluate(cond, {"equipment_count": 10}) is False
        assert evaluator.check(cond) is ConditionIssue.INVALID_VALUE

    def test_number_too_large_for_float_fails(self, evaluator: ConditionEvaluator) -> None:
        huge = 10**400
        outcome = evaluator.outcome(
            Condition("equipment_count", "greater_than", 3), {"equipment_count": huge}
        )
        assert outcome.matched is False
        assert outcome.issue is ConditionIssue.INVALID_RECORD_VALUE
        stored = Condition("equipment_count", "less_than", huge)
        assert evaluator.check(stored) is ConditionIssue.INVALID_VALUE
        assert evaluator.evaluate(stored, {"equipment_count": 1}) is False

    def test_huge_int_in_text_field_fails(self, evaluator: ConditionEvaluator) -> None:
        """ints past the str() digit limit cannot be rendered as text."""
        huge = 10**5000
        assert evaluator.evaluate(Condition("country", "equals", "x"), {"country": huge}) is False


class TestFailClosed:
    """Configuration problems never raise; the condition fails."""

    def test_unknown_field(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("legacy_id", "equals", "x")
        assert evaluator.evaluate(cond, {"legacy_id": "x"}) is False
        assert evaluator.check(cond) is ConditionIssue.UNKNOWN_FIELD

    def test_unknown_operator(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition("country", "matches_regex", ".*")
        assert evaluator.evaluate(cond, {"country": "France"}) is False
        assert evaluator.check(cond) is ConditionIssue.UNKNOWN_OPERATOR

    @pytest.mark.parametrize(
        "field,operator",
        [
            ("country", "greater_than"),
            ("equipment_count", "contains"),
            ("requires_permit", "not_equals"),
            ("urgency", "contains"),
        ],
    )
    def test_operator_not_allowed_for_type(
        self, evaluator: ConditionEvaluator, field: str, operator: str
    ) -> None:
        cond = Condition(field, operator, "1")
        assert evaluator.evaluate(cond, {field: "1"}) is False
        assert evaluator.check(cond) is ConditionIssue.OPERATOR_NOT_ALLOWED

    def test_illegal_operators_never_match(self, evaluator: ConditionEvaluator) -> None:
        """Every operator outside a field's table fails for any value."""
        values = ["France", "5", 5, True, False, "", None, "true"]
        for field in evaluator.registry.fields:
            illegal = [
                op for op in ConditionOperator
                if op not in evaluator.registry.operators_for(field.type)
            ]
            for op in illegal:
                for value in values:
                    record = {field.key: value}
                    assert evaluator.evaluate(Condition(field.key, op.value, value), record) is False

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_value(self, evaluator: ConditionEvaluator, value) -> None:
        for op in ("equals", "not_equals"):
            cond = Condition("country", op, value)
            assert evaluator.evaluate(cond, {"country": "France"}) is False
            assert evaluator.check(cond) is ConditionIssue.MISSING_VALUE

    def test_inert_condition(self, evaluator: ConditionEvaluator) -> None:
        cond = Condition.inert()
        assert evaluator.evaluate(cond, {"country": "France"}) is False
        assert evaluator.check(cond) is ConditionIssue.MALFORMED

    def test_non_condition_item_is_malformed(self, evaluator: ConditionEvaluator) -> None:
        raw = {"field": "country", "operator": "equals", "value": "France"}
        assert evaluator.evaluate(raw, {"country": "France"}) is False  # type: ignore[arg-type]
        assert evaluator.check(raw) is ConditionIssue.MALFORMED  # type: ignore[arg-type]

    def test_well_formed_condition_has_no_issue(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.check(Condition("country", "equals", "France")) is None
        assert evaluator.check(Condition("country", "is_empty")) is None

    def test_unknown_field_logged_as_warning(
        self, evaluator: ConditionEvaluator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            evaluator.evaluate(Condition("legacy_id", "equals", "x"), {})
        assert "legacy_id" in caplog.text
        assert "unknown_field" in caplog.text

    def test_inert_logging_can_be_quietened(
        self, registry, caplog: pytest.LogCaptureFixture
    ) -> None:
        quiet = ConditionEvaluator(registry, settings=Settings(log_inert_conditions=False))
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            quiet.evaluate(Condition("legacy_id", "equals", "x"), {})
        assert caplog.records == []


class TestRecordContract:
    @pytest.mark.parametrize("record", [None, ["country"], "France", 42])
    def test_non_mapping_record_raises(self, evaluator: ConditionEvaluator, record) -> None:
        with pytest.raises(RecordContractException) as exc_info:
            evaluator.evaluate(Condition("country", "is_empty"), record)
        assert exc_info.value.error_code == "RECORD_CONTRACT_VIOLATION"


def test_evaluate_is_idempotent(evaluator: ConditionEvaluator) -> None:
    cond = Condition("equipment_count", "greater_than", 3)
    record = {"equipment_count": 4}
    assert evaluator.evaluate(cond, record) == evaluator.evaluate(cond, record) is True
    assert record == {"equipment_count": 4}


def test_module_level_evaluate_uses_default_registry() -> None:
    assert evaluate(Condition("status", "equals", "scheduled"), {"status": "Scheduled"}) is True
    assert evaluate(Condition("legacy_id", "is_empty"), {}) is False


def test_module_level_evaluate_accepts_registry(registry) -> None:
    cond = Condition("equipment_count", "greater_than", 1)
    assert evaluate(cond, {"equipment_count": 2}, registry) is True
