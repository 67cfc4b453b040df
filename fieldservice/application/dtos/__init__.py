"""Application DTOs (no storage dependency)."""

from fieldservice.application.dtos.step_match import ConditionOutcome, StepMatchResult

__all__ = ["ConditionOutcome", "StepMatchResult"]
