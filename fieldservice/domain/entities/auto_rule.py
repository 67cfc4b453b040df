"""Auto-creation rule domain entity.

Auto rules create a project (from location conditions) or a service (from
project and location conditions) with default step settings. Rules are
tried in ascending priority order.
"""

from dataclasses import dataclass

from fieldservice.domain.entities.condition import RuleSet


@dataclass
class AutoRuleEntity:
    """Domain entity for a project or service auto-creation rule."""

    id: str
    name: str
    rule_set: RuleSet
    is_active: bool = True
    priority: int = 0
    target_id: str | None = None
    default_step_id: str | None = None
    prevent_duplicates: bool = True
