"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on configuration or presentation. Used by the application
layer and by stored-configuration schemas.
"""

from fieldservice.domain.entities import (
    AutoRuleEntity,
    Condition,
    ConditionField,
    RuleSet,
    WorkflowStepEntity,
)
from fieldservice.domain.enums import (
    ConditionIssue,
    ConditionOperator,
    FieldType,
    RuleLogic,
)
from fieldservice.domain.exceptions import (
    FieldServiceException,
    RecordContractException,
    RegistryConfigurationException,
    RuleSetParseException,
)
from fieldservice.domain.value_objects import (
    BoolValue,
    ConditionValue,
    NumberValue,
    TextValue,
)

__all__ = [
    # Entities
    "AutoRuleEntity",
    "Condition",
    "ConditionField",
    "RuleSet",
    "WorkflowStepEntity",
    # Enums
    "ConditionIssue",
    "ConditionOperator",
    "FieldType",
    "RuleLogic",
    # Exceptions
    "FieldServiceException",
    "RecordContractException",
    "RegistryConfigurationException",
    "RuleSetParseException",
    # Value objects
    "BoolValue",
    "ConditionValue",
    "NumberValue",
    "TextValue",
]
