"""Domain exceptions for the field-service condition engine.

Only caller contract violations and host configuration mistakes are raised.
Stale or malformed rule configuration never raises: the affected condition
simply fails to match.
"""

from typing import Any


class FieldServiceException(Exception):
    """Base exception for all field-service engine errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class RecordContractException(FieldServiceException):
    """Raised when the caller passes a service record that is not a mapping.

    This is a programming error in the integration, not stale business data.
    """

    def __init__(self, received: object) -> None:
        """Initialize with the offending object.

        Args:
            received: The value supplied in place of a service record.
        """
        type_name = type(received).__name__
        super().__init__(
            f"Service record must be a mapping of field key to value, got {type_name}",
            "RECORD_CONTRACT_VIOLATION",
            {"received_type": type_name},
        )


class RegistryConfigurationException(FieldServiceException):
    """Raised when the host seeds a condition field registry with bad fields."""

    def __init__(self, message: str, key: str | None = None) -> None:
        details = {"key": key} if key is not None else {}
        super().__init__(message, "REGISTRY_CONFIGURATION_ERROR", details)


class RuleSetParseException(FieldServiceException):
    """Raised by strict parsing when stored step conditions are malformed.

    Lenient parsing (used at evaluation time) never raises this.
    """

    def __init__(self, validation_errors: list[str]) -> None:
        """Initialize with the list of validation messages.

        Args:
            validation_errors: Human-readable problems found in the payload.
        """
        super().__init__(
            "Step conditions are malformed: " + "; ".join(validation_errors),
            "RULE_SET_PARSE_ERROR",
            {"validation_errors": validation_errors},
        )
