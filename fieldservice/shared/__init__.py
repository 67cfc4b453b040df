"""Shared utilities: telemetry and cross-cutting helpers.

Used by the application layer. No business logic.
"""

from fieldservice.shared.telemetry import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
