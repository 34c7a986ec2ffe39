"""Error handling module for the screenguess engine.

This module provides:
- Custom exception classes for the engine's fault types (validation, configuration, random source, integrity)
- User-friendly error representations with suggested actions
- Centralized error handling service with a bounded error history

Out-of-domain guess counts and levels are not errors; they degrade to zero
in the scoring module.
"""

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RANDOM_SOURCE = "random_source"
    INTEGRITY = "integrity"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for engine errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class ValidationError(AppError):
    """Exception for invalid input to an engine operation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        suggested_actions = ["Review the input requirements"]
        if constraints:
            suggested_actions.extend([f"Ensure: {c}" for c in constraints])

        technical_details = None
        if field:
            technical_details = f"Field: {field}"
        if value is not None:
            value_str = str(value)[:100]  # Truncate long values
            technical_details = (technical_details or "") + f"\nValue: {value_str}"

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.field = field
        self.value = value
        self.constraints = constraints or []


class ConfigurationError(AppError):
    """Exception for missing or invalid configuration, such as an unset secret."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = [
            "Check the configuration settings",
            "Set the required environment variable",
        ]
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        # Secret values are never echoed into the error
        technical_details = f"Setting: {setting}" if setting else None

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=False,
        )
        self.setting = setting
        self.expected = expected


class RandomSourceError(AppError):
    """Exception for a random source that produced an unusable draw."""

    def __init__(
        self,
        message: str,
        value: Any = None,
    ) -> None:
        technical_details = None
        if value is not None:
            technical_details = f"Draw: {value!r}"[:100]

        super().__init__(
            message=message,
            category=ErrorCategory.RANDOM_SOURCE,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "Check the injected random source",
                "Random draws must be floats in [0, 1)",
            ],
            technical_details=technical_details,
            recoverable=False,
        )
        self.value = value


class IntegrityError(AppError):
    """Exception for a submitted score whose signature does not verify."""

    def __init__(
        self,
        message: str,
        score: int | float | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.INTEGRITY,
            severity=ErrorSeverity.WARNING,
            suggested_actions=[
                "Reject the submitted result",
                "Check that client and verifier share the same secret",
            ],
            technical_details=f"Score: {score}" if score is not None else None,
            recoverable=True,
        )
        self.score = score


class ErrorHandlingService:
    """Centralized error handling service.

    This service provides:
    - Error classification into user-friendly representations
    - Error logging with technical details
    - A bounded history of recent errors
    """

    def __init__(self, max_history_size: int = 100) -> None:
        """Initialize the error handling service."""
        self._error_history: list[tuple[float, AppError]] = []
        self._max_history_size = max_history_size
        log.debug("Error handling service initialized")

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self._convert_to_app_error(error)

        self._log_error(app_error, operation, component, context)

        self._error_history.append((time.time(), app_error))
        if len(self._error_history) > self._max_history_size:
            self._error_history.pop(0)

        return app_error.to_user_friendly()

    def _convert_to_app_error(self, error: Exception) -> AppError:
        """Wrap anything that is not already an AppError as unexpected."""
        if isinstance(error, AppError):
            return error

        return AppError(
            message="An unexpected error occurred. Please try again.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {error}",
            recoverable=True,
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """Get recent errors from history.

        Args:
            count: Number of recent errors to return

        Returns:
            List of recent AppError instances
        """
        recent = self._error_history[-count:] if self._error_history else []
        return [error for _, error in recent]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        """Get count of errors by category."""
        counts: dict[ErrorCategory, int] = {}
        for _, error in self._error_history:
            counts[error.category] = counts.get(error.category, 0) + 1
        return counts


def require_finite(value: Any, field: str) -> None:
    """Raise ValidationError unless value is a finite int or float (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"{field} must be a number",
            field=field,
            value=value,
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(
            f"{field} must be finite",
            field=field,
            value=value,
        )


# Global error handling service instance
_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service."""
    return get_error_service().handle_error(error, operation, component, context)
