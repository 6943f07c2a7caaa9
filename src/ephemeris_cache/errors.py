"""Error taxonomy for ephemeris calculations.

All errors derive from ``OrbitError`` so callers can catch the whole
family at once. ``CalculationError`` is recoverable: the cache never
stores a failed computation, so the next query for the same key retries.
"""

from datetime import datetime, timezone
from typing import Any, Literal

ErrorSeverity = Literal["critical", "error", "warning", "info"]
ErrorCategory = Literal["calculation", "validation", "state", "unknown"]


class OrbitError(Exception):
    """Base error carrying severity, category and structured context."""

    def __init__(
        self,
        message: str,
        *,
        severity: ErrorSeverity = "error",
        category: ErrorCategory = "unknown",
        context: dict[str, Any] | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.context = context or {}
        self.recoverable = recoverable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logging or telemetry."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "severity": self.severity,
            "category": self.category,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "recoverable": self.recoverable,
        }


class CalculationError(OrbitError):
    """An ephemeris computation failed or produced a non-finite result.

    Attributes:
        body: The body whose computation failed
        instant: The (unquantized) instant that was requested
    """

    def __init__(
        self,
        message: str,
        *,
        body: str | None = None,
        instant: datetime | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            severity="error",
            category="calculation",
            context={
                **(context or {}),
                "body": body,
                "instant": instant.isoformat() if instant is not None else None,
            },
            recoverable=True,
        )
        self.body = body
        self.instant = instant


class InvalidInputError(OrbitError):
    """A caller supplied an unknown body or an unusable instant."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            severity="warning",
            category="validation",
            context={**(context or {}), "field": field, "value": repr(value)},
            recoverable=True,
        )
        self.field = field
        self.value = value
