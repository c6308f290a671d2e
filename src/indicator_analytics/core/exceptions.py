"""
Error taxonomy for the analytics core.

Every condition that would otherwise leak a NaN or an infinity to a caller is
raised as one of these. All of them subclass ValueError so callers that only
care about "bad input" can catch that.
"""

from typing import Any


class AnalyticsError(ValueError):
    """Base class for analytics errors."""

    code = "analytics_error"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class InsufficientDataError(AnalyticsError):
    """Fewer points than the operation needs."""

    code = "insufficient_data"

    def __init__(self, required: int, actual: int, operation: str = "operation"):
        self.required = required
        self.actual = actual
        self.operation = operation
        super().__init__(
            f"{operation} needs at least {required} data point(s), got {actual}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "required": self.required,
            "actual": self.actual,
        }


class DegenerateInputError(AnalyticsError):
    """Input has a valid shape but no meaningful result (zero variance, zero base)."""

    code = "degenerate_input"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class LengthMismatchError(AnalyticsError):
    """Series cannot be compared because too few usable points line up."""

    code = "length_mismatch"

    def __init__(self, counts: dict[str, int], message: str | None = None):
        self.counts = dict(counts)
        detail = ", ".join(f"{label}={n}" for label, n in self.counts.items())
        super().__init__(message or f"Series lengths do not line up ({detail})")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "details": self.counts}


class InvalidParameterError(AnalyticsError):
    """A caller-supplied parameter is out of range or malformed."""

    code = "invalid_parameter"

    def __init__(self, parameter: str, reason: str):
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid {parameter}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "parameter": self.parameter}
