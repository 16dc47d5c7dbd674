# src/shooting_report/errors.py
"""
Error hierarchy for the report pipeline.

Every error names the pipeline step it came from and carries a small
context dict (row, field, url, ...) so a failed run can be diagnosed
from the message alone. Nothing here is retried.
"""

from typing import Any, Optional


class ReportError(Exception):
    """Base exception for all report pipeline errors."""

    step = "report"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.step}] {self.message}"
        ctx = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"[{self.step}] {self.message} ({ctx})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "step": self.step,
            "message": self.message,
            "details": self.details,
        }


class SourceUnavailable(ReportError):
    """The raw dataset could not be fetched or opened."""

    step = "fetch"

    def __init__(self, message: str, source: str, details: Optional[dict[str, Any]] = None) -> None:
        self.source = source
        super().__init__(message, {"source": source, **(details or {})})


class ParseFailure(ReportError):
    """A date or time cell did not match the expected format."""

    step = "cleaning"

    def __init__(self, row: Any, field: str, value: Any) -> None:
        self.row = row
        self.field = field
        self.value = value
        super().__init__(
            f"could not parse {field}",
            {"row": row, "field": field, "value": value},
        )


class InsufficientData(ReportError):
    """The monthly series is shorter than two full seasonal periods."""

    step = "decomposition"

    def __init__(self, length: int, period: int) -> None:
        self.length = length
        self.period = period
        super().__init__(
            f"need at least {2 * period} observations, got {length}",
            {"length": length, "period": period},
        )


class InvalidInput(ReportError):
    """Input values that cannot occur in a valid count series."""

    step = "decomposition"
