"""Validation error raised by the league services."""

from typing import Optional

from app.models.fields import ErrorCode


class LeagueValidationError(ValueError):
    """Rejected operation. Raised before any mutation of the entity graph.

    Args:
        code: Machine-readable failure code
        field: Name of the offending input field, when there is one
    """

    def __init__(self, code: ErrorCode, field: Optional[str] = None):
        self.code = code
        self.field = field
        message = code.value if field is None else f"{code.value} ({field})"
        super().__init__(message)

    def as_detail(self) -> dict[str, Optional[str]]:
        return {"code": self.code.value, "field": self.field}
