# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from rotation_service.models.domain import AssignmentKind, ExceptionRecord, GenerationMode
from rotation_service.models.period import Period

PERIOD_PATTERN = r"^\d{4}-\d{2}$"


class GenerationRequest(BaseModel):
    """Body for POST /api/v1/assignments/{kind}/initial|rotate."""
    period: Optional[str] = Field(
        default=None,
        pattern=PERIOD_PATTERN,
        description="Target period (YYYY-MM); defaults to the current month",
    )

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            Period.parse(v)
        return v

    def target(self) -> Optional[Period]:
        return Period.parse(self.period) if self.period else None


class SummaryResponse(BaseModel):
    kind: AssignmentKind
    period: str
    mode: GenerationMode
    created_count: int
    skipped_count: int
    exceptions: list[ExceptionRecord]


class PeriodResponse(BaseModel):
    period: str
    start: str
    end: str
    previous: str
    next: str


class ErrorResponse(BaseModel):
    """Error body. `error` and `request_id` are set only for unhandled errors."""
    detail: str
    error: Optional[str] = None
    request_id: Optional[str] = None
