# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Assignment period — a calendar month keyed as YYYY-MM.
"""

import calendar
import re
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from rotation_service.core.config import settings

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")


class Period(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    @classmethod
    def parse(cls, key: str) -> "Period":
        """Parse 'YYYY-MM'. Raises ValueError on anything else."""
        match = _PERIOD_RE.match(key.strip())
        if not match:
            raise ValueError(f"Invalid period '{key}': expected YYYY-MM")
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid period '{key}': month must be 01-12")
        return cls(year=year, month=month)

    @classmethod
    def from_date(cls, value: date) -> "Period":
        return cls(year=value.year, month=value.month)

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> "Period":
        """
        The calendar month containing `now` in the rotation time zone.
        A naive `now` is read as UTC.
        """
        moment = now or datetime.now(timezone.utc)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        local = moment.astimezone(ZoneInfo(settings.ROTATION_TIMEZONE))
        return cls.from_date(local.date())

    def next(self) -> "Period":
        if self.month == 12:
            return Period(year=self.year + 1, month=1)
        return Period(year=self.year, month=self.month + 1)

    def previous(self) -> "Period":
        if self.month == 1:
            return Period(year=self.year - 1, month=12)
        return Period(year=self.year, month=self.month - 1)

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.key
