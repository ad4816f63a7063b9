"""Common Pydantic models for API request/response validation."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class DateRangeParams(BaseModel):
    """Reporting range query parameters."""
    date_from: Optional[date] = Field(None, alias="from")
    date_to: Optional[date] = Field(None, alias="to")
    days: Optional[int] = Field(None, ge=1)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_range(self):
        if self.days is not None and (self.date_from or self.date_to):
            raise ValueError("days cannot be combined with from/to")
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must be before date_to")
        return self


class DateRangeModel(BaseModel):
    """A resolved, normalized reporting range."""
    start: str
    end: str
