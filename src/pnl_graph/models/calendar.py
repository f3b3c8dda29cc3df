import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, validator

DAYS_PER_WEEK = 7


class CalendarCell(BaseModel):
    date: datetime.date
    value: Optional[float] = Field(None, description="Net P&L, None when no record exists")
    date_key: str

    @property
    def has_data(self) -> bool:
        return self.value is not None


class CalendarWeek(BaseModel):
    """One heatmap column, Sunday through Saturday"""
    cells: List[CalendarCell]

    @validator('cells')
    def validate_full_week(cls, v):
        if len(v) != DAYS_PER_WEEK:
            raise ValueError(f"A calendar week needs {DAYS_PER_WEEK} cells, got {len(v)}")
        return v

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, index: int) -> CalendarCell:
        return self.cells[index]

    @property
    def first_day(self) -> datetime.date:
        return self.cells[0].date


class MonthLabel(BaseModel):
    name: str
    week_index: int


class Intensity(BaseModel):
    sign: Literal['profit', 'loss', 'none']
    level: int = Field(0, ge=0, le=4)
