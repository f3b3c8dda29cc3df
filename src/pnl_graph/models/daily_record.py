import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator

# camelCase wire name -> model field
WIRE_FIELDS = {
    'dateMilli': 'date_milli',
    'ntpl': 'ntpl',
    'ntplTillDate': 'ntpl_till_date',
    'tpl': 'tpl',
}


class DailyRecord(BaseModel):
    """One trading day's P&L as served by the time-series source"""
    date_milli: int = Field(..., description="Trading day as epoch milliseconds")
    ntpl: Optional[float] = Field(None, description="Net trade P&L for the day")
    ntpl_till_date: Optional[float] = Field(None, description="Cumulative net P&L up to the day")
    tpl: Optional[float] = Field(None, description="Gross trade P&L for the day")

    class Config:
        frozen = True

    @validator('ntpl', 'ntpl_till_date', 'tpl')
    def drop_non_finite(cls, v):
        if v is not None and not math.isfinite(v):
            return None
        return v

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'DailyRecord':
        """Build a record from the wire shape (camelCase) or snake_case keys"""
        values = {}
        for wire_name, field_name in WIRE_FIELDS.items():
            if wire_name in payload:
                values[field_name] = payload[wire_name]
            elif field_name in payload:
                values[field_name] = payload[field_name]
        if values.get('date_milli') is None:
            raise ValueError(f"Record is missing dateMilli: {payload!r}")
        values['date_milli'] = int(values['date_milli'])
        return cls(**values)

    def to_payload(self) -> Dict[str, Any]:
        return {
            'dateMilli': self.date_milli,
            'ntpl': self.ntpl,
            'ntplTillDate': self.ntpl_till_date,
            'tpl': self.tpl,
        }


class Bucket(BaseModel):
    """Daily records merged into a coarser period"""
    key: str
    date_milli: int
    ntpl: float = 0.0
    count: int = 0

    def to_record(self) -> DailyRecord:
        # Cumulative and gross P&L have no meaning once days are merged
        return DailyRecord(
            date_milli=self.date_milli,
            ntpl=self.ntpl,
            ntpl_till_date=0,
            tpl=0
        )
