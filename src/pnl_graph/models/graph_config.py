from typing import List, Optional

from pydantic import BaseModel, Field, validator

from pnl_graph.core.time_utils import resolve_timezone


class IntensityConfig(BaseModel):
    thresholds: List[float] = Field(
        default_factory=lambda: [10000, 25000, 50000, 100000],
        description="Absolute P&L a day must exceed to reach levels 1 through 4"
    )

    @validator('thresholds')
    def validate_thresholds(cls, v):
        if len(v) != 4:
            raise ValueError("Exactly four intensity thresholds are required")
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError("Intensity thresholds must be strictly ascending")
        return v


class GraphConfig(BaseModel):
    page_size: int = Field(100, description="Bars shown per chart page")
    timezone: Optional[str] = Field(None, description="Viewer timezone, None for local")
    value_padding: float = Field(0.1, description="Fraction of the value range added above and below")
    date_padding: float = Field(0.05, description="Fraction of the date range added on both sides")
    intensity: IntensityConfig = Field(default_factory=IntensityConfig)
    data_url: Optional[str] = Field(None, description="Default URL of the P&L graph JSON")

    @validator('page_size')
    def validate_page_size(cls, v):
        if v <= 0:
            raise ValueError("Page size must be positive")
        return v

    @validator('timezone')
    def validate_timezone(cls, v):
        if v:
            resolve_timezone(v)
        return v

    @validator('value_padding', 'date_padding')
    def validate_padding(cls, v):
        if v < 0:
            raise ValueError("Padding cannot be negative")
        return v

    @property
    def tz(self):
        return resolve_timezone(self.timezone)
