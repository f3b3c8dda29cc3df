from typing import Optional

from pydantic import BaseModel

from pnl_graph.models.daily_record import DailyRecord


class PnLSummary(BaseModel):
    """Statistics for a run of trading days"""
    total_ntpl: float = 0.0
    trading_days: int = 0
    winning_days: int = 0
    losing_days: int = 0
    win_rate: float = 0.0
    avg_day: float = 0.0
    best_day: Optional[DailyRecord] = None
    worst_day: Optional[DailyRecord] = None
    max_drawdown: float = 0.0
