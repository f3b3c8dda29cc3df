from typing import Sequence

import numpy as np
import pandas as pd

from pnl_graph.models.daily_record import DailyRecord
from pnl_graph.models.summary import PnLSummary


def max_drawdown(cumulative: pd.Series) -> float:
    """Largest fall of the cumulative P&L from a running peak"""
    cumulative = cumulative.dropna()
    if cumulative.empty:
        return 0.0
    drawdowns = cumulative.cummax() - cumulative
    return float(drawdowns.max())


def summarize(records: Sequence[DailyRecord]) -> PnLSummary:
    if not records:
        return PnLSummary()

    df = pd.DataFrame({
        'ntpl': [r.ntpl for r in records],
        'ntpl_till_date': [r.ntpl_till_date for r in records],
    }, dtype='float64')
    daily = df['ntpl'].fillna(0.0)

    trading_days = len(daily)
    winning_days = int((daily > 0).sum())
    losing_days = int((daily < 0).sum())

    return PnLSummary(
        total_ntpl=float(daily.sum()),
        trading_days=trading_days,
        winning_days=winning_days,
        losing_days=losing_days,
        win_rate=winning_days / trading_days * 100,
        avg_day=float(daily.mean()),
        best_day=records[int(np.argmax(daily.to_numpy()))],
        worst_day=records[int(np.argmin(daily.to_numpy()))],
        max_drawdown=max_drawdown(df['ntpl_till_date'])
    )
