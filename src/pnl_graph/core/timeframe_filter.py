from datetime import datetime
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from pnl_graph.models.daily_record import DailyRecord

LOOKBACKS = {
    'year': relativedelta(years=1),
    'month': relativedelta(months=1),
}


def timeframe_cutoff(timeframe: str, now: Optional[datetime] = None) -> Optional[int]:
    """Earliest epoch millisecond kept by a timeframe, None when nothing is cut"""
    if timeframe == 'all':
        return None
    if timeframe not in LOOKBACKS:
        raise ValueError(f"Unknown timeframe: {timeframe}")
    now = now or datetime.now().astimezone()
    return int((now - LOOKBACKS[timeframe]).timestamp() * 1000)


def filter_by_timeframe(
    records: Sequence[DailyRecord],
    timeframe: str,
    now: Optional[datetime] = None
) -> List[DailyRecord]:
    """Keep the records of the last year or month, or all of them"""
    cutoff = timeframe_cutoff(timeframe, now)
    if cutoff is None:
        return list(records)
    return [r for r in records if r.date_milli >= cutoff]
