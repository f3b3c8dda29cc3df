import logging
import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Union

from pnl_graph.core.time_utils import (
    as_timezone,
    get_week_end,
    get_week_start,
    local_date_key,
    to_local_date,
    today_local,
)
from pnl_graph.models.calendar import DAYS_PER_WEEK, CalendarCell, CalendarWeek, Intensity, MonthLabel
from pnl_graph.models.daily_record import DailyRecord

logger = logging.getLogger(__name__)

TRAILING_365 = 'trailing365'
DEFAULT_THRESHOLDS = (10000, 25000, 50000, 100000)
MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

CalendarMode = Union[int, str]


def build_value_map(records: Sequence[DailyRecord], tz=None) -> Dict[str, Optional[float]]:
    """Local calendar date -> net P&L; a later record for the same date wins"""
    zone = as_timezone(tz)
    values: Dict[str, Optional[float]] = {}
    for record in records:
        values[local_date_key(to_local_date(record.date_milli, zone))] = record.ntpl
    return values


def grid_range(mode: CalendarMode, today: Optional[date] = None, tz=None) -> tuple:
    """
    Date range covered by the heatmap before week alignment.

    :param mode: Calendar year as an int, or 'trailing365'
    :param today: Current local date, defaults to now in the viewer's timezone
    :return: (start_date, end_date) inclusive
    """
    if mode == TRAILING_365:
        end_date = today or today_local(as_timezone(tz))
        return end_date - timedelta(days=364), end_date
    if isinstance(mode, bool) or not isinstance(mode, int):
        raise ValueError(f"Calendar mode must be a year or '{TRAILING_365}', got {mode!r}")
    return date(mode, 1, 1), date(mode, 12, 31)


def build_grid(
    records: Sequence[DailyRecord],
    mode: CalendarMode,
    today: Optional[date] = None,
    tz=None
) -> List[CalendarWeek]:
    """
    Lay daily records onto a Sunday-start week grid for the calendar heatmap.

    The range is widened to the Sunday before its start and the Saturday after
    its end, so every week holds exactly seven cells. Days without a record get
    a cell whose value is None.
    """
    zone = as_timezone(tz)
    values = build_value_map(records, zone)
    start_date, end_date = grid_range(mode, today, zone)

    current = get_week_start(start_date)
    adjusted_end = get_week_end(end_date)

    weeks: List[CalendarWeek] = []
    cells: List[CalendarCell] = []
    while current <= adjusted_end:
        date_key = local_date_key(current)
        cells.append(CalendarCell(date=current, value=values.get(date_key), date_key=date_key))
        if len(cells) == DAYS_PER_WEEK:
            weeks.append(CalendarWeek(cells=cells))
            cells = []
        current += timedelta(days=1)

    logger.debug("Built %d calendar weeks for %s", len(weeks), mode)
    return weeks


def month_labels(weeks: Sequence[CalendarWeek]) -> List[MonthLabel]:
    """Month names to draw above the heatmap columns where a new month starts"""
    labels = []
    last_month = None
    for week_index, week in enumerate(weeks):
        month = week.first_day.month
        # no label over the final column, it would dangle past the grid
        if month != last_month and week_index < len(weeks) - 1:
            labels.append(MonthLabel(name=MONTH_NAMES[month - 1], week_index=week_index))
            last_month = month
    return labels


def classify(value: Optional[float], thresholds: Optional[Sequence[float]] = None) -> Intensity:
    """
    Colour class of a heatmap cell.

    Zero counts as profit. Levels rise as the absolute value strictly exceeds
    each threshold.
    """
    if value is None or not math.isfinite(value):
        return Intensity(sign='none', level=0)

    sign = 'profit' if value >= 0 else 'loss'
    absolute_value = abs(value)
    level = 0
    for index, threshold in enumerate(thresholds or DEFAULT_THRESHOLDS, start=1):
        if absolute_value > threshold:
            level = index
    return Intensity(sign=sign, level=level)


def distinct_years(records: Sequence[DailyRecord], tz=None) -> List[int]:
    """Years present in the records, most recent first"""
    zone = as_timezone(tz)
    return sorted({to_local_date(r.date_milli, zone).year for r in records}, reverse=True)


def year_options(records: Sequence[DailyRecord], tz=None) -> List[CalendarMode]:
    return [TRAILING_365] + distinct_years(records, tz)
