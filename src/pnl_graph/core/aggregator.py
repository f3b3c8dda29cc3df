import logging
from typing import Callable, Dict, List, Sequence

import pandas as pd

from pnl_graph.core.time_utils import (
    as_timezone,
    get_week_start,
    local_date_key,
    local_midnight_millis,
    to_local_datetime,
)
from pnl_graph.models.daily_record import Bucket, DailyRecord

logger = logging.getLogger(__name__)


def _weekly_key(record: DailyRecord, zone) -> tuple:
    week_start = get_week_start(to_local_datetime(record.date_milli, zone).date())
    return local_date_key(week_start), local_midnight_millis(week_start, zone)


def _monthly_key(record: DailyRecord, zone) -> tuple:
    local = to_local_datetime(record.date_milli, zone)
    return f"{local.year:04d}-{local.month:02d}", record.date_milli


def _yearly_key(record: DailyRecord, zone) -> tuple:
    local = to_local_datetime(record.date_milli, zone)
    return f"{local.year:04d}", record.date_milli


# granularity -> (bucket key, bucket timestamp) for a record
BUCKET_KEYS: Dict[str, Callable[[DailyRecord, object], tuple]] = {
    'weekly': _weekly_key,
    'monthly': _monthly_key,
    'yearly': _yearly_key,
}


def aggregate_buckets(
    records: Sequence[DailyRecord],
    granularity: str,
    tz=None
) -> List[Bucket]:
    """
    Group daily records into weekly, monthly or yearly buckets.

    Buckets come back in the order their keys are first seen, so date-ascending
    input gives date-ascending buckets. Weekly buckets are stamped with the local
    midnight of their Sunday; monthly and yearly buckets keep the timestamp of
    the first record that landed in them.

    :param records: Daily records sorted ascending by date_milli
    :param granularity: 'weekly', 'monthly' or 'yearly'
    :param tz: Timezone name or tzinfo of the viewer's calendar, None for local
    :return: List of Bucket objects, empty for daily or unknown granularity
    """
    key_func = BUCKET_KEYS.get(granularity)
    if key_func is None or not records:
        return []

    zone = as_timezone(tz)
    rows = []
    for record in records:
        key, date_milli = key_func(record, zone)
        rows.append({'key': key, 'date_milli': date_milli, 'ntpl': record.ntpl})

    df = pd.DataFrame(rows)
    df['ntpl'] = pd.to_numeric(df['ntpl'], errors='coerce').fillna(0.0)

    # sort=False keeps first-insertion order of the keys
    grouped = df.groupby('key', sort=False).agg(
        date_milli=('date_milli', 'first'),
        ntpl=('ntpl', 'sum'),
        count=('ntpl', 'size')
    )

    buckets = [
        Bucket(
            key=row['key'],
            date_milli=int(row['date_milli']),
            ntpl=float(row['ntpl']),
            count=int(row['count'])
        )
        for row in grouped.reset_index().to_dict('records')
    ]
    logger.debug("Aggregated %d records into %d %s buckets", len(records), len(buckets), granularity)
    return buckets


def aggregate(
    records: Sequence[DailyRecord],
    granularity: str,
    tz=None
) -> List[DailyRecord]:
    """Aggregate records for charting; daily (or anything unrecognized) passes through"""
    if granularity not in BUCKET_KEYS:
        return list(records)
    return [bucket.to_record() for bucket in aggregate_buckets(records, granularity, tz)]
