import matplotlib
import pytest

from pnl_graph.core.time_utils import local_midnight_millis
from pnl_graph.models.daily_record import DailyRecord

matplotlib.use('Agg')

TZ = 'Asia/Kolkata'


def build_record(day, ntpl, ntpl_till_date=None, tpl=None, tz=TZ, hour=15):
    """Daily record stamped during the trading session of a local day"""
    date_milli = local_midnight_millis(day, tz) + hour * 3600 * 1000
    return DailyRecord(
        date_milli=date_milli,
        ntpl=ntpl,
        ntpl_till_date=ntpl if ntpl_till_date is None else ntpl_till_date,
        tpl=ntpl if tpl is None else tpl
    )


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def make_record():
    return build_record
