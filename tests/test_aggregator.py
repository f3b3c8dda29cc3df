from datetime import date, timedelta

import pytest

from pnl_graph.core.aggregator import aggregate, aggregate_buckets
from pnl_graph.core.time_utils import local_midnight_millis


@pytest.fixture
def year_of_records(make_record):
    start = date(2023, 11, 20)
    values = [((i * 7919) % 20001) - 10000 for i in range(420)]
    records = [make_record(start + timedelta(days=i), v) for i, v in enumerate(values)]
    # a day with a missing value still counts as a record
    records[10] = make_record(start + timedelta(days=10), None)
    return records


class TestDaily:
    def test_daily_passes_records_through(self, year_of_records):
        result = aggregate(year_of_records, 'daily')
        assert result == year_of_records
        assert result[0].ntpl_till_date == year_of_records[0].ntpl_till_date

    def test_unknown_granularity_passes_through(self, year_of_records):
        assert aggregate(year_of_records, 'hourly') == year_of_records

    def test_daily_returns_new_list(self, year_of_records):
        assert aggregate(year_of_records, 'daily') is not year_of_records


class TestWeekly:
    def test_monday_week_scenario(self, make_record, tz):
        day1 = date(2024, 6, 3)  # Monday
        records = [
            make_record(day1, 1000),
            make_record(day1 + timedelta(days=1), -500),
            make_record(day1 + timedelta(days=8), 2000),
        ]

        buckets = aggregate_buckets(records, 'weekly', tz)

        assert [b.key for b in buckets] == ['2024-06-02', '2024-06-09']
        assert [b.ntpl for b in buckets] == [500, 2000]
        assert [b.count for b in buckets] == [2, 1]
        assert buckets[0].date_milli == local_midnight_millis(date(2024, 6, 2), tz)

    def test_sunday_starts_its_own_week(self, make_record, tz):
        records = [make_record(date(2024, 6, 8), 1), make_record(date(2024, 6, 9), 2)]
        assert [b.key for b in aggregate_buckets(records, 'weekly', tz)] == ['2024-06-02', '2024-06-09']

    def test_week_start_across_dst_change(self, make_record):
        ny = 'America/New_York'
        records = [
            make_record(date(2024, 3, 10), 100, tz=ny, hour=12),
            make_record(date(2024, 3, 12), 50, tz=ny, hour=12),
        ]
        buckets = aggregate_buckets(records, 'weekly', ny)
        assert len(buckets) == 1
        assert buckets[0].key == '2024-03-10'
        assert buckets[0].date_milli == local_midnight_millis(date(2024, 3, 10), ny)

    def test_output_zeroes_cumulative_fields(self, make_record, tz):
        records = [make_record(date(2024, 6, 3), 1000, ntpl_till_date=5000, tpl=1200)]
        result = aggregate(records, 'weekly', tz)
        assert result[0].ntpl == 1000
        assert result[0].ntpl_till_date == 0
        assert result[0].tpl == 0


class TestMonthlyYearly:
    def test_monthly_keeps_first_seen_date(self, make_record, tz):
        records = [
            make_record(date(2024, 1, 15), 100),
            make_record(date(2024, 1, 20), 200),
            make_record(date(2024, 2, 3), -50),
        ]

        buckets = aggregate_buckets(records, 'monthly', tz)

        assert [b.key for b in buckets] == ['2024-01', '2024-02']
        assert buckets[0].date_milli == records[0].date_milli
        assert buckets[0].ntpl == 300
        assert buckets[0].count == 2
        assert buckets[1].date_milli == records[2].date_milli

    def test_yearly_uses_local_calendar(self, make_record, tz):
        # 02:00 on Jan 1st in India is still the previous year in UTC
        records = [make_record(date(2024, 1, 1), 100, hour=2)]
        assert aggregate_buckets(records, 'yearly', tz)[0].key == '2024'
        assert aggregate_buckets(records, 'yearly', 'UTC')[0].key == '2023'

    def test_yearly_buckets(self, year_of_records, tz):
        buckets = aggregate_buckets(year_of_records, 'yearly', tz)
        assert [b.key for b in buckets] == ['2023', '2024', '2025']
        assert sum(b.count for b in buckets) == len(year_of_records)


@pytest.mark.parametrize('granularity', ['daily', 'weekly', 'monthly', 'yearly'])
def test_total_pnl_is_conserved(year_of_records, tz, granularity):
    expected = sum(r.ntpl or 0 for r in year_of_records)
    result = aggregate(year_of_records, granularity, tz)
    assert sum(r.ntpl or 0 for r in result) == pytest.approx(expected)


@pytest.mark.parametrize('granularity', ['weekly', 'monthly', 'yearly'])
def test_buckets_are_date_ascending(year_of_records, tz, granularity):
    dates = [r.date_milli for r in aggregate(year_of_records, granularity, tz)]
    assert dates == sorted(dates)
    assert len(set(dates)) == len(dates)


@pytest.mark.parametrize('granularity', ['daily', 'weekly', 'monthly', 'yearly'])
def test_empty_input(granularity):
    assert aggregate([], granularity) == []


def test_missing_values_sum_as_zero(make_record, tz):
    records = [make_record(date(2024, 6, 3), None), make_record(date(2024, 6, 4), 250)]
    bucket = aggregate_buckets(records, 'weekly', tz)[0]
    assert bucket.ntpl == 250
    assert bucket.count == 2


def test_all_missing_values(make_record, tz):
    records = [make_record(date(2024, 6, 3), None)]
    assert aggregate(records, 'monthly', tz)[0].ntpl == 0
