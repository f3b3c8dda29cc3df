from datetime import date

import pytest

from pnl_graph.visualization.formatting import (
    LOSS_COLOR,
    PROFIT_COLOR,
    format_currency,
    format_date,
    format_indian_number,
    format_inr,
    group_indian,
    pnl_color,
)


@pytest.mark.parametrize('value, expected', [
    (0, '0'),
    (950.6, '951'),
    (1500, '1.5K'),
    (2000, '2K'),
    (-12345, '-12.3K'),
    (100000, '1L'),
    (150000, '1.5L'),
    (25000000, '2.5Cr'),
])
def test_format_indian_number(value, expected):
    assert format_indian_number(value) == expected


@pytest.mark.parametrize('value, expected', [
    (100, '100'),
    (1000, '1,000'),
    (100000, '1,00,000'),
    (12345678, '1,23,45,678'),
])
def test_group_indian(value, expected):
    assert group_indian(value) == expected


class TestFormatCurrency:
    @pytest.mark.parametrize('amount', [None, float('nan')])
    def test_missing(self, amount):
        assert format_currency(amount, True) == '-'
        assert format_currency(amount, False) == '-'

    @pytest.mark.parametrize('amount, expected', [
        (1234567.46, '12,34,567.5'),
        (-1234, '-1,234'),
        (500, '500'),
    ])
    def test_full_format(self, amount, expected):
        assert format_currency(amount, True) == expected

    @pytest.mark.parametrize('amount, expected', [
        (12500000, '1.3 Cr'),
        (250000, '2.5 L'),
        (1000, '1 K'),
        (999.94, '999.9'),
        (-45, '-45'),
    ])
    def test_short_format(self, amount, expected):
        assert format_currency(amount, False) == expected


def test_format_inr():
    assert format_inr(1234567.5) == '₹12,34,567.50'
    assert format_inr(-1000) == '-₹1,000.00'
    assert format_inr(0) == '₹0.00'


def test_format_date(make_record, tz):
    assert format_date(make_record(date(2024, 6, 15), 1).date_milli, tz) == '15 Jun 2024'


def test_pnl_color():
    assert pnl_color(0) == PROFIT_COLOR
    assert pnl_color(-1) == LOSS_COLOR
