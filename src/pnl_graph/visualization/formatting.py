import math
from typing import Optional

from pnl_graph.core.time_utils import to_local_datetime

CRORE = 10000000
LAKH = 100000
THOUSAND = 1000

PROFIT_COLOR = '#22c55e'
LOSS_COLOR = '#ef4444'


def _is_missing(value: Optional[float]) -> bool:
    return value is None or not math.isfinite(value)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _trim(value: float) -> str:
    """One decimal place, dropped when it is zero"""
    rounded = _round_half_up(value, 1)
    return str(int(rounded)) if rounded.is_integer() else f"{rounded:.1f}"


def group_indian(integer_part: int) -> str:
    """Digit grouping used in India: 12,34,567"""
    digits = str(integer_part)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def _grouped(value: float, min_decimals: int, max_decimals: int) -> str:
    rounded = _round_half_up(value, max_decimals)
    integer_part = int(rounded)
    text = group_indian(integer_part)
    fraction = f"{rounded - integer_part:.{max_decimals}f}"[2:] if max_decimals else ''
    fraction = fraction.rstrip('0').ljust(min_decimals, '0')
    return f"{text}.{fraction}" if fraction else text


def format_indian_number(value: float) -> str:
    """Compact axis label: 0, 950, 1.5K, 12L, 2.3Cr"""
    absolute = abs(value)
    sign = '-' if value < 0 else ''
    if absolute == 0:
        return '0'
    for size, suffix in ((CRORE, 'Cr'), (LAKH, 'L'), (THOUSAND, 'K')):
        if absolute >= size:
            scaled = absolute / size
            text = str(int(scaled)) if scaled.is_integer() else f"{scaled:.1f}"
            return f"{sign}{text}{suffix}"
    return f"{sign}{int(_round_half_up(absolute))}"


def format_currency(amount: Optional[float], full_format: bool) -> str:
    """
    Amount for tables and summaries.

    :param amount: Value to format; None or NaN renders as '-'
    :param full_format: Full Indian-grouped amount instead of the K/L/Cr short form
    """
    if _is_missing(amount):
        return '-'

    absolute = abs(amount)
    sign = '-' if amount < 0 else ''
    if full_format:
        return sign + _grouped(absolute, 0, 1)

    for size, suffix in ((CRORE, ' Cr'), (LAKH, ' L'), (THOUSAND, ' K')):
        if absolute >= size:
            return sign + _trim(absolute / size) + suffix
    return sign + _trim(absolute)


def format_inr(value: float) -> str:
    """Tooltip amount with rupee sign and paise: -₹1,23,456.50"""
    sign = '-' if value < 0 else ''
    return f"{sign}₹{_grouped(abs(value), 2, 2)}"


def format_date(date_milli: int, tz=None) -> str:
    return to_local_datetime(date_milli, tz).strftime('%d %b %Y')


def pnl_color(value: float) -> str:
    return PROFIT_COLOR if value >= 0 else LOSS_COLOR
