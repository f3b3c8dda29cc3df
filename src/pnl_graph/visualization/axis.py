import math
from typing import Iterable, List, Optional, Sequence, Tuple

from pnl_graph.models.daily_record import DailyRecord

# Used when there is nothing to plot, one 5K step either side of break-even
DEFAULT_VALUE_DOMAIN = (-5000.0, 5000.0)

# (minimum range, step) checked top-down; steps line up with the K/L/Cr labels
TICK_STEPS = [
    (10000000, 10000000),
    (5000000, 1000000),
    (1000000, 100000),
    (100000, 50000),
    (50000, 10000),
    (0, 5000),
]


def _finite(values: Iterable[Optional[float]]) -> List[float]:
    return [v for v in values if v is not None and math.isfinite(v)]


def axis_domain(values: Iterable[Optional[float]], padding: float = 0.1) -> Tuple[float, float]:
    """Padded (min, max) of a value axis, ignoring missing values"""
    finite = _finite(values)
    if not finite:
        return DEFAULT_VALUE_DOMAIN
    low, high = min(finite), max(finite)
    offset = (high - low) * padding
    return low - offset, high + offset


def date_domain(records: Sequence[DailyRecord], padding: float = 0.05) -> Optional[Tuple[float, float]]:
    if not records:
        return None
    dates = [r.date_milli for r in records]
    low, high = min(dates), max(dates)
    offset = (high - low) * padding
    return low - offset, high + offset


def tick_step(value_range: float) -> int:
    for minimum, step in TICK_STEPS:
        if value_range >= minimum:
            return step
    return TICK_STEPS[-1][1]


def generate_round_ticks(low: float, high: float) -> List[float]:
    """
    Round-numbered ticks covering [low, high].

    The step grows with the range so neighbouring ticks never format to the same
    K/L/Cr label. Zero is always a tick when the domain straddles it.
    """
    step = tick_step(high - low)
    first = math.floor(low / step)
    last = math.ceil(high / step)
    ticks = [float(i * step) for i in range(first, last + 1)]

    if low < 0 < high and 0.0 not in ticks:
        ticks.append(0.0)
        ticks.sort()
    return ticks
