import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap
from matplotlib.dates import DateFormatter

from pnl_graph.core.aggregator import aggregate
from pnl_graph.core.calendar_grid import TRAILING_365, build_grid, classify, month_labels
from pnl_graph.core.paginator import last_page, paginate
from pnl_graph.core.statistics import summarize
from pnl_graph.core.timeframe_filter import timeframe_cutoff
from pnl_graph.data.data_loader import PnLDataLoader
from pnl_graph.models.calendar import CalendarWeek
from pnl_graph.models.daily_record import DailyRecord
from pnl_graph.models.graph_config import GraphConfig
from pnl_graph.visualization.axis import axis_domain, generate_round_ticks, millis_domain
from pnl_graph.visualization.formatting import (
    LOSS_COLOR,
    format_currency,
    format_date,
    format_indian_number,
    pnl_color,
)

logger = logging.getLogger(__name__)

DAY_LABELS = ['S', 'M', 'T', 'W', 'T', 'F', 'S']

# index 0 is the no-data colour, then loss levels 0..4 and profit levels 0..4
HEATMAP_COLORS = ListedColormap(
    ['#e5e7eb']
    + [(0.94, 0.27, 0.27, a) for a in (0.2, 0.3, 0.5, 0.7, 0.9)]
    + [(0.13, 0.77, 0.37, a) for a in (0.2, 0.3, 0.5, 0.7, 0.9)]
)


class PnLChartVisualizer:
    def __init__(self, records: Sequence[DailyRecord], config: Optional[GraphConfig] = None):
        self.records = list(records)
        self.config = config or GraphConfig()
        self.tz = self.config.tz
        self._prepare_data()

    def _prepare_data(self):
        """Build the daily frame once; every chart slices from it"""
        self.daily_df = PnLDataLoader.to_frame(self.records, self.tz)

    def _format_value_axis(self, ax, values: List[Optional[float]]):
        low, high = axis_domain(values, self.config.value_padding)
        ticks = generate_round_ticks(low, high)
        ax.set_yticks(ticks)
        # after the ticks, which would otherwise widen the limits to the outer ticks
        ax.set_ylim(low, high)
        ax.set_yticklabels([format_indian_number(t) for t in ticks])
        for tick, label in zip(ticks, ax.get_yticklabels()):
            label.set_color(LOSS_COLOR if tick < 0 else '#888888')
        ax.axhline(0, color=LOSS_COLOR, linestyle='--', linewidth=1, label='Break Even')

    def _format_date_axis(self, ax, dates: List[int]):
        domain = millis_domain(dates, self.config.date_padding)
        if domain is None or domain[0] == domain[1]:
            return
        ax.set_xlim(*(datetime.fromtimestamp(ms / 1000, tz=self.tz) for ms in domain))
        ax.xaxis.set_major_formatter(DateFormatter('%d %b %Y', tz=self.tz))

    def _line_chart(self, ax, timeframe: str, field: str, title: str):
        cutoff = timeframe_cutoff(timeframe)
        frame = self.daily_df if cutoff is None else self.daily_df[self.daily_df['date_milli'] >= cutoff]
        if not frame.empty:
            ax.plot(frame.index.to_pydatetime(), frame[field].to_numpy(), color='#667eea', linewidth=1.5)
            self._format_date_axis(ax, frame['date_milli'].tolist())
        self._format_value_axis(ax, frame[field].tolist())
        ax.set_title(title)
        ax.grid(True, alpha=0.3)

    def plot_growth(self, timeframe: str = 'all', ax=None):
        """Cumulative P&L over the selected timeframe"""
        fig, ax = self._figure(ax, (15, 6))
        self._line_chart(ax, timeframe, 'ntpl_till_date', 'P&L Growth Chart')
        return fig

    def plot_daily(self, timeframe: str = 'all', ax=None):
        fig, ax = self._figure(ax, (15, 6))
        self._line_chart(ax, timeframe, 'ntpl', 'Daily P&L')
        return fig

    def plot_bars(self, granularity: str = 'daily', page: Optional[int] = None, ax=None):
        """
        Bar chart of one page of the aggregated series.

        Without an explicit page the most recent window is shown.
        """
        series = aggregate(self.records, granularity, self.tz)
        if page is None:
            page = last_page(len(series), self.config.page_size)
        window = paginate(series, page, self.config.page_size)

        fig, ax = self._figure(ax, (15, 6))
        values = [r.ntpl or 0.0 for r in window.items]
        ax.bar(
            range(len(values)),
            values,
            color=[pnl_color(v) for v in values]
        )
        ax.set_xticks(range(len(values)))
        ax.set_xticklabels([format_date(r.date_milli, self.tz) for r in window.items], rotation=90, fontsize=6)
        self._format_value_axis(ax, values)
        if window.total_pages:
            ax.set_title(f'{granularity.title()} P&L (page {window.current_page + 1} of {window.total_pages})')
        else:
            ax.set_title(f'{granularity.title()} P&L')
        return fig

    def heatmap_matrix(self, weeks: Sequence[CalendarWeek]) -> np.ndarray:
        """7 x weeks matrix of colour indices for the calendar heatmap"""
        matrix = np.zeros((7, len(weeks)), dtype=int)
        thresholds = self.config.intensity.thresholds
        for col, week in enumerate(weeks):
            for row, cell in enumerate(week):
                intensity = classify(cell.value, thresholds)
                if intensity.sign == 'loss':
                    matrix[row, col] = 1 + intensity.level
                elif intensity.sign == 'profit':
                    matrix[row, col] = 6 + intensity.level
        return matrix

    def plot_heatmap(self, mode=TRAILING_365, today: Optional[date] = None, ax=None):
        weeks = build_grid(self.records, mode, today=today, tz=self.tz)
        matrix = self.heatmap_matrix(weeks)

        fig, ax = self._figure(ax, (15, 3))
        ax.imshow(matrix, cmap=HEATMAP_COLORS, vmin=0, vmax=10, aspect='equal')
        ax.set_yticks(range(7))
        ax.set_yticklabels(DAY_LABELS)
        labels = month_labels(weeks)
        ax.set_xticks([label.week_index for label in labels])
        ax.set_xticklabels([label.name for label in labels])
        ax.xaxis.tick_top()
        ax.set_title('Last 365 Days' if mode == TRAILING_365 else f'{mode}')
        for spine in ax.spines.values():
            spine.set_visible(False)
        return fig

    def plot_summary(self, today: Optional[date] = None):
        """All charts of the P&L graph page on one figure"""
        fig = plt.figure(figsize=(15, 22))
        gs = plt.GridSpec(4, 1, figure=fig, height_ratios=[3, 1.2, 3, 3])

        self.plot_growth(ax=fig.add_subplot(gs[0]))
        self.plot_heatmap(today=today, ax=fig.add_subplot(gs[1]))
        self.plot_daily(ax=fig.add_subplot(gs[2]))
        self.plot_bars(ax=fig.add_subplot(gs[3]))

        plt.tight_layout()
        return fig

    def print_summary(self):
        """Log the headline statistics of the loaded records"""
        summary = summarize(self.records)
        logger.info("P&L Summary:")
        logger.info("Total Net P&L: %s", format_currency(summary.total_ntpl, True))
        logger.info("Trading Days: %d", summary.trading_days)
        logger.info("Win Rate: %.2f%% (%d up / %d down)",
                    summary.win_rate, summary.winning_days, summary.losing_days)
        logger.info("Average Day: %s", format_currency(summary.avg_day, False))
        if summary.best_day is not None:
            logger.info("Best Day: %s on %s", format_currency(summary.best_day.ntpl, False),
                        format_date(summary.best_day.date_milli, self.tz))
            logger.info("Worst Day: %s on %s", format_currency(summary.worst_day.ntpl, False),
                        format_date(summary.worst_day.date_milli, self.tz))
        logger.info("Max Drawdown: %s", format_currency(summary.max_drawdown, False))
        return summary

    @staticmethod
    def _figure(ax, figsize):
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize)
            return fig, ax
        return ax.figure, ax
