#%% [markdown]
# # P&L Graph Demo

#
# This file is configured to run in VS Code's Interactive Window.

# ## Load daily P&L records
#%%
import logging

from pnl_graph.core.aggregator import aggregate
from pnl_graph.core.calendar_grid import build_grid, month_labels, year_options
from pnl_graph.core.paginator import last_page, paginate
from pnl_graph.data.data_loader import PnLDataLoader
from pnl_graph.models.graph_config import GraphConfig
from pnl_graph.visualization.pnl_charts import PnLChartVisualizer

logging.basicConfig(level=logging.INFO)

config = GraphConfig(
    timezone='Asia/Kolkata',
    data_url='https://bhavpc-default-rtdb.asia-southeast1.firebasedatabase.app/pnlGraph.json'
)
records = PnLDataLoader.fetch(config.data_url)

#%% [markdown]
# ## Aggregate and page the bar chart

#%%
weekly = aggregate(records, 'weekly', config.timezone)
window = paginate(weekly, last_page(len(weekly), config.page_size), config.page_size)
print(f"Weekly buckets: {len(weekly)}, showing page {window.current_page} of {window.total_pages}")

weeks = build_grid(records, 'trailing365', tz=config.timezone)
print(f"Heatmap weeks: {len(weeks)}, months: {[m.name for m in month_labels(weeks)]}")
print(f"Year selector: {year_options(records, config.timezone)}")

# Visualize results
visualizer = PnLChartVisualizer(records, config)
visualizer.print_summary()
visualizer.plot_summary()
# %%
