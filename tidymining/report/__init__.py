# Renderers for aggregated tables: CSV, bar charts, word clouds.

from .tables import write_table, write_summary
from .charts import plot_top_words, plot_sentiment_trajectory
from .wordclouds import render_word_cloud

__all__ = [
    "write_table",
    "write_summary",
    "plot_top_words",
    "plot_sentiment_trajectory",
    "render_word_cloud",
]
