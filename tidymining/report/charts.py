"""
Bar charts for word counts and sentiment trajectories (matplotlib).

Every function draws into a fresh figure, saves it and closes it; nothing is
returned.
"""
import logging
import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from tidymining import config  # noqa: E402

logger = logging.getLogger(__name__)


def _save(fig, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def plot_top_words(freq, path, *, top_n=config.DEFAULT_TOPN, title=None, palette=None):
    """
    Horizontal bar chart of the most frequent words.

    With a `sentiment` column, one panel per label, each showing its own top_n words.
    """
    if freq.empty:
        logger.warning("No rows to plot for %s", path)
        return
    palette = palette or config.SENTIMENT_PALETTE

    if "sentiment" in freq.columns:
        labels = sorted(freq["sentiment"].unique())
        groups = [(lab, freq.loc[freq["sentiment"] == lab]) for lab in labels]
    else:
        groups = [(None, freq)]

    fig, axes = plt.subplots(1, len(groups), figsize=(5 * len(groups), max(3, 0.35 * top_n)), squeeze=False)
    for ax, (label, sub) in zip(axes[0], groups):
        top = sub.sort_values("count", ascending=False, kind="mergesort").head(top_n).iloc[::-1]
        ax.barh(top["word"], top["count"], color=palette.get(label, "#4c72b0") if label else "#4c72b0")
        ax.set_xlabel("count")
        if label:
            ax.set_title(label)
    if title:
        fig.suptitle(title)
    _save(fig, path)


def plot_sentiment_trajectory(windows, path, *, title=None):
    """Bars of net sentiment per line block, one panel per document."""
    if windows.empty or "net" not in windows.columns:
        logger.warning("No net sentiment to plot for %s", path)
        return

    docs = list(dict.fromkeys(windows["document"]))
    ncols = min(2, len(docs))
    nrows = math.ceil(len(docs) / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(6 * ncols, 3 * nrows), squeeze=False)
    for ax, doc in zip(axes.flat, docs):
        sub = windows.loc[windows["document"] == doc]
        colors = [config.SENTIMENT_PALETTE["positive"] if v >= 0 else config.SENTIMENT_PALETTE["negative"]
                  for v in sub["net"]]
        ax.bar(sub["index"], sub["net"], color=colors)
        ax.set_title(str(doc))
        ax.set_xlabel("index")
        ax.set_ylabel("net sentiment")
    for ax in list(axes.flat)[len(docs):]:
        ax.set_visible(False)
    if title:
        fig.suptitle(title)
    _save(fig, path)
