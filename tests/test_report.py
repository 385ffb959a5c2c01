from pathlib import Path

import pandas as pd

from tidymining.report import (
    plot_sentiment_trajectory,
    plot_top_words,
    render_word_cloud,
    write_summary,
    write_table,
)

COUNTS = pd.DataFrame({"word": ["miss", "time", "fanny", "dear"], "count": [12, 9, 7, 3]})
SENTIMENT = pd.DataFrame({
    "word": ["miss", "happy", "love", "poor"],
    "sentiment": ["negative", "positive", "positive", "negative"],
    "count": [12, 8, 6, 5],
})


def test_write_table_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "out" / "counts.csv"

    write_table(COUNTS, path)

    assert pd.read_csv(path).equals(COUNTS)


def test_write_summary(tmp_path: Path) -> None:
    path = tmp_path / "summary.json"

    write_summary({"documents": ["Emma"]}, path)

    assert '"Emma"' in path.read_text(encoding="utf-8")


def test_bar_charts(tmp_path: Path) -> None:
    plot_top_words(COUNTS, tmp_path / "top.png", top_n=3)
    plot_top_words(SENTIMENT, tmp_path / "faceted.png", top_n=2, title="contributions")

    assert (tmp_path / "top.png").stat().st_size > 0
    assert (tmp_path / "faceted.png").stat().st_size > 0


def test_sentiment_trajectory(tmp_path: Path) -> None:
    windows = pd.DataFrame({
        "document": ["Emma", "Emma", "Persuasion"],
        "index": [0, 1, 0],
        "net": [3, -2, 1],
    })

    plot_sentiment_trajectory(windows, tmp_path / "trajectory.png")

    assert (tmp_path / "trajectory.png").exists()


def test_word_clouds(tmp_path: Path) -> None:
    render_word_cloud(COUNTS, tmp_path / "cloud.png", width=200, height=100)
    render_word_cloud(SENTIMENT, tmp_path / "sentiment_cloud.png", width=200, height=100, max_words=3)

    assert (tmp_path / "cloud.png").stat().st_size > 0
    assert (tmp_path / "sentiment_cloud.png").stat().st_size > 0


def test_empty_tables_draw_nothing(tmp_path: Path) -> None:
    empty = COUNTS.iloc[0:0]

    plot_top_words(empty, tmp_path / "none.png")
    render_word_cloud(empty, tmp_path / "none_cloud.png")
    plot_sentiment_trajectory(pd.DataFrame(columns=["document", "index", "net"]), tmp_path / "none_traj.png")

    assert list(tmp_path.iterdir()) == []
