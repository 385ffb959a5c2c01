# usage: write tidy tables and run summaries to disk
import json
from pathlib import Path

import pandas as pd


def write_table(df: pd.DataFrame, path) -> None:
    """CSV without the index, parent directories created as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def write_summary(meta: dict, path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(meta, ensure_ascii=False, indent=2), encoding="utf-8")
