# usage: lexicon joins and windowed sentiment over tidy token tables
import pandas as pd

from tidymining import config
from tidymining.nlp.lexicons import Lexicon
from tidymining.shared.errors import MalformedConfigurationError


def validate_window(window) -> None:
    """Raise MalformedConfigurationError unless `window` is a positive integer."""
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise MalformedConfigurationError(f"window must be a positive integer, got {window!r}", stage="sentiment")


def join_lexicon(tokens: pd.DataFrame, lexicon: Lexicon) -> pd.DataFrame:
    """
    Inner join tokens with a lexicon on `word`.

    Tokens without an entry are dropped; a word with several entries
    (multi-label lexicons) yields one row per entry. Rows follow token
    order, entries of one word in lexicon order.
    """
    positioned = tokens.assign(_pos=range(len(tokens)))
    joined = positioned.merge(lexicon.table, on="word", how="inner", sort=False)
    joined = joined.sort_values("_pos", kind="mergesort").drop(columns="_pos")
    return joined.reset_index(drop=True)


def sentiment_by_window(joined: pd.DataFrame, kind: str = "binary", window: int = config.SENTIMENT_WINDOW,
                        labels=None) -> pd.DataFrame:
    """
    Sentiment per document per block of `window` lines (index = line_number // window).

    Categorical/binary lexicons give one count column per label (0 where
    absent) and `net = positive - negative` when both labels exist; numeric
    lexicons give `net` as the summed score. Pass the lexicon's `labels` so
    the columns do not depend on which labels happened to match.
    """
    validate_window(window)

    if kind == "numeric":
        if joined.empty:
            return pd.DataFrame(columns=["document", "index", "net"])
        df = joined.assign(index=joined["line_number"] // window)
        return df.groupby(["document", "index"], sort=True)["score"].sum().reset_index(name="net")

    label_cols = sorted(set(labels or ()) | set(joined["sentiment"].unique() if not joined.empty else ()))
    if joined.empty:
        wide = pd.DataFrame(columns=["document", "index", *label_cols])
    else:
        df = joined.assign(index=joined["line_number"] // window)
        wide = (
            df.groupby(["document", "index", "sentiment"], sort=True).size()
            .unstack("sentiment", fill_value=0)
            .reindex(columns=label_cols, fill_value=0)
            .reset_index()
        )
        wide.columns.name = None
    if {"positive", "negative"} <= set(label_cols):
        wide["net"] = wide["positive"] - wide["negative"]
    elif not label_cols:
        wide["net"] = pd.Series(dtype="int64")
    return wide
