# Feature extraction utilities: n-grams and word frequency tables
import numpy as np
import pandas as pd

from tidymining import config
from tidymining.shared.errors import MalformedConfigurationError

GROUP_KEYS = {
    "word": ["word"],
    "word+sentiment": ["word", "sentiment"],
    "word+document": ["word", "document"],
}


def make_ngrams(tokens, n=2, sep="_"):
    """
    Construct n-grams of length n from a list of tokens.
    Example: tokens=["I","like","cats"], n=2 → ["I_like", "like_cats"]
    """
    return [sep.join(tokens[i:i+n]) for i in range(0, max(0, len(tokens)-n+1))]


def _check_positive_int(name, value, *, allow_none=False):
    if value is None and allow_none:
        return
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise MalformedConfigurationError(f"{name} must be a positive integer, got {value!r}", stage="count")


def validate_count_options(group_by="word", min_count=1, top_n=None):
    """Reject bad aggregation options before any table is touched."""
    if group_by not in GROUP_KEYS:
        raise MalformedConfigurationError(
            f"group_by must be one of {', '.join(config.GROUP_BY_CHOICES)}; got {group_by!r}", stage="count"
        )
    _check_positive_int("min_count", min_count)
    _check_positive_int("top_n", top_n, allow_none=True)
    return GROUP_KEYS[group_by]


def count_words(tokens: pd.DataFrame, group_by="word", min_count=1, top_n=None) -> pd.DataFrame:
    """
    Count occurrences per grouping key.

    Rows are ordered by count descending, ties broken by the key columns in
    ascending lexicographic order, so equal counts always come out the same way.

    Args:
        tokens: tidy table with a `word` column (plus `sentiment`/`document` for those groupings).
        group_by: "word", "word+sentiment" or "word+document".
        min_count: drop rows counted fewer times than this.
        top_n: keep at most this many rows (None = all).
    """
    keys = validate_count_options(group_by, min_count, top_n)
    missing = [k for k in keys if k not in tokens.columns]
    if missing:
        raise MalformedConfigurationError(
            f"group_by={group_by!r} needs column(s) {missing} in the token table", stage="count"
        )

    counts = tokens.groupby(keys, sort=False).size().reset_index(name="count")
    counts = counts.loc[counts["count"] >= min_count]
    counts = counts.sort_values(["count"] + keys, ascending=[False] + [True] * len(keys), kind="mergesort")
    if top_n is not None:
        counts = counts.head(top_n)
    return counts.reset_index(drop=True).astype({"count": "int64"})


def expand_counts(freq: pd.DataFrame) -> pd.DataFrame:
    """Inverse of count_words: one row per counted occurrence (the `count` column dropped)."""
    keys = [c for c in freq.columns if c != "count"]
    idx = np.repeat(np.arange(len(freq)), freq["count"].to_numpy(dtype="int64"))
    return freq[keys].iloc[idx].reset_index(drop=True)
