"""
Sentiment lexicons behind one interface.

A Lexicon wraps a tidy (word, sentiment, score) table and is tagged with its
shape:
  - binary:      positive/negative label, no score (Bing Liu opinion lexicon)
  - categorical: one or more emotion labels per word (NRC)
  - numeric:     a polarity score; label derived from its sign (VADER)

Every shape answers `lookup(word)` with zero or more SentimentEntry records,
so the joiner never needs to know which one it was given.
"""
import logging
from pathlib import Path
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional

import numpy as np
import pandas as pd

from tidymining import config
from tidymining.shared.errors import MalformedConfigurationError, MissingReferenceDataError
from tidymining.shared.resources import ensure_nltk_resource

logger = logging.getLogger(__name__)

LEXICON_COLUMNS = ["word", "sentiment", "score"]
KINDS = ("binary", "categorical", "numeric")


class SentimentEntry(NamedTuple):
    word: str
    sentiment: str
    score: Optional[float] = None


def polarity_label(score: float) -> str:
    if score > 0:
        return "positive"
    if score < 0:
        return "negative"
    return "neutral"


class Lexicon:
    """Read-only word → sentiment reference table."""

    def __init__(self, name: str, table: pd.DataFrame, kind: str):
        if kind not in KINDS:
            raise MalformedConfigurationError(f"Unknown lexicon kind {kind!r}", stage="lexicon")
        missing = [c for c in ("word", "sentiment") if c not in table.columns]
        if missing:
            raise MalformedConfigurationError(f"Lexicon {name!r} lacks column(s) {missing}", stage="lexicon")

        table = table.copy()
        if "score" not in table.columns:
            table["score"] = np.nan
        table["word"] = table["word"].astype(str).str.lower()
        table["sentiment"] = table["sentiment"].astype(str)
        table["score"] = table["score"].astype("float64")
        self.name = name
        self.kind = kind
        self._table = table[LEXICON_COLUMNS].drop_duplicates().reset_index(drop=True)
        self._index = None

    @property
    def table(self) -> pd.DataFrame:
        """A copy of the (word, sentiment, score) table; callers cannot mutate the lexicon."""
        return self._table.copy()

    @property
    def labels(self) -> List[str]:
        return sorted(self._table["sentiment"].unique())

    def __len__(self):
        return len(self._table)

    def __contains__(self, word):
        return self.lookup(word) != []

    def __repr__(self):
        return f"Lexicon({self.name!r}, kind={self.kind!r}, entries={len(self)})"

    def lookup(self, word: str) -> List[SentimentEntry]:
        """All entries for `word` (empty list when absent)."""
        if self._index is None:
            index: Dict[str, List[SentimentEntry]] = {}
            for w, s, sc in self._table.itertuples(index=False):
                index.setdefault(w, []).append(SentimentEntry(w, s, None if pd.isna(sc) else float(sc)))
            self._index = index
        return list(self._index.get(str(word).lower(), []))

    # --------- constructors ---------
    @classmethod
    def from_mapping(cls, name: str, mapping: Mapping, kind: Optional[str] = None) -> "Lexicon":
        """
        Build a lexicon from a plain mapping.

        Values may be a label ("positive"), a number (numeric score) or an
        iterable of labels (multi-label). The kind is inferred when not given.
        """
        rows = []
        saw_number = saw_multi = False
        for word, value in mapping.items():
            if isinstance(value, (int, float, np.number)) and not isinstance(value, bool):
                saw_number = True
                rows.append((word, polarity_label(value), float(value)))
            elif isinstance(value, str):
                rows.append((word, value, np.nan))
            else:
                labels = list(value)
                saw_multi = saw_multi or len(labels) > 1
                rows.extend((word, label, np.nan) for label in labels)
        if kind is None:
            kind = "numeric" if saw_number else ("categorical" if saw_multi else "binary")
        return cls(name, pd.DataFrame(rows, columns=LEXICON_COLUMNS), kind)

    @classmethod
    def from_csv(cls, path, name: Optional[str] = None, kind: Optional[str] = None) -> "Lexicon":
        """CSV with `word,sentiment[,score]` columns; numeric when scores are present."""
        p = Path(path)
        try:
            df = pd.read_csv(p)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise MissingReferenceDataError(f"Cannot read lexicon file {p}: {e}", stage="lexicon") from e
        if kind is None:
            has_scores = "score" in df.columns and df["score"].notna().any()
            multi = df.groupby("word")["sentiment"].nunique().gt(1).any() if "word" in df.columns and "sentiment" in df.columns else False
            kind = "numeric" if has_scores else ("categorical" if multi else "binary")
        return cls(name or p.stem, df, kind)


# --------- registry ---------
def load_bing(download=None) -> Lexicon:
    """Hu & Liu opinion lexicon (positive/negative) from NLTK."""
    ensure_nltk_resource("opinion_lexicon", stage="lexicon", download=download)
    from nltk.corpus import opinion_lexicon

    rows = [(w, "positive") for w in opinion_lexicon.positive()]
    rows += [(w, "negative") for w in opinion_lexicon.negative()]
    return Lexicon("bing", pd.DataFrame(rows, columns=["word", "sentiment"]), "binary")


def load_vader(download=None) -> Lexicon:
    """VADER valence lexicon from NLTK (numeric, roughly -4..4)."""
    ensure_nltk_resource("vader_lexicon", stage="lexicon", download=download)
    from nltk.sentiment import SentimentIntensityAnalyzer

    scores = SentimentIntensityAnalyzer().lexicon
    return Lexicon.from_mapping("vader", scores, kind="numeric")


def load_nrc(path=None) -> Lexicon:
    """
    NRC Word-Emotion Association lexicon, word-level file
    (`word<TAB>emotion<TAB>0|1`). Only associations flagged 1 are kept.
    """
    path = path or config.nrc_path()
    if not path:
        raise MissingReferenceDataError(
            "NRC lexicon path not given; pass nrc_path or set TIDYMINING_NRC_PATH", stage="lexicon"
        )
    try:
        df = pd.read_csv(path, sep="\t", header=None, names=["word", "sentiment", "flag"],
                         comment="#", keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise MissingReferenceDataError(f"Cannot read NRC lexicon {path}: {e}", stage="lexicon") from e
    df = df.loc[pd.to_numeric(df["flag"], errors="coerce") == 1, ["word", "sentiment"]]
    return Lexicon("nrc", df, "categorical")


LEXICON_LOADERS: Dict[str, Callable[..., Lexicon]] = {
    "bing": load_bing,
    "vader": load_vader,
    "nrc": load_nrc,
}


def load_lexicon(name: str, *, nrc_path=None, download=None) -> Lexicon:
    """
    Load a lexicon by registry name ("bing", "vader", "nrc") or from a CSV path.

    Raises:
        MalformedConfigurationError: unknown name that is not an existing file.
        MissingReferenceDataError: the reference data cannot be loaded.
    """
    if name == "nrc":
        lex = load_nrc(nrc_path)
    elif name in LEXICON_LOADERS:
        lex = LEXICON_LOADERS[name](download=download)
    elif Path(name).is_file():
        lex = Lexicon.from_csv(name)
    else:
        raise MalformedConfigurationError(
            f"Unknown lexicon {name!r}; choose one of {sorted(LEXICON_LOADERS)} or a CSV path", stage="lexicon"
        )
    logger.info("Loaded lexicon %s (%s, %d entries)", lex.name, lex.kind, len(lex))
    return lex
